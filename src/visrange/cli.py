"""Command-line interface for visrange."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import pydantic
import typer
import yaml

from .exceptions import VisrangeError
from .loader import load_option, load_sources
from .logger import setup_logger
from .mapping import MappingRecord
from .model import VisualRangeModel
from .states import DATA_BOUND, Consumer

app = typer.Typer(
    name="visrange",
    help="Resolve visual range options into per-state visual mappings",
    add_completion=False,
)


class OutputFormat(str, Enum):
    """Serialization format for resolved output."""

    YAML = "yaml"
    JSON = "json"


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show changes, 2=show all checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
) -> None:
    """Global options for visrange commands."""
    setup_logger(verbose)


def _record_to_dict(record: MappingRecord) -> dict[str, Any]:
    return {"domain": list(record.domain), "visual": list(record.visual)}


def _build_model(config: Path, sources: Path | None) -> VisualRangeModel:
    """Load config and sources, reporting failures the way every command does."""
    try:
        option = load_option(config)
        source_list = load_sources(sources) if sources else []
    except (VisrangeError, FileNotFoundError, pydantic.ValidationError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    return VisualRangeModel(option, source_list)


def _parse_bound(text: str) -> float:
    if text == "min":
        return DATA_BOUND[0]
    if text == "max":
        return DATA_BOUND[1]
    try:
        return float(text)
    except ValueError as e:
        typer.echo(f"Error: '{text}' is not a number, 'min' or 'max'", err=True)
        raise typer.Exit(1) from e


@app.command()
def resolve(
    config: Annotated[Path, typer.Argument(help="Path to the visual range option YAML file")],
    *,
    sources: Annotated[
        Path | None,
        typer.Option("--sources", "-s", help="YAML list of data sources for target discovery"),
    ] = None,
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.YAML,
) -> None:
    """Print the extent, targets and mapping tables resolved from CONFIG."""
    model = _build_model(config, sources)

    output: dict[str, Any] = {
        "extent": model.get_extent(),
        "item_size": model.get_item_size(),
        "targets": model.get_target_indices(),
        "auto_targets": model.is_auto_target,
        "mappings": {
            consumer.value: {
                state: {
                    channel: _record_to_dict(record) for channel, record in records.items()
                }
                for state, records in model.get_mapping_table(consumer.value).items()
            }
            for consumer in Consumer
        },
    }

    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps(output, indent=2))
    else:
        typer.echo(yaml.dump(output, default_flow_style=False, sort_keys=False).rstrip())


@app.command()
def label(
    config: Annotated[Path, typer.Argument(help="Path to the visual range option YAML file")],
    start: Annotated[str, typer.Argument(help="Range start, or 'min' for no lower bound")],
    end: Annotated[
        str | None, typer.Argument(help="Range end, or 'max' for no upper bound")
    ] = None,
) -> None:
    """Print the label CONFIG's formatter produces for START..END."""
    model = _build_model(config, None)
    start_value = _parse_bound(start)
    end_value = None if end is None else _parse_bound(end)
    typer.echo(model.format_range(start_value, end_value))


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
