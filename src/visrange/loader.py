"""Loading of visual range options and data source descriptions from YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigError, ParseError
from .options import VisualRangeOption
from .targets import LIST_DATA_KIND, StaticDataSource


def _read_yaml(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with path.open() as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse YAML in {path}: {e}") from e


def load_option(config_path: Path | str) -> VisualRangeOption:
    """Load a visual range option from a YAML file.

    The file holds the option keys at the top level, e.g.::

        min: 0
        max: 200
        inRange:
          color: ['#e0ffff', '#006edd']
        controller:
          outOfRange: symbol

    Args:
        config_path: Path to the YAML file

    Returns:
        Validated option

    Raises:
        FileNotFoundError: If the file doesn't exist
        ParseError: If the file is not valid YAML
        ConfigError: If the file is empty or not a mapping
        pydantic.ValidationError: If an option value is invalid
    """
    path = Path(config_path)
    data = _read_yaml(path)

    if data is None:
        raise ConfigError(f"Empty configuration file: {path}")
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {path} must be a mapping of option keys")

    return VisualRangeOption.model_validate(data)


def load_sources(sources_path: Path | str) -> list[StaticDataSource]:
    """Load data source descriptions from a YAML list.

    Each entry may give ``kind`` (default ``list``) and ``dimensions``; a source's
    index is its position in the file::

        - kind: list
          dimensions: [x, y, value]
        - kind: tree

    Raises:
        FileNotFoundError: If the file doesn't exist
        ParseError: If the file is not valid YAML
        ConfigError: If the content is not a list of mappings
    """
    path = Path(sources_path)
    data = _read_yaml(path)

    if data is None:
        return []
    if not isinstance(data, list):
        raise ConfigError(f"Sources in {path} must be a list")

    sources: list[StaticDataSource] = []
    for index, entry in enumerate(data):
        if entry is None:
            entry = {}
        if not isinstance(entry, dict):
            raise ConfigError(f"Source #{index} in {path} must be a mapping")
        dimensions = entry.get("dimensions") or []
        sources.append(
            StaticDataSource(
                index=index,
                data_kind=str(entry.get("kind", LIST_DATA_KIND)),
                dimensions=[str(dim) for dim in dimensions],
            )
        )
    return sources
