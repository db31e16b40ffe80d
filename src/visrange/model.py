"""Visual range model: owns the declared option and its resolved mappings."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .channels import DEFAULT_REGISTRY, ChannelRegistry
from .completion import CompletedOptions, complete_visual_options
from .extent import resolve_extent
from .formatting import format_range
from .logger import get_logger
from .mapping import MappingRecord, MappingTable, StateMappings, build_mapping_table
from .options import VisualRangeOption
from .states import DATA_BOUND, STATE_LIST
from .targets import DataSource, TargetSelection, resolve_data_dimension, resolve_targets

logger = get_logger()


@dataclass(frozen=True)
class ResolvedState:
    """Everything derived from one version of the declared option."""

    option: VisualRangeOption
    item_size: tuple[float, float]
    completed: CompletedOptions
    extent: tuple[float, float]
    table: MappingTable


def merge_option_tree(current: Mapping[str, Any], new: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge ``new`` into a copy of ``current``.

    Nested mappings merge key by key; any other value in ``new`` (lists and
    None included) replaces the current one.
    """
    merged = copy.deepcopy(dict(current))
    for key, value in new.items():
        existing = merged.get(key)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_option_tree(existing, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _declared_tree(option: VisualRangeOption | Mapping[str, Any] | None) -> dict[str, Any]:
    if option is None:
        return {}
    if isinstance(option, VisualRangeOption):
        return option.model_dump(by_alias=True, exclude_unset=True)
    return dict(option)


class VisualRangeModel:
    """Resolves a visual range option into mapping tables for both consumers.

    Every construction or ``merge_option`` call recomputes the item size,
    completed visuals, extent, target selection and mapping tables from scratch.
    The results are published as one immutable snapshot, so readers never see
    a mix of old and new values.
    """

    def __init__(
        self,
        option: VisualRangeOption | Mapping[str, Any] | None = None,
        sources: Iterable[DataSource] = (),
        *,
        registry: ChannelRegistry = DEFAULT_REGISTRY,
        state_list: Sequence[str] = STATE_LIST,
    ) -> None:
        self.registry = registry
        self.state_list = tuple(state_list)
        self._sources: list[DataSource] = list(sources)
        self._declared: dict[str, Any] = {}
        self._selection = TargetSelection(indices=[], auto=True)
        self._resolved: ResolvedState
        self.merge_option(option)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def merge_option(self, new_option: VisualRangeOption | Mapping[str, Any] | None) -> None:
        """Merge ``new_option`` into the declared option and rebuild everything.

        Raises:
            pydantic.ValidationError: If the merged option is invalid. The
                previous state is kept in that case.
        """
        declared = merge_option_tree(self._declared, _declared_tree(new_option))
        option = VisualRangeOption.model_validate(declared)

        item_size = (float(option.item_width), float(option.item_height))
        completed = complete_visual_options(
            option.to_raw(), item_size, self.state_list, self.registry
        )
        selection = resolve_targets(option.series_index, self._sources)
        extent_pair = resolve_extent(option.min, option.max)
        extent = (extent_pair[0], extent_pair[1])
        table = build_mapping_table(completed, extent, self.state_list, self.registry)

        self._declared = declared
        self._selection = selection
        self._resolved = ResolvedState(
            option=option,
            item_size=item_size,
            completed=completed,
            extent=extent,
            table=table,
        )
        logger.debug(
            f"Resolved visual range: extent={list(extent)} targets={selection.indices} "
            f"auto={selection.auto}"
        )

    def set_sources(self, sources: Iterable[DataSource]) -> None:
        """Replace the enumerated data sources.

        Auto-discovered targets are rediscovered; explicit ones are kept.
        """
        self._sources = list(sources)
        if self._selection.auto:
            self._selection = resolve_targets(None, self._sources)
            logger.debug(f"Rediscovered targets: {self._selection.indices}")

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------

    @property
    def option(self) -> VisualRangeOption:
        """The validated, merged option (defaults included)."""
        return self._resolved.option

    @property
    def completed_options(self) -> CompletedOptions:
        """Copy of the completed visual option tree."""
        return copy.deepcopy(self._resolved.completed)

    @property
    def is_auto_target(self) -> bool:
        """True when targets were discovered rather than declared."""
        return self._selection.auto

    def get_extent(self) -> list[float]:
        """Return ``[lo, hi]`` of the domain."""
        return list(self._resolved.extent)

    def get_item_size(self) -> list[float]:
        """Return ``[width, height]`` of one controller glyph."""
        return list(self._resolved.item_size)

    def get_target_indices(self) -> list[int]:
        """Return the indices of the targeted data sources, in order."""
        return list(self._selection.indices)

    def get_mapping_record(
        self, consumer: str, state: str, channel_type: str
    ) -> MappingRecord | None:
        """Return the record for ``(consumer, state, channel_type)``, if any."""
        return self._resolved.table.get(consumer, {}).get(state, {}).get(channel_type)

    def get_mapping_table(self, consumer: str) -> StateMappings:
        """Return ``{state: {channel: record}}`` for ``consumer``."""
        states = self._resolved.table.get(consumer, {})
        return {state: dict(records) for state, records in states.items()}

    def format_range(self, start: float, end: float | None = None) -> str:
        """Render a label for ``(start, end)`` using the option's precision and formatter."""
        option = self._resolved.option
        return format_range(start, end, DATA_BOUND, option.precision, option.formatter)

    def get_data_dimension(self, source: DataSource) -> str | int | None:
        """Return the dimension of ``source`` that feeds the domain."""
        return resolve_data_dimension(self._resolved.option.dimension, source)

    def each_target_source(self) -> Iterator[DataSource]:
        """Yield the targeted sources that exist, in selection order."""
        by_index = {source.index: source for source in self._sources}
        for index in self._selection.indices:
            source = by_index.get(index)
            if source is not None:
                yield source
