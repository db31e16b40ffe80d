"""Mapping records built from completed visual options."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .channels import DEFAULT_REGISTRY, ChannelRegistry
from .logger import debug_enabled, get_logger
from .states import STATE_LIST, Consumer

logger = get_logger()


@dataclass(frozen=True)
class MappingRecord:
    """One channel of one state of one consumer, ready for interpolation.

    Attributes:
        channel_type: Channel tag, e.g. ``'color'`` or ``'symbolSize'``
        domain: ``(lo, hi)`` data extent the visual values span
        visual: Declared visual values, ordered low to high
    """

    channel_type: str
    domain: tuple[float, float]
    visual: tuple[Any, ...]


# state -> channel -> record
StateMappings = dict[str, dict[str, MappingRecord]]
# consumer -> state -> channel -> record
MappingTable = dict[str, StateMappings]


def build_state_mappings(
    consumer_options: Mapping[str, Mapping[str, Any]],
    domain: Sequence[float],
    state_list: Sequence[str] = STATE_LIST,
    registry: ChannelRegistry = DEFAULT_REGISTRY,
) -> StateMappings:
    """Build the records of a single consumer.

    Every state in ``state_list`` gets an entry, empty when nothing is declared.
    Channels whose tag the registry does not recognize are skipped.
    """
    frozen_domain = (domain[0], domain[1])
    mappings: StateMappings = {}
    for state in state_list:
        records = mappings.setdefault(state, {})
        for channel_type, visual in (consumer_options.get(state) or {}).items():
            if not registry.is_valid_type(channel_type):
                logger.checks(f"Skipping unknown channel '{channel_type}' in {state}")
                continue
            records[channel_type] = MappingRecord(
                channel_type=channel_type,
                domain=frozen_domain,
                visual=tuple(visual),
            )
    return mappings


def build_mapping_table(
    completed: Mapping[str, Mapping[str, Mapping[str, Any]]],
    domain: Sequence[float],
    state_list: Sequence[str] = STATE_LIST,
    registry: ChannelRegistry = DEFAULT_REGISTRY,
) -> MappingTable:
    """Build ``table[consumer][state][channel]`` for both consumers.

    Returns a new table on every call; callers swap it in whole.
    """
    table: MappingTable = {}
    for consumer in Consumer:
        table[consumer.value] = build_state_mappings(
            completed.get(consumer.value) or {}, domain, state_list, registry
        )
        if debug_enabled():
            summary = ", ".join(
                f"{state}={sorted(table[consumer.value][state])}" for state in state_list
            )
            logger.debug(f"Built {consumer.value} mappings: {summary}")
    return table
