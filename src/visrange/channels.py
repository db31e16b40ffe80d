"""Visual channel types, their defaults, and state declarations."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol


class ChannelType(str, Enum):
    """Visual channels a value can drive."""

    COLOR = "color"
    COLOR_HUE = "colorHue"
    COLOR_SATURATION = "colorSaturation"
    COLOR_LIGHTNESS = "colorLightness"
    COLOR_ALPHA = "colorAlpha"
    SYMBOL = "symbol"
    SYMBOL_SIZE = "symbolSize"


class Variant(str, Enum):
    """Which flavour of default to look up."""

    ACTIVE = "active"
    INACTIVE = "inactive"


CHANNEL_DEFAULTS: dict[str, dict[str, list[Any]]] = {
    ChannelType.COLOR.value: {
        Variant.ACTIVE.value: ["#006edd", "#e0ffff"],
        Variant.INACTIVE.value: ["rgba(0,0,0,0)"],
    },
    ChannelType.COLOR_HUE.value: {
        Variant.ACTIVE.value: [0, 360],
        Variant.INACTIVE.value: [0, 0],
    },
    ChannelType.COLOR_SATURATION.value: {
        Variant.ACTIVE.value: [0.3, 1],
        Variant.INACTIVE.value: [0, 0],
    },
    ChannelType.COLOR_LIGHTNESS.value: {
        Variant.ACTIVE.value: [0.9, 0.5],
        Variant.INACTIVE.value: [0, 0],
    },
    ChannelType.COLOR_ALPHA.value: {
        Variant.ACTIVE.value: [0.3, 1],
        Variant.INACTIVE.value: [0, 0],
    },
    ChannelType.SYMBOL.value: {
        Variant.ACTIVE.value: ["circle", "roundRect", "diamond"],
        Variant.INACTIVE.value: ["none"],
    },
    ChannelType.SYMBOL_SIZE.value: {
        Variant.ACTIVE.value: [10, 50],
        Variant.INACTIVE.value: [0, 0],
    },
}


class ChannelRegistry(Protocol):
    """Lookup of valid channel tags and their default values."""

    def is_valid_type(self, channel_type: str) -> bool:
        """Return True if ``channel_type`` names a known channel."""
        ...

    def get_default(self, channel_type: str, variant: str) -> list[Any] | None:
        """Return a fresh default value list, or None if there is none."""
        ...


class DefaultChannelRegistry:
    """Registry backed by a defaults table (``CHANNEL_DEFAULTS`` unless given)."""

    def __init__(self, defaults: Mapping[str, Mapping[str, list[Any]]] | None = None) -> None:
        self._defaults = CHANNEL_DEFAULTS if defaults is None else defaults

    def is_valid_type(self, channel_type: str) -> bool:
        return channel_type in self._defaults

    def get_default(self, channel_type: str, variant: str) -> list[Any] | None:
        variants = self._defaults.get(channel_type)
        if not variants:
            return None
        value = variants.get(variant)
        return copy.deepcopy(value) if value else None


DEFAULT_REGISTRY = DefaultChannelRegistry()


# ============================================================================
# State declarations
# ============================================================================


@dataclass(frozen=True)
class ShorthandDeclaration:
    """A state declared by channel name only, e.g. ``inRange: symbol``."""

    channel_type: str


@dataclass(frozen=True)
class ExplicitDeclaration:
    """A state declared as a mapping of channel tag to value list."""

    channels: dict[str, list[Any]] = field(default_factory=dict)


StateDeclaration = ShorthandDeclaration | ExplicitDeclaration


def normalize_to_list(value: Any) -> list[Any]:
    """Wrap a scalar in a list; copy sequences into a new list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def parse_state_declaration(raw: Any) -> StateDeclaration | None:
    """Convert a raw ``inRange``/``outOfRange`` value into a declaration.

    Strings become shorthands, mappings become explicit declarations (with every
    channel value normalized to a list) and None means the state is unspecified.
    """
    if raw is None:
        return None
    if isinstance(raw, ShorthandDeclaration | ExplicitDeclaration):
        return raw
    if isinstance(raw, str):
        return ShorthandDeclaration(raw)
    if isinstance(raw, Mapping):
        return ExplicitDeclaration(
            {str(tag): normalize_to_list(value) for tag, value in raw.items()}
        )
    raise TypeError(f"Unsupported state declaration: {raw!r}")
