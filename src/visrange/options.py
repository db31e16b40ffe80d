"""Pydantic schema for visual range options."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# A state may be a bare channel name or a mapping of channel -> values
StateOption = str | dict[str, Any] | None


class ConsumerOption(BaseModel):
    """Per-consumer (``target`` or ``controller``) state overrides."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    in_range: StateOption = Field(default=None, alias="inRange")
    out_of_range: StateOption = Field(default=None, alias="outOfRange")


class VisualRangeOption(BaseModel):
    """Declared configuration of a visual range.

    Keys use the camelCase names found in configuration files; snake_case
    field names are accepted too.
    """

    model_config = ConfigDict(populate_by_name=True)

    min: float = 0
    max: float = 200
    dimension: str | int | None = None

    in_range: StateOption = Field(default=None, alias="inRange")
    out_of_range: StateOption = Field(default=None, alias="outOfRange")
    target: ConsumerOption | None = None
    controller: ConsumerOption | None = None

    series_index: list[int] | None = Field(default=None, alias="seriesIndex")

    precision: int = Field(default=0, ge=0)
    formatter: str | Callable[..., str] | None = None
    text: list[str] | None = None  # [high label, low label]

    item_width: float = Field(default=20, alias="itemWidth")
    item_height: float = Field(default=140, alias="itemHeight")
    inactive_color: str = Field(default="#aaa", alias="inactiveColor")
    # Deprecated: ordered high value to low value
    color: list[str] | None = Field(default_factory=lambda: ["#006edd", "#e0ffff"])

    @field_validator("series_index", "color", "text", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> list[Any] | None:
        """Ensure value is a list (None stays None)."""
        if v is None:
            return None
        if isinstance(v, (list, tuple)):
            return list(v)  # type: ignore[arg-type]
        return [v]

    def to_raw(self) -> dict[str, Any]:
        """Dump to the camelCase mapping the resolution pipeline reads."""
        return self.model_dump(by_alias=True)
