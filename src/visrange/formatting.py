"""Label text for sub-ranges of the domain."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

RangeFormatter = str | Callable[[Any, Any], str]

LOWER_PLACEHOLDER = "{value}"
UPPER_PLACEHOLDER = "{value2}"


def _to_fixed(value: float, precision: int) -> str:
    """Fixed-point text with ties rounded away from zero.

    ``Decimal(float)`` is the exact binary value, so ``2.5`` rounds to ``3``
    while ``2.675`` (stored just below) rounds to ``2.67``.
    """
    number = float(value)
    if not math.isfinite(number):
        return str(number)
    quantum = Decimal(1).scaleb(-int(precision))
    return format(Decimal(number).quantize(quantum, rounding=ROUND_HALF_UP), "f")


def format_range(
    start: float,
    end: float | None,
    bounds: Sequence[float],
    precision: int = 0,
    formatter: RangeFormatter | None = None,
) -> str:
    """Render ``(start, end)`` as a human-readable label.

    ``bounds`` holds the open-ended sentinels: a ``start`` equal to ``bounds[0]``
    means "no lower bound" and an ``end`` equal to ``bounds[1]`` means "no upper
    bound". Other endpoints are rendered fixed-point with ``precision`` digits.

    A string ``formatter`` is a template where ``{value}`` becomes the start (or
    ``min``) and ``{value2}`` the end (or ``max``). A callable ``formatter``
    receives the rounded endpoint texts (sentinels and a missing end are passed
    through untouched) and its result is returned as is.

    Examples:
        format_range(float("-inf"), 10, [float("-inf"), float("inf")]) -> "< 10"
        format_range(1.234, 5.678, [0, 10], precision=1) -> "1.2 - 5.7"
    """
    lower, upper = bounds[0], bounds[1]
    start_is_open = start == lower
    end_is_open = end is not None and end == upper

    start_text: Any = start if start_is_open else _to_fixed(start, precision)
    end_text: Any = end if end is None or end_is_open else _to_fixed(end, precision)

    if formatter:
        if isinstance(formatter, str):
            return formatter.replace(
                LOWER_PLACEHOLDER, "min" if start_is_open else str(start_text), 1
            ).replace(UPPER_PLACEHOLDER, "max" if end_is_open else _text(end_text), 1)
        if callable(formatter):
            return formatter(start_text, end_text)

    if end is None:
        return str(start_text)
    if start_is_open:
        return f"< {end_text}"
    if end_is_open:
        return f"> {start_text}"
    return f"{start_text} - {end_text}"


def _text(value: Any) -> str:
    return "" if value is None else str(value)
