"""Small numeric helpers shared by the resolver."""

from __future__ import annotations

from collections.abc import Sequence


def asc(pair: Sequence[float]) -> list[float]:
    """Return the two values of ``pair`` in ascending order."""
    lo, hi = pair[0], pair[1]
    return [lo, hi] if lo <= hi else [hi, lo]


def linear_map(
    value: float,
    domain: Sequence[float],
    range_: Sequence[float],
    clamp: bool = False,
) -> float:
    """Linearly map ``value`` from ``domain`` into ``range_``.

    A zero-width domain maps every value to the midpoint of ``range_``.

    Args:
        value: Value to map
        domain: Input interval ``[d0, d1]``
        range_: Output interval ``[r0, r1]``
        clamp: Clamp the result to the output interval

    Returns:
        The mapped value
    """
    sub = domain[1] - domain[0]
    if sub == 0:
        return (range_[0] + range_[1]) / 2

    t = (value - domain[0]) / sub
    if clamp:
        t = min(max(t, 0.0), 1.0)
    return t * (range_[1] - range_[0]) + range_[0]
