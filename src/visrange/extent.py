"""Domain resolution from declared bounds."""

from __future__ import annotations

from .numeric import asc


def resolve_extent(min_value: float, max_value: float) -> list[float]:
    """Return the declared bounds as an ascending ``[lo, hi]`` pair.

    The live range of attached data is never consulted: series contents may
    still change in a later processing stage, so the declared ``min``/``max``
    are authoritative.
    """
    return asc([min_value, max_value])
