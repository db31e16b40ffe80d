"""Selection of the data sources a visual range applies to."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

from .channels import normalize_to_list

LIST_DATA_KIND = "list"


class DataSource(Protocol):
    """A data source the visual range may be attached to."""

    @property
    def index(self) -> int:
        """Position of the source in its enumeration."""
        ...

    @property
    def data_kind(self) -> str:
        """Shape of the source's data; ``'list'`` sources can be targeted."""
        ...

    @property
    def dimensions(self) -> list[str]:
        """Named dimensions of the source's data."""
        ...


@dataclass(frozen=True)
class StaticDataSource:
    """Plain in-memory data source description."""

    index: int
    data_kind: str = LIST_DATA_KIND
    dimensions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TargetSelection:
    """Resolved target indices and whether they were auto-discovered."""

    indices: list[int]
    auto: bool


def resolve_targets(declared: Any, sources: Iterable[DataSource]) -> TargetSelection:
    """Determine which data sources are targeted.

    Explicitly declared indices (scalar or sequence) are used verbatim. When
    nothing is declared, every source whose data is list-shaped is selected in
    enumeration order and the selection is flagged as automatic so it can be
    rediscovered when the sources change.
    """
    if declared is not None:
        return TargetSelection(indices=normalize_to_list(declared), auto=False)

    indices = [source.index for source in sources if source.data_kind == LIST_DATA_KIND]
    return TargetSelection(indices=indices, auto=True)


def resolve_data_dimension(dimension: str | int | None, source: DataSource) -> str | int | None:
    """Return the dimension feeding the domain: configured, else the source's last."""
    if dimension is not None:
        return dimension
    dims = source.dimensions
    return dims[-1] if dims else None
