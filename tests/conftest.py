"""Pytest configuration and fixtures for visrange tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from visrange.logger import reset_logger
from visrange.targets import StaticDataSource


@pytest.fixture(autouse=True)
def clean_logger() -> Iterator[None]:
    """Reset logger state around each test for isolation."""
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def sources() -> list[StaticDataSource]:
    """Mixed data sources: indices 0 and 2 are list-shaped."""
    return [
        StaticDataSource(index=0, data_kind="list", dimensions=["x", "y", "value"]),
        StaticDataSource(index=1, data_kind="tree", dimensions=["name"]),
        StaticDataSource(index=2, data_kind="list", dimensions=["lng", "lat", "population"]),
    ]
