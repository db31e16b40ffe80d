"""Tests for loading options and sources from YAML."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from visrange.exceptions import ConfigError, ParseError
from visrange.loader import load_option, load_sources
from visrange.targets import StaticDataSource


def test_load_option(tmp_path: Path) -> None:
    config = tmp_path / "visrange.yaml"
    config.write_text(
        """
min: 200
max: 0
precision: 1
seriesIndex: 2
inRange:
  color: ['#e0ffff', '#006edd']
controller:
  outOfRange: symbol
"""
    )
    option = load_option(config)
    assert option.min == 200
    assert option.max == 0
    assert option.series_index == [2]
    assert option.in_range == {"color": ["#e0ffff", "#006edd"]}
    assert option.controller is not None
    assert option.controller.out_of_range == "symbol"


def test_load_option_infinite_bounds(tmp_path: Path) -> None:
    config = tmp_path / "visrange.yaml"
    config.write_text("min: -.inf\nmax: .inf\n")
    option = load_option(config)
    assert option.min == float("-inf")
    assert option.max == float("inf")


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_option(tmp_path / "nope.yaml")


def test_empty_file(tmp_path: Path) -> None:
    config = tmp_path / "empty.yaml"
    config.write_text("")
    with pytest.raises(ConfigError, match="Empty configuration file"):
        load_option(config)


def test_non_mapping_root(tmp_path: Path) -> None:
    config = tmp_path / "list.yaml"
    config.write_text("- min: 0\n")
    with pytest.raises(ConfigError, match="must be a mapping"):
        load_option(config)


def test_invalid_yaml(tmp_path: Path) -> None:
    config = tmp_path / "broken.yaml"
    config.write_text("min: [0\n")
    with pytest.raises(ParseError):
        load_option(config)


def test_invalid_value(tmp_path: Path) -> None:
    config = tmp_path / "bad.yaml"
    config.write_text("precision: -2\n")
    with pytest.raises(ValidationError):
        load_option(config)


def test_load_sources(tmp_path: Path) -> None:
    path = tmp_path / "sources.yaml"
    path.write_text(
        """
- kind: list
  dimensions: [x, y, value]
- kind: tree
-
"""
    )
    assert load_sources(path) == [
        StaticDataSource(index=0, data_kind="list", dimensions=["x", "y", "value"]),
        StaticDataSource(index=1, data_kind="tree", dimensions=[]),
        StaticDataSource(index=2, data_kind="list", dimensions=[]),
    ]


def test_load_sources_rejects_mapping(tmp_path: Path) -> None:
    path = tmp_path / "sources.yaml"
    path.write_text("kind: list\n")
    with pytest.raises(ConfigError):
        load_sources(path)
