"""Tests for mapping table construction."""

import io

from visrange.channels import DefaultChannelRegistry
from visrange.logger import setup_logger
from visrange.mapping import MappingRecord, build_mapping_table, build_state_mappings


def test_records_carry_domain_and_visual() -> None:
    completed = {"target": {"inRange": {"color": ["blue", "red"]}}}
    table = build_mapping_table(completed, [0, 200])
    assert table["target"]["inRange"]["color"] == MappingRecord(
        channel_type="color", domain=(0, 200), visual=("blue", "red")
    )


def test_unknown_channels_never_reach_the_table() -> None:
    completed = {
        "target": {"inRange": {"color": ["a"], "glow": [1, 2]}},
        "controller": {"outOfRange": {"sparkle": ["x"], "symbol": ["circle"]}},
    }
    table = build_mapping_table(completed, [0, 1])
    assert set(table["target"]["inRange"]) == {"color"}
    assert set(table["controller"]["outOfRange"]) == {"symbol"}


def test_every_consumer_and_state_present() -> None:
    """Test that empty states still get an (empty) entry."""
    table = build_mapping_table({}, [0, 1])
    assert table == {
        "controller": {"inRange": {}, "outOfRange": {}},
        "target": {"inRange": {}, "outOfRange": {}},
    }


def test_rebuild_is_identical_and_independent() -> None:
    completed = {"target": {"inRange": {"symbolSize": [10, 50]}}}
    first = build_mapping_table(completed, [5, 10])
    second = build_mapping_table(completed, [5, 10])
    assert first == second
    assert first is not second
    assert first["target"] is not second["target"]


def test_custom_state_list_and_registry() -> None:
    registry = DefaultChannelRegistry({"opacity": {"active": [0, 1]}})
    mappings = build_state_mappings(
        {"low": {"opacity": [0.1, 0.5], "color": ["red"]}},
        [0, 10],
        state_list=("low", "high"),
        registry=registry,
    )
    assert set(mappings) == {"low", "high"}
    assert set(mappings["low"]) == {"opacity"}
    assert mappings["high"] == {}


def test_skipped_channels_logged_at_checks() -> None:
    stream = io.StringIO()
    setup_logger(2, stream)
    build_mapping_table({"target": {"inRange": {"glow": [1]}}}, [0, 1])
    assert "Skipping unknown channel 'glow' in inRange" in stream.getvalue()


def test_mapping_summary_only_at_debug() -> None:
    stream = io.StringIO()
    setup_logger(2, stream)
    build_mapping_table({"target": {"inRange": {"color": ["red"]}}}, [0, 1])
    assert "Built target mappings" not in stream.getvalue()

    setup_logger(3, stream)
    build_mapping_table({"target": {"inRange": {"color": ["red"]}}}, [0, 1])
    assert "Built target mappings: inRange=['color'], outOfRange=[]" in stream.getvalue()
