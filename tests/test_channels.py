"""Tests for channel registry and state declaration parsing."""

import pytest

from visrange.channels import (
    DEFAULT_REGISTRY,
    ChannelType,
    DefaultChannelRegistry,
    ExplicitDeclaration,
    ShorthandDeclaration,
    Variant,
    parse_state_declaration,
)


@pytest.mark.parametrize("channel", list(ChannelType))
def test_every_channel_type_is_valid(channel: ChannelType) -> None:
    """Test that all enumerated channels are registered."""
    assert DEFAULT_REGISTRY.is_valid_type(channel.value)
    assert DEFAULT_REGISTRY.get_default(channel.value, Variant.ACTIVE) is not None
    assert DEFAULT_REGISTRY.get_default(channel.value, Variant.INACTIVE) is not None


def test_unknown_channel_is_invalid() -> None:
    """Test that unknown tags are rejected without error."""
    assert not DEFAULT_REGISTRY.is_valid_type("opacity")
    assert DEFAULT_REGISTRY.get_default("opacity", "active") is None


def test_defaults_are_fresh_copies() -> None:
    """Test that mutating a returned default does not leak into the registry."""
    first = DEFAULT_REGISTRY.get_default("color", "inactive")
    assert first == ["rgba(0,0,0,0)"]
    assert first is not None
    first.append("red")
    assert DEFAULT_REGISTRY.get_default("color", "inactive") == ["rgba(0,0,0,0)"]


def test_custom_registry_table() -> None:
    """Test a registry built from a custom defaults table."""
    registry = DefaultChannelRegistry({"opacity": {"active": [0.2, 1.0]}})
    assert registry.is_valid_type("opacity")
    assert not registry.is_valid_type("color")
    assert registry.get_default("opacity", "active") == [0.2, 1.0]
    assert registry.get_default("opacity", "inactive") is None


def test_unknown_variant_has_no_default() -> None:
    """Test that an unrecognized variant is a missing default, not an error."""
    assert DEFAULT_REGISTRY.get_default("color", "hover") is None
    assert DEFAULT_REGISTRY.get_default("color", Variant.ACTIVE) == ["#006edd", "#e0ffff"]


class TestParseStateDeclaration:
    """Test the raw-value parsing boundary."""

    def test_none_is_unspecified(self) -> None:
        assert parse_state_declaration(None) is None

    def test_string_is_shorthand(self) -> None:
        assert parse_state_declaration("symbol") == ShorthandDeclaration("symbol")

    def test_mapping_is_explicit_with_lists(self) -> None:
        """Test that scalar channel values are wrapped in lists."""
        parsed = parse_state_declaration({"color": "red", "symbolSize": (10, 20)})
        assert parsed == ExplicitDeclaration({"color": ["red"], "symbolSize": [10, 20]})

    def test_explicit_copies_input(self) -> None:
        """Test that parsed channel lists do not alias the raw lists."""
        colors = ["red", "blue"]
        parsed = parse_state_declaration({"color": colors})
        assert isinstance(parsed, ExplicitDeclaration)
        parsed.channels["color"].append("green")
        assert colors == ["red", "blue"]
