"""Completion of per-state visual channel declarations.

The raw option carries optional, shorthand, legacy and inherited declarations.
Completion turns them into a fully populated tree::

    {
        "target": {"inRange": {...channels}, "outOfRange": {...channels}},
        "controller": {"inRange": {...channels}, "outOfRange": {...channels}},
    }

It runs as a fixed sequence of passes, each taking a read-only tree and
returning a new one:

1. Base propagation: top-level ``inRange``/``outOfRange`` become defaults for
   both consumers.
2. Legacy and shorthand completion: the deprecated ``color`` list (ordered high
   to low) seeds ``inRange.color`` reversed, and bare channel names expand to
   the channel's active default.
3. Inactive derivation (target only): a missing state is derived from the
   present one using inactive defaults.
4. Controller completion: missing states, symbols and symbol sizes are filled in
   so the controller glyphs stay consistent between states, and symbol sizes are
   rescaled into item pixels.

Nothing here raises: every gap resolves to a documented fallback.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from .channels import (
    DEFAULT_REGISTRY,
    ChannelRegistry,
    ChannelType,
    ExplicitDeclaration,
    ShorthandDeclaration,
    StateDeclaration,
    Variant,
    normalize_to_list,
    parse_state_declaration,
)
from .logger import get_logger
from .numeric import linear_map
from .states import IN_RANGE, OUT_OF_RANGE, STATE_LIST, Consumer

logger = get_logger()

DEFAULT_INACTIVE_COLOR = "#aaa"
DEFAULT_CONTROLLER_SYMBOL = "roundRect"
# Legacy identifiers the controller cannot draw
CONTROLLER_SYMBOL_REWRITES = frozenset({"none", "square"})

Declarations = dict[str, StateDeclaration]
Channels = dict[str, list[Any]]
CompletedOptions = dict[str, dict[str, Channels]]
FallbackProvider = Callable[[], list[Any] | None]


# ============================================================================
# Parsing boundary
# ============================================================================


def parse_declarations(raw: Mapping[str, Any] | None, state_list: Sequence[str]) -> Declarations:
    """Parse the state entries of a raw option (sub-)tree into declarations."""
    if not raw:
        return {}
    declarations: Declarations = {}
    for state in state_list:
        declaration = parse_state_declaration(raw.get(state))
        if declaration is not None:
            declarations[state] = declaration
    return declarations


# ============================================================================
# Pass 1: base propagation
# ============================================================================


def propagate_base(
    base: Declarations, consumer: Declarations, state_list: Sequence[str]
) -> Declarations:
    """Merge ``base`` declarations into ``consumer`` without overwriting it.

    Two explicit declarations merge channel by channel with the consumer's
    channels winning; otherwise the consumer's declaration, when present, wins
    whole.
    """
    merged: Declarations = {}
    for state in state_list:
        own = consumer.get(state)
        inherited = base.get(state)
        if own is None:
            if inherited is not None:
                merged[state] = copy.deepcopy(inherited)
        elif isinstance(own, ExplicitDeclaration) and isinstance(inherited, ExplicitDeclaration):
            channels = copy.deepcopy(inherited.channels)
            channels.update(copy.deepcopy(own.channels))
            merged[state] = ExplicitDeclaration(channels)
        else:
            merged[state] = copy.deepcopy(own)
    return merged


# ============================================================================
# Pass 2: legacy and shorthand completion
# ============================================================================


def apply_legacy_color(
    declarations: Declarations, legacy_color: Sequence[Any] | None
) -> Declarations:
    """Seed ``inRange.color`` from the deprecated high-to-low ``color`` list.

    Only applies when no ``inRange`` is declared at all: adding a color next to
    an existing ``inRange: {symbol: ...}`` would change what the user asked for.
    """
    result = dict(declarations)
    if isinstance(legacy_color, (list, tuple)) and IN_RANGE not in result:
        reversed_color = list(reversed(normalize_to_list(legacy_color)))
        result[IN_RANGE] = ExplicitDeclaration({ChannelType.COLOR.value: reversed_color})
        logger.changes(f"Derived inRange.color {reversed_color} from legacy color option")
    return result


def expand_shorthands(
    declarations: Declarations,
    state_list: Sequence[str],
    registry: ChannelRegistry,
) -> dict[str, ExplicitDeclaration]:
    """Replace bare channel names with ``{channel: active default}``.

    A shorthand without an active default is dropped, leaving the state
    unspecified.
    """
    expanded: dict[str, ExplicitDeclaration] = {}
    for state, declaration in declarations.items():
        if isinstance(declaration, ShorthandDeclaration):
            default = registry.get_default(declaration.channel_type, Variant.ACTIVE)
            if default is None:
                logger.changes(
                    f"Dropped {state} shorthand '{declaration.channel_type}': no default value"
                )
                continue
            expanded[state] = ExplicitDeclaration({declaration.channel_type: default})
        else:
            expanded[state] = declaration

    # Keep state order stable for consumers iterating the tree
    return {state: expanded[state] for state in state_list if state in expanded}


def complete_single(
    declarations: Declarations,
    state_list: Sequence[str],
    registry: ChannelRegistry,
    legacy_color: Sequence[Any] | None,
) -> dict[str, ExplicitDeclaration]:
    """Run legacy color handling then shorthand expansion for one consumer."""
    return expand_shorthands(apply_legacy_color(declarations, legacy_color), state_list, registry)


# ============================================================================
# Pass 3: inactive derivation
# ============================================================================


def derive_inactive(
    declarations: Mapping[str, ExplicitDeclaration],
    state_exist: str,
    state_absent: str,
    registry: ChannelRegistry,
) -> dict[str, ExplicitDeclaration]:
    """Synthesize ``state_absent`` from the inactive defaults of ``state_exist``.

    Fires only when ``state_exist`` is declared and ``state_absent`` is not.
    Channels that are invalid or have no inactive default are skipped.
    """
    result = dict(declarations)
    existing = result.get(state_exist)
    if existing is None or state_absent in result:
        return result

    channels: Channels = {}
    for channel_type in existing.channels:
        default = registry.get_default(channel_type, Variant.INACTIVE)
        if registry.is_valid_type(channel_type) and default is not None:
            channels[channel_type] = default
    result[state_absent] = ExplicitDeclaration(channels)
    logger.changes(f"Derived {state_absent} from {state_exist}: {sorted(channels)}")
    return result


# ============================================================================
# Pass 4: controller completion
# ============================================================================


def first_available(providers: Iterable[FallbackProvider]) -> list[Any] | None:
    """Return a copy of the first non-None value produced by ``providers``."""
    for provider in providers:
        value = provider()
        if value is not None:
            return list(value)
    return None


def _declared_channel(
    declarations: Mapping[str, ExplicitDeclaration],
    state: str,
    channel_type: str,
    resolved: Mapping[str, Channels] | None = None,
) -> FallbackProvider:
    def provide() -> list[Any] | None:
        declaration = declarations.get(state)
        if declaration is None or declaration.channels.get(channel_type) is None:
            return None
        # A state completed earlier lends its normalized value
        if resolved is not None and state in resolved:
            return resolved[state].get(channel_type)
        return declaration.channels[channel_type]

    return provide


def _constant(value: list[Any]) -> FallbackProvider:
    return lambda: value


def channel_providers(
    declarations: Mapping[str, ExplicitDeclaration],
    state: str,
    channel_type: str,
    state_list: Sequence[str],
    default: list[Any],
    resolved: Mapping[str, Channels] | None = None,
) -> list[FallbackProvider]:
    """Fallback chain for a controller channel, highest priority first.

    1. The state's own declaration
    2. The declaration of the other states, in state order. When such a state
       is already in ``resolved``, its completed value is used instead.
    3. ``default``
    """
    providers = [_declared_channel(declarations, state, channel_type)]
    providers.extend(
        _declared_channel(declarations, other, channel_type, resolved)
        for other in state_list
        if other != state
    )
    providers.append(_constant(default))
    return providers


def normalize_controller_symbols(symbols: Sequence[Any]) -> list[Any]:
    """Rewrite symbols the controller cannot draw to ``roundRect``."""
    return [
        DEFAULT_CONTROLLER_SYMBOL if symbol in CONTROLLER_SYMBOL_REWRITES else symbol
        for symbol in symbols
    ]


def normalize_symbol_size(symbol_size: Sequence[float], item_width: float) -> list[float]:
    """Rescale ``[small, large]`` from ``[0, large]`` into ``[0, item_width]`` pixels.

    Both elements are scaled against the original second element, so the larger
    size always lands on ``item_width``. Elements past the second are kept as
    declared.
    """
    sizes = list(symbol_size)
    if len(sizes) < 2:  # noqa: PLR2004
        return sizes
    reference = sizes[1]
    sizes[0] = linear_map(sizes[0], [0, reference], [0, item_width], clamp=True)
    sizes[1] = linear_map(sizes[1], [0, reference], [0, item_width], clamp=True)
    return sizes


def complete_controller(
    declarations: Mapping[str, ExplicitDeclaration],
    item_size: Sequence[float],
    state_list: Sequence[str],
    inactive_color: Any = DEFAULT_INACTIVE_COLOR,
) -> dict[str, Channels]:
    """Fill every controller state with color, symbol and symbol size."""
    item_width = item_size[0]
    completed: dict[str, Channels] = {}

    for state in state_list:
        declaration = declarations.get(state)
        if declaration is None:
            channels: Channels = {ChannelType.COLOR.value: [inactive_color]}
            logger.changes(f"Controller {state} defaults to inactive color {inactive_color}")
        else:
            channels = copy.deepcopy(declaration.channels)

        symbols = first_available(
            channel_providers(
                declarations,
                state,
                ChannelType.SYMBOL.value,
                state_list,
                [DEFAULT_CONTROLLER_SYMBOL],
                completed,
            )
        )
        sizes = first_available(
            channel_providers(
                declarations,
                state,
                ChannelType.SYMBOL_SIZE.value,
                state_list,
                [item_width, item_width],
                completed,
            )
        )
        channels[ChannelType.SYMBOL.value] = normalize_controller_symbols(symbols or [])
        channels[ChannelType.SYMBOL_SIZE.value] = normalize_symbol_size(sizes or [], item_width)
        completed[state] = channels

    return completed


# ============================================================================
# Entry point
# ============================================================================


def complete_visual_options(
    option: Mapping[str, Any],
    item_size: Sequence[float],
    state_list: Sequence[str] = STATE_LIST,
    registry: ChannelRegistry = DEFAULT_REGISTRY,
) -> CompletedOptions:
    """Resolve the declared visuals of ``option`` for both consumers.

    Args:
        option: Raw option mapping using the configuration keys ``inRange``,
            ``outOfRange``, ``target``, ``controller``, ``color`` and
            ``inactiveColor``
        item_size: ``[width, height]`` of one controller glyph
        state_list: Ordered states to resolve
        registry: Channel validity and default lookup

    Returns:
        A new tree ``{consumer: {state: {channel: values}}}`` sharing no
        mutable containers with ``option``. Target states that stay
        unspecified are omitted; every controller state is present.
    """
    base = parse_declarations(option, state_list)
    legacy_color = option.get("color")
    inactive_color = option.get("inactiveColor") or DEFAULT_INACTIVE_COLOR

    target = complete_single(
        propagate_base(base, parse_declarations(option.get("target"), state_list), state_list),
        state_list,
        registry,
        legacy_color,
    )
    controller = complete_single(
        propagate_base(base, parse_declarations(option.get("controller"), state_list), state_list),
        state_list,
        registry,
        legacy_color,
    )

    target = derive_inactive(target, IN_RANGE, OUT_OF_RANGE, registry)
    target = derive_inactive(target, OUT_OF_RANGE, IN_RANGE, registry)

    return {
        Consumer.TARGET.value: {
            state: copy.deepcopy(target[state].channels) for state in state_list if state in target
        },
        Consumer.CONTROLLER.value: complete_controller(
            controller, item_size, state_list, inactive_color
        ),
    }
