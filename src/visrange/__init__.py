"""visrange - resolve visual range options into per-state visual mappings."""

from .channels import (
    DEFAULT_REGISTRY,
    ChannelRegistry,
    ChannelType,
    DefaultChannelRegistry,
    ExplicitDeclaration,
    ShorthandDeclaration,
    Variant,
)
from .completion import complete_visual_options
from .exceptions import ConfigError, ParseError, VisrangeError
from .extent import resolve_extent
from .formatting import format_range
from .loader import load_option, load_sources
from .mapping import MappingRecord, build_mapping_table
from .model import VisualRangeModel
from .options import VisualRangeOption
from .states import DATA_BOUND, IN_RANGE, OUT_OF_RANGE, STATE_LIST, Consumer
from .targets import DataSource, StaticDataSource, TargetSelection, resolve_targets

__version__ = "0.1.0"

__all__ = [
    "DATA_BOUND",
    "DEFAULT_REGISTRY",
    "IN_RANGE",
    "OUT_OF_RANGE",
    "STATE_LIST",
    "ChannelRegistry",
    "ChannelType",
    "ConfigError",
    "Consumer",
    "DataSource",
    "DefaultChannelRegistry",
    "ExplicitDeclaration",
    "MappingRecord",
    "ParseError",
    "ShorthandDeclaration",
    "StaticDataSource",
    "TargetSelection",
    "Variant",
    "VisrangeError",
    "VisualRangeModel",
    "VisualRangeOption",
    "build_mapping_table",
    "complete_visual_options",
    "format_range",
    "load_option",
    "load_sources",
    "resolve_extent",
    "resolve_targets",
]
