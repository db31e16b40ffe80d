"""Named states and consumers of a visual range."""

from enum import Enum

IN_RANGE = "inRange"
OUT_OF_RANGE = "outOfRange"

# Ordered; redefine at this level to add states
STATE_LIST: tuple[str, ...] = (IN_RANGE, OUT_OF_RANGE)

# Sentinels for open-ended label bounds
DATA_BOUND: tuple[float, float] = (float("-inf"), float("inf"))


class Consumer(str, Enum):
    """Roles that each receive an independently resolved visual configuration."""

    CONTROLLER = "controller"
    TARGET = "target"
