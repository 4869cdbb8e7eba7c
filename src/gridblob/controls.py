# controls.py
from enum import Enum
from typing import Optional, Tuple

from . import config
from .config import CFG, STILL

Vector = Tuple[int, int]


class Direction(Enum):
    UP = config.UP
    DOWN = config.DOWN
    LEFT = config.LEFT
    RIGHT = config.RIGHT

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def horizontal(self) -> bool:
        return self.dx != 0


_NAMES = {
    "up": Direction.UP, "arrowup": Direction.UP,
    "down": Direction.DOWN, "arrowdown": Direction.DOWN,
    "left": Direction.LEFT, "arrowleft": Direction.LEFT,
    "right": Direction.RIGHT, "arrowright": Direction.RIGHT,
}


def parse_direction(name) -> Optional[Direction]:
    """Map a key/intent name ("up", "ArrowUp", ...) to a Direction; None if unknown."""
    if isinstance(name, Direction):
        return name
    if not isinstance(name, str):
        return None
    return _NAMES.get(name.strip().lower())


def apply_direction(current: Vector, requested: Direction) -> Vector:
    """
    Turn only onto the idle axis: a horizontal request applies when dx == 0,
    a vertical one when dy == 0. Anything else leaves `current` unchanged,
    which rules out 180° reversals and diagonals.
    """
    dx, dy = current
    if requested.horizontal:
        return requested.value if dx == 0 else current
    return requested.value if dy == 0 else current


def classify_swipe(start: Tuple[float, float], end: Tuple[float, float],
                   threshold: float = CFG.swipe_threshold) -> Optional[Direction]:
    """
    Horizontal wins when |dx| > |dy| (ties count as vertical). The gesture is
    dropped unless the winning axis moved more than `threshold`.
    """
    delta_x = end[0] - start[0]
    delta_y = end[1] - start[1]

    if abs(delta_x) > abs(delta_y):
        if abs(delta_x) > threshold:
            return Direction.RIGHT if delta_x > 0 else Direction.LEFT
        return None

    if abs(delta_y) > threshold:
        return Direction.DOWN if delta_y > 0 else Direction.UP
    return None


class IntentSlot:
    """Last requested direction, taken at most once per tick."""

    def __init__(self):
        self._pending: Optional[Direction] = None

    def request(self, direction, current: Vector = STILL) -> bool:
        """
        Hold a turn only if it would change the committed heading `current`.
        Ignored requests leave an earlier pending turn in place.
        """
        d = parse_direction(direction)
        if d is None or apply_direction(current, d) == current:
            return False
        self._pending = d
        return True

    def take(self) -> Optional[Direction]:
        d, self._pending = self._pending, None
        return d

    def clear(self) -> None:
        self._pending = None

    @property
    def pending(self) -> Optional[Direction]:
        return self._pending
