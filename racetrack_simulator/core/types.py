from enum import Enum
from typing import Literal

from racetrack_simulator.core.vector import Vector

MAX_CARS = 9
CRASH_INDICATOR = "X"

StrategyName = Literal["hold", "moves", "follow", "search"]


class CellKind(Enum):
    """Static classification of one grid square, valued by its track character."""

    WALL = "#"
    OPEN = " "
    FINISH_LEFT = "<"
    FINISH_RIGHT = ">"
    FINISH_UP = "^"
    FINISH_DOWN = "v"

    @property
    def is_finish(self) -> bool:
        return self in FINISH_SIGNS

    def accepts(self, velocity: Vector) -> bool:
        """True if crossing this finish cell with `velocity` is a correct crossing."""
        required = FINISH_SIGNS.get(self)
        if required is None:
            return False
        sign = velocity.sign()
        if required.x:
            return sign.x == required.x
        return sign.y == required.y

    @classmethod
    def of_char(cls, char: str) -> "CellKind | None":
        try:
            return cls(char)
        except ValueError:
            return None


# Only the non-zero component matters.
FINISH_SIGNS: dict[CellKind, Vector] = {
    CellKind.FINISH_LEFT: Vector(-1, 0),
    CellKind.FINISH_RIGHT: Vector(1, 0),
    CellKind.FINISH_UP: Vector(0, -1),
    CellKind.FINISH_DOWN: Vector(0, 1),
}


class Direction(Enum):
    """The nine accelerations a car may apply in one turn."""

    DOWN_LEFT = Vector(-1, 1)
    DOWN = Vector(0, 1)
    DOWN_RIGHT = Vector(1, 1)
    LEFT = Vector(-1, 0)
    NONE = Vector(0, 0)
    RIGHT = Vector(1, 0)
    UP_LEFT = Vector(-1, -1)
    UP = Vector(0, -1)
    UP_RIGHT = Vector(1, -1)

    @property
    def vector(self) -> Vector:
        return self.value

    @classmethod
    def of_vector(cls, vector: Vector) -> "Direction":
        return cls(vector.sign())
