import re
from dataclasses import dataclass
from typing import override

VECTOR_PATTERN = re.compile(r"^\(X:\s*([+-]?\d+),\s*Y:\s*([+-]?\d+)\)$")


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


@dataclass(frozen=True, slots=True)
class Vector:
    """Integer grid vector used for positions, velocities and accelerations."""

    x: int = 0
    y: int = 0

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def __abs__(self) -> "Vector":
        return Vector(abs(self.x), abs(self.y))

    def sign(self) -> "Vector":
        return Vector(_sign(self.x), _sign(self.y))

    def dot(self, other: "Vector") -> int:
        return self.x * other.x + self.y * other.y

    @override
    def __str__(self) -> str:
        return f"(X:{self.x}, Y:{self.y})"

    @classmethod
    def parse(cls, text: str) -> "Vector":
        """Parse the waypoint form `(X:<int>, Y:<int>)`."""
        match = VECTOR_PATTERN.match(text.strip())
        if match is None:
            raise ValueError(f"Not a vector: {text!r}")
        return cls(int(match.group(1)), int(match.group(2)))


ZERO = Vector(0, 0)
