from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from racetrack_simulator.core.types import Direction


@runtime_checkable
class MoveSource(Protocol):
    """Anything that can pick the next acceleration for the car it drives.

    Returning None ends the race for every car (the source has given up).
    """

    def next_acceleration(self) -> Direction | None: ...
