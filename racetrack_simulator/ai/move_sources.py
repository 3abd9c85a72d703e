from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, override

from racetrack_simulator.ai.path_search import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_STATES,
    PathSearch,
    SearchOutcome,
)
from racetrack_simulator.core.agent import MoveSource
from racetrack_simulator.core.errors import InvalidFileFormatError
from racetrack_simulator.core.types import Direction
from racetrack_simulator.core.vector import Vector

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from racetrack_simulator.core.grid import Grid
    from racetrack_simulator.engine.state import Vehicle


@dataclass
class HoldStillSource(MoveSource):
    """Never accelerates."""

    @override
    def next_acceleration(self) -> Direction:
        return Direction.NONE


@dataclass
class PlanSource(MoveSource):
    """Replays a fixed list of accelerations, then holds still."""

    moves: list[Direction]
    cursor: int = 0

    @override
    def next_acceleration(self) -> Direction:
        if self.cursor >= len(self.moves):
            return Direction.NONE
        move = self.moves[self.cursor]
        self.cursor += 1
        return move

    @property
    def remaining(self) -> int:
        return len(self.moves) - self.cursor


def plan_with_search(
    grid: Grid,
    vehicles: Sequence[Vehicle],
    vehicle_idx: int,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_states: int = DEFAULT_MAX_STATES,
) -> tuple[PlanSource | None, SearchOutcome]:
    """
    Precompute a full plan for one vehicle.

    The source is None when the search fails; picking a fallback is up to
    the caller.
    """
    outcome = PathSearch(
        grid,
        vehicles,
        vehicle_idx,
        max_depth=max_depth,
        max_states=max_states,
    ).search()
    if not outcome.found:
        return None, outcome
    return PlanSource(list(outcome.plan)), outcome


@dataclass
class MoveListSource(PlanSource):
    """A plan read from a file with one direction name per line."""

    @classmethod
    def from_file(cls, path: Path | str) -> MoveListSource:
        with Path(path).open(encoding="utf-8") as f:
            return cls(parse_moves(f))


def parse_moves(lines: Iterable[str]) -> list[Direction]:
    moves: list[Direction] = []
    for line_number, raw in enumerate(lines, start=1):
        name = raw.strip()
        if not name:
            continue
        try:
            moves.append(Direction[name])
        except KeyError:
            valid = ", ".join(d.name for d in Direction)
            raise InvalidFileFormatError(
                "invalid_move_format",
                f"Invalid direction at line {line_number}: {name!r}. Must be one of {valid}",
            ) from None
    return moves


@dataclass
class PathFollowerSource(MoveSource):
    """Steers the car through a list of waypoints, one unit of acceleration at a time."""

    vehicle: Vehicle
    waypoints: list[Vector]
    current_waypoint: int = 0

    def __post_init__(self) -> None:
        if not self.waypoints:
            raise InvalidFileFormatError(
                "invalid_waypoint_format", "Waypoint list does not contain any waypoints"
            )

    @classmethod
    def from_file(cls, path: Path | str, vehicle: Vehicle) -> PathFollowerSource:
        with Path(path).open(encoding="utf-8") as f:
            return cls(vehicle, parse_waypoints(f))

    @override
    def next_acceleration(self) -> Direction:
        if self.current_waypoint >= len(self.waypoints):
            return Direction.NONE

        if self.vehicle.position == self.waypoints[self.current_waypoint]:
            self.current_waypoint += 1
            if self.current_waypoint >= len(self.waypoints):
                return Direction.NONE

        target = self.waypoints[self.current_waypoint]
        desired = target - self.vehicle.position - self.vehicle.velocity
        return Direction.of_vector(desired)


def parse_waypoints(lines: Iterable[str]) -> list[Vector]:
    waypoints: list[Vector] = []
    for line_number, raw in enumerate(lines, start=1):
        text = raw.strip()
        if not text:
            continue
        try:
            waypoints.append(Vector.parse(text))
        except ValueError:
            raise InvalidFileFormatError(
                "invalid_waypoint_format",
                f"Invalid waypoint format at line {line_number}: {text!r}",
            ) from None
    return waypoints
