from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from racetrack_simulator.core.errors import InvalidTurnError
from racetrack_simulator.core.types import Direction
from racetrack_simulator.core.vector import Vector
from racetrack_simulator.engine import ENGINE_ID_COUNTER
from racetrack_simulator.engine.logging import ROOT_LOGGER, ContextFilter
from racetrack_simulator.engine.movement import TurnResolution, resolve_move
from racetrack_simulator.engine.state import LogContext, RaceState, Vehicle

if TYPE_CHECKING:
    from collections.abc import Sequence

    from racetrack_simulator.core.agent import MoveSource
    from racetrack_simulator.core.grid import Grid


@dataclass
class TurnEngine:
    """Resolves turns one vehicle at a time and tracks who has won."""

    grid: Grid
    state: RaceState
    log_context: LogContext = field(
        default_factory=lambda: LogContext(engine_id=next(ENGINE_ID_COUNTER))
    )
    turns_executed: int = 0
    aborted: bool = False
    logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.logger = logging.getLogger(
            f"{ROOT_LOGGER}.engine.{self.log_context.engine_id}"
        )
        self.logger.addFilter(ContextFilter(self))

    @classmethod
    def for_grid(cls, grid: Grid) -> TurnEngine:
        return cls(grid, RaceState(vehicles=grid.spawn_vehicles()))

    # ---------- Queries ----------

    @property
    def vehicle_count(self) -> int:
        return len(self.state.vehicles)

    @property
    def current_vehicle_idx(self) -> int:
        return self.state.current_vehicle_idx

    @property
    def winner(self) -> Vehicle | None:
        if self.state.winner_idx is None:
            return None
        return self.state.vehicles[self.state.winner_idx]

    @property
    def race_over(self) -> bool:
        return self.state.finished or not self.state.active_vehicles

    def get_vehicle(self, idx: int) -> Vehicle:
        if not 0 <= idx < self.vehicle_count:
            raise InvalidTurnError(f"Invalid vehicle index: {idx}")
        return self.state.vehicles[idx]

    def is_occupied(self, pos: Vector, *, except_idx: int) -> bool:
        return any(
            v.idx != except_idx and v.active and v.position == pos
            for v in self.state.vehicles
        )

    # ---------- Logging ----------

    def log_info(self, msg: str) -> None:
        self.logger.info(msg)

    def log_debug(self, msg: str) -> None:
        self.logger.debug(msg)

    def log_warning(self, msg: str) -> None:
        self.logger.warning(msg)

    # ---------- Turn resolution ----------

    def take_turn(
        self,
        vehicle_idx: int,
        acceleration: Vector | Direction | None,
    ) -> TurnResolution | None:
        """
        Apply one acceleration to a vehicle and resolve the resulting move.

        Returns None when the request is a no-op (race over, vehicle crashed).
        """
        if acceleration is None:
            raise InvalidTurnError("Acceleration must not be None")
        if not isinstance(acceleration, (Vector, Direction)):
            raise InvalidTurnError(f"Not an acceleration: {acceleration!r}")
        vehicle = self.get_vehicle(vehicle_idx)

        if self.state.finished or vehicle.crashed:
            return None

        self.log_context.new_turn(vehicle)
        self.turns_executed += 1

        vehicle.accelerate(acceleration)
        self.log_debug(
            f"{vehicle.repr} accelerates by {acceleration}, velocity now {vehicle.velocity}"
        )
        return resolve_move(self, vehicle)

    def advance_active(self) -> None:
        """Hand the turn to the next vehicle that has not crashed."""
        n = self.vehicle_count
        for offset in range(1, n + 1):
            idx = (self.state.current_vehicle_idx + offset) % n
            if self.state.vehicles[idx].active:
                self.state.current_vehicle_idx = idx
                return

    def declare_winner(self, vehicle_idx: int, *, reason: str) -> None:
        self.state.winner_idx = vehicle_idx
        winner = self.state.vehicles[vehicle_idx]
        self.log_info(f"Win: {winner.repr} wins the race ({reason})")

    def check_sole_survivor(self) -> None:
        if self.state.finished:
            return
        survivors = self.state.active_vehicles
        if len(survivors) == 1:
            self.declare_winner(survivors[0].idx, reason="last car standing")

    # ---------- Main loop ----------

    def run_race(self, sources: Sequence[MoveSource], max_turns: int = 1000) -> int:
        """Drive the race with one move source per vehicle. Returns turns executed."""
        if len(sources) != self.vehicle_count:
            raise ValueError(
                f"Expected {self.vehicle_count} move sources, got {len(sources)}"
            )

        start_turns = self.turns_executed
        while not self.race_over and self.turns_executed - start_turns < max_turns:
            idx = self.state.current_vehicle_idx
            acceleration = sources[idx].next_acceleration()
            if acceleration is None:
                self.aborted = True
                self.log_warning(
                    f"Move source for {self.state.vehicles[idx].repr} gave up; race aborted"
                )
                break

            self.take_turn(idx, acceleration)
            if self.state.finished:
                break
            self.advance_active()
        else:
            if not self.state.finished:
                self.log_warning(self._unfinished_reason(max_turns))

        return self.turns_executed - start_turns

    def _unfinished_reason(self, max_turns: int) -> str:
        if not self.state.active_vehicles:
            return "All cars crashed; nobody wins"
        return f"No winner after {max_turns} turns"
