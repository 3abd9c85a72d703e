"""
Breadth-first search over (position, velocity) states for a winning acceleration plan.

Moves are judged with the turn engine's rules (walls, other cars, finish
crossings) with one difference: a wrong-way finish crossing anywhere on a
move rejects it. The search therefore only finds direct wins and never plans
through the wrong-way-then-two-correct recovery the engine allows.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from racetrack_simulator.core.types import CellKind, Direction
from racetrack_simulator.core.vector import Vector
from racetrack_simulator.engine.logging import ROOT_LOGGER
from racetrack_simulator.engine.rasterizer import cells

if TYPE_CHECKING:
    from collections.abc import Sequence

    from racetrack_simulator.core.grid import Grid
    from racetrack_simulator.engine.state import Vehicle

logger = logging.getLogger(f"{ROOT_LOGGER}.search")

DEFAULT_MAX_DEPTH = 500
DEFAULT_MAX_STATES = 50_000
PROGRESS_INTERVAL = 10_000

SearchStatus = Literal["found", "no_path", "depth_limit", "state_limit"]
StepCheck = Literal["blocked", "clear", "wins"]

StateKey = tuple[Vector, Vector]


@dataclass(frozen=True, slots=True)
class SearchState:
    position: Vector
    velocity: Vector
    parent: SearchState | None = None
    acceleration: Direction | None = None
    depth: int = 0
    won: bool = False

    @property
    def key(self) -> StateKey:
        return (self.position, self.velocity)

    def plan(self) -> list[Direction]:
        moves: list[Direction] = []
        node: SearchState | None = self
        while node is not None and node.acceleration is not None:
            moves.append(node.acceleration)
            node = node.parent
        moves.reverse()
        return moves


@dataclass(frozen=True, slots=True)
class SearchOutcome:
    status: SearchStatus
    plan: list[Direction] = field(default_factory=list)
    states_explored: int = 0

    @property
    def found(self) -> bool:
        return self.status == "found"


class PathSearch:
    """Plans a shortest (fewest accelerations) winning plan for one vehicle."""

    def __init__(
        self,
        grid: Grid,
        vehicles: Sequence[Vehicle],
        vehicle_idx: int,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        max_states: int = DEFAULT_MAX_STATES,
    ) -> None:
        vehicle = vehicles[vehicle_idx]
        self.grid = grid
        self.car_id = vehicle.car_id
        self.start = SearchState(vehicle.position, vehicle.velocity)
        self.blocked_cells: frozenset[Vector] = frozenset(
            v.position for v in vehicles if v.idx != vehicle_idx and v.active
        )
        self.max_depth = max_depth
        self.max_states = max_states

    def search(self) -> SearchOutcome:
        frontier: deque[SearchState] = deque([self.start])
        visited: set[StateKey] = {self.start.key}
        explored = 0
        pruned = False

        while frontier:
            if explored >= self.max_states:
                logger.info(
                    f"Search for {self.car_id}: gave up after {explored} states"
                )
                return SearchOutcome("state_limit", states_explored=explored)

            state = frontier.popleft()
            explored += 1
            if explored % PROGRESS_INTERVAL == 0:
                logger.debug(
                    f"Search for {self.car_id}: explored {explored} states, "
                    f"frontier {len(frontier)}, depth {state.depth}"
                )

            if self.is_goal(state):
                plan = state.plan()
                logger.info(
                    f"Search for {self.car_id}: found a {len(plan)}-move plan "
                    f"after {explored} states"
                )
                return SearchOutcome("found", plan=plan, states_explored=explored)

            if state.depth >= self.max_depth:
                pruned = True
                continue

            for child in self.successors(state):
                if child.key in visited:
                    continue
                visited.add(child.key)
                frontier.append(child)

        status: SearchStatus = "depth_limit" if pruned else "no_path"
        logger.info(f"Search for {self.car_id}: no plan ({status}, {explored} states)")
        return SearchOutcome(status, states_explored=explored)

    def is_goal(self, state: SearchState) -> bool:
        return state.won or self.grid.kind_at(state.position).accepts(state.velocity)

    def successors(self, state: SearchState) -> list[SearchState]:
        children: list[SearchState] = []
        for direction in Direction:
            velocity = state.velocity + direction.vector
            target = state.position + velocity
            check = self.check_move(state.position, target, velocity)
            if check == "blocked":
                continue
            children.append(
                SearchState(
                    position=target,
                    velocity=velocity,
                    parent=state,
                    acceleration=direction,
                    depth=state.depth + 1,
                    won=check == "wins",
                )
            )
        return children

    def check_move(self, start: Vector, target: Vector, velocity: Vector) -> StepCheck:
        for pos in cells(start, target)[1:]:
            kind = self.grid.kind_at(pos)
            if kind is CellKind.WALL:
                return "blocked"
            if kind is CellKind.OPEN and pos in self.blocked_cells:
                return "blocked"
            if kind.is_finish:
                if not kind.accepts(velocity):
                    return "blocked"
                return "wins"
        return "clear"
