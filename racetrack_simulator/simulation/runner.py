from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from racetrack_simulator.ai.move_sources import (
    HoldStillSource,
    MoveListSource,
    PathFollowerSource,
    plan_with_search,
)
from racetrack_simulator.core.grid import load_track, render_board
from racetrack_simulator.engine.logging import ROOT_LOGGER
from racetrack_simulator.engine.turn_engine import TurnEngine
from racetrack_simulator.simulation.config import RaceConfig

if TYPE_CHECKING:
    from racetrack_simulator.core.agent import MoveSource
    from racetrack_simulator.core.grid import Grid
    from racetrack_simulator.core.types import StrategyName
    from racetrack_simulator.core.vector import Vector

logger = logging.getLogger(f"{ROOT_LOGGER}.runner")


@dataclass(slots=True)
class VehicleResult:
    car_id: str
    strategy: StrategyName
    position: Vector
    move_count: int
    crashed: bool


@dataclass(slots=True)
class RaceResult:
    track: str
    turns: int
    aborted: bool
    winner: str | None
    execution_time_ms: float
    board: str = ""
    vehicles: list[VehicleResult] = field(default_factory=list)


def build_sources(
    engine: TurnEngine,
    config: RaceConfig,
) -> tuple[list[MoveSource], list[StrategyName]]:
    """Create one move source per vehicle, falling back to holding still when a search fails."""
    sources: list[MoveSource] = []
    strategies: list[StrategyName] = []

    for vehicle in engine.state.vehicles:
        car = config.car_config(vehicle.car_id)
        strategy: StrategyName = config.strategy_for(car)
        source: MoveSource

        match strategy:
            case "hold":
                source = HoldStillSource()
            case "moves":
                source = MoveListSource.from_file(config.resolve_file(car))
            case "follow":
                source = PathFollowerSource.from_file(config.resolve_file(car), vehicle)
            case "search":
                plan, outcome = plan_with_search(
                    engine.grid,
                    engine.state.vehicles,
                    vehicle.idx,
                    max_depth=config.search.max_depth,
                    max_states=config.search.max_states,
                )
                if plan is None:
                    logger.warning(
                        f"No plan for car {vehicle.car_id} ({outcome.status} after "
                        f"{outcome.states_explored} states); it will hold still"
                    )
                    source = HoldStillSource()
                    strategy = "hold"
                else:
                    source = plan

        sources.append(source)
        strategies.append(strategy)

    return sources, strategies


def run_grid(grid: Grid, config: RaceConfig, *, name: str = "<grid>") -> RaceResult:
    start = time.perf_counter()
    engine = TurnEngine.for_grid(grid)
    sources, strategies = build_sources(engine, config)
    turns = engine.run_race(sources, max_turns=config.max_turns)
    elapsed_ms = (time.perf_counter() - start) * 1000

    winner = engine.winner
    return RaceResult(
        track=name,
        turns=turns,
        aborted=engine.aborted,
        winner=winner.car_id if winner else None,
        execution_time_ms=elapsed_ms,
        board=render_board(grid, engine.state.vehicles),
        vehicles=[
            VehicleResult(
                car_id=v.car_id,
                strategy=strategy,
                position=v.position,
                move_count=v.move_count,
                crashed=v.crashed,
            )
            for v, strategy in zip(engine.state.vehicles, strategies, strict=True)
        ],
    )


def run_track(path: Path | str, config: RaceConfig | None = None) -> RaceResult:
    config = config or RaceConfig()
    path = Path(path)
    grid = load_track(path)
    return run_grid(grid, config, name=path.name)
