from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from racetrack_simulator.core.types import CellKind
from racetrack_simulator.engine.rasterizer import cells

if TYPE_CHECKING:
    from racetrack_simulator.core.vector import Vector
    from racetrack_simulator.engine.state import Vehicle
    from racetrack_simulator.engine.turn_engine import TurnEngine

TurnResolution = Literal["moved", "crashed", "won"]

# Correct crossings needed to win once a car has crossed the line the wrong way.
RECOVERY_CROSSINGS = 2


def resolve_move(engine: TurnEngine, vehicle: Vehicle) -> TurnResolution:
    """Walk the cells of the vehicle's pending move and apply it.

    The velocity must already include this turn's acceleration.
    """
    start = vehicle.position
    target = vehicle.next_position
    path = cells(start, target)
    engine.log_debug(f"Path {vehicle.repr}: {' '.join(map(str, path))}")

    # The starting cell is never re-checked
    for pos in path[1:]:
        kind = engine.grid.kind_at(pos)

        if kind is CellKind.WALL:
            crash(engine, vehicle, pos, cause="wall")
            return "crashed"

        if kind is CellKind.OPEN and engine.is_occupied(pos, except_idx=vehicle.idx):
            crash(engine, vehicle, pos, cause="car")
            return "crashed"

        if kind.is_finish and handle_finish_crossing(engine, vehicle, kind):
            return "won"

    vehicle.move()
    engine.log_info(f"Move: {vehicle.repr} {start}->{vehicle.position}")
    return "moved"


def crash(engine: TurnEngine, vehicle: Vehicle, pos: Vector, *, cause: str) -> None:
    vehicle.crash(pos)
    engine.log_info(f"Crash: {vehicle.repr} hit a {cause} at {pos}")
    engine.check_sole_survivor()


def handle_finish_crossing(
    engine: TurnEngine,
    vehicle: Vehicle,
    kind: CellKind,
) -> bool:
    """Apply one finish-cell crossing. Returns True if the vehicle won."""
    record = vehicle.crossing

    if not kind.accepts(vehicle.velocity):
        record.record_incorrect()
        engine.log_info(
            f"Finish: {vehicle.repr} crossed {kind.name} the wrong way (velocity {vehicle.velocity})"
        )
        return False

    if record.has_incorrect_crossing:
        record.consecutive_correct += 1
        if record.consecutive_correct < RECOVERY_CROSSINGS:
            engine.log_info(
                f"Finish: {vehicle.repr} correct crossing "
                f"{record.consecutive_correct}/{RECOVERY_CROSSINGS} after a wrong one"
            )
            return False

    # The full move completes before the win is declared
    vehicle.move()
    engine.declare_winner(vehicle.idx, reason=f"crossed {kind.name}")
    return True
