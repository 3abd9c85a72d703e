from dataclasses import dataclass, field

from racetrack_simulator.core.types import Direction
from racetrack_simulator.core.vector import ZERO, Vector


@dataclass(slots=True)
class CrossingRecord:
    """Finish-line bookkeeping for one car."""

    has_incorrect_crossing: bool = False
    consecutive_correct: int = 0

    def record_incorrect(self) -> None:
        self.has_incorrect_crossing = True
        self.consecutive_correct = 0


@dataclass(slots=True)
class Vehicle:
    idx: int
    car_id: str
    position: Vector
    velocity: Vector = ZERO
    crashed: bool = False
    move_count: int = 0
    crossing: CrossingRecord = field(default_factory=CrossingRecord)

    @property
    def repr(self) -> str:
        return f"{self.idx}:{self.car_id}"

    @property
    def active(self) -> bool:
        return not self.crashed

    @property
    def next_position(self) -> Vector:
        return self.position + self.velocity

    def accelerate(self, acceleration: Vector | Direction) -> None:
        if isinstance(acceleration, Direction):
            acceleration = acceleration.vector
        self.velocity = self.velocity + acceleration

    def move(self) -> None:
        self.position = self.next_position
        self.move_count += 1

    def crash(self, position: Vector) -> None:
        self.position = position
        self.crashed = True


@dataclass(slots=True)
class RaceState:
    vehicles: list[Vehicle]
    current_vehicle_idx: int = 0
    winner_idx: int | None = None

    @property
    def finished(self) -> bool:
        return self.winner_idx is not None

    @property
    def active_vehicles(self) -> list[Vehicle]:
        return [v for v in self.vehicles if v.active]


@dataclass(slots=True)
class LogContext:
    engine_id: int
    total_turn: int = 0
    turn_log_count: int = 0
    current_vehicle_repr: str = "_"

    def new_turn(self, vehicle: Vehicle) -> None:
        self.total_turn += 1
        self.turn_log_count = 0
        self.current_vehicle_repr = vehicle.repr

    def inc_log_count(self) -> None:
        self.turn_log_count += 1
