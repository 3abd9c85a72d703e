"""Race configuration schema using msgspec."""

from __future__ import annotations

from pathlib import Path

import msgspec

from racetrack_simulator.ai.path_search import DEFAULT_MAX_DEPTH, DEFAULT_MAX_STATES
from racetrack_simulator.core.types import StrategyName


class SearchConfig(msgspec.Struct, forbid_unknown_fields=True):
    """Bounds that keep the path search finite."""

    max_depth: int = DEFAULT_MAX_DEPTH
    max_states: int = DEFAULT_MAX_STATES


class CarConfig(msgspec.Struct, forbid_unknown_fields=True):
    """
    Move source for one car.

    `strategy` falls back to the race's `default_strategy` when unset.
    `file` is resolved inside `moves_dir` for "moves" and inside
    `follower_dir` for "follow"; other strategies ignore it.
    """

    strategy: StrategyName | None = None
    file: str | None = None


class RaceConfig(msgspec.Struct, forbid_unknown_fields=True):
    """TOML-backed configuration for running races."""

    tracks_dir: str = "tracks"
    moves_dir: str = "moves"
    follower_dir: str = "follower"

    max_turns: int = 1000
    default_strategy: StrategyName = "search"

    # Keyed by the car id character from the track file
    cars: dict[str, CarConfig] = msgspec.field(default_factory=dict)
    search: SearchConfig = msgspec.field(default_factory=SearchConfig)

    @classmethod
    def from_toml(cls, path: str | Path) -> RaceConfig:
        """Load configuration from a TOML file path."""
        with Path(path).open("rb") as f:
            return msgspec.toml.decode(f.read(), type=cls)

    def car_config(self, car_id: str) -> CarConfig:
        return self.cars.get(car_id) or CarConfig()

    def strategy_for(self, car: CarConfig) -> StrategyName:
        return car.strategy or self.default_strategy

    def resolve_file(self, car: CarConfig) -> Path:
        strategy = self.strategy_for(car)
        if car.file is None:
            raise ValueError(f"Strategy {strategy!r} needs a file")
        base = self.moves_dir if strategy == "moves" else self.follower_dir
        return Path(base) / car.file
