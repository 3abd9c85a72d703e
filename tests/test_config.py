from pathlib import Path

import msgspec
import pytest

from racetrack_simulator.ai.path_search import DEFAULT_MAX_DEPTH, DEFAULT_MAX_STATES
from racetrack_simulator.simulation.config import CarConfig, RaceConfig

REPO_ROOT = Path(__file__).resolve().parents[1]


def test_defaults():
    config = RaceConfig()
    assert config.max_turns == 1000
    assert config.default_strategy == "search"
    assert config.search.max_depth == DEFAULT_MAX_DEPTH
    assert config.search.max_states == DEFAULT_MAX_STATES
    assert config.cars == {}


def test_from_toml(tmp_path):
    path = tmp_path / "race.toml"
    path.write_text(
        """
max_turns = 50
default_strategy = "hold"

[search]
max_depth = 20

[cars.a]
strategy = "moves"
file = "sprint.txt"
""",
        encoding="utf-8",
    )

    config = RaceConfig.from_toml(path)

    assert config.max_turns == 50
    assert config.default_strategy == "hold"
    assert config.search.max_depth == 20
    assert config.search.max_states == DEFAULT_MAX_STATES
    assert config.cars["a"] == CarConfig(strategy="moves", file="sprint.txt")


def test_sample_config_loads():
    config = RaceConfig.from_toml(REPO_ROOT / "racetrack.toml")
    assert config.car_config("b").strategy == "hold"


@pytest.mark.parametrize(
    "body",
    [
        "max_turn = 10\n",
        "default_strategy = 'teleport'\n",
        "[cars.a]\nstrategy = 'hold'\nspeed = 3\n",
    ],
)
def test_invalid_config_is_rejected(tmp_path, body: str):
    path = tmp_path / "race.toml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(msgspec.ValidationError):
        RaceConfig.from_toml(path)


def test_car_config_falls_back_to_default_strategy():
    config = RaceConfig(default_strategy="hold", cars={"a": CarConfig(strategy="search")})
    assert config.car_config("a").strategy == "search"
    assert config.strategy_for(config.car_config("a")) == "search"
    assert config.strategy_for(config.car_config("z")) == "hold"


def test_resolve_file():
    config = RaceConfig(moves_dir="m", follower_dir="f")

    assert config.resolve_file(CarConfig("moves", "x.txt")) == Path("m/x.txt")
    assert config.resolve_file(CarConfig("follow", "y.txt")) == Path("f/y.txt")
    with pytest.raises(ValueError, match="needs a file"):
        config.resolve_file(CarConfig("moves"))


def test_car_entry_without_strategy_uses_default(tmp_path):
    path = tmp_path / "race.toml"
    path.write_text(
        'default_strategy = "follow"\n\n[cars.a]\nfile = "loop.txt"\n',
        encoding="utf-8",
    )

    config = RaceConfig.from_toml(path)
    car = config.car_config("a")

    assert car.strategy is None
    assert config.strategy_for(car) == "follow"
    assert config.resolve_file(car) == Path("follower/loop.txt")
