"""Command-line interface for running races."""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import cappa
from tqdm import tqdm

from racetrack_simulator.core.types import StrategyName
from racetrack_simulator.engine.logging import ROOT_LOGGER, configure_logging
from racetrack_simulator.simulation.config import RaceConfig
from racetrack_simulator.simulation.runner import RaceResult, run_track


@dataclass
class Args:
    """Run vector races on one track file or on every track in a directory."""

    track: Path | None = None
    """Track file, or a directory of *.txt tracks (defaults to the configured tracks_dir)"""

    config: Annotated[Path | None, cappa.Arg(long=True)] = None
    """Path to TOML configuration file"""

    strategy: Annotated[StrategyName | None, cappa.Arg(long=True)] = None
    """Override: move source for every car without its own strategy"""

    max_turns: Annotated[int | None, cappa.Arg(long=True)] = None
    """Override: stop races that exceed this many turns"""

    verbose: Annotated[bool, cappa.Arg(short=True, long=True)] = False
    """Log every turn"""

    board: Annotated[bool, cappa.Arg(long=True)] = False
    """Print the final board after each race"""

    def __call__(self) -> int:
        configure_logging(logging.DEBUG if self.verbose else logging.WARNING)

        if self.config is not None and not self.config.exists():
            print(f"Error: Config file not found: {self.config}", file=sys.stderr)
            return 1
        config = RaceConfig.from_toml(self.config) if self.config else RaceConfig()

        # CLI overrides
        if self.strategy is not None:
            config.default_strategy = self.strategy
        if self.max_turns is not None:
            config.max_turns = self.max_turns

        track = self.track if self.track is not None else Path(config.tracks_dir)
        if track.is_dir():
            tracks = sorted(track.glob("*.txt"))
            if not tracks:
                print(f"Error: No *.txt tracks in {track}", file=sys.stderr)
                return 1
        elif track.exists():
            tracks = [track]
        else:
            print(f"Error: Track not found: {track}", file=sys.stderr)
            return 1

        # Keep per-turn logs out of the progress bar unless asked for
        if len(tracks) > 1 and not self.verbose:
            logging.getLogger(ROOT_LOGGER).setLevel(logging.ERROR)

        failures = 0
        with tqdm(tracks, desc="Racing", unit="race", disable=len(tracks) == 1) as pbar:
            for path in pbar:
                # Bad track files and incomplete car entries are both ValueErrors
                try:
                    result = run_track(path, config)
                except (ValueError, FileNotFoundError) as e:
                    failures += 1
                    tqdm.write(f"[{path.name}] INVALID: {e}")
                    continue
                tqdm.write(self._summary(result))

        return 1 if failures else 0

    def _summary(self, result: RaceResult) -> str:
        if result.winner is not None:
            status = f"WINNER {result.winner}"
        elif result.aborted:
            status = "ABORTED"
        else:
            status = "NO WINNER"

        lines = [
            f"[{result.track}] {status} after {result.turns} turns "
            f"in {result.execution_time_ms:.2f}ms"
        ]
        for v in result.vehicles:
            state = "crashed" if v.crashed else "running"
            lines.append(
                f"  {v.car_id}: {v.strategy}, moves={v.move_count}, "
                f"at {v.position} ({state})"
            )
        if self.board:
            lines.append(result.board)
        return "\n".join(lines)


def main():
    """Entry point for CLI."""
    return cappa.invoke(Args)


if __name__ == "__main__":
    sys.exit(main())
