"""Immutable race grid and the text track format it is built from."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from racetrack_simulator.core.errors import InvalidFileFormatError
from racetrack_simulator.core.types import CRASH_INDICATOR, MAX_CARS, CellKind
from racetrack_simulator.core.vector import Vector
from racetrack_simulator.engine.state import Vehicle

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


@dataclass(frozen=True, slots=True)
class StartMarker:
    car_id: str
    position: Vector


@dataclass(frozen=True, slots=True)
class Grid:
    width: int
    height: int
    cells: tuple[CellKind, ...]  # row-major
    starts: tuple[StartMarker, ...]

    def in_bounds(self, position: Vector) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def kind_at(self, position: Vector) -> CellKind:
        if not self.in_bounds(position):
            return CellKind.WALL
        return self.cells[position.y * self.width + position.x]

    @property
    def car_count(self) -> int:
        return len(self.starts)

    def spawn_vehicles(self) -> list[Vehicle]:
        """Create a fresh vehicle for every start marker, in reading order."""
        return [
            Vehicle(idx=idx, car_id=marker.car_id, position=marker.position)
            for idx, marker in enumerate(self.starts)
        ]

    @classmethod
    def from_text(cls, text: str) -> Grid:
        return cls.from_lines(text.splitlines())

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> Grid:
        block = _track_block(lines)
        if not block:
            raise InvalidFileFormatError(
                "empty_file", "Track file contains no valid track data"
            )

        width = len(block[0])
        for row, line in enumerate(block[1:], start=2):
            if len(line) != width:
                raise InvalidFileFormatError(
                    "inconsistent_line_length",
                    f"Line {row} has length {len(line)}, expected {width}",
                )

        cells: list[CellKind] = []
        starts: list[StartMarker] = []
        seen_ids: set[str] = set()
        for y, line in enumerate(block):
            for x, char in enumerate(line):
                kind = CellKind.of_char(char)
                if kind is not None:
                    cells.append(kind)
                    continue

                if char in seen_ids:
                    raise InvalidFileFormatError(
                        "duplicate_car_id", f"Duplicate car ID found: {char!r}"
                    )
                seen_ids.add(char)
                starts.append(StartMarker(char, Vector(x, y)))
                cells.append(CellKind.OPEN)

        if not starts:
            raise InvalidFileFormatError("no_cars")
        if len(starts) > MAX_CARS:
            raise InvalidFileFormatError(
                "too_many_cars",
                f"Too many cars in track file: {len(starts)}, maximum allowed: {MAX_CARS}",
            )

        return cls(
            width=width,
            height=len(block),
            cells=tuple(cells),
            starts=tuple(starts),
        )


def _track_block(lines: Iterable[str]) -> list[str]:
    """Skip leading blank lines, then collect lines up to the next blank one."""
    block: list[str] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line.strip():
            if block:
                break
            continue
        block.append(line)
    return block


def load_track(path: Path | str) -> Grid:
    with Path(path).open(encoding="utf-8") as f:
        return Grid.from_lines(f)


def render_board(grid: Grid, vehicles: Sequence[Vehicle] = ()) -> str:
    """Draw the grid with each vehicle's id (or the crash marker) over its cell."""
    overlay: dict[Vector, str] = {}
    for vehicle in vehicles:
        overlay.setdefault(
            vehicle.position,
            CRASH_INDICATOR if vehicle.crashed else vehicle.car_id,
        )

    rows: list[str] = []
    for y in range(grid.height):
        row = []
        for x in range(grid.width):
            pos = Vector(x, y)
            row.append(overlay.get(pos, grid.kind_at(pos).value))
        rows.append("".join(row))
    return "\n".join(rows)
