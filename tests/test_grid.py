import pytest

from racetrack_simulator.core.errors import InvalidFileFormatError
from racetrack_simulator.core.grid import Grid, load_track, render_board
from racetrack_simulator.core.types import CellKind
from racetrack_simulator.core.vector import Vector

TRACK = """\
#######
#a  > #
#  b> #
#######
"""


def test_parses_cells_and_starts():
    grid = Grid.from_text(TRACK)

    assert (grid.width, grid.height) == (7, 4)
    assert grid.kind_at(Vector(0, 0)) is CellKind.WALL
    assert grid.kind_at(Vector(4, 1)) is CellKind.FINISH_RIGHT
    assert grid.kind_at(Vector(2, 2)) is CellKind.OPEN
    # Start markers leave an open cell behind
    assert grid.kind_at(Vector(1, 1)) is CellKind.OPEN
    assert [(s.car_id, s.position) for s in grid.starts] == [
        ("a", Vector(1, 1)),
        ("b", Vector(3, 2)),
    ]


def test_out_of_bounds_is_wall():
    grid = Grid.from_text(TRACK)
    for pos in (Vector(-1, 0), Vector(7, 1), Vector(0, 4), Vector(3, -5)):
        assert not grid.in_bounds(pos)
        assert grid.kind_at(pos) is CellKind.WALL


def test_spawn_vehicles_in_reading_order():
    grid = Grid.from_text(TRACK)
    vehicles = grid.spawn_vehicles()

    assert [v.repr for v in vehicles] == ["0:a", "1:b"]
    assert all(v.velocity == Vector(0, 0) for v in vehicles)
    assert not any(v.crashed for v in vehicles)
    # Every call returns fresh vehicles
    vehicles[0].crashed = True
    assert not grid.spawn_vehicles()[0].crashed


def test_leading_blank_lines_and_trailing_content_are_ignored():
    lines = ["", "   ", "####", "#a>#", "####", "", "this is not track data"]
    grid = Grid.from_lines(lines)
    assert grid.height == 3
    assert grid.car_count == 1


def test_windows_line_endings():
    grid = Grid.from_lines(["####\r\n", "#a>#\r\n", "####\r\n"])
    assert grid.width == 4


@pytest.mark.parametrize(
    ("lines", "kind"),
    [
        ([], "empty_file"),
        (["", "  ", ""], "empty_file"),
        (["####", "#a>##", "####"], "inconsistent_line_length"),
        (["####", "#  #", "####"], "no_cars"),
        (["############", "#0123456789#", "############"], "too_many_cars"),
        (["#####", "#a a#", "#####"], "duplicate_car_id"),
    ],
)
def test_invalid_tracks(lines: list[str], kind: str):
    with pytest.raises(InvalidFileFormatError) as exc_info:
        Grid.from_lines(lines)
    assert exc_info.value.kind == kind


def test_inconsistent_line_message_names_the_line():
    with pytest.raises(InvalidFileFormatError, match="Line 3 has length 3, expected 4"):
        Grid.from_lines(["####", "#a #", "###"])


def test_nine_cars_is_allowed():
    grid = Grid.from_lines(["###########", "#123456789#", "###########"])
    assert grid.car_count == 9


def test_load_track(tmp_path):
    path = tmp_path / "track.txt"
    path.write_text("\n" + TRACK, encoding="utf-8")
    assert load_track(path) == Grid.from_text(TRACK)


def test_load_track_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_track(tmp_path / "missing.txt")


def test_render_board_marks_cars_and_crashes():
    grid = Grid.from_text(TRACK)
    vehicles = grid.spawn_vehicles()

    assert render_board(grid, vehicles) == TRACK.rstrip("\n")

    vehicles[0].crash(Vector(0, 1))
    vehicles[1].position = Vector(2, 1)
    rows = render_board(grid, vehicles).splitlines()
    assert rows[1] == "X b > #"
    assert rows[2] == "#   > #"

    assert render_board(grid).splitlines()[1] == "#   > #"
