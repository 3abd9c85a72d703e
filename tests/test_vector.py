import pytest

from racetrack_simulator.core.types import CellKind, Direction
from racetrack_simulator.core.vector import Vector


def test_arithmetic():
    a = Vector(3, -2)
    b = Vector(-1, 5)
    assert a + b == Vector(2, 3)
    assert a - b == Vector(4, -7)
    assert abs(a) == Vector(3, 2)
    assert a.dot(b) == -13


def test_sign_is_componentwise():
    assert Vector(7, -3).sign() == Vector(1, -1)
    assert Vector(0, 12).sign() == Vector(0, 1)
    assert Vector(0, 0).sign() == Vector(0, 0)


def test_value_equality_and_hashing():
    assert Vector(1, 2) == Vector(1, 2)
    seen = {(Vector(1, 2), Vector(0, 0))}
    assert (Vector(1, 2), Vector(0, 0)) in seen


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("(X:3, Y:4)", Vector(3, 4)),
        ("(X:-12, Y:+7)", Vector(-12, 7)),
        ("  (X:0, Y:-1)  ", Vector(0, -1)),
    ],
)
def test_parse_waypoint_form(text: str, expected: Vector):
    assert Vector.parse(text) == expected


@pytest.mark.parametrize("text", ["3,4", "(X:3 Y:4)", "(X:a, Y:4)", ""])
def test_parse_rejects_other_text(text: str):
    with pytest.raises(ValueError):
        Vector.parse(text)


def test_str_matches_waypoint_form():
    assert str(Vector(-2, 5)) == "(X:-2, Y:5)"


def test_direction_of_vector_uses_sign():
    assert Direction.of_vector(Vector(5, -9)) is Direction.UP_RIGHT
    assert Direction.of_vector(Vector(0, 0)) is Direction.NONE
    assert len(list(Direction)) == 9


@pytest.mark.parametrize(
    ("kind", "velocity", "accepted"),
    [
        (CellKind.FINISH_LEFT, Vector(-2, 3), True),
        (CellKind.FINISH_LEFT, Vector(0, 3), False),
        (CellKind.FINISH_RIGHT, Vector(1, -1), True),
        (CellKind.FINISH_UP, Vector(4, -1), True),
        (CellKind.FINISH_DOWN, Vector(0, -1), False),
        (CellKind.OPEN, Vector(1, 0), False),
    ],
)
def test_finish_kinds_check_one_axis(kind: CellKind, velocity: Vector, accepted: bool):
    assert kind.accepts(velocity) is accepted


def test_text_form_parses_back():
    for v in (Vector(0, 0), Vector(-7, 3), Vector(120, -45)):
        assert Vector.parse(str(v)) == v
