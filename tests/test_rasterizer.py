import itertools

from racetrack_simulator.core.vector import Vector
from racetrack_simulator.engine.rasterizer import cells


def test_same_point_is_single_cell():
    assert cells(Vector(4, -2), Vector(4, -2)) == [Vector(4, -2)]


def test_steep_line():
    path = cells(Vector(0, 0), Vector(3, 4))
    assert len(path) == 5
    assert path[0] == Vector(0, 0)
    assert path[-1] == Vector(3, 4)


def test_long_horizontal_line():
    path = cells(Vector(0, 0), Vector(1000, 0))
    assert len(path) == 1001
    assert all(p.y == 0 for p in path)


def test_shallow_line_steps_slow_axis_once():
    assert cells(Vector(0, 0), Vector(2, 1)) == [
        Vector(0, 0),
        Vector(1, 0),
        Vector(2, 1),
    ]


def test_diagonal_line():
    assert cells(Vector(0, 0), Vector(2, -2)) == [
        Vector(0, 0),
        Vector(1, -1),
        Vector(2, -2),
    ]


def test_properties_hold_for_all_small_segments():
    points = [Vector(x, y) for x, y in itertools.product(range(-3, 4), repeat=2)]
    origin_offsets = [Vector(0, 0), Vector(5, -7)]

    for offset in origin_offsets:
        for a, b in itertools.product(points, repeat=2):
            a, b = a + offset, b + offset
            path = cells(a, b)
            delta = abs(b - a)

            assert path[0] == a
            assert path[-1] == b
            assert len(path) == max(delta.x, delta.y) + 1
            assert cells(b, a) == path[::-1]

            # Consecutive cells touch (8-connected)
            for p, q in itertools.pairwise(path):
                step = abs(q - p)
                assert step.x <= 1 and step.y <= 1
                assert step != Vector(0, 0)
