from racetrack_simulator.core.vector import Vector


def cells(start: Vector, end: Vector) -> list[Vector]:
    """
    Grid cells a straight move from `start` to `end` passes through, both ends included.

    Integer error-accumulation line drawing. The line is always traced from the
    lexicographically smaller endpoint so that `cells(b, a)` is exactly the
    reverse of `cells(a, b)`.
    """
    if (end.x, end.y) < (start.x, start.y):
        path = _trace(end, start)
        path.reverse()
        return path
    return _trace(start, end)


def _trace(start: Vector, end: Vector) -> list[Vector]:
    x, y = start.x, start.y
    path = [Vector(x, y)]
    if start == end:
        return path

    delta = end - start
    dist = abs(delta)
    step = delta.sign()

    # Fast axis is stepped every iteration, the slow axis only on a diagonal step.
    if dist.x > dist.y:
        parallel = Vector(step.x, 0)
        fast, slow = dist.x, dist.y
    else:
        parallel = Vector(0, step.y)
        fast, slow = dist.y, dist.x

    error = fast // 2
    for _ in range(fast):
        error -= slow
        if error < 0:
            error += fast
            x += step.x
            y += step.y
        else:
            x += parallel.x
            y += parallel.y
        path.append(Vector(x, y))

    return path
