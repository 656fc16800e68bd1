"""
Grid geometry helpers shared by the puzzle, flow and overworld models.
"""

import math
from enum import Enum
from typing import Any, Iterable, List, NamedTuple, Optional


class GridPoint(NamedTuple):
    """Integer tile coordinate"""
    x: int
    y: int


class Direction(Enum):
    """Compass directions on the tile grid (y grows southwards)"""
    N = "N"
    S = "S"
    E = "E"
    W = "W"

    @property
    def delta(self) -> GridPoint:
        return _DIRECTION_DELTAS[self]

    def step(self, point: GridPoint) -> GridPoint:
        """Return the neighbour of point in this direction"""
        dx, dy = self.delta
        return GridPoint(point[0] + dx, point[1] + dy)


_DIRECTION_DELTAS = {
    Direction.N: GridPoint(0, -1),
    Direction.S: GridPoint(0, 1),
    Direction.E: GridPoint(1, 0),
    Direction.W: GridPoint(-1, 0),
}


def to_point(value: Any) -> GridPoint:
    """
    Coerce a coordinate payload into a GridPoint.

    Accepts GridPoint, (x, y) pairs and mappings with x/y keys.
    """
    if isinstance(value, GridPoint):
        return value
    if isinstance(value, dict):
        if 'x' not in value or 'y' not in value:
            raise ValueError(f"Coordinate mapping needs x and y: {value!r}")
        return GridPoint(int(value['x']), int(value['y']))
    try:
        x, y = value
    except (TypeError, ValueError):
        raise ValueError(f"Invalid coordinate: {value!r}")
    return GridPoint(int(x), int(y))


def to_direction(value: Any) -> Direction:
    if isinstance(value, Direction):
        return value
    try:
        return Direction(str(value).upper())
    except ValueError:
        raise ValueError(f"Unknown direction: {value!r}")


def distance(start: GridPoint, end: GridPoint) -> float:
    """Euclidean distance between two grid points"""
    return math.hypot(end[0] - start[0], end[1] - start[1])


def manhattan_adjacent(a: GridPoint, b: GridPoint) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def is_axis_aligned(start: GridPoint, end: GridPoint) -> bool:
    return start[0] == end[0] or start[1] == end[1]


def tiles_between(start: GridPoint, end: GridPoint) -> List[GridPoint]:
    """
    Tiles strictly between the endpoints of an axis-aligned segment.

    Diagonal segments cover no whole tiles and yield an empty list.
    """
    sx, sy = start
    ex, ey = end
    if sx == ex:
        return [GridPoint(sx, y) for y in range(min(sy, ey) + 1, max(sy, ey))]
    if sy == ey:
        return [GridPoint(x, sy) for x in range(min(sx, ex) + 1, max(sx, ex))]
    return []


def orientation(p: GridPoint, q: GridPoint, r: GridPoint) -> float:
    """Signed area of the triangle pqr: >0 counter-clockwise, <0 clockwise, 0 collinear"""
    return (q[0] - p[0]) * (r[1] - p[1]) - (q[1] - p[1]) * (r[0] - p[0])


def segments_intersect(a1: GridPoint, a2: GridPoint, b1: GridPoint, b2: GridPoint) -> bool:
    """
    Strict segment intersection test.

    Each segment's endpoints must lie strictly on opposite sides of the
    other segment; touching and collinear configurations do not count.
    """
    d1 = orientation(b1, b2, a1)
    d2 = orientation(b1, b2, a2)
    d3 = orientation(a1, a2, b1)
    d4 = orientation(a1, a2, b2)
    return d1 * d2 < 0 and d3 * d4 < 0


def segment_parameter(start: GridPoint, end: GridPoint, point: GridPoint,
                      tolerance: float) -> Optional[float]:
    """
    Interpolation parameter of point along start->end, or None when the point
    is off the segment.

    The parameter is computed per varying axis; when both axes vary their
    parameters must agree within tolerance. The parameter must lie in
    [0, 1] within tolerance.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if dx == 0 and dy == 0:
        return None

    if dx != 0 and dy != 0:
        px = (point[0] - start[0]) / dx
        py = (point[1] - start[1]) / dy
        if abs(px - py) > tolerance:
            return None
        t = px
    elif dx == 0:
        if point[0] != start[0]:
            return None
        t = (point[1] - start[1]) / dy
    else:
        if point[1] != start[1]:
            return None
        t = (point[0] - start[0]) / dx

    if t < -tolerance or t > 1 + tolerance:
        return None
    return t


def points_on_perimeter(points: Iterable[GridPoint], width: int, height: int) -> List[GridPoint]:
    return [p for p in points
            if p[0] == 0 or p[1] == 0 or p[0] == width - 1 or p[1] == height - 1]
