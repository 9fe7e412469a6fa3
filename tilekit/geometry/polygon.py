"""
Pure-Python polygon geometry utilities.

All coordinates in tile units, origin top-left, X = width, Y = height.
Polygons are plain sequences of (x, y) tuples without a closing vertex.
"""

from __future__ import annotations
import math
from typing import Sequence

from tilekit.config import PLACEMENT_RULES

Point = tuple[float, float]
PointList = Sequence[Point]


# ── core primitives ─────────────────────────────────────────────────


def polygon_area(points: PointList) -> float:
    """Signed area via shoelace formula (positive = CCW in a Y-up frame)."""
    n = len(points)
    if n < 3:
        return 0.0
    area = 0.0
    for i in range(n):
        x0, y0 = points[i]
        x1, y1 = points[(i + 1) % n]
        area += x0 * y1 - x1 * y0
    return area / 2.0


def ensure_ccw(points: PointList) -> list[Point]:
    """Return a copy with positive signed-area winding."""
    if polygon_area(points) < 0:
        return list(reversed(points))
    return list(points)


def polygon_bounds(points: PointList) -> tuple[float, float, float, float]:
    """Return (min_x, min_y, max_x, max_y)."""
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return min(xs), min(ys), max(xs), max(ys)


def vertex_centroid(points: PointList) -> Point:
    """Average of the vertices (not the area centroid)."""
    n = len(points)
    return (sum(p[0] for p in points) / n, sum(p[1] for p in points) / n)


def max_distance(points: PointList, origin: Point = (0.0, 0.0)) -> float:
    """Largest distance from *origin* to any point, 0 for an empty list."""
    if not points:
        return 0.0
    ox, oy = origin
    return max(math.hypot(x - ox, y - oy) for x, y in points)


def translated(points: PointList, dx: float, dy: float) -> list[Point]:
    return [(x + dx, y + dy) for x, y in points]


# ── convexity ───────────────────────────────────────────────────────


def _cross(o: Point, a: Point, b: Point) -> float:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def is_convex(points: PointList, eps: float = PLACEMENT_RULES.convexity_epsilon) -> bool:
    """True when every corner turns the same way (collinear corners allowed).

    Works for either winding.  Fewer than three points is never convex.
    """
    n = len(points)
    if n < 3:
        return False
    sign = 0
    for i in range(n):
        c = _cross(points[i], points[(i + 1) % n], points[(i + 2) % n])
        if abs(c) <= eps:
            continue
        s = 1 if c > 0 else -1
        if sign == 0:
            sign = s
        elif s != sign:
            return False
    return sign != 0


def drop_collinear(points: PointList, eps: float = PLACEMENT_RULES.convexity_epsilon) -> list[Point]:
    """Remove vertices that lie on the line through their neighbours."""
    pts = list(points)
    changed = True
    while changed and len(pts) > 3:
        changed = False
        n = len(pts)
        for i in range(n):
            if abs(_cross(pts[i - 1], pts[i], pts[(i + 1) % n])) <= eps:
                del pts[i]
                changed = True
                break
    return pts
