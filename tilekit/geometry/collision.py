"""Shape-aware collision math — convex decomposition and SAT intersection.

Every collision shape resolves to a tuple of convex :class:`CollisionPolygon`
pieces in centred local space.  Concave outlines are triangulated with
Shapely's constrained Delaunay triangulation and the triangles are merged
back into as few convex pieces as possible (Hertel–Mehlhorn).  The result
is cached per shape in a bounded LRU cache.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Sequence

import shapely
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.polygon import orient

from tilekit.config import PLACEMENT_RULES

from .polygon import (
    Point, drop_collinear, ensure_ccw, is_convex, max_distance, vertex_centroid,
)
from .shapes import CollisionShape, normalized_point_sets


@dataclass(frozen=True)
class CollisionTransform:
    """Where and how a shape sits in the tile."""

    position: Point
    rotation: float     # radians
    scale: float


@dataclass(frozen=True)
class CollisionPolygon:
    """A convex piece plus cached data that speeds up SAT checks."""

    points: tuple[Point, ...]
    axes: tuple[Point, ...]     # unit edge normals in local space
    center: Point               # vertex centroid, local space
    radius: float               # max vertex distance from center, unscaled

    @classmethod
    def from_points(cls, points: Sequence[Point]) -> "CollisionPolygon":
        pts = tuple(points)
        center = vertex_centroid(pts)
        return cls(
            points=pts,
            axes=tuple(separating_axes(pts)),
            center=center,
            radius=max_distance(pts, center),
        )


def apply_transform(point: Point, transform: CollisionTransform) -> Point:
    """Map a local point to world space: scale, rotate, then translate."""
    sx = point[0] * transform.scale
    sy = point[1] * transform.scale
    cos_r = math.cos(transform.rotation)
    sin_r = math.sin(transform.rotation)
    return (
        sx * cos_r - sy * sin_r + transform.position[0],
        sx * sin_r + sy * cos_r + transform.position[1],
    )


def separating_axes(points: Sequence[Point]) -> list[Point]:
    """Unit normals of every non-degenerate edge."""
    if len(points) < 2:
        return []
    axes: list[Point] = []
    n = len(points)
    for i in range(n):
        x0, y0 = points[i]
        x1, y1 = points[(i + 1) % n]
        dx, dy = x1 - x0, y1 - y0
        if dx == 0 and dy == 0:
            continue
        length = math.hypot(dx, dy)
        axes.append((-dy / length, dx / length))
    return axes


# ── Concave decomposition ──────────────────────────────────────────


def _exterior(poly: ShapelyPolygon) -> list[Point]:
    """CCW exterior ring without the closing vertex."""
    return [(x, y) for x, y in list(orient(poly, sign=1.0).exterior.coords)[:-1]]


def _merge_along_shared_edge(a: list[Point], b: list[Point]) -> list[Point] | None:
    """Join two CCW pieces across an edge they share, or return None.

    *a* traverses the shared edge p→q and *b* traverses it q→p.
    """
    n, m = len(a), len(b)
    b_edges = {(b[j], b[(j + 1) % m]): j for j in range(m)}
    for i in range(n):
        p, q = a[i], a[(i + 1) % n]
        j = b_edges.get((q, p))
        if j is None:
            continue
        start_a = (i + 1) % n
        start_b = (j + 1) % m
        rot_a = a[start_a:] + a[:start_a]       # q … p
        rot_b = b[start_b:] + b[:start_b]       # p … q
        return rot_a + rot_b[1:-1]
    return None


def merge_convex_pieces(pieces: Sequence[Sequence[Point]]) -> list[list[Point]]:
    """Greedily merge adjacent convex pieces while the union stays convex."""
    work = [list(p) for p in pieces]
    merged = True
    while merged:
        merged = False
        for i in range(len(work)):
            for j in range(i + 1, len(work)):
                candidate = _merge_along_shared_edge(work[i], work[j])
                if candidate is not None and is_convex(candidate):
                    work[i] = candidate
                    del work[j]
                    merged = True
                    break
            if merged:
                break
    return [drop_collinear(p) for p in work]


def decompose_polygon(points: Sequence[Point]) -> list[list[Point]]:
    """Split a simple polygon into convex pieces (CCW point lists).

    Fewer than three points or zero area yields no pieces.  Non-simple
    polygons fall back to their convex hull.
    """
    if len(points) < 3:
        return []
    poly = ShapelyPolygon(points)
    if not poly.is_valid:
        hull = poly.convex_hull
        if not isinstance(hull, ShapelyPolygon) or hull.area <= 0:
            return []
        return [drop_collinear(_exterior(hull))]
    if poly.area <= 0:
        return []

    ccw = drop_collinear(ensure_ccw(points))
    if is_convex(ccw):
        return [ccw]

    triangles = shapely.constrained_delaunay_triangles(poly)
    pieces = [
        _exterior(tri) for tri in triangles.geoms
        if isinstance(tri, ShapelyPolygon) and tri.area > 0
    ]
    return merge_convex_pieces(pieces)


@lru_cache(maxsize=PLACEMENT_RULES.shape_cache_size)
def convex_polygons(shape: CollisionShape) -> tuple[CollisionPolygon, ...]:
    """Convex pieces of *shape* in centred local space (cached per shape)."""
    pieces: list[CollisionPolygon] = []
    for point_set in normalized_point_sets(shape):
        for piece in decompose_polygon(point_set):
            pieces.append(CollisionPolygon.from_points(piece))
    return tuple(pieces)


def outline_point_sets(shape: CollisionShape) -> list[list[Point]]:
    """Undecomposed outlines in local space, as drawn by a collision overlay."""
    return [list(ps) for ps in normalized_point_sets(shape)]


def world_polygons(shape: CollisionShape, transform: CollisionTransform) -> list[list[Point]]:
    """Convex pieces of *shape* placed into world space."""
    return [
        [apply_transform(p, transform) for p in poly.points]
        for poly in convex_polygons(shape)
    ]


# ── SAT intersection ───────────────────────────────────────────────


class _WorldPiece:
    __slots__ = ("points", "axes", "center", "radius")

    def __init__(self, poly: CollisionPolygon, transform: CollisionTransform) -> None:
        cos_r = math.cos(transform.rotation)
        sin_r = math.sin(transform.rotation)
        s = transform.scale
        tx, ty = transform.position
        self.points = [
            (x * s * cos_r - y * s * sin_r + tx, x * s * sin_r + y * s * cos_r + ty)
            for x, y in poly.points
        ]
        self.axes = [(ax * cos_r - ay * sin_r, ax * sin_r + ay * cos_r) for ax, ay in poly.axes]
        cx, cy = poly.center
        self.center = (cx * s * cos_r - cy * s * sin_r + tx, cx * s * sin_r + cy * s * cos_r + ty)
        self.radius = poly.radius * s


def _projection(points: list[Point], ax: float, ay: float) -> tuple[float, float]:
    lo = hi = points[0][0] * ax + points[0][1] * ay
    for x, y in points:
        d = x * ax + y * ay
        if d < lo:
            lo = d
        elif d > hi:
            hi = d
    return lo, hi


def _pieces_overlap(a: _WorldPiece, b: _WorldPiece, half_buffer: float) -> bool:
    """SAT: True unless some edge normal separates the inflated pieces."""
    for axes in (a.axes, b.axes):
        for ax, ay in axes:
            lo_a, hi_a = _projection(a.points, ax, ay)
            lo_b, hi_b = _projection(b.points, ax, ay)
            if hi_a + half_buffer < lo_b - half_buffer or hi_b + half_buffer < lo_a - half_buffer:
                return False
    return True


def polygons_intersect(
    polygons_a: Sequence[CollisionPolygon],
    transform_a: CollisionTransform,
    polygons_b: Sequence[CollisionPolygon],
    transform_b: CollisionTransform,
    buffer: float = 0.0,
) -> bool:
    """True when any convex piece of A overlaps any piece of B.

    *buffer* inflates the test: pieces count as intersecting unless some
    axis separates them by more than *buffer*.  A bounding-circle check per
    piece pair skips SAT for clearly distant pairs.
    """
    if not polygons_a or not polygons_b:
        return False

    buffer = max(buffer, 0.0)
    half_buffer = buffer / 2
    world_a = [_WorldPiece(p, transform_a) for p in polygons_a]
    world_b = [_WorldPiece(p, transform_b) for p in polygons_b]

    for pa in world_a:
        for pb in world_b:
            reach = pa.radius + pb.radius + buffer
            dx = pa.center[0] - pb.center[0]
            dy = pa.center[1] - pb.center[1]
            if dx * dx + dy * dy > reach * reach:
                continue
            if _pieces_overlap(pa, pb, half_buffer):
                return True
    return False


def shapes_intersect(
    shape_a: CollisionShape,
    transform_a: CollisionTransform,
    shape_b: CollisionShape,
    transform_b: CollisionTransform,
    buffer: float = 0.0,
) -> bool:
    """Convenience wrapper resolving both shapes through the polygon cache."""
    return polygons_intersect(
        convex_polygons(shape_a), transform_a,
        convex_polygons(shape_b), transform_b,
        buffer,
    )
