"""Collision shapes — the coarse footprint of a symbol used for overlap tests.

A shape is one of eight frozen dataclasses.  Circles and rectangles are
authored in item-local space (origin at the symbol's centre).  The
polygon variants come in three flavours:

  Polygon / Polygons                  view-space points, centred on their
                                      bounding box
  AnchoredPolygon / AnchoredPolygons  view-space points relative to an
                                      anchor inside a view of known size
  CenteredPolygon / CenteredPolygons  points already in centred local space

Every variant normalises to one or more point lists in centred local
space via :func:`normalized_point_sets`, which is cached per shape so the
translation happens exactly once.  Shapes are hashable and serve as the
cache key.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Sequence, Union

from tilekit.config import PLACEMENT_RULES

from .polygon import Point, max_distance, polygon_bounds, translated


# ── Anchors (unit points inside a view, origin top-leading) ─────────

UnitPoint = tuple[float, float]

TOP_LEADING: UnitPoint = (0.0, 0.0)
TOP: UnitPoint = (0.5, 0.0)
TOP_TRAILING: UnitPoint = (1.0, 0.0)
LEADING: UnitPoint = (0.0, 0.5)
CENTER: UnitPoint = (0.5, 0.5)
TRAILING: UnitPoint = (1.0, 0.5)
BOTTOM_LEADING: UnitPoint = (0.0, 1.0)
BOTTOM: UnitPoint = (0.5, 1.0)
BOTTOM_TRAILING: UnitPoint = (1.0, 1.0)


def _point(p: Sequence[float]) -> Point:
    return (float(p[0]), float(p[1]))


def _points(points: Sequence[Sequence[float]]) -> tuple[Point, ...]:
    return tuple(_point(p) for p in points)


def _point_sets(point_sets: Sequence[Sequence[Sequence[float]]]) -> tuple[tuple[Point, ...], ...]:
    return tuple(_points(ps) for ps in point_sets)


# ── Shape variants ─────────────────────────────────────────────────


@dataclass(frozen=True)
class Circle:
    """A circle centred at *center* in local space."""

    radius: float
    center: Point = (0.0, 0.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "radius", float(self.radius))
        object.__setattr__(self, "center", _point(self.center))


@dataclass(frozen=True)
class Rectangle:
    """An axis-aligned rectangle centred at *center* in local space."""

    size: tuple[float, float]           # (width, height)
    center: Point = (0.0, 0.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "size", _point(self.size))
        object.__setattr__(self, "center", _point(self.center))


@dataclass(frozen=True)
class Polygon:
    """A polygon in view space, re-centred on its bounding box.

    May be concave.  Non-simple polygons fall back to their convex hull;
    fewer than three points never collide.
    """

    points: tuple[Point, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _points(self.points))


@dataclass(frozen=True)
class Polygons:
    """Several view-space polygons treated as one shape.

    All sets share one bounding box, so their relative layout survives
    centring.
    """

    point_sets: tuple[tuple[Point, ...], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "point_sets", _point_sets(self.point_sets))


@dataclass(frozen=True)
class AnchoredPolygon:
    """A view-space polygon whose points are measured from *anchor*.

    *anchor* is a unit point inside a view of *size*; the view's centre
    becomes the local origin.
    """

    points: tuple[Point, ...]
    anchor: UnitPoint
    size: tuple[float, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _points(self.points))
        object.__setattr__(self, "anchor", _point(self.anchor))
        object.__setattr__(self, "size", _point(self.size))


@dataclass(frozen=True)
class AnchoredPolygons:
    point_sets: tuple[tuple[Point, ...], ...]
    anchor: UnitPoint
    size: tuple[float, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "point_sets", _point_sets(self.point_sets))
        object.__setattr__(self, "anchor", _point(self.anchor))
        object.__setattr__(self, "size", _point(self.size))


@dataclass(frozen=True)
class CenteredPolygon:
    """A polygon already in centred local space (used as-is)."""

    points: tuple[Point, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _points(self.points))


@dataclass(frozen=True)
class CenteredPolygons:
    point_sets: tuple[tuple[Point, ...], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "point_sets", _point_sets(self.point_sets))


CollisionShape = Union[
    Circle, Rectangle,
    Polygon, Polygons,
    AnchoredPolygon, AnchoredPolygons,
    CenteredPolygon, CenteredPolygons,
]

SHAPE_TYPES = (
    Circle, Rectangle,
    Polygon, Polygons,
    AnchoredPolygon, AnchoredPolygons,
    CenteredPolygon, CenteredPolygons,
)


# ── View space → centred local space ───────────────────────────────


def centered_points_using_bounds(points: Sequence[Point]) -> list[Point]:
    """Translate so the bounding-box centre lands on the origin."""
    if not points:
        return []
    min_x, min_y, max_x, max_y = polygon_bounds(points)
    return translated(points, -(min_x + max_x) / 2, -(min_y + max_y) / 2)


def centered_point_sets_using_bounds(point_sets: Sequence[Sequence[Point]]) -> list[list[Point]]:
    """Centre several point sets on their combined bounding box."""
    flat = [p for ps in point_sets for p in ps]
    if not flat:
        return [list(ps) for ps in point_sets]
    min_x, min_y, max_x, max_y = polygon_bounds(flat)
    dx, dy = -(min_x + max_x) / 2, -(min_y + max_y) / 2
    return [translated(ps, dx, dy) for ps in point_sets]


def centered_points(points: Sequence[Point], anchor: UnitPoint, size: tuple[float, float]) -> list[Point]:
    """Map anchor-relative view points into centred local space.

    The anchor sits at (anchor.x·w, anchor.y·h) from the view's top-leading
    corner and the view centre at (w/2, h/2).
    """
    w, h = size
    dx = anchor[0] * w - w / 2
    dy = anchor[1] * h - h / 2
    return translated(points, dx, dy)


def circle_points(center: Point, radius: float, subdivisions: int | None = None) -> list[Point]:
    """Regular polygon circumscribing the circle (edges tangent to it)."""
    if subdivisions is None:
        steps = PLACEMENT_RULES.effective_circle_subdivisions
    else:
        steps = max(subdivisions, PLACEMENT_RULES.min_circle_subdivisions)
    vertex_radius = radius / math.cos(math.pi / steps)
    cx, cy = center
    return [
        (cx + vertex_radius * math.cos(2 * math.pi * k / steps),
         cy + vertex_radius * math.sin(2 * math.pi * k / steps))
        for k in range(steps)
    ]


def rectangle_points(center: Point, size: tuple[float, float]) -> list[Point]:
    cx, cy = center
    hw, hh = size[0] / 2, size[1] / 2
    return [
        (cx - hw, cy - hh),
        (cx + hw, cy - hh),
        (cx + hw, cy + hh),
        (cx - hw, cy + hh),
    ]


@lru_cache(maxsize=PLACEMENT_RULES.shape_cache_size)
def normalized_point_sets(shape: CollisionShape) -> tuple[tuple[Point, ...], ...]:
    """Outline point sets of *shape* in centred local space.

    Circles become circumscribing regular polygons, rectangles their four
    corners.  The result is not yet convex; see
    :func:`tilekit.geometry.collision.convex_polygons`.
    """
    if isinstance(shape, Circle):
        sets = [circle_points(shape.center, shape.radius)]
    elif isinstance(shape, Rectangle):
        sets = [rectangle_points(shape.center, shape.size)]
    elif isinstance(shape, Polygon):
        sets = [centered_points_using_bounds(shape.points)]
    elif isinstance(shape, Polygons):
        sets = centered_point_sets_using_bounds(shape.point_sets)
    elif isinstance(shape, AnchoredPolygon):
        sets = [centered_points(shape.points, shape.anchor, shape.size)]
    elif isinstance(shape, AnchoredPolygons):
        sets = [centered_points(ps, shape.anchor, shape.size) for ps in shape.point_sets]
    elif isinstance(shape, CenteredPolygon):
        sets = [list(shape.points)]
    elif isinstance(shape, CenteredPolygons):
        sets = [list(ps) for ps in shape.point_sets]
    else:
        raise TypeError(f"Unknown collision shape {type(shape).__name__}")
    return tuple(tuple(ps) for ps in sets)


def bounding_radius(shape: CollisionShape, scale: float = 1.0) -> float:
    """Conservative radius around the local origin, used for broad-phase checks."""
    if isinstance(shape, Circle):
        return (math.hypot(*shape.center) + shape.radius) * scale
    if isinstance(shape, Rectangle):
        max_x = abs(shape.center[0]) + shape.size[0] / 2
        max_y = abs(shape.center[1]) + shape.size[1] / 2
        return math.hypot(max_x, max_y) * scale
    flat = [p for ps in normalized_point_sets(shape) for p in ps]
    return max_distance(flat) * scale
