"""Placement serialization — JSON conversion."""

from __future__ import annotations

from tilekit.geometry.shapes import (
    AnchoredPolygon, AnchoredPolygons, CenteredPolygon, CenteredPolygons,
    Circle, CollisionShape, Polygon, Polygons, Rectangle,
)

from .models import InvalidConfiguration, PlacedSymbolDescriptor


def _pair(p) -> list[float]:
    return [p[0], p[1]]


def _pairs(points) -> list[list[float]]:
    return [_pair(p) for p in points]


def shape_to_dict(shape: CollisionShape) -> dict:
    """Serialize a collision shape to a JSON-safe dict tagged with ``kind``."""
    if isinstance(shape, Circle):
        return {"kind": "circle", "radius": shape.radius, "center": _pair(shape.center)}
    if isinstance(shape, Rectangle):
        return {"kind": "rectangle", "size": _pair(shape.size), "center": _pair(shape.center)}
    if isinstance(shape, Polygon):
        return {"kind": "polygon", "points": _pairs(shape.points)}
    if isinstance(shape, Polygons):
        return {"kind": "polygons", "point_sets": [_pairs(ps) for ps in shape.point_sets]}
    if isinstance(shape, AnchoredPolygon):
        return {
            "kind": "anchored_polygon",
            "points": _pairs(shape.points),
            "anchor": _pair(shape.anchor),
            "size": _pair(shape.size),
        }
    if isinstance(shape, AnchoredPolygons):
        return {
            "kind": "anchored_polygons",
            "point_sets": [_pairs(ps) for ps in shape.point_sets],
            "anchor": _pair(shape.anchor),
            "size": _pair(shape.size),
        }
    if isinstance(shape, CenteredPolygon):
        return {"kind": "centered_polygon", "points": _pairs(shape.points)}
    if isinstance(shape, CenteredPolygons):
        return {"kind": "centered_polygons", "point_sets": [_pairs(ps) for ps in shape.point_sets]}
    raise InvalidConfiguration("collision_shape", f"unknown collision shape {type(shape).__name__}")


def parse_shape(data: dict) -> CollisionShape:
    """Parse a ``kind``-tagged dict back into a collision shape."""
    kind = data.get("kind")
    try:
        if kind == "circle":
            return Circle(radius=data["radius"], center=tuple(data.get("center", (0.0, 0.0))))
        if kind == "rectangle":
            return Rectangle(size=tuple(data["size"]), center=tuple(data.get("center", (0.0, 0.0))))
        if kind == "polygon":
            return Polygon(data["points"])
        if kind == "polygons":
            return Polygons(data["point_sets"])
        if kind == "anchored_polygon":
            return AnchoredPolygon(data["points"], tuple(data["anchor"]), tuple(data["size"]))
        if kind == "anchored_polygons":
            return AnchoredPolygons(data["point_sets"], tuple(data["anchor"]), tuple(data["size"]))
        if kind == "centered_polygon":
            return CenteredPolygon(data["points"])
        if kind == "centered_polygons":
            return CenteredPolygons(data["point_sets"])
    except KeyError as exc:
        raise InvalidConfiguration("collision_shape", f"'{kind}' is missing {exc}") from exc
    raise InvalidConfiguration("collision_shape", f"unknown kind '{kind}'")


def placement_to_dict(placed: list[PlacedSymbolDescriptor]) -> dict:
    """Serialize placed symbols to a JSON-safe dict."""
    return {
        "symbols": [
            {
                "symbol_id": d.symbol_id,
                "x": d.position[0],
                "y": d.position[1],
                "rotation_radians": d.rotation_radians,
                "scale": d.scale,
                "collision_shape": shape_to_dict(d.collision_shape),
            }
            for d in placed
        ],
    }


def parse_placement(data: dict) -> list[PlacedSymbolDescriptor]:
    """Parse a placement dict back into placed descriptors."""
    return [
        PlacedSymbolDescriptor(
            symbol_id=s["symbol_id"],
            position=(s["x"], s["y"]),
            rotation_radians=s["rotation_radians"],
            scale=s["scale"],
            collision_shape=parse_shape(s["collision_shape"]),
        )
        for s in data["symbols"]
    ]
