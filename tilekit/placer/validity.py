"""Wrap-aware collision tests for a candidate symbol."""

from __future__ import annotations

from typing import Iterable, Sequence

from tilekit.geometry.collision import (
    CollisionPolygon, CollisionTransform, convex_polygons, polygons_intersect,
)
from tilekit.geometry.shapes import CollisionShape, bounding_radius

from .models import (
    EdgeBehavior, PinnedSymbolDescriptor, PlacedCollider, PlacedSymbolDescriptor, Size,
)
from .wrapping import nearest_periodic_offset, uses_nearest_periodic_image


def make_collider(shape: CollisionShape, transform: CollisionTransform) -> PlacedCollider:
    return PlacedCollider(
        collision_shape=shape,
        collision_transform=transform,
        polygons=convex_polygons(shape),
        bounding_radius=bounding_radius(shape, transform.scale),
    )


def pinned_colliders(pinned: Iterable[PinnedSymbolDescriptor]) -> list[PlacedCollider]:
    return [make_collider(p.collision_shape, p.collision_transform) for p in pinned]


def _collides_at(
    candidate_polygons: Sequence[CollisionPolygon],
    candidate_transform: CollisionTransform,
    collider: PlacedCollider,
    shifted_position: tuple[float, float],
    buffered_distance_sq: float,
    minimum_spacing: float,
) -> bool:
    dx = candidate_transform.position[0] - shifted_position[0]
    dy = candidate_transform.position[1] - shifted_position[1]
    if dx * dx + dy * dy >= buffered_distance_sq:
        return False
    shifted = CollisionTransform(
        position=shifted_position,
        rotation=collider.collision_transform.rotation,
        scale=collider.collision_transform.scale,
    )
    return polygons_intersect(
        candidate_polygons, candidate_transform,
        collider.polygons, shifted,
        buffer=minimum_spacing,
    )


def is_placement_valid(
    candidate: PlacedSymbolDescriptor,
    candidate_polygons: Sequence[CollisionPolygon],
    collider_indices: Iterable[int],
    colliders: Sequence[PlacedCollider],
    tile_size: Size,
    edge_behavior: EdgeBehavior,
    offsets: Sequence[tuple[float, float]],
    minimum_spacing: float,
) -> bool:
    """Return True when *candidate* clears every referenced collider.

    Each collider is tested at its periodic images: the single nearest
    image when the buffered distance is short enough for that to be exact,
    otherwise every offset in *offsets*.  Images whose centres are at
    least the buffered distance apart are skipped; the rest go through the
    SAT test inflated by *minimum_spacing*.
    """
    transform = candidate.collision_transform
    candidate_radius = bounding_radius(candidate.collision_shape, transform.scale)
    position = transform.position

    for index in collider_indices:
        collider = colliders[index]
        base = collider.collision_transform.position
        buffered_distance = candidate_radius + collider.bounding_radius + minimum_spacing
        buffered_distance_sq = buffered_distance * buffered_distance

        if uses_nearest_periodic_image(buffered_distance, tile_size, edge_behavior):
            ox, oy = nearest_periodic_offset(base, position, tile_size, edge_behavior)
            images = [(base[0] + ox, base[1] + oy)]
        else:
            images = [(base[0] + ox, base[1] + oy) for ox, oy in offsets]

        for shifted_position in images:
            if _collides_at(candidate_polygons, transform, collider,
                            shifted_position, buffered_distance_sq, minimum_spacing):
                return False
    return True
