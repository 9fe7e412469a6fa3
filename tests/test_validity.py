"""Tests for the wrap-aware placement validity check.

Two radius-10 circles on a 50×50 seamless tile: the buffered distance
(10 + 10) is below half the tile, so a single nearest image is tested and
the circles collide exactly when that image is closer than 20.
"""

from __future__ import annotations

import math
import unittest

from tilekit.geometry import Circle, Rectangle
from tilekit.placer import EdgeBehavior, PinnedSymbolDescriptor, PlacedSymbolDescriptor
from tilekit.placer.validity import is_placement_valid, make_collider, pinned_colliders
from tilekit.placer.wrapping import wrap_offsets
from tilekit.geometry.collision import convex_polygons


TILE = (50.0, 50.0)
CIRCLE = Circle(10.0)
SEAMLESS = EdgeBehavior.SEAMLESS_WRAPPING
FINITE = EdgeBehavior.FINITE


def pinned_at(x: float, y: float, shape=CIRCLE) -> PinnedSymbolDescriptor:
    return PinnedSymbolDescriptor(
        id="pin", position=(x, y), rotation_radians=0.0, scale=1.0, collision_shape=shape,
    )


def candidate_at(x: float, y: float, shape=CIRCLE) -> PlacedSymbolDescriptor:
    return PlacedSymbolDescriptor(
        symbol_id="candidate", position=(x, y), rotation_radians=0.0, scale=1.0,
        collision_shape=shape,
    )


def valid(candidate, pinned, edge_behavior=SEAMLESS, tile_size=TILE, spacing=0.0) -> bool:
    colliders = pinned_colliders(pinned)
    return is_placement_valid(
        candidate, convex_polygons(candidate.collision_shape),
        range(len(colliders)), colliders,
        tile_size, edge_behavior, wrap_offsets(tile_size, edge_behavior), spacing,
    )


class TestOppositeCornerCircles(unittest.TestCase):

    def test_corners_overlap_through_seam(self):
        """(5, 5) and (45, 45) are 14.1 apart through the corner seam."""
        self.assertFalse(valid(candidate_at(45, 45), [pinned_at(5, 5)]))

    def test_corners_clear_when_nearest_image_is_far(self):
        """(10, 10) and (40, 40): the nearest image is 28.3 away."""
        self.assertTrue(valid(candidate_at(40, 40), [pinned_at(10, 10)]))

    def test_just_inside_collision_distance(self):
        d = 19.9 / math.sqrt(2)
        self.assertFalse(valid(candidate_at(50 - d / 2, 50 - d / 2), [pinned_at(d / 2, d / 2)]))

    def test_just_outside_collision_distance(self):
        d = 20.1 / math.sqrt(2)
        self.assertTrue(valid(candidate_at(50 - d / 2, 50 - d / 2), [pinned_at(d / 2, d / 2)]))

    def test_finite_tile_ignores_seam(self):
        self.assertTrue(valid(candidate_at(45, 45), [pinned_at(5, 5)], FINITE))


class TestPlacementValidity(unittest.TestCase):

    def test_spacing_extends_reach(self):
        box = Rectangle((10, 10))
        self.assertTrue(valid(candidate_at(25, 10, box), [pinned_at(10, 10, box)], FINITE))
        self.assertFalse(valid(candidate_at(25, 10, box), [pinned_at(10, 10, box)],
                               FINITE, spacing=6.0))

    def test_full_lattice_fallback_on_small_tile(self):
        """Radius-10 circles on a 30×30 tile exceed the shortcut threshold."""
        self.assertFalse(valid(candidate_at(28, 15), [pinned_at(2, 15)], tile_size=(30, 30)))

    def test_only_listed_indices_are_checked(self):
        colliders = pinned_colliders([pinned_at(25, 25)])
        candidate = candidate_at(25, 25)
        self.assertTrue(is_placement_valid(
            candidate, convex_polygons(CIRCLE), [], colliders,
            TILE, SEAMLESS, wrap_offsets(TILE, SEAMLESS), 0.0,
        ))

    def test_make_collider_caches_geometry(self):
        collider = make_collider(CIRCLE, candidate_at(1, 2).collision_transform)
        self.assertIs(collider.polygons, convex_polygons(CIRCLE))
        self.assertAlmostEqual(collider.bounding_radius, 10.0)


if __name__ == "__main__":
    unittest.main()
