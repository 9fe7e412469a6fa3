"""Tests for placement and collision-shape JSON conversion."""

from __future__ import annotations

import json
import unittest

from tilekit.geometry import (
    AnchoredPolygon, AnchoredPolygons, CenteredPolygon, CenteredPolygons,
    Circle, Polygon, Polygons, Rectangle,
)
from tilekit.placer import (
    InvalidConfiguration, OrganicPlacement, PlacementSymbolDescriptor, SeededGenerator,
    parse_placement, parse_shape, place_symbol_descriptors, placement_to_dict, shape_to_dict,
)
from tests.scene_fixture import L_POINTS, TILE, make_catalog


SHAPES = [
    Circle(3.0, center=(1.0, -1.0)),
    Rectangle((4.0, 2.0)),
    Polygon(L_POINTS),
    Polygons([L_POINTS, [(5, 5), (6, 5), (6, 6)]]),
    AnchoredPolygon([(0, 0), (2, 0), (0, 2)], (0.0, 1.0), (10.0, 10.0)),
    AnchoredPolygons([[(0, 0), (2, 0), (0, 2)]], (1.0, 0.0), (4.0, 4.0)),
    CenteredPolygon([(-1, -1), (1, -1), (0, 1)]),
    CenteredPolygons([[(-1, -1), (1, -1), (0, 1)]]),
]


class TestShapeSerialization(unittest.TestCase):

    def test_every_variant_survives_json(self):
        for shape in SHAPES:
            data = json.loads(json.dumps(shape_to_dict(shape)))
            self.assertEqual(parse_shape(data), shape, data["kind"])

    def test_kind_tags_are_distinct(self):
        kinds = [shape_to_dict(s)["kind"] for s in SHAPES]
        self.assertEqual(len(set(kinds)), len(SHAPES))

    def test_unknown_kind_rejected(self):
        with self.assertRaises(InvalidConfiguration) as ctx:
            parse_shape({"kind": "hexagon", "points": []})
        self.assertEqual(ctx.exception.field, "collision_shape")

    def test_missing_field_rejected(self):
        with self.assertRaises(InvalidConfiguration):
            parse_shape({"kind": "circle"})

    def test_circle_center_defaults_to_origin(self):
        self.assertEqual(parse_shape({"kind": "circle", "radius": 2}), Circle(2.0))

    def test_unknown_shape_object_rejected(self):
        with self.assertRaises(InvalidConfiguration):
            shape_to_dict("circle")


class TestPlacementSerialization(unittest.TestCase):
    """Placed descriptors round-trip through JSON."""

    @classmethod
    def setUpClass(cls):
        symbols = [
            PlacementSymbolDescriptor(s.id, s.weight, s.rotation_range_degrees,
                                      s.scale_range or (1.0, 1.0), s.collision_shape)
            for s in make_catalog()
        ]
        cls.placed = place_symbol_descriptors(
            TILE, symbols, OrganicPlacement(minimum_spacing=2, maximum_symbol_count=20),
            SeededGenerator(12),
        )

    def test_to_dict(self):
        d = placement_to_dict(self.placed)
        self.assertIsInstance(json.dumps(d), str)
        self.assertEqual(len(d["symbols"]), len(self.placed))
        first = d["symbols"][0]
        self.assertEqual(
            set(first), {"symbol_id", "x", "y", "rotation_radians", "scale", "collision_shape"},
        )

    def test_round_trip(self):
        restored = parse_placement(json.loads(json.dumps(placement_to_dict(self.placed))))
        self.assertEqual(restored, self.placed)


if __name__ == "__main__":
    unittest.main()
