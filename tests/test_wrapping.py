"""Tests for toroidal wrap helpers and the spatial hash grid."""

from __future__ import annotations

import unittest

from tilekit.placer import EdgeBehavior
from tilekit.placer.models import CellCoordinate
from tilekit.placer.spatial_hash import SpatialHashGrid
from tilekit.placer.wrapping import (
    nearest_periodic_offset, uses_nearest_periodic_image, wrap_offsets,
    wrapped_coordinate, wrapped_index, wrapped_position,
)


FINITE = EdgeBehavior.FINITE
SEAMLESS = EdgeBehavior.SEAMLESS_WRAPPING


class TestWrapOffsets(unittest.TestCase):

    def test_finite_has_identity_only(self):
        self.assertEqual(wrap_offsets((100, 50), FINITE), [(0.0, 0.0)])

    def test_seamless_has_full_lattice(self):
        offsets = wrap_offsets((100, 50), SEAMLESS)
        self.assertEqual(len(offsets), 9)
        self.assertEqual(len(set(offsets)), 9)
        self.assertEqual(offsets[0], (0.0, 0.0))
        self.assertIn((-100, 50), offsets)


class TestWrappedValues(unittest.TestCase):

    def test_wrapped_index(self):
        self.assertEqual(wrapped_index(-1, 10), 9)
        self.assertEqual(wrapped_index(10, 10), 0)
        self.assertEqual(wrapped_index(3, 0), 0)

    def test_wrapped_coordinate(self):
        self.assertAlmostEqual(wrapped_coordinate(-1.0, 10.0), 9.0)
        self.assertAlmostEqual(wrapped_coordinate(25.0, 10.0), 5.0)
        self.assertEqual(wrapped_coordinate(10.0, 10.0), 0.0)

    def test_tiny_negative_stays_below_modulus(self):
        value = wrapped_coordinate(-1e-18, 10.0)
        self.assertGreaterEqual(value, 0.0)
        self.assertLess(value, 10.0)

    def test_wrapped_position(self):
        self.assertEqual(wrapped_position((-5.0, 120.0), (100.0, 100.0)), (95.0, 20.0))


class TestNearestPeriodicOffset(unittest.TestCase):

    def test_moves_to_nearest_image(self):
        """(5, 5) seen from (95, 95) is nearest at (105, 105)."""
        self.assertEqual(nearest_periodic_offset((5, 5), (95, 95), (100, 100)), (100, 100))
        self.assertEqual(nearest_periodic_offset((95, 95), (5, 5), (100, 100)), (-100, -100))

    def test_close_points_need_no_offset(self):
        self.assertEqual(nearest_periodic_offset((40, 40), (60, 55), (100, 100)), (0, 0))

    def test_half_rounds_away_from_zero(self):
        self.assertEqual(nearest_periodic_offset((0, 0), (50, 0), (100, 100))[0], 100)
        self.assertEqual(nearest_periodic_offset((50, 0), (0, 0), (100, 100))[0], -100)

    def test_finite_never_offsets(self):
        self.assertEqual(nearest_periodic_offset((5, 5), (95, 95), (100, 100), FINITE), (0.0, 0.0))

    def test_shortcut_threshold(self):
        self.assertTrue(uses_nearest_periodic_image(24.0, (50, 50), SEAMLESS))
        self.assertFalse(uses_nearest_periodic_image(25.0, (50, 50), SEAMLESS))
        self.assertTrue(uses_nearest_periodic_image(1e6, (50, 50), FINITE))

    def test_shortcut_threshold_uses_smaller_dimension(self):
        """Oblong tiles are limited by their short side."""
        self.assertTrue(uses_nearest_periodic_image(19.0, (200, 40), SEAMLESS))
        self.assertFalse(uses_nearest_periodic_image(21.0, (200, 40), SEAMLESS))


class TestSpatialHashGrid(unittest.TestCase):

    def test_cell_size_covers_interaction_distance(self):
        grid = SpatialHashGrid((100, 100), 4.0, 2.0, FINITE)
        self.assertEqual(grid.cell_size, 10.0)
        self.assertEqual((grid.column_count, grid.row_count), (10, 10))

    def test_cell_size_floor(self):
        grid = SpatialHashGrid((10, 5), 0.0, 0.0, FINITE)
        self.assertEqual(grid.cell_size, 1.0)
        self.assertEqual((grid.column_count, grid.row_count), (10, 5))

    def test_partial_cells_round_up(self):
        grid = SpatialHashGrid((105, 20), 4.0, 2.0, FINITE)
        self.assertEqual((grid.column_count, grid.row_count), (11, 2))

    def test_finite_coordinates_clamp(self):
        grid = SpatialHashGrid((100, 100), 4.0, 2.0, FINITE)
        self.assertEqual(grid.cell_coordinate((150, -5)), CellCoordinate(9, 0))

    def test_seamless_coordinates_wrap(self):
        grid = SpatialHashGrid((100, 100), 4.0, 2.0, SEAMLESS)
        self.assertEqual(grid.cell_coordinate((105, -5)), CellCoordinate(0, 9))

    def test_finite_neighbourhood_clipped_at_corner(self):
        grid = SpatialHashGrid((100, 100), 4.0, 2.0, FINITE)
        self.assertEqual(len(grid.neighboring_cells(CellCoordinate(0, 0))), 4)
        self.assertEqual(len(grid.neighboring_cells(CellCoordinate(5, 5))), 9)

    def test_seamless_neighbourhood(self):
        grid = SpatialHashGrid((100, 100), 4.0, 2.0, SEAMLESS)
        cells = grid.neighboring_cells(CellCoordinate(0, 0))
        self.assertEqual(len(cells), 25)
        self.assertIn(CellCoordinate(8, 8), cells)
        self.assertEqual(cells[0], CellCoordinate(8, 8))

    def test_seamless_neighbourhood_deduplicates_small_grids(self):
        grid = SpatialHashGrid((30, 30), 4.0, 2.0, SEAMLESS)
        self.assertEqual(len(grid.neighboring_cells(CellCoordinate(1, 1))), 9)

    def test_neighbor_indices_wrap_across_seam(self):
        grid = SpatialHashGrid((100, 100), 4.0, 2.0, SEAMLESS)
        grid.insert(0, (5, 5))
        grid.insert(1, (95, 95))
        grid.insert(2, (50, 50))
        found = grid.neighbor_indices((1, 1))
        self.assertIn(0, found)
        self.assertIn(1, found)
        self.assertNotIn(2, found)
        self.assertEqual(len(grid), 3)

    def test_neighbor_indices_finite_do_not_wrap(self):
        grid = SpatialHashGrid((100, 100), 4.0, 2.0, FINITE)
        grid.insert(0, (5, 5))
        grid.insert(1, (95, 95))
        self.assertEqual(grid.neighbor_indices((1, 1)), [0])

    def test_indices_in_cell(self):
        grid = SpatialHashGrid((100, 100), 4.0, 2.0, FINITE)
        coordinate = grid.insert(7, (12, 34))
        self.assertEqual(coordinate, CellCoordinate(1, 3))
        self.assertEqual(grid.indices_in(coordinate), [7])
        self.assertEqual(grid.indices_in(CellCoordinate(0, 0)), [])


if __name__ == "__main__":
    unittest.main()
