"""Spatial hash grid — buckets collider indices by the cell of their centre.

The cell size is at least the largest interaction distance between two
colliders (two bounding radii plus the spacing), so any collider that can
touch a candidate sits in the candidate's cell or a neighbouring one.
The grid is filled incrementally as colliders are accepted.
"""

from __future__ import annotations

import math

from .models import CellCoordinate, EdgeBehavior, Size
from .wrapping import wrapped_index


class SpatialHashGrid:
    """Maps tile positions to cells and cells to collider indices."""

    def __init__(
        self,
        tile_size: Size,
        max_bounding_radius: float,
        minimum_spacing: float,
        edge_behavior: EdgeBehavior,
    ) -> None:
        self.edge_behavior = edge_behavior
        self.cell_size = max(max_bounding_radius * 2 + minimum_spacing, 1.0)
        self.column_count = max(1, int(math.ceil(tile_size[0] / self.cell_size)))
        self.row_count = max(1, int(math.ceil(tile_size[1] / self.cell_size)))
        self._cells: dict[CellCoordinate, list[int]] = {}

    # ── Coordinate conversion ──────────────────────────────────────

    def cell_coordinate(self, position: tuple[float, float]) -> CellCoordinate:
        """Cell of a position, clamped (finite) or wrapped (seamless)."""
        raw_column = int(math.floor(position[0] / self.cell_size))
        raw_row = int(math.floor(position[1] / self.cell_size))
        if self.edge_behavior is EdgeBehavior.FINITE:
            return CellCoordinate(
                column=max(0, min(self.column_count - 1, raw_column)),
                row=max(0, min(self.row_count - 1, raw_row)),
            )
        return CellCoordinate(
            column=wrapped_index(raw_column, self.column_count),
            row=wrapped_index(raw_row, self.row_count),
        )

    def neighboring_cells(self, coordinate: CellCoordinate) -> list[CellCoordinate]:
        """Distinct cells around *coordinate*, the cell itself included.

        Finite tiles scan 3×3.  Seamless tiles scan 5×5: when the tile size
        is not a multiple of the cell size, the band within one cell of an
        edge can spill into the second-to-last column or row on the far
        side.
        """
        reach = 1 if self.edge_behavior is EdgeBehavior.FINITE else 2
        seen: set[CellCoordinate] = set()
        cells: list[CellCoordinate] = []
        for row_offset in range(-reach, reach + 1):
            for column_offset in range(-reach, reach + 1):
                column = coordinate.column + column_offset
                row = coordinate.row + row_offset
                if self.edge_behavior is EdgeBehavior.FINITE:
                    if not (0 <= column < self.column_count and 0 <= row < self.row_count):
                        continue
                    neighbor = CellCoordinate(column, row)
                else:
                    neighbor = CellCoordinate(
                        wrapped_index(column, self.column_count),
                        wrapped_index(row, self.row_count),
                    )
                if neighbor in seen:
                    continue
                seen.add(neighbor)
                cells.append(neighbor)
        return cells

    # ── Buckets ────────────────────────────────────────────────────

    def insert(self, collider_index: int, position: tuple[float, float]) -> CellCoordinate:
        coordinate = self.cell_coordinate(position)
        self._cells.setdefault(coordinate, []).append(collider_index)
        return coordinate

    def indices_in(self, coordinate: CellCoordinate) -> list[int]:
        return list(self._cells.get(coordinate, ()))

    def neighbor_indices(self, position: tuple[float, float]) -> list[int]:
        """Collider indices in the cells around *position*, in scan order."""
        indices: list[int] = []
        for coordinate in self.neighboring_cells(self.cell_coordinate(position)):
            bucket = self._cells.get(coordinate)
            if bucket:
                indices.extend(bucket)
        return indices

    def __len__(self) -> int:
        return sum(len(b) for b in self._cells.values())
