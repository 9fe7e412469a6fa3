"""Grid placement — deterministic row-major layout with brick offsets."""

from __future__ import annotations

import logging
import math
from typing import Callable, Sequence

from tilekit.geometry.collision import convex_polygons

from .models import (
    EdgeBehavior, GridOffsetStrategy, GridPlacement, GridSymbolOrder,
    InvalidConfiguration, PinnedSymbolDescriptor, PlacedSymbolDescriptor,
    PlacementSymbolDescriptor, ResolvedGrid, Size,
)
from .validity import is_placement_valid, pinned_colliders
from .wrapping import wrap_offsets, wrapped_position


log = logging.getLogger(__name__)


def _adjusted_count(base_count: int, requires_even: bool) -> int:
    if not requires_even or base_count % 2 == 0:
        return max(1, base_count)
    # Next even count keeps the alternating offset periodic across the seam.
    return max(2, base_count + 1)


def resolve_grid(
    tile_size: Size,
    configuration: GridPlacement,
    edge_behavior: EdgeBehavior,
) -> ResolvedGrid:
    """Column/row counts and cell size for a tile.

    Under seamless wrapping, strategies that alternate rows (or columns)
    need an even count on that axis so the pattern repeats across the seam.
    """
    wrapping = edge_behavior is EdgeBehavior.SEAMLESS_WRAPPING
    strategy = configuration.offset_strategy
    column_count = _adjusted_count(
        max(1, configuration.column_count),
        wrapping and strategy.requires_even_columns,
    )
    row_count = _adjusted_count(
        max(1, configuration.row_count),
        wrapping and strategy.requires_even_rows,
    )
    return ResolvedGrid(
        column_count=column_count,
        row_count=row_count,
        cell_size=(tile_size[0] / column_count, tile_size[1] / row_count),
    )


def normalized_offset_fraction(strategy: GridOffsetStrategy) -> float:
    """Offset fraction folded into ``[0, 1)``."""
    if strategy.kind == "none":
        return 0.0
    remainder = math.fmod(strategy.fraction, 1.0)
    return remainder + 1.0 if remainder < 0 else remainder


def cell_center(column: int, row: int, cell_size: Size) -> tuple[float, float]:
    return ((column + 0.5) * cell_size[0], (row + 0.5) * cell_size[1])


def grid_offset(
    strategy: GridOffsetStrategy,
    fraction: float,
    column: int,
    row: int,
    cell_size: Size,
) -> tuple[float, float]:
    """Displacement of one cell under the offset strategy."""
    if fraction <= 0:
        return (0.0, 0.0)
    offset_x = fraction * cell_size[0]
    offset_y = fraction * cell_size[1]
    if strategy.kind == "row_shift":
        return (offset_x, 0.0) if row % 2 else (0.0, 0.0)
    if strategy.kind == "column_shift":
        return (0.0, offset_y) if column % 2 else (0.0, 0.0)
    if strategy.kind == "checker_shift":
        return (offset_x, offset_y) if (row + column) % 2 else (0.0, 0.0)
    return (0.0, 0.0)


def symbol_for_cell(
    symbols: Sequence[PlacementSymbolDescriptor],
    order: GridSymbolOrder,
    cell_index: int,
) -> PlacementSymbolDescriptor:
    """Symbol for the cell at *cell_index* in row-major order."""
    if order is GridSymbolOrder.SEQUENCE:
        return symbols[cell_index % len(symbols)]
    raise InvalidConfiguration("symbol_order", f"unknown order {order!r}")


def place_grid(
    tile_size: Size,
    symbols: Sequence[PlacementSymbolDescriptor],
    pinned: Sequence[PinnedSymbolDescriptor],
    edge_behavior: EdgeBehavior,
    configuration: GridPlacement,
    should_cancel: Callable[[], bool] | None = None,
) -> list[PlacedSymbolDescriptor]:
    """Lay symbols out cell by cell, in row-major order.

    Each symbol uses the lower bound of its scale and rotation ranges; no
    randomness is involved.  Finite tiles drop cells whose shifted centre
    leaves the tile, seamless tiles wrap it back in.  Cells that collide
    with a pinned symbol are skipped.
    """
    if not symbols or tile_size[0] <= 0 or tile_size[1] <= 0:
        return []

    resolved = resolve_grid(tile_size, configuration, edge_behavior)
    strategy = configuration.offset_strategy
    fraction = normalized_offset_fraction(strategy)
    offsets = wrap_offsets(tile_size, edge_behavior)
    obstacles = pinned_colliders(pinned)
    obstacle_indices = list(range(len(obstacles)))
    polygon_cache = {s.id: convex_polygons(s.collision_shape) for s in symbols}

    placed: list[PlacedSymbolDescriptor] = []
    skipped = 0

    for row in range(resolved.row_count):
        for column in range(resolved.column_count):
            if should_cancel is not None and should_cancel():
                log.debug("Grid placement cancelled after %d symbols", len(placed))
                return placed

            symbol = symbol_for_cell(
                symbols, configuration.symbol_order, row * resolved.column_count + column,
            )

            cx, cy = cell_center(column, row, resolved.cell_size)
            dx, dy = grid_offset(strategy, fraction, column, row, resolved.cell_size)
            position = (cx + dx, cy + dy)

            if edge_behavior is EdgeBehavior.FINITE:
                if not (0 <= position[0] < tile_size[0] and 0 <= position[1] < tile_size[1]):
                    skipped += 1
                    continue
            else:
                position = wrapped_position(position, tile_size)

            candidate = PlacedSymbolDescriptor(
                symbol_id=symbol.id,
                position=position,
                rotation_radians=math.radians(symbol.allowed_rotation_range_degrees[0]),
                scale=symbol.resolved_scale_range[0],
                collision_shape=symbol.collision_shape,
            )

            if obstacles and not is_placement_valid(
                candidate, polygon_cache[symbol.id], obstacle_indices, obstacles,
                tile_size, edge_behavior, offsets, 0.0,
            ):
                skipped += 1
                continue

            placed.append(candidate)

    log.debug("Grid placement: %dx%d cells, placed=%d skipped=%d",
              resolved.column_count, resolved.row_count, len(placed), skipped)
    return placed
