"""Placement dispatcher — resolves public symbols and routes to one engine."""

from __future__ import annotations

import logging
import math
import random
from typing import Callable, Iterable, Sequence

from tilekit.config import PLACEMENT_RULES

from .grid import place_grid
from .models import (
    EdgeBehavior, OrganicPlacement, PinnedSymbol,
    PinnedSymbolDescriptor, PlacedSymbol, PlacedSymbolDescriptor, Placement,
    PlacementSymbolDescriptor, Range, Size, Symbol,
)
from .organic import place_organic
from .seeded import SeededGenerator
from .validation import validate_descriptors, validate_symbols


log = logging.getLogger(__name__)


def resolved_scale_range(symbol: Symbol, placement: Placement) -> Range:
    """The symbol's own scale range, else the placement-mode default."""
    if symbol.scale_range is not None:
        return symbol.scale_range
    if isinstance(placement, OrganicPlacement):
        return placement.base_scale_range
    return PLACEMENT_RULES.grid_scale_range


def resolve_symbol_descriptors(
    symbols: Iterable[Symbol],
    placement: Placement,
) -> list[PlacementSymbolDescriptor]:
    return [
        PlacementSymbolDescriptor(
            id=s.id,
            weight=s.weight,
            allowed_rotation_range_degrees=s.rotation_range_degrees,
            resolved_scale_range=resolved_scale_range(s, placement),
            collision_shape=s.collision_shape,
        )
        for s in symbols
    ]


def resolve_pinned_descriptors(
    pinned_symbols: Iterable[PinnedSymbol],
    tile_size: Size,
) -> list[PinnedSymbolDescriptor]:
    return [
        PinnedSymbolDescriptor(
            id=p.id,
            position=p.position.resolved_point(tile_size),
            rotation_radians=math.radians(p.rotation_degrees),
            scale=p.scale,
            collision_shape=p.collision_shape,
        )
        for p in pinned_symbols
    ]


def place_symbol_descriptors(
    tile_size: Size,
    symbol_descriptors: Sequence[PlacementSymbolDescriptor],
    placement: Placement,
    rng: random.Random | None = None,
    *,
    pinned_descriptors: Sequence[PinnedSymbolDescriptor] = (),
    edge_behavior: EdgeBehavior = EdgeBehavior.SEAMLESS_WRAPPING,
    should_cancel: Callable[[], bool] | None = None,
) -> list[PlacedSymbolDescriptor]:
    """Run the engine selected by *placement* on resolved descriptors.

    Organic placement draws from *rng*, or from a :class:`SeededGenerator`
    seeded with ``placement.seed`` when none is given.  Grid placement
    never draws and never builds a generator.

    Raises
    ------
    InvalidConfiguration
        If the tile size, a descriptor or the placement violates a
        precondition.
    """
    validate_descriptors(tile_size, symbol_descriptors, pinned_descriptors, placement)
    if not symbol_descriptors:
        return []

    if isinstance(placement, OrganicPlacement):
        if rng is None:
            rng = SeededGenerator(placement.seed)
        placed = place_organic(
            tile_size, symbol_descriptors, pinned_descriptors, edge_behavior,
            placement, rng, should_cancel,
        )
        engine = "organic"
    else:
        placed = place_grid(
            tile_size, symbol_descriptors, pinned_descriptors, edge_behavior,
            placement, should_cancel,
        )
        engine = "grid"

    log.info("Placed %d symbols (%s, %s) on %.1fx%.1f tile with %d pinned",
             len(placed), engine, edge_behavior.value,
             tile_size[0], tile_size[1], len(pinned_descriptors))
    return placed


def resolve_placed_symbols(
    placed: Iterable[PlacedSymbolDescriptor],
    symbols: Iterable[Symbol],
) -> list[PlacedSymbol]:
    """Map placed descriptors back to their symbols, skipping unknown ids."""
    lookup = {s.id: s for s in symbols}
    return [
        PlacedSymbol(
            symbol=lookup[d.symbol_id],
            position=d.position,
            rotation_radians=d.rotation_radians,
            scale=d.scale,
        )
        for d in placed
        if d.symbol_id in lookup
    ]


def place_symbols(
    tile_size: Size,
    symbols: Sequence[Symbol],
    placement: Placement,
    *,
    pinned_symbols: Sequence[PinnedSymbol] = (),
    edge_behavior: EdgeBehavior = EdgeBehavior.SEAMLESS_WRAPPING,
    rng: random.Random | None = None,
    should_cancel: Callable[[], bool] | None = None,
) -> list[PlacedSymbol]:
    """Place symbols on a tile.

    Public symbols are converted to engine descriptors (scale ranges
    resolved for the placement mode, pinned positions resolved against
    the tile, pinned rotations converted to radians), one engine runs, and
    the placed descriptors are mapped back to their symbols.

    When *rng* is omitted, organic placement seeds its own generator from
    ``placement.seed``.  Grid placement never draws.
    """
    validate_symbols(tile_size, symbols, pinned_symbols, placement)
    if not symbols:
        return []

    placed = place_symbol_descriptors(
        tile_size,
        resolve_symbol_descriptors(symbols, placement),
        placement,
        rng,
        pinned_descriptors=resolve_pinned_descriptors(pinned_symbols, tile_size),
        edge_behavior=edge_behavior,
        should_cancel=should_cancel,
    )
    return resolve_placed_symbols(placed, symbols)
