"""Organic placement — weighted rejection sampling with a spatial hash.

For each of the target instances a symbol, scale and rotation are drawn,
then up to ``max_placement_attempts`` random positions are tried.  The
first position that clears every neighbouring collider is accepted; if
none does, that instance is dropped.

Random draws happen in a fixed order so a seed replays exactly:
symbol choice → scale → rotation → (x, y) per attempt.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Callable, Sequence

from tilekit.config import PLACEMENT_RULES
from tilekit.geometry.collision import convex_polygons
from tilekit.geometry.shapes import bounding_radius

from .models import (
    EdgeBehavior, OrganicPlacement, PinnedSymbolDescriptor,
    PlacedSymbolDescriptor, PlacementSymbolDescriptor, Range, Size,
)
from .spatial_hash import SpatialHashGrid
from .validity import is_placement_valid, make_collider, pinned_colliders
from .wrapping import wrap_offsets


log = logging.getLogger(__name__)


def target_counts(
    tile_size: Size,
    configuration: OrganicPlacement,
    pinned_count: int,
) -> tuple[int, int]:
    """Return (target_count, remaining_target) for a tile.

    The target is the tile area divided by the area one spacing-sized cell
    occupies, scaled by the clamped density and capped by the maximum
    count.  Pinned symbols count toward the target.
    """
    density = max(0.0, min(1.0, configuration.density))
    maximum = max(0, configuration.maximum_symbol_count)
    spacing = configuration.minimum_spacing
    area = tile_size[0] * tile_size[1]
    estimated = int(area / max(spacing * spacing, 1.0) * density)
    target = min(max(0, estimated), maximum)
    remaining = min(max(0, target - pinned_count), maximum)
    return target, remaining


def pick_symbol(
    symbols: Sequence[PlacementSymbolDescriptor],
    rng: random.Random,
) -> PlacementSymbolDescriptor:
    """Weighted pick preserving caller-defined symbol frequencies."""
    total_weight = sum(s.weight for s in symbols)
    if total_weight <= 0:
        return symbols[rng.randrange(len(symbols))]
    value = rng.random() * total_weight
    accumulator = 0.0
    for symbol in symbols:
        accumulator += symbol.weight
        if value < accumulator:
            return symbol
    return symbols[-1]


def random_angle_radians(range_degrees: Range, rng: random.Random) -> float:
    """Uniform angle in the range; a degenerate range consumes no draw."""
    lower, upper = range_degrees
    if not upper > lower:
        return math.radians(lower)
    return math.radians(rng.uniform(lower, upper))


def random_point(tile_size: Size, rng: random.Random) -> tuple[float, float]:
    """Uniform point in ``[0, width) × [0, height)``."""
    x = rng.random() * tile_size[0]
    y = rng.random() * tile_size[1]
    return (x, y)


def _max_bounding_radius(
    symbols: Sequence[PlacementSymbolDescriptor],
    pinned: Sequence[PinnedSymbolDescriptor],
) -> float:
    generated = max(
        (bounding_radius(s.collision_shape, s.resolved_scale_range[1]) for s in symbols),
        default=0.0,
    )
    fixed = max(
        (bounding_radius(p.collision_shape, p.scale) for p in pinned),
        default=0.0,
    )
    return max(generated, fixed)


def place_organic(
    tile_size: Size,
    symbols: Sequence[PlacementSymbolDescriptor],
    pinned: Sequence[PinnedSymbolDescriptor],
    edge_behavior: EdgeBehavior,
    configuration: OrganicPlacement,
    rng: random.Random,
    should_cancel: Callable[[], bool] | None = None,
) -> list[PlacedSymbolDescriptor]:
    """Place symbol instances by rejection sampling.

    Parameters
    ----------
    tile_size : (float, float)
        Tile width and height, both positive.
    symbols : sequence of PlacementSymbolDescriptor
        Candidates with resolved scale ranges.  Empty → no placements.
    pinned : sequence of PinnedSymbolDescriptor
        Fixed obstacles seeded into the collider store first.
    edge_behavior : EdgeBehavior
        Finite tiles or seamlessly wrapping (toroidal) tiles.
    configuration : OrganicPlacement
        Spacing, density and maximum count.
    rng : random.Random
        Shared generator, consumed in the documented order.
    should_cancel : callable, optional
        Polled once per instance and once per attempt; when it returns
        True the instances accepted so far are returned.

    Returns
    -------
    list of PlacedSymbolDescriptor
        Accepted instances in acceptance order (pinned symbols excluded).
    """
    if not symbols:
        return []

    spacing = configuration.minimum_spacing
    target, remaining = target_counts(tile_size, configuration, len(pinned))
    offsets = wrap_offsets(tile_size, edge_behavior)

    colliders = pinned_colliders(pinned)
    grid = SpatialHashGrid(
        tile_size, _max_bounding_radius(symbols, pinned), spacing, edge_behavior,
    )
    for index, collider in enumerate(colliders):
        grid.insert(index, collider.collision_transform.position)

    polygon_cache = {s.id: convex_polygons(s.collision_shape) for s in symbols}
    max_attempts = PLACEMENT_RULES.max_placement_attempts

    placed: list[PlacedSymbolDescriptor] = []
    dropped = 0

    for _ in range(remaining):
        if should_cancel is not None and should_cancel():
            log.debug("Organic placement cancelled after %d symbols", len(placed))
            return placed

        symbol = pick_symbol(symbols, rng)
        scale = rng.uniform(*symbol.resolved_scale_range)
        rotation = random_angle_radians(symbol.allowed_rotation_range_degrees, rng)
        polygons = polygon_cache[symbol.id]

        accepted = False
        for _attempt in range(max_attempts):
            if should_cancel is not None and should_cancel():
                log.debug("Organic placement cancelled after %d symbols", len(placed))
                return placed

            candidate = PlacedSymbolDescriptor(
                symbol_id=symbol.id,
                position=random_point(tile_size, rng),
                rotation_radians=rotation,
                scale=scale,
                collision_shape=symbol.collision_shape,
            )
            neighbors = grid.neighbor_indices(candidate.position)
            if not is_placement_valid(
                candidate, polygons, neighbors, colliders,
                tile_size, edge_behavior, offsets, spacing,
            ):
                continue

            placed.append(candidate)
            colliders.append(make_collider(symbol.collision_shape, candidate.collision_transform))
            grid.insert(len(colliders) - 1, candidate.position)
            accepted = True
            break

        if not accepted:
            dropped += 1
            log.debug("Dropped %s after %d attempts", symbol.id, max_attempts)

    log.debug("Organic placement: target=%d remaining=%d placed=%d dropped=%d",
              target, remaining, len(placed), dropped)
    return placed
