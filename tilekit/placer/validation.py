"""Precondition checks — caller contract violations raise InvalidConfiguration.

Placement-density trade-offs (empty catalogs, zero density, exhausted
attempts) are not errors; these checks only reject inputs that indicate
a programming error upstream.
"""

from __future__ import annotations

import math
from typing import Sequence

from tilekit.geometry.shapes import (
    SHAPE_TYPES, AnchoredPolygon, AnchoredPolygons, Circle, CollisionShape, Rectangle,
)

from .models import (
    OFFSET_KINDS, GridPlacement, GridSymbolOrder, InvalidConfiguration, OrganicPlacement,
    PinnedSymbol, PinnedSymbolDescriptor, Placement, PlacementSymbolDescriptor,
    Range, Size, Symbol,
)


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def _check_tile_size(tile_size: Size) -> None:
    if len(tile_size) != 2:
        raise InvalidConfiguration("tile_size", "expected (width, height)")
    width, height = tile_size
    if not _finite(width, height) or width <= 0 or height <= 0:
        raise InvalidConfiguration(
            "tile_size", f"dimensions must be positive and finite, got {width}×{height}",
        )


def _check_shape(field: str, shape: CollisionShape) -> None:
    if not isinstance(shape, SHAPE_TYPES):
        raise InvalidConfiguration(field, f"unknown collision shape {type(shape).__name__}")
    if isinstance(shape, Circle):
        if not _finite(shape.radius, *shape.center) or shape.radius < 0:
            raise InvalidConfiguration(field, f"circle radius must be >= 0, got {shape.radius}")
    elif isinstance(shape, Rectangle):
        if not _finite(*shape.size, *shape.center) or min(shape.size) < 0:
            raise InvalidConfiguration(field, f"rectangle size must be >= 0, got {shape.size}")
    elif isinstance(shape, (AnchoredPolygon, AnchoredPolygons)):
        if not _finite(*shape.size) or min(shape.size) < 0:
            raise InvalidConfiguration(field, f"anchored view size must be >= 0, got {shape.size}")


def _check_rotation_range(field: str, bounds: Range) -> None:
    low, high = bounds
    if not _finite(low, high) or low > high:
        raise InvalidConfiguration(field, f"invalid rotation range ({low}, {high})")


def _check_scale_range(field: str, bounds: Range) -> None:
    low, high = bounds
    if not _finite(low, high) or low > high:
        raise InvalidConfiguration(field, f"invalid scale range ({low}, {high})")
    if low <= 0:
        raise InvalidConfiguration(field, f"scale must be > 0, got {low}")


def _check_weight(field: str, weight: float) -> None:
    if not _finite(weight) or weight < 0:
        raise InvalidConfiguration(field, f"weight must be >= 0, got {weight}")


def _check_scale(field: str, scale: float) -> None:
    if not _finite(scale) or scale <= 0:
        raise InvalidConfiguration(field, f"scale must be > 0, got {scale}")


def _check_unique(ids: Sequence[str]) -> None:
    seen: set[str] = set()
    for sid in ids:
        if sid in seen:
            raise InvalidConfiguration("symbols", f"duplicate symbol id '{sid}'")
        seen.add(sid)


def _check_placement(placement: Placement) -> None:
    if isinstance(placement, OrganicPlacement):
        spacing = placement.minimum_spacing
        if not _finite(spacing) or spacing < 0:
            raise InvalidConfiguration("minimum_spacing", f"must be >= 0, got {spacing}")
        if math.isnan(placement.density):
            raise InvalidConfiguration("density", "must be a number")
        if placement.maximum_symbol_count < 0:
            raise InvalidConfiguration(
                "maximum_symbol_count", f"must be >= 0, got {placement.maximum_symbol_count}",
            )
        _check_scale_range("base_scale_range", placement.base_scale_range)
    elif isinstance(placement, GridPlacement):
        strategy = placement.offset_strategy
        if strategy.kind not in OFFSET_KINDS:
            raise InvalidConfiguration("offset_strategy", f"unknown kind '{strategy.kind}'")
        if not _finite(strategy.fraction):
            raise InvalidConfiguration("offset_strategy", "fraction must be finite")
        if not isinstance(placement.symbol_order, GridSymbolOrder):
            raise InvalidConfiguration(
                "symbol_order", f"unknown order {placement.symbol_order!r}",
            )
    else:
        raise InvalidConfiguration("placement", f"unknown placement {type(placement).__name__}")


def validate_symbols(
    tile_size: Size,
    symbols: Sequence[Symbol],
    pinned_symbols: Sequence[PinnedSymbol],
    placement: Placement,
) -> None:
    """Validate the public inputs of :func:`tilekit.placer.place_symbols`."""
    _check_tile_size(tile_size)
    _check_placement(placement)
    for s in symbols:
        _check_weight(f"symbols.{s.id}.weight", s.weight)
        _check_rotation_range(f"symbols.{s.id}.rotation_range_degrees", s.rotation_range_degrees)
        if s.scale_range is not None:
            _check_scale_range(f"symbols.{s.id}.scale_range", s.scale_range)
        _check_shape(f"symbols.{s.id}.collision_shape", s.collision_shape)
    _check_unique([s.id for s in symbols])
    for p in pinned_symbols:
        _check_scale(f"pinned.{p.id}.scale", p.scale)
        if not _finite(p.rotation_degrees, *p.position.resolved_point(tile_size)):
            raise InvalidConfiguration(f"pinned.{p.id}", "position and rotation must be finite")
        _check_shape(f"pinned.{p.id}.collision_shape", p.collision_shape)


def validate_descriptors(
    tile_size: Size,
    symbols: Sequence[PlacementSymbolDescriptor],
    pinned: Sequence[PinnedSymbolDescriptor],
    placement: Placement,
) -> None:
    """Validate already-resolved engine descriptors."""
    _check_tile_size(tile_size)
    _check_placement(placement)
    for s in symbols:
        _check_weight(f"symbols.{s.id}.weight", s.weight)
        _check_rotation_range(
            f"symbols.{s.id}.allowed_rotation_range_degrees", s.allowed_rotation_range_degrees,
        )
        _check_scale_range(f"symbols.{s.id}.resolved_scale_range", s.resolved_scale_range)
        _check_shape(f"symbols.{s.id}.collision_shape", s.collision_shape)
    _check_unique([s.id for s in symbols])
    for p in pinned:
        _check_scale(f"pinned.{p.id}.scale", p.scale)
        if not _finite(p.rotation_radians, *p.position):
            raise InvalidConfiguration(f"pinned.{p.id}", "position and rotation must be finite")
        _check_shape(f"pinned.{p.id}.collision_shape", p.collision_shape)
