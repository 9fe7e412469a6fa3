"""Toroidal wrap helpers for periodic offsets and wrapped index math."""

from __future__ import annotations

import math

from .models import EdgeBehavior, Size


def wrap_offsets(tile_size: Size, edge_behavior: EdgeBehavior) -> list[tuple[float, float]]:
    """Offsets at which a collider's periodic images are tested.

    Finite tiles need only the identity; seamless tiles need the full
    3×3 lattice (identity first).
    """
    if edge_behavior is EdgeBehavior.FINITE:
        return [(0.0, 0.0)]
    w, h = tile_size
    return [
        (0.0, 0.0),
        (w, 0.0),
        (-w, 0.0),
        (0.0, h),
        (0.0, -h),
        (w, h),
        (w, -h),
        (-w, h),
        (-w, -h),
    ]


def wrapped_index(index: int, modulus: int) -> int:
    """Wrap a grid index into ``[0, modulus)``."""
    if modulus <= 0:
        return 0
    return index % modulus


def wrapped_coordinate(value: float, modulus: float) -> float:
    """Wrap a coordinate into ``[0, modulus)``."""
    if modulus <= 0:
        return 0.0
    remainder = math.fmod(value, modulus)
    if remainder < 0:
        remainder += modulus
    # A tiny negative value plus the modulus can round up to the modulus.
    if remainder >= modulus:
        remainder -= modulus
    return remainder


def wrapped_position(position: tuple[float, float], tile_size: Size) -> tuple[float, float]:
    return (
        wrapped_coordinate(position[0], tile_size[0]),
        wrapped_coordinate(position[1], tile_size[1]),
    )


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def nearest_periodic_offset(
    from_position: tuple[float, float],
    to_position: tuple[float, float],
    tile_size: Size,
    edge_behavior: EdgeBehavior = EdgeBehavior.SEAMLESS_WRAPPING,
) -> tuple[float, float]:
    """Lattice offset moving *from_position* to its image nearest *to_position*.

    Exact whenever the interaction distance is below half the tile's
    smaller dimension; callers fall back to :func:`wrap_offsets` otherwise.
    """
    if edge_behavior is EdgeBehavior.FINITE:
        return (0.0, 0.0)
    w, h = tile_size
    if w <= 0 or h <= 0:
        return (0.0, 0.0)
    dx = to_position[0] - from_position[0]
    dy = to_position[1] - from_position[1]
    return (_round_half_away(dx / w) * w, _round_half_away(dy / h) * h)


def uses_nearest_periodic_image(
    buffered_distance: float,
    tile_size: Size,
    edge_behavior: EdgeBehavior,
) -> bool:
    """Whether a single nearest image is enough for this interaction range.

    Finite tiles have exactly one image.  Seamless tiles qualify while the
    buffered distance stays below half the smaller tile dimension, so no
    second image along either axis can come within range.
    """
    if edge_behavior is EdgeBehavior.FINITE:
        return True
    return buffered_distance < min(tile_size) / 2
