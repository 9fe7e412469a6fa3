"""Shared placement constants for the tiling engine.

Both placement engines (organic and grid) and the collision layer read
their tuning values from this single source of truth.  Change a value
here and every stage stays in sync automatically.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlacementRules:
    """Constants governing shape placement.

    Distances are in tile units (the same units as the tile size).
    """

    max_placement_attempts: int = 20
    """Positional attempts per symbol instance before it is dropped."""

    circle_subdivisions: int = 12
    """Edge count of the polygon that stands in for a circle during SAT.
    The polygon circumscribes the circle, so it never under-reports."""

    min_circle_subdivisions: int = 6

    default_density: float = 0.5
    default_base_scale_range: tuple[float, float] = (0.9, 1.1)
    default_maximum_symbol_count: int = 512

    grid_scale_range: tuple[float, float] = (1.0, 1.0)
    """Scale range used in grid mode when a symbol declares none."""

    zero_seed_replacement: int = 0x1234_5678_9ABC_DEF0
    """SplitMix64 would emit a weak stream from state 0."""

    convexity_epsilon: float = 1e-9
    """Tolerance for cross products when classifying a corner as convex."""

    shape_cache_size: int = 1024
    """Distinct shapes kept by the normalization and decomposition caches."""

    # ── Derived helpers ────────────────────────────────────────────

    @property
    def effective_circle_subdivisions(self) -> int:
        return max(self.circle_subdivisions, self.min_circle_subdivisions)


# Module-level singleton.
PLACEMENT_RULES = PlacementRules()
