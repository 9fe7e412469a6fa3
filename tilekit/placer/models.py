"""Placer dataclasses: public configuration, internal descriptors and errors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from tilekit.config import PLACEMENT_RULES
from tilekit.geometry.collision import CollisionPolygon, CollisionTransform
from tilekit.geometry.shapes import CollisionShape, UnitPoint, CENTER, TOP_LEADING, \
    TOP, TOP_TRAILING, LEADING, TRAILING, BOTTOM_LEADING, BOTTOM, BOTTOM_TRAILING


Size = tuple[float, float]           # (width, height)
Range = tuple[float, float]          # closed (low, high)


class InvalidConfiguration(ValueError):
    """Raised when the caller violates a placement precondition."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class EdgeBehavior(Enum):
    FINITE = "finite"
    SEAMLESS_WRAPPING = "seamless_wrapping"


# ── Pinned positions ───────────────────────────────────────────────


@dataclass(frozen=True)
class AbsolutePosition:
    """Absolute point in tile coordinates (origin top-left)."""

    x: float
    y: float

    def resolved_point(self, tile_size: Size) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class RelativePosition:
    """Unit point within the tile plus an offset in tile units."""

    unit: UnitPoint
    offset: tuple[float, float] = (0.0, 0.0)

    def resolved_point(self, tile_size: Size) -> tuple[float, float]:
        return (
            self.unit[0] * tile_size[0] + self.offset[0],
            self.unit[1] * tile_size[1] + self.offset[1],
        )

    @classmethod
    def centered(cls, offset: tuple[float, float] = (0.0, 0.0)) -> "RelativePosition":
        return cls(CENTER, offset)

    @classmethod
    def top_leading(cls, offset: tuple[float, float] = (0.0, 0.0)) -> "RelativePosition":
        return cls(TOP_LEADING, offset)

    @classmethod
    def top(cls, offset: tuple[float, float] = (0.0, 0.0)) -> "RelativePosition":
        return cls(TOP, offset)

    @classmethod
    def top_trailing(cls, offset: tuple[float, float] = (0.0, 0.0)) -> "RelativePosition":
        return cls(TOP_TRAILING, offset)

    @classmethod
    def leading(cls, offset: tuple[float, float] = (0.0, 0.0)) -> "RelativePosition":
        return cls(LEADING, offset)

    @classmethod
    def trailing(cls, offset: tuple[float, float] = (0.0, 0.0)) -> "RelativePosition":
        return cls(TRAILING, offset)

    @classmethod
    def bottom_leading(cls, offset: tuple[float, float] = (0.0, 0.0)) -> "RelativePosition":
        return cls(BOTTOM_LEADING, offset)

    @classmethod
    def bottom(cls, offset: tuple[float, float] = (0.0, 0.0)) -> "RelativePosition":
        return cls(BOTTOM, offset)

    @classmethod
    def bottom_trailing(cls, offset: tuple[float, float] = (0.0, 0.0)) -> "RelativePosition":
        return cls(BOTTOM_TRAILING, offset)


PlacementPosition = Union[AbsolutePosition, RelativePosition]


# ── Public symbol definitions ──────────────────────────────────────


@dataclass(frozen=True)
class Symbol:
    """A placeable, weighted candidate.

    The visual content lives outside the engine; *id* is the handle the
    caller uses to resolve it.
    """

    id: str
    collision_shape: CollisionShape
    weight: float = 1.0
    rotation_range_degrees: Range = (0.0, 360.0)
    scale_range: Range | None = None    # None = placement-mode default


@dataclass(frozen=True)
class PinnedSymbol:
    """A symbol at a fixed position; an obstacle, never resampled."""

    id: str
    collision_shape: CollisionShape
    position: PlacementPosition
    rotation_degrees: float = 0.0
    scale: float = 1.0


# ── Placement configuration ────────────────────────────────────────


@dataclass(frozen=True)
class OrganicPlacement:
    """Rejection sampling with a density-derived target count."""

    minimum_spacing: float
    density: float = PLACEMENT_RULES.default_density
    base_scale_range: Range = PLACEMENT_RULES.default_base_scale_range
    maximum_symbol_count: int = PLACEMENT_RULES.default_maximum_symbol_count
    seed: int = 0                       # only used when no generator is passed


@dataclass(frozen=True)
class GridOffsetStrategy:
    kind: str = "none"                  # "none" | "row_shift" | "column_shift" | "checker_shift"
    fraction: float = 0.0

    @classmethod
    def none(cls) -> "GridOffsetStrategy":
        return cls()

    @classmethod
    def row_shift(cls, fraction: float) -> "GridOffsetStrategy":
        """Shift odd rows along x by *fraction* of the cell width."""
        return cls("row_shift", fraction)

    @classmethod
    def column_shift(cls, fraction: float) -> "GridOffsetStrategy":
        """Shift odd columns along y by *fraction* of the cell height."""
        return cls("column_shift", fraction)

    @classmethod
    def checker_shift(cls, fraction: float) -> "GridOffsetStrategy":
        """Shift cells with odd row+column diagonally."""
        return cls("checker_shift", fraction)

    @property
    def requires_even_rows(self) -> bool:
        return self.kind in ("row_shift", "checker_shift")

    @property
    def requires_even_columns(self) -> bool:
        return self.kind in ("column_shift", "checker_shift")


OFFSET_KINDS = ("none", "row_shift", "column_shift", "checker_shift")


class GridSymbolOrder(Enum):
    SEQUENCE = "sequence"               # symbols in list order, repeating


@dataclass(frozen=True)
class GridPlacement:
    """Deterministic row-major layout."""

    column_count: int
    row_count: int
    offset_strategy: GridOffsetStrategy = field(default_factory=GridOffsetStrategy)
    symbol_order: GridSymbolOrder = GridSymbolOrder.SEQUENCE


Placement = Union[OrganicPlacement, GridPlacement]


# ── Engine descriptors ─────────────────────────────────────────────


@dataclass(frozen=True)
class PlacementSymbolDescriptor:
    """A symbol with its scale range already resolved for the placement mode."""

    id: str
    weight: float
    allowed_rotation_range_degrees: Range
    resolved_scale_range: Range
    collision_shape: CollisionShape


@dataclass(frozen=True)
class PinnedSymbolDescriptor:
    id: str
    position: tuple[float, float]
    rotation_radians: float
    scale: float
    collision_shape: CollisionShape

    @property
    def collision_transform(self) -> CollisionTransform:
        return CollisionTransform(self.position, self.rotation_radians, self.scale)


@dataclass(frozen=True)
class PlacedSymbolDescriptor:
    """A symbol accepted into the tile."""

    symbol_id: str
    position: tuple[float, float]
    rotation_radians: float
    scale: float
    collision_shape: CollisionShape

    @property
    def collision_transform(self) -> CollisionTransform:
        return CollisionTransform(self.position, self.rotation_radians, self.scale)


@dataclass
class PlacedCollider:
    """Collision data of an accepted or pinned symbol, stored in the spatial hash."""

    collision_shape: CollisionShape
    collision_transform: CollisionTransform
    polygons: tuple[CollisionPolygon, ...]
    bounding_radius: float


@dataclass(frozen=True)
class CellCoordinate:
    column: int
    row: int


@dataclass(frozen=True)
class ResolvedGrid:
    column_count: int
    row_count: int
    cell_size: Size

    @property
    def total_cell_count(self) -> int:
        return self.column_count * self.row_count


@dataclass(frozen=True)
class PlacedSymbol:
    """A placed descriptor resolved back to its public symbol."""

    symbol: Symbol
    position: tuple[float, float]
    rotation_radians: float
    scale: float
