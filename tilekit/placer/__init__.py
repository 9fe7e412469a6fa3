"""Placer — fills a tile with non-overlapping symbols.

Submodules:
  models        Public configuration, descriptors and the error type.
  validation    Precondition checks raising InvalidConfiguration.
  wrapping      Periodic offsets and nearest-image helpers for seamless tiles.
  spatial_hash  Uniform bucket grid for neighbour queries.
  validity      Wrap-aware collision test for one candidate.
  organic       Weighted rejection sampling (seeded).
  grid          Deterministic row-major layout with brick offsets.
  engine        Dispatcher (place_symbols, place_symbol_descriptors).
  seeded        SplitMix64 generator (SeededGenerator).
  serialization JSON conversion (placement_to_dict, parse_placement).
"""

from .models import (
    EdgeBehavior, InvalidConfiguration,
    AbsolutePosition, RelativePosition,
    Symbol, PinnedSymbol, PlacedSymbol,
    OrganicPlacement, GridPlacement, GridOffsetStrategy, GridSymbolOrder,
    PlacementSymbolDescriptor, PinnedSymbolDescriptor, PlacedSymbolDescriptor,
)
from .engine import place_symbols, place_symbol_descriptors, resolve_placed_symbols
from .organic import place_organic
from .grid import place_grid, resolve_grid
from .seeded import SeededGenerator
from .serialization import placement_to_dict, parse_placement, shape_to_dict, parse_shape

__all__ = [
    # Models
    "EdgeBehavior", "InvalidConfiguration",
    "AbsolutePosition", "RelativePosition",
    "Symbol", "PinnedSymbol", "PlacedSymbol",
    "OrganicPlacement", "GridPlacement", "GridOffsetStrategy", "GridSymbolOrder",
    "PlacementSymbolDescriptor", "PinnedSymbolDescriptor", "PlacedSymbolDescriptor",
    # Engines
    "place_symbols", "place_symbol_descriptors", "resolve_placed_symbols",
    "place_organic", "place_grid", "resolve_grid",
    # Randomness
    "SeededGenerator",
    # Serialization
    "placement_to_dict", "parse_placement", "shape_to_dict", "parse_shape",
]
