"""Dense array views of a finalized grid and summary statistics."""

from __future__ import annotations

from typing import Dict

import numpy as np

from .models import Side
from .tile_grid import TileGrid
from .valuation import valuation

SIDE_BITS: dict[Side, int] = {
    Side.TOP: 1,
    Side.RIGHT: 2,
    Side.BOTTOM: 4,
    Side.LEFT: 8,
}

_VERTICAL = SIDE_BITS[Side.TOP] | SIDE_BITS[Side.BOTTOM]
_HORIZONTAL = SIDE_BITS[Side.LEFT] | SIDE_BITS[Side.RIGHT]


def edge_mask_array(grid: TileGrid) -> np.ndarray:
    """``[y, x]`` array of side bit flags covering the inclusive grid extent.

    Tiles stored outside ``[0, width_in_tiles] x [0, height_in_tiles]`` are
    not represented.
    """
    mask = np.zeros((grid.height_in_tiles + 1, grid.width_in_tiles + 1), dtype=np.uint8)
    for tile in grid.non_empty_tiles():
        if not grid.in_bounds(tile.x, tile.y):
            continue
        bits = 0
        for side in tile.edges.sides():
            bits |= SIDE_BITS[side]
        mask[tile.y, tile.x] = bits
    return mask


def degree_array(mask: np.ndarray) -> np.ndarray:
    bits = np.unpackbits(mask[..., np.newaxis], axis=-1)
    return bits.sum(axis=-1).astype(np.int64)


def valuation_array(grid: TileGrid) -> np.ndarray:
    values = np.zeros((grid.height_in_tiles + 1, grid.width_in_tiles + 1), dtype=np.int64)
    for tile in grid.non_empty_tiles():
        if grid.in_bounds(tile.x, tile.y):
            values[tile.y, tile.x] = valuation(tile, grid)
    return values


def network_statistics(grid: TileGrid) -> Dict[str, int]:
    mask = edge_mask_array(grid)
    degree = degree_array(mask)
    straight = (mask == _VERTICAL) | (mask == _HORIZONTAL)
    dead_end_count = sum(1 for tile in grid.non_empty_tiles() if tile.is_dead_end)
    return {
        "tiles": int(np.count_nonzero(mask)),
        "dead_ends": dead_end_count,
        "straights": int(np.count_nonzero(straight)),
        "turns": int(np.count_nonzero((degree == 2) & ~straight)),
        "junctions": int(np.count_nonzero(degree >= 3)),
        "stubs": int(np.count_nonzero(degree == 1)),
        "edges": int(degree.sum()),
    }


__all__ = [
    "SIDE_BITS",
    "degree_array",
    "edge_mask_array",
    "network_statistics",
    "valuation_array",
]
