from __future__ import annotations

import copy
from typing import Callable, Iterator

from .models import Side, Tile

DEFAULT_TILE_SIZE = 10


class TileGrid:
    """Sparse mapping of ``(x, y)`` cells to road tiles.

    ``width_in_tiles`` and ``height_in_tiles`` are advisory: the interpreter
    clamps movement to them and the repair pass uses them to decide whether a
    neighbor may be capped, but the grid itself stores any coordinate and
    reports absent for lookups it does not hold.
    """

    def __init__(
        self,
        *,
        tile_width: int = DEFAULT_TILE_SIZE,
        tile_height: int = DEFAULT_TILE_SIZE,
        width_in_tiles: int,
        height_in_tiles: int,
    ) -> None:
        if tile_width <= 0 or tile_height <= 0:
            raise ValueError("Tile size must be positive")
        if width_in_tiles < 0 or height_in_tiles < 0:
            raise ValueError("Tile counts must not be negative")
        self.tile_width = int(tile_width)
        self.tile_height = int(tile_height)
        self.width_in_tiles = int(width_in_tiles)
        self.height_in_tiles = int(height_in_tiles)
        self._tiles: dict[tuple[int, int], Tile] = {}

    @classmethod
    def from_pixel_size(
        cls, width: float, height: float, *, tile_size: int = DEFAULT_TILE_SIZE
    ) -> TileGrid:
        return cls(
            tile_width=tile_size,
            tile_height=tile_size,
            width_in_tiles=int(width // tile_size),
            height_in_tiles=int(height // tile_size),
        )

    def __len__(self) -> int:
        return len(self._tiles)

    def __contains__(self, cell: object) -> bool:
        return cell in self._tiles

    def get(self, x: int, y: int) -> Tile | None:
        return self._tiles.get((x, y))

    def set(self, x: int, y: int, tile: Tile) -> None:
        tile.x = x
        tile.y = y
        self._tiles[(x, y)] = tile

    def has(self, x: int, y: int) -> bool:
        return (x, y) in self._tiles

    def is_non_empty(self, x: int, y: int) -> bool:
        tile = self._tiles.get((x, y))
        return tile is not None and tile.is_non_empty()

    def neighbor_coords(self, x: int, y: int, side: Side) -> tuple[int, int]:
        dx, dy = side.offset
        return x + dx, y + dy

    def neighbor(self, x: int, y: int, side: Side) -> Tile | None:
        return self.get(*self.neighbor_coords(x, y, side))

    def in_bounds(self, x: int, y: int) -> bool:
        # Inclusive on the far edge, matching the interpreter's clamp range.
        return 0 <= x <= self.width_in_tiles and 0 <= y <= self.height_in_tiles

    def clamp(self, x: int, y: int) -> tuple[int, int]:
        return (
            min(self.width_in_tiles, max(0, x)),
            min(self.height_in_tiles, max(0, y)),
        )

    def coords(self) -> list[tuple[int, int]]:
        """Occupied cells ordered by ascending x, then ascending y."""
        return sorted(self._tiles)

    def tiles(self) -> Iterator[Tile]:
        for cell in self.coords():
            yield self._tiles[cell]

    def non_empty_tiles(self) -> Iterator[Tile]:
        for tile in self.tiles():
            if tile.is_non_empty():
                yield tile

    def for_each_tile(self, fn: Callable[[Tile], None]) -> None:
        for tile in self.tiles():
            fn(tile)

    def copy(self) -> TileGrid:
        return copy.deepcopy(self)

    def snapshot(self) -> dict[tuple[int, int], tuple[tuple[bool, ...], bool]]:
        """Plain-value view of every tile, handy for equality checks."""
        return {
            cell: (
                (tile.edges.top, tile.edges.right, tile.edges.bottom, tile.edges.left),
                tile.is_dead_end,
            )
            for cell, tile in sorted(self._tiles.items())
        }


__all__ = ["DEFAULT_TILE_SIZE", "TileGrid"]
