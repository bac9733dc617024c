from __future__ import annotations

from .models import Tile
from .tile_grid import TileGrid

NEARBY_HOUSES = 2
PROPERTY_TAX_PER_HOUSE = 200
SERVICE_REVENUE_PER_TILE = 50
SERVICE_RADIUS = 5


def reachable_within(
    grid: TileGrid, origin: tuple[int, int], max_steps: int
) -> int:
    """Count distinct tiles (origin excluded) within ``max_steps`` road hops."""
    if max_steps <= 0 or not grid.is_non_empty(*origin):
        return 0
    visited = {origin}
    frontier = [origin]
    for _ in range(max_steps):
        next_frontier: list[tuple[int, int]] = []
        for x, y in frontier:
            tile = grid.get(x, y)
            if tile is None:
                continue
            for side in tile.edges.sides():
                cell = grid.neighbor_coords(x, y, side)
                if cell in visited or not grid.is_non_empty(*cell):
                    continue
                visited.add(cell)
                next_frontier.append(cell)
        if not next_frontier:
            break
        frontier = next_frontier
    return len(visited) - 1


def valuation(tile: Tile, grid: TileGrid) -> int:
    """Yearly value of a road tile: property tax plus service revenue."""
    if not grid.is_non_empty(tile.x, tile.y):
        return 0
    reachable = reachable_within(grid, tile.coords, SERVICE_RADIUS)
    return NEARBY_HOUSES * PROPERTY_TAX_PER_HOUSE + SERVICE_REVENUE_PER_TILE * reachable


def valuation_at(grid: TileGrid, x: int, y: int) -> int:
    tile = grid.get(x, y)
    if tile is None:
        return 0
    return valuation(tile, grid)


__all__ = [
    "NEARBY_HOUSES",
    "PROPERTY_TAX_PER_HOUSE",
    "SERVICE_RADIUS",
    "SERVICE_REVENUE_PER_TILE",
    "reachable_within",
    "valuation",
    "valuation_at",
]
