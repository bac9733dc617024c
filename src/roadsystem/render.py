from __future__ import annotations

from pathlib import Path
from typing import Callable

import pygame
from pygame import surface

from .models import Side, Tile
from .tile_grid import TileGrid

# Palette
GRASS_COLOR: tuple[int, int, int] = (48, 255, 112)
ROAD_COLOR: tuple[int, int, int] = (0, 0, 0)
DEAD_END_COLOR: tuple[int, int, int] = (60, 60, 60)

ROAD_LINE_WIDTH = 5

TileCallback = Callable[[Tile, pygame.Rect], None]


def tile_rect(grid: TileGrid, x: int, y: int, *, offset: tuple[int, int] = (0, 0)) -> pygame.Rect:
    """Pixel rectangle covered by cell ``(x, y)``; derived, never stored."""
    return pygame.Rect(
        offset[0] + x * grid.tile_width,
        offset[1] + y * grid.tile_height,
        grid.tile_width,
        grid.tile_height,
    )


def side_midpoint(rect: pygame.Rect, side: Side) -> tuple[int, int]:
    if side == Side.TOP:
        return rect.midtop
    if side == Side.BOTTOM:
        return rect.midbottom
    if side == Side.LEFT:
        return rect.midleft
    return rect.midright


def draw_tile(
    target: surface.Surface,
    tile: Tile,
    rect: pygame.Rect,
    *,
    color: tuple[int, int, int] = ROAD_COLOR,
    dead_end_color: tuple[int, int, int] = DEAD_END_COLOR,
    line_width: int = ROAD_LINE_WIDTH,
) -> None:
    if tile.is_empty():
        return
    width = max(1, min(line_width, rect.width, rect.height))
    edges = tile.edges
    if edges.top and edges.bottom:
        pygame.draw.line(target, color, rect.midtop, rect.midbottom, width)
    if edges.left and edges.right:
        pygame.draw.line(target, color, rect.midleft, rect.midright, width)
    for side in edges.sides():
        # Half segments for edges not covered by a straight run.
        if edges.has(side.opposite):
            continue
        pygame.draw.line(target, color, rect.center, side_midpoint(rect, side), width)
    if tile.is_dead_end:
        radius = max(1, min(rect.width, rect.height) // 3)
        pygame.draw.circle(target, dead_end_color, rect.center, radius)


def draw_road_network(
    target: surface.Surface,
    grid: TileGrid,
    *,
    offset: tuple[int, int] = (0, 0),
    background: tuple[int, int, int] | None = GRASS_COLOR,
    color: tuple[int, int, int] = ROAD_COLOR,
    line_width: int = ROAD_LINE_WIDTH,
    on_tile: TileCallback | None = None,
) -> int:
    """Draw every non-empty tile; returns how many were drawn."""
    if background is not None:
        target.fill(background)
    drawn = 0
    for tile in grid.non_empty_tiles():
        rect = tile_rect(grid, tile.x, tile.y, offset=offset)
        draw_tile(target, tile, rect, color=color, line_width=line_width)
        if on_tile is not None:
            on_tile(tile, rect)
        drawn += 1
    return drawn


def surface_size(grid: TileGrid) -> tuple[int, int]:
    # Tile counts are inclusive bounds, so the far row and column are drawable.
    return (
        (grid.width_in_tiles + 1) * grid.tile_width,
        (grid.height_in_tiles + 1) * grid.tile_height,
    )


def render_road_network(grid: TileGrid, **kwargs) -> surface.Surface:
    target = pygame.Surface(surface_size(grid))
    draw_road_network(target, grid, **kwargs)
    return target


def export_road_image(grid: TileGrid, path: Path, *, scale: int = 1) -> Path:
    image = render_road_network(grid)
    if scale != 1:
        width, height = image.get_size()
        image = pygame.transform.scale(image, (width * scale, height * scale))
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    pygame.image.save(image, str(path))
    return path


__all__ = [
    "draw_road_network",
    "draw_tile",
    "export_road_image",
    "render_road_network",
    "side_midpoint",
    "surface_size",
    "tile_rect",
]
