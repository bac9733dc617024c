"""Post-processing that makes every road edge either connect or end cleanly."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .models import EdgeSet, Tile
from .tile_grid import TileGrid

logger = logging.getLogger(__name__)


@dataclass
class RepairReport:
    junction_edges: int = 0
    caps_created: int = 0
    merged_caps: int = 0
    uncapped_edges: int = 0


def connect_junctions(grid: TileGrid, report: RepairReport | None = None) -> int:
    """Reciprocate edges that run into a through-road.

    A vertical edge meeting a horizontal through-road (or the reverse) turns
    that road into a T or cross junction. Stubs are never joined to stubs.
    """
    added = 0
    for x, y in grid.coords():
        tile = grid.get(x, y)
        if tile is None or tile.is_empty():
            continue
        for side in tile.edges.sides():
            neighbor = grid.neighbor(x, y, side)
            if neighbor is None or neighbor.is_empty():
                continue
            if not neighbor.edges.is_through_road():
                continue
            back = side.opposite
            if not neighbor.edges.has(back):
                neighbor.edges = neighbor.edges.with_side(back)
                added += 1
    if report is not None:
        report.junction_edges += added
    return added


def cap_dead_ends(grid: TileGrid, report: RepairReport | None = None) -> int:
    """Close every edge that points at nothing with a cul-de-sac tile."""
    report = report if report is not None else RepairReport()
    capped: set[tuple[int, int]] = set()
    for x, y in grid.coords():
        tile = grid.get(x, y)
        if tile is None or tile.is_empty():
            continue
        for side in tile.edges.sides():
            nx, ny = grid.neighbor_coords(x, y, side)
            if not grid.in_bounds(nx, ny):
                report.uncapped_edges += 1
                continue
            neighbor = grid.get(nx, ny)
            back = side.opposite
            if neighbor is None or neighbor.is_empty():
                grid.set(nx, ny, Tile(nx, ny, EdgeSet.only(back), is_dead_end=True))
                capped.add((nx, ny))
                report.caps_created += 1
            elif (nx, ny) in capped and not neighbor.edges.has(back):
                # Two stubs closing on the same synthesized tile join there.
                neighbor.edges = neighbor.edges.with_side(back)
                neighbor.is_dead_end = False
                report.merged_caps += 1
    return report.caps_created


def repair(grid: TileGrid) -> RepairReport:
    report = RepairReport()
    connect_junctions(grid, report)
    cap_dead_ends(grid, report)
    logger.debug(
        "Repair added %d junction edge(s), %d dead end(s), merged %d, "
        "left %d edge(s) running off the grid",
        report.junction_edges,
        report.caps_created,
        report.merged_caps,
        report.uncapped_edges,
    )
    return report


__all__ = ["RepairReport", "cap_dead_ends", "connect_junctions", "repair"]
