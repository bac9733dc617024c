"""Generation pipeline: grammar, interpreter, then repair."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from .config import GenerationSettings, settings_from_config
from .interpreter import Diagnostic, interpret
from .lsystem import LSystem
from .models import Direction
from .repair import RepairReport, repair
from .rng import DeterministicRNG, get_rng
from .tile_grid import DEFAULT_TILE_SIZE, TileGrid

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    grid: TileGrid
    instructions: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    repair_report: RepairReport = field(default_factory=RepairReport)
    seed: int | None = None


def build_road_network(
    instructions: str,
    *,
    width_in_tiles: int,
    height_in_tiles: int,
    start_tile: tuple[int, int] | None = None,
    start_direction: Direction = Direction.DOWN,
    tile_size: int = DEFAULT_TILE_SIZE,
    strict: bool = False,
) -> GenerationResult:
    """Turn one instruction string into a finalized, repaired grid."""
    grid = TileGrid(
        tile_width=tile_size,
        tile_height=tile_size,
        width_in_tiles=width_in_tiles,
        height_in_tiles=height_in_tiles,
    )
    if start_tile is None:
        start_tile = (width_in_tiles // 2, height_in_tiles // 2)
    diagnostics = interpret(
        instructions, grid, start_tile, start_direction, strict=strict
    )
    # Repair runs whatever the interpreter reported.
    report = repair(grid)
    return GenerationResult(
        grid=grid,
        instructions=instructions,
        diagnostics=diagnostics,
        repair_report=report,
    )


def generate_road_network(
    settings: GenerationSettings | None = None,
    *,
    rng: DeterministicRNG | None = None,
) -> GenerationResult:
    """Produce a fresh road network from the configured grammar."""
    settings = settings or settings_from_config()
    if rng is None:
        rng = DeterministicRNG(settings.seed) if settings.seed is not None else get_rng()

    started = time.perf_counter()
    grammar = LSystem(settings.axiom, settings.productions, rng=rng)
    instructions = grammar.iterate(settings.iterations)
    result = build_road_network(
        instructions,
        width_in_tiles=settings.width_in_tiles,
        height_in_tiles=settings.height_in_tiles,
        start_tile=settings.start_tile,
        start_direction=settings.start_direction,
        tile_size=settings.tile_size,
        strict=settings.strict,
    )
    result.seed = rng._seed_value
    logger.info(
        "Generated %d tile(s) from %d instruction(s) in %.3fs (seed=%s, %d diagnostic(s))",
        len(result.grid),
        len(instructions),
        time.perf_counter() - started,
        result.seed,
        len(result.diagnostics),
    )
    return result


__all__ = ["GenerationResult", "build_road_network", "generate_road_network"]
