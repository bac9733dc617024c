"""Command line entry point: generate a road network and report on it."""

from __future__ import annotations

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Any, Sequence

from .__about__ import __version__
from .analysis import network_statistics
from .config import load_config, save_config, settings_from_config
from .generation import GenerationResult, build_road_network, generate_road_network
from .interpreter import InterpretError
from .lsystem import GrammarError
from .render import export_road_image
from .valuation import valuation_at


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roadsystem",
        description="Generate a tile road network from an L-system grammar.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, help="JSON config file (defaults to the user config).")
    parser.add_argument("--seed", type=int, help="Seed for repeatable grammar rewriting.")
    parser.add_argument("--iterations", type=int, help="Grammar rewrite rounds.")
    parser.add_argument("--width", type=int, help="Grid width in tiles.")
    parser.add_argument("--height", type=int, help="Grid height in tiles.")
    parser.add_argument(
        "--instructions",
        help="Interpret this instruction string instead of running the grammar.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on an unmatched ']' instead of reporting it.",
    )
    parser.add_argument(
        "--value",
        nargs=2,
        type=int,
        metavar=("X", "Y"),
        help="Print the valuation of the tile at X Y.",
    )
    parser.add_argument("--export", type=Path, help="Write the network to an image file.")
    parser.add_argument("--scale", type=int, default=1, help="Image scale factor.")
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Write the effective config back to the config file.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def _apply_overrides(config: dict[str, Any], args: argparse.Namespace) -> dict[str, Any]:
    if args.seed is not None:
        config["generation"]["seed"] = args.seed
    if args.iterations is not None:
        config["grammar"]["iterations"] = args.iterations
    if args.width is not None:
        config["grid"]["width_in_tiles"] = args.width
    if args.height is not None:
        config["grid"]["height_in_tiles"] = args.height
    if args.strict:
        config["generation"]["strict"] = True
    return config


def _report(result: GenerationResult) -> None:
    stats = network_statistics(result.grid)
    print(f"seed: {result.seed}")
    print(f"instructions: {len(result.instructions)}")
    for key, value in stats.items():
        print(f"{key}: {value}")
    kinds = Counter(diagnostic.kind.value for diagnostic in result.diagnostics)
    for kind, count in sorted(kinds.items()):
        print(f"diagnostic {kind}: {count}")


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(asctime)s] - [%(name)s] - [%(levelname)s] - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    config, config_path = load_config(args.config)
    config = _apply_overrides(config, args)
    try:
        settings = settings_from_config(config)
        if args.instructions is not None:
            result = build_road_network(
                args.instructions,
                width_in_tiles=settings.width_in_tiles,
                height_in_tiles=settings.height_in_tiles,
                start_tile=settings.start_tile,
                start_direction=settings.start_direction,
                tile_size=settings.tile_size,
                strict=settings.strict,
            )
        else:
            result = generate_road_network(settings)
    except (GrammarError, InterpretError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    _report(result)
    if args.value is not None:
        x, y = args.value
        print(f"valuation ({x}, {y}): {valuation_at(result.grid, x, y)}")
    if args.export is not None:
        path = export_road_image(result.grid, args.export, scale=max(1, args.scale))
        print(f"exported: {path}")
    if args.save_config:
        save_config(config, config_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
