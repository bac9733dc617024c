import json
import logging
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

from platformdirs import user_config_dir

from .lsystem import ROAD_AXIOM, ROAD_ITERATIONS, ROAD_PRODUCTIONS
from .models import Direction
from .tile_grid import DEFAULT_TILE_SIZE

APP_NAME = "RoadSystem"

logger = logging.getLogger(__name__)

# Defaults for all configurable options
DEFAULT_CONFIG: Dict[str, Any] = {
    "grammar": {
        "axiom": ROAD_AXIOM,
        "productions": ROAD_PRODUCTIONS,
        "iterations": ROAD_ITERATIONS,
    },
    "grid": {"tile_size": DEFAULT_TILE_SIZE, "width_in_tiles": 40, "height_in_tiles": 30},
    "start": {"direction": "down", "tile": None},
    "generation": {"seed": None, "strict": False},
}


@dataclass(frozen=True)
class GenerationSettings:
    axiom: str
    productions: Dict[str, Any]
    iterations: int
    tile_size: int
    width_in_tiles: int
    height_in_tiles: int
    start_tile: Tuple[int, int]
    start_direction: Direction
    seed: int | None = None
    strict: bool = False


def user_config_path() -> Path:
    """Return the platform-specific config file path."""
    return Path(user_config_dir(APP_NAME, APP_NAME)) / "config.json"


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge dictionaries, with override winning on conflicts."""
    merged: Dict[str, Any] = deepcopy(base)
    for key, val in override.items():
        if isinstance(val, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], val)
        else:
            merged[key] = val
    return merged


def load_config(path: Path | None = None) -> Tuple[Dict[str, Any], Path]:
    """Load config from disk, falling back to defaults on errors."""
    config_path = path or user_config_path()
    config: Dict[str, Any] = deepcopy(DEFAULT_CONFIG)

    try:
        if config_path.exists():
            loaded = json.loads(config_path.read_text(encoding="utf-8"))
            if isinstance(loaded, dict):
                config = _deep_merge(config, loaded)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Failed to load config (%s): %s", config_path, exc)

    return config, config_path


def save_config(config: Dict[str, Any], path: Path | None = None) -> None:
    """Persist config to disk, creating parent dirs as needed."""
    config_path = path or user_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    except Exception as exc:  # noqa: BLE001
        logger.warning("Failed to save config (%s): %s", config_path, exc)


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


def _positive_int(value: Any, name: str) -> int:
    number = _as_int(value, name)
    if number <= 0:
        raise ValueError(f"{name} must be positive, got {number}")
    return number


def settings_from_config(config: Dict[str, Any] | None = None) -> GenerationSettings:
    """Validate a (possibly partial) config dict into generation settings."""
    merged = _deep_merge(DEFAULT_CONFIG, config or {})
    grammar = merged["grammar"]
    grid = merged["grid"]
    start = merged["start"]
    generation = merged["generation"]

    iterations = _as_int(grammar.get("iterations", ROAD_ITERATIONS), "grammar.iterations")
    if iterations < 0:
        raise ValueError(f"grammar.iterations must be >= 0, got {iterations}")
    width_in_tiles = _positive_int(grid.get("width_in_tiles"), "grid.width_in_tiles")
    height_in_tiles = _positive_int(grid.get("height_in_tiles"), "grid.height_in_tiles")

    start_tile = start.get("tile")
    if start_tile is None:
        start_xy = (width_in_tiles // 2, height_in_tiles // 2)
    else:
        if not isinstance(start_tile, (list, tuple)) or len(start_tile) != 2:
            raise ValueError(f"start.tile must be an [x, y] pair, got {start_tile!r}")
        start_x = _as_int(start_tile[0], "start.tile[0]")
        start_y = _as_int(start_tile[1], "start.tile[1]")
        if not (0 <= start_x <= width_in_tiles and 0 <= start_y <= height_in_tiles):
            raise ValueError(
                f"start.tile {start_tile!r} lies outside the "
                f"{width_in_tiles}x{height_in_tiles} grid"
            )
        start_xy = (start_x, start_y)

    seed = generation.get("seed")
    return GenerationSettings(
        axiom=str(grammar.get("axiom", ROAD_AXIOM)),
        productions=dict(grammar.get("productions") or {}),
        iterations=iterations,
        tile_size=_positive_int(grid.get("tile_size"), "grid.tile_size"),
        width_in_tiles=width_in_tiles,
        height_in_tiles=height_in_tiles,
        start_tile=start_xy,
        start_direction=Direction.parse(start.get("direction", "down")),
        seed=None if seed is None else _as_int(seed, "generation.seed"),
        strict=bool(generation.get("strict", False)),
    )
