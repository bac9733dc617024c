"""Procedural road networks on a tile grid, driven by L-system instructions."""

# ruff: noqa: F401

from .__about__ import __version__
from .config import GenerationSettings, load_config, settings_from_config
from .generation import GenerationResult, build_road_network, generate_road_network
from .interpreter import (
    Diagnostic,
    DiagnosticKind,
    InterpretError,
    UnbalancedBranchError,
    interpret,
)
from .lsystem import GrammarError, LSystem
from .models import Direction, EdgeSet, InterpreterState, Side, Tile
from .repair import RepairReport, repair
from .tile_grid import TileGrid
from .valuation import reachable_within, valuation, valuation_at
