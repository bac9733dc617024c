"""Turtle-style interpreter that lays road tiles from an instruction string.

Alphabet:

- ``F``: lay a straight segment in the current cell, then step forward.
- ``-`` / ``+``: quarter turn clockwise / counter-clockwise.
- ``[`` / ``]``: push / pop the turtle state.
- ``X``: placeholder with no effect.

Anything else is skipped and reported as a diagnostic.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable

from .models import Direction, InterpreterState, Tile
from .tile_grid import TileGrid

logger = logging.getLogger(__name__)

FORWARD = "F"
TURN_CLOCKWISE = "-"
TURN_COUNTER_CLOCKWISE = "+"
PUSH = "["
POP = "]"
PLACEHOLDER = "X"

ALPHABET = frozenset(
    {FORWARD, TURN_CLOCKWISE, TURN_COUNTER_CLOCKWISE, PUSH, POP, PLACEHOLDER}
)


class DiagnosticKind(Enum):
    UNBALANCED_BRANCH = "unbalanced_branch"
    UNRECOGNIZED_SYMBOL = "unrecognized_symbol"


@dataclass(frozen=True)
class Diagnostic:
    """Non-fatal anomaly found while interpreting."""

    kind: DiagnosticKind
    index: int
    symbol: str
    message: str


class InterpretError(Exception):
    pass


class UnbalancedBranchError(InterpretError):
    def __init__(self, index: int) -> None:
        super().__init__(f"Branch close at index {index} has no matching open")
        self.index = index


def initial_state(
    grid: TileGrid, start_tile: tuple[int, int], start_direction: Direction
) -> InterpreterState:
    tile_x, tile_y = grid.clamp(*start_tile)
    return _with_tile(
        InterpreterState(
            x=0.0,
            y=0.0,
            angle=start_direction.angle,
            direction=start_direction,
            road_ended=False,
            previous_segment=None,
            tile_x=tile_x,
            tile_y=tile_y,
        ),
        grid,
        tile_x,
        tile_y,
    )


def _with_tile(
    state: InterpreterState, grid: TileGrid, tile_x: int, tile_y: int
) -> InterpreterState:
    return replace(
        state,
        tile_x=tile_x,
        tile_y=tile_y,
        x=(tile_x + 0.5) * grid.tile_width,
        y=(tile_y + 0.5) * grid.tile_height,
    )


def _with_direction(state: InterpreterState, direction: Direction) -> InterpreterState:
    return replace(state, direction=direction, angle=direction.angle)


def place_segment(grid: TileGrid, state: InterpreterState) -> Tile:
    """Lay the segment for the current facing, merging into an existing road."""
    edges = state.direction.edges()
    existing = grid.get(state.tile_x, state.tile_y)
    if existing is not None and existing.is_non_empty():
        existing.edges = existing.edges | edges
        return existing
    tile = Tile(state.tile_x, state.tile_y, edges)
    grid.set(state.tile_x, state.tile_y, tile)
    return tile


def step_forward(grid: TileGrid, state: InterpreterState) -> InterpreterState:
    dx, dy = state.direction.offset
    tile_x, tile_y = grid.clamp(state.tile_x + dx, state.tile_y + dy)
    return _with_tile(state, grid, tile_x, tile_y)


class Interpreter:
    """Stack machine walking one instruction string over a grid."""

    def __init__(
        self,
        grid: TileGrid,
        start_tile: tuple[int, int],
        start_direction: Direction,
        *,
        strict: bool = False,
    ) -> None:
        self.grid = grid
        self.strict = strict
        self.state = initial_state(grid, start_tile, start_direction)
        self.stack: list[InterpreterState] = []
        self.diagnostics: list[Diagnostic] = []
        self.placed = 0

    def run(self, instructions: Iterable[str]) -> list[Diagnostic]:
        for index, symbol in enumerate(instructions):
            self.execute(symbol, index)
        if self.stack:
            logger.debug("%d branch(es) left open at end of input", len(self.stack))
        logger.debug(
            "Interpreted %d segment(s) into %d tile(s)", self.placed, len(self.grid)
        )
        return self.diagnostics

    def execute(self, symbol: str, index: int = 0) -> None:
        if symbol not in ALPHABET:
            self._report(
                DiagnosticKind.UNRECOGNIZED_SYMBOL,
                index,
                symbol,
                f"road system doesn't understand {symbol!r}",
            )
            return
        state = self.state
        if symbol == FORWARD:
            place_segment(self.grid, state)
            self.placed += 1
            self.state = replace(
                step_forward(self.grid, state), previous_segment=state.tile
            )
        elif symbol == TURN_CLOCKWISE:
            self.state = _with_direction(state, state.direction.turn_clockwise())
        elif symbol == TURN_COUNTER_CLOCKWISE:
            self.state = _with_direction(
                state, state.direction.turn_counter_clockwise()
            )
        elif symbol == PUSH:
            self.stack.append(state)
        elif symbol == POP:
            if not self.stack:
                if self.strict:
                    raise UnbalancedBranchError(index)
                self._report(
                    DiagnosticKind.UNBALANCED_BRANCH,
                    index,
                    symbol,
                    "branch stack empty, state left unchanged",
                )
                return
            self.state = replace(self.stack.pop(), road_ended=False)

    def _report(
        self, kind: DiagnosticKind, index: int, symbol: str, message: str
    ) -> None:
        logger.warning("Instruction %d (%r): %s", index, symbol, message)
        self.diagnostics.append(Diagnostic(kind, index, symbol, message))


def interpret(
    instructions: Iterable[str],
    grid: TileGrid,
    start_tile: tuple[int, int],
    start_direction: Direction,
    *,
    strict: bool = False,
) -> list[Diagnostic]:
    """Lay tiles on ``grid`` and return the diagnostics raised on the way.

    With ``strict`` an unmatched ``]`` raises :class:`UnbalancedBranchError`
    instead of being recorded.
    """
    interpreter = Interpreter(grid, start_tile, start_direction, strict=strict)
    return interpreter.run(instructions)


__all__ = [
    "ALPHABET",
    "Diagnostic",
    "DiagnosticKind",
    "InterpretError",
    "Interpreter",
    "UnbalancedBranchError",
    "initial_state",
    "interpret",
    "place_segment",
    "step_forward",
]
