"""Dataclasses and enums shared by the interpreter, grid and repair pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Side(Enum):
    """One of the four sides of a tile that may carry a road."""

    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    @property
    def offset(self) -> tuple[int, int]:
        return _SIDE_OFFSETS[self]

    @property
    def opposite(self) -> Side:
        return _SIDE_OPPOSITES[self]


_SIDE_OFFSETS: dict[Side, tuple[int, int]] = {
    Side.TOP: (0, -1),
    Side.RIGHT: (1, 0),
    Side.BOTTOM: (0, 1),
    Side.LEFT: (-1, 0),
}

_SIDE_OPPOSITES: dict[Side, Side] = {
    Side.TOP: Side.BOTTOM,
    Side.RIGHT: Side.LEFT,
    Side.BOTTOM: Side.TOP,
    Side.LEFT: Side.RIGHT,
}


class Direction(Enum):
    """Facing of the turtle while it walks the grid."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: str | Direction) -> Direction:
        if isinstance(value, Direction):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown direction: {value!r}") from exc

    def turn_clockwise(self) -> Direction:
        return _CLOCKWISE[self]

    def turn_counter_clockwise(self) -> Direction:
        return _COUNTER_CLOCKWISE[self]

    @property
    def offset(self) -> tuple[int, int]:
        return _DIRECTION_OFFSETS[self]

    @property
    def angle(self) -> float:
        """Heading in degrees, counter-clockwise from the positive x axis."""
        return _DIRECTION_ANGLES[self]

    def edges(self) -> EdgeSet:
        """Edges occupied by a straight segment drawn while facing this way."""
        if self in (Direction.UP, Direction.DOWN):
            return EdgeSet(top=True, bottom=True)
        return EdgeSet(left=True, right=True)


_CLOCKWISE: dict[Direction, Direction] = {
    Direction.UP: Direction.RIGHT,
    Direction.RIGHT: Direction.DOWN,
    Direction.DOWN: Direction.LEFT,
    Direction.LEFT: Direction.UP,
}

_COUNTER_CLOCKWISE: dict[Direction, Direction] = {
    after: before for before, after in _CLOCKWISE.items()
}

_DIRECTION_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_DIRECTION_ANGLES: dict[Direction, float] = {
    Direction.RIGHT: 0.0,
    Direction.UP: 90.0,
    Direction.LEFT: 180.0,
    Direction.DOWN: 270.0,
}


@dataclass(frozen=True)
class EdgeSet:
    """Which sides of a tile carry a road."""

    top: bool = False
    right: bool = False
    bottom: bool = False
    left: bool = False

    def __or__(self, other: EdgeSet) -> EdgeSet:
        return EdgeSet(
            top=self.top or other.top,
            right=self.right or other.right,
            bottom=self.bottom or other.bottom,
            left=self.left or other.left,
        )

    def has(self, side: Side) -> bool:
        return bool(getattr(self, side.value))

    def with_side(self, side: Side) -> EdgeSet:
        return self | EdgeSet.only(side)

    def sides(self) -> list[Side]:
        return [side for side in Side if self.has(side)]

    def count(self) -> int:
        return len(self.sides())

    def is_empty(self) -> bool:
        return not (self.top or self.right or self.bottom or self.left)

    def is_through_road(self) -> bool:
        return (self.top and self.bottom) or (self.left and self.right)

    @classmethod
    def only(cls, side: Side) -> EdgeSet:
        return cls(**{side.value: True})


@dataclass
class Tile:
    """A road tile; its grid coordinate is its identity."""

    x: int
    y: int
    edges: EdgeSet = field(default_factory=EdgeSet)
    is_dead_end: bool = False

    @property
    def coords(self) -> tuple[int, int]:
        return (self.x, self.y)

    def is_non_empty(self) -> bool:
        return not self.edges.is_empty()

    def is_empty(self) -> bool:
        return self.edges.is_empty()


@dataclass(frozen=True)
class InterpreterState:
    """Snapshot of the turtle, pushed on ``[`` and restored on ``]``."""

    x: float
    y: float
    angle: float
    direction: Direction
    road_ended: bool
    previous_segment: tuple[int, int] | None
    tile_x: int
    tile_y: int

    @property
    def tile(self) -> tuple[int, int]:
        return (self.tile_x, self.tile_y)


__all__ = [
    "Direction",
    "EdgeSet",
    "InterpreterState",
    "Side",
    "Tile",
]
