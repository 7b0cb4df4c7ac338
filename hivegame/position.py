"""Board coordinates on the hexagonal grid, directions and neighbours."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Generic, Iterator, Optional, Tuple, TypeVar

T = TypeVar("T")


class HiveError(Exception):
    """Base class for errors raised by the game engine."""


class PositionOutOfBounds(HiveError):
    """A position falls outside the board."""


class RotationOutOfBounds(HiveError):
    """A rotation would move a position off the board."""


class Direction(Enum):
    """The six directions from a hexagonal cell, in clockwise order."""

    TOP_RIGHT = 0
    RIGHT = 1
    BOTTOM_RIGHT = 2
    BOTTOM_LEFT = 3
    LEFT = 4
    TOP_LEFT = 5

    def rotate_clockwise(self) -> Direction:
        return Direction((self.value + 1) % 6)

    def rotate_counter_clockwise(self) -> Direction:
        return Direction((self.value - 1) % 6)


class DirectionMap(Generic[T]):
    """A value optionally stored for each direction."""

    __slots__ = ("_values",)

    def __init__(self) -> None:
        self._values: Dict[Direction, T] = {}

    def get(self, direction: Direction) -> Optional[T]:
        """Return the value stored for ``direction``, or None."""
        return self._values.get(direction)

    def set(self, direction: Direction, value: T) -> None:
        self._values[direction] = value

    def contains_key(self, direction: Direction) -> bool:
        return direction in self._values

    def __repr__(self) -> str:
        inner = ", ".join(f"{d.name}={v!r}" for d, v in self._values.items())
        return f"DirectionMap({inner})"


_ADJACENT_DELTAS = frozenset({(-1, 0), (1, 0), (0, -1), (0, 1), (1, -1), (-1, 1)})


@dataclass(frozen=True, order=True)
class Position:
    """A cell on the board in axial (row, column) coordinates."""

    x: int = 0
    y: int = 0

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"

    def is_adjacent(self, neighbor: Position) -> bool:
        """Return True if ``neighbor`` shares an edge with this cell."""
        return (self.x - neighbor.x, self.y - neighbor.y) in _ADJACENT_DELTAS

    def neighbors(self, dim: int) -> Iterator[Tuple[Direction, Position]]:
        """Yield the on-board neighbours as (direction, position) pairs.

        Neighbours are visited starting from the top left and going clockwise.
        """
        x, y = self.x, self.y
        last = dim - 1
        state: Optional[Direction] = Direction.TOP_LEFT
        while state is not None:
            if state is Direction.TOP_LEFT:
                state = Direction.TOP_RIGHT
                if x == 0:
                    state = Direction.RIGHT
                    continue
                yield Direction.TOP_LEFT, Position(x - 1, y)
            elif state is Direction.TOP_RIGHT:
                state = Direction.RIGHT
                if x == 0:
                    continue
                if y == last:
                    state = Direction.BOTTOM_RIGHT
                    continue
                yield Direction.TOP_RIGHT, Position(x - 1, y + 1)
            elif state is Direction.RIGHT:
                state = Direction.BOTTOM_RIGHT
                if y == last:
                    continue
                yield Direction.RIGHT, Position(x, y + 1)
            elif state is Direction.BOTTOM_RIGHT:
                state = Direction.BOTTOM_LEFT
                if x == last:
                    state = Direction.LEFT
                    continue
                yield Direction.BOTTOM_RIGHT, Position(x + 1, y)
            elif state is Direction.BOTTOM_LEFT:
                state = Direction.LEFT
                if x == last:
                    continue
                if y == 0:
                    return
                yield Direction.BOTTOM_LEFT, Position(x + 1, y - 1)
            else:
                state = None
                if y == 0:
                    continue
                yield Direction.LEFT, Position(x, y - 1)

    def neighbor(self, direction: Direction, dim: int) -> Optional[Position]:
        """Return the neighbour in ``direction``, or None if it is off the board."""
        x, y = self.x, self.y
        last = dim - 1
        if direction is Direction.TOP_RIGHT:
            if x == 0 or y == last:
                return None
            return Position(x - 1, y + 1)
        if direction is Direction.RIGHT:
            if y == last:
                return None
            return Position(x, y + 1)
        if direction is Direction.BOTTOM_RIGHT:
            if x == last:
                return None
            return Position(x + 1, y)
        if direction is Direction.BOTTOM_LEFT:
            if x == last or y == 0:
                return None
            return Position(x + 1, y - 1)
        if direction is Direction.LEFT:
            if y == 0:
                return None
            return Position(x, y - 1)
        if x == 0:
            return None
        return Position(x - 1, y)

    def to_cube_coords(self) -> Tuple[int, int, int]:
        return self.x, self.y, -self.x - self.y

    @staticmethod
    def _from_cube_coords(x: int, y: int, z: int, dim: int) -> Position:
        del z
        if x < 0 or x >= dim:
            raise RotationOutOfBounds(f"x coordinate {x} is outside the board")
        if y < 0 or y >= dim:
            raise PositionOutOfBounds(f"y coordinate {y} is outside the board")
        return Position(x, y)

    def rotate_clockwise_around_center(self, center: Position, dim: int) -> Position:
        """Rotate this cell 60 degrees clockwise around ``center``."""
        x, y, z = self.to_cube_coords()
        cx, cy, cz = center.to_cube_coords()
        x, y, z = x - cx, y - cy, z - cz
        x, y, z = -y + cx, -z + cy, -x + cz
        return self._from_cube_coords(x, y, z, dim)