"""The moves a player can make."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from hivegame.piece import Piece


class _MoveBase:
    """Orders moves first by kind, then by their fields."""

    _rank = 0

    def _sort_key(self) -> tuple:
        return (self._rank,)

    def _compare(self, other) -> tuple:
        if not isinstance(other, _MoveBase):
            return NotImplemented
        return self._sort_key(), other._sort_key()

    def __lt__(self, other):
        pair = self._compare(other)
        return pair if pair is NotImplemented else pair[0] < pair[1]

    def __le__(self, other):
        pair = self._compare(other)
        return pair if pair is NotImplemented else pair[0] <= pair[1]

    def __gt__(self, other):
        pair = self._compare(other)
        return pair if pair is NotImplemented else pair[0] > pair[1]

    def __ge__(self, other):
        pair = self._compare(other)
        return pair if pair is NotImplemented else pair[0] >= pair[1]


@dataclass(frozen=True)
class MovePiece(_MoveBase):
    """Move a piece already on the board."""

    piece: Piece
    from_: Any
    to: Any

    _rank = 0

    def _sort_key(self) -> tuple:
        return (self._rank, self.piece, self.from_, self.to)


@dataclass(frozen=True)
class PlacePiece(_MoveBase):
    """Place a piece from the hand onto the board."""

    piece: Piece
    position: Any

    _rank = 1

    def _sort_key(self) -> tuple:
        return (self._rank, self.piece, self.position)


@dataclass(frozen=True)
class Pass(_MoveBase):
    """Skip the turn."""

    _rank = 2


Move = Union[MovePiece, PlacePiece, Pass]