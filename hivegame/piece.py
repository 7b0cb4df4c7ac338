"""Colours, insects and the pieces built from them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class _OrderedEnum(Enum):
    """Enum whose members order by their declared value."""

    def __lt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value >= other.value


class Color(_OrderedEnum):
    """The colour of a piece or player."""

    BLACK = 0
    WHITE = 1

    def opposing(self) -> Color:
        """Return the other colour."""
        return Color.WHITE if self is Color.BLACK else Color.BLACK

    def __str__(self) -> str:
        return self.name.capitalize()


class ColorMap(Generic[T]):
    """One value for each colour."""

    __slots__ = ("_white", "_black")

    def __init__(self, white: T = None, black: T = None) -> None:
        self._white = white
        self._black = black

    def get(self, color: Color) -> T:
        """Return the value held for ``color``."""
        return self._black if color is Color.BLACK else self._white

    def set(self, color: Color, value: T) -> T:
        """Store ``value`` for ``color`` and return the value it replaces."""
        if color is Color.BLACK:
            old, self._black = self._black, value
        else:
            old, self._white = self._white, value
        return old

    def black(self) -> T:
        """Return the value held for black."""
        return self._black

    def white(self) -> T:
        """Return the value held for white."""
        return self._white

    def __eq__(self, other) -> bool:
        if not isinstance(other, ColorMap):
            return NotImplemented
        return self._white == other._white and self._black == other._black

    def __repr__(self) -> str:
        return f"ColorMap(white={self._white!r}, black={self._black!r})"


class Insect(_OrderedEnum):
    """The kinds of insect a piece can be, in their canonical order."""

    GRASSHOPPER = 0
    QUEEN_BEE = 1
    BEETLE = 2
    SPIDER = 3
    SOLDIER_ANT = 4


_LETTERS = {
    Insect.QUEEN_BEE: "q",
    Insect.SOLDIER_ANT: "a",
    Insect.BEETLE: "b",
    Insect.GRASSHOPPER: "g",
    Insect.SPIDER: "s",
}
_INSECT_BY_LETTER = {letter: insect for insect, letter in _LETTERS.items()}
_IDS = {"0": 0, "1": 1, "2": 2, "3": 3}


@dataclass(frozen=True, order=True)
class Piece:
    """A single tile: an insect of a colour with its per-kind id."""

    role: Insect
    color: Color
    id: int

    def is_white_piece(self) -> bool:
        return self.color is Color.WHITE

    def is_black_piece(self) -> bool:
        return self.color is Color.BLACK

    def is_beetle(self) -> bool:
        return self.role is Insect.BEETLE

    def is_queen(self) -> bool:
        return self.role is Insect.QUEEN_BEE

    @classmethod
    def from_char_pair(cls, role: str, ident: str) -> Optional[Piece]:
        """Build a piece from a role letter and an id digit, or return None.

        Lower-case letters are white pieces, upper-case letters black.
        """
        piece_id = _IDS.get(ident)
        if piece_id is None:
            return None
        insect = _INSECT_BY_LETTER.get(role.lower()) if len(role) == 1 else None
        if insect is None:
            return None
        color = Color.WHITE if role.islower() else Color.BLACK
        return cls(role=insect, color=color, id=piece_id)

    @classmethod
    def from_str(cls, text: str) -> Optional[Piece]:
        """Parse text such as ``"q"`` or ``"A2"``; the id defaults to 0."""
        if not text:
            return None
        ident = text[1] if len(text) > 1 else "0"
        return cls.from_char_pair(text[0], ident)

    def __str__(self) -> str:
        letter = _LETTERS[self.role]
        if self.color is Color.BLACK:
            letter = letter.upper()
        return f"{letter}{self.id}"