"""The tiles a player still holds."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from hivegame.piece import Insect

_STARTING_COUNTS = {
    Insect.QUEEN_BEE: 1,
    Insect.SOLDIER_ANT: 3,
    Insect.GRASSHOPPER: 3,
    Insect.BEETLE: 2,
    Insect.SPIDER: 2,
}


def _full_hand() -> Dict[Insect, List[int]]:
    return {insect: [count, count] for insect, count in _STARTING_COUNTS.items()}


@dataclass
class Hand:
    """Per-insect counts of tiles remaining, alongside the starting totals."""

    _counts: Dict[Insect, List[int]] = field(default_factory=_full_hand, repr=False)

    def has_queen(self) -> bool:
        return self.has_insect(Insect.QUEEN_BEE)

    def has_insect(self, insect: Insect) -> bool:
        return self._counts[insect][0] > 0

    def next_insect_id(self, insect: Insect) -> Optional[int]:
        """Return the id the next tile of ``insect`` would get, or None if none is left."""
        current, total = self._counts[insect]
        if current == 0:
            return None
        return total - current

    def pop_tile(self, insect: Insect) -> Optional[Tuple[Insect, int]]:
        """Take a tile of ``insect`` out of the hand, returning it with its id."""
        counter = self._counts[insect]
        if counter[0] == 0:
            return None
        counter[0] -= 1
        return insect, counter[1] - counter[0] - 1

    def push_tile(self, insect: Insect) -> None:
        """Return a tile of ``insect`` to the hand."""
        self._counts[insect][0] += 1

    def copy(self) -> Hand:
        return Hand({insect: list(pair) for insect, pair in self._counts.items()})

    def __repr__(self) -> str:
        inner = ", ".join(
            f"{insect.name.lower()}={current}/{total}"
            for insect, (current, total) in self._counts.items()
        )
        return f"Hand({inner})"