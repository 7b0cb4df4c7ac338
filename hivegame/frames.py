"""Buffers of recorded game frames and the advantage estimates built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from hivegame import hypers
from hivegame.piece import Color


@dataclass
class SingleGame:
    """Frames recorded while one game is played, one entry per decision."""

    playing: List[Color] = field(default_factory=list)
    game_state: List[np.ndarray] = field(default_factory=list)
    # The index sampled from the policy, as a one-element array.
    selected_policy: List[np.ndarray] = field(default_factory=list)
    # True for actions that are invalid in the recorded state.
    invalid_move_mask: List[np.ndarray] = field(default_factory=list)
    value: List[np.ndarray] = field(default_factory=list)

    def clear(self) -> None:
        self.playing.clear()
        self.game_state.clear()
        self.selected_policy.clear()
        self.invalid_move_mask.clear()
        self.value.clear()

    def __len__(self) -> int:
        return len(self.playing)

    def validate_buffers(self) -> bool:
        """Return True if every buffer holds the same number of frames."""
        length = len(self.playing)
        return all(
            len(buffer) == length
            for buffer in (
                self.game_state,
                self.selected_policy,
                self.invalid_move_mask,
                self.value,
            )
        )


_REWARDS = {
    None: 0.0,
    Color.WHITE: 0.5,
    Color.BLACK: -0.5,
}


@dataclass
class MultipleGames:
    """Training frames gathered from many games."""

    game_state: List[np.ndarray] = field(default_factory=list)
    selected_policy: List[np.ndarray] = field(default_factory=list)
    invalid_move_mask: List[np.ndarray] = field(default_factory=list)
    # Advantage estimates; not time discounted further.
    gae: List[np.ndarray] = field(default_factory=list)
    target_value: List[np.ndarray] = field(default_factory=list)

    def clear(self) -> None:
        self.game_state.clear()
        self.selected_policy.clear()
        self.invalid_move_mask.clear()
        self.gae.clear()
        self.target_value.clear()

    def __len__(self) -> int:
        return len(self.game_state)

    def validate_buffers(self) -> bool:
        """Return True if every buffer holds the same number of frames."""
        length = len(self.game_state)
        return all(
            len(buffer) == length
            for buffer in (
                self.selected_policy,
                self.invalid_move_mask,
                self.gae,
                self.target_value,
            )
        )

    def ingest_game(
        self,
        other: SingleGame,
        winner: Optional[Color],
        gamma: float,
        lambda_: float,
        max_frames_per_game: int,
    ) -> None:
        """Compute advantages and targets for ``other`` and move its frames here.

        Only the last ``max_frames_per_game`` frames are kept. ``other`` is
        left empty afterwards.
        """
        if not other.validate_buffers():
            raise ValueError("game buffers have mismatched lengths")
        length = len(other)
        if length == 0:
            raise ValueError("cannot ingest a game with no frames")

        # Rescale short games so the value at the first frame is about zero.
        if length < hypers.APPROXIMATE_TURN_MEMORY:
            gamma = 1.0 - (1.0 / length)
        gl = gamma * lambda_

        # Work from white's perspective throughout.
        value = [
            -np.asarray(v, dtype=np.float32)
            if color is Color.BLACK
            else np.array(v, dtype=np.float32)
            for v, color in zip(other.value, other.playing)
        ]
        other.value = []

        gae = np.float32(_REWARDS[winner])
        discounted_rewards = np.float32(gae)
        gae_values: List[np.ndarray] = []

        last = length - 1
        gae = gae - value[last]
        gae_values.append(np.array(gae, dtype=np.float32))
        for idx in reversed(range(last)):
            delta = gamma * value[idx + 1] - value[idx]
            value[idx + 1] = np.full_like(value[idx + 1], discounted_rewards)
            discounted_rewards = np.float32(discounted_rewards * gamma)
            gae = delta + gl * gae
            gae_values.append(np.array(gae, dtype=np.float32))
        value[0] = np.full_like(value[0], discounted_rewards)

        gae_values.reverse()
        for idx, color in enumerate(other.playing):
            if color is Color.BLACK:
                gae_values[idx] = -gae_values[idx]
                value[idx] = -value[idx]

        skip = max(0, length - max_frames_per_game)
        self.game_state.extend(other.game_state[skip:])
        self.selected_policy.extend(other.selected_policy[skip:])
        self.invalid_move_mask.extend(other.invalid_move_mask[skip:])
        self.target_value.extend(value[skip:])
        self.gae.extend(gae_values[skip:])

        other.clear()

        if not self.validate_buffers():
            raise RuntimeError("training buffers have mismatched lengths")