"""A plain convolutional network and a multi-head self-attention block."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from hivegame.hypers import INPUT_ENCODED_DIMS, OUTPUT_LENGTH
from hivegame.model import (
    _as_batch,
    _Conv2d,
    _flatten,
    _Linear,
    _max_pool2d,
    _relu,
    _sigmoid,
)

_FLAT_FEATURES = 3200
_HIDDEN = 256


class HiveModel:
    """Four unpadded convolutions and two dense layers feeding value and policy heads.

    The dense layer expects 3200 features, which a 32x32 board produces.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        rng = np.random.default_rng(seed)
        self._c1 = _Conv2d(rng, INPUT_ENCODED_DIMS, 16, 3)
        self._c2 = _Conv2d(rng, 16, 16, 3)
        self._c3 = _Conv2d(rng, 16, 32, 3)
        self._c4 = _Conv2d(rng, 32, 32, 3)
        self._l1 = _Linear(rng, _FLAT_FEATURES, _HIDDEN)
        self._l2 = _Linear(rng, _HIDDEN, _HIDDEN)
        self._value_layer = _Linear(rng, _HIDDEN, 1)
        self._policy_layer = _Linear(rng, _HIDDEN, OUTPUT_LENGTH)

    def value_policy(self, game_state) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(value, policy_logits)``; values lie in (-0.5, 0.5)."""
        shared = self._shared_layers(game_state)
        value = _sigmoid(self._value_layer(shared)) - np.float32(0.5)
        return value, self._policy_layer(shared)

    def policy(self, game_state) -> np.ndarray:
        """Return only the policy logits."""
        return self._policy_layer(self._shared_layers(game_state))

    def _shared_layers(self, game_state) -> np.ndarray:
        xs = _as_batch(game_state)
        xs = _relu(self._c1(xs))
        xs = _relu(self._c2(xs))
        xs = _max_pool2d(xs, 2)
        xs = _relu(self._c3(xs))
        xs = _relu(self._c4(xs))
        xs = _flatten(xs)
        xs = _relu(self._l1(xs))
        return _relu(self._l2(xs))


class MultiHeadSelfAttention:
    """Self-attention over ``[batch, length, embed_dim]`` sequences."""

    def __init__(
        self, embed_dim: int, total: int, nheads: int, seed: Optional[int] = None
    ) -> None:
        if nheads <= 0 or total % nheads != 0:
            raise ValueError("Embedding dim is not divisible by nheads")
        rng = np.random.default_rng(seed)
        self.embed_dim = embed_dim
        self.nheads = nheads
        self.head_dim = total // nheads
        self._packed_proj = _Linear(rng, embed_dim, total * 3)
        self._output_proj = _Linear(rng, total, embed_dim)

    def forward(self, xs, attn_mask=None) -> np.ndarray:
        """Attend every position to the others.

        A boolean mask marks the pairs allowed to attend; a float mask is
        added to the attention scores.
        """
        xs = np.asarray(xs, dtype=np.float32)
        if xs.ndim != 3:
            raise ValueError(f"expected a [batch, length, embed] input, got {xs.shape}")
        n, length, _ = xs.shape

        query, key, value = np.split(self._packed_proj(xs), 3, axis=-1)

        def split_heads(t: np.ndarray) -> np.ndarray:
            return t.reshape(n, length, self.nheads, self.head_dim).transpose(0, 2, 1, 3)

        query, key, value = split_heads(query), split_heads(key), split_heads(value)

        scores = (query @ key.transpose(0, 1, 3, 2)) / np.sqrt(self.head_dim)
        if attn_mask is not None:
            mask = np.asarray(attn_mask)
            if mask.dtype == np.bool_:
                scores = np.where(mask, scores, -np.inf)
            else:
                scores = scores + mask.astype(np.float32)

        with np.errstate(invalid="ignore", over="ignore"):
            peak = scores.max(axis=-1, keepdims=True)
            weights = np.exp(scores - peak)
            weights = weights / weights.sum(axis=-1, keepdims=True)

        attn = (weights @ value).astype(np.float32)
        attn = attn.transpose(0, 2, 1, 3).reshape(n, length, self.nheads * self.head_dim)
        return self._output_proj(attn)