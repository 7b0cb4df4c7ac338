"""Convolutional residual network producing a value and a policy for a position."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from hivegame.hypers import INPUT_ENCODED_DIMS, OUTPUT_LENGTH

_RESIDUAL_BLOCKS = 9
_CHANNELS = 16
_SHARED_FEATURES = 2704


def _uniform(rng: np.random.Generator, bound: float, shape) -> np.ndarray:
    return rng.uniform(-bound, bound, size=shape).astype(np.float32)


def _as_batch(game_state) -> np.ndarray:
    batch = np.asarray(game_state, dtype=np.float32)
    if batch.ndim != 4:
        raise ValueError(
            f"expected a [batch, channels, rows, cols] input, got shape {batch.shape}"
        )
    return batch


def _relu(xs: np.ndarray) -> np.ndarray:
    return np.maximum(xs, np.float32(0.0))


def _sigmoid(xs: np.ndarray) -> np.ndarray:
    return (0.5 * (1.0 + np.tanh(0.5 * xs))).astype(np.float32)


def _max_pool2d(xs: np.ndarray, kernel: int) -> np.ndarray:
    """Non-overlapping max pooling; trailing rows and columns are dropped."""
    n, c, h, w = xs.shape
    oh, ow = h // kernel, w // kernel
    if oh == 0 or ow == 0:
        raise ValueError(f"input {h}x{w} is too small to pool with kernel {kernel}")
    cropped = xs[:, :, : oh * kernel, : ow * kernel]
    return cropped.reshape(n, c, oh, kernel, ow, kernel).max(axis=(3, 5))


def _flatten(xs: np.ndarray) -> np.ndarray:
    return xs.reshape(xs.shape[0], -1)


class _Linear:
    """A fully connected layer, ``xs @ weight.T + bias``."""

    def __init__(self, rng: np.random.Generator, in_features: int, out_features: int) -> None:
        bound = 1.0 / np.sqrt(in_features)
        self.weight = _uniform(rng, bound, (out_features, in_features))
        self.bias = _uniform(rng, bound, (out_features,))

    def __call__(self, xs: np.ndarray) -> np.ndarray:
        if xs.shape[-1] != self.weight.shape[1]:
            raise ValueError(
                f"expected {self.weight.shape[1]} input features, got {xs.shape[-1]}"
            )
        return (xs @ self.weight.T + self.bias).astype(np.float32)


class _Conv2d:
    """A square-kernel 2D convolution with stride 1 and symmetric zero padding."""

    def __init__(
        self,
        rng: np.random.Generator,
        in_channels: int,
        out_channels: int,
        kernel: int,
        padding: int = 0,
    ) -> None:
        fan_in = in_channels * kernel * kernel
        bound = 1.0 / np.sqrt(fan_in)
        self.in_channels = in_channels
        self.kernel = kernel
        self.padding = padding
        self.weight = _uniform(rng, bound, (out_channels, in_channels, kernel, kernel))
        self.bias = _uniform(rng, bound, (out_channels,))

    def __call__(self, xs: np.ndarray) -> np.ndarray:
        if xs.ndim != 4 or xs.shape[1] != self.in_channels:
            raise ValueError(
                f"expected {self.in_channels} input channels, got shape {xs.shape}"
            )
        p = self.padding
        if p:
            xs = np.pad(xs, ((0, 0), (0, 0), (p, p), (p, p)))
        k = self.kernel
        if xs.shape[2] < k or xs.shape[3] < k:
            raise ValueError(f"input {xs.shape[2]}x{xs.shape[3]} is smaller than the kernel")
        windows = sliding_window_view(xs, (k, k), axis=(2, 3))
        out = np.tensordot(windows, self.weight, axes=([1, 4, 5], [1, 2, 3]))
        out = out.transpose(0, 3, 1, 2) + self.bias[None, :, None, None]
        return np.ascontiguousarray(out, dtype=np.float32)


class _BatchNorm2d:
    """Per-channel batch normalisation with running statistics."""

    def __init__(self, channels: int, eps: float = 1e-5, momentum: float = 0.1) -> None:
        self.eps = eps
        self.momentum = momentum
        self.weight = np.ones(channels, dtype=np.float32)
        self.bias = np.zeros(channels, dtype=np.float32)
        self.running_mean = np.zeros(channels, dtype=np.float32)
        self.running_var = np.ones(channels, dtype=np.float32)

    def __call__(self, xs: np.ndarray, train: bool) -> np.ndarray:
        if train:
            mean = xs.mean(axis=(0, 2, 3))
            var = xs.var(axis=(0, 2, 3))
            count = xs.shape[0] * xs.shape[2] * xs.shape[3]
            unbiased = var * count / max(count - 1, 1)
            self.running_mean = (
                (1 - self.momentum) * self.running_mean + self.momentum * mean
            ).astype(np.float32)
            self.running_var = (
                (1 - self.momentum) * self.running_var + self.momentum * unbiased
            ).astype(np.float32)
        else:
            mean, var = self.running_mean, self.running_var
        scale = self.weight / np.sqrt(var + self.eps)
        shift = self.bias - mean * scale
        return (xs * scale[None, :, None, None] + shift[None, :, None, None]).astype(
            np.float32
        )


class HiveModel:
    """Residual convolutional network with a value head and a policy head.

    Inputs are ``[batch, INPUT_ENCODED_DIMS, 26, 26]`` board encodings.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        rng = np.random.default_rng(seed)
        self.train_mode = False
        self._conv_i = _Conv2d(rng, INPUT_ENCODED_DIMS, _CHANNELS, 3, padding=1)
        self._bn_i = _BatchNorm2d(_CHANNELS)
        self._residual_blocks = [
            (_Conv2d(rng, _CHANNELS, _CHANNELS, 3, padding=1), _BatchNorm2d(_CHANNELS))
            for _ in range(_RESIDUAL_BLOCKS)
        ]
        self._value_layer = _Linear(rng, _SHARED_FEATURES, 1)
        self._policy_layer = _Linear(rng, _SHARED_FEATURES, OUTPUT_LENGTH)

    def value_policy(self, game_state) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(value, policy_logits)``; values lie in (-0.5, 0.5)."""
        shared = self._shared_layers(game_state)
        value = _sigmoid(self._value_layer(shared)) - np.float32(0.5)
        return value, self._policy_layer(shared)

    def policy(self, game_state) -> np.ndarray:
        """Return only the policy logits."""
        return self._policy_layer(self._shared_layers(game_state))

    def set_train_mode(self, train_mode: bool) -> None:
        """Switch batch normalisation between batch and running statistics."""
        self.train_mode = bool(train_mode)

    def _shared_layers(self, game_state) -> np.ndarray:
        output = self._conv_i(_as_batch(game_state))
        output = self._bn_i(output, self.train_mode)
        output = _max_pool2d(output, 2)
        for conv, bn in self._residual_blocks:
            output = output + conv(output)
            output = _relu(bn(output, self.train_mode))
        return _flatten(output)