"""Embedding (bounds repair) operators.

An embedding brings an offspring back into the search box, optionally using a
reference point that is known to be feasible (one of its parents).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from .utils import ArrayLike, RealOperator, _check_nvars, _ensure_bounds


class Embedding(RealOperator, ABC):
    """Base class for embeddings; ``__call__`` repairs ``x`` in place and returns it."""

    def __init__(self, *, lower: ArrayLike, upper: ArrayLike) -> None:
        self.lower, self.upper = _ensure_bounds(lower, upper)

    @abstractmethod
    def __call__(self, x: np.ndarray, reference: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        raise NotImplementedError


class RandomBoundEmbedding(Embedding):
    """
    Move each violated coordinate to a random point between the bound and the reference.

    ``x[j] < lower[j]`` becomes ``lower[j] + r * (reference[j] - lower[j])`` and
    ``x[j] > upper[j]`` becomes ``upper[j] - r * (upper[j] - reference[j])``
    with ``r ~ U(0, 1)`` drawn per coordinate.
    """

    def __call__(self, x: np.ndarray, reference: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        _check_nvars(x.shape[0], self.lower)
        ref = np.clip(reference, self.lower, self.upper)
        below = np.flatnonzero(x < self.lower)
        above = np.flatnonzero(x > self.upper)
        if below.size:
            r = rng.random(below.size)
            x[below] = self.lower[below] + r * (ref[below] - self.lower[below])
        if above.size:
            r = rng.random(above.size)
            x[above] = self.upper[above] - r * (self.upper[above] - ref[above])
        return x


class ClampEmbedding(Embedding):
    """Clamp violated coordinates onto the nearest bound."""

    def __call__(self, x: np.ndarray, reference: np.ndarray, rng: np.random.Generator) -> np.ndarray:  # pylint: disable=unused-argument
        _check_nvars(x.shape[0], self.lower)
        np.clip(x, self.lower, self.upper, out=x)
        return x


class ReflectEmbedding(Embedding):
    """Reflect out-of-bounds values back into range."""

    def __call__(self, x: np.ndarray, reference: np.ndarray, rng: np.random.Generator) -> np.ndarray:  # pylint: disable=unused-argument
        _check_nvars(x.shape[0], self.lower)
        width = self.upper - self.lower
        degenerate = width <= 0.0
        period = np.where(degenerate, 1.0, 2.0 * width)
        val = np.mod(x - self.lower, period)
        over = val > width
        val[over] = period[over] - val[over]
        x[:] = np.where(degenerate, self.lower, val + self.lower)
        return x


__all__ = ["Embedding", "RandomBoundEmbedding", "ClampEmbedding", "ReflectEmbedding"]
