"""
Archive-driven operator weights.

Each operator's selection probability is proportional to the number of
archive members it produced, Laplace-smoothed by ``zeta``::

    w[i] = (count[i] + zeta) / (sum(count) + n_operators * zeta)

so every operator keeps a strictly positive probability.
"""

from __future__ import annotations

from typing import Mapping

import numpy as np


class OperatorWeights:
    """Categorical distribution over operator indices; uniform until first update."""

    def __init__(self, n_operators: int, *, zeta: float = 1.0) -> None:
        if n_operators <= 0:
            raise ValueError("n_operators must be positive.")
        if zeta <= 0.0:
            raise ValueError("zeta must be positive.")
        self.n_operators = int(n_operators)
        self.zeta = float(zeta)
        self._counts = [0] * self.n_operators
        self._probs = np.full(self.n_operators, 1.0 / self.n_operators)
        self._cumulative = np.cumsum(self._probs)

    def probs(self) -> list[float]:
        return self._probs.tolist()

    def counts(self) -> list[int]:
        """Archive counts used by the last update."""
        return list(self._counts)

    def update(self, tagcounts: Mapping[int, int]) -> list[float]:
        """Recompute weights from ``{operator index: archived member count}``."""
        counts = [int(tagcounts.get(i, 0)) for i in range(self.n_operators)]
        denom = float(sum(counts)) + self.n_operators * self.zeta
        self._counts = counts
        self._probs = np.asarray([(c + self.zeta) / denom for c in counts], dtype=float)
        self._cumulative = np.cumsum(self._probs)
        return self.probs()

    def sample(self, rng: np.random.Generator) -> int:
        draw = rng.random() * self._cumulative[-1]
        idx = int(np.searchsorted(self._cumulative, draw, side="right"))
        return min(idx, self.n_operators - 1)

    def __repr__(self) -> str:
        formatted = ", ".join(f"{p:.3f}" for p in self._probs)
        return f"OperatorWeights([{formatted}])"


__all__ = ["OperatorWeights"]
