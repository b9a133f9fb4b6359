"""Real-valued mutation operators."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from .utils import ArrayLike, RealOperator, _ensure_bounds


class Mutation(RealOperator, ABC):
    """Base class for real-coded mutation operators (batch, in place)."""

    @abstractmethod
    def __call__(self, offspring: ArrayLike, rng: np.random.Generator) -> np.ndarray:
        raise NotImplementedError


class GeneMutation(Mutation):
    """
    Mutation defined gene by gene.

    Called directly, every gene is mutated with probability ``prob``; wrapped
    in a :class:`MutationClock`, the clock decides which genes change.
    """

    prob: float = 1.0

    def __init__(self, *, lower: ArrayLike, upper: ArrayLike, prob_mutation: float | None = None) -> None:
        self.lower, self.upper = _ensure_bounds(lower, upper)
        if prob_mutation is not None:
            self.prob = float(prob_mutation)
        elif self.lower.shape[0]:
            self.prob = 1.0 / self.lower.shape[0]

    @abstractmethod
    def mutate_gene(self, x: np.ndarray, j: int, rng: np.random.Generator) -> None:
        raise NotImplementedError

    def __call__(self, offspring: ArrayLike, rng: np.random.Generator) -> np.ndarray:
        X = self._as_population(offspring, name="offspring", copy=False)
        self._check_bounds_match(X, self.lower)
        rows, cols = np.nonzero(rng.random(X.shape) <= self.prob)
        for i, j in zip(rows, cols):
            self.mutate_gene(X[i], int(j), rng)
        return X


class UniformGeneMutation(GeneMutation):
    """Resample the gene uniformly inside its bounds (a simple Gibbs step)."""

    def mutate_gene(self, x: np.ndarray, j: int, rng: np.random.Generator) -> None:
        x[j] = self.lower[j] + rng.random() * (self.upper[j] - self.lower[j])


class PolynomialMutation(GeneMutation):
    """Standard polynomial mutation used in NSGA-II."""

    def __init__(
        self,
        prob_mutation: float | None = None,
        eta: float = 20.0,
        *,
        lower: ArrayLike,
        upper: ArrayLike,
    ) -> None:
        super().__init__(lower=lower, upper=upper, prob_mutation=prob_mutation)
        self.eta = float(eta)

    def mutate_gene(self, x: np.ndarray, j: int, rng: np.random.Generator) -> None:
        yl = self.lower[j]
        yu = self.upper[j]
        if yu <= yl:
            return
        y = min(max(x[j], yl), yu)
        delta1 = (y - yl) / (yu - yl)
        delta2 = (yu - y) / (yu - yl)
        mut_pow = 1.0 / (self.eta + 1.0)
        rnd = rng.random()
        if rnd <= 0.5:
            xy = 1.0 - delta1
            val = 2.0 * rnd + (1.0 - 2.0 * rnd) * (xy ** (self.eta + 1.0))
            deltaq = val**mut_pow - 1.0
        else:
            xy = 1.0 - delta2
            val = 2.0 * (1.0 - rnd) + 2.0 * (rnd - 0.5) * (xy ** (self.eta + 1.0))
            deltaq = 1.0 - val**mut_pow
        x[j] = min(max(y + deltaq * (yu - yl), yl), yu)


class MutationClock(Mutation):
    """
    Mutates genes at geometrically distributed gaps.

    Instead of flipping a coin per gene, the clock draws the distance to the
    next mutated gene from ``Geometric(rate)``. The clock carries over between
    calls, so consecutive individuals share one stream of mutation points.
    """

    def __init__(self, inner: GeneMutation, rate: float = 0.25) -> None:
        if not 0.0 < rate <= 1.0:
            raise ValueError("rate must be in (0, 1].")
        self.inner = inner
        self.rate = float(rate)
        self._clock: int | None = None

    @property
    def lower(self) -> np.ndarray:
        return self.inner.lower

    @property
    def upper(self) -> np.ndarray:
        return self.inner.upper

    def mutate(self, x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        """Mutate a single decision vector in place."""
        n_vars = x.shape[0]
        pos = int(rng.geometric(self.rate)) - 1 if self._clock is None else self._clock
        while pos < n_vars:
            self.inner.mutate_gene(x, pos, rng)
            pos += int(rng.geometric(self.rate))
        self._clock = pos - n_vars
        return x

    def __call__(self, offspring: ArrayLike, rng: np.random.Generator) -> np.ndarray:
        X = self._as_population(offspring, name="offspring", copy=False)
        for row in X:
            self.mutate(row, rng)
        return X


__all__ = [
    "Mutation",
    "GeneMutation",
    "UniformGeneMutation",
    "PolynomialMutation",
    "MutationClock",
]
