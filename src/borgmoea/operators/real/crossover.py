"""Real-valued recombination operators with fixed parent/offspring arities.

Every operator takes a ``(n_parents, n_vars)`` matrix and returns a
``(n_children, n_vars)`` matrix. Offspring may leave the search box; bringing
them back is the job of the embedding operator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from .utils import ArrayLike, RealOperator, _check_nvars, _ensure_bounds, _orthonormal_complement


class Crossover(RealOperator, ABC):
    """Base class for recombination operators."""

    n_parents: int = 2
    n_children: int = 1

    @abstractmethod
    def __call__(self, parents: ArrayLike, rng: np.random.Generator) -> np.ndarray:
        raise NotImplementedError

    def num_parents(self) -> int:
        return self.n_parents

    def num_children(self) -> int:
        return self.n_children

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n_parents={self.n_parents}, n_children={self.n_children})"


class DifferentialEvolutionCrossover(Crossover):
    """DE rand/1/bin: ``base + F * (a - b)`` binomially crossed with the target (first parent)."""

    n_parents = 4
    n_children = 1

    def __init__(self, F: float = 0.5, CR: float = 0.1) -> None:
        self.F = float(F)
        self.CR = float(CR)

    def __call__(self, parents: ArrayLike, rng: np.random.Generator) -> np.ndarray:
        target, base, a, b = self._as_parents(parents, expected_parents=4)
        n_vars = target.shape[0]
        mutant = base + self.F * (a - b)
        mask = rng.random(n_vars) < self.CR
        mask[rng.integers(n_vars)] = True
        return np.where(mask, mutant, target)[None, :]


class SBXCrossover(Crossover):
    """Simulated Binary Crossover (SBX) operator."""

    n_parents = 2
    n_children = 2

    def __init__(
        self,
        prob_crossover: float = 1.0,
        eta: float = 15.0,
        prob_var: float = 0.5,
        *,
        lower: ArrayLike,
        upper: ArrayLike,
    ) -> None:
        self.prob = float(prob_crossover)
        self.eta = float(eta)
        self.prob_var = float(prob_var)
        self.lower, self.upper = _ensure_bounds(lower, upper)

    def _betaq(self, beta: np.ndarray, rand: np.ndarray) -> np.ndarray:
        eps = 1.0e-14
        alpha = 2.0 - np.power(np.maximum(beta, eps), -(self.eta + 1.0))
        alpha = np.maximum(alpha, eps)
        inv_eta = 1.0 / (self.eta + 1.0)
        return np.where(
            rand <= 1.0 / alpha,
            np.power(rand * alpha, inv_eta),
            np.power(1.0 / (2.0 - rand * alpha), inv_eta),
        )

    def __call__(self, parents: ArrayLike, rng: np.random.Generator) -> np.ndarray:
        p = self._as_parents(parents, expected_parents=2)
        _check_nvars(p.shape[1], self.lower)
        offspring = p.copy()
        if rng.random() > self.prob:
            return offspring
        parent1, parent2 = p[0], p[1]
        eps = 1.0e-14
        y1 = np.minimum(parent1, parent2)
        y2 = np.maximum(parent1, parent2)
        diff = y2 - y1
        active = (diff > eps) & (rng.random(parent1.shape) <= self.prob_var)
        if not np.any(active):
            return offspring

        safe_diff = diff.clip(min=eps)
        rand = rng.random(parent1.shape)
        c1 = 0.5 * ((y1 + y2) - self._betaq(1.0 + 2.0 * (y1 - self.lower) / safe_diff, rand) * diff)
        c2 = 0.5 * ((y1 + y2) + self._betaq(1.0 + 2.0 * (self.upper - y2) / safe_diff, rand) * diff)

        swap = (rng.random(parent1.shape) <= 0.5) & active
        child1 = np.where(active, c1, parent1)
        child2 = np.where(active, c2, parent2)
        offspring[0] = np.where(swap, child2, child1)
        offspring[1] = np.where(swap, child1, child2)
        return offspring


class SPXCrossover(Crossover):
    """Simplex crossover (SPX): sample inside the parents' simplex expanded by ``expansion``."""

    n_children = 1

    def __init__(self, n_parents: int = 3, expansion: float = 3.0) -> None:
        if n_parents < 2:
            raise ValueError("SPX needs at least 2 parents.")
        self.n_parents = int(n_parents)
        self.expansion = float(expansion)

    def __call__(self, parents: ArrayLike, rng: np.random.Generator) -> np.ndarray:
        p = self._as_parents(parents, expected_parents=self.n_parents)
        centroid = p.mean(axis=0)
        y = centroid + self.expansion * (p - centroid)
        c = np.zeros(p.shape[1])
        for i in range(1, self.n_parents):
            r = rng.random() ** (1.0 / i)
            c = r * (y[i - 1] - y[i] + c)
        return (y[-1] + c)[None, :]


class PCXCrossover(Crossover):
    """
    Parent-centric crossover (PCX).

    The offspring is centred on the last parent: it moves along the direction
    from the parents' centroid to that parent (scaled by ``sigma_zeta``) and
    across it, scaled by the mean perpendicular distance of the other parents
    (``sigma_eta``).
    """

    n_children = 1

    def __init__(self, n_parents: int = 3, sigma_eta: float = 0.1, sigma_zeta: float = 0.1) -> None:
        if n_parents < 2:
            raise ValueError("PCX needs at least 2 parents.")
        self.n_parents = int(n_parents)
        self.sigma_eta = float(sigma_eta)
        self.sigma_zeta = float(sigma_zeta)

    def __call__(self, parents: ArrayLike, rng: np.random.Generator) -> np.ndarray:
        p = self._as_parents(parents, expected_parents=self.n_parents)
        n_vars = p.shape[1]
        x_p = p[-1]
        centroid = p.mean(axis=0)
        d = x_p - centroid
        d_norm = float(np.linalg.norm(d))
        if d_norm < 1.0e-12:
            return x_p.copy()[None, :]
        d_unit = d / d_norm
        rel = p[:-1] - centroid
        along = rel @ d_unit
        perp_sq = np.maximum(np.sum(rel**2, axis=1) - along**2, 0.0)
        mean_perp = float(np.mean(np.sqrt(perp_sq)))
        child = x_p + rng.normal(0.0, self.sigma_zeta) * d
        basis = _orthonormal_complement(d_unit[None, :], n_vars)
        if basis.shape[0] and mean_perp > 0.0:
            child = child + mean_perp * (rng.normal(0.0, self.sigma_eta, size=basis.shape[0]) @ basis)
        return child[None, :]


class UNDXCrossover(Crossover):
    """
    Unimodal normal distribution crossover (UNDX).

    With three or more parents, all but the last define the primary search
    subspace around their centroid; the last parent's distance from that
    subspace scales the orthogonal noise. With two parents the half distance
    between them is used instead.
    """

    n_children = 1

    def __init__(self, n_parents: int = 3, zeta: float = 0.5, eta: float = 0.35) -> None:
        if n_parents < 2:
            raise ValueError("UNDX needs at least 2 parents.")
        self.n_parents = int(n_parents)
        self.zeta = float(zeta)
        self.eta = float(eta)

    def __call__(self, parents: ArrayLike, rng: np.random.Generator) -> np.ndarray:
        p = self._as_parents(parents, expected_parents=self.n_parents)
        n_vars = p.shape[1]
        if self.n_parents == 2:
            primaries = p
            centroid = primaries.mean(axis=0)
            diffs = primaries - centroid
            basis = _orthonormal_complement(diffs, n_vars)
            spread = 0.5 * float(np.linalg.norm(p[1] - p[0]))
        else:
            primaries = p[:-1]
            centroid = primaries.mean(axis=0)
            diffs = primaries - centroid
            basis = _orthonormal_complement(diffs, n_vars)
            spread = float(np.linalg.norm(basis @ (p[-1] - centroid))) if basis.shape[0] else 0.0
        child = centroid + rng.normal(0.0, self.zeta, size=primaries.shape[0]) @ diffs
        if basis.shape[0] and spread > 0.0:
            sigma = self.eta / np.sqrt(n_vars)
            child = child + spread * (rng.normal(0.0, sigma, size=basis.shape[0]) @ basis)
        return child[None, :]


__all__ = [
    "Crossover",
    "DifferentialEvolutionCrossover",
    "PCXCrossover",
    "SBXCrossover",
    "SPXCrossover",
    "UNDXCrossover",
]
