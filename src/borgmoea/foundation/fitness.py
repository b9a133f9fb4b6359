"""
Epsilon-box fitness scheme.

Objective tuples are minimized. Each fitness carries the index of the
epsilon box it falls into, so archive and population comparisons can be
done on integer box coordinates first and only fall back to raw values
when two points share a box.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from borgmoea.foundation.exceptions import ConfigurationError, InvalidParameterError, ProblemError


@dataclass(frozen=True)
class IndexedFitness:
    """
    Objective values plus their epsilon-box coordinates.

    Attributes:
        values: Raw objective values (minimized).
        index: Box coordinates, ``floor(values / epsilon)`` per objective.
        dist: Distance of ``values / epsilon`` from the lower corner of the box.
            Used to pick a single representative among points sharing a box.
        agg: Sum of the objective values; ranks archive members for ``best_*``.
    """

    values: tuple[float, ...]
    index: tuple[int, ...]
    dist: float
    agg: float

    @property
    def n_obj(self) -> int:
        return len(self.values)

    def as_array(self) -> np.ndarray:
        return np.asarray(self.values, dtype=float)


def pareto_compare(u: Sequence[float], v: Sequence[float]) -> int:
    """Return -1 if ``u`` dominates ``v``, 1 if ``v`` dominates ``u``, 0 otherwise."""
    u_better = False
    v_better = False
    for a, b in zip(u, v):
        if a < b:
            u_better = True
        elif b < a:
            v_better = True
        if u_better and v_better:
            return 0
    if u_better:
        return -1
    if v_better:
        return 1
    return 0


def pareto_dominates(u: Sequence[float], v: Sequence[float]) -> bool:
    """True when ``u`` is no worse than ``v`` everywhere and strictly better somewhere."""
    return pareto_compare(u, v) < 0


def box_dominates(a: Sequence[int], b: Sequence[int]) -> bool:
    """Epsilon-box dominance on integer box coordinates."""
    return pareto_compare(a, b) < 0


class EpsBoxFitnessScheme:
    """
    Multi-objective (tuple) fitness scheme with epsilon-box indexing.

    Args:
        n_obj: Number of objectives.
        epsilon: Box width, either a scalar shared by all objectives or one
            width per objective. All widths must be strictly positive.
    """

    def __init__(self, n_obj: int, epsilon: float | Sequence[float] = 0.1) -> None:
        if int(n_obj) < 1:
            raise ConfigurationError(
                f"Epsilon-box fitness requires at least one objective, got {n_obj}.",
                "Use a problem that returns a tuple of objective values",
            )
        self.n_obj = int(n_obj)
        eps = np.array(epsilon, dtype=float, ndmin=1)
        if eps.ndim != 1:
            raise InvalidParameterError("epsilon", epsilon, "a scalar or a 1-D sequence")
        if eps.size == 1:
            eps = np.full(self.n_obj, float(eps[0]))
        if eps.size != self.n_obj:
            raise InvalidParameterError("epsilon", list(eps), f"of length 1 or {self.n_obj}")
        if not np.all(np.isfinite(eps)) or np.any(eps <= 0.0):
            raise InvalidParameterError("epsilon", list(eps), "strictly positive")
        self.epsilon = eps
        self.epsilon.setflags(write=False)

    def __repr__(self) -> str:
        return f"EpsBoxFitnessScheme(n_obj={self.n_obj}, epsilon={self.epsilon.tolist()})"

    def box_index(self, values: Sequence[float]) -> tuple[int, ...]:
        scaled = np.asarray(values, dtype=float) / self.epsilon
        return tuple(int(i) for i in np.floor(scaled))

    def make(self, values: Sequence[float]) -> IndexedFitness:
        """Wrap raw objective values into an ``IndexedFitness``; non-finite values raise ``ProblemError``."""
        vals = tuple(float(v) for v in values)
        if not all(math.isfinite(v) for v in vals):
            raise ProblemError(
                f"Cannot place non-finite objectives {list(vals)} in an epsilon box.",
                "Objective functions must return finite values",
                {"values": list(vals)},
            )
        scaled = np.asarray(vals, dtype=float) / self.epsilon
        corner = np.floor(scaled)
        return IndexedFitness(
            values=vals,
            index=tuple(int(i) for i in corner),
            dist=float(np.linalg.norm(scaled - corner)),
            agg=math.fsum(vals),
        )

    def hat_compare(self, a: IndexedFitness, b: IndexedFitness) -> tuple[int, bool]:
        """
        Compare two indexed fitnesses.

        Returns ``(comp, same_box)`` where ``comp`` is -1 when ``a`` wins, 1 when
        ``b`` wins and 0 when neither does. Points in different boxes are compared
        by box dominance. Points sharing a box are compared by Pareto dominance
        and then by ``dist``.
        """
        if a.index == b.index:
            comp = pareto_compare(a.values, b.values)
            if comp == 0 and a.dist != b.dist:
                comp = -1 if a.dist < b.dist else 1
            return comp, True
        return pareto_compare(a.index, b.index), False

    def compare(self, a: IndexedFitness, b: IndexedFitness) -> int:
        return self.hat_compare(a, b)[0]


__all__ = [
    "IndexedFitness",
    "EpsBoxFitnessScheme",
    "pareto_compare",
    "pareto_dominates",
    "box_dominates",
]
