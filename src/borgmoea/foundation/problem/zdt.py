from __future__ import annotations

import numpy as np

from borgmoea.foundation.exceptions import ProblemDimensionError
from borgmoea.foundation.problem.base import Problem


class ZDT1Problem(Problem):
    """ZDT1: convex front ``f2 = 1 - sqrt(f1)`` at ``x[1:] == 0``."""

    def __init__(self, n_var: int = 30) -> None:
        if n_var < 2:
            raise ProblemDimensionError("ZDT1 needs at least 2 variables.", n_var=n_var, n_obj=2)
        self.n_var = int(n_var)
        self.n_obj = 2
        self.xl = 0.0
        self.xu = 1.0

    def objectives(self, x: np.ndarray) -> tuple[float, float]:
        f1 = float(x[0])
        g = 1.0 + 9.0 * float(np.mean(x[1:]))
        f2 = g * (1.0 - np.sqrt(f1 / g))
        return f1, float(f2)


class ZDT2Problem(Problem):
    """ZDT2: non-convex front ``f2 = 1 - f1**2`` at ``x[1:] == 0``."""

    def __init__(self, n_var: int = 30) -> None:
        if n_var < 2:
            raise ProblemDimensionError("ZDT2 needs at least 2 variables.", n_var=n_var, n_obj=2)
        self.n_var = int(n_var)
        self.n_obj = 2
        self.xl = 0.0
        self.xu = 1.0

    def objectives(self, x: np.ndarray) -> tuple[float, float]:
        f1 = float(x[0])
        g = 1.0 + 9.0 * float(np.mean(x[1:]))
        f2 = g * (1.0 - (f1 / g) ** 2)
        return f1, float(f2)


class SchafferN1Problem(Problem):
    # f1 = sum(x^2), f2 = sum((x - 2)^2); Pareto set is the segment [0, 2]^n_var diagonal
    def __init__(self, n_var: int = 1, bound: float = 10.0) -> None:
        self.n_var = int(n_var)
        self.n_obj = 2
        self.xl = -float(bound)
        self.xu = float(bound)

    def objectives(self, x: np.ndarray) -> tuple[float, float]:
        return float(np.sum(x**2)), float(np.sum((x - 2.0) ** 2))


__all__ = ["ZDT1Problem", "ZDT2Problem", "SchafferN1Problem"]
