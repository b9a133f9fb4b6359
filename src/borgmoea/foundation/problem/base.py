"""
Base classes for black-box multi-objective problems.
"""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

from borgmoea.foundation.exceptions import ProblemDimensionError
from borgmoea.foundation.search_space import RangePerDimSearchSpace


class Problem:
    """Base class for class-based optimization problems.

    **Required:** set ``n_var``, ``n_obj``, ``xl``, ``xu`` in ``__init__`` and
    override :meth:`objectives`.

    Example::

        import numpy as np
        from borgmoea import Problem

        class TwoSpheres(Problem):
            def __init__(self):
                self.n_var = 3
                self.n_obj = 2
                self.xl = np.zeros(3)
                self.xu = np.ones(3)

            def objectives(self, x):
                # x: (n_var,) single candidate solution
                return float(np.sum(x ** 2)), float(np.sum((x - 1) ** 2))
    """

    n_var: int
    n_obj: int
    xl: float | np.ndarray
    xu: float | np.ndarray

    def objectives(self, x: np.ndarray) -> Sequence[float]:
        """Compute the ``n_obj`` objective values (to minimize) of one solution.

        Override this method in your subclass.
        """
        raise NotImplementedError(
            f"{type(self).__name__} must implement objectives(self, x)."
        )

    def evaluate(self, x: np.ndarray) -> tuple[float, ...]:
        """Framework evaluation entry point. Override :meth:`objectives` instead."""
        values = np.asarray(self.objectives(np.asarray(x, dtype=float)), dtype=float).ravel()
        if values.shape[0] != self.n_obj:
            raise ProblemDimensionError(
                f"{type(self).__name__}.objectives returned {values.shape[0]} values, expected {self.n_obj}.",
                n_var=self.n_var,
                n_obj=self.n_obj,
            )
        return tuple(float(v) for v in values)

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        lower = np.broadcast_to(np.asarray(self.xl, dtype=float), (self.n_var,))
        upper = np.broadcast_to(np.asarray(self.xu, dtype=float), (self.n_var,))
        return lower.copy(), upper.copy()

    def search_space(self) -> RangePerDimSearchSpace:
        lower, upper = self.bounds()
        return RangePerDimSearchSpace(lower, upper)


class FunctionProblem(Problem):
    """Wrap a plain callable ``f(x) -> tuple`` as a :class:`Problem`."""

    def __init__(
        self,
        fn: Callable[[np.ndarray], Sequence[float]],
        *,
        n_var: int,
        n_obj: int,
        xl: float | Sequence[float] = 0.0,
        xu: float | Sequence[float] = 1.0,
        name: str | None = None,
    ) -> None:
        if n_var <= 0:
            raise ProblemDimensionError(f"n_var must be positive, got {n_var}.", n_var=n_var, n_obj=n_obj)
        if n_obj <= 0:
            raise ProblemDimensionError(f"n_obj must be positive, got {n_obj}.", n_var=n_var, n_obj=n_obj)
        self.fn = fn
        self.n_var = int(n_var)
        self.n_obj = int(n_obj)
        self.xl = np.asarray(xl, dtype=float)
        self.xu = np.asarray(xu, dtype=float)
        self.name = name or getattr(fn, "__name__", "function")

    def __repr__(self) -> str:
        return f"FunctionProblem({self.name!r}, n_var={self.n_var}, n_obj={self.n_obj})"

    def objectives(self, x: np.ndarray) -> Sequence[float]:
        return self.fn(x)


__all__ = ["Problem", "FunctionProblem"]
