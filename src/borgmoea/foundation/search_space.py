"""
Box-bounded continuous search spaces.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from borgmoea.foundation.exceptions import BoundsError


class RangePerDimSearchSpace:
    """
    Search space defined by a ``[lower, upper]`` range for each dimension.

    Examples:
        space = RangePerDimSearchSpace([0.0, -1.0], [1.0, 1.0])
        space = RangePerDimSearchSpace.from_ranges([(0.0, 1.0)] * 5)
        space = RangePerDimSearchSpace.symmetric(5, (-5.0, 5.0))
    """

    def __init__(self, lower: Sequence[float] | np.ndarray, upper: Sequence[float] | np.ndarray) -> None:
        lo = np.array(lower, dtype=float, ndmin=1)
        hi = np.array(upper, dtype=float, ndmin=1)
        if lo.shape != hi.shape or lo.ndim != 1:
            raise BoundsError(f"lower/upper must be 1-D arrays of equal length, got {lo.shape} and {hi.shape}.")
        if lo.size == 0:
            raise BoundsError("Search space must have at least one dimension.")
        if not (np.all(np.isfinite(lo)) and np.all(np.isfinite(hi))):
            raise BoundsError("Search space bounds must be finite.")
        if np.any(lo > hi):
            bad = np.flatnonzero(lo > hi).tolist()
            raise BoundsError(f"lower > upper for dimensions {bad}.")
        self.lower = lo
        self.upper = hi
        self.deltas = hi - lo
        for arr in (self.lower, self.upper, self.deltas):
            arr.setflags(write=False)

    @classmethod
    def from_ranges(cls, ranges: Iterable[tuple[float, float]]) -> "RangePerDimSearchSpace":
        pairs = list(ranges)
        return cls([p[0] for p in pairs], [p[1] for p in pairs])

    @classmethod
    def symmetric(cls, n_dims: int, bounds: tuple[float, float] = (0.0, 1.0)) -> "RangePerDimSearchSpace":
        return cls(np.full(int(n_dims), bounds[0]), np.full(int(n_dims), bounds[1]))

    def __repr__(self) -> str:
        return f"RangePerDimSearchSpace(n_dims={self.n_dims})"

    @property
    def n_dims(self) -> int:
        return int(self.lower.shape[0])

    def dimensions(self) -> int:
        return self.n_dims

    def ranges(self) -> list[tuple[float, float]]:
        return [(float(lo), float(hi)) for lo, hi in zip(self.lower, self.upper)]

    def sample(self, n: int, rng: np.random.Generator) -> np.ndarray:
        """Uniformly sample ``n`` points, returned with shape ``(n, n_dims)``."""
        return self.lower + self.deltas * rng.random((int(n), self.n_dims))

    def sample_lhs(self, n: int, rng: np.random.Generator) -> np.ndarray:
        """Latin hypercube sample of ``n`` points; each dimension has one point per stratum."""
        n = int(n)
        samples = np.empty((n, self.n_dims), dtype=float)
        for j in range(self.n_dims):
            strata = (np.arange(n, dtype=float) + rng.random(n)) / n
            rng.shuffle(strata)
            samples[:, j] = strata
        return self.lower + samples * self.deltas

    def feasible(self, x: np.ndarray) -> np.ndarray:
        """Coordinate-wise projection onto the box (returns a new array)."""
        return np.clip(x, self.lower, self.upper)

    feasible_projection = feasible

    def contains(self, x: np.ndarray) -> bool:
        arr = np.asarray(x, dtype=float)
        if arr.shape[-1] != self.n_dims:
            raise BoundsError(f"Point has {arr.shape[-1]} dimensions, search space has {self.n_dims}.")
        return bool(np.all((self.lower <= arr) & (arr <= self.upper)))

    def __contains__(self, x: object) -> bool:
        return self.contains(np.asarray(x, dtype=float))

    def concat(self, other: "RangePerDimSearchSpace") -> "RangePerDimSearchSpace":
        return RangePerDimSearchSpace(
            np.concatenate([self.lower, other.lower]),
            np.concatenate([self.upper, other.upper]),
        )


__all__ = ["RangePerDimSearchSpace"]
