from __future__ import annotations

from typing import Literal, overload

import numpy as np


def nondominated_mask(F: np.ndarray) -> np.ndarray:
    """
    Minimization assumed.
    Returns boolean mask for nondominated points. O(n^2) broadcast.
    """
    F = np.asarray(F, dtype=float)
    n = F.shape[0]
    if n == 0:
        return np.zeros((0,), dtype=bool)
    # dominates(a,b) if all(a<=b) and any(a<b)
    le = F[:, None, :] <= F[None, :, :]
    lt = F[:, None, :] < F[None, :, :]
    dom = np.all(le, axis=2) & np.any(lt, axis=2)
    dominated = np.any(dom, axis=0)
    return ~dominated


@overload
def pareto_filter(F: np.ndarray | None, *, return_indices: Literal[False] = False) -> np.ndarray | None: ...


@overload
def pareto_filter(F: np.ndarray | None, *, return_indices: Literal[True]) -> tuple[np.ndarray, np.ndarray]: ...


def pareto_filter(F: np.ndarray | None, *, return_indices: bool = False) -> np.ndarray | tuple[np.ndarray, np.ndarray] | None:
    """
    Return the non-dominated subset of points (first Pareto front).

    Args:
        F: Objective values array (n_solutions, n_objectives) or None.
        return_indices: When True, also return indices of the front in F.

    Returns:
        Front array, or (front, indices) when return_indices is True.
    """
    if F is None:
        if return_indices:
            return np.empty((0, 0)), np.array([], dtype=int)
        return None
    F = np.asarray(F)
    if F.size == 0 or F.ndim < 2:
        if return_indices:
            n = int(F.shape[0]) if F.ndim > 0 else 0
            return F, np.arange(n, dtype=int)
        return F
    idx = np.flatnonzero(nondominated_mask(F))
    front = F[idx]
    return (front, idx) if return_indices else front


__all__ = ["nondominated_mask", "pareto_filter"]
