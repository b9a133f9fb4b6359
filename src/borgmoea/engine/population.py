"""
Arena-backed population storage.

All decision vectors live in one ``(capacity, n_var)`` matrix whose rows are
partitioned as::

    [0, pop_size)                          active members, visible to selection
    [pop_size, pop_size + n_transient)     reserved transient slots (archive parent)
    [pop_size + n_transient, capacity)     scratch pool for offspring under construction

Offspring are built in scratch rows handed out by ``acquire_candidate`` and
are either committed into an active slot (``accept``) or returned to the pool
(``release``); no per-offspring allocation happens.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from borgmoea.foundation.fitness import IndexedFitness


@dataclass(eq=False)
class Candidate:
    """
    Scratch record for one offspring.

    ``params`` is a view of the arena row ``slot``; ``index`` is the active slot
    the candidate should be committed to (``-1`` until decided).
    """

    slot: int
    params: np.ndarray
    index: int = -1
    fitness: IndexedFitness | None = None
    tag: int | None = None
    isnew: bool = True


class Population:
    """
    Fixed-capacity population with transient and scratch rows.

    Args:
        X: Initial active members, shape ``(pop_size, n_var)``. They start
            unevaluated; callers fill fitness via ``accept`` or ``set_member``.
        n_transient: Reserved rows right after the active range.
        n_scratch: Size of the scratch pool; must cover the largest number of
            offspring in flight at once.
    """

    def __init__(self, X: np.ndarray, *, n_transient: int = 1, n_scratch: int = 2) -> None:
        X = np.asarray(X, dtype=float)
        if X.ndim != 2 or X.shape[0] == 0:
            raise ValueError("Initial population must have shape (pop_size, n_var) with pop_size > 0.")
        if n_transient < 0 or n_scratch <= 0:
            raise ValueError("n_transient must be >= 0 and n_scratch must be positive.")
        self.n_var = int(X.shape[1])
        self.n_transient = int(n_transient)
        self.n_scratch = int(n_scratch)
        self._pop_size = 0
        self._params = np.empty((0, self.n_var))
        self._fitness: list[IndexedFitness | None] = []
        self._tags: list[int | None] = []
        self._free: list[int] = []
        self._outstanding: dict[int, Candidate] = {}
        self._layout(int(X.shape[0]))
        self._params[: X.shape[0]] = X

    def _layout(self, pop_size: int) -> None:
        keep = min(self._pop_size, pop_size)
        capacity = pop_size + self.n_transient + self.n_scratch
        params = np.zeros((capacity, self.n_var), dtype=float)
        params[:keep] = self._params[:keep]
        fitness: list[IndexedFitness | None] = [None] * capacity
        fitness[:keep] = self._fitness[:keep]
        tags: list[int | None] = [None] * capacity
        tags[:keep] = self._tags[:keep]
        self._params = params
        self._fitness = fitness
        self._tags = tags
        self._pop_size = pop_size
        first_scratch = pop_size + self.n_transient
        self._free = list(range(capacity - 1, first_scratch - 1, -1))

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    @property
    def pop_size(self) -> int:
        return self._pop_size

    def __len__(self) -> int:
        return self._pop_size

    @property
    def capacity(self) -> int:
        return int(self._params.shape[0])

    @property
    def n_outstanding(self) -> int:
        return len(self._outstanding)

    def transient_range(self) -> range:
        return range(self._pop_size, self._pop_size + self.n_transient)

    def resize(self, new_size: int) -> None:
        """
        Grow or shrink the active range, keeping the first ``min(old, new)`` members.

        Newly exposed slots are unevaluated until filled. Transient slots are
        cleared. Not allowed while candidates are outstanding.
        """
        if new_size <= 0:
            raise ValueError("Population size must be positive.")
        if self._outstanding:
            raise RuntimeError(f"Cannot resize with {len(self._outstanding)} outstanding candidates.")
        self._layout(int(new_size))

    # ------------------------------------------------------------------
    # Member access
    # ------------------------------------------------------------------

    def _check_index(self, index: int, *, allow_transient: bool = False) -> int:
        upper = self._pop_size + (self.n_transient if allow_transient else 0)
        if not 0 <= index < upper:
            raise IndexError(f"Population index {index} out of range [0, {upper}).")
        return int(index)

    def params(self, index: int) -> np.ndarray:
        return self._params[self._check_index(index, allow_transient=True)]

    def fitness(self, index: int) -> IndexedFitness | None:
        return self._fitness[self._check_index(index, allow_transient=True)]

    def tag(self, index: int) -> int | None:
        return self._tags[self._check_index(index, allow_transient=True)]

    def set_member(
        self,
        index: int,
        params: np.ndarray,
        fitness: IndexedFitness | None,
        tag: int | None = None,
    ) -> None:
        index = self._check_index(index, allow_transient=True)
        self._params[index] = params
        self._fitness[index] = fitness
        self._tags[index] = tag

    @property
    def X(self) -> np.ndarray:
        """View of the active decision vectors."""
        return self._params[: self._pop_size]

    @property
    def F(self) -> np.ndarray:
        if not self.is_evaluated():
            raise ValueError("Population contains unevaluated members.")
        return np.asarray([f.values for f in self._fitness[: self._pop_size]], dtype=float)

    def is_evaluated(self) -> bool:
        return all(f is not None for f in self._fitness[: self._pop_size])

    # ------------------------------------------------------------------
    # Scratch pool
    # ------------------------------------------------------------------

    def acquire_candidate(self) -> Candidate:
        if not self._free:
            raise RuntimeError(
                f"Scratch pool exhausted ({self.n_scratch} rows); increase n_scratch to the maximum offspring per step."
            )
        slot = self._free.pop()
        candidate = Candidate(slot=slot, params=self._params[slot])
        self._outstanding[slot] = candidate
        return candidate

    def _reclaim(self, candidate: Candidate) -> None:
        if self._outstanding.get(candidate.slot) is not candidate:
            raise ValueError(f"Candidate in scratch row {candidate.slot} is not outstanding.")
        del self._outstanding[candidate.slot]
        self._free.append(candidate.slot)

    def accept(self, candidate: Candidate, index: int | None = None) -> None:
        """Commit an evaluated candidate into an active slot and return its row to the pool."""
        target = candidate.index if index is None else index
        target = self._check_index(target)
        if candidate.fitness is None:
            raise ValueError("Only evaluated candidates can be accepted into the population.")
        self._reclaim(candidate)
        self._params[target] = self._params[candidate.slot]
        self._fitness[target] = candidate.fitness
        self._tags[target] = candidate.tag
        candidate.index = target
        candidate.isnew = False

    def release(self, candidate: Candidate) -> None:
        """Discard a candidate without committing it."""
        self._reclaim(candidate)


__all__ = ["Candidate", "Population"]
