from __future__ import annotations

import math
from collections.abc import Callable

import numpy as np


def initial_tournament_size(tau: float, pop_size: int) -> int:
    """``ceil(tau * pop_size)``, never below 2 so a tournament always compares."""
    return max(2, math.ceil(tau * pop_size))


def restart_tournament_size(tau: float, pop_size: int) -> int:
    """``max(2, floor(tau * pop_size))``, the size used after a restart."""
    return max(2, math.floor(tau * pop_size))


class TournamentSelection:
    """
    Tournament selection using a comparator.
    comparator(a, b) returns <0 if a better than b, >0 if b better, 0 if tie.

    The tournament size is mutable; the optimizer shrinks or grows it on restart.
    """

    def __init__(
        self,
        tournament_size: int,
        comparator: Callable[[int, int], int],
        rng: np.random.Generator | None = None,
    ) -> None:
        self.comparator = comparator
        self.rng = rng or np.random.default_rng()
        self.tournament_size = tournament_size

    @property
    def tournament_size(self) -> int:
        return self._size

    @tournament_size.setter
    def tournament_size(self, value: int) -> None:
        if value <= 0:
            raise ValueError("tournament_size must be positive.")
        self._size = int(value)

    def __call__(self, pop_size: int, n_parents: int) -> list[int]:
        if pop_size <= 0:
            raise ValueError("population is empty.")
        rng = self.rng
        selected: list[int] = []
        for _ in range(n_parents):
            contenders = rng.integers(0, pop_size, size=self._size)
            best = int(contenders[0])
            for idx in contenders[1:]:
                if self.comparator(int(idx), best) < 0:
                    best = int(idx)
            selected.append(best)
        return selected


__all__ = ["TournamentSelection", "initial_tournament_size", "restart_tournament_size"]
