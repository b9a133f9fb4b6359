"""
Borg MOEA helper functions.

Pure functions for the population acceptance scan and the restart rules.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable

import numpy as np


class Acceptance(Enum):
    """Outcome of offering one offspring to the population."""

    REPLACE_DOMINATED = "replace_dominated"
    REPLACE_RANDOM = "replace_random"
    REJECT = "reject"


def scan_population(
    order: np.ndarray,
    compare: Callable[[int], int],
    rng: np.random.Generator,
) -> tuple[Acceptance, int]:
    """
    Walk population slots in random order until a dominance relation is found.

    ``order`` is a permutation of ``range(len(order))`` shuffled in place with an
    incremental Fisher-Yates step per visited slot, so repeated scans reuse it.
    ``compare(ix)`` returns <0 when the offspring beats slot ``ix``, >0 when
    the slot beats the offspring and 0 otherwise.

    Returns
    -------
    tuple[Acceptance, int]
        The decision and the slot it applies to (the dominating slot for ``REJECT``).
    """
    pop_size = int(order.shape[0])
    if pop_size == 0:
        raise ValueError("Cannot scan an empty population.")
    for i in range(pop_size):
        j = int(rng.integers(i, pop_size))
        ix = int(order[j])
        if j > i:
            order[j] = order[i]
            order[i] = ix
        comp = compare(ix)
        if comp > 0:
            return Acceptance.REJECT, ix
        if comp < 0:
            # first dominated slot wins; the rest of the population is not examined
            return Acceptance.REPLACE_DOMINATED, ix
    return Acceptance.REPLACE_RANDOM, int(rng.integers(pop_size))


def ratio_drifted(pop_size: int, archive_size: int, gamma: float, gamma_delta: float) -> bool:
    """True when ``|pop_size - gamma * |A|| >= gamma_delta * |A|`` for a non-empty archive."""
    if archive_size <= 0:
        return False
    return abs(pop_size - gamma * archive_size) >= gamma_delta * archive_size


def restart_pop_size(min_pop_size: int, gamma: float, archive_size: int) -> int:
    return max(int(min_pop_size), math.ceil(gamma * archive_size))


__all__ = ["Acceptance", "scan_population", "ratio_drifted", "restart_pop_size"]
