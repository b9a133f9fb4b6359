"""
Borg MOEA state container.

The state holds the counters and the reusable population-check permutation
that persist between ``step()`` calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass
class BorgState:
    """
    Mutable stepping state of a Borg MOEA run.

    Attributes
    ----------
    n_steps : int
        Steps taken so far.
    n_restarts : int
        Restarts performed so far.
    last_restart_check : int
        Step at which the restart conditions were last checked.
    last_weights_update : int
        Step at which operator weights were last recomputed.
    rand_check_order : np.ndarray
        Permutation of population slots walked by the acceptance scan. It is
        shuffled incrementally on every scan and rebuilt when the population
        size changes.
    n_replaced_dominated, n_replaced_random, n_rejected : int
        Acceptance outcome counters over all offspring.
    initialized : bool
        Whether every active population slot has been evaluated. Cleared by a
        restart until its refill is evaluated.
    refill_pending : bool
        A restart refill is still being evaluated; archive progress is reset
        once it completes.
    """

    n_steps: int = 0
    n_restarts: int = 0
    last_restart_check: int = 0
    last_weights_update: int = 0
    rand_check_order: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.intp))
    n_replaced_dominated: int = 0
    n_replaced_random: int = 0
    n_rejected: int = 0
    initialized: bool = False
    refill_pending: bool = False

    @property
    def n_offspring(self) -> int:
        return self.n_replaced_dominated + self.n_replaced_random + self.n_rejected


__all__ = ["BorgState"]
