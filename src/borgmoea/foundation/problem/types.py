from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

import numpy as np


@runtime_checkable
class ProblemProtocol(Protocol):
    """Structural type accepted by the optimizer."""

    n_var: int
    n_obj: int

    def evaluate(self, x: np.ndarray) -> Sequence[float]: ...

    def bounds(self) -> tuple[np.ndarray, np.ndarray]: ...


__all__ = ["ProblemProtocol"]
