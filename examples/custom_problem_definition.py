"""
Custom two-objective problem stepped by hand with BorgMOEA.

Shows the minimal problem interface (n_var, n_obj, bounds, evaluate) and how
to drive the optimizer step by step, reading the archive and the operator
weights along the way.

Usage:
    python examples/custom_problem_definition.py
"""
from __future__ import annotations

import numpy as np

from borgmoea import BorgConfig, BorgMOEA


class CustomBiObjectiveProblem:
    """
    Simple convex/concave two-objective toy problem.

    Decision variables:
        x0, x1 in [0, 1]
    Objectives (minimize):
        f1 = x0
        f2 = (1 + x1) * (1 - sqrt(x0)) + 0.1 * sin(5 * x0)
    """

    def __init__(self) -> None:
        self.n_var = 2
        self.n_obj = 2

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        return np.zeros(2), np.ones(2)

    def evaluate(self, x: np.ndarray) -> tuple[float, float]:
        f1 = float(x[0])
        f2 = (1.0 + x[1]) * (1.0 - np.sqrt(x[0])) + 0.1 * np.sin(5.0 * x[0])
        return f1, float(f2)


def main() -> None:
    cfg = (
        BorgConfig()
        .pop_size(40)
        .epsilon([0.01, 0.01])
        .operators("sbx", ("pcx", {"n_parents": 3}), "de")
        .operators_update_period(50)
        .fixed()
    )
    algo = BorgMOEA(CustomBiObjectiveProblem(), cfg, seed=7)
    for step in range(1, 3001):
        algo.step()
        if step % 500 == 0:
            print(f"step {step}: {algo.trace_state()}")

    X, F = algo.archive.contents()
    order = np.argsort(F[:, 0])
    for x, f in zip(X[order][:5], F[order][:5]):
        print(f"x={np.round(x, 4)} f={np.round(f, 4)}")


if __name__ == "__main__":
    main()
