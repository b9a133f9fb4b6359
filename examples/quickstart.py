"""
Minimal borgmoea quickstart example.

Runs the Borg MOEA on the ZDT1 benchmark problem and prints the archive.

Usage:
    python examples/quickstart.py

Requirements:
    pip install -e .
"""
from __future__ import annotations

from borgmoea import BorgConfig, ZDT1Problem, configure_borg_logging, optimize


def main():
    configure_borg_logging()

    # 1. Define the problem
    problem = ZDT1Problem(n_var=30)

    # 2. Configure the algorithm
    config = BorgConfig().pop_size(100).epsilon(0.01).fixed()

    # 3. Run optimization
    result = optimize(problem, config, max_evaluations=20000, seed=42, trace_interval=2000)

    # 4. Analyze results
    F = result.F  # epsilon-box archive objectives
    print(f"Archive holds {len(F)} solutions after {result.n_evals} evaluations")
    print(f"  f1: [{F[:, 0].min():.4f}, {F[:, 0].max():.4f}]")
    print(f"  f2: [{F[:, 1].min():.4f}, {F[:, 1].max():.4f}]")
    print(f"Restarts: {result.n_restarts}")
    print("Knee point:", result.best("knee")["F"])


if __name__ == "__main__":
    main()
