"""
Budget-driven run helper around ``BorgMOEA.step()``.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Mapping

import numpy as np

from borgmoea.engine.algorithm.borg.borg import BorgMOEA
from borgmoea.engine.algorithm.config.borg import BorgConfigData
from borgmoea.experiment.optimization_result import OptimizationResult
from borgmoea.foundation.exceptions import ConfigurationError

if TYPE_CHECKING:
    from borgmoea.foundation.problem.types import ProblemProtocol


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


def _stop_reason(
    algo: BorgMOEA,
    start: float,
    max_evaluations: int | None,
    max_steps: int | None,
    max_time: float | None,
) -> str | None:
    if max_evaluations is not None and algo.n_evals >= max_evaluations:
        return f"Max number of function evaluations ({max_evaluations}) reached"
    if max_steps is not None and algo.n_steps >= max_steps:
        return f"Max number of steps ({max_steps}) reached"
    if max_time is not None and time.perf_counter() - start >= max_time:
        return f"Max time ({max_time} s) reached"
    return None


def build_result(algo: BorgMOEA, *, stop_reason: str, elapsed_time: float, meta: Mapping[str, Any] | None = None) -> OptimizationResult:
    """Collect the archive, population and counters of ``algo`` into an ``OptimizationResult``."""
    X, F = algo.archive.contents()
    best = algo.archive.best_member()
    pop = algo.population
    payload = {
        "X": X,
        "F": F,
        "best_candidate": None if best is None else best.params.copy(),
        "best_fitness": None if best is None else best.fitness.values,
        "population_X": pop.X.copy(),
        "population_F": pop.F if pop.is_evaluated() else None,
        "weights": algo.weights.probs(),
        "weights_trace": list(algo.weights_trace),
        "n_steps": algo.n_steps,
        "n_evals": algo.n_evals,
        "n_restarts": algo.n_restarts,
        "elapsed_time": elapsed_time,
        "stop_reason": stop_reason,
    }
    run_meta = {"algorithm": "borg_moea", "config": algo.cfg.to_dict()}
    run_meta.update(meta or {})
    return OptimizationResult(payload, meta=run_meta)


def optimize(
    problem: "ProblemProtocol",
    config: BorgConfigData | Mapping[str, Any] | None = None,
    *,
    max_evaluations: int | None = None,
    max_steps: int | None = None,
    max_time: float | None = None,
    seed: int | None = None,
    trace_interval: int = 0,
) -> OptimizationResult:
    """
    Run Borg MOEA on ``problem`` until a budget is exhausted.

    Args:
        problem: Problem to minimize.
        config: ``BorgConfigData`` or a mapping accepted by ``BorgConfigData.from_dict``.
        max_evaluations: Stop once this many objective evaluations were made.
        max_steps: Stop after this many steps.
        max_time: Stop after this many seconds of wall time.
        seed: Seed for reproducible runs.
        trace_interval: Log ``trace_state()`` at INFO level every this many steps (0 disables).

    Returns:
        OptimizationResult with the archive as the returned front.
    """
    if max_evaluations is None and max_steps is None and max_time is None:
        raise ConfigurationError(
            "No stopping budget given.",
            "Pass max_evaluations, max_steps or max_time",
        )
    for name, value in (("max_evaluations", max_evaluations), ("max_steps", max_steps), ("max_time", max_time)):
        if value is not None and value <= 0:
            raise ConfigurationError(f"{name} must be positive, got {value}.")
    cfg = config if isinstance(config, BorgConfigData) else BorgConfigData.from_dict(config)
    algo = BorgMOEA(problem, cfg, rng=np.random.default_rng(seed))

    start = time.perf_counter()
    algo.initialize()
    reason = _stop_reason(algo, start, max_evaluations, max_steps, max_time)
    while reason is None:
        algo.step()
        if trace_interval and algo.n_steps % trace_interval == 0:
            _logger().info("step=%d evals=%d %s", algo.n_steps, algo.n_evals, algo.trace_state())
        reason = _stop_reason(algo, start, max_evaluations, max_steps, max_time)
    elapsed = time.perf_counter() - start
    _logger().info("Optimization stopped after %d steps (%.3f s): %s", algo.n_steps, elapsed, reason)
    return build_result(algo, stop_reason=reason, elapsed_time=elapsed, meta={"seed": seed})


__all__ = ["optimize", "build_result"]
