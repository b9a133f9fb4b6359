"""End-to-end checks of the budgeted optimize() helper."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from borgmoea import BorgConfig, ConfigurationError, ZDT1Problem, optimize
from borgmoea.foundation.metrics import nondominated_mask


@pytest.mark.smoke
def test_optimize_zdt1_smoke():
    cfg = BorgConfig().pop_size(20).epsilon(0.01).fixed()
    result = optimize(ZDT1Problem(n_var=6), cfg, max_evaluations=1500, seed=1)

    assert result.n_evals >= 1500
    assert result.stop_reason.startswith("Max number of function evaluations")
    assert len(result) > 0
    assert result.X.shape == (len(result), 6)
    assert result.F.shape == (len(result), 2)
    assert np.all(nondominated_mask(result.F))
    assert result.best_fitness is not None
    assert result.best_candidate.shape == (6,)
    assert result.meta["seed"] == 1
    assert result.meta["config"]["pop_size"] == 20


@pytest.mark.slow
def test_optimize_converges_towards_zdt1_front():
    result = optimize(ZDT1Problem(n_var=10), {"ϵ": 0.01, "PopulationSize": 50}, max_evaluations=20000, seed=3)
    f1, f2 = result.F[:, 0], result.F[:, 1]
    gap = f2 - (1.0 - np.sqrt(f1))
    assert float(np.median(gap)) < 0.1


def test_optimize_step_budget():
    result = optimize(ZDT1Problem(n_var=4), {"PopulationSize": 10}, max_steps=25, seed=0)
    assert result.n_steps == 25
    assert "steps" in result.stop_reason


def test_optimize_time_budget():
    result = optimize(ZDT1Problem(n_var=4), {"PopulationSize": 10}, max_time=0.05, seed=0)
    assert result.elapsed_time >= 0.05
    assert "time" in result.stop_reason


def test_optimize_requires_a_budget():
    with pytest.raises(ConfigurationError, match="budget"):
        optimize(ZDT1Problem(n_var=4))
    with pytest.raises(ConfigurationError):
        optimize(ZDT1Problem(n_var=4), max_steps=0)


def test_optimize_is_reproducible():
    a = optimize(ZDT1Problem(n_var=4), {"PopulationSize": 10}, max_steps=100, seed=9)
    b = optimize(ZDT1Problem(n_var=4), {"PopulationSize": 10}, max_steps=100, seed=9)
    np.testing.assert_allclose(a.F, b.F)


def test_trace_interval_logs_state(caplog):
    caplog.set_level(logging.INFO, logger="borgmoea.experiment.optimize")
    optimize(ZDT1Problem(n_var=4), {"PopulationSize": 10}, max_steps=10, seed=0, trace_interval=5)
    traced = [r.getMessage() for r in caplog.records if "pop.size=" in r.getMessage()]
    assert len(traced) == 2
    assert traced[0].startswith("step=5 ")
