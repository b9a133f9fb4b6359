"""Behavioural tests for the Borg MOEA step loop, restarts and operator adaptation."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from borgmoea import BorgConfig, BorgConfigData, BorgMOEA, FunctionProblem, ZDT1Problem, borg_moea
from borgmoea.engine.algorithm.borg import Acceptance
from borgmoea.foundation.exceptions import ConfigurationError, ProblemDimensionError, ProblemError
from borgmoea.foundation.fitness import box_dominates
from borgmoea.operators.registry import DEFAULT_OPERATORS


def _config(**overrides):
    cfg = BorgConfig().pop_size(overrides.pop("pop_size", 20)).epsilon(overrides.pop("epsilon", 0.05))
    for name, value in overrides.items():
        getattr(cfg, name)(value)
    return cfg.fixed()


class _NoObjectives:
    n_var = 2
    n_obj = 0

    def evaluate(self, x):
        return ()

    def bounds(self):
        return np.zeros(2), np.ones(2)


class TestConstruction:
    def test_problem_without_objective_tuple(self):
        with pytest.raises(ConfigurationError):
            BorgMOEA(_NoObjectives(), _config())

    def test_empty_operator_list(self):
        with pytest.raises(ConfigurationError):
            BorgMOEA(ZDT1Problem(5), BorgConfigData(pop_size=10, operators=()))

    def test_unknown_operator(self):
        with pytest.raises(ConfigurationError, match="bogus"):
            BorgMOEA(ZDT1Problem(5), BorgConfig().pop_size(10).operators("bogus").fixed())

    def test_initial_tournament_size(self):
        algo = BorgMOEA(ZDT1Problem(5), _config(pop_size=20, tau=0.02), seed=0)
        assert algo.tournament_size == 2

    def test_population_sized_from_config(self):
        algo = BorgMOEA(ZDT1Problem(5), _config(pop_size=12), seed=0)
        assert algo.pop_size == 12
        assert len(algo.archive) == 0
        assert algo.n_evals == 0

    def test_borg_moea_factory_accepts_overrides(self):
        algo = borg_moea(ZDT1Problem(5), {"PopulationSize": 16}, seed=1, epsilon=0.2)
        assert algo.cfg.pop_size == 16
        assert algo.cfg.epsilon == 0.2
        assert_allclose(algo.scheme.epsilon, [0.2, 0.2])


class TestStepping:
    def test_first_step_evaluates_initial_population(self):
        algo = BorgMOEA(ZDT1Problem(5), _config(pop_size=10), seed=0)
        algo.step()
        assert algo.n_steps == 1
        assert algo.n_evals >= 11
        assert algo.population.is_evaluated()
        assert len(algo.archive) >= 1
        assert algo.population.n_outstanding == 0

    def test_archive_stays_nondominated_while_stepping(self):
        algo = BorgMOEA(ZDT1Problem(6), _config(pop_size=20, epsilon=0.02), seed=3)
        for _ in range(300):
            algo.step()
        members = list(algo.archive)
        for a in members:
            for b in members:
                if a is not b:
                    assert a.box != b.box
                    assert not box_dominates(a.box, b.box)
        X, _ = algo.archive.contents()
        assert np.all((X >= 0.0) & (X <= 1.0))
        assert algo.n_restarts == 0
        assert algo.state.n_offspring == algo.n_evals - algo.pop_size

    @pytest.mark.parametrize("spec", DEFAULT_OPERATORS, ids=lambda s: f"{s[0]}{s[1].get('n_parents', '')}")
    def test_each_operator_alone(self, spec):
        cfg = BorgConfig().pop_size(10).epsilon(0.05).operators(spec).fixed()
        algo = BorgMOEA(ZDT1Problem(4), cfg, seed=5)
        for _ in range(40):
            algo.step()
        assert algo.population.is_evaluated()
        assert np.all((algo.population.X >= 0.0) & (algo.population.X <= 1.0))
        assert set(algo.archive.tagcounts()) <= {0}

    def test_same_seed_is_reproducible(self):
        runs = []
        for _ in range(2):
            algo = BorgMOEA(ZDT1Problem(5), _config(pop_size=12), seed=42)
            for _ in range(150):
                algo.step()
            runs.append(algo.archive.contents()[1])
        assert_allclose(runs[0], runs[1])

    def test_accept_offspring_replaces_dominated_member(self):
        algo = BorgMOEA(ZDT1Problem(5), _config(pop_size=10), seed=0)
        algo.initialize()
        best = algo.scheme.make((-1.0, -1.0))
        decision, slot = algo.accept_offspring(best)
        assert decision is Acceptance.REPLACE_DOMINATED
        assert 0 <= slot < algo.pop_size
        worst = algo.scheme.make((100.0, 100.0))
        decision, _ = algo.accept_offspring(worst)
        assert decision is Acceptance.REJECT


class TestRestart:
    def test_restart_resizes_and_reseeds_from_archive(self):
        cfg = _config(pop_size=10, epsilon=0.01)
        algo = BorgMOEA(ZDT1Problem(5), cfg, seed=7)
        for _ in range(200):
            algo.step()
        members = algo.archive.frontier()
        n_archived = len(members)
        evals_before = algo.n_evals
        restarts_before = algo.n_restarts

        algo.restart()

        expected = max(cfg.pop_size, math.ceil(cfg.gamma * n_archived))
        assert algo.pop_size == expected
        n_copied = min(n_archived, expected)
        for i in range(n_copied):
            assert_allclose(algo.population.params(i), members[i].params)
        for i in range(n_copied, expected):
            assert algo.population.tag(i) is None
        assert algo.n_evals - evals_before == expected - n_copied
        assert algo.n_restarts == restarts_before + 1
        assert algo.archive.candidates_without_progress == 0
        assert algo.tournament_size == max(2, math.floor(cfg.tau * expected))
        assert algo.state.last_restart_check == algo.n_steps
        assert algo.population.is_evaluated()

    def test_stagnation_triggers_restart(self):
        flat = FunctionProblem(lambda x: (1.0, 1.0), n_var=3, n_obj=2, name="flat")
        cfg = _config(pop_size=10, restart_check_period=1, max_steps_without_progress=1)
        algo = BorgMOEA(flat, cfg, seed=0)
        algo.step()
        assert len(algo.archive) == 1
        assert algo.n_restarts == 1
        assert algo.pop_size == 10
        algo.step()
        assert algo.n_restarts == 2

    def test_no_restart_before_check_period(self):
        flat = FunctionProblem(lambda x: (1.0, 1.0), n_var=3, n_obj=2)
        algo = BorgMOEA(flat, _config(pop_size=10, restart_check_period=50), seed=0)
        for _ in range(49):
            algo.step()
        assert algo.n_restarts == 0
        algo.step()
        assert algo.n_restarts == 1


class TestOperatorWeights:
    def test_weights_are_a_distribution(self):
        algo = BorgMOEA(ZDT1Problem(5), _config(pop_size=20, operators_update_period=10), seed=2)
        for _ in range(60):
            algo.step()
        probs = algo.weights.probs()
        assert len(probs) == len(DEFAULT_OPERATORS)
        assert sum(probs) == pytest.approx(1.0)
        assert min(probs) > 0.0
        counts = algo.archive.tagcounts()
        total = sum(counts.values())
        fresh = algo.update_weights()
        n_ops = len(fresh)
        for idx, p in enumerate(fresh):
            assert p == pytest.approx((counts.get(idx, 0) + 1.0) / (total + n_ops))

    def test_weights_trace_rows(self):
        algo = BorgMOEA(ZDT1Problem(5), _config(pop_size=10, operators_update_period=5), seed=2)
        for _ in range(10):
            algo.step()
        rows = algo.weights_trace
        assert len(rows) == 2 * len(DEFAULT_OPERATORS)
        assert [r.op_id for r in rows[: len(DEFAULT_OPERATORS)]] == algo.portfolio.ids()
        assert rows[0].step == 5
        assert rows[-1].step == 10


class TestReporting:
    def test_trace_state(self):
        algo = BorgMOEA(ZDT1Problem(5), _config(pop_size=10), seed=0)
        algo.step()
        text = algo.trace_state()
        assert text.startswith("pop.size=10 arch.size=")
        assert "weights=[de=" in text
        assert "pcx3=" in text
        assert text.endswith("n_restarts=0")


class _FlakyProblem:
    """Two-objective problem whose evaluation raises on chosen calls or while ``failing`` is set."""

    n_var = 3
    n_obj = 2

    def __init__(self, fail_on=()):
        self.fail_on = set(fail_on)
        self.failing = False
        self.calls = 0

    def evaluate(self, x):
        self.calls += 1
        if self.failing or self.calls in self.fail_on:
            raise RuntimeError(f"simulator crashed on call {self.calls}")
        return float(x[0]), float(1.0 - x[0] + x[1] * x[2])

    def bounds(self):
        return np.zeros(3), np.ones(3)


class TestErrorPropagation:
    def test_problem_exception_propagates(self):
        def boom(x):
            raise RuntimeError("simulator crashed")

        algo = BorgMOEA(FunctionProblem(boom, n_var=2, n_obj=2), _config(pop_size=5), seed=0)
        with pytest.raises(RuntimeError, match="simulator crashed"):
            algo.step()
        assert algo.population.n_outstanding == 0
        assert len(algo.archive) == 0

    def test_stepping_continues_after_failed_offspring_evaluations(self):
        problem = _FlakyProblem(fail_on={30, 31, 32})
        algo = BorgMOEA(problem, _config(pop_size=10), seed=0)
        failures = 0
        for _ in range(40):
            try:
                algo.step()
            except RuntimeError:
                failures += 1
            assert algo.population.n_outstanding == 0
        assert failures == 3
        assert algo.n_steps == 40
        assert algo.population.is_evaluated()
        assert algo.n_evals == problem.calls - 3
        assert algo.archive.n_candidates == algo.n_evals

    def test_failed_initialization_resumes_at_first_unevaluated_slot(self):
        problem = _FlakyProblem(fail_on={4})
        algo = BorgMOEA(problem, _config(pop_size=10), seed=0)
        with pytest.raises(RuntimeError, match="call 4"):
            algo.step()
        assert algo.population.n_outstanding == 0
        assert algo.n_evals == 3
        assert algo.n_steps == 0

        algo.step()
        assert algo.n_steps == 1
        assert algo.population.is_evaluated()
        assert algo.n_evals == 10 + algo.state.n_offspring
        assert algo.archive.n_candidates == algo.n_evals

    def test_failed_restart_refill_is_completed_by_next_step(self):
        problem = _FlakyProblem()
        algo = BorgMOEA(problem, _config(pop_size=10, restart_check_period=5), seed=1)
        for _ in range(4):
            algo.step()
        n_archived = len(algo.archive)

        problem.failing = True
        with pytest.raises(RuntimeError):
            algo.step()
        assert algo.n_restarts == 1
        assert algo.population.n_outstanding == 0
        assert not algo.population.is_evaluated()

        problem.failing = False
        algo.step()
        assert algo.n_restarts == 1
        assert algo.pop_size == max(10, math.ceil(algo.cfg.gamma * n_archived))
        assert algo.population.is_evaluated()
        assert algo.population.n_outstanding == 0

    def test_non_finite_objectives(self):
        algo = BorgMOEA(FunctionProblem(lambda x: (np.nan, 1.0), n_var=2, n_obj=2), _config(pop_size=5), seed=0)
        with pytest.raises(ProblemError):
            algo.step()

    def test_wrong_objective_count(self):
        class Liar:
            n_var = 2
            n_obj = 2

            def evaluate(self, x):
                return (1.0, 2.0, 3.0)

            def bounds(self):
                return np.zeros(2), np.ones(2)

        algo = BorgMOEA(Liar(), _config(pop_size=5), seed=0)
        with pytest.raises(ProblemDimensionError):
            algo.initialize()

