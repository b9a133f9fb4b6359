"""Tests for gene mutations and the mutation clock."""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from borgmoea.operators.real import MutationClock, PolynomialMutation, UniformGeneMutation

LOWER = np.array([0.0, -1.0, 10.0, 0.0])
UPPER = np.array([1.0, 1.0, 20.0, 0.5])


def test_uniform_gene_mutation_stays_in_bounds():
    op = UniformGeneMutation(lower=LOWER, upper=UPPER, prob_mutation=1.0)
    X = np.tile((LOWER + UPPER) / 2.0, (50, 1))
    out = op(X, np.random.default_rng(0))
    assert out is X
    assert np.all((X >= LOWER) & (X <= UPPER))
    assert not np.allclose(X, (LOWER + UPPER) / 2.0)


def test_default_probability_is_one_over_n():
    op = PolynomialMutation(lower=LOWER, upper=UPPER)
    assert op.prob == pytest.approx(0.25)


def test_polynomial_mutation_stays_in_bounds():
    op = PolynomialMutation(prob_mutation=1.0, eta=5.0, lower=LOWER, upper=UPPER)
    X = np.tile(UPPER, (100, 1))
    op(X, np.random.default_rng(1))
    assert np.all((X >= LOWER) & (X <= UPPER))


def test_zero_probability_is_identity():
    op = PolynomialMutation(prob_mutation=0.0, lower=LOWER, upper=UPPER)
    X = np.tile(LOWER, (5, 1))
    op(X, np.random.default_rng(2))
    assert_allclose(X, np.tile(LOWER, (5, 1)))


def test_bounds_mismatch():
    op = UniformGeneMutation(lower=LOWER, upper=UPPER)
    with pytest.raises(ValueError):
        op(np.zeros((2, 3)), np.random.default_rng(0))


class TestMutationClock:
    def test_rate_validation(self):
        inner = UniformGeneMutation(lower=LOWER, upper=UPPER)
        with pytest.raises(ValueError):
            MutationClock(inner, rate=0.0)
        with pytest.raises(ValueError):
            MutationClock(inner, rate=1.5)

    def test_rate_one_mutates_every_gene(self):
        clock = MutationClock(UniformGeneMutation(lower=LOWER, upper=UPPER), rate=1.0)
        x = np.full(4, -100.0)
        clock.mutate(x, np.random.default_rng(3))
        assert np.all((x >= LOWER) & (x <= UPPER))

    def test_average_mutation_rate(self):
        lower = np.zeros(20)
        upper = np.ones(20)
        clock = MutationClock(UniformGeneMutation(lower=lower, upper=upper), rate=0.25)
        rng = np.random.default_rng(4)
        X = np.full((500, 20), -1.0)
        clock(X, rng)
        # genes still at -1 were never visited by the clock
        rate = np.mean(X >= 0.0)
        assert rate == pytest.approx(0.25, abs=0.02)

    def test_clock_carries_over_between_individuals(self):
        clock = MutationClock(UniformGeneMutation(lower=LOWER, upper=UPPER), rate=0.1)
        rng = np.random.default_rng(5)
        clock.mutate(np.zeros(4), rng)
        assert clock._clock is not None
        assert clock._clock >= 0

    def test_exposes_inner_bounds(self):
        clock = MutationClock(UniformGeneMutation(lower=LOWER, upper=UPPER))
        assert_allclose(clock.lower, LOWER)
        assert_allclose(clock.upper, UPPER)
