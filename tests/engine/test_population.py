import numpy as np
import pytest
from numpy.testing import assert_allclose

from borgmoea.engine.population import Population
from borgmoea.foundation.fitness import EpsBoxFitnessScheme

SCHEME = EpsBoxFitnessScheme(2, 0.1)


def _population(pop_size=4, n_var=3, **kwargs) -> Population:
    X = np.arange(pop_size * n_var, dtype=float).reshape(pop_size, n_var)
    return Population(X, **kwargs)


def test_layout():
    pop = _population(4, n_transient=1, n_scratch=2)
    assert pop.pop_size == len(pop) == 4
    assert pop.capacity == 7
    assert list(pop.transient_range()) == [4]
    assert pop.X.shape == (4, 3)
    assert not pop.is_evaluated()
    with pytest.raises(ValueError):
        _ = pop.F


def test_invalid_construction():
    with pytest.raises(ValueError):
        Population(np.empty((0, 3)))
    with pytest.raises(ValueError):
        Population(np.zeros((2, 2)), n_scratch=0)


def test_candidate_accept_commits_into_slot():
    pop = _population()
    cand = pop.acquire_candidate()
    assert pop.n_outstanding == 1
    cand.params[:] = [9.0, 9.0, 9.0]
    cand.fitness = SCHEME.make((0.5, 0.5))
    cand.tag = 2
    pop.accept(cand, 1)
    assert pop.n_outstanding == 0
    assert_allclose(pop.params(1), [9.0, 9.0, 9.0])
    assert pop.fitness(1).values == (0.5, 0.5)
    assert pop.tag(1) == 2
    assert not cand.isnew
    assert cand.index == 1


def test_accept_requires_fitness():
    pop = _population()
    cand = pop.acquire_candidate()
    with pytest.raises(ValueError):
        pop.accept(cand, 0)


def test_release_returns_row_to_pool():
    pop = _population(n_scratch=1)
    cand = pop.acquire_candidate()
    with pytest.raises(RuntimeError, match="exhausted"):
        pop.acquire_candidate()
    pop.release(cand)
    again = pop.acquire_candidate()
    assert again.slot == cand.slot
    with pytest.raises(ValueError):
        pop.release(cand)


def test_transient_slot_is_addressable_but_not_active():
    pop = _population(4)
    fit = SCHEME.make((1.0, 1.0))
    pop.set_member(4, np.ones(3), fit, tag=None)
    assert pop.fitness(4) is fit
    with pytest.raises(IndexError):
        pop.params(5)
    cand = pop.acquire_candidate()
    cand.fitness = fit
    with pytest.raises(IndexError):
        pop.accept(cand, 4)


def test_resize_keeps_prefix():
    pop = _population(4)
    for i in range(4):
        pop.set_member(i, pop.params(i), SCHEME.make((float(i), 1.0)))
    before = pop.X.copy()
    pop.resize(6)
    assert pop.pop_size == 6
    assert_allclose(pop.X[:4], before)
    assert pop.fitness(3).values == (3.0, 1.0)
    assert pop.fitness(5) is None
    pop.resize(2)
    assert_allclose(pop.X, before[:2])
    assert pop.is_evaluated()
    assert pop.F.shape == (2, 2)


def test_resize_rejected_with_outstanding_candidates():
    pop = _population()
    pop.acquire_candidate()
    with pytest.raises(RuntimeError):
        pop.resize(8)
