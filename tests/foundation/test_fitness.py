import math

import numpy as np
import pytest

from borgmoea.foundation.exceptions import ConfigurationError, InvalidParameterError, ProblemError
from borgmoea.foundation.fitness import (
    EpsBoxFitnessScheme,
    box_dominates,
    pareto_compare,
    pareto_dominates,
)


def test_pareto_compare_cases():
    assert pareto_compare((1.0, 1.0), (2.0, 2.0)) == -1
    assert pareto_compare((2.0, 2.0), (1.0, 1.0)) == 1
    assert pareto_compare((1.0, 2.0), (2.0, 1.0)) == 0
    assert pareto_compare((1.0, 2.0), (1.0, 2.0)) == 0
    assert pareto_dominates((1.0, 2.0), (1.0, 3.0))
    assert not pareto_dominates((1.0, 2.0), (1.0, 2.0))
    assert box_dominates((0, 1), (1, 1))
    assert not box_dominates((0, 2), (1, 1))


def test_make_indexes_values_into_boxes():
    scheme = EpsBoxFitnessScheme(2, 0.1)
    fit = scheme.make((1.0, 2.0))
    assert fit.index == (10, 20)
    assert fit.values == (1.0, 2.0)
    assert fit.agg == pytest.approx(3.0)
    assert fit.n_obj == 2

    other = scheme.make((1.05, 2.05))
    assert other.index == (10, 20)
    assert other.dist == pytest.approx(math.hypot(0.5, 0.5), abs=1e-9)


def test_hat_compare_same_box_uses_pareto_then_distance():
    scheme = EpsBoxFitnessScheme(2, 0.1)
    a = scheme.make((1.0, 2.0))
    b = scheme.make((1.05, 2.05))
    assert scheme.hat_compare(a, b) == (-1, True)
    assert scheme.hat_compare(b, a) == (1, True)

    # mutually non-dominated in one box: closer to the corner wins
    c = scheme.make((1.01, 2.08))
    d = scheme.make((1.04, 2.03))
    assert c.index == d.index
    assert scheme.hat_compare(c, d) == (1, True)
    assert scheme.hat_compare(d, c) == (-1, True)
    assert scheme.hat_compare(d, d) == (0, True)


def test_hat_compare_different_boxes_uses_box_dominance():
    scheme = EpsBoxFitnessScheme(2, 0.1)
    a = scheme.make((0.55, 0.55))
    b = scheme.make((0.95, 0.95))
    c = scheme.make((0.15, 1.25))
    assert scheme.hat_compare(a, b) == (-1, False)
    assert scheme.hat_compare(b, a) == (1, False)
    assert scheme.compare(a, c) == 0


def test_per_objective_epsilon():
    scheme = EpsBoxFitnessScheme(2, [0.1, 1.0])
    assert scheme.make((0.25, 2.5)).index == (2, 2)


def test_epsilon_input_is_not_frozen():
    eps = np.array([0.1, 0.2])
    scheme = EpsBoxFitnessScheme(2, eps)
    eps[0] = 5.0
    assert eps.flags.writeable
    assert scheme.epsilon[0] == pytest.approx(0.1)
    with pytest.raises(ValueError):
        scheme.epsilon[0] = 1.0


@pytest.mark.parametrize("epsilon", [0.0, -0.1, [0.1, 0.0], [0.1, 0.1, 0.1], float("nan")])
def test_invalid_epsilon_rejected(epsilon):
    with pytest.raises(InvalidParameterError):
        EpsBoxFitnessScheme(2, epsilon)


def test_requires_an_objective():
    with pytest.raises(ConfigurationError):
        EpsBoxFitnessScheme(0, 0.1)


@pytest.mark.parametrize("values", [(math.inf, 0.5), (0.5, -math.inf), (math.nan, 0.5)])
def test_make_rejects_non_finite_values(values):
    with pytest.raises(ProblemError, match="non-finite"):
        EpsBoxFitnessScheme(2, 0.1).make(values)
