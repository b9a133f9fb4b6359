import numpy as np

from borgmoea.foundation.metrics import nondominated_mask, pareto_filter


def test_nondominated_mask():
    F = np.array([[0.0, 1.0], [1.0, 0.0], [1.0, 1.0], [0.5, 0.5]])
    assert nondominated_mask(F).tolist() == [True, True, False, True]


def test_pareto_filter_with_indices():
    F = np.array([[2.0, 2.0], [1.0, 3.0], [3.0, 3.0]])
    front, idx = pareto_filter(F, return_indices=True)
    assert idx.tolist() == [0, 1]
    assert front.shape == (2, 2)


def test_pareto_filter_empty_and_none():
    assert pareto_filter(None) is None
    front, idx = pareto_filter(None, return_indices=True)
    assert front.size == 0 and idx.size == 0
    empty = np.empty((0, 2))
    assert pareto_filter(empty).shape == (0, 2)
