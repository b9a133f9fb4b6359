import numpy as np
import pytest

from borgmoea.engine.selection import TournamentSelection, initial_tournament_size, restart_tournament_size


def test_tournament_size_rules():
    assert initial_tournament_size(0.02, 20) == 2
    assert initial_tournament_size(0.02, 50) == 2
    assert initial_tournament_size(0.02, 101) == 3
    assert restart_tournament_size(0.02, 149) == 2
    assert restart_tournament_size(0.02, 200) == 4


def test_tournament_prefers_better():
    values = [5, 3, 9, 1, 7]
    selector = TournamentSelection(100, lambda a, b: values[a] - values[b], np.random.default_rng(0))
    picks = selector(len(values), 10)
    assert len(picks) == 10
    assert all(p == 3 for p in picks)


def test_tournament_size_is_mutable_and_validated():
    selector = TournamentSelection(2, lambda a, b: 0, np.random.default_rng(1))
    selector.tournament_size = 5
    assert selector.tournament_size == 5
    with pytest.raises(ValueError):
        selector.tournament_size = 0
    with pytest.raises(ValueError):
        selector(0, 1)


def test_selection_stays_in_range():
    selector = TournamentSelection(2, lambda a, b: 0, np.random.default_rng(2))
    picks = selector(7, 200)
    assert min(picks) >= 0
    assert max(picks) < 7
