from __future__ import annotations

import logging

import numpy as np

from borgmoea.engine.archive import ArchiveOutcome, EpsBoxArchive
from borgmoea.engine.population import Candidate
from borgmoea.foundation.exceptions import ProblemDimensionError, ProblemError
from borgmoea.foundation.fitness import IndexedFitness
from borgmoea.foundation.problem.types import ProblemProtocol


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


class ProblemEvaluator:
    """
    Evaluates candidates and feeds every evaluated point to the archive.

    Exceptions raised by the problem propagate unchanged; the caller driving
    the optimizer decides whether to abort.
    """

    def __init__(self, problem: ProblemProtocol, archive: EpsBoxArchive) -> None:
        self.problem = problem
        self.archive = archive
        self.n_evals = 0
        self.last_outcome: ArchiveOutcome | None = None

    def evaluate(self, params: np.ndarray) -> IndexedFitness:
        """Evaluate without touching the archive."""
        raw = self.problem.evaluate(params)
        values = np.asarray(raw, dtype=float).ravel()
        self.n_evals += 1
        if values.shape[0] != self.archive.n_obj:
            raise ProblemDimensionError(
                f"Problem returned {values.shape[0]} objectives, expected {self.archive.n_obj}.",
                n_var=getattr(self.problem, "n_var", None),
                n_obj=self.archive.n_obj,
            )
        if not np.all(np.isfinite(values)):
            raise ProblemError(
                f"Problem returned non-finite objectives {values.tolist()}.",
                "Objective functions must return finite values",
                {"values": values.tolist()},
            )
        return self.archive.scheme.make(values)

    def update_fitness(self, candidate: Candidate) -> IndexedFitness:
        """Evaluate ``candidate``, cache its fitness and offer it to the archive."""
        fitness = self.evaluate(candidate.params)
        candidate.fitness = fitness
        self.last_outcome = self.archive.insert(candidate.params, fitness, candidate.tag)
        _logger().debug("eval #%d tag=%s -> %s", self.n_evals, candidate.tag, self.last_outcome.value)
        return fitness


__all__ = ["ProblemEvaluator"]
