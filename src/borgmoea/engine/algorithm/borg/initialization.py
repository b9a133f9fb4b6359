"""
Borg MOEA setup.

Resolves the problem, configuration and operators into the collaborators a
``BorgMOEA`` instance drives. All configuration errors surface here, before
the first step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping

import numpy as np

from borgmoea.adaptation.portfolio import OperatorPortfolio
from borgmoea.adaptation.weights import OperatorWeights
from borgmoea.engine.algorithm.config.borg import BorgConfigData
from borgmoea.engine.archive import EpsBoxArchive
from borgmoea.engine.evaluator import ProblemEvaluator
from borgmoea.engine.population import Population
from borgmoea.foundation.exceptions import ConfigurationError, ProblemDimensionError
from borgmoea.foundation.fitness import EpsBoxFitnessScheme
from borgmoea.foundation.search_space import RangePerDimSearchSpace
from borgmoea.operators.real import Crossover, Embedding, MutationClock
from borgmoea.operators.registry import build_embedding, build_mutation, build_variations, operator_label

if TYPE_CHECKING:
    from borgmoea.engine.algorithm.borg.borg import BorgMOEA
    from borgmoea.foundation.problem.types import ProblemProtocol


def _logger() -> logging.Logger:
    return logging.getLogger(__name__)


@dataclass
class BorgComponents:
    space: RangePerDimSearchSpace
    scheme: EpsBoxFitnessScheme
    archive: EpsBoxArchive
    evaluator: ProblemEvaluator
    population: Population
    operators: list[Crossover]
    portfolio: OperatorPortfolio
    weights: OperatorWeights
    mutation: MutationClock
    embedding: Embedding


def resolve_search_space(problem: "ProblemProtocol") -> RangePerDimSearchSpace:
    space_fn = getattr(problem, "search_space", None)
    if callable(space_fn):
        space = space_fn()
    else:
        lower, upper = problem.bounds()
        space = RangePerDimSearchSpace(lower, upper)
    n_var = getattr(problem, "n_var", space.n_dims)
    if space.n_dims != n_var:
        raise ProblemDimensionError(
            f"Search space has {space.n_dims} dimensions but the problem declares n_var={n_var}.",
            n_var=n_var,
        )
    return space


def objective_count(problem: Any) -> int:
    n_obj = getattr(problem, "n_obj", None)
    if isinstance(n_obj, bool) or not isinstance(n_obj, (int, np.integer)) or n_obj < 1:
        raise ConfigurationError(
            f"Borg MOEA needs a problem with a tuple of objectives (n_obj >= 1), got n_obj={n_obj!r}.",
            "Set n_obj on the problem to the length of the tuple returned by evaluate()",
        )
    return int(n_obj)


def initial_population(
    space: RangePerDimSearchSpace,
    n: int,
    rng: np.random.Generator,
    method: str = "lhs",
) -> np.ndarray:
    if method == "lhs":
        return space.sample_lhs(n, rng)
    return space.sample(n, rng)


def build_borg_components(
    problem: "ProblemProtocol",
    config: BorgConfigData,
    rng: np.random.Generator,
) -> BorgComponents:
    n_obj = objective_count(problem)
    space = resolve_search_space(problem)
    scheme = EpsBoxFitnessScheme(n_obj, config.epsilon)
    archive = EpsBoxArchive(scheme)
    evaluator = ProblemEvaluator(problem, archive)

    operators = build_variations(config.operators, space)
    if not operators:
        raise ConfigurationError("No variation operators specified.")
    portfolio = OperatorPortfolio.from_labels(operator_label(spec) for spec in config.operators)
    weights = OperatorWeights(len(operators), zeta=config.zeta)
    mutation = build_mutation(config.mutation, space, rate=config.mutation_rate)
    embedding = build_embedding(config.embedding, space)

    n_scratch = max(op.n_children for op in operators)
    X0 = initial_population(space, config.pop_size, rng, config.initializer)
    population = Population(X0, n_transient=1, n_scratch=n_scratch)
    _logger().debug(
        "Borg setup: n_var=%d n_obj=%d pop_size=%d operators=%s",
        space.n_dims,
        n_obj,
        config.pop_size,
        portfolio.ids(),
    )
    return BorgComponents(
        space=space,
        scheme=scheme,
        archive=archive,
        evaluator=evaluator,
        population=population,
        operators=operators,
        portfolio=portfolio,
        weights=weights,
        mutation=mutation,
        embedding=embedding,
    )


def borg_moea(
    problem: "ProblemProtocol",
    config: BorgConfigData | Mapping[str, Any] | None = None,
    *,
    seed: int | None = None,
    **overrides: Any,
) -> "BorgMOEA":
    """
    Build a Borg MOEA with default settings, optionally overridden.

    ``config`` may be a ``BorgConfigData`` or a mapping accepted by
    ``BorgConfigData.from_dict``; keyword overrides are merged on top.
    """
    from borgmoea.engine.algorithm.borg.borg import BorgMOEA

    if isinstance(config, BorgConfigData):
        base: dict[str, Any] = config.to_dict()
    else:
        base = dict(config or {})
    if overrides:
        base.update(overrides)
    return BorgMOEA(problem, BorgConfigData.from_dict(base), seed=seed)


__all__ = [
    "BorgComponents",
    "borg_moea",
    "build_borg_components",
    "initial_population",
    "objective_count",
    "resolve_search_space",
]
