"""
Registries for variation, mutation and embedding operators.

Operators are configured as ``(name, kwargs)`` pairs and resolved against a
search space when the optimizer is built.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence, Tuple

from borgmoea.foundation.exceptions import InvalidOperatorError
from borgmoea.foundation.registry import Registry
from borgmoea.foundation.search_space import RangePerDimSearchSpace
from borgmoea.operators.real import (
    ClampEmbedding,
    Crossover,
    DifferentialEvolutionCrossover,
    Embedding,
    GeneMutation,
    MutationClock,
    PCXCrossover,
    PolynomialMutation,
    RandomBoundEmbedding,
    ReflectEmbedding,
    SBXCrossover,
    SPXCrossover,
    UNDXCrossover,
    UniformGeneMutation,
)

OperatorSpec = Tuple[str, Mapping[str, Any]]
Factory = Callable[..., Any]

# Key: operator name; value: factory(space, **kwargs)
variation_registry: Registry[Factory] = Registry("VariationOperators")
mutation_registry: Registry[Factory] = Registry("GeneMutations")
embedding_registry: Registry[Factory] = Registry("Embeddings")

variation_registry.register("de", lambda space, **kw: DifferentialEvolutionCrossover(**kw))
variation_registry.register(
    "sbx", lambda space, **kw: SBXCrossover(lower=space.lower, upper=space.upper, **kw)
)
variation_registry.register("spx", lambda space, **kw: SPXCrossover(**kw))
variation_registry.register("pcx", lambda space, **kw: PCXCrossover(**kw))
variation_registry.register("undx", lambda space, **kw: UNDXCrossover(**kw))

mutation_registry.register(
    "uniform", lambda space, **kw: UniformGeneMutation(lower=space.lower, upper=space.upper, **kw)
)
mutation_registry.register(
    "pm", lambda space, **kw: PolynomialMutation(lower=space.lower, upper=space.upper, **kw)
)

embedding_registry.register(
    "random_bound", lambda space, **kw: RandomBoundEmbedding(lower=space.lower, upper=space.upper, **kw)
)
embedding_registry.register(
    "clamp", lambda space, **kw: ClampEmbedding(lower=space.lower, upper=space.upper, **kw)
)
embedding_registry.register(
    "reflect", lambda space, **kw: ReflectEmbedding(lower=space.lower, upper=space.upper, **kw)
)

DEFAULT_OPERATORS: tuple[OperatorSpec, ...] = (
    ("de", {}),
    ("sbx", {}),
    ("spx", {"n_parents": 3}),
    ("pcx", {"n_parents": 2}),
    ("pcx", {"n_parents": 3}),
    ("undx", {"n_parents": 2}),
    ("undx", {"n_parents": 3}),
)


def _resolve(registry: Registry[Factory], kind: str, spec: OperatorSpec, space: RangePerDimSearchSpace) -> Any:
    name, params = spec
    key = str(name).lower()
    if key not in registry:
        raise InvalidOperatorError(kind, str(name), registry.list())
    try:
        return registry[key](space, **dict(params or {}))
    except TypeError as exc:
        raise InvalidOperatorError(kind, f"{name}({dict(params or {})})", registry.list()) from exc


def build_variation(spec: OperatorSpec, space: RangePerDimSearchSpace) -> Crossover:
    return _resolve(variation_registry, "variation", spec, space)


def build_variations(specs: Sequence[OperatorSpec], space: RangePerDimSearchSpace) -> list[Crossover]:
    return [build_variation(spec, space) for spec in specs]


def build_mutation(spec: OperatorSpec, space: RangePerDimSearchSpace, *, rate: float) -> MutationClock:
    gene: GeneMutation = _resolve(mutation_registry, "mutation", spec, space)
    return MutationClock(gene, rate)


def build_embedding(spec: OperatorSpec, space: RangePerDimSearchSpace) -> Embedding:
    return _resolve(embedding_registry, "embedding", spec, space)


def operator_label(spec: OperatorSpec) -> str:
    """Short label such as ``"sbx"`` or ``"pcx3"`` used in traces."""
    name, params = spec
    n_parents = (params or {}).get("n_parents")
    return f"{name}{n_parents}" if n_parents is not None else str(name)


__all__ = [
    "OperatorSpec",
    "DEFAULT_OPERATORS",
    "variation_registry",
    "mutation_registry",
    "embedding_registry",
    "build_variation",
    "build_variations",
    "build_mutation",
    "build_embedding",
    "operator_label",
]
