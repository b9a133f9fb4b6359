"""Real-coded variation, mutation and embedding operators."""

from .crossover import (
    Crossover,
    DifferentialEvolutionCrossover,
    PCXCrossover,
    SBXCrossover,
    SPXCrossover,
    UNDXCrossover,
)
from .mutation import GeneMutation, Mutation, MutationClock, PolynomialMutation, UniformGeneMutation
from .repair import ClampEmbedding, Embedding, RandomBoundEmbedding, ReflectEmbedding

__all__ = [
    "Crossover",
    "DifferentialEvolutionCrossover",
    "PCXCrossover",
    "SBXCrossover",
    "SPXCrossover",
    "UNDXCrossover",
    "Mutation",
    "GeneMutation",
    "MutationClock",
    "PolynomialMutation",
    "UniformGeneMutation",
    "Embedding",
    "ClampEmbedding",
    "RandomBoundEmbedding",
    "ReflectEmbedding",
]
