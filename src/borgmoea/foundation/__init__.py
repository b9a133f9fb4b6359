"""
Foundation layer: errors, logging, fitness scheme, search space and problems.
"""

from .exceptions import (
    ArchiveInvariantError,
    BorgError,
    BoundsError,
    ConfigurationError,
    DependencyError,
    InvalidOperatorError,
    InvalidParameterError,
    MissingConfigError,
    OptimizationError,
    ProblemDimensionError,
    ProblemError,
)
from .fitness import EpsBoxFitnessScheme, IndexedFitness, box_dominates, pareto_compare, pareto_dominates
from .logging import configure_borg_logging
from .search_space import RangePerDimSearchSpace

__all__ = [
    "ArchiveInvariantError",
    "BorgError",
    "BoundsError",
    "ConfigurationError",
    "DependencyError",
    "InvalidOperatorError",
    "InvalidParameterError",
    "MissingConfigError",
    "OptimizationError",
    "ProblemDimensionError",
    "ProblemError",
    "EpsBoxFitnessScheme",
    "IndexedFitness",
    "box_dominates",
    "pareto_compare",
    "pareto_dominates",
    "configure_borg_logging",
    "RangePerDimSearchSpace",
]
