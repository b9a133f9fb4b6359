"""
borgmoea: the Borg auto-adaptive multi-objective evolutionary algorithm.
"""

from .engine import (
    ArchivedMember,
    ArchiveOutcome,
    BorgConfig,
    BorgConfigData,
    BorgMOEA,
    EpsBoxArchive,
    borg_moea,
)
from .experiment import OptimizationResult, optimize, run_from_config
from .foundation import (
    BorgError,
    ConfigurationError,
    EpsBoxFitnessScheme,
    RangePerDimSearchSpace,
    configure_borg_logging,
)
from .foundation.problem import FunctionProblem, Problem, SchafferN1Problem, ZDT1Problem, ZDT2Problem

__version__ = "0.1.0"

__all__ = [
    "ArchivedMember",
    "ArchiveOutcome",
    "BorgConfig",
    "BorgConfigData",
    "BorgMOEA",
    "EpsBoxArchive",
    "borg_moea",
    "OptimizationResult",
    "optimize",
    "run_from_config",
    "BorgError",
    "ConfigurationError",
    "EpsBoxFitnessScheme",
    "RangePerDimSearchSpace",
    "configure_borg_logging",
    "FunctionProblem",
    "Problem",
    "SchafferN1Problem",
    "ZDT1Problem",
    "ZDT2Problem",
]
