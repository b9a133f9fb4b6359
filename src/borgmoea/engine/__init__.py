"""
Engine layer: archive, population arena, evaluator, selection and the Borg optimizer.
"""

from .archive import ArchivedMember, ArchiveOutcome, EpsBoxArchive
from .evaluator import ProblemEvaluator
from .population import Candidate, Population
from .selection import TournamentSelection
from .algorithm import BorgConfig, BorgConfigData, BorgMOEA, BorgState, borg_moea

__all__ = [
    "ArchivedMember",
    "ArchiveOutcome",
    "EpsBoxArchive",
    "ProblemEvaluator",
    "Candidate",
    "Population",
    "TournamentSelection",
    "BorgConfig",
    "BorgConfigData",
    "BorgMOEA",
    "BorgState",
    "borg_moea",
]
