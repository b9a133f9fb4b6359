"""Borg MOEA algorithm package."""

from .borg import BorgMOEA
from .helpers import Acceptance
from .initialization import borg_moea
from .state import BorgState

__all__ = ["BorgMOEA", "BorgState", "Acceptance", "borg_moea"]
