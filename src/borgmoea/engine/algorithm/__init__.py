"""Algorithm implementations and their configuration."""

from .borg import BorgMOEA, BorgState, borg_moea
from .config import BorgConfig, BorgConfigData

__all__ = ["BorgMOEA", "BorgState", "borg_moea", "BorgConfig", "BorgConfigData"]
