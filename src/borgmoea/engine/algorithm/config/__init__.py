"""Algorithm configuration dataclasses and builders."""

from .borg import BORG_CONFIG_KEYS, PARAMETER_ALIASES, BorgConfig, BorgConfigData

__all__ = ["BorgConfig", "BorgConfigData", "BORG_CONFIG_KEYS", "PARAMETER_ALIASES"]
