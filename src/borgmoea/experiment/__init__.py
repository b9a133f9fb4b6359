"""
Run helpers: budgeted optimization, result container and file-driven runs.
"""

from .config_loader import load_config, run_from_config, run_spec
from .optimization_result import OptimizationResult
from .optimize import build_result, optimize

__all__ = ["OptimizationResult", "build_result", "load_config", "optimize", "run_from_config", "run_spec"]
