"""
Config loading for file-driven runs.

A run file (YAML or JSON) looks like::

    problem:
      name: zdt1
      n_var: 10
    algorithm:
      epsilon: 0.01
      PopulationSize: 100
    budget:
      max_evaluations: 20000
    seed: 1
    output: results/zdt1
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping

from borgmoea.engine.algorithm.config.borg import BorgConfigData
from borgmoea.experiment.optimization_result import OptimizationResult
from borgmoea.experiment.optimize import optimize
from borgmoea.foundation.exceptions import ConfigurationError, DependencyError, MissingConfigError
from borgmoea.foundation.problem.registry import make_problem

RUN_KEYS = {"problem", "algorithm", "budget", "seed", "output", "trace_interval"}
BUDGET_KEYS = {"max_evaluations", "max_steps", "max_time"}


def load_config(path: str | Path) -> Dict[str, Any]:
    """
    Load a YAML or JSON run specification.
    """
    spec_path = Path(path).expanduser().resolve()
    if not spec_path.exists():
        raise FileNotFoundError(f"Config file '{spec_path}' does not exist.")
    suffix = spec_path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise DependencyError("pyyaml", "YAML run files", "pip install borgmoea[yaml]") from exc
        with spec_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    else:
        with spec_path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file '{spec_path}' must contain a mapping at the top level.")
    return data


def run_from_config(path: str | Path) -> OptimizationResult:
    """Load a run file, optimize and (if ``output`` is set) save the result."""
    return run_spec(load_config(path))


def run_spec(spec: Mapping[str, Any]) -> OptimizationResult:
    """Run an already loaded run specification."""
    unexpected = set(spec) - RUN_KEYS
    if unexpected:
        raise ConfigurationError(f"Unsupported run keys: {sorted(unexpected)}", f"Known keys: {sorted(RUN_KEYS)}")
    problem_spec = dict(spec.get("problem") or {})
    if "name" not in problem_spec:
        raise MissingConfigError("problem.name")
    problem = make_problem(problem_spec.pop("name"), **problem_spec)
    config = BorgConfigData.from_dict(spec.get("algorithm"))
    budget = dict(spec.get("budget") or {})
    unknown_budget = set(budget) - BUDGET_KEYS
    if unknown_budget:
        raise ConfigurationError(f"Unsupported budget keys: {sorted(unknown_budget)}", f"Known keys: {sorted(BUDGET_KEYS)}")
    result = optimize(
        problem,
        config,
        seed=spec.get("seed"),
        trace_interval=int(spec.get("trace_interval", 0)),
        **budget,
    )
    output = spec.get("output")
    if output:
        result.save(output)
    return result


__all__ = ["load_config", "run_from_config", "run_spec"]
