"""Borg MOEA configuration."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from borgmoea.foundation.exceptions import ConfigurationError, InvalidParameterError
from borgmoea.operators.registry import DEFAULT_OPERATORS

from .base import _normalize_operator_spec, _require_fields, _SerializableConfig

OperatorSpec = Tuple[str, Dict[str, Any]]

# Original parameter names accepted by from_dict.
PARAMETER_ALIASES = {
    "ϵ": "epsilon",
    "τ": "tau",
    "γ": "gamma",
    "γ_δ": "gamma_delta",
    "ζ": "zeta",
    "PopulationSize": "pop_size",
    "RestartCheckPeriod": "restart_check_period",
    "OperatorsUpdatePeriod": "operators_update_period",
    "MaxStepsWithoutProgress": "max_steps_without_progress",
}

BORG_CONFIG_KEYS = {
    "epsilon",
    "tau",
    "gamma",
    "gamma_delta",
    "zeta",
    "pop_size",
    "restart_check_period",
    "operators_update_period",
    "max_steps_without_progress",
    "operators",
    "mutation",
    "mutation_rate",
    "embedding",
    "initializer",
}

INITIALIZERS = ("lhs", "uniform")


def _positive(name: str, value: float) -> None:
    if not (isinstance(value, (int, float)) and math.isfinite(value) and value > 0):
        raise InvalidParameterError(name, value, "a finite number > 0")


@dataclass(frozen=True)
class BorgConfigData(_SerializableConfig):
    """
    Validated Borg MOEA settings.

    Attributes:
        epsilon: Epsilon-box width, scalar or one per objective.
        tau: Tournament size as a fraction of the population size.
        gamma: Target population-to-archive size ratio.
        gamma_delta: Tolerated relative deviation from ``gamma`` before a restart.
        zeta: Laplace smoothing constant of the operator weights.
        pop_size: Minimum (and initial) population size.
        restart_check_period: Steps between restart checks.
        operators_update_period: Steps between operator weight updates.
        max_steps_without_progress: Archive stagnation that forces a restart.
        operators: Variation operators as ``(name, params)`` pairs.
        mutation: Gene mutation driven by the mutation clock during restarts.
        mutation_rate: Rate of the mutation clock.
        embedding: Bounds repair applied to offspring.
        initializer: ``"lhs"`` or ``"uniform"`` sampling of the first population.
    """

    epsilon: float | Tuple[float, ...] = 0.1
    tau: float = 0.02
    gamma: float = 4.0
    gamma_delta: float = 0.25
    zeta: float = 1.0
    pop_size: int = 50
    restart_check_period: int = 1000
    operators_update_period: int = 100
    max_steps_without_progress: int = 100
    operators: Tuple[OperatorSpec, ...] = field(default_factory=lambda: tuple((n, dict(p)) for n, p in DEFAULT_OPERATORS))
    mutation: OperatorSpec = ("uniform", {})
    mutation_rate: float = 0.25
    embedding: OperatorSpec = ("random_bound", {})
    initializer: str = "lhs"

    def __post_init__(self) -> None:
        eps = self.epsilon if isinstance(self.epsilon, tuple) else (self.epsilon,)
        if not eps:
            raise InvalidParameterError("epsilon", self.epsilon, "non-empty")
        for value in eps:
            _positive("epsilon", value)
        for name in ("tau", "gamma", "gamma_delta", "zeta"):
            _positive(name, getattr(self, name))
        if self.mutation_rate > 1.0:
            raise InvalidParameterError("mutation_rate", self.mutation_rate, "in (0, 1]")
        _positive("mutation_rate", self.mutation_rate)
        for name in ("restart_check_period", "operators_update_period", "max_steps_without_progress"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise InvalidParameterError(name, value, "an integer >= 1")
        if not isinstance(self.pop_size, int) or self.pop_size < 2:
            raise InvalidParameterError("pop_size", self.pop_size, "an integer >= 2")
        if not self.operators:
            raise ConfigurationError(
                "No variation operators specified.",
                "Configure at least one operator, e.g. BorgConfig().operators(('sbx', {}))",
            )
        if self.initializer not in INITIALIZERS:
            raise InvalidParameterError("initializer", self.initializer, f"one of {INITIALIZERS}")

    @classmethod
    def from_dict(cls, config: Mapping[str, Any] | None) -> "BorgConfigData":
        """
        Create a config from a dictionary. Both snake_case keys and the
        original names (``ϵ``, ``τ``, ``PopulationSize``, ...) are accepted.
        """
        if not config:
            return cls()
        normalized: Dict[str, Any] = {}
        for key, value in config.items():
            name = PARAMETER_ALIASES.get(key, key)
            if name in normalized:
                raise ConfigurationError(f"Parameter '{name}' given more than once (as '{key}').")
            normalized[name] = value
        unexpected = set(normalized) - BORG_CONFIG_KEYS
        if unexpected:
            raise ConfigurationError(
                f"Unsupported Borg config keys: {sorted(unexpected)}",
                f"Known keys: {', '.join(sorted(BORG_CONFIG_KEYS | set(PARAMETER_ALIASES)))}",
            )
        kwargs: Dict[str, Any] = {}
        if "epsilon" in normalized:
            eps = normalized["epsilon"]
            kwargs["epsilon"] = tuple(float(e) for e in eps) if isinstance(eps, (list, tuple)) else float(eps)
        for name in ("tau", "gamma", "gamma_delta", "zeta", "mutation_rate"):
            if name in normalized:
                kwargs[name] = float(normalized[name])
        for name in ("pop_size", "restart_check_period", "operators_update_period", "max_steps_without_progress"):
            if name in normalized:
                kwargs[name] = int(normalized[name])
        if "operators" in normalized:
            kwargs["operators"] = tuple(_normalize_operator_spec(op) for op in normalized["operators"] or ())
        for name in ("mutation", "embedding"):
            if name in normalized:
                kwargs[name] = _normalize_operator_spec(normalized[name])
        if "initializer" in normalized:
            kwargs["initializer"] = str(normalized["initializer"]).lower()
        return cls(**kwargs)


class BorgConfig:
    """
    Declarative configuration holder for Borg MOEA settings.

    Examples:
        cfg = BorgConfig.default()
        cfg = BorgConfig().pop_size(100).epsilon(0.01).tau(0.02).fixed()
    """

    def __init__(self) -> None:
        self._cfg: Dict[str, Any] = {}

    @classmethod
    def default(cls, pop_size: int = 50, epsilon: float | Tuple[float, ...] = 0.1) -> BorgConfigData:
        """Create a default Borg configuration."""
        return cls().pop_size(pop_size).epsilon(epsilon).fixed()

    def epsilon(self, value: float | Tuple[float, ...] | list[float]) -> "BorgConfig":
        self._cfg["epsilon"] = tuple(float(v) for v in value) if isinstance(value, (list, tuple)) else float(value)
        return self

    def tau(self, value: float) -> "BorgConfig":
        self._cfg["tau"] = float(value)
        return self

    def gamma(self, value: float, delta: Optional[float] = None) -> "BorgConfig":
        self._cfg["gamma"] = float(value)
        if delta is not None:
            self._cfg["gamma_delta"] = float(delta)
        return self

    def gamma_delta(self, value: float) -> "BorgConfig":
        self._cfg["gamma_delta"] = float(value)
        return self

    def zeta(self, value: float) -> "BorgConfig":
        self._cfg["zeta"] = float(value)
        return self

    def pop_size(self, value: int) -> "BorgConfig":
        self._cfg["pop_size"] = int(value)
        return self

    def restart_check_period(self, value: int) -> "BorgConfig":
        self._cfg["restart_check_period"] = int(value)
        return self

    def operators_update_period(self, value: int) -> "BorgConfig":
        self._cfg["operators_update_period"] = int(value)
        return self

    def max_steps_without_progress(self, value: int) -> "BorgConfig":
        self._cfg["max_steps_without_progress"] = int(value)
        return self

    def operators(self, *specs: Any) -> "BorgConfig":
        self._cfg["operators"] = tuple(_normalize_operator_spec(spec) for spec in specs)
        return self

    def mutation(self, method: str, rate: Optional[float] = None, **kwargs: Any) -> "BorgConfig":
        self._cfg["mutation"] = (method, kwargs)
        if rate is not None:
            self._cfg["mutation_rate"] = float(rate)
        return self

    def embedding(self, method: str, **kwargs: Any) -> "BorgConfig":
        self._cfg["embedding"] = (method, kwargs)
        return self

    def initializer(self, method: str) -> "BorgConfig":
        self._cfg["initializer"] = str(method).lower()
        return self

    def fixed(self) -> BorgConfigData:
        _require_fields(self._cfg, ("pop_size",), "Borg")
        return BorgConfigData(**self._cfg)


__all__ = ["BorgConfig", "BorgConfigData", "PARAMETER_ALIASES", "BORG_CONFIG_KEYS"]
