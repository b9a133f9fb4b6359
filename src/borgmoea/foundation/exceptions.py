"""
borgmoea exception hierarchy.

Provides user-friendly exceptions with helpful error messages and suggestions.
All borgmoea-specific exceptions inherit from BorgError for easy catching.

Example:
    try:
        algo = BorgMOEA(problem, config)
    except ConfigurationError as e:
        log.error("Invalid setup: %s", e.message)
        log.error("Suggestion: %s", e.suggestion)
"""

from __future__ import annotations

from typing import Any


class BorgError(Exception):
    """
    Base exception for all borgmoea errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(BorgError):
    """Raised when configuration is invalid or incomplete."""

    pass


class InvalidOperatorError(ConfigurationError):
    """Raised when an unknown operator is specified."""

    def __init__(
        self,
        operator_type: str,
        operator_name: str,
        available: list[str] | None = None,
    ) -> None:
        message = f"Unknown {operator_type} operator '{operator_name}'."
        suggestion = f"Available {operator_type} operators: {', '.join(available)}" if available else None
        super().__init__(
            message,
            suggestion,
            {"operator_type": operator_type, "operator_name": operator_name},
        )


class MissingConfigError(ConfigurationError):
    """Raised when required configuration is missing."""

    def __init__(self, field: str, config_class: str | None = None) -> None:
        message = f"Missing required configuration: '{field}'."
        suggestion = f"Add '{field}' to your configuration"
        if config_class:
            suggestion += f" or use {config_class}.default() for sensible defaults"
        super().__init__(message, suggestion, {"field": field})


class InvalidParameterError(ConfigurationError):
    """Raised when a numeric parameter is outside its admissible range."""

    def __init__(self, name: str, value: Any, requirement: str) -> None:
        message = f"Invalid value for '{name}': {value!r} ({requirement})."
        suggestion = f"Set '{name}' so that it is {requirement}"
        super().__init__(message, suggestion, {"name": name, "value": value})


# =============================================================================
# Problem Errors
# =============================================================================


class ProblemError(BorgError):
    """Base class for problem-related errors."""

    pass


class ProblemDimensionError(ProblemError):
    """Raised when problem dimensions are invalid."""

    def __init__(
        self,
        message: str,
        n_var: int | None = None,
        n_obj: int | None = None,
    ) -> None:
        suggestion = "Check problem dimensions: n_var (variables), n_obj (objectives)"
        super().__init__(message, suggestion, {"n_var": n_var, "n_obj": n_obj})


class BoundsError(ProblemError):
    """Raised when bounds are invalid or inconsistent."""

    def __init__(self, message: str) -> None:
        suggestion = "Ensure xl <= xu for all variables and bounds have correct shape"
        super().__init__(message, suggestion)


# =============================================================================
# Runtime Errors
# =============================================================================


class OptimizationError(BorgError):
    """Raised when optimization fails during execution."""

    pass


class ArchiveInvariantError(OptimizationError, AssertionError):
    """Raised when the epsilon-box archive reaches a state its invariants forbid."""

    def __init__(self, message: str, box: tuple[int, ...] | None = None) -> None:
        suggestion = "This indicates a defect in the archive bookkeeping; please report it"
        super().__init__(message, suggestion, {"box": box})


# =============================================================================
# Dependency Errors
# =============================================================================


class DependencyError(BorgError):
    """Raised when an optional dependency is missing."""

    def __init__(self, package: str, feature: str, install_cmd: str | None = None) -> None:
        message = f"'{package}' is required for {feature} but not installed."
        install_cmd = install_cmd or f"pip install {package}"
        suggestion = f"Install with: {install_cmd}"
        super().__init__(message, suggestion, {"package": package, "feature": feature})


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Base
    "BorgError",
    # Configuration
    "ConfigurationError",
    "InvalidOperatorError",
    "MissingConfigError",
    "InvalidParameterError",
    # Problem
    "ProblemError",
    "ProblemDimensionError",
    "BoundsError",
    # Runtime
    "OptimizationError",
    "ArchiveInvariantError",
    # Dependencies
    "DependencyError",
]
