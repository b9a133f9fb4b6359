from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal, Mapping, overload

import numpy as np
from numpy.typing import NDArray

from borgmoea.adaptation.logging import write_weights_trace
from borgmoea.foundation.metrics.pareto import pareto_filter


def _logger() -> logging.Logger:
    return logging.getLogger("borgmoea.experiment.optimize")


class OptimizationResult:
    """
    Container returned by optimize() with user-friendly helper methods.

    Attributes:
        F: Archive objective values (n_solutions, n_objectives)
        X: Archive decision variables (n_solutions, n_variables)
        data: Full result dictionary with all fields
        meta: Run metadata (algorithm, seed, configuration)

    Examples:
        >>> result = optimize(ZDT1Problem(10), max_evaluations=5000, seed=1)
        >>> result.summary()  # Log quick overview
        >>> best = result.best("knee")  # Select a solution
        >>> df = result.to_dataframe()  # Export to pandas
    """

    def __init__(self, payload: Mapping[str, Any], *, meta: Mapping[str, Any] | None = None):
        self.F: NDArray[Any] | None = payload.get("F")
        self.X: NDArray[Any] | None = payload.get("X")
        self.data: dict[str, Any] = dict(payload)
        self.meta: dict[str, Any] = dict(meta or {})

    def __len__(self) -> int:
        """Number of solutions in the result."""
        return len(self.F) if self.F is not None else 0

    def __repr__(self) -> str:
        return f"OptimizationResult({len(self)} solutions, {self.n_objectives} objectives)"

    @property
    def n_objectives(self) -> int:
        """Number of objectives."""
        return self.F.shape[1] if self.F is not None and len(self.F) > 0 else 0

    @property
    def best_candidate(self) -> np.ndarray | None:
        return self.data.get("best_candidate")

    @property
    def best_fitness(self) -> tuple[float, ...] | None:
        return self.data.get("best_fitness")

    @property
    def stop_reason(self) -> str:
        return str(self.data.get("stop_reason", ""))

    @property
    def n_steps(self) -> int:
        return int(self.data.get("n_steps", 0))

    @property
    def n_evals(self) -> int:
        return int(self.data.get("n_evals", 0))

    @property
    def n_restarts(self) -> int:
        return int(self.data.get("n_restarts", 0))

    @property
    def elapsed_time(self) -> float:
        return float(self.data.get("elapsed_time", 0.0))

    def summary_text(self) -> str:
        """Return a human-readable summary string (no logging side effects)."""
        algo = self.meta.get("algorithm")
        seed = self.meta.get("seed")

        lines = [
            "=== Optimization Result ===",
            *([f"Algorithm: {algo}"] if algo else []),
            *([f"Seed: {seed}"] if seed is not None else []),
            *([f"Stop reason: {self.stop_reason}"] if self.stop_reason else []),
            f"Steps: {self.n_steps}",
            f"Evaluations: {self.n_evals}",
            f"Restarts: {self.n_restarts}",
            f"Elapsed: {self.elapsed_time:.3f}s",
            f"Solutions: {len(self)}",
            f"Objectives: {self.n_objectives}",
        ]

        if self.F is not None and len(self.F) > 0:
            lines.append("Objective ranges:")
            for i in range(self.n_objectives):
                col = self.F[:, i]
                lines.append(f"  f{i + 1}: [{col.min():.6f}, {col.max():.6f}]")
        if self.best_fitness is not None:
            formatted = ", ".join(f"{v:.6f}" for v in self.best_fitness)
            lines.append(f"Best fitness (min sum): ({formatted})")

        return "\n".join(lines)

    def summary(self) -> None:
        """Log a summary of the optimization result."""
        for line in self.summary_text().splitlines():
            _logger().info("%s", line)

    @overload
    def front(self, *, return_indices: Literal[False] = False) -> np.ndarray | None: ...

    @overload
    def front(self, *, return_indices: Literal[True]) -> tuple[np.ndarray, np.ndarray]: ...

    def front(self, *, return_indices: bool = False) -> np.ndarray | tuple[np.ndarray, np.ndarray] | None:
        """
        Return non-dominated solutions (first Pareto front).

        Args:
            return_indices: When True, also return indices of the front in F.
        """
        return pareto_filter(self.F, return_indices=return_indices)

    def best(self, method: str = "knee") -> dict[str, Any]:
        """
        Select a single 'best' solution from the archive.

        Args:
            method: Selection method - 'knee' (default), 'min_f1', 'min_f2', 'balanced', 'min_sum'

        Returns:
            Dictionary with 'X' (decision vars), 'F' (objectives),
            'index' (position in F/X), and 'front_index' (position in the front)
        """
        if self.F is None or len(self.F) == 0:
            raise ValueError("No solutions available")

        front_F, front_idx = self.front(return_indices=True)
        if len(front_F) == 0:
            raise ValueError("No solutions available")

        if method == "knee":
            # knee point: minimize normalized L1 distance
            F_norm = (front_F - front_F.min(axis=0)) / (np.ptp(front_F, axis=0) + 1e-12)
            front_pos = int(np.argmin(F_norm.sum(axis=1)))
        elif method == "min_f1":
            front_pos = int(np.argmin(front_F[:, 0]))
        elif method == "min_f2":
            front_pos = int(np.argmin(front_F[:, 1]))
        elif method == "balanced":
            F_norm = (front_F - front_F.min(axis=0)) / (np.ptp(front_F, axis=0) + 1e-12)
            front_pos = int(np.argmin(F_norm.max(axis=1)))
        elif method == "min_sum":
            front_pos = int(np.argmin(front_F.sum(axis=1)))
        else:
            raise ValueError(f"Unknown method '{method}'. Use: knee, min_f1, min_f2, balanced, min_sum")

        idx = int(front_idx[front_pos])
        return {
            "X": None if self.X is None else self.X[idx],
            "F": self.F[idx],
            "index": idx,
            "front_index": front_pos,
        }

    def to_dataframe(self) -> Any:
        """
        Convert the archive to a pandas DataFrame.

        Returns:
            DataFrame with columns for each objective (f1, f2, ...) and
            decision variables (x1, x2, ...).

        Raises:
            ImportError: If pandas is not installed.
        """
        try:
            import pandas as pd
        except ImportError as exc:
            raise ImportError("pandas is required for to_dataframe(). Install with: pip install borgmoea[analysis]") from exc

        if self.F is None or len(self.F) == 0:
            return pd.DataFrame()

        data = {f"f{i + 1}": self.F[:, i] for i in range(self.n_objectives)}
        if self.X is not None and self.X.ndim == 2:
            for i in range(self.X.shape[1]):
                data[f"x{i + 1}"] = self.X[:, i]
        return pd.DataFrame(data)

    def save(self, path: str | Path) -> Path:
        """
        Save results to a directory (CSV files for F, X, weight trace, and metadata).

        Args:
            path: Directory path to save results
        """
        out_dir = Path(path)
        out_dir.mkdir(parents=True, exist_ok=True)

        if self.F is not None:
            np.savetxt(out_dir / "FUN.csv", self.F, delimiter=",")
        if self.X is not None:
            np.savetxt(out_dir / "X.csv", self.X, delimiter=",")
        trace = self.data.get("weights_trace")
        if trace:
            write_weights_trace(out_dir / "weights_trace.csv", trace)

        metadata = {
            "n_solutions": len(self),
            "n_objectives": self.n_objectives,
            "n_steps": self.n_steps,
            "n_evals": self.n_evals,
            "n_restarts": self.n_restarts,
            "elapsed_time": self.elapsed_time,
            "stop_reason": self.stop_reason,
            "best_fitness": list(self.best_fitness) if self.best_fitness is not None else None,
            **{k: v for k, v in self.meta.items() if isinstance(v, (str, int, float, bool, type(None), dict, list))},
        }
        with open(out_dir / "metadata.json", "w", encoding="utf-8") as f:
            json.dump(metadata, f, indent=2, default=str)

        _logger().info("Results saved to %s", out_dir)
        return out_dir


__all__ = ["OptimizationResult"]
