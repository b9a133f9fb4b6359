"""
Named benchmark problems for config-driven runs.
"""

from __future__ import annotations

from typing import Any, Callable

from borgmoea.foundation.exceptions import ProblemError
from borgmoea.foundation.problem.base import Problem
from borgmoea.foundation.problem.zdt import SchafferN1Problem, ZDT1Problem, ZDT2Problem
from borgmoea.foundation.registry import Registry

PROBLEMS: Registry[Callable[..., Problem]] = Registry("Problems")
PROBLEMS.register("zdt1", ZDT1Problem)
PROBLEMS.register("zdt2", ZDT2Problem)
PROBLEMS.register("schaffer_n1", SchafferN1Problem)


def available_problem_names() -> list[str]:
    return PROBLEMS.list()


def make_problem(name: str, **kwargs: Any) -> Problem:
    key = name.lower()
    if key not in PROBLEMS:
        raise ProblemError(
            f"Unknown problem '{name}'.",
            f"Available problems: {', '.join(available_problem_names())}",
            {"problem": name},
        )
    return PROBLEMS[key](**kwargs)


__all__ = ["PROBLEMS", "available_problem_names", "make_problem"]
