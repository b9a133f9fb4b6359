from .base import FunctionProblem, Problem
from .registry import PROBLEMS, available_problem_names, make_problem
from .types import ProblemProtocol
from .zdt import SchafferN1Problem, ZDT1Problem, ZDT2Problem

__all__ = [
    "Problem",
    "FunctionProblem",
    "ProblemProtocol",
    "ZDT1Problem",
    "ZDT2Problem",
    "SchafferN1Problem",
    "PROBLEMS",
    "available_problem_names",
    "make_problem",
]
