"""
Operator self-adaptation: portfolio, archive-driven weights and trace output.
"""

from .logging import TRACE_HEADER, WeightsTraceRow, write_weights_trace
from .portfolio import OperatorArm, OperatorPortfolio
from .weights import OperatorWeights

__all__ = [
    "OperatorArm",
    "OperatorPortfolio",
    "OperatorWeights",
    "TRACE_HEADER",
    "WeightsTraceRow",
    "write_weights_trace",
]
