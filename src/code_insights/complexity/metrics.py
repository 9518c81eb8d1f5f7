"""Halstead and maintainability-index calculations.

Halstead (per scope):
    length      N  = N1 + N2
    vocabulary  n  = n1 + n2
    difficulty  D  = (n1 / 2) * (N2 / n2)       (N2 / n2 taken as 1 when n2 = 0)
    volume      V  = N * log2(n)
    effort      E  = D * V
    bugs        B  = V / 3000
    time        T  = E / 18

Maintainability index (Oman & Hagemeister, 1991):
    MI = 171 - 3.42 ln(E) - 0.23 ln(C) - 16.2 ln(L)

with E, C and L the average Halstead effort, cyclomatic complexity and
logical lines of code. ln(0) is taken as negative infinity, so an empty
module scores the ceiling of 171.
"""

from __future__ import annotations

import math

from ..exceptions import AggregationError
from .models import MAINTAINABILITY_MAX, FunctionReport, HalsteadMetrics


def ln(value: float) -> float:
    """Natural logarithm with ln(0) = -inf."""
    if value == 0:
        return -math.inf
    return math.log(value)


def calculate_halstead(halstead: HalsteadMetrics) -> None:
    """Fill the derived Halstead metrics from the operator/operand counts."""
    operators, operands = halstead.operators, halstead.operands

    halstead.length = operators.total + operands.total
    if halstead.length == 0:
        halstead.vocabulary = 0
        halstead.difficulty = 0
        halstead.volume = 0
        halstead.effort = 0
        halstead.bugs = 0
        halstead.time = 0
        return

    halstead.vocabulary = operators.distinct + operands.distinct
    halstead.difficulty = (operators.distinct / 2) * (
        1 if operands.distinct == 0 else operands.total / operands.distinct
    )
    halstead.volume = halstead.length * math.log2(halstead.vocabulary)
    halstead.effort = halstead.difficulty * halstead.volume
    halstead.bugs = halstead.volume / 3000
    halstead.time = halstead.effort / 18


def cyclomatic_density(report: FunctionReport) -> float:
    """Cyclomatic complexity per 100 logical lines."""
    if report.sloc_logical == 0:
        return math.inf
    return (report.cyclomatic / report.sloc_logical) * 100


def maintainability_index(
    average_effort: float,
    average_cyclomatic: float,
    average_loc: float,
    new_mi: bool = False,
) -> float:
    """Maintainability index from per-function averages.

    Args:
        average_effort: Average Halstead effort
        average_cyclomatic: Average cyclomatic complexity (must be > 0)
        average_loc: Average logical lines of code
        new_mi: Rescale to 0..100 (clamped at 0)

    Raises:
        AggregationError: If the average cyclomatic complexity is zero
    """
    if average_cyclomatic == 0:
        raise AggregationError("encountered function with cyclomatic complexity zero")

    mi = 171 - 3.42 * ln(average_effort) - 0.23 * ln(average_cyclomatic) - 16.2 * ln(average_loc)
    if mi > MAINTAINABILITY_MAX:
        mi = MAINTAINABILITY_MAX

    if new_mi:
        mi = max(0.0, (mi * 100) / MAINTAINABILITY_MAX)
    return mi
