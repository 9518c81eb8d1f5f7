"""Project-level complexity: per-module reports, averages, dependency matrices.

Dependency structure metrics follow MacCormack, Rusnak & Baldwin (2006):

    adjacency A[i, j] = 1 when module i requires module j (relative paths only)
    visibility V      = transitive closure of (A + I)
    first-order density = 100 * sum(A) / n^2
    change cost         = 100 * sum(V) / n^2
    core size           = 100 * |{i : fan_in_i >= median, fan_out_i >= median}| / n
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from ..exceptions import AggregationError, CodeInsightsError
from ..logging_config import get_logger
from ..syntax.nodes import Node
from .models import Dependency, ModuleReport, ProjectReport
from .module import ModuleAnalyser
from .rules import WalkerSettings

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProjectSettings:
    """Options for one project analysis.

    Attributes:
        skip_calculation: Skip the dependency matrices and core size
        new_mi: Rescale maintainability to 0..100
        walker: Cyclomatic counting options
    """

    skip_calculation: bool = True
    new_mi: bool = False
    walker: WalkerSettings = field(default_factory=WalkerSettings)


def analyse_project(
    modules: Sequence[tuple[str, Node]], settings: Optional[ProjectSettings] = None
) -> ProjectReport:
    """Analyse every ``(path, tree)`` pair and aggregate the results.

    Reports keep the order of ``modules``.

    Raises:
        AggregationError: If any module cannot be analysed
    """
    settings = settings or ProjectSettings()
    analyser = ModuleAnalyser(settings.walker, new_mi=settings.new_mi)

    reports: list[ModuleReport] = []
    for path, tree in modules:
        try:
            reports.append(analyser.analyse(tree, path))
        except CodeInsightsError:
            raise
        except Exception as e:
            raise AggregationError(f"{path}: {e.__class__.__name__}: {e}", Path(path)) from e

    result = ProjectReport(reports=reports)
    _calculate_averages(result)

    if not settings.skip_calculation:
        _calculate_structure(result)

    logger.info(
        f"Analysed {len(reports)} modules, average maintainability {result.maintainability:.1f}"
    )
    return result


def _calculate_averages(result: ProjectReport) -> None:
    divisor = len(result.reports) or 1
    result.loc = sum(r.loc for r in result.reports) / divisor
    result.cyclomatic = sum(r.cyclomatic for r in result.reports) / divisor
    result.effort = sum(r.effort for r in result.reports) / divisor
    result.params = sum(r.params for r in result.reports) / divisor
    result.maintainability = sum(r.maintainability or 0.0 for r in result.reports) / divisor


def _calculate_structure(result: ProjectReport) -> None:
    adjacency = adjacency_matrix(result.reports)
    n = adjacency.shape[0]

    result.adjacency_matrix = adjacency
    result.first_order_density = _percent(int(adjacency.sum()), n * n)

    visibility = visibility_matrix(adjacency)
    result.visibility_matrix = visibility
    result.change_cost = _percent(int(visibility.sum()), n * n)
    result.core_size = core_size(visibility) if result.first_order_density else 0.0


def adjacency_matrix(reports: Sequence[ModuleReport]) -> np.ndarray:
    """``A[i, j] = 1`` when module ``i`` requires module ``j``."""
    n = len(reports)
    matrix = np.zeros((n, n), dtype=np.int64)
    for i, source in enumerate(reports):
        for j, target in enumerate(reports):
            if i != j and any(
                _depends_on(source.path, dep, target.path) for dep in source.dependencies
            ):
                matrix[i, j] = 1
    return matrix


def _depends_on(source_path: str, dependency: Dependency, target_path: str) -> bool:
    spec = dependency.path
    # Only relative CommonJS specifiers point inside the project
    if dependency.type == "CommonJS" and not spec.startswith("."):
        return False
    if not os.path.splitext(spec)[1]:
        spec += os.path.splitext(target_path)[1]
    resolved = os.path.normpath(os.path.join(os.path.dirname(source_path), spec))
    return resolved == os.path.normpath(target_path)


def visibility_matrix(adjacency: np.ndarray) -> np.ndarray:
    """Reachability (including each module itself) as a 0/1 matrix."""
    n = adjacency.shape[0]
    reach = ((adjacency + np.eye(n, dtype=np.int64)) > 0).astype(np.int64)
    while True:
        step = ((reach @ reach) > 0).astype(np.int64)
        if np.array_equal(step, reach):
            return reach
        reach = step


def core_size(visibility: np.ndarray) -> float:
    """Percentage of modules at or above the median on both fan axes."""
    n = visibility.shape[0]
    if n == 0:
        return 0.0
    fan_in = visibility.sum(axis=1)
    fan_out = visibility.sum(axis=0)
    core = np.logical_and(fan_in >= np.median(fan_in), fan_out >= np.median(fan_out))
    return _percent(int(core.sum()), n)


def _percent(value: int, limit: int) -> float:
    return 0.0 if limit == 0 else (value / limit) * 100
