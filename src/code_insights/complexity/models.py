"""Report types produced by the complexity engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np

# Maintainability index: Oman & Hagemeister (1991). A logarithmic scale
# from negative infinity to 171 computed from logical lines of code,
# cyclomatic complexity and Halstead effort. Higher is better.
MAINTAINABILITY_MAX = 171
MAINTAINABILITY_LOW = 100
MAINTAINABILITY_MEDIUM = 140

DYNAMIC_DEPENDENCY = "* dynamic dependency *"


@dataclass
class HalsteadCounts:
    """Operator or operand tallies for one scope."""

    distinct: int = 0
    total: int = 0
    identifiers: list[str] = field(default_factory=list)

    def add(self, identifier: str) -> None:
        if identifier not in self.identifiers:
            self.identifiers.append(identifier)
            self.distinct += 1
        self.total += 1


@dataclass
class HalsteadMetrics:
    operators: HalsteadCounts = field(default_factory=HalsteadCounts)
    operands: HalsteadCounts = field(default_factory=HalsteadCounts)
    length: float = 0.0
    vocabulary: float = 0.0
    difficulty: float = 0.0
    volume: float = 0.0
    effort: float = 0.0
    bugs: float = 0.0
    time: float = 0.0


@dataclass
class FunctionReport:
    """Metrics for one function scope (or a whole module's aggregate).

    Attributes:
        name: Function name, the name it is assigned to, or ``<anonymous>``
        line: First line of the function
        sloc_logical: Logical lines (statements)
        sloc_physical: Lines spanned in the source
        cyclomatic: Cyclomatic complexity, starts at 1
        cyclomatic_density: Cyclomatic complexity per 100 logical lines
        halstead: Halstead counts and derived metrics
        params: Number of declared parameters
    """

    name: str
    line: int
    sloc_physical: int
    params: int = 0
    sloc_logical: int = 0
    cyclomatic: int = 1
    cyclomatic_density: float = 0.0
    halstead: HalsteadMetrics = field(default_factory=HalsteadMetrics)

    def to_dict(self) -> dict[str, Any]:
        h = self.halstead
        return {
            "name": self.name,
            "line": self.line,
            "sloc": {"logical": self.sloc_logical, "physical": self.sloc_physical},
            "cyclomatic": self.cyclomatic,
            "cyclomatic_density": self.cyclomatic_density,
            "params": self.params,
            "halstead": {
                "operators": {
                    "distinct": h.operators.distinct,
                    "total": h.operators.total,
                    "identifiers": list(h.operators.identifiers),
                },
                "operands": {
                    "distinct": h.operands.distinct,
                    "total": h.operands.total,
                    "identifiers": list(h.operands.identifiers),
                },
                "length": h.length,
                "vocabulary": h.vocabulary,
                "difficulty": h.difficulty,
                "volume": h.volume,
                "effort": h.effort,
                "bugs": h.bugs,
                "time": h.time,
            },
        }


@dataclass(frozen=True)
class Dependency:
    """A module specifier referenced through ``require(...)``."""

    line: int
    path: str
    type: str = "CommonJS"


@dataclass
class ModuleReport:
    """Complexity report for one file.

    ``maintainability`` stays ``None`` until the module has been analysed.
    ``loc``, ``cyclomatic``, ``effort`` and ``params`` are per-function
    averages (the aggregate's values when the module has no functions).
    """

    path: str
    aggregate: FunctionReport
    functions: list[FunctionReport] = field(default_factory=list)
    dependencies: list[Dependency] = field(default_factory=list)
    maintainability: Optional[float] = None
    loc: float = 0.0
    cyclomatic: float = 0.0
    effort: float = 0.0
    params: float = 0.0

    @property
    def dependent_modules(self) -> list[str]:
        return [d.path for d in self.dependencies]

    def to_dict(self) -> dict[str, Any]:
        return {
            "maintainability": self.maintainability,
            "loc": self.loc,
            "cyclomatic": self.cyclomatic,
            "effort": self.effort,
            "params": self.params,
            "aggregate": self.aggregate.to_dict(),
            "functions": [f.to_dict() for f in self.functions],
            "dependencies": [
                {"line": d.line, "path": d.path, "type": d.type} for d in self.dependencies
            ],
        }


@dataclass
class ProjectReport:
    """Per-module reports plus project-wide averages.

    The matrices, densities and core size are only computed when project
    calculation is enabled; otherwise they are ``None``.
    """

    reports: list[ModuleReport]
    loc: float = 0.0
    cyclomatic: float = 0.0
    effort: float = 0.0
    params: float = 0.0
    maintainability: float = 0.0
    adjacency_matrix: Optional[np.ndarray] = None
    visibility_matrix: Optional[np.ndarray] = None
    first_order_density: Optional[float] = None
    change_cost: Optional[float] = None
    core_size: Optional[float] = None
