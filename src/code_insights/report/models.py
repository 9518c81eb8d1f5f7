"""Rendered report types: severity-tagged lines plus run totals."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..complexity.models import MAINTAINABILITY_LOW, MAINTAINABILITY_MAX, MAINTAINABILITY_MEDIUM


class Severity(str, Enum):
    """How a report line should be emphasised when printed."""

    HEALTHY = "healthy"
    CAUTION = "caution"
    FLAGGED = "flagged"
    MUTED = "muted"
    LINK = "link"
    PLAIN = "plain"


def severity(maintainability: float) -> Severity:
    """Bucket a maintainability index: > 140 healthy, > 100 caution, else flagged."""
    if maintainability > MAINTAINABILITY_MEDIUM:
        return Severity.HEALTHY
    if maintainability > MAINTAINABILITY_LOW:
        return Severity.CAUTION
    return Severity.FLAGGED


@dataclass(frozen=True)
class ReportLine:
    text: str
    severity: Severity = Severity.PLAIN


@dataclass
class LowMaintainabilityEntry:
    path_for_display: str
    maintainability: float


@dataclass
class RunTotals:
    """Totals of one complexity run.

    ``lowest_maintainability_file`` stays ``None`` when no file scores
    below the ceiling.
    """

    total: int = 0
    lowest_maintainability: float = MAINTAINABILITY_MAX
    lowest_maintainability_file: Optional[str] = None
    top_unmaintainable_files: list[LowMaintainabilityEntry] = field(default_factory=list)


@dataclass
class RenderedReport:
    lines: list[ReportLine] = field(default_factory=list)
    totals: Any = None

    def add(self, text: str = "", severity: Severity = Severity.PLAIN) -> None:
        self.lines.append(ReportLine(text, severity))

    @property
    def text(self) -> str:
        return "\n".join(line.text for line in self.lines)
