"""Report rendering shared by every tool."""

from .complexity import METRICS_URL, ComplexityReportRenderer
from .console import SEVERITY_STYLES, print_report
from .formatting import (
    format_mapping,
    format_score,
    histogram_table,
    js_round,
    padcenter,
    padleft,
    padright,
    percent,
)
from .models import (
    LowMaintainabilityEntry,
    RenderedReport,
    ReportLine,
    RunTotals,
    Severity,
    severity,
)

__all__ = [
    "ComplexityReportRenderer",
    "METRICS_URL",
    "print_report",
    "SEVERITY_STYLES",
    "RenderedReport",
    "ReportLine",
    "RunTotals",
    "LowMaintainabilityEntry",
    "Severity",
    "severity",
    "format_mapping",
    "format_score",
    "histogram_table",
    "js_round",
    "padcenter",
    "padleft",
    "padright",
    "percent",
]
