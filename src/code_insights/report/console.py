"""Prints rendered reports with rich styles."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.text import Text

from .models import RenderedReport, Severity

SEVERITY_STYLES = {
    Severity.HEALTHY: "green",
    Severity.CAUTION: "yellow",
    Severity.FLAGGED: "red",
    Severity.MUTED: "bright_black",
    Severity.LINK: "blue underline",
    Severity.PLAIN: "",
}


def print_report(report: RenderedReport, console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print()
    for line in report.lines:
        console.print(
            Text(line.text, style=SEVERITY_STYLES[line.severity]),
            soft_wrap=True,
            highlight=False,
        )
