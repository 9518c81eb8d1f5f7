"""Renders complexity results as severity-tagged report lines."""

from __future__ import annotations

from typing import Optional, Sequence

from ..complexity.models import (
    MAINTAINABILITY_LOW,
    MAINTAINABILITY_MAX,
    ModuleReport,
    ProjectReport,
)
from ..scanning import FileRecord, sort_dirs_before_files
from .formatting import format_mapping, format_score, padcenter, padleft
from .models import LowMaintainabilityEntry, RenderedReport, RunTotals, Severity, severity

METRICS_URL = "https://github.com/escomplex/escomplex/blob/master/METRICS.md#metrics"


class ComplexityReportRenderer:
    """One line per file, an optional metrics dump, then the run totals.

    Files are listed directories first, then by path; the low
    maintainability list is ascending (worst first) and capped.
    """

    def __init__(self, max_low_maintainability: int = 20):
        self.max_low_maintainability = max_low_maintainability

    def render(
        self,
        results: Sequence[tuple[FileRecord, ModuleReport]],
        verbose: bool = False,
        project: Optional[ProjectReport] = None,
    ) -> RenderedReport:
        ordered = sort_dirs_before_files(results, key=lambda item: item[0].path_for_display)
        totals = RunTotals(total=len(ordered))
        report = RenderedReport(totals=totals)

        for record, module in ordered:
            mi = self._maintainability(module)
            level = severity(mi)
            report.add(f"[ {padcenter(format_score(mi), 6)} ] {record.path_for_display}", level)

            if mi < totals.lowest_maintainability:
                totals.lowest_maintainability = mi
                totals.lowest_maintainability_file = record.path_for_display

            if verbose:
                self._add_dump(report, module)

        low = sorted(
            (
                LowMaintainabilityEntry(record.path_for_display, self._maintainability(module))
                for record, module in ordered
            ),
            key=lambda entry: entry.maintainability,
        )
        totals.top_unmaintainable_files = [
            entry for entry in low if entry.maintainability <= MAINTAINABILITY_LOW
        ][: self.max_low_maintainability]

        self._add_footer(report, totals, project)
        return report

    @staticmethod
    def _maintainability(module: ModuleReport) -> float:
        return MAINTAINABILITY_MAX if module.maintainability is None else module.maintainability

    def _add_dump(self, report: RenderedReport, module: ModuleReport) -> None:
        report.add(f"{padleft('', 11)}metrics report:", Severity.MUTED)
        for line in format_mapping(module.to_dict(), indent=15):
            report.add(line)
        report.add()
        report.add()

    def _add_footer(
        self, report: RenderedReport, totals: RunTotals, project: Optional[ProjectReport]
    ) -> None:
        report.add()
        report.add(f"Total files:  {totals.total}", Severity.MUTED)

        if totals.lowest_maintainability_file is not None:
            report.add(
                f"Lowest maintainability index: {format_score(totals.lowest_maintainability)} "
                f"{totals.lowest_maintainability_file}",
                Severity.MUTED,
            )

        if not totals.top_unmaintainable_files:
            report.add("No files with low maintainability.", Severity.MUTED)
        else:
            count = len(totals.top_unmaintainable_files)
            report.add(f"{count} files with low maintainability:", Severity.MUTED)
            for entry in totals.top_unmaintainable_files:
                report.add(
                    f"{padleft(format_score(entry.maintainability), 10)} {entry.path_for_display}",
                    severity(entry.maintainability),
                )

        if project is not None and project.first_order_density is not None:
            report.add()
            report.add(f"First-order density: {project.first_order_density:.2f}%", Severity.MUTED)
            report.add(f"Change cost:         {project.change_cost:.2f}%", Severity.MUTED)
            report.add(f"Core size:           {project.core_size:.2f}%", Severity.MUTED)

        report.add()
        report.add(f"See {METRICS_URL} for details on report metrics.", Severity.LINK)
