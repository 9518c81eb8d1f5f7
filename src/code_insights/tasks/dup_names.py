"""dup-names: file names that occur in more than one directory."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional, Sequence

import typer

from ..logging_config import setup_logging
from ..report import RenderedReport, Severity, padleft
from ..scanning import FileRecord, FileSelector, sort_dirs_before_files
from ._common import (
    CONFIG_OPTION,
    DEBUG_OPTION,
    LOG_FILE_OPTION,
    PATH_OPTION,
    QUIET_OPTION,
    emit,
    resolve_config,
    tool_errors,
)

TOOL_NAME = "dup-names"

DEFAULT_EXTENSIONS = ["js", "scss", "sass", "less", "css", "html", "json", "yml"]

DEFAULTS = {
    "glob": "src/**/*",
    "extensions": DEFAULT_EXTENSIONS,
    "exclude_pattern": r"node_modules|bower_components|vendor|(^build/)|(^static/)|/index\.[^/]+$",
}

app = typer.Typer(name=TOOL_NAME, add_completion=False, rich_markup_mode="rich")


@dataclass
class NameGroup:
    name: str
    files: list[FileRecord]

    @property
    def duplicates(self) -> int:
        return len(self.files) - 1


@dataclass
class DupNamesTotals:
    total: int = 0
    total_duplicates: int = 0
    max_duplicates: int = 0


def group_by_name(records: Sequence[FileRecord]) -> list[NameGroup]:
    """Groups of files sharing a base name, only where there is more than one."""
    groups: dict[str, list[FileRecord]] = {}
    for record in records:
        groups.setdefault(PurePosixPath(record.path_for_display).name, []).append(record)

    return [
        NameGroup(name, sort_dirs_before_files(files, key=lambda r: r.path_for_display))
        for name, files in sorted(groups.items())
        if len(files) > 1
    ]


def render_duplicates(records: Sequence[FileRecord]) -> RenderedReport:
    groups = group_by_name(records)
    totals = DupNamesTotals(
        total=len(records),
        total_duplicates=len(groups),
        max_duplicates=max((group.duplicates for group in groups), default=0),
    )
    report = RenderedReport(totals=totals)

    for group in groups:
        level = Severity.FLAGGED if group.duplicates > 2 else Severity.CAUTION
        report.add(f"- {group.name} ({len(group.files)} files)", level)
        for record in group.files:
            report.add(f"  - {record.path_for_display}", Severity.MUTED)

    report.add()
    report.add(f"Total files:             {padleft(totals.total, 5)}", Severity.MUTED)
    report.add(f"Total duplicate names:   {padleft(totals.total_duplicates, 5)}", Severity.MUTED)
    report.add(f"Max duplicates per name: {padleft(totals.max_duplicates, 5)}", Severity.MUTED)
    return report


@app.command()
def dup_names(
    js_only: bool = typer.Option(
        False,
        "--js-only",
        help=f"Scan JavaScript (.js) files only. Default: {'|'.join(DEFAULT_EXTENSIONS)}",
    ),
    path: Optional[Path] = PATH_OPTION,
    debug: bool = DEBUG_OPTION,
    quiet: bool = QUIET_OPTION,
    log_file: Optional[Path] = LOG_FILE_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
):
    """Find duplicate file names across directories."""
    with tool_errors(TOOL_NAME, debug):
        logger = setup_logging(TOOL_NAME, debug=debug, quiet=quiet, log_file=log_file)
        settings = resolve_config(
            TOOL_NAME,
            DEFAULTS,
            path=path,
            config=config,
            extensions=["js"] if js_only else None,
        )
        selector = FileSelector(settings)
        logger.info(f"Scanning {selector.describe()}")
        records = selector.select()
        emit(render_duplicates(records))
