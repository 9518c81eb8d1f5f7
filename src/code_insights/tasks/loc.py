"""loc: lines of code per file, aggregated."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

import typer

from ..logging_config import setup_logging
from ..report import RenderedReport, Severity, histogram_table, js_round, padleft
from ..scanning import FileSelector, sort_dirs_before_files
from ._common import (
    CONFIG_OPTION,
    DEBUG_OPTION,
    LOG_FILE_OPTION,
    PATH_OPTION,
    QUIET_OPTION,
    emit,
    read_text,
    resolve_config,
    tool_errors,
)
from .dup_names import DEFAULT_EXTENSIONS

TOOL_NAME = "loc"

DEFAULTS = {
    "glob": "src/**/*",
    "extensions": DEFAULT_EXTENSIONS,
    "exclude_pattern": r"node_modules|bower_components|vendor",
}

BUCKET_SIZE = 10
TOP_COUNT = 15

# A "//" preceded by "\" or ":" (URLs, escapes) does not start a comment.
COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/|([^\\:]|^)//.*$", re.MULTILINE)
BLANK_OR_COMMENT_RE = re.compile(r"^(\s*)(//.*)?$")
NEWLINES_RE = re.compile(r"\n+")

app = typer.Typer(name=TOOL_NAME, add_completion=False, rich_markup_mode="rich")


@dataclass
class FileLoc:
    path_for_display: str
    loc: int


@dataclass
class LocTotals:
    total: int = 0
    total_loc: int = 0
    histogram: dict[int, int] = field(default_factory=dict)
    top_files: list[FileLoc] = field(default_factory=list)
    bottom_files: list[FileLoc] = field(default_factory=list)

    @property
    def average(self) -> int:
        return js_round(self.total_loc / self.total) if self.total else 0


def count_loc(content: str) -> int:
    """Lines left after removing comments and blank lines."""
    code = COMMENT_RE.sub(r"\1", content)
    return sum(1 for line in NEWLINES_RE.split(code) if not BLANK_OR_COMMENT_RE.match(line))


def bucket_of(loc: int, size: int = BUCKET_SIZE) -> int:
    return math.ceil(loc / size) * size


def summarize(stats: Sequence[FileLoc]) -> LocTotals:
    totals = LocTotals(total=len(stats))
    for item in stats:
        totals.total_loc += item.loc
        bucket = bucket_of(item.loc)
        totals.histogram[bucket] = totals.histogram.get(bucket, 0) + 1

    totals.top_files = sorted(stats, key=lambda item: -item.loc)[:TOP_COUNT]
    totals.bottom_files = sorted(stats, key=lambda item: item.loc)[:TOP_COUNT]
    return totals


def render_loc(stats: Sequence[FileLoc]) -> RenderedReport:
    ordered = sort_dirs_before_files(stats, key=lambda item: item.path_for_display)
    totals = summarize(ordered)
    report = RenderedReport(totals=totals)

    for row in histogram_table(totals.histogram, ranged=True):
        report.add(row)

    report.add()
    report.add(f"Total files:   {padleft(totals.total, 10)}", Severity.MUTED)
    report.add(f"Total LOC:     {padleft(totals.total_loc, 10)}", Severity.MUTED)
    report.add(f"Average LOC:   {padleft(totals.average, 10)}", Severity.MUTED)

    for label, files in (("Top", totals.top_files), ("Bottom", totals.bottom_files)):
        report.add(f"{label} {len(files)} LOC:", Severity.MUTED)
        for item in files:
            report.add(f"{padleft(item.loc, 10)} {item.path_for_display}")
        report.add()

    return report


@app.command()
def loc(
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
    """Count lines of code (LOC) of each file, aggregate statistics."""
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

        stats = []
        for record in records:
            stats.append(FileLoc(record.path_for_display, count_loc(read_text(record))))
        logger.info(f"Files processed: {len(stats)}")

        emit(render_loc(stats))
