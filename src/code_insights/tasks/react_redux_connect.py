"""react-redux-connect: files that may hold store-connected React components."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import typer

from ..logging_config import setup_logging
from ..report import RenderedReport, Severity, padcenter, padleft, percent
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

TOOL_NAME = "react-redux-connect"

DISPLAY_ROOT = "src/"

DEFAULTS = {
    "glob": "src/**/*.js",
    "exclude_pattern": r"node_modules|bower_components|vendor",
}

STORE_IMPORTS = (
    "import { connect } from 'react-redux'",
    'import { connect } from "react-redux"',
)
STORE_IMPORT_RE = re.compile(r"""\bconnect\b[^}]*}\s+from\s+(['"])react-redux\1""")
REDUX_FORM_IMPORTS = (
    "import { reduxForm } from 'redux-form'",
    'import { reduxForm } from "redux-form"',
)
REDUX_FORM_IMPORT_RE = re.compile(r"""\breduxForm\b[^}]*}\s+from\s+(['"])redux-form\1""")

app = typer.Typer(name=TOOL_NAME, add_completion=False, rich_markup_mode="rich")


@dataclass
class ConnectStats:
    path_for_display: str
    store: int = 0
    redux_form: int = 0
    custom: int = 0

    @property
    def total(self) -> int:
        return self.store + self.redux_form + self.custom


@dataclass
class ConnectTotals:
    total: int = 0
    store: int = 0
    redux_form: int = 0
    custom: int = 0
    connected: int = 0

    @property
    def not_connected(self) -> int:
        return self.total - self.connected


def _imports(content: str, literals: Sequence[str], pattern: re.Pattern[str]) -> int:
    if any(literal in content for literal in literals) or pattern.search(content):
        return 1
    return 0


def detect_connections(
    content: str, path_for_display: str, custom_import_statements: Sequence[str] = ()
) -> ConnectStats:
    return ConnectStats(
        path_for_display=path_for_display,
        store=_imports(content, STORE_IMPORTS, STORE_IMPORT_RE),
        redux_form=_imports(content, REDUX_FORM_IMPORTS, REDUX_FORM_IMPORT_RE),
        custom=1 if any(statement in content for statement in custom_import_statements) else 0,
    )


def display_path(relative: str) -> str:
    return relative[len(DISPLAY_ROOT) :] if relative.startswith(DISPLAY_ROOT) else relative


def render_connections(stats: Sequence[ConnectStats]) -> RenderedReport:
    ordered = sort_dirs_before_files(stats, key=lambda item: item.path_for_display)
    totals = ConnectTotals(total=len(ordered))
    report = RenderedReport(totals=totals)

    for item in ordered:
        totals.store += 1 if item.store else 0
        totals.redux_form += 1 if item.redux_form else 0
        totals.custom += 1 if item.custom else 0

        if item.total > 0:
            totals.connected += 1
            level = Severity.FLAGGED if item.total > 1 else Severity.CAUTION
            report.add(f"[ {padcenter(item.total, 6)} ] {item.path_for_display}", level)
        else:
            report.add(f"[   OK   ] {item.path_for_display}", Severity.HEALTHY)

    report.add()
    report.add(f"Total: {totals.total}", Severity.MUTED)
    report.add(
        f"Not connected:  {padleft(totals.not_connected, 4)}"
        f"{percent(totals.not_connected, totals.total)}",
        Severity.HEALTHY,
    )
    report.add(
        f"Connected:      {padleft(totals.connected, 4)}{percent(totals.connected, totals.total)}",
        Severity.CAUTION,
    )
    return report


@app.command()
def react_redux_connect(
    path: Optional[Path] = PATH_OPTION,
    debug: bool = DEBUG_OPTION,
    quiet: bool = QUIET_OPTION,
    log_file: Optional[Path] = LOG_FILE_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
):
    """
    Find files that may contain React Redux connected components,
    i.e. import from "react-redux" or "redux-form".
    """
    with tool_errors(TOOL_NAME, debug):
        logger = setup_logging(TOOL_NAME, debug=debug, quiet=quiet, log_file=log_file)
        settings = resolve_config(TOOL_NAME, DEFAULTS, path=path, config=config)
        selector = FileSelector(settings)
        logger.info(f"Scanning {selector.describe()}")

        stats = [
            detect_connections(
                read_text(record),
                display_path(record.path_for_display),
                settings.custom_import_statements,
            )
            for record in selector.select()
        ]
        logger.info(f"Files processed: {len(stats)}")
        emit(render_connections(stats))
