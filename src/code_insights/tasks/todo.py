"""todo: TODO-style comments collected from source files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional, Sequence

import typer

from ..logging_config import setup_logging
from ..report import RenderedReport, Severity
from ..scanning import FileSelector
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

TOOL_NAME = "todo"

TAGS = ["TODO", "HACK", "WORKAROUND", "FIXME", "XXX", "QUESTION", "REVIEW", "IDEA"]

# Files whose comment syntax the scanner understands.
COMMENTED_EXTENSIONS = [
    "js",
    "jsx",
    "mjs",
    "cjs",
    "ts",
    "tsx",
    "css",
    "scss",
    "sass",
    "less",
    "styl",
    "html",
    "hbs",
    "vue",
    "sh",
    "py",
    "rb",
    "yml",
    "yaml",
    "coffee",
]

GLOB = "{src,bin,webpack,cypress}/**/*"

DEFAULTS = {
    "glob": GLOB,
    "extensions": COMMENTED_EXTENSIONS,
    "exclude_pattern": r"node_modules|bower_components|vendor",
}

TAG_RE = re.compile(
    r"(?://|/\*|<!--|#|^\s*\*)\s*@?(" + "|".join(TAGS) + r")\b"
    r"(?:\s*\(([^)]*)\))?"
    r"\s*:?\s*(.*?)\s*(?:\*/|-->)?\s*$",
    re.IGNORECASE,
)
SKIPPED_TEST_RE = re.compile(r"""\bit\.skip\((['"])(.+)(\1),.*$""")
ESCAPE_RE = re.compile(r"\\(.)")
REF_SEPARATOR_RE = re.compile(r"[&|,;]+")

app = typer.Typer(name=TOOL_NAME, add_completion=False, rich_markup_mode="rich")


@dataclass(frozen=True)
class TodoItem:
    """One collected comment; ``line`` is 0 for synthesized items."""

    kind: str
    file: str
    line: int
    ref: str
    text: str

    def sort_key(self) -> tuple[int, str, int, str, str]:
        return (TAGS.index(self.kind), self.file, self.line, self.ref, self.text)


def find_todos(content: str, path_for_display: str) -> list[TodoItem]:
    items = []
    for number, line in enumerate(content.split("\n"), start=1):
        match = TAG_RE.search(line)
        if match is None:
            continue
        items.append(
            TodoItem(
                kind=match.group(1).upper(),
                file=path_for_display,
                line=number,
                ref=(match.group(2) or "").strip(),
                text=match.group(3),
            )
        )
    return items


def is_test_dir(path_for_display: str) -> bool:
    return PurePosixPath(path_for_display).parent.name.startswith("test")


def find_skipped_tests(content: str, path_for_display: str, team_username: str = "") -> list[TodoItem]:
    items = []
    for line in content.split("\n"):
        match = SKIPPED_TEST_RE.search(line)
        if match is None:
            continue
        items.append(
            TodoItem(
                kind="TODO",
                file=path_for_display,
                line=0,
                ref=f"@{team_username}",
                text="Enable skipped test: " + ESCAPE_RE.sub(r"\1", match.group(2)),
            )
        )
    return items


def collect_todos(content: str, path_for_display: str, team_username: str = "") -> list[TodoItem]:
    items = find_todos(content, path_for_display)
    if is_test_dir(path_for_display):
        items.extend(find_skipped_tests(content, path_for_display, team_username))
    return items


def format_refs(ref: str, team_username: str = "") -> str:
    """Normalize a ``(ref)`` list; ``any`` stands for the team."""
    names = []
    for name in REF_SEPARATOR_RE.split(ref):
        name = name.strip()
        if name == "any":
            name = team_username
        if name:
            names.append(name if name.startswith("@") or " " in name else f"@{name}")
    return ";".join(names)


def format_todo(item: TodoItem, team_username: str = "") -> str:
    refs = format_refs(item.ref, team_username)
    owner = f" {refs}" if refs and refs != "@" else ""
    location = item.file if item.line <= 0 else f"{item.file}:{item.line}"
    return f"{item.kind}{owner}: {item.text or '(no comment)'}  ({location})"


def render_todos(items: Sequence[TodoItem], team_username: str = "") -> RenderedReport:
    ordered = sorted(items, key=TodoItem.sort_key)
    report = RenderedReport(totals=len(ordered))

    report.add(f"Looked for {', '.join(TAGS)} in {GLOB}", Severity.MUTED)
    report.add()
    if not ordered:
        report.add("Congratulations, the code is clean of TODOs!", Severity.HEALTHY)
    for item in ordered:
        report.add(format_todo(item, team_username))

    report.add()
    report.add(f"TODOs found: {len(ordered)}", Severity.MUTED)
    return report


@app.command()
def todo(
    team_username: Optional[str] = typer.Option(
        None,
        "--team-username",
        help="GitHub username of the team.",
    ),
    path: Optional[Path] = PATH_OPTION,
    debug: bool = DEBUG_OPTION,
    quiet: bool = QUIET_OPTION,
    log_file: Optional[Path] = LOG_FILE_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
):
    """Collect TODO comments from source code files."""
    with tool_errors(TOOL_NAME, debug):
        logger = setup_logging(TOOL_NAME, debug=debug, quiet=quiet, log_file=log_file)
        settings = resolve_config(
            TOOL_NAME, DEFAULTS, path=path, config=config, team_username=team_username
        )
        team = settings.team_username or ""

        selector = FileSelector(settings)
        logger.info(f"Scanning {selector.describe()}")

        items: list[TodoItem] = []
        for record in selector.select():
            items.extend(collect_todos(read_text(record), record.path_for_display, team))
        logger.info(f"TODOs found: {len(items)}")

        emit(render_todos(items, team))
