"""Shared tool helpers: options, config resolution, error handling."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.text import Text

from ..config import ToolConfig, load_config
from ..exceptions import CodeInsightsError, FileAccessError
from ..logging_config import get_logger
from ..report import RenderedReport, print_report
from ..scanning import FileRecord

console = Console()
err_console = Console(stderr=True)

PATH_OPTION = typer.Option(
    None,
    "-C",
    "--path",
    help="Project root to scan (default: current directory)",
    exists=True,
    file_okay=False,
    dir_okay=True,
    readable=True,
)
DEBUG_OPTION = typer.Option(False, "--debug", help="Log debug output to stderr")
QUIET_OPTION = typer.Option(False, "-q", "--quiet", help="Log only errors to stderr")
LOG_FILE_OPTION = typer.Option(
    None,
    "--log-file",
    help="Append progress and errors to this file",
    dir_okay=False,
)
CONFIG_OPTION = typer.Option(
    None,
    "-c",
    "--config",
    help="Configuration file (TOML)",
    exists=True,
    file_okay=True,
    dir_okay=False,
    readable=True,
    hidden=True,
)


def resolve_config(
    tool: str,
    defaults: dict[str, Any],
    path: Optional[Path] = None,
    config: Optional[Path] = None,
    **overrides: Any,
) -> ToolConfig:
    """Build a tool's config from its defaults and CLI options."""
    if path is not None:
        overrides["base_dir"] = str(path)
    return load_config(tool, defaults=defaults, config_file=config, **overrides)


def read_text(record: FileRecord) -> str:
    """Read a selected file, tolerating bytes that are not UTF-8.

    Raises:
        FileAccessError: If the file cannot be read
    """
    try:
        return Path(record.path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise FileAccessError(Path(record.path), str(e))


@contextmanager
def tool_errors(tool: str, debug: bool = False) -> Iterator[None]:
    """Map failures inside a tool command onto exit codes."""
    logger = get_logger(f"tasks.{tool.replace('-', '_')}")
    try:
        yield
    except typer.Exit:
        raise
    except CodeInsightsError as e:
        logger.error(f"{tool} failed: {e}")
        err_console.print(Text.assemble(("Error: ", "red"), str(e)))
        raise typer.Exit(1)
    except KeyboardInterrupt:
        err_console.print(Text("\nInterrupted", style="yellow"))
        raise typer.Exit(130)
    except Exception as e:
        logger.exception(f"Unexpected error in {tool}")
        err_console.print(Text.assemble(("Unexpected error: ", "red"), str(e)))
        if debug:
            err_console.print_exception()
        raise typer.Exit(1)


def emit(report: RenderedReport) -> None:
    print_report(report, console)
