"""
Logging for the code-insights tools.

Reports are printed to stdout. Log records go to stderr through rich and,
with ``--log-file``, to a plain-text file as well. The file always keeps
progress records (INFO) so a quiet run can still be traced afterwards.
Every record is stamped with the name of the tool that produced it.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from .exceptions import InvalidConfigError

ROOT_LOGGER = "code_insights"

FILE_FORMAT = "%(asctime)s %(levelname)-8s [%(tool)s] %(name)s: %(message)s"


class ToolFilter(logging.Filter):
    """Adds ``record.tool`` for the file format."""

    def __init__(self, tool: str):
        super().__init__()
        self.tool = tool

    def filter(self, record: logging.LogRecord) -> bool:
        record.tool = self.tool
        return True


def console_level(debug: bool = False, quiet: bool = False) -> int:
    """stderr threshold: ``--quiet`` beats ``--debug``; warnings by default."""
    if quiet:
        return logging.ERROR
    if debug:
        return logging.DEBUG
    return logging.WARNING


def _file_handler(log_file: Union[str, Path], debug: bool) -> logging.Handler:
    try:
        handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    except OSError as e:
        raise InvalidConfigError("log_file", log_file, e.strerror or str(e))
    handler.setLevel(logging.DEBUG if debug else logging.INFO)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging(
    tool: str,
    debug: bool = False,
    quiet: bool = False,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Route log records for one tool run.

    Args:
        tool: Tool name, stamped on every record
        debug: Show DEBUG records on stderr
        quiet: Show only ERROR records on stderr
        log_file: Optional file that receives INFO and above (DEBUG with ``debug``)

    Returns:
        The tool module logger, e.g. ``code_insights.tasks.js_complex``

    Raises:
        InvalidConfigError: If the log file cannot be opened
    """
    level = console_level(debug, quiet)

    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=debug,
        markup=False,
        show_time=debug,
        show_path=debug,
    )
    console_handler.setLevel(level)
    handlers: list[logging.Handler] = [console_handler]
    if log_file is not None:
        handlers.append(_file_handler(log_file, debug))

    tool_filter = ToolFilter(tool)
    for handler in handlers:
        handler.addFilter(tool_filter)

    # Tools run one after another in a single process (tests, dispatcher)
    logging.basicConfig(
        level=logging.WARNING, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )
    logging.getLogger(ROOT_LOGGER).setLevel(min(h.level for h in handlers))

    return get_logger(f"tasks.{tool.replace('-', '_')}")


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``code_insights`` namespace; the root one for ``None``."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
