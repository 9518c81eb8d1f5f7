"""Dispatcher entry point: ``code-insights <tool-name> [tool-arg]...``."""

from __future__ import annotations

import importlib
import re
import sys
from typing import Optional, Sequence

from rich.console import Console

from . import __version__
from .exceptions import UsageError
from .report import padright
from .tasks import TOOLS

PROG_NAME = "code-insights"

TOOL_NAME_RE = re.compile(r"^[a-z0-9_.-]+$", re.IGNORECASE)

EXIT_OK = 0
EXIT_USAGE = 2

OPTIONS = [
    ("--list", "List the available tools."),
    ("--help", "This help."),
]
EXAMPLES = ["js-complex", "js-complex --grep '.*/components/.*'", "todo --team-username my-team", "--help"]

err_console = Console(stderr=True, highlight=False)


def usage() -> str:
    width = max(len(name) for name, _ in OPTIONS)
    lines = [
        f"Run a tool from the toolbox ({PROG_NAME} {__version__}).",
        "",
        f"Usage: {PROG_NAME} <tool-name> [tool-arg]...",
        "",
        "Options:",
    ]
    lines.extend(f"  {padright(name, width)}  {text}" for name, text in OPTIONS)
    lines.extend(["", "Examples:"])
    lines.extend(f"  {PROG_NAME} {example}" for example in EXAMPLES)
    lines.extend(["", f"Tools: {', '.join(sorted(TOOLS))}"])
    return "\n".join(lines)


def resolve_tool(name: Optional[str]) -> Optional[str]:
    """Module path of the named tool, ``None`` when no such tool exists.

    Raises:
        UsageError: If ``name`` is missing, ``--help`` or not a valid tool name
    """
    if name is None or name == "--help":
        raise UsageError("a tool name is required")
    if not TOOL_NAME_RE.match(name):
        raise UsageError(f"invalid tool name: {name}")
    return TOOLS.get(name)


def _exit_code(error: SystemExit) -> int:
    if error.code is None:
        return EXIT_OK
    if isinstance(error.code, int):
        return error.code
    err_console.print(str(error.code), markup=False)
    return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Resolve the tool named by the first argument and run it.

    Returns the process exit code: 0 on success, 2 on a usage error or an
    unknown tool, otherwise whatever the tool exits with.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    name = args[0] if args else None

    if name == "--list":
        for tool in sorted(TOOLS):
            print(tool)
        return EXIT_OK

    try:
        module_name = resolve_tool(name)
    except UsageError:
        err_console.print(usage(), markup=False)
        return EXIT_USAGE

    if module_name is None:
        err_console.print(f"Tool not found: {name}", markup=False)
        return EXIT_USAGE

    module = importlib.import_module(module_name)
    try:
        module.app(args=args[1:], prog_name=f"{PROG_NAME} {name}")
    except SystemExit as e:
        return _exit_code(e)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
