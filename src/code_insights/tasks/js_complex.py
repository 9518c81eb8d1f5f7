"""js-complex: maintainability index of each JavaScript file."""

from pathlib import Path
from typing import Optional

import typer

from ..config import DEFAULT_EXCLUDE_PATTERN
from ..logging_config import setup_logging
from ..pipeline import ComplexityRun, Pipeline, complexity_stages
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

TOOL_NAME = "js-complex"

DEFAULTS = {
    "glob": "**/*.js",
    "exclude_pattern": DEFAULT_EXCLUDE_PATTERN,
}

app = typer.Typer(
    name=TOOL_NAME,
    add_completion=False,
    rich_markup_mode="rich",
)


@app.command()
def js_complex(
    grep: Optional[str] = typer.Option(
        None,
        "--grep",
        help="Only analyze files whose relative path matches this regular expression",
    ),
    invert: bool = typer.Option(
        False,
        "--invert",
        help="Analyze files that do NOT match --grep instead",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Print the full metrics report of every file",
    ),
    new_mi: bool = typer.Option(
        False,
        "--new-mi",
        help="Rescale maintainability index to 0..100",
        hidden=True,
    ),
    project_metrics: bool = typer.Option(
        False,
        "--project-metrics",
        help="Also compute dependency density, change cost and core size",
        hidden=True,
    ),
    path: Optional[Path] = PATH_OPTION,
    debug: bool = DEBUG_OPTION,
    quiet: bool = QUIET_OPTION,
    log_file: Optional[Path] = LOG_FILE_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
):
    """
    Measure JavaScript code maintainability index of each source file via "escomplex".

    [bold]Examples:[/bold]

      code-insights js-complex

      code-insights js-complex --grep '.*/components/.*'

      code-insights js-complex --grep '.*/test/.*' --invert

      code-insights js-complex --verbose
    """
    with tool_errors(TOOL_NAME, debug):
        logger = setup_logging(TOOL_NAME, debug=debug, quiet=quiet, log_file=log_file)
        settings = resolve_config(
            TOOL_NAME,
            DEFAULTS,
            path=path,
            config=config,
            grep=grep,
            invert=invert or None,
            verbose=verbose or None,
            new_mi=new_mi or None,
            skip_project_calculation=False if project_metrics else None,
        )
        context = ComplexityRun(config=settings)
        pipeline = Pipeline(complexity_stages(), on_progress=logger.info)
        pipeline.run(context)
        if context.report is not None:
            emit(context.report)
