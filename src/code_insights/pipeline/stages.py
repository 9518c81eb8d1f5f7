"""The four stages of a complexity run: select, parse, analyze, report."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Sequence

from ..complexity import ProjectReport, ProjectSettings, analyse_project
from ..config import ToolConfig
from ..exceptions import FileAccessError
from ..logging_config import get_logger
from ..report import ComplexityReportRenderer, RenderedReport
from ..scanning import FileRecord, FileSelector, sort_dirs_before_files
from ..syntax import Node, TreeSitterParser, parse_for_complexity
from .base import RunState, Stage, StageTask

logger = get_logger(__name__)


@dataclass
class ComplexityRun:
    """State shared by the stages of one run."""

    config: ToolConfig
    files: list[FileRecord] = field(default_factory=list)
    parsed: list[tuple[FileRecord, Node]] = field(default_factory=list)
    project: Optional[ProjectReport] = None
    report: Optional[RenderedReport] = None


def read_source(record: FileRecord) -> str:
    """Read one file as UTF-8.

    Raises:
        FileAccessError: If the file cannot be read or decoded
    """
    try:
        return Path(record.path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FileAccessError(Path(record.path), f"not valid UTF-8: {e}")
    except OSError as e:
        raise FileAccessError(Path(record.path), str(e))


def iter_parsed(
    files: Sequence[FileRecord], parser: Optional[TreeSitterParser] = None
) -> Iterator[tuple[FileRecord, Node]]:
    """Read and normalize one file at a time, in order."""
    parser = parser or TreeSitterParser()
    for record in files:
        content = read_source(record)
        yield record, parse_for_complexity(content, record.path, parser)


class SelectStage(Stage[ComplexityRun]):
    state = RunState.SELECTING
    title = "Find files"

    def run(self, context: ComplexityRun, task: StageTask) -> None:
        selector = FileSelector(context.config)
        task.title = f"Scanning {selector.describe()}"
        context.files = selector.select()
        task.title = f"Files found: {len(context.files)} ({selector.describe()})"


class ParseStage(Stage[ComplexityRun]):
    state = RunState.PARSING
    title = "Parse files"

    def run(self, context: ComplexityRun, task: StageTask) -> None:
        files = context.files
        task.title = f"Files to parse: {len(files)}"

        parsed: list[tuple[FileRecord, Node]] = []
        if files:
            for index, item in enumerate(iter_parsed(files)):
                parsed.append(item)
                task.title = f"Files remaining to parse: {len(files) - index - 1}"

        context.parsed = sort_dirs_before_files(parsed, key=lambda item: item[0].path_for_display)
        task.title = f"Files parsed: {len(context.parsed)}"


class AnalyzeStage(Stage[ComplexityRun]):
    state = RunState.ANALYZING
    title = "Analyze code complexity"

    def run(self, context: ComplexityRun, task: StageTask) -> None:
        task.title = "Analyzing code complexity..."
        config = context.config
        context.project = analyse_project(
            [(record.path, tree) for record, tree in context.parsed],
            ProjectSettings(
                skip_calculation=config.skip_project_calculation, new_mi=config.new_mi
            ),
        )


class ReportStage(Stage[ComplexityRun]):
    state = RunState.REPORTING
    title = "Generate report"

    def run(self, context: ComplexityRun, task: StageTask) -> None:
        task.title = "Generating report..."
        assert context.project is not None
        results = [
            (record, module)
            for (record, _), module in zip(context.parsed, context.project.reports)
        ]
        renderer = ComplexityReportRenderer(context.config.max_low_maintainability)
        context.report = renderer.render(
            results, verbose=context.config.verbose, project=context.project
        )
        task.title = "Done."


def complexity_stages() -> list[Stage[ComplexityRun]]:
    return [SelectStage(), ParseStage(), AnalyzeStage(), ReportStage()]
