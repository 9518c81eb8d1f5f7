"""Stage-sequential run orchestration."""

from .base import Pipeline, ProgressCallback, RunState, Stage, StageTask
from .stages import (
    AnalyzeStage,
    ComplexityRun,
    ParseStage,
    ReportStage,
    SelectStage,
    complexity_stages,
    iter_parsed,
    read_source,
)

__all__ = [
    "Pipeline",
    "ProgressCallback",
    "RunState",
    "Stage",
    "StageTask",
    "ComplexityRun",
    "SelectStage",
    "ParseStage",
    "AnalyzeStage",
    "ReportStage",
    "complexity_stages",
    "iter_parsed",
    "read_source",
]
