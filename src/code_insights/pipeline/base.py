"""Linear stage pipeline with progress labels and a run-state machine.

    PENDING -> SELECTING -> PARSING -> ANALYZING -> REPORTING -> DONE

FAILED is reachable from every running stage. A stage starts only after
the previous one returned. The first exception marks the run FAILED, skips
every later stage and propagates unchanged.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Generic, Optional, Sequence, TypeVar

from ..logging_config import get_logger

logger = get_logger(__name__)

ProgressCallback = Optional[Callable[[str], None]]

C = TypeVar("C")


class RunState(str, Enum):
    PENDING = "pending"
    SELECTING = "selecting"
    PARSING = "parsing"
    ANALYZING = "analyzing"
    REPORTING = "reporting"
    DONE = "done"
    FAILED = "failed"


class StageTask:
    """Handle a running stage uses to publish its progress label."""

    def __init__(self, title: str, on_progress: ProgressCallback = None):
        self._title = title
        self._on_progress = on_progress
        self._publish()

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._title = value
        self._publish()

    def _publish(self) -> None:
        logger.debug(self._title)
        if self._on_progress is not None:
            self._on_progress(self._title)


class Stage(Generic[C]):
    """One unit of pipeline work.

    Subclasses set ``state`` and ``title`` and implement ``run``.
    """

    state: RunState = RunState.PENDING
    title: str = ""

    def run(self, context: C, task: StageTask) -> None:
        raise NotImplementedError


class Pipeline(Generic[C]):
    """Runs stages strictly in order over a shared context."""

    def __init__(self, stages: Sequence[Stage[C]], on_progress: ProgressCallback = None):
        self.stages = list(stages)
        self.on_progress = on_progress
        self.state = RunState.PENDING
        self.titles: list[str] = []

    def run(self, context: C) -> C:
        for stage in self.stages:
            self.state = stage.state
            logger.info(f"Stage: {stage.title} ({stage.state.value})")
            task = StageTask(stage.title, self._record)
            try:
                stage.run(context, task)
            except BaseException:
                self.state = RunState.FAILED
                logger.info(f"Stage failed: {stage.title}")
                raise
            logger.info(f"Stage done: {task.title}")

        self.state = RunState.DONE
        return context

    def _record(self, title: str) -> None:
        self.titles.append(title)
        if self.on_progress is not None:
            self.on_progress(title)
