"""Tests for the stage pipeline and the complexity run stages."""

from dataclasses import dataclass, field

import pytest

from code_insights.config import load_config
from code_insights.exceptions import FileAccessError, ParsingError
from code_insights.pipeline import (
    ComplexityRun,
    Pipeline,
    RunState,
    SelectStage,
    Stage,
    complexity_stages,
    read_source,
)
from code_insights.scanning import FileRecord
from code_insights.syntax import TREE_SITTER_AVAILABLE


@dataclass
class Context:
    seen: list = field(default_factory=list)


class Recording(Stage):
    def __init__(self, state, title, fail=False):
        self.state = state
        self.title = title
        self.fail = fail

    def run(self, context, task):
        context.seen.append(self.title)
        task.title = f"{self.title}: working"
        if self.fail:
            raise RuntimeError(f"{self.title} broke")


class TestPipeline:
    """Test ordering, progress labels and the run state."""

    def test_runs_in_order(self):
        pipeline = Pipeline(
            [Recording(RunState.SELECTING, "one"), Recording(RunState.PARSING, "two")]
        )
        context = pipeline.run(Context())

        assert context.seen == ["one", "two"]
        assert pipeline.state is RunState.DONE
        assert pipeline.titles == ["one", "one: working", "two", "two: working"]

    def test_progress_callback(self):
        published = []
        Pipeline([Recording(RunState.SELECTING, "one")], on_progress=published.append).run(
            Context()
        )
        assert published == ["one", "one: working"]

    def test_failure_skips_later_stages(self):
        pipeline = Pipeline(
            [
                Recording(RunState.SELECTING, "one"),
                Recording(RunState.PARSING, "two", fail=True),
                Recording(RunState.ANALYZING, "three"),
            ]
        )
        context = Context()

        with pytest.raises(RuntimeError, match="two broke"):
            pipeline.run(context)

        assert context.seen == ["one", "two"]
        assert pipeline.state is RunState.FAILED

    def test_empty_pipeline_is_done(self):
        pipeline = Pipeline([])
        pipeline.run(Context())
        assert pipeline.state is RunState.DONE

    def test_stage_states(self):
        assert [stage.state for stage in complexity_stages()] == [
            RunState.SELECTING,
            RunState.PARSING,
            RunState.ANALYZING,
            RunState.REPORTING,
        ]


class TestReadSource:
    """Test reading selected files."""

    def test_reads_utf8(self, tmp_path):
        path = tmp_path / "a.js"
        path.write_text("var a = 'é';\n", encoding="utf-8")
        assert read_source(FileRecord(str(path), "a.js")) == "var a = 'é';\n"

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "a.js"
        path.write_bytes(b"var a = '\xff';\n")
        with pytest.raises(FileAccessError, match="not valid UTF-8"):
            read_source(FileRecord(str(path), "a.js"))

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileAccessError):
            read_source(FileRecord(str(tmp_path / "missing.js"), "missing.js"))


class TestComplexityRun:
    """Test the four complexity stages end to end."""

    def test_zero_files(self, tmp_path):
        config = load_config("js-complex", base_dir=str(tmp_path))
        pipeline = Pipeline(complexity_stages())

        context = pipeline.run(ComplexityRun(config=config))

        assert context.files == []
        assert context.parsed == []
        assert context.report.totals.total == 0
        assert pipeline.state is RunState.DONE
        assert "Files parsed: 0" in pipeline.titles

    def test_select_stage_titles(self, js_project):
        config = load_config("js-complex", base_dir=str(js_project))
        pipeline = Pipeline([SelectStage()])

        context = pipeline.run(ComplexityRun(config=config))

        assert [f.path_for_display for f in context.files] == [
            "index.js",
            "lib/math.js",
            "lib/util/strings.js",
        ]
        assert pipeline.titles[-1].startswith("Files found: 3")

    @pytest.mark.skipif(not TREE_SITTER_AVAILABLE, reason="tree-sitter not installed")
    def test_full_run(self, js_project):
        config = load_config("js-complex", base_dir=str(js_project))
        pipeline = Pipeline(complexity_stages())

        context = pipeline.run(ComplexityRun(config=config))

        assert [record.path_for_display for record, _ in context.parsed] == [
            "lib/util/strings.js",
            "lib/math.js",
            "index.js",
        ]
        assert len(context.project.reports) == 3
        assert context.report.totals.total == 3
        assert pipeline.titles[-1] == "Done."

    @pytest.mark.skipif(not TREE_SITTER_AVAILABLE, reason="tree-sitter not installed")
    def test_parse_failure_fails_run(self, write_files, tmp_path):
        write_files({"bad.js": "function (\n"})
        config = load_config("js-complex", base_dir=str(tmp_path))
        pipeline = Pipeline(complexity_stages())
        context = ComplexityRun(config=config)

        with pytest.raises(ParsingError):
            pipeline.run(context)

        assert pipeline.state is RunState.FAILED
        assert context.project is None
        assert context.report is None
