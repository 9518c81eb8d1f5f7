"""Tests for the exception hierarchy."""

from pathlib import Path

from code_insights.exceptions import (
    AggregationError,
    AnalysisError,
    CodeInsightsError,
    ConfigurationError,
    FileAccessError,
    InvalidConfigError,
    ParsingError,
    SelectionError,
    UsageError,
)


class TestHierarchy:
    """Every error is a CodeInsightsError."""

    def test_analysis_errors(self):
        for error in (
            SelectionError(Path("."), "gone"),
            FileAccessError(Path("a.js"), "denied"),
            ParsingError(Path("a.js"), "javascript", "unexpected token"),
            AggregationError("boom"),
        ):
            assert isinstance(error, AnalysisError)
            assert isinstance(error, CodeInsightsError)

    def test_configuration_errors(self):
        assert isinstance(InvalidConfigError("glob", "", "empty"), ConfigurationError)
        assert isinstance(UsageError("bad"), CodeInsightsError)


class TestMessages:
    """Details are rendered after the message."""

    def test_plain_message(self):
        assert str(CodeInsightsError("failed")) == "failed"

    def test_parsing_error_location(self):
        error = ParsingError(Path("src/a.js"), "javascript", "missing ')'", line=3, column=7)
        text = str(error)
        assert "src/a.js" in text
        assert "line=3" in text
        assert "column=7" in text
        assert error.line == 3

    def test_aggregation_error_path(self):
        error = AggregationError("bad tree", Path("x.js"))
        assert error.filepath == Path("x.js")
        assert "filepath=x.js" in str(error)
