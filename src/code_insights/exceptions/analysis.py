"""Analysis-related exceptions: selection, file access, parsing, aggregation."""

from pathlib import Path
from typing import Optional

from .base import CodeInsightsError


class AnalysisError(CodeInsightsError):
    """Base class for analysis-related errors."""
    pass


class SelectionError(AnalysisError):
    """Raised when the set of files to analyze cannot be determined."""

    def __init__(self, base_dir: Path, reason: str):
        super().__init__(
            f"Cannot select files under: {base_dir}",
            details={"base_dir": str(base_dir), "reason": reason},
        )
        self.base_dir = base_dir
        self.reason = reason


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when file content cannot be parsed."""

    def __init__(
        self,
        filepath: Path,
        language: str,
        reason: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        details = {"filepath": str(filepath), "language": language, "reason": reason}
        if line is not None:
            details["line"] = str(line)
        if column is not None:
            details["column"] = str(column)

        super().__init__(f"Failed to parse {language} file: {filepath}", details=details)
        self.filepath = filepath
        self.language = language
        self.reason = reason
        self.line = line
        self.column = column


class AggregationError(AnalysisError):
    """Raised when the complexity engine fails on a batch of syntax trees."""

    def __init__(self, reason: str, filepath: Optional[Path] = None):
        details = {"reason": reason}
        if filepath is not None:
            details["filepath"] = str(filepath)

        super().__init__(f"Complexity analysis failed: {reason}", details=details)
        self.reason = reason
        self.filepath = filepath
