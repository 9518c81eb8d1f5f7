"""Exception hierarchy for Code Insights."""

from .analysis import (
    AggregationError,
    AnalysisError,
    FileAccessError,
    ParsingError,
    SelectionError,
)
from .base import CodeInsightsError
from .config import ConfigurationError, InvalidConfigError, UsageError

__all__ = [
    "CodeInsightsError",
    "AnalysisError",
    "SelectionError",
    "FileAccessError",
    "ParsingError",
    "AggregationError",
    "ConfigurationError",
    "InvalidConfigError",
    "UsageError",
]
