"""Configuration and invocation exceptions: CLI usage, settings."""

from typing import Any

from .base import CodeInsightsError


class UsageError(CodeInsightsError):
    """Raised when a tool is invoked with bad command-line arguments."""

    def __init__(self, reason: str):
        super().__init__(f"Invalid usage: {reason}", details={"reason": reason})
        self.reason = reason


class ConfigurationError(CodeInsightsError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason
