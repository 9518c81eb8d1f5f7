"""Configuration loading and management for Code Insights.

Every tool runs from one explicit ``ToolConfig`` value threaded through its
pipeline; nothing reads the working directory or the environment after the
configuration has been built. Configuration sources are merged in priority
order:
    1. Defaults (defined in ToolConfig)
    2. Tool defaults (each tool's glob / exclusion rule)
    3. Global config (~/.code-insights.toml)
    4. Project config (<base_dir>/code-insights.toml)
    5. Explicit config file
    6. Environment variables (CODE_INSIGHTS_* prefix)
    7. CLI overrides (passed as kwargs)

TOML files may hold top-level keys (all tools) and a ``[tools.<name>]``
table (one tool), the table winning over top-level keys.

Example:
    >>> config = load_config("js-complex", grep="components/", verbose=True)
    >>> config.verbose
    True
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

# Dependency directories, build output and metadata files never analyzed.
DEFAULT_EXCLUDE_PATTERN = (
    r"node_modules|bower_components|vendor|(^build/)|(^static/)"
    r"|(\bpackage\.json$)|(^\.eslintrc\.js$)|(\bnpm-shrinkwrap\.json$)"
)

ENV_PREFIX = "CODE_INSIGHTS_"
CONFIG_FILE_NAME = "code-insights.toml"


@dataclass(frozen=True)
class ToolConfig:
    """Configuration for one tool run.

    Attributes:
        File selection:
            base_dir: Directory scanned and used for display-relative paths
            glob: Inclusion glob, relative to base_dir
            extensions: Allowed file suffixes (empty = any suffix)
            exclude_pattern: Regex searched in each relative path to drop it
            grep: Optional regex a relative path must match to be kept
            invert: Keep paths that do NOT match grep instead
            debug_file_path: Analyze exactly this one file (no globbing)

        Output control:
            verbose: Print detailed per-file metrics
            max_low_maintainability: Cap of the worst-offenders list

        Complexity engine:
            skip_project_calculation: Skip dependency matrices / core size
            new_mi: Rescale maintainability to the 0..100 range

        Tool options:
            custom_import_statements: Extra store-connecting imports (react-redux-connect)
            team_username: Reference given to skipped-test items (todo)
    """

    # File selection
    base_dir: str = "."
    glob: str = "**/*.js"
    extensions: list[str] = field(default_factory=list)
    exclude_pattern: str = DEFAULT_EXCLUDE_PATTERN
    grep: Optional[str] = None
    invert: bool = False
    debug_file_path: Optional[str] = None

    # Output control
    verbose: bool = False
    max_low_maintainability: int = 20

    # Complexity engine
    skip_project_calculation: bool = True
    new_mi: bool = False

    # Tool options
    custom_import_statements: list[str] = field(default_factory=list)
    team_username: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.glob:
            raise InvalidConfigError("glob", self.glob, "must not be empty")
        for key in ("exclude_pattern", "grep"):
            value = getattr(self, key)
            if value is None:
                continue
            try:
                re.compile(value)
            except re.error as e:
                raise InvalidConfigError(key, value, f"not a valid regular expression: {e}")
        if self.max_low_maintainability < 0:
            raise InvalidConfigError(
                "max_low_maintainability", self.max_low_maintainability, "must be non-negative"
            )

    @property
    def base_path(self) -> Path:
        """Absolute, symlink-resolved base directory."""
        return Path(self.base_dir).expanduser().resolve()

    @property
    def exclude_re(self) -> Optional[re.Pattern[str]]:
        return re.compile(self.exclude_pattern) if self.exclude_pattern else None

    @property
    def grep_re(self) -> Optional[re.Pattern[str]]:
        return re.compile(self.grep) if self.grep else None


def load_config(
    tool: str,
    defaults: Optional[dict[str, Any]] = None,
    config_file: Optional[Path] = None,
    **overrides: Any,
) -> ToolConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        tool: Tool name, selects the ``[tools.<tool>]`` TOML table
        defaults: Tool-specific defaults layered over ToolConfig defaults
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values mean "not given on the command line" and are dropped

    Returns:
        Validated ToolConfig instance

    Raises:
        ConfigurationError: If a config file or environment value is invalid
    """
    merged: dict[str, Any] = dict(defaults or {})

    # base_dir decides where the project config lives, so resolve it first
    base_dir = overrides.get("base_dir") or merged.get("base_dir") or "."

    candidates = [
        Path.home() / f".{CONFIG_FILE_NAME}",
        Path(base_dir) / CONFIG_FILE_NAME,
    ]
    for candidate in candidates:
        if candidate.exists():
            merged.update(_load_tool_section(candidate, tool))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_tool_section(config_file, tool))

    merged.update(_load_env_vars())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ToolConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_tool_section(path: Path, tool: str) -> dict[str, Any]:
    """Flatten a TOML file into the keys that apply to ``tool``."""
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")

    tools = data.pop("tools", {})
    section = dict(data)
    if isinstance(tools, dict) and isinstance(tools.get(tool), dict):
        section.update(tools[tool])
    return section


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from CODE_INSIGHTS_* environment variables.

    Supported environment variables (one per ToolConfig field), e.g.:
        CODE_INSIGHTS_DEBUG_FILE_PATH: str
        CODE_INSIGHTS_GREP: str
        CODE_INSIGHTS_INVERT: bool (true/false/1/0)
        CODE_INSIGHTS_MAX_LOW_MAINTAINABILITY: int
        CODE_INSIGHTS_NEW_MI: bool

    Returns:
        Dict of field_name -> parsed_value for any CODE_INSIGHTS_* vars found.
    """
    type_hints = get_type_hints(ToolConfig)

    result: dict[str, Any] = {}

    for field_name in ToolConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list:
        return [part.strip() for part in value.split(",") if part.strip()]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is str:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
