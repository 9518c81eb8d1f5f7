"""File selection: glob + exclusion rule -> deduplicated absolute paths."""

from __future__ import annotations

import fnmatch
import re
from pathlib import Path

from ..config import ToolConfig
from ..exceptions import SelectionError
from ..logging_config import get_logger
from .models import FileRecord

logger = get_logger(__name__)

BRACE_RE = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives, e.g. ``{src,bin}/**/*`` -> two globs."""
    match = BRACE_RE.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(head + option + tail))
    return expanded


class FileSelector:
    """Resolve a ToolConfig's glob, exclusions and grep filter into files.

    The returned order is not guaranteed; callers sort for display.
    """

    def __init__(self, config: ToolConfig):
        self.config = config
        self.base_dir = config.base_path

    def describe(self) -> str:
        """Human-readable file mask, e.g. ``**/*.js with !.*/test/.*``."""
        mask = self.config.glob
        if self.config.grep:
            mask += f" with {'!' if self.config.invert else ''}{self.config.grep}"
        return mask

    def select(self) -> list[FileRecord]:
        """Return the files to analyze.

        Raises:
            SelectionError: If the base directory cannot be read
        """
        if self.config.debug_file_path:
            return [self._override_record(self.config.debug_file_path)]

        if not self.base_dir.is_dir():
            raise SelectionError(self.base_dir, "not a readable directory")

        exclude_re = self.config.exclude_re
        grep_re = self.config.grep_re
        extensions = {ext if ext.startswith(".") else f".{ext}" for ext in self.config.extensions}

        records: list[FileRecord] = []
        seen: set[Path] = set()
        skipped = 0

        try:
            for candidate in self._candidates():
                if not candidate.is_file():
                    continue

                if extensions and candidate.suffix not in extensions:
                    continue

                resolved = candidate.resolve()
                if resolved in seen:
                    continue

                relative = candidate.relative_to(self.base_dir).as_posix()

                if exclude_re is not None and exclude_re.search(relative):
                    skipped += 1
                    logger.debug(f"Skipped (excluded): {relative}")
                    continue

                if grep_re is not None:
                    matched = grep_re.search(relative) is not None
                    if matched == self.config.invert:
                        skipped += 1
                        logger.debug(f"Skipped (grep): {relative}")
                        continue

                seen.add(resolved)
                records.append(FileRecord(path=str(resolved), path_for_display=relative))
        except OSError as e:
            raise SelectionError(self.base_dir, str(e))

        logger.info(f"Selected {len(records)} files ({skipped} skipped) for {self.describe()}")
        return records

    def _candidates(self):
        for pattern in expand_braces(self.config.glob):
            named = [s for s in pattern.split("/") if s.startswith(".") and s not in (".", "..")]
            for path in self.base_dir.glob(pattern):
                if self._is_hidden(path, named):
                    logger.debug(f"Skipped (hidden): {path}")
                    continue
                yield path

    def _is_hidden(self, path: Path, named: list[str]) -> bool:
        """True when a dot-prefixed part of ``path`` is not spelled out by the glob."""
        return any(
            part.startswith(".") and not any(fnmatch.fnmatchcase(part, s) for s in named)
            for part in path.relative_to(self.base_dir).parts
        )

    def _override_record(self, override: str) -> FileRecord:
        path = Path(override)
        if not path.is_absolute():
            path = self.base_dir / path
        if not path.is_file():
            raise SelectionError(self.base_dir, f"override file not found: {override}")
        logger.info(f"Single-file override: {path}")
        return FileRecord.from_path(path.resolve(), self.base_dir)
