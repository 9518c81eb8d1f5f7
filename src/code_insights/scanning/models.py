"""Data models for selected files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileRecord:
    """One discovered file.

    Attributes:
        path: Absolute, symlink-resolved path
        path_for_display: Path relative to the run's base directory
    """

    path: str
    path_for_display: str

    @classmethod
    def from_path(cls, path: Path, base_dir: Path) -> FileRecord:
        try:
            display = path.relative_to(base_dir).as_posix()
        except ValueError:
            # Outside the base dir (symlink target or explicit override)
            display = Path(os.path.relpath(path, base_dir)).as_posix()
        return cls(path=str(path), path_for_display=display)
