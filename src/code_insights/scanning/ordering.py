"""Display ordering shared by every tool report.

Paths that contain a directory separator (past the first character) sort
before top-level files; ties fall back to plain string comparison.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Callable, Iterable, TypeVar

T = TypeVar("T")


def strcmp(left: str, right: str) -> int:
    return -1 if left < right else 1 if left > right else 0


def compare_dirs_before_files(left: str, right: str) -> int:
    """Three-way comparison of two relative paths, directories first."""
    left_is_dir = left.find("/") > 0
    right_is_dir = right.find("/") > 0

    if left_is_dir == right_is_dir:
        return strcmp(left, right)

    return -1 if left_is_dir else 1


dirs_before_files_key = cmp_to_key(compare_dirs_before_files)


def sort_dirs_before_files(items: Iterable[T], key: Callable[[T], str]) -> list[T]:
    """Return ``items`` sorted by ``key(item)`` with directories first."""
    return sorted(items, key=lambda item: dirs_before_files_key(key(item)))
