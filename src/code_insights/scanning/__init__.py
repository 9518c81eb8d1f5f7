"""File scanning: selection and display ordering shared by all tools."""

from .models import FileRecord
from .ordering import compare_dirs_before_files, dirs_before_files_key, sort_dirs_before_files
from .selector import FileSelector, expand_braces

__all__ = [
    "FileRecord",
    "FileSelector",
    "expand_braces",
    "compare_dirs_before_files",
    "dirs_before_files_key",
    "sort_dirs_before_files",
]
