"""
Directory traversal and file selection for mdcollect.

This package resolves the root directory, walks it in a stable order and
selects the files whose extension is in the configured set.
"""
from .walker import walk_selected_files, FileEntry

__all__ = ["walk_selected_files", "FileEntry"]
