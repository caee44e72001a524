"""
Directory traversal and file eligibility.
"""

from .filters import FileFilter, classify_entry, is_binary
from .walker import DirectoryWalker, walk_files

__all__ = [
    "DirectoryWalker",
    "FileFilter",
    "classify_entry",
    "is_binary",
    "walk_files",
]
