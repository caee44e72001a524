"""
Command-line interface for pygrep.

The CLI turns process arguments into a search invocation and maps fatal
errors to a non-zero exit status.
"""

from .main import cli, main

__all__ = [
    "cli",
    "main",
]
