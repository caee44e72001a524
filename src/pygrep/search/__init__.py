"""
Line matching and per-file search.

- matchers: the closed set of line matching strategies
- engine: scanning one file's contents and formatting the selected lines
"""

from .engine import format_output, read_file, search, search_in_file, search_lines, split_lines
from .matchers import (
    LineMatcher,
    LiteralMatcher,
    RegexMatcher,
    WordMatcher,
    compile_matcher,
    matches,
)

__all__ = [
    # Matching
    "LineMatcher",
    "LiteralMatcher",
    "RegexMatcher",
    "WordMatcher",
    "compile_matcher",
    "matches",
    # Searching
    "format_output",
    "read_file",
    "search",
    "search_in_file",
    "search_lines",
    "split_lines",
]
