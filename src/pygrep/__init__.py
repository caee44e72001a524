"""
pygrep: line-oriented text search over files and directory trees.

Given a query and a root path, pygrep decides which lines match under a
configurable set of semantics and reports the matches per file.

Key Features:
    - **Matching modes**: literal substring, whole word, regular expression
    - **Line semantics**: case-insensitive matching, inverted selection, line numbers
    - **Directory walking**: skips binary, oversized, hidden and .gitignore'd files
    - **Parallel search**: one task per file on a thread pool, lock-protected aggregation
    - **Output formats**: plain text blocks, JSON, rich console highlighting
    - **Error handling**: fatal query errors, silent (but collectable) per-file errors

Main Classes:
    PyGrep: Search facade choosing the directory or single-file path
    SearchConfig: Matching semantics, immutable and shared by all workers
    WalkConfig: Traversal and execution settings
    SearchResult: Per-file results and statistics

Example Usage:
    >>> from pygrep import PyGrep, SearchConfig
    >>> engine = PyGrep(SearchConfig(line_number=True))
    >>> result = engine.run("def main", "src")
    >>> for file_result in result.files:
    ...     print(file_result.path)
    ...     print("\\n".join(file_result.lines))

    CLI usage:
        $ pygrep find -n -i "todo" src
"""

from .core.aggregation import AggregationBuffer
from .core.api import PyGrep
from .core.config import SearchConfig, WalkConfig
from .core.orchestrator import ConcurrentOrchestrator
from .core.types import (
    EntryKind,
    FileResult,
    MatchLine,
    OrchestratorState,
    OutputFormat,
    SearchResult,
    SearchStats,
    WalkEntry,
)
from .search.engine import search, search_in_file
from .search.matchers import compile_matcher, matches
from .utils.error_handling import (
    EncodingError,
    FileAccessError,
    FilterProbeError,
    InvalidPatternError,
    PermissionError,
    SearchError,
)
from .utils.logging_config import configure_logging, disable_logging, enable_debug_logging, get_logger
from .walking.filters import FileFilter
from .walking.walker import DirectoryWalker, walk_files

# Package metadata
__version__ = "0.1.0"
__license__ = "MIT"
__description__ = "Line-oriented text search over files and directory trees"

# Public API
__all__ = [
    # Main classes
    "PyGrep",
    "SearchConfig",
    "WalkConfig",
    "DirectoryWalker",
    "FileFilter",
    "ConcurrentOrchestrator",
    "AggregationBuffer",
    # Data types
    "EntryKind",
    "FileResult",
    "MatchLine",
    "OrchestratorState",
    "OutputFormat",
    "SearchResult",
    "SearchStats",
    "WalkEntry",
    # Functions
    "search",
    "search_in_file",
    "compile_matcher",
    "matches",
    "walk_files",
    # Logging
    "configure_logging",
    "get_logger",
    "enable_debug_logging",
    "disable_logging",
    # Exception classes
    "SearchError",
    "InvalidPatternError",
    "FileAccessError",
    "PermissionError",
    "EncodingError",
    "FilterProbeError",
    # Package metadata
    "__version__",
]
