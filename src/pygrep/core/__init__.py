"""
Core functionality for the pygrep package.

This module contains the search invocation machinery:
- The PyGrep facade choosing between the directory and single-file paths
- Configuration objects
- Core data types
- The aggregation buffer and the concurrent orchestrator
"""

from .aggregation import AggregationBuffer
from .api import PyGrep
from .config import SearchConfig, WalkConfig
from .orchestrator import ConcurrentOrchestrator
from .types import (
    EntryKind,
    FileResult,
    MatchLine,
    OrchestratorState,
    OutputFormat,
    SearchResult,
    SearchStats,
    WalkEntry,
)

__all__ = [
    # Main classes
    "PyGrep",
    "SearchConfig",
    "WalkConfig",
    "AggregationBuffer",
    "ConcurrentOrchestrator",
    # Data types
    "EntryKind",
    "FileResult",
    "MatchLine",
    "OrchestratorState",
    "OutputFormat",
    "SearchResult",
    "SearchStats",
    "WalkEntry",
]
