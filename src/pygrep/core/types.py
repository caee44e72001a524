from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    HIGHLIGHT = "highlight"


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


class OrchestratorState(str, Enum):
    IDLE = "idle"
    DISPATCHING = "dispatching"
    COLLECTING = "collecting"
    DRAINING = "draining"
    DONE = "done"


@dataclass(slots=True, frozen=True)
class WalkEntry:
    path: Path
    kind: EntryKind


@dataclass(slots=True, frozen=True)
class MatchLine:
    # 1-based position in the original file
    line_number: int
    text: str


@dataclass(slots=True)
class FileResult:
    path: Path
    lines: list[str] = field(default_factory=list)


@dataclass(slots=True)
class SearchStats:
    files_scanned: int = 0
    files_matched: int = 0
    lines_matched: int = 0
    files_skipped: int = 0
    elapsed_ms: float = 0.0


@dataclass(slots=True)
class SearchResult:
    files: list[FileResult] = field(default_factory=list)
    stats: SearchStats = field(default_factory=SearchStats)
