"""
Configuration module for pygrep.

Two configuration objects are used by a search invocation:

    SearchConfig: the matching semantics (case, whole words, regex, inversion,
        line numbers). Frozen once built and shared read-only by every worker.
    WalkConfig: how the directory tree is traversed and searched (size ceiling,
        binary sniffing, hidden/ignore rules, worker count, file encoding).

Both are plain values passed in explicitly; nothing is read from the process
environment.

Example:
    >>> from pygrep.core.config import SearchConfig, WalkConfig
    >>> config = SearchConfig(ignore_case=True, line_number=True)
    >>> walk = WalkConfig(exclude=["**/*.min.js"], workers=4)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

MAX_FILE_BYTES = 10 * 1024 * 1024
SNIFF_BYTES = 1024


@dataclass(slots=True, frozen=True)
class SearchConfig:
    ignore_case: bool = False
    line_number: bool = False
    invert_match: bool = False
    whole_word: bool = False
    regex_enabled: bool = True

    @classmethod
    def from_flags(
        cls,
        *,
        ignore_case: bool = False,
        line_number: bool = False,
        invert_match: bool = False,
        whole_word: bool = False,
        fixed_strings: bool = False,
    ) -> SearchConfig:
        """Build a config from command-line style flags; regex is on unless fixed_strings."""
        return cls(
            ignore_case=ignore_case,
            line_number=line_number,
            invert_match=invert_match,
            whole_word=whole_word,
            regex_enabled=not fixed_strings,
        )


@dataclass(slots=True)
class WalkConfig:
    # Filtering
    max_file_bytes: int = MAX_FILE_BYTES
    sniff_bytes: int = SNIFF_BYTES
    skip_hidden: bool = True  # hidden directories below the root
    git_ignore: bool = True  # honour .gitignore files at or below the root
    exclude: list[str] = field(default_factory=list)  # gitwildmatch, relative to root
    follow_symlinks: bool = False

    # Execution
    workers: int = 0  # 0 = auto(cpu_count)
    encoding: str = "utf-8"

    def resolve_workers(self) -> int:
        if self.workers > 0:
            return self.workers
        return os.cpu_count() or 4
