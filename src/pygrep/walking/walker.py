from __future__ import annotations

import os
import time
from pathlib import Path

from ..core.config import WalkConfig
from ..core.types import EntryKind, WalkEntry
from ..utils.error_handling import (
    BuiltinPermissionError,
    ErrorCollector,
    FileAccessError,
    FilterProbeError,
    PermissionError,
)
from ..utils.logging_config import SearchLogger, get_logger
from .filters import FileFilter


class DirectoryWalker:
    """
    Enumerate the eligible files under a root directory.

    Traversal is top-down and single-threaded. Excluded directories are pruned
    in place so their subtrees are never entered. The result is a fully
    materialised list, ready to be fanned out across workers.
    """

    def __init__(
        self,
        root: Path | str,
        config: WalkConfig | None = None,
        error_collector: ErrorCollector | None = None,
        logger: SearchLogger | None = None,
    ) -> None:
        self.root = Path(root)
        self.config = config or WalkConfig()
        self.error_collector = error_collector
        self.logger = logger or get_logger()
        self.file_filter = FileFilter(self.root, self.config, error_collector, self.logger)
        self.entries_seen = 0

    def enumerate(self) -> list[WalkEntry]:
        """
        Walk the tree and return the eligible files in walk order.

        Raises:
            FileAccessError: the root is not a directory or cannot be listed
            PermissionError: listing the root is not permitted
        """
        if not self.root.is_dir():
            raise FileAccessError(f"Not a directory: {self.root}", self.root)
        self._check_root_readable()

        t0 = time.perf_counter()
        self.entries_seen = 0
        entries: list[WalkEntry] = []
        for dirpath, dirnames, filenames in os.walk(
            self.root, onerror=self._on_walk_error, followlinks=self.config.follow_symlinks
        ):
            base = Path(dirpath)
            dirnames.sort()
            # prune in place so os.walk never descends into excluded subtrees
            dirnames[:] = [
                d for d in dirnames if not self.file_filter.is_excluded(base / d, is_dir=True)
            ]
            for name in sorted(filenames):
                self.entries_seen += 1
                path = base / name
                if self.file_filter.eligible(path):
                    entries.append(WalkEntry(path=path, kind=EntryKind.FILE))

        self.logger.log_walk_stats(
            self.entries_seen, len(entries), (time.perf_counter() - t0) * 1000.0
        )
        return entries

    def _check_root_readable(self) -> None:
        """Raise if the root cannot be listed; only errors below the root are absorbed."""
        try:
            with os.scandir(self.root):
                pass
        except BuiltinPermissionError as e:
            raise PermissionError(f"Permission denied listing {self.root}: {e}", self.root) from e
        except OSError as e:
            raise FileAccessError(f"Cannot list directory {self.root}: {e}", self.root) from e

    def _on_walk_error(self, exc: OSError) -> None:
        path = Path(exc.filename) if exc.filename else self.root
        error = FilterProbeError(f"Cannot list directory {path}: {exc}", path)
        if self.error_collector is not None:
            self.error_collector.add_error(error)
        self.logger.log_file_error(str(path), str(error), operation="walk")


def walk_files(
    root: Path | str,
    config: WalkConfig | None = None,
    error_collector: ErrorCollector | None = None,
) -> list[Path]:
    """Return the paths of all eligible files under ``root``."""
    return [entry.path for entry in DirectoryWalker(root, config, error_collector).enumerate()]
