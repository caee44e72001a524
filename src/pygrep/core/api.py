"""
Main API for pygrep.

PyGrep ties the pieces together. ``run`` looks at the root it is given: a
directory goes through the walker and the concurrent orchestrator, a regular
file is searched directly on the calling thread. On the single-file path every
error is fatal; on the directory path only an invalid query is.

Example:
    >>> from pygrep import PyGrep, SearchConfig
    >>> engine = PyGrep(SearchConfig(ignore_case=True, line_number=True))
    >>> result = engine.run("todo", "src")
    >>> for file_result in result.files:
    ...     print(file_result.path, len(file_result.lines))
"""

from __future__ import annotations

import time
from pathlib import Path

from ..search.engine import search, search_in_file
from ..utils.error_handling import ErrorCollector, FileAccessError
from ..utils.logging_config import SearchLogger, get_logger
from ..walking.walker import DirectoryWalker
from .config import SearchConfig, WalkConfig
from .orchestrator import ConcurrentOrchestrator
from .types import FileResult, SearchResult, SearchStats


class PyGrep:
    def __init__(
        self,
        config: SearchConfig | None = None,
        walk_config: WalkConfig | None = None,
        logger: SearchLogger | None = None,
    ) -> None:
        self.cfg = config or SearchConfig()
        self.walk_cfg = walk_config or WalkConfig()
        self.logger = logger or get_logger()
        self.error_collector = ErrorCollector()

    def search_text(self, query: str, contents: str) -> list[str]:
        return search(query, contents, self.cfg)

    def search_file(self, path: Path | str, query: str) -> list[str]:
        return search_in_file(Path(path), query, self.cfg, encoding=self.walk_cfg.encoding)

    def search_directory(self, root: Path | str, query: str) -> SearchResult:
        t0 = time.perf_counter()
        root = Path(root)
        self.error_collector.clear()
        self.logger.log_search_start(query, str(root))

        walker = DirectoryWalker(root, self.walk_cfg, self.error_collector, self.logger)
        files = [entry.path for entry in walker.enumerate()]

        orchestrator = ConcurrentOrchestrator(
            query, self.cfg, self.walk_cfg, self.error_collector, self.logger
        )
        results = orchestrator.run(files)

        stats = SearchStats(
            files_scanned=len(files),
            files_matched=len(results),
            lines_matched=sum(len(r.lines) for r in results),
            files_skipped=orchestrator.files_skipped,
            elapsed_ms=(time.perf_counter() - t0) * 1000.0,
        )
        self.logger.log_search_complete(query, stats.files_matched, stats.elapsed_ms)
        return SearchResult(files=results, stats=stats)

    def run(self, query: str, root: Path | str = ".") -> SearchResult:
        """
        Search ``root`` for ``query``.

        Raises:
            InvalidPatternError: the query does not compile in regex mode
            FileAccessError: ``root`` does not exist or cannot be read or listed
            PermissionError: ``root`` cannot be listed or read for lack of permission
            EncodingError: (file root) the file cannot be decoded
        """
        path = Path(root)
        if path.is_dir():
            return self.search_directory(path, query)
        if not path.exists():
            raise FileAccessError(f"No such file or directory: {path}", path)

        t0 = time.perf_counter()
        lines = self.search_file(path, query)
        files = [FileResult(path=path, lines=lines)] if lines else []
        stats = SearchStats(
            files_scanned=1,
            files_matched=len(files),
            lines_matched=len(lines),
            elapsed_ms=(time.perf_counter() - t0) * 1000.0,
        )
        return SearchResult(files=files, stats=stats)
