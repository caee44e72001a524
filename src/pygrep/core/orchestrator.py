"""
Concurrent fan-out of per-file searches.

The orchestrator takes the materialised list of eligible files, runs one search
task per file on a fixed-size thread pool, and funnels every non-empty result
into an AggregationBuffer. It moves through the states

    IDLE -> DISPATCHING -> COLLECTING -> DRAINING -> DONE

The query is compiled once, before any task is dispatched, and the compiled
matcher is shared read-only by every worker. An invalid query therefore fails
the whole invocation. Errors reading or decoding one file only drop that file.

There is no cancellation or timeout: a read that hangs blocks its worker, and
the invocation, until it returns.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from ..search.engine import read_file, search_lines
from ..search.matchers import LineMatcher, compile_matcher
from ..utils.error_handling import ErrorCollector, SearchError, handle_file_error
from ..utils.logging_config import SearchLogger, get_logger
from .aggregation import AggregationBuffer
from .config import SearchConfig, WalkConfig
from .types import FileResult, OrchestratorState


class ConcurrentOrchestrator:
    def __init__(
        self,
        query: str,
        config: SearchConfig,
        walk_config: WalkConfig | None = None,
        error_collector: ErrorCollector | None = None,
        logger: SearchLogger | None = None,
    ) -> None:
        self.query = query
        self.config = config
        self.walk_config = walk_config or WalkConfig()
        self.error_collector = error_collector
        self.logger = logger or get_logger()
        self.state = OrchestratorState.IDLE
        self.files_skipped = 0
        self._skip_lock = threading.Lock()

    def run(self, files: Sequence[Path]) -> list[FileResult]:
        """
        Search ``files`` in parallel and return the non-empty results.

        Results are in completion order, not in the order of ``files``.

        Raises:
            InvalidPatternError: the query does not compile under the active config
        """
        if self.state is not OrchestratorState.IDLE:
            raise RuntimeError(f"Orchestrator already used (state={self.state.value})")

        matcher = compile_matcher(self.query, self.config)
        buffer = AggregationBuffer()

        self._transition(OrchestratorState.DISPATCHING)
        workers = max(1, min(self.walk_config.resolve_workers(), len(files)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pygrep") as ex:
            futs = {ex.submit(self._search_one, p, matcher, buffer): p for p in files}
            self._transition(OrchestratorState.COLLECTING)
            for fut in as_completed(futs):
                fut.result()

        self._transition(OrchestratorState.DRAINING)
        results = buffer.drain()
        self._transition(OrchestratorState.DONE)
        return results

    def _search_one(self, path: Path, matcher: LineMatcher, buffer: AggregationBuffer) -> None:
        try:
            contents = read_file(path, self.walk_config.encoding)
            lines = search_lines(matcher, contents, self.config)
        except SearchError as e:
            with self._skip_lock:
                self.files_skipped += 1
            handle_file_error(path, "search", e, self.error_collector, self.logger)
            return
        # matching and formatting happen above, outside the buffer lock
        buffer.push(FileResult(path=path, lines=lines))

    def _transition(self, state: OrchestratorState) -> None:
        self.logger.debug(
            f"Orchestrator state: {self.state.value} -> {state.value}",
            operation="orchestrator_state",
        )
        self.state = state
