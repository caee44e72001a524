from __future__ import annotations

import threading
from collections import deque

from .types import FileResult


class AggregationBuffer:
    """
    Lock-protected queue of per-file results shared by all workers.

    Each push inserts one whole FileResult atomically, so a file's lines are
    never interleaved with another file's. Order is completion order.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: deque[FileResult] = deque()

    def push(self, result: FileResult) -> bool:
        """Insert ``result`` if it has at least one line. Returns whether it was kept."""
        if not result.lines:
            return False
        with self._lock:
            self._items.append(result)
        return True

    def drain(self) -> list[FileResult]:
        """Remove and return every buffered result in insertion order."""
        with self._lock:
            drained = list(self._items)
            self._items.clear()
        return drained

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
