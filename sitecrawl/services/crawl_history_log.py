import threading
from collections import deque
from typing import Deque, List

from sitecrawl.domain.crawl_history import CrawlHistory


class CrawlHistoryLog:
    """Bounded log of past crawl invocations, newest first."""

    def __init__(self, *, max_size: int = 100):
        self._max_size = max(1, int(max_size))
        self._entries: Deque[CrawlHistory] = deque(maxlen=self._max_size)
        self._lock = threading.Lock()

    def record(self, entry: CrawlHistory) -> None:
        # appendleft on a bounded deque drops the oldest entry from the right
        with self._lock:
            self._entries.appendleft(entry)

    def recent(self, limit: int = 50) -> List[CrawlHistory]:
        with self._lock:
            return list(self._entries)[: max(0, int(limit))]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
