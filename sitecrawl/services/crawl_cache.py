import logging
import threading
from collections import OrderedDict
from typing import Callable, List, Optional

from sitecrawl.domain.crawl_result import CachedCrawl, CrawlResult
from sitecrawl.utils.datetime_utils import now_millis

logger = logging.getLogger(__name__)


class CrawlCache:
    """
    Bounded in-memory store of crawl results keyed by `CachedCrawl.id`.

    - `max_size` bounds the number of entries; the oldest inserted entry is
      evicted first. Reads do not refresh an entry's position.
    - `ttl_seconds` bounds staleness; expired entries are only removed lazily
      when a search scans past them.
    """

    def __init__(self, *, max_size: int = 1000, ttl_seconds: int = 24 * 60 * 60, clock: Callable[[], int] = now_millis):
        self._max_size = int(max_size) if max_size is not None else 1000
        if self._max_size <= 0:
            self._max_size = 1
        self._ttl_millis = int(ttl_seconds) * 1000
        self._clock = clock
        self._entries: "OrderedDict[str, CachedCrawl]" = OrderedDict()
        self._lock = threading.Lock()

    def _is_expired(self, entry: CachedCrawl, now: int) -> bool:
        return now - entry.crawled_at > self._ttl_millis

    def _evict_if_needed(self) -> None:
        while len(self._entries) > self._max_size:
            evicted_id, _ = self._entries.popitem(last=False)
            logger.debug("Evicted %s from crawl cache", evicted_id)

    def add(self, result: CrawlResult) -> CachedCrawl:
        cached = result if isinstance(result, CachedCrawl) else CachedCrawl.from_result(result)
        with self._lock:
            self._entries[cached.id] = cached
            self._evict_if_needed()
        return cached

    def get(self, cache_id: str) -> Optional[CachedCrawl]:
        with self._lock:
            return self._entries.get(cache_id)

    def search(self, query: str, limit: int = 10) -> List[CachedCrawl]:
        """Case-insensitive substring search over title, text, excerpt and summary.

        Matches come back in insertion order, not ranked.
        """
        needle = (query or "").lower()
        now = self._clock()
        matches: List[CachedCrawl] = []
        with self._lock:
            for cache_id, entry in list(self._entries.items()):
                if self._is_expired(entry, now):
                    del self._entries[cache_id]
                    continue
                if len(matches) >= limit:
                    continue
                haystacks = (entry.title, entry.text_content, entry.excerpt, entry.summary or "")
                if any(needle in h.lower() for h in haystacks):
                    matches.append(entry)
        logger.info("Cache search completed: query=%r matches=%s", query, len(matches))
        return matches

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.info("Cache cleared")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, cache_id: str) -> bool:
        return cache_id in self._entries
