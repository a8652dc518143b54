from typing import Optional

from sitecrawl.services.crawl_cache import CrawlCache
from sitecrawl.services.crawl_history_log import CrawlHistoryLog


class CrawlStore:
    """In-process home of the result cache and the crawl history.

    One store is shared process-wide through the container; tests and
    request-scoped callers build their own.
    """

    def __init__(self, cache: Optional[CrawlCache] = None, history: Optional[CrawlHistoryLog] = None):
        self.cache = cache if cache is not None else CrawlCache()
        self.history = history if history is not None else CrawlHistoryLog()
