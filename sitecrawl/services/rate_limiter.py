import logging
import threading
import time
from typing import Callable, Dict, Optional
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


class RateLimiter:
    """Per-host pacing limiter.

    Each host is a leaky bucket with a single slot: a request may leave once
    `delay` seconds have passed since the previous request to the same host.
    The delay is `default_delay`, stretched to the robots.txt Crawl-delay when
    one is supplied and `honor_crawl_delay` is enabled.
    """

    def __init__(
        self,
        default_delay: float = 1.0,
        honor_crawl_delay: bool = True,
        clock: Callable[[], float] = time.monotonic,
        sleeper: Optional[Callable[[float], None]] = None,
    ):
        self.default_delay = max(0.0, float(default_delay))
        self.honor_crawl_delay = honor_crawl_delay
        self._clock = clock
        self._sleeper = sleeper
        self._last_request: Dict[str, float] = {}
        self._lock = threading.Lock()

    def get_domain(self, url: str) -> str:
        """Extract domain from URL"""
        return urlsplit(url).netloc.lower()

    def effective_delay(self, crawl_delay: Optional[float] = None, honor_crawl_delay: Optional[bool] = None) -> float:
        honor = self.honor_crawl_delay if honor_crawl_delay is None else honor_crawl_delay
        if honor and crawl_delay:
            return max(self.default_delay, float(crawl_delay))
        return self.default_delay

    def _sleep(self, seconds: float, stop_event) -> bool:
        """Sleep for `seconds`; returns False if interrupted by `stop_event`."""
        if self._sleeper is not None:
            self._sleeper(seconds)
            return stop_event is None or not stop_event.is_set()
        if stop_event is not None:
            return not stop_event.wait(seconds)
        time.sleep(seconds)
        return True

    def wait(
        self,
        url: str,
        crawl_delay: Optional[float] = None,
        stop_event=None,
        honor_crawl_delay: Optional[bool] = None,
        timeout: Optional[float] = None,
    ) -> bool:
        """Block until a request to `url`'s host is allowed.

        `timeout` caps the wait, usually the time left before a crawl deadline.
        Returns False without taking the slot when the required wait exceeds
        `timeout`, and False if the sleep was interrupted by `stop_event`.
        """
        domain = self.get_domain(url)
        delay = self.effective_delay(crawl_delay, honor_crawl_delay)

        with self._lock:
            last = self._last_request.get(domain)
            now = self._clock()
            wait_time = 0.0 if last is None else (last + delay) - now
            if timeout is not None and wait_time > timeout:
                logger.info("Rate limit wait for %s (%.2fs) exceeds remaining %.2fs", domain, wait_time, timeout)
                return False
            # Reserve the slot before sleeping so another caller queues behind us
            self._last_request[domain] = now + max(0.0, wait_time)

        if wait_time > 0:
            logger.debug("Rate limiting %s: waiting %.2fs", domain, wait_time)
            if not self._sleep(wait_time, stop_event):
                logger.info("Rate limit wait for %s interrupted", domain)
                return False
        return True

    def reset(self, url: Optional[str] = None) -> None:
        with self._lock:
            if url is None:
                self._last_request.clear()
            else:
                self._last_request.pop(self.get_domain(url), None)
