import threading
import time
from typing import Callable, Optional


class CrawlControl:
    """Cancellation and deadline context for one whole-site crawl.

    Callers keep a reference and call `cancel()` from another thread to stop a
    running crawl. A crawl that is stopped returns the pages collected so far.
    """

    def __init__(
        self,
        stop_event: Optional[threading.Event] = None,
        timeout_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.stop_event = stop_event if stop_event is not None else threading.Event()
        self._clock = clock
        self.deadline = clock() + timeout_seconds if timeout_seconds is not None else None

    def cancel(self) -> None:
        self.stop_event.set()

    def is_cancelled(self) -> bool:
        return self.stop_event.is_set()

    def is_expired(self) -> bool:
        return self.deadline is not None and self._clock() >= self.deadline

    def should_stop(self) -> bool:
        return self.is_cancelled() or self.is_expired()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None when there is no deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - self._clock())
