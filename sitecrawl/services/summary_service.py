import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

Summarizer = Callable[[str, str], str]


class SummaryService:
    """Wraps the optional injected summarizer.

    Summaries are best effort: a missing summarizer yields None and a failing
    one yields an empty string. Neither aborts the crawl.
    """

    def __init__(self, summarizer: Optional[Summarizer] = None):
        self.summarizer = summarizer

    def summarize(self, content: str, title: str) -> Optional[str]:
        if self.summarizer is None:
            logger.debug("No summarizer provided, skipping summary generation")
            return None
        try:
            return self.summarizer(content, title)
        except Exception:
            logger.error("Summary generation failed for %r", title, exc_info=True)
            return ""
