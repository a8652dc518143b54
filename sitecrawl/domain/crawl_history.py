from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CrawlHistory:
    """One record per top-level crawl invocation.

    `page_count` and `depth` are only set for whole-site crawls.
    """
    url: str
    crawled_at: int
    page_count: Optional[int] = None
    depth: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"url": self.url, "crawledAt": self.crawled_at}
        if self.page_count is not None:
            payload["pageCount"] = self.page_count
        if self.depth is not None:
            payload["depth"] = self.depth
        return payload
