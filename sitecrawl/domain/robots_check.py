from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class RobotsTxtCheck:
    """Outcome of evaluating robots.txt for one URL. Recomputed on every call."""
    can_crawl: bool
    disallowed_paths: List[str] = field(default_factory=list)
    crawl_delay: Optional[float] = None
    sitemap: Optional[List[str]] = None

    @classmethod
    def allow_all(cls) -> "RobotsTxtCheck":
        return cls(can_crawl=True, disallowed_paths=[])

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "canCrawl": self.can_crawl,
            "disallowedPaths": list(self.disallowed_paths),
        }
        if self.crawl_delay is not None:
            payload["crawlDelay"] = self.crawl_delay
        if self.sitemap is not None:
            payload["sitemap"] = list(self.sitemap)
        return payload
