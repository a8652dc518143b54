from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

MIN_DEPTH = 1
MAX_DEPTH = 3
MIN_SEARCH_LIMIT = 1
MAX_SEARCH_LIMIT = 20


@dataclass(frozen=True)
class CrawlWebpageOptions:
    summarize: bool = False
    user_agent: Optional[str] = None


@dataclass(frozen=True)
class CrawlWebsiteOptions:
    """Settings for a whole-site crawl.

    `max_depth` counts link hops from the seed (the seed itself is depth 0).
    `honor_crawl_delay` lets the rate limiter stretch its pacing to the
    robots.txt Crawl-delay of the seed host. None defers to the limiter's
    configured default (`SITECRAWL_HONOR_CRAWL_DELAY`).
    """

    max_depth: int = 2
    max_pages: int = 50
    follow_external_links: bool = False
    summarize: bool = False
    respect_robots_txt: bool = True
    honor_crawl_delay: Optional[bool] = None

    def __post_init__(self):
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise ValueError("max_depth must be an integer")
        if not MIN_DEPTH <= self.max_depth <= MAX_DEPTH:
            raise ValueError(f"max_depth must be between {MIN_DEPTH} and {MAX_DEPTH}, got {self.max_depth}")
        if isinstance(self.max_pages, bool) or not isinstance(self.max_pages, int):
            raise ValueError("max_pages must be an integer")
        if self.max_pages < 1:
            raise ValueError(f"max_pages must be at least 1, got {self.max_pages}")


def validate_search_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValueError("limit must be an integer")
    if not MIN_SEARCH_LIMIT <= limit <= MAX_SEARCH_LIMIT:
        raise ValueError(f"limit must be between {MIN_SEARCH_LIMIT} and {MAX_SEARCH_LIMIT}, got {limit}")
    return limit
