"""SiteCrawl: bounded breadth-first crawling with readable-content extraction."""
from sitecrawl.api import (
    CrawlService,
    check_robots_txt,
    clear_crawl_cache,
    configure,
    crawl_webpage,
    crawl_website,
    get_crawl_history,
    search_cached,
)

__all__ = [
    "CrawlService",
    "check_robots_txt",
    "clear_crawl_cache",
    "configure",
    "crawl_webpage",
    "crawl_website",
    "get_crawl_history",
    "search_cached",
]
