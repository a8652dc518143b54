"""Domain objects for SiteCrawl - explicit re-exports to satisfy linters."""
from .crawl_result import CrawlResult as CrawlResult
from .crawl_result import CachedCrawl as CachedCrawl
from .crawl_result import ExtractedContent as ExtractedContent
from .crawl_result import PageMetadata as PageMetadata
from .crawl_history import CrawlHistory as CrawlHistory
from .robots_check import RobotsTxtCheck as RobotsTxtCheck
from .frontier import FrontierEntry as FrontierEntry
from .frontier import FrontierState as FrontierState
from .crawl_options import CrawlWebpageOptions as CrawlWebpageOptions
from .crawl_options import CrawlWebsiteOptions as CrawlWebsiteOptions
from .crawl_control import CrawlControl as CrawlControl

__all__ = [
    "CrawlResult",
    "CachedCrawl",
    "ExtractedContent",
    "PageMetadata",
    "CrawlHistory",
    "RobotsTxtCheck",
    "FrontierEntry",
    "FrontierState",
    "CrawlWebpageOptions",
    "CrawlWebsiteOptions",
    "CrawlControl",
]
