"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from sitecrawl import config as env
from sitecrawl.services.content_extractor import ContentExtractor
from sitecrawl.services.crawl_cache import CrawlCache
from sitecrawl.services.crawl_history_log import CrawlHistoryLog
from sitecrawl.services.crawl_orchestrator import CrawlOrchestrator
from sitecrawl.services.crawl_store import CrawlStore
from sitecrawl.services.fetcher import PageFetcher
from sitecrawl.services.http_service import HttpService
from sitecrawl.services.link_filter import LinkFilter
from sitecrawl.services.rate_limiter import RateLimiter
from sitecrawl.services.robots_service import RobotsService
from sitecrawl.services.summary_service import SummaryService


# Environment variables used by the container (read via `sitecrawl.config` helpers).
#
# USER_AGENT (str, default: "SiteCrawl/1.0")
#   User-Agent header for page and robots.txt requests, and the agent robots rules are evaluated for.
#
# HTTP_TIMEOUT (int seconds, default: 10)
#   Per-request timeout for outbound HTTP requests.
#
# CRAWL_DELAY (float seconds, default: 1.0)
#   Minimum pause between two requests to the same host during a site crawl.
#
# SITECRAWL_HONOR_CRAWL_DELAY (bool, default: true)
#   Stretch CRAWL_DELAY to the robots.txt Crawl-delay when that is longer.
#
# SITECRAWL_MAX_CONTENT_BYTES (int, default: 10485760)
#   Pages larger than this are rejected with ContentTooLarge.
#
# SITECRAWL_CACHE_MAX_SIZE (int, default: 1000)
#   Max number of cached results (oldest inserted evicted first).
#
# SITECRAWL_CACHE_TTL_SECONDS (int seconds, default: 86400)
#   Cached results older than this are dropped when a search scans them.
#
# SITECRAWL_HISTORY_MAX_SIZE (int, default: 100)
#   Max number of crawl history records kept.
ENV = {
    "USER_AGENT": env.USER_AGENT,
    "HTTP_TIMEOUT": env.HTTP_TIMEOUT,
    "CRAWL_DELAY": env.CRAWL_DELAY,
    "SITECRAWL_HONOR_CRAWL_DELAY": env.HONOR_CRAWL_DELAY,
    "SITECRAWL_MAX_CONTENT_BYTES": env.MAX_CONTENT_BYTES,
    "SITECRAWL_CACHE_MAX_SIZE": env.CACHE_MAX_SIZE,
    "SITECRAWL_CACHE_TTL_SECONDS": env.CACHE_TTL_SECONDS,
    "SITECRAWL_HISTORY_MAX_SIZE": env.HISTORY_MAX_SIZE,
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for SiteCrawl."""

    # Configuration
    config = providers.Configuration(default=ENV)

    # Optional summarizer(content, title) -> str supplied by the host application
    summarizer = providers.Object(None)

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(int),
    )

    page_fetcher = providers.Singleton(
        PageFetcher,
        http_service=http_service,
        max_content_bytes=config.SITECRAWL_MAX_CONTENT_BYTES.as_(int),
    )

    content_extractor = providers.Singleton(
        ContentExtractor
    )

    link_filter = providers.Singleton(
        LinkFilter
    )

    robots_service = providers.Singleton(
        RobotsService,
        http_service=http_service,
        user_agent=config.USER_AGENT.as_(str),
    )

    rate_limiter = providers.Singleton(
        RateLimiter,
        default_delay=config.CRAWL_DELAY.as_(float),
        honor_crawl_delay=config.SITECRAWL_HONOR_CRAWL_DELAY.as_(bool),
    )

    crawl_cache = providers.Singleton(
        CrawlCache,
        max_size=config.SITECRAWL_CACHE_MAX_SIZE.as_(int),
        ttl_seconds=config.SITECRAWL_CACHE_TTL_SECONDS.as_(int),
    )

    crawl_history = providers.Singleton(
        CrawlHistoryLog,
        max_size=config.SITECRAWL_HISTORY_MAX_SIZE.as_(int),
    )

    # Process-wide store shared by every crawl
    crawl_store = providers.Singleton(
        CrawlStore,
        cache=crawl_cache,
        history=crawl_history,
    )

    summary_service = providers.Singleton(
        SummaryService,
        summarizer=summarizer,
    )

    crawl_orchestrator = providers.Singleton(
        CrawlOrchestrator,
        fetcher=page_fetcher,
        extractor=content_extractor,
        link_filter=link_filter,
        robots_service=robots_service,
        store=crawl_store,
        rate_limiter=rate_limiter,
        summary_service=summary_service,
    )
