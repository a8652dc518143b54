"""Functional boundary of the crawl engine.

The surrounding application calls the module-level functions below; they all
delegate to one process-wide `CrawlService` built from the DI container.
Call `configure()` to inject a summarizer or a custom container.
"""
from __future__ import annotations

import logging
import threading
from typing import List, Optional

from dependency_injector import providers

from sitecrawl.container import Container
from sitecrawl.domain.crawl_control import CrawlControl
from sitecrawl.domain.crawl_history import CrawlHistory
from sitecrawl.domain.crawl_options import CrawlWebpageOptions, CrawlWebsiteOptions, validate_search_limit
from sitecrawl.domain.crawl_result import CachedCrawl, CrawlResult
from sitecrawl.domain.robots_check import RobotsTxtCheck
from sitecrawl.services.summary_service import Summarizer

logger = logging.getLogger(__name__)


class CrawlService:
    """Keyword-argument facade over the orchestrator, store and robots checker."""

    def __init__(self, orchestrator, store, robots_service):
        self.orchestrator = orchestrator
        self.store = store
        self.robots_service = robots_service

    @classmethod
    def from_container(cls, container: Container) -> "CrawlService":
        return cls(
            orchestrator=container.crawl_orchestrator(),
            store=container.crawl_store(),
            robots_service=container.robots_service(),
        )

    def crawl_webpage(self, url: str, summarize: bool = False, user_agent: Optional[str] = None) -> CrawlResult:
        return self.orchestrator.crawl_webpage(url, CrawlWebpageOptions(summarize=summarize, user_agent=user_agent))

    def crawl_website(
        self,
        url: str,
        max_depth: int = 2,
        max_pages: int = 50,
        follow_external_links: bool = False,
        summarize: bool = False,
        respect_robots_txt: bool = True,
        honor_crawl_delay: Optional[bool] = None,
        control: Optional[CrawlControl] = None,
    ) -> List[CrawlResult]:
        options = CrawlWebsiteOptions(
            max_depth=max_depth,
            max_pages=max_pages,
            follow_external_links=follow_external_links,
            summarize=summarize,
            respect_robots_txt=respect_robots_txt,
            honor_crawl_delay=honor_crawl_delay,
        )
        return self.orchestrator.crawl_website(url, options, control=control)

    def search_cached(self, query: str, limit: int = 10) -> List[CachedCrawl]:
        return self.store.cache.search(query, limit=validate_search_limit(limit))

    def get_history(self, limit: int = 50) -> List[CrawlHistory]:
        return self.store.history.recent(limit)

    def check_robots_txt(self, url: str) -> RobotsTxtCheck:
        return self.robots_service.check_robots_txt(url)

    def clear_cache(self) -> None:
        self.store.cache.clear()


_lock = threading.Lock()
_service: Optional[CrawlService] = None


def configure(summarizer: Optional[Summarizer] = None, container: Optional[Container] = None) -> CrawlService:
    """(Re)build the process-wide service, optionally with a summarizer.

    Reconfiguring starts from an empty cache and history.
    """
    global _service
    container = container or Container()
    if summarizer is not None:
        container.summarizer.override(providers.Object(summarizer))
    with _lock:
        _service = CrawlService.from_container(container)
    logger.debug("Crawl service configured (summarizer=%s)", summarizer is not None)
    return _service


def get_service() -> CrawlService:
    global _service
    with _lock:
        if _service is None:
            _service = CrawlService.from_container(Container())
        return _service


def crawl_webpage(url: str, summarize: bool = False, user_agent: Optional[str] = None) -> CrawlResult:
    return get_service().crawl_webpage(url, summarize=summarize, user_agent=user_agent)


def crawl_website(url: str, **options) -> List[CrawlResult]:
    return get_service().crawl_website(url, **options)


def search_cached(query: str, limit: int = 10) -> List[CachedCrawl]:
    return get_service().search_cached(query, limit=limit)


def get_crawl_history(limit: int = 50) -> List[CrawlHistory]:
    return get_service().get_history(limit)


def check_robots_txt(url: str) -> RobotsTxtCheck:
    return get_service().check_robots_txt(url)


def clear_crawl_cache() -> None:
    get_service().clear_cache()
