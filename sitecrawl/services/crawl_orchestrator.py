import logging
from collections import deque
from typing import Callable, Deque, List, Optional, Tuple

from sitecrawl.domain.crawl_control import CrawlControl
from sitecrawl.domain.crawl_history import CrawlHistory
from sitecrawl.domain.crawl_options import CrawlWebpageOptions, CrawlWebsiteOptions
from sitecrawl.domain.crawl_result import CrawlResult
from sitecrawl.domain.frontier import FrontierEntry, FrontierState
from sitecrawl.domain.visited_tracker import VisitedTracker
from sitecrawl.exceptions import CrawlError, CrawlFailed, InvalidUrl, RobotsDisallowed, WebsiteCrawlFailed
from sitecrawl.services.content_extractor import Extractor
from sitecrawl.services.crawl_store import CrawlStore
from sitecrawl.services.fetcher import Fetcher, validate_url
from sitecrawl.services.summary_service import SummaryService
from sitecrawl.utils.datetime_utils import now_millis
from sitecrawl.utils.url_utils import hostname_of, normalize_url

logger = logging.getLogger(__name__)


class CrawlOrchestrator:
    """Drives single-page and breadth-first whole-site crawls.

    This class owns the crawl control-flow (traversal, cancellation checks,
    pacing, calling fetch/extract, and feeding the store). It does NOT
    construct dependencies; that stays in the DI layer.

    Every `crawl_website` call owns its own visited set, queue and results.
    Only the shared `CrawlStore` is touched across calls, and only by appends.
    """

    def __init__(
        self,
        *,
        fetcher: Fetcher,
        extractor: Extractor,
        link_filter,
        robots_service,
        store: CrawlStore,
        rate_limiter,
        summary_service: Optional[SummaryService] = None,
        clock: Callable[[], int] = now_millis,
    ):
        self.fetcher = fetcher
        self.extractor = extractor
        self.link_filter = link_filter
        self.robots_service = robots_service
        self.store = store
        self.rate_limiter = rate_limiter
        self.summary_service = summary_service or SummaryService()
        self._clock = clock

    def _transition(self, entry: FrontierEntry, state: FrontierState) -> None:
        logger.debug("Frontier %s (depth %s) -> %s", entry.url, entry.depth, state.value)

    def _crawl_page(self, url: str, summarize: bool, user_agent: Optional[str]) -> Tuple[CrawlResult, List[str]]:
        """Fetch once, extract content and links, then cache and record the page."""
        logger.info("Crawling webpage %s", url)
        try:
            html = self.fetcher.fetch_page(url, user_agent=user_agent)
            extracted = self.extractor.extract_page(html, url)

            summary = None
            if summarize:
                summary = self.summary_service.summarize(extracted.text_content, extracted.title)

            result = CrawlResult.from_extracted(extracted, crawled_at=self._clock(), summary=summary)
            self.store.cache.add(result)
            self.store.history.record(CrawlHistory(url=url, crawled_at=result.crawled_at))
        except CrawlError as e:
            logger.error("Webpage crawl failed for %s: %s", url, e)
            raise
        except Exception as e:
            logger.error("Webpage crawl failed for %s: %s", url, e, exc_info=True)
            raise CrawlFailed(url, e) from e

        logger.info("Webpage crawled successfully %s (title=%r, length=%s)", url, result.title, result.length)
        return result, list(extracted.links)

    def crawl_webpage(self, url: str, options: Optional[CrawlWebpageOptions] = None) -> CrawlResult:
        """Crawl a single page. Every error propagates to the caller."""
        options = options or CrawlWebpageOptions()
        result, _ = self._crawl_page(url, options.summarize, options.user_agent)
        return result

    def _enqueue_links(
        self,
        queue: Deque[FrontierEntry],
        links: List[str],
        parent: FrontierEntry,
        seed_url: str,
        visited: VisitedTracker,
        results_count: int,
        options: CrawlWebsiteOptions,
    ) -> None:
        allowed = self.link_filter.filter_links(links, seed_url, options.follow_external_links)
        for link in allowed:
            # Bound the frontier so it never outgrows the remaining page budget
            if len(queue) + results_count >= options.max_pages:
                break
            if not visited.is_visited(link):
                queue.append(FrontierEntry(link, parent.depth + 1))
                self._transition(queue[-1], FrontierState.QUEUED)

    def crawl_website(
        self,
        seed_url: str,
        options: Optional[CrawlWebsiteOptions] = None,
        control: Optional[CrawlControl] = None,
    ) -> List[CrawlResult]:
        """Breadth-first crawl from `seed_url`.

        Per-page failures are logged and skipped; only the upfront robots.txt
        check and setup errors abort the crawl. A cancelled or expired
        `control` ends the crawl early with the pages collected so far.
        """
        options = options or CrawlWebsiteOptions()
        control = control or CrawlControl()

        logger.info(
            "Crawling website %s (max_depth=%s, max_pages=%s)",
            seed_url,
            options.max_depth,
            options.max_pages,
        )
        try:
            validate_url(seed_url)
            try:
                seed = normalize_url(seed_url)
            except ValueError as e:
                raise InvalidUrl(seed_url, str(e)) from e

            crawl_delay = None
            if options.respect_robots_txt:
                robots_check = self.robots_service.check_robots_txt(seed)
                if not robots_check.can_crawl:
                    raise RobotsDisallowed(seed_url)
                crawl_delay = robots_check.crawl_delay

            results = self._traverse(seed, options, control, crawl_delay)

            self.store.history.record(
                CrawlHistory(
                    url=seed_url,
                    crawled_at=self._clock(),
                    page_count=len(results),
                    depth=options.max_depth,
                )
            )
        except CrawlError as e:
            logger.error("Website crawl failed for %s: %s", seed_url, e)
            raise
        except Exception as e:
            logger.error("Website crawl failed for %s: %s", seed_url, e, exc_info=True)
            raise WebsiteCrawlFailed(seed_url, e) from e

        logger.info("Website crawl completed %s (pages=%s)", seed_url, len(results))
        return results

    def _traverse(
        self,
        seed: str,
        options: CrawlWebsiteOptions,
        control: CrawlControl,
        crawl_delay: Optional[float],
    ) -> List[CrawlResult]:
        seed_host = hostname_of(seed)
        visited = VisitedTracker()
        results: List[CrawlResult] = []
        queue: Deque[FrontierEntry] = deque([FrontierEntry(seed, 0)])

        while queue and len(results) < options.max_pages:
            if control.should_stop():
                logger.info("Website crawl of %s stopped after %s pages", seed, len(results))
                break

            entry = queue.popleft()
            if visited.is_visited(entry.url):
                self._transition(entry, FrontierState.SKIPPED_VISITED)
                continue
            if entry.depth > options.max_depth:
                self._transition(entry, FrontierState.SKIPPED_DEPTH)
                continue

            visited.mark(entry.url)
            self._transition(entry, FrontierState.VISITING)

            # Crawl-delay comes from the seed's robots.txt, so it only paces the seed host
            host_delay = crawl_delay if hostname_of(entry.url) == seed_host else None
            if not self.rate_limiter.wait(
                entry.url,
                crawl_delay=host_delay,
                stop_event=control.stop_event,
                honor_crawl_delay=options.honor_crawl_delay,
                timeout=control.remaining(),
            ) or control.should_stop():
                logger.info("Website crawl of %s stopped while waiting after %s pages", seed, len(results))
                break

            try:
                result, links = self._crawl_page(entry.url, options.summarize, None)
            except CrawlError as e:
                self._transition(entry, FrontierState.FAILED)
                logger.warning("Failed to crawl page, continuing: %s (%s)", entry.url, e)
                continue

            results.append(result)
            self._transition(entry, FrontierState.COMPLETED)

            if entry.depth < options.max_depth:
                self._enqueue_links(queue, links, entry, seed, visited, len(results), options)

        return results
