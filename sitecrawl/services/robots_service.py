import logging
import re
from typing import List, Optional
from urllib.robotparser import RobotFileParser

from sitecrawl.domain.robots_check import RobotsTxtCheck
from sitecrawl.services.robots_fetcher import RobotsFetcher
from sitecrawl.utils.url_utils import origin_of

logger = logging.getLogger(__name__)

_DISALLOW = re.compile(r'^[ \t]*Disallow:[ \t]*(\S.*?)[ \t]*$', re.I | re.M)
_SITEMAP = re.compile(r'^[ \t]*Sitemap:[ \t]*(\S.*?)[ \t]*$', re.I | re.M)


class RobotsService:
    """
    Service for checking robots.txt permissions.

    Every call fetches robots.txt again; nothing is cached. Any failure while
    fetching or evaluating the file fails open (crawling allowed).
    """

    def __init__(self, http_service, user_agent: str, robots_fetcher: Optional[RobotsFetcher] = None):
        self.http_service = http_service
        self.user_agent = user_agent
        self.robots_fetcher = robots_fetcher if robots_fetcher is not None else RobotsFetcher(http_service)

    def robots_url(self, url: str) -> str:
        return f"{origin_of(url)}/robots.txt"

    def _extract(self, pattern, robots_txt: str) -> List[str]:
        return [m.group(1) for m in pattern.finditer(robots_txt)]

    def check_robots_txt(self, url: str) -> RobotsTxtCheck:
        try:
            robots_url = self.robots_url(url)
        except ValueError:
            logger.exception("robots.txt check failed for %s", url)
            return RobotsTxtCheck.allow_all()

        robots_txt = self.robots_fetcher.fetch(robots_url)
        if robots_txt is None:
            # No reachable robots.txt, allow all
            return RobotsTxtCheck.allow_all()

        try:
            robots_parser = RobotFileParser(robots_url)
            robots_parser.parse(robots_txt.splitlines())
            can_crawl = robots_parser.can_fetch(self.user_agent, url)
            crawl_delay = robots_parser.crawl_delay(self.user_agent)
        except Exception:
            logger.exception("Error evaluating robots.txt from %s", robots_url)
            return RobotsTxtCheck.allow_all()

        sitemaps = self._extract(_SITEMAP, robots_txt)
        return RobotsTxtCheck(
            can_crawl=bool(can_crawl),
            crawl_delay=float(crawl_delay) if crawl_delay else None,
            disallowed_paths=self._extract(_DISALLOW, robots_txt),
            sitemap=sitemaps or None,
        )
