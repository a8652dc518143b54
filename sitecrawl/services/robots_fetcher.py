import logging
from typing import Optional

from sitecrawl.exceptions import CrawlError

logger = logging.getLogger(__name__)


class RobotsFetcher:
    """Fetch robots.txt content.

    Uses an `http_service` with a `fetch_robots(url)` method that returns an
    HttpResponse. Returns the body text, an empty string when the server has no
    usable robots.txt (any non-2xx answer), or None when the fetch itself failed.
    """
    def __init__(self, http_service):
        self.http_service = http_service

    def fetch(self, robots_url: str) -> Optional[str]:
        try:
            response = self.http_service.fetch_robots(robots_url)
        except CrawlError:
            logger.warning("Network error fetching robots.txt from %s", robots_url, exc_info=True)
            return None
        except Exception:
            logger.exception("Unexpected error fetching robots.txt from %s", robots_url)
            return None

        if not response.ok or not response.text:
            return ""
        return response.text
