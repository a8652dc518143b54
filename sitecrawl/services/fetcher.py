from __future__ import annotations

import logging
from typing import Optional, Protocol
from urllib.parse import urlparse

from sitecrawl.domain.http_response import HttpResponse
from sitecrawl.exceptions import FetchFailed, InvalidContentType, InvalidUrl

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONTENT_BYTES = 10 * 1024 * 1024


def validate_url(url: str) -> None:
    """Raise `InvalidUrl` unless `url` is an absolute http(s) URL."""
    if not url or not isinstance(url, str):
        raise InvalidUrl(str(url), "empty URL")
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise InvalidUrl(url, str(e)) from e
    if parsed.scheme not in ("http", "https"):
        raise InvalidUrl(url, "Only HTTP/HTTPS URLs are supported")
    if not parsed.netloc:
        raise InvalidUrl(url, "missing host")


class Fetcher(Protocol):
    """Fetch an HTML page and return its body."""

    def fetch_page(self, url: str, user_agent: Optional[str] = None) -> str: ...


class PageFetcher:
    """Fetches HTML documents through an `HttpService`.

    Non-2xx answers raise `FetchFailed`, anything that is not text/html raises
    `InvalidContentType`. Transport failures surface as `NetworkError` and
    oversized bodies as `ContentTooLarge` from the HTTP service, which stops
    reading once `max_content_bytes` is passed. There are no retries.
    """

    def __init__(self, http_service, max_content_bytes: int = DEFAULT_MAX_CONTENT_BYTES):
        self.http_service = http_service
        self.max_content_bytes = int(max_content_bytes)

    def fetch_response(self, url: str, user_agent: Optional[str] = None) -> HttpResponse:
        validate_url(url)
        response = self.http_service.fetch(url, user_agent=user_agent, max_bytes=self.max_content_bytes)

        if not response.ok:
            logger.warning("Non-success status for %s: %s", url, response.status_code)
            raise FetchFailed(url, int(response.status_code), response.reason)

        ct = (response.content_type or '').lower()
        if 'text/html' not in ct:
            logger.info("Content type not supported %s. Skipping %s", ct or 'unknown', url)
            raise InvalidContentType(url, response.content_type)

        return response

    def fetch_page(self, url: str, user_agent: Optional[str] = None) -> str:
        return self.fetch_response(url, user_agent=user_agent).text or ''
