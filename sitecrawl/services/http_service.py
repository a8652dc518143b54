import requests
from typing import Callable, Dict, Optional

from sitecrawl.domain.http_response import HttpResponse
from sitecrawl.exceptions import ContentTooLarge, NetworkError

DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.5"
CHUNK_SIZE = 64 * 1024


class HttpService:
    """
    HTTP client wrapper for fetching web pages.

    Requires http_client callable for dependency injection, so tests can hand
    in a Mock and the transport library can be swapped without patching.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: int = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def _headers(self, user_agent: Optional[str]) -> Dict[str, str]:
        return {
            "User-Agent": user_agent or self.user_agent,
            "Accept": DEFAULT_ACCEPT,
            "Accept-Language": DEFAULT_ACCEPT_LANGUAGE,
        }

    def _read_capped(self, resp, url: str, max_bytes: int) -> str:
        """Read a streamed body, giving up as soon as it exceeds `max_bytes`."""
        body = bytearray()
        try:
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                body.extend(chunk)
                if len(body) > max_bytes:
                    raise ContentTooLarge(url, len(body), max_bytes)
        finally:
            resp.close()

        encoding = getattr(resp, 'encoding', None) or "utf-8"
        try:
            return body.decode(encoding, errors="replace")
        except LookupError:
            return body.decode("utf-8", errors="replace")

    def fetch(self, url: str, user_agent: Optional[str] = None, max_bytes: Optional[int] = None) -> HttpResponse:
        """Fetch URL following redirects and return status code, body text and Content-Type.

        With `max_bytes` the body is streamed and the download stops with
        `ContentTooLarge` once the declared or received size passes the limit.
        """
        kwargs = {
            "headers": self._headers(user_agent),
            "timeout": self.timeout,
            "allow_redirects": True,
        }
        if max_bytes is not None:
            kwargs["stream"] = True

        try:
            resp = self.http_client(url, **kwargs)

            # Extract headers if the response has them; let real exceptions bubble up.
            ct = None
            content_length = None
            if hasattr(resp, 'headers'):
                ct = resp.headers.get('Content-Type')
                raw_length = resp.headers.get('Content-Length')
                if raw_length is not None:
                    try:
                        content_length = int(raw_length)
                    except (TypeError, ValueError):
                        content_length = None

            if max_bytes is None:
                text = resp.text
            elif content_length is not None and content_length > max_bytes:
                resp.close()
                raise ContentTooLarge(url, content_length, max_bytes)
            else:
                text = self._read_capped(resp, url, max_bytes)
        except requests.exceptions.RequestException as e:
            raise NetworkError(url, e) from e

        return HttpResponse(
            resp.status_code,
            text,
            ct,
            url=getattr(resp, 'url', None) or url,
            reason=getattr(resp, 'reason', None) or "",
            content_length=content_length,
        )

    def fetch_robots(self, robots_url: str) -> HttpResponse:
        """Fetch robots.txt - delegates to fetch()."""
        return self.fetch(robots_url)
