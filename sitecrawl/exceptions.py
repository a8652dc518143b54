"""Custom exceptions for SiteCrawl services."""
from typing import Any, Dict, Optional


class CrawlError(Exception):
    """Base class for every failure raised by the crawl engine.

    `status` mirrors the HTTP status a surrounding API would answer with and
    `code` is a stable machine-readable identifier.
    """

    code = "CRAWL_ERROR"
    status = 500

    def __init__(self, message: str, url: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.url = url
        self.details = dict(details or {})
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        payload = {"code": self.code, "status": self.status, "message": str(self)}
        if self.url is not None:
            payload["url"] = self.url
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidUrl(CrawlError):
    """Raised when a URL cannot be parsed or is not http(s)."""

    code = "INVALID_URL"
    status = 400

    def __init__(self, url: str, reason: str = "invalid format"):
        self.reason = reason
        super().__init__(f"Invalid URL {url!r}: {reason}", url=url, details={"reason": reason})


class FetchFailed(CrawlError):
    """Raised when the server answers with a non-2xx status."""

    code = "FETCH_FAILED"

    def __init__(self, url: str, status_code: int, reason: str = ""):
        self.status = status_code
        self.status_code = status_code
        super().__init__(
            f"Failed to fetch page: {status_code} {reason}".rstrip(),
            url=url,
            details={"status": status_code},
        )


class InvalidContentType(CrawlError):
    """Raised when the response is not text/html."""

    code = "INVALID_CONTENT_TYPE"
    status = 400

    def __init__(self, url: str, content_type: Optional[str]):
        self.content_type = content_type
        super().__init__(
            f"URL does not return HTML content: {content_type}",
            url=url,
            details={"contentType": content_type},
        )


class ContentTooLarge(CrawlError):
    code = "CONTENT_TOO_LARGE"
    status = 413

    def __init__(self, url: str, size: int, max_size: int):
        self.size = size
        self.max_size = max_size
        super().__init__(
            f"Content too large: {size} bytes (max {max_size})",
            url=url,
            details={"size": size, "maxSize": max_size},
        )


class NetworkError(CrawlError):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    code = "NETWORK_ERROR"

    def __init__(self, url: str, original: Exception):
        self.original = original
        super().__init__(
            f"Network error while fetching {url}: {original}",
            url=url,
            details={"error": str(original)},
        )


class ExtractionFailed(CrawlError):
    code = "EXTRACTION_FAILED"

    def __init__(self, url: str, reason: str = "no readable text"):
        super().__init__(f"Content extraction failed for {url}: {reason}", url=url, details={"error": reason})


class RobotsDisallowed(CrawlError):
    code = "ROBOTS_DISALLOWED"
    status = 403

    def __init__(self, url: str):
        super().__init__("Crawling disallowed by robots.txt", url=url)


class CrawlFailed(CrawlError):
    """Wraps an unexpected error raised while crawling a single page."""

    code = "CRAWL_FAILED"

    def __init__(self, url: str, original: Exception):
        self.original = original
        super().__init__("Failed to crawl webpage", url=url, details={"error": str(original)})


class WebsiteCrawlFailed(CrawlError):
    """Wraps an unexpected error raised outside the per-page crawl loop."""

    code = "WEBSITE_CRAWL_FAILED"

    def __init__(self, url: str, original: Exception):
        self.original = original
        super().__init__("Failed to crawl website", url=url, details={"error": str(original)})
