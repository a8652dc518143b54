"""Crawl result data models."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple


_CAMEL_KEYS = {
    "text_content": "textContent",
    "site_name": "siteName",
    "published_time": "publishedTime",
    "modified_time": "modifiedTime",
    "crawled_at": "crawledAt",
}


@dataclass(frozen=True)
class PageMetadata:
    """Document-level metadata read from `<meta>` tags and the `<html>` element."""

    author: Optional[str] = None
    date: Optional[str] = None
    published_time: Optional[str] = None
    modified_time: Optional[str] = None
    site_name: Optional[str] = None
    excerpt: Optional[str] = None
    lang: Optional[str] = None


@dataclass(frozen=True)
class ExtractedContent:
    """Readable content of a single HTML document plus the links it contains."""

    url: str
    title: str
    content: str
    text_content: str
    excerpt: str
    site_name: Optional[str] = None
    byline: Optional[str] = None
    published_time: Optional[str] = None
    modified_time: Optional[str] = None
    lang: Optional[str] = None
    links: Tuple[str, ...] = ()

    @property
    def length(self) -> int:
        return len(self.text_content)


@dataclass(frozen=True)
class CrawlResult:
    """A crawled page. Immutable once produced.

    `length` is always derived from `text_content` and `crawled_at` is an
    epoch timestamp in milliseconds.
    """

    url: str
    title: str
    content: str
    text_content: str
    excerpt: str
    crawled_at: int
    site_name: Optional[str] = None
    byline: Optional[str] = None
    published_time: Optional[str] = None
    modified_time: Optional[str] = None
    lang: Optional[str] = None
    summary: Optional[str] = None
    length: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "length", len(self.text_content))

    @classmethod
    def from_extracted(cls, extracted: ExtractedContent, crawled_at: int, summary: Optional[str] = None) -> "CrawlResult":
        return cls(
            url=extracted.url,
            title=extracted.title,
            content=extracted.content,
            text_content=extracted.text_content,
            excerpt=extracted.excerpt,
            crawled_at=crawled_at,
            site_name=extracted.site_name,
            byline=extracted.byline,
            published_time=extracted.published_time,
            modified_time=extracted.modified_time,
            lang=extracted.lang,
            summary=summary,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialise using the camelCase keys of the public boundary, omitting unset optionals."""
        payload: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            payload[_CAMEL_KEYS.get(f.name, f.name)] = value
        return payload


@dataclass(frozen=True)
class CachedCrawl(CrawlResult):
    """A `CrawlResult` stored in the cache, keyed by `id`."""

    id: str = field(init=False)

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "id", f"{self.url}-{self.crawled_at}")

    @classmethod
    def from_result(cls, result: CrawlResult) -> "CachedCrawl":
        values = {f.name: getattr(result, f.name) for f in fields(CrawlResult) if f.init}
        return cls(**values)
