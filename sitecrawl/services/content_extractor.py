import logging
import re
from typing import Callable, List, Optional, Protocol
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from sitecrawl.domain.crawl_result import ExtractedContent, PageMetadata
from sitecrawl.exceptions import CrawlError, ExtractionFailed
from sitecrawl.utils.url_utils import normalize_url

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 200

# Elements that never hold the main content
UNWANTED_TAGS = [
    'script', 'style', 'noscript', 'template',  # Code and styling
    'nav', 'header', 'footer',                   # Navigation and structural elements
    'aside',                                     # Sidebars
    'form', 'button',                            # Interactive elements
    'iframe', 'embed', 'object',                 # Embedded content
    'select', 'input', 'textarea',               # Form inputs
    'svg', 'canvas',                             # Graphics
]

# class/id tokens associated with navigation, ads and other boilerplate
UNWANTED_TOKENS = {
    'nav', 'navbar', 'navigation', 'menu', 'sidebar', 'footer',
    'ad', 'ads', 'advert', 'advertisement', 'sponsored', 'banner', 'popup',
    'breadcrumb', 'breadcrumbs', 'social', 'share', 'cookie', 'cookies',
    'related', 'recommended', 'promo', 'widget',
}

UNWANTED_ROLES = {'navigation', 'banner', 'contentinfo', 'complementary'}

# Never stripped even when their class/id looks like boilerplate
PROTECTED_TAGS = {'html', 'body', 'main', 'article'}

_TOKEN_SPLIT = re.compile(r'[\s_\-]+')


class Extractor(Protocol):
    def extract_page(self, html: str, url: str) -> ExtractedContent: ...


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = " ".join(value.split())
    return value or None


class ContentExtractor:
    """Readability-style extraction over BeautifulSoup.

    Boilerplate elements are removed before text is read. Links and metadata are
    read from the untouched document so navigation links still feed the crawl
    frontier.
    """

    def __init__(
        self,
        soup_factory: Optional[Callable[[str], BeautifulSoup]] = None,
        excerpt_length: int = EXCERPT_LENGTH,
    ):
        self._soup_factory = soup_factory or (lambda html: BeautifulSoup(html, "html.parser"))
        self.excerpt_length = excerpt_length

    def extract_content(self, html: str, url: str) -> ExtractedContent:
        """Extract title, text, excerpt and metadata. `links` is left empty."""
        return self._extract(html, url, collect_links=False)

    def extract_page(self, html: str, url: str) -> ExtractedContent:
        """Same as `extract_content` but also collects links, over a single parse."""
        return self._extract(html, url, collect_links=True)

    def extract_metadata(self, html: str) -> PageMetadata:
        return self._metadata_from_soup(self._soup_factory(html or ""))

    def extract_links(self, html: str, base_url: str) -> List[str]:
        return self._links_from_soup(self._soup_factory(html or ""), base_url)

    def _extract(self, html: str, url: str, collect_links: bool) -> ExtractedContent:
        if not html or not html.strip():
            raise ExtractionFailed(url, "empty document")

        try:
            soup = self._soup_factory(html)
            metadata = self._metadata_from_soup(soup)
            title = self._title_from_soup(soup)
            links = self._links_from_soup(soup, url) if collect_links else []

            self._strip_boilerplate(soup)
            main = self._main_content(soup)
            text = main.get_text(separator="\n", strip=True) if main is not None else ""
            content = str(main) if main is not None else ""
        except CrawlError:
            raise
        except Exception as e:
            logger.exception("Error extracting content from %s", url)
            raise ExtractionFailed(url, str(e)) from e

        if not text:
            raise ExtractionFailed(url)

        excerpt = metadata.excerpt or " ".join(text.split())[: self.excerpt_length]

        return ExtractedContent(
            url=url,
            title=title,
            content=content,
            text_content=text,
            excerpt=excerpt,
            site_name=metadata.site_name,
            byline=metadata.author,
            published_time=metadata.published_time,
            modified_time=metadata.modified_time,
            lang=metadata.lang,
            links=tuple(links),
        )

    def _meta(self, soup: BeautifulSoup, *, name: Optional[str] = None, prop: Optional[str] = None) -> Optional[str]:
        if name is not None:
            attrs = {'name': re.compile(rf'^{re.escape(name)}$', re.I)}
        else:
            attrs = {'property': re.compile(rf'^{re.escape(prop)}$', re.I)}
        for tag in soup.find_all('meta', attrs=attrs):
            value = _clean(tag.get('content'))
            if value:
                return value
        return None

    def _metadata_from_soup(self, soup: BeautifulSoup) -> PageMetadata:
        # Named meta tags win over their OpenGraph / article:* counterparts
        author = self._meta(soup, name='author') or self._meta(soup, prop='article:author')
        named_date = self._meta(soup, name='date')
        published = self._meta(soup, prop='article:published_time') or named_date
        date = named_date or published
        modified = self._meta(soup, prop='article:modified_time')
        site_name = self._meta(soup, name='application-name') or self._meta(soup, prop='og:site_name')
        excerpt = self._meta(soup, name='description') or self._meta(soup, prop='og:description')

        lang = None
        html_tag = soup.find('html')
        if html_tag is not None:
            lang = _clean(html_tag.get('lang'))

        return PageMetadata(
            author=author,
            date=date,
            published_time=published,
            modified_time=modified,
            site_name=site_name,
            excerpt=excerpt,
            lang=lang,
        )

    def _title_from_soup(self, soup: BeautifulSoup) -> str:
        title_tag = soup.find('title')
        if title_tag is not None:
            title = _clean(title_tag.get_text())
            if title:
                return title
        h1 = soup.find('h1')
        if h1 is not None:
            title = _clean(h1.get_text(" "))
            if title:
                return title
        return "Untitled"

    def _links_from_soup(self, soup: BeautifulSoup, base_url: str) -> List[str]:
        urls = []
        for a in soup.find_all("a", href=True):
            href = (a.get("href") or "").strip()
            if not href:
                continue
            try:
                abs_url = normalize_url(urljoin(base_url, href))
            except ValueError:
                logger.debug("Skipping unparsable href %r on %s", href, base_url)
                continue
            urls.append(abs_url)
        # Document order, first occurrence wins
        return list(dict.fromkeys(urls))

    def _is_boilerplate(self, tag: Tag) -> bool:
        if tag.name in PROTECTED_TAGS:
            return False
        # Main-content candidates stay even when another class looks like boilerplate
        if tag.get('id') == 'content' or 'content' in (tag.get('class') or []):
            return False
        if (tag.get('role') or '').lower() in UNWANTED_ROLES:
            return True
        values = list(tag.get('class') or [])
        if tag.get('id'):
            values.append(tag.get('id'))
        for value in values:
            tokens = _TOKEN_SPLIT.split(value.lower())
            if any(token in UNWANTED_TOKENS for token in tokens):
                return True
        return False

    def _strip_boilerplate(self, soup: BeautifulSoup) -> None:
        for element in soup.find_all(UNWANTED_TAGS):
            if not element.decomposed:
                element.decompose()
        for element in soup.find_all(self._is_boilerplate):
            if not element.decomposed:
                element.decompose()

    def _main_content(self, soup: BeautifulSoup):
        candidates = (
            lambda: soup.find('article'),
            lambda: soup.find('main'),
            lambda: soup.select_one('.content, #content'),
            lambda: soup.body,
        )
        for candidate in candidates:
            element = candidate()
            if element is not None and element.get_text(strip=True):
                return element
        if soup.get_text(strip=True):
            return soup
        return None
