import logging
import re
from typing import Iterable, List
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

# Paths that never lead to readable HTML
NON_CONTENT_EXTENSIONS = re.compile(
    r'\.(jpe?g|png|gif|webp|bmp|svg|ico|tiff?'
    r'|zip|gz|tgz|tar|rar|7z|bz2'
    r'|mp4|mov|avi|mkv|webm|wmv'
    r'|mp3|wav|ogg|flac|m4a'
    r'|pdf)$'
)


class LinkFilter:
    """Decides which discovered links may join the crawl frontier.

    Host matching is exact: `blog.example.com` is external to `example.com`.
    """

    def _is_crawlable(self, link: str, seed_host, follow_external_links: bool) -> bool:
        try:
            parts = urlsplit(link)
            host = parts.hostname
        except ValueError:
            logger.debug("Skipping (unparsable) %s", link)
            return False

        if parts.scheme not in ('http', 'https'):
            return False
        if NON_CONTENT_EXTENSIONS.search(parts.path.lower()):
            logger.debug("Skipping (non-content) %s", link)
            return False
        if not follow_external_links and host != seed_host:
            logger.debug("Skipping (external) %s -> not same host as %s", link, seed_host)
            return False
        return True

    def filter_links(self, links: Iterable[str], seed_url: str, follow_external_links: bool = False) -> List[str]:
        seed_host = urlsplit(seed_url).hostname
        return [link for link in links if self._is_crawlable(link, seed_host, follow_external_links)]
