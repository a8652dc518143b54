from typing import Set


class VisitedTracker:
    """
    Tracks which URLs have been visited during a single crawl.

    Each `crawl_website` call owns its own tracker, so two concurrent crawls
    never share visited state.
    """

    def __init__(self):
        self._visited: Set[str] = set()

    def mark(self, url: str) -> None:
        """Mark a URL as visited."""
        self._visited.add(url)

    def is_visited(self, url: str) -> bool:
        """Check if a URL has been visited."""
        return url in self._visited

    def __len__(self) -> int:
        return len(self._visited)
