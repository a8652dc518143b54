from urllib.parse import urlsplit, urlunsplit


def normalize_url(url: str) -> str:
    """Normalize a URL for visited-set comparisons.

    Lowercases scheme and host, gives an empty path a single `/` and drops the
    fragment. Query strings are kept as-is. Raises ValueError when the URL
    cannot be parsed.
    """
    parts = urlsplit(url.strip())
    # Accessing .port validates the netloc; it raises ValueError on garbage.
    parts.port
    netloc = parts.netloc
    if parts.hostname and not parts.username:
        netloc = netloc.lower()
    path = parts.path or "/"
    return urlunsplit((parts.scheme.lower(), netloc, path, parts.query, ""))


def origin_of(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


def hostname_of(url: str):
    """Return the lowercase hostname of `url`, or None when it has none."""
    return urlsplit(url).hostname
