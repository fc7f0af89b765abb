"""
URL resolution and filename helpers.
"""

import posixpath
import urllib.parse

from readme_crawler.config import IMAGE_IGNORE_LIST, IMAGE_SCHEMES


def resolve_url(raw: str, base_url: str) -> str | None:
    """
    Resolve *raw* against *base_url* unless it is already absolute.

    Returns ``None`` for empty values, URLs that cannot be parsed, and
    schemes that cannot be downloaded (``data:``, ``mailto:``, ...).
    """
    raw = raw.strip()
    if not raw:
        return None
    try:
        parsed = urllib.parse.urlparse(raw)
        if not parsed.scheme:
            raw = urllib.parse.urljoin(base_url, raw)
            parsed = urllib.parse.urlparse(raw)
    except ValueError:
        return None
    if parsed.scheme.lower() not in IMAGE_SCHEMES or not parsed.netloc:
        return None
    return raw


def is_ignored(url: str, needles=IMAGE_IGNORE_LIST) -> bool:
    """Return True if any ignore-list marker is a substring of *url*."""
    return any(needle in url for needle in needles)


def url_extension(url: str) -> str:
    """Extension of the URL path, query and fragment excluded.

    ``https://x.org/a/preview.PNG?x=1`` gives ``.PNG``; a path without an
    extension gives ``""``.
    """
    try:
        path = urllib.parse.urlparse(url).path
    except ValueError:
        return ""
    return posixpath.splitext(posixpath.basename(path))[1]
