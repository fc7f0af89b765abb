"""
Reference extraction from rendered README HTML via BeautifulSoup.
"""

from bs4 import BeautifulSoup

from readme_crawler.models import Extraction, RepoRef, parse_repo_link
from readme_crawler.utils.log import log
from readme_crawler.utils.url import is_ignored, resolve_url

try:
    import lxml  # noqa: F401
    _BS4_PARSER = "lxml"
except ImportError:
    _BS4_PARSER = "html.parser"


def select_image(soup: BeautifulSoup, base_url: str) -> str | None:
    """
    Pick the representative image of a document.

    Scanning stops at the first ``<img>`` with a usable ``src``: it is
    returned unless it hits the ignore list, in which case no image is
    selected at all.
    """
    for img in soup.find_all("img"):
        src = img.get("src")
        if not src:
            continue
        url = resolve_url(src, base_url)
        if url is None:
            log.debug("  Unusable image src %r", src)
            continue
        if is_ignored(url):
            log.debug("  [SKIP] Ignored image %s", url)
            return None
        return url
    return None


def collect_repos(soup: BeautifulSoup) -> list[RepoRef]:
    """Every repository linked from an anchor, in document order."""
    repos: list[RepoRef] = []
    for a in soup.find_all("a"):
        href = a.get("href")
        if not href:
            continue
        repo = parse_repo_link(href.strip())
        if repo is not None:
            repos.append(repo)
    return repos


def extract_references(html: str, base_url: str) -> Extraction:
    """Return the linked repositories and the selected image of *html*."""
    soup = BeautifulSoup(html, _BS4_PARSER)
    return Extraction(
        repos=collect_repos(soup),
        image_url=select_image(soup, base_url),
    )
