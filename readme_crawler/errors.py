"""
Exception hierarchy shared by the fetcher, extractor, store and crawler.

Every per-repository failure is a :class:`CrawlError`; the crawler catches
these, marks the repository failed and keeps going.
"""


class CrawlError(Exception):
    """Base class for recoverable per-repository failures."""

    def __init__(self, message: str, repo=None, url: str | None = None) -> None:
        super().__init__(message)
        self.repo = repo
        self.url = url


class TransportError(CrawlError):
    """Network, DNS, timeout or unexpected HTTP status."""


class NotFoundError(CrawlError):
    """The document is absent at the expected location (HTTP 404)."""


class ParseError(CrawlError):
    """A URL or a README could not be parsed or rendered."""


class StorageError(CrawlError):
    """Writing an image to the output directory failed."""
