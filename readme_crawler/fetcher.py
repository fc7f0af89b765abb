"""
README and image retrieval.

The crawler only depends on :meth:`ReadmeFetcher.fetch_readme` and
:meth:`ReadmeFetcher.fetch_image`; how the bytes are obtained stays here.
"""

import requests

from readme_crawler.config import DEFAULT_BRANCH, README_URL_TEMPLATE, REQUEST_TIMEOUT
from readme_crawler.errors import NotFoundError, TransportError
from readme_crawler.models import Document, RepoRef
from readme_crawler.session import build_session
from readme_crawler.utils.log import log


class ReadmeFetcher:
    """
    Resolve a repository to its raw README on a configured branch and
    download it.

    ``branches`` are tried in order; only a 404 moves on to the next one.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        branches: tuple[str, ...] = (DEFAULT_BRANCH,),
        timeout: float = REQUEST_TIMEOUT,
        url_template: str = README_URL_TEMPLATE,
    ) -> None:
        if not branches:
            raise ValueError("at least one branch is required")
        self.session = session or build_session()
        self.branches = tuple(branches)
        self.timeout = timeout
        self.url_template = url_template

    def readme_url(self, repo: RepoRef, branch: str) -> str:
        return self.url_template.format(
            owner=repo.owner, name=repo.name, branch=branch
        )

    def fetch_readme(self, repo: RepoRef) -> Document:
        """Return the README of *repo* and the URL it was served from.

        Raises ``NotFoundError`` when no configured branch has a README and
        ``TransportError`` for network failures or other HTTP errors.
        """
        missing = NotFoundError(f"no README for {repo}", repo=repo)
        for branch in self.branches:
            url = self.readme_url(repo, branch)
            try:
                resp = self._get(url, repo)
            except NotFoundError as exc:
                log.debug("  No README on branch %s for %s", branch, repo)
                missing = exc
                continue
            return Document(content=resp.content, base_url=resp.url or url)
        raise missing

    def fetch_image(self, url: str, repo: RepoRef | None = None) -> bytes:
        return self._get(url, repo).content

    def _get(self, url: str, repo: RepoRef | None) -> requests.Response:
        try:
            resp = self.session.get(url, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as exc:
            raise TransportError(f"request failed for {url}: {exc}", repo=repo, url=url) from exc

        if resp.status_code == 404:
            raise NotFoundError(f"HTTP 404 for {url}", repo=repo, url=url)
        if not resp.ok:
            raise TransportError(
                f"HTTP {resp.status_code} for {url}", repo=repo, url=url
            )
        log.debug("  ← HTTP %s  %d bytes  %s", resp.status_code, len(resp.content), url)
        return resp
