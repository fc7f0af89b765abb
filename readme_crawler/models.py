"""
Data structures used throughout the crawler.
"""

import enum
from dataclasses import dataclass, field

from readme_crawler.config import GITHUB_REPO_RE


@dataclass(frozen=True)
class RepoRef:
    """A repository node in the discovery graph."""
    owner: str
    name: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, text: str) -> "RepoRef":
        """Build a RepoRef from ``owner/name`` or a GitHub link.

        Raises ``ValueError`` when *text* names no repository.
        """
        text = text.strip()
        repo = parse_repo_link(text)
        if repo is not None:
            return repo
        owner, sep, name = text.partition("/")
        if not sep or not owner or not name or "/" in name or any(
            c.isspace() or c == "?" for c in owner + name
        ):
            raise ValueError(f"not a repository reference: {text!r}")
        return cls(owner, name)


def parse_repo_link(raw: str) -> RepoRef | None:
    """Return the repository a link points at, or ``None``.

    The match may appear anywhere in *raw*; links into a repository
    (``github.com/o/r/issues``) yield ``RepoRef("o", "r")``.
    """
    m = GITHUB_REPO_RE.search(raw)
    if not m:
        return None
    return RepoRef(m.group(1), m.group(2))


class NodeState(enum.Enum):
    ENQUEUED = "enqueued"
    FETCHING = "fetching"
    EXTRACTED = "extracted"
    FAILED = "failed"


@dataclass
class Document:
    """README bytes plus the URL relative references resolve against."""
    content: bytes
    base_url: str


@dataclass
class Extraction:
    """Next-hop repositories and the representative image of a README."""
    repos: list[RepoRef] = field(default_factory=list)
    image_url: str | None = None


@dataclass
class CrawlResult:
    """Aggregated results of one crawl run."""
    seed: RepoRef
    visited: int = 0
    extracted: list[RepoRef] = field(default_factory=list)
    failed: dict[RepoRef, Exception] = field(default_factory=dict)
    missing: int = 0
    images_saved: list = field(default_factory=list)
    image_errors: int = 0
    cancelled: bool = False
    elapsed: float = 0.0

    def to_dict(self) -> dict:
        return {
            "seed": str(self.seed),
            "visited": self.visited,
            "extracted": len(self.extracted),
            "failed": {str(r): str(e) for r, e in self.failed.items()},
            "missing": self.missing,
            "images_saved": [str(p) for p in self.images_saved],
            "image_errors": self.image_errors,
            "cancelled": self.cancelled,
            "elapsed": round(self.elapsed, 3),
        }
