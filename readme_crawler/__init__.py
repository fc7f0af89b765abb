"""
readme_crawler
==============
Recursively follow repository links between GitHub READMEs and download one
preview image per discovered repository.

Package structure
-----------------
readme_crawler/
├── __init__.py       – package init and public API
├── config.py         – configuration constants
├── errors.py         – CrawlError taxonomy
├── models.py         – RepoRef, Document, Extraction, CrawlResult
├── session.py        – requests.Session factory
├── fetcher.py        – README / image retrieval
├── cli.py            – argparse CLI (``python -m readme_crawler``)
├── core/             – concurrent BFS crawler and image storage
├── extraction/       – markdown rendering and reference extraction
└── utils/            – URL helpers and logging setup

Quick start
-----------
    from pathlib import Path
    from readme_crawler import Crawler, RepoRef

    crawler = Crawler(
        seed=RepoRef("avelino", "awesome-go"),
        output_dir=Path("downloads"),
        concurrency=8,
    )
    result = crawler.run()
"""

from .core import Crawler, ImageStore, content_hash
from .errors import CrawlError, NotFoundError, ParseError, StorageError, TransportError
from .extraction import extract_document, extract_references, render_markdown
from .fetcher import ReadmeFetcher
from .models import CrawlResult, Document, Extraction, NodeState, RepoRef, parse_repo_link

__all__ = [
    "Crawler",
    "ImageStore",
    "content_hash",
    "CrawlError",
    "NotFoundError",
    "ParseError",
    "StorageError",
    "TransportError",
    "extract_document",
    "extract_references",
    "render_markdown",
    "ReadmeFetcher",
    "CrawlResult",
    "Document",
    "Extraction",
    "NodeState",
    "RepoRef",
    "parse_repo_link",
]
