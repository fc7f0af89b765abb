"""Turn a fetched README into next-hop repositories and a preview image."""

from readme_crawler.extraction.html_parser import (
    collect_repos,
    extract_references,
    select_image,
)
from readme_crawler.extraction.markdown import render_markdown
from readme_crawler.models import Document, Extraction


def extract_document(document: Document) -> Extraction:
    """Render *document* and extract its references."""
    return extract_references(render_markdown(document.content), document.base_url)


__all__ = [
    "collect_repos",
    "extract_document",
    "extract_references",
    "render_markdown",
    "select_image",
]
