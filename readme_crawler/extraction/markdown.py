"""
README rendering via Python-Markdown.

Raw HTML in the source passes through untouched, which keeps the
``<img>`` / ``<a>`` tags many READMEs embed visible to the extractor.
"""

import markdown as _md

from readme_crawler.errors import ParseError


def render_markdown(content: bytes | str) -> str:
    """Render README *content* to an HTML fragment.

    Undecodable bytes are replaced rather than rejected; a renderer
    failure is reported as ``ParseError``.
    """
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    try:
        return _md.markdown(content, extensions=["tables", "fenced_code"])
    except Exception as exc:  # markdown extensions raise arbitrary errors
        raise ParseError(f"could not render markdown: {exc}") from exc
