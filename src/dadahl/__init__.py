"""Syntax highlighter for Dada code blocks."""

from __future__ import annotations

from collections.abc import Iterable

__version__ = "0.1.0"


def highlight(
    source: str,
    keywords: Iterable[str] | None = None,
    types: Iterable[str] | None = None,
) -> str:
    """Scan, classify, and render Dada source to an HTML fragment.

    Omitted vocabularies come from ``HighlightConfig``'s defaults.
    """
    from dadahl.classify import Vocabulary
    from dadahl.config import HighlightConfig
    from dadahl.render import render_source

    config = HighlightConfig()
    if keywords is None:
        keywords = config.default_keywords
    if types is None:
        types = config.default_types
    return render_source(source, Vocabulary.from_lists(keywords, types))
