"""Page driver — finds highlightable elements and replaces their content.

The driver only talks to the page through the small ``HighlightHost``
interface, so the lexer, classifier and renderer never see a DOM.
``SoupHost`` is the BeautifulSoup implementation used by the CLI.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from bs4 import BeautifulSoup, Tag

from dadahl.classify import Vocabulary, parse_word_list
from dadahl.config import HighlightConfig
from dadahl.render import render_source

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NodeSource:
    """Text and requested attribute values read from one element."""

    text: str
    attributes: dict[str, str | None]


class HighlightHost(Protocol):
    """Page capabilities the driver needs."""

    def nodes(self, selector: str) -> Sequence[Any]:
        """Return highlightable nodes in document order."""
        ...

    def read(self, node: Any, attributes: Sequence[str]) -> NodeSource:
        """Return the node's text content and the named attributes (None if absent)."""
        ...

    def replace(self, node: Any, html: str) -> None:
        """Replace the node's children with the given HTML fragment."""
        ...


@dataclass(frozen=True, slots=True)
class NodeFailure:
    """A node left untouched because its pipeline raised."""

    index: int
    error: Exception


@dataclass(slots=True)
class PageReport:
    highlighted: int = 0
    failures: list[NodeFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def vocabulary_for(source: NodeSource, config: HighlightConfig) -> Vocabulary:
    """Build a node's vocabulary, falling back to the configured defaults."""
    keywords = parse_word_list(source.attributes.get(config.keywords_attr) or "")
    types = parse_word_list(source.attributes.get(config.types_attr) or "")
    return Vocabulary.from_lists(keywords or config.default_keywords, types or config.default_types)


def highlight_node(host: HighlightHost, node: Any, config: HighlightConfig) -> None:
    source = host.read(node, (config.keywords_attr, config.types_attr))
    html = render_source(source.text, vocabulary_for(source, config))
    host.replace(node, html)


def highlight_page(host: HighlightHost, config: HighlightConfig | None = None) -> PageReport:
    """Highlight every matching node in document order.

    A node whose pipeline raises is left as it was and recorded in the
    report; the remaining nodes are still processed.
    """
    if config is None:
        config = HighlightConfig()
    report = PageReport()
    for index, node in enumerate(host.nodes(config.selector)):
        try:
            highlight_node(host, node, config)
        except Exception as exc:
            logger.warning(
                "skipping element %d (%s): %s", index, config.selector, exc, exc_info=True
            )
            report.failures.append(NodeFailure(index, exc))
        else:
            report.highlighted += 1
    logger.info(
        "highlighted %d element(s), %d failure(s)", report.highlighted, len(report.failures)
    )
    return report


# ---------------------------------------------------------------------------
# Readiness
# ---------------------------------------------------------------------------


class ReadySignal:
    """One-shot readiness signal.

    Callbacks subscribed before ``fire()`` run once when it is called;
    callbacks subscribed afterwards run immediately.
    """

    def __init__(self) -> None:
        self._fired = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def fired(self) -> bool:
        return self._fired

    def fire(self) -> None:
        if self._fired:
            return
        self._fired = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def subscribe(self, callback: Callable[[], None]) -> None:
        if self._fired:
            callback()
        else:
            self._callbacks.append(callback)


def install(
    host: HighlightHost,
    ready: ReadySignal,
    config: HighlightConfig | None = None,
    on_done: Callable[[PageReport], None] | None = None,
) -> None:
    """Highlight the page now if *ready* has fired, otherwise once it does."""

    def run() -> None:
        report = highlight_page(host, config)
        if on_done is not None:
            on_done(report)

    ready.subscribe(run)


# ---------------------------------------------------------------------------
# BeautifulSoup host
# ---------------------------------------------------------------------------


class SoupHost:
    """HighlightHost over a parsed BeautifulSoup document."""

    def __init__(self, soup: BeautifulSoup) -> None:
        self.soup = soup

    @classmethod
    def from_markup(cls, markup: str) -> SoupHost:
        return cls(BeautifulSoup(markup, "html.parser"))

    def nodes(self, selector: str) -> list[Tag]:
        return self.soup.select(selector)

    def read(self, node: Tag, attributes: Sequence[str]) -> NodeSource:
        values: dict[str, str | None] = {}
        for name in attributes:
            value = node.get(name)
            if isinstance(value, list):
                # multi-valued attributes (class, rel) come back as lists
                value = " ".join(value)
            values[name] = value
        return NodeSource(node.get_text(), values)

    def replace(self, node: Tag, html: str) -> None:
        fragment = BeautifulSoup(html, "html.parser")
        node.clear()
        for child in list(fragment.contents):
            node.append(child.extract())

    def to_html(self) -> str:
        return str(self.soup)


def highlight_html(markup: str, config: HighlightConfig | None = None) -> tuple[str, PageReport]:
    """Highlight an HTML document given as a string; return new markup and report."""
    host = SoupHost.from_markup(markup)
    report = highlight_page(host, config)
    return host.to_html(), report
