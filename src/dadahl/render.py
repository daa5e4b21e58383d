"""HTML renderer — re-serializes classified tokens as escaped, class-tagged spans."""

from __future__ import annotations

from collections.abc import Sequence

from dadahl.classify import RenderCategory, Vocabulary, classify
from dadahl.lexer import tokenize
from dadahl.tokens import Token

# Class names follow the Pygments/Chroma short names so existing themes apply.
CSS_CLASSES: dict[RenderCategory, str] = {
    RenderCategory.COMMENT: "c1",
    RenderCategory.STRING: "s",
    RenderCategory.NUMBER: "mi",
    RenderCategory.KEYWORD: "k",
    RenderCategory.TYPE: "kt",
    RenderCategory.CALL: "nf",
    RenderCategory.PUNCTUATION: "p",
    RenderCategory.OPERATOR: "o",
}

INTERPOLATION_CLASS = "n"


def render(tokens: Sequence[Token], categories: Sequence[RenderCategory]) -> str:
    """Render tokens and their parallel render categories to one HTML string."""
    if len(tokens) != len(categories):
        raise ValueError(f"got {len(tokens)} tokens but {len(categories)} categories")

    parts: list[str] = []
    for tok, category in zip(tokens, categories):
        if category is RenderCategory.STRING:
            parts.append(_span(CSS_CLASSES[category], render_string(tok.text)))
            continue
        css_class = CSS_CLASSES.get(category)
        escaped = escape_html(tok.text)
        parts.append(escaped if css_class is None else _span(css_class, escaped))
    return "".join(parts)


def render_source(source: str, vocab: Vocabulary) -> str:
    """Scan, classify, and render Dada source in one call."""
    tokens = tokenize(source)
    return render(tokens, classify(tokens, vocab))


# ---------------------------------------------------------------------------
# HTML escaping
# ---------------------------------------------------------------------------


def escape_html(text: str) -> str:
    """Escape text for HTML content and attribute values."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        elif ch == '"':
            result.append("&quot;")
        else:
            result.append(ch)
    return "".join(result)


def _span(css_class: str, inner_html: str) -> str:
    return f'<span class="{css_class}">{inner_html}</span>'


# ---------------------------------------------------------------------------
# String literals and {expr} interpolation
# ---------------------------------------------------------------------------


def render_string(text: str) -> str:
    """Render the inside of a string token, quotes included, without the outer span.

    Each ``{expr}`` marker (up to the first ``}``) has its expression wrapped
    in an identifier span; braces that do not form a marker stay literal.
    """
    interior = text[1:-1] if len(text) >= 2 else ""
    quote = escape_html('"')
    return quote + render_interpolations(interior) + quote


def render_interpolations(interior: str) -> str:
    parts: list[str] = []
    pos = 0
    literal_start = 0
    while True:
        open_idx = interior.find("{", pos)
        if open_idx == -1:
            break
        close_idx = interior.find("}", open_idx + 1)
        if close_idx == -1:
            break
        if close_idx == open_idx + 1:
            # "{}" holds no expression; leave it as text
            pos = open_idx + 1
            continue
        parts.append(escape_html(interior[literal_start:open_idx]))
        expr = interior[open_idx + 1 : close_idx]
        parts.append(escape_html("{"))
        parts.append(_span(INTERPOLATION_CLASS, escape_html(expr)))
        parts.append(escape_html("}"))
        pos = literal_start = close_idx + 1
    parts.append(escape_html(interior[literal_start:]))
    return "".join(parts)
