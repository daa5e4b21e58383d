"""Identifier classification: keyword, type, call, or plain."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum, auto

from dadahl.tokens import Token, TokenCategory


class RenderCategory(Enum):
    KEYWORD = auto()
    TYPE = auto()
    CALL = auto()
    COMMENT = auto()
    STRING = auto()
    NUMBER = auto()
    PUNCTUATION = auto()
    OPERATOR = auto()
    PLAIN = auto()


@dataclass(frozen=True, slots=True)
class Vocabulary:
    """Keyword and type names for one highlighted block."""

    keywords: frozenset[str] = frozenset()
    types: frozenset[str] = frozenset()

    @classmethod
    def from_lists(cls, keywords: Iterable[str], types: Iterable[str]) -> Vocabulary:
        return cls(frozenset(keywords), frozenset(types))


def parse_word_list(value: str) -> list[str]:
    """Split a comma-separated attribute value, dropping blanks."""
    return [word.strip() for word in value.split(",") if word.strip()]


_DIRECT: dict[TokenCategory, RenderCategory] = {
    TokenCategory.COMMENT: RenderCategory.COMMENT,
    TokenCategory.STRING: RenderCategory.STRING,
    TokenCategory.NUMBER: RenderCategory.NUMBER,
    TokenCategory.PUNCTUATION: RenderCategory.PUNCTUATION,
    TokenCategory.OPERATOR: RenderCategory.OPERATOR,
    TokenCategory.WHITESPACE: RenderCategory.PLAIN,
    TokenCategory.FALLBACK: RenderCategory.PLAIN,
}


def next_significant(tokens: Sequence[Token], index: int) -> Token | None:
    """Return the first non-whitespace token after tokens[index], or None."""
    for j in range(index + 1, len(tokens)):
        if tokens[j].category is not TokenCategory.WHITESPACE:
            return tokens[j]
    return None


def classify_identifier(tokens: Sequence[Token], index: int, vocab: Vocabulary) -> RenderCategory:
    """Classify tokens[index]: keyword > type > call > plain."""
    text = tokens[index].text
    if text in vocab.keywords:
        return RenderCategory.KEYWORD
    if text in vocab.types:
        return RenderCategory.TYPE
    following = next_significant(tokens, index)
    if (
        following is not None
        and following.category is TokenCategory.PUNCTUATION
        and following.text == "("
    ):
        return RenderCategory.CALL
    return RenderCategory.PLAIN


def classify(tokens: Sequence[Token], vocab: Vocabulary) -> list[RenderCategory]:
    """Return one render category per token, in token order."""
    result: list[RenderCategory] = []
    for i, tok in enumerate(tokens):
        if tok.category is TokenCategory.IDENT:
            result.append(classify_identifier(tokens, i, vocab))
        else:
            result.append(_DIRECT[tok.category])
    return result
