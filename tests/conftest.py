"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from dadahl.classify import RenderCategory, Vocabulary, classify
from dadahl.lexer import tokenize
from dadahl.tokens import Token, TokenCategory


@pytest.fixture
def lex():
    """Return a helper that tokenizes source."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


@pytest.fixture
def categorize():
    """Return a helper that tokenizes and classifies source against word lists."""

    def _categorize(
        source: str, keywords: tuple[str, ...] = (), types: tuple[str, ...] = ()
    ) -> list[RenderCategory]:
        return classify(tokenize(source), Vocabulary.from_lists(keywords, types))

    return _categorize


def assert_categories(tokens: list[Token], expected: list[TokenCategory]) -> None:
    """Assert that the token categories match the expected list."""
    actual = [t.category for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token texts match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
