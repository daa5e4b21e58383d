"""Dada lexer: converts source text into an exhaustive, ordered token list."""

from __future__ import annotations

from collections.abc import Callable

from dadahl.tokens import (
    COMMENT_PREFIXES,
    PUNCTUATION_CHARS,
    Token,
    TokenCategory,
    is_ascii_digit,
    is_ident_char,
    is_ident_start,
)

# A matcher looks at source[pos:] and returns the end index of a non-empty
# match, or None when its rule does not apply at pos.
Matcher = Callable[[str, int], int | None]


# ----------------------------------------------------------------------
# Matchers, one per rule
# ----------------------------------------------------------------------


def match_comment(source: str, pos: int) -> int | None:
    if not source.startswith(COMMENT_PREFIXES, pos):
        return None
    end = source.find("\n", pos)
    return len(source) if end == -1 else end


def match_string(source: str, pos: int) -> int | None:
    if source[pos] != '"':
        return None
    close = source.find('"', pos + 1)
    if close == -1:
        return None
    return close + 1


def _skip_digits(source: str, pos: int) -> int:
    while pos < len(source) and is_ascii_digit(source[pos]):
        pos += 1
    return pos


def match_number(source: str, pos: int) -> int | None:
    end = _skip_digits(source, pos)
    if end == pos:
        return None
    # The fraction only belongs to the number when a digit follows the point
    if end + 1 < len(source) and source[end] == "." and is_ascii_digit(source[end + 1]):
        end = _skip_digits(source, end + 1)
    return end


def match_identifier(source: str, pos: int) -> int | None:
    if not is_ident_start(source[pos]):
        return None
    end = pos + 1
    while end < len(source) and is_ident_char(source[end]):
        end += 1
    return end


def match_punctuation(source: str, pos: int) -> int | None:
    return pos + 1 if source[pos] in PUNCTUATION_CHARS else None


def match_operator(source: str, pos: int) -> int | None:
    return pos + 1 if source[pos] == "=" else None


def match_whitespace(source: str, pos: int) -> int | None:
    end = pos
    while end < len(source) and source[end].isspace():
        end += 1
    return end if end > pos else None


# Order matters: the first rule that matches wins.
RULES: tuple[tuple[TokenCategory, Matcher], ...] = (
    (TokenCategory.COMMENT, match_comment),
    (TokenCategory.STRING, match_string),
    (TokenCategory.NUMBER, match_number),
    (TokenCategory.IDENT, match_identifier),
    (TokenCategory.PUNCTUATION, match_punctuation),
    (TokenCategory.OPERATOR, match_operator),
    (TokenCategory.WHITESPACE, match_whitespace),
)


class Lexer:
    """Tokenize Dada source text against a fixed, priority-ordered rule table.

    Every position either matches a rule or produces a one-character
    FALLBACK token, so the lexer always advances and never rejects input.
    """

    def __init__(
        self,
        source: str,
        rules: tuple[tuple[TokenCategory, Matcher], ...] = RULES,
    ) -> None:
        self._source = source
        self._rules = rules
        self._pos = 0
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list."""
        while self._pos < len(self._source):
            self._lex_one()
        return self._tokens

    def _lex_one(self) -> None:
        for category, matcher in self._rules:
            end = matcher(self._source, self._pos)
            if end is not None and end > self._pos:
                self._emit(category, end)
                return
        self._emit(TokenCategory.FALLBACK, self._pos + 1)

    def _emit(self, category: TokenCategory, end: int) -> Token:
        tok = Token(category, self._source[self._pos : end], self._pos)
        self._tokens.append(tok)
        self._pos = end
        return tok


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source).tokenize()
