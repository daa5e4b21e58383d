"""Token categories, the token record, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenCategory(Enum):
    COMMENT = auto()  # // or # to end of line
    STRING = auto()  # "..." including both quotes
    NUMBER = auto()  # 12 or 1.5
    IDENT = auto()  # [A-Za-z_][A-Za-z0-9_]*
    PUNCTUATION = auto()  # one of ( ) { } [ ] : ; , .
    OPERATOR = auto()  # =
    WHITESPACE = auto()  # run of whitespace, newlines included
    FALLBACK = auto()  # single unrecognised character


@dataclass(frozen=True, slots=True)
class Token:
    """A scanned token: its category, exact source text and 0-based start offset."""

    category: TokenCategory
    text: str
    offset: int

    @property
    def end(self) -> int:
        return self.offset + len(self.text)


PUNCTUATION_CHARS = frozenset("(){}[]:;,.")

COMMENT_PREFIXES = ("//", "#")


def is_ascii_digit(ch: str) -> bool:
    """Return True if ch is 0-9 (str.isdigit also accepts other scripts)."""
    return "0" <= ch <= "9"


def is_ident_start(ch: str) -> bool:
    """Return True if ch may begin an identifier."""
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def is_ident_char(ch: str) -> bool:
    """Return True if ch may continue an identifier."""
    return is_ident_start(ch) or is_ascii_digit(ch)
