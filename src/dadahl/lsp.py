"""Minimal LSP server for Dada — semantic tokens and unrecognised-character warnings."""

from __future__ import annotations

import re
from bisect import bisect_right
from collections.abc import Iterator, Sequence

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    SemanticTokens,
    SemanticTokensLegend,
    SemanticTokensParams,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from dadahl.classify import RenderCategory, Vocabulary, classify
from dadahl.config import HighlightConfig
from dadahl.lexer import tokenize
from dadahl.tokens import Token, TokenCategory

server = LanguageServer("dadahl-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)

TOKEN_TYPES = ["keyword", "type", "function", "comment", "string", "number", "operator"]

LEGEND = SemanticTokensLegend(token_types=TOKEN_TYPES, token_modifiers=[])

_TOKEN_TYPE_INDEX: dict[RenderCategory, int] = {
    RenderCategory.KEYWORD: TOKEN_TYPES.index("keyword"),
    RenderCategory.TYPE: TOKEN_TYPES.index("type"),
    RenderCategory.CALL: TOKEN_TYPES.index("function"),
    RenderCategory.COMMENT: TOKEN_TYPES.index("comment"),
    RenderCategory.STRING: TOKEN_TYPES.index("string"),
    RenderCategory.NUMBER: TOKEN_TYPES.index("number"),
    RenderCategory.OPERATOR: TOKEN_TYPES.index("operator"),
}


_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _utf16_len(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def _positioned(source: str, tokens: Sequence[Token]) -> Iterator[tuple[int, int, Token]]:
    """Yield (line, character, token) with 0-based LSP positions in UTF-16 units.

    Lines end at ``\\n``, ``\\r\\n`` or a lone ``\\r``.
    """
    starts = [0] + [m.end() for m in _LINE_BREAK.finditer(source)]
    for tok in tokens:
        line = bisect_right(starts, tok.offset) - 1
        yield line, _utf16_len(source[starts[line] : tok.offset]), tok


def semantic_token_data(source: str, vocab: Vocabulary) -> list[int]:
    """Encode a source's highlighted tokens as LSP relative semantic token data."""
    tokens = tokenize(source)
    categories = classify(tokens, vocab)
    data: list[int] = []
    prev_line = 0
    prev_col = 0
    for (line, col, tok), category in zip(_positioned(source, tokens), categories):
        type_index = _TOKEN_TYPE_INDEX.get(category)
        if type_index is None:
            continue
        # Tokens may not span lines, so multi-line strings go out piecewise
        for i, piece in enumerate(_LINE_BREAK.split(tok.text)):
            piece_line = line + i
            piece_col = col if i == 0 else 0
            length = _utf16_len(piece)
            if length == 0:
                continue
            delta_line = piece_line - prev_line
            delta_col = piece_col - prev_col if delta_line == 0 else piece_col
            data.extend((delta_line, delta_col, length, type_index, 0))
            prev_line, prev_col = piece_line, piece_col
    return data


def fallback_diagnostics(source: str) -> list[Diagnostic]:
    """Return a warning for every character the lexer could not place in a rule."""
    diagnostics: list[Diagnostic] = []
    for line, col, tok in _positioned(source, tokenize(source)):
        if tok.category is not TokenCategory.FALLBACK:
            continue
        if tok.text == '"':
            message = "unterminated string literal"
        else:
            message = f"unrecognised character {tok.text!r}"
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=col),
                    end=Position(line=line, character=col + _utf16_len(tok.text)),
                ),
                message=message,
                severity=DiagnosticSeverity.Warning,
                source="dadahl",
            )
        )
    return diagnostics


def _vocabulary() -> Vocabulary:
    config = HighlightConfig()
    return Vocabulary.from_lists(config.default_keywords, config.default_types)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Lex the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=fallback_diagnostics(doc.source))
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, LEGEND)
def semantic_tokens_full(ls: LanguageServer, params: SemanticTokensParams) -> SemanticTokens:
    doc = ls.workspace.get_text_document(params.text_document.uri)
    return SemanticTokens(data=semantic_token_data(doc.source, _vocabulary()))


def main() -> None:
    server.start_io()
