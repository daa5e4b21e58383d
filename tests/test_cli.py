"""Tests for the CLI module: arg parsing, exit codes, end-to-end."""

from __future__ import annotations

import argparse
import io
from pathlib import Path

import pytest

from dadahl.classify import Vocabulary, classify
from dadahl.cli import build_parser, main, parse_word_arg
from dadahl.debug import dump_tokens
from dadahl.lexer import tokenize

PAGE = '<p>Example:</p>\n<pre><code class="language-dada">let x = 1</code></pre>\n'

HIGHLIGHTED = (
    '<p>Example:</p>\n<pre><code class="language-dada"><span class="k">let</span> x '
    '<span class="o">=</span> <span class="mi">1</span></code></pre>\n'
)

# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


class TestParseHelpers:
    def test_parse_word_arg(self) -> None:
        assert parse_word_arg("let, fn") == ("let", "fn")

    def test_parse_word_arg_empty_raises(self) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            parse_word_arg(" , ")


class TestArgParsing:
    def test_input_only(self) -> None:
        ns = build_parser().parse_args(["page.html"])
        assert ns.input == "page.html"
        assert ns.output is None
        assert ns.keywords is None
        assert ns.source is False

    def test_word_flags(self) -> None:
        ns = build_parser().parse_args(["page.html", "-k", "let", "-t", "Int,Str"])
        assert ns.keywords == ("let",)
        assert ns.types == ("Int", "Str")

    def test_bad_word_list_exits_2(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["page.html", "-k", ","])
        assert exc_info.value.code == 2


# ---------------------------------------------------------------------------
# End-to-end
# ---------------------------------------------------------------------------


class TestMain:
    def test_html_to_stdout(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        page = tmp_path / "page.html"
        page.write_text(PAGE)
        assert main([str(page)]) == 0
        assert capsys.readouterr().out == HIGHLIGHTED

    def test_html_to_file(self, tmp_path: Path) -> None:
        page = tmp_path / "page.html"
        page.write_text(PAGE)
        out = tmp_path / "out.html"
        assert main([str(page), "-o", str(out)]) == 0
        assert out.read_text() == HIGHLIGHTED

    def test_source_mode(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        src = tmp_path / "hello.dada"
        src.write_text("foo()")
        assert main([str(src), "--source"]) == 0
        assert capsys.readouterr().out == (
            '<span class="nf">foo</span><span class="p">(</span><span class="p">)</span>'
        )

    def test_source_mode_keywords(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        src = tmp_path / "hello.dada"
        src.write_text("let fn")
        assert main([str(src), "--source", "-k", "fn"]) == 0
        assert capsys.readouterr().out == 'let <span class="k">fn</span>'

    def test_missing_input(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(tmp_path / "nope.html")]) == 1
        assert capsys.readouterr().err.startswith("error:")

    def test_bad_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (tmp_path / "dadahl.toml").write_text('[highlight]\nkeywords = "let"\n')
        page = tmp_path / "page.html"
        page.write_text(PAGE)
        assert main([str(page)]) == 1
        assert "highlight.keywords" in capsys.readouterr().err

    def test_debug_dumps_tokens(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        page = tmp_path / "page.html"
        page.write_text(PAGE)
        assert main([str(page), "--debug"]) == 0
        err = capsys.readouterr().err
        assert "-- element 0" in err
        assert "KEYWORD" in err

    def test_failures_warn(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def boom(source: str, vocab: Vocabulary) -> str:
            raise RuntimeError("boom")

        monkeypatch.setattr("dadahl.page.render_source", boom)
        page = tmp_path / "page.html"
        page.write_text(PAGE)
        assert main([str(page)]) == 0
        captured = capsys.readouterr()
        assert captured.out == PAGE
        assert "1 element(s) left unhighlighted" in captured.err

    def test_strict_fails_on_node_failure(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def boom(source: str, vocab: Vocabulary) -> str:
            raise RuntimeError("boom")

        monkeypatch.setattr("dadahl.page.render_source", boom)
        page = tmp_path / "page.html"
        page.write_text(PAGE)
        assert main([str(page), "--strict"]) == 1


class TestDumpTokens:
    def test_one_line_per_token(self) -> None:
        tokens = tokenize("let x")
        buf = io.StringIO()
        dump_tokens(tokens, classify(tokens, Vocabulary.from_lists(["let"], [])), file=buf)
        lines = buf.getvalue().splitlines()
        assert len(lines) == 3
        assert lines[0].split() == ["0", "IDENT", "KEYWORD", "'let'"]
        assert lines[2].split() == ["4", "IDENT", "PLAIN", "'x'"]

    def test_without_categories(self) -> None:
        buf = io.StringIO()
        dump_tokens(tokenize("1"), file=buf)
        assert buf.getvalue().split() == ["0", "NUMBER", "'1'"]

    def test_empty(self) -> None:
        buf = io.StringIO()
        dump_tokens([], file=buf)
        assert buf.getvalue() == ""
