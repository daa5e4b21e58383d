"""Command-line interface for dadahl."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING

from dadahl.classify import parse_word_list
from dadahl.config import CONFIG_FILENAME, HighlightConfig, config_from_mapping, load_config
from dadahl.errors import ConfigError

if TYPE_CHECKING:
    from dadahl.page import SoupHost


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    config: HighlightConfig
    source_mode: bool
    debug: bool
    strict: bool
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="dadahl",
        description="Highlight Dada code blocks in generated HTML",
    )
    p.add_argument("input", help="Input HTML file (or Dada source with --source)")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-k",
        "--keywords",
        type=parse_word_arg,
        metavar="WORDS",
        help="Default keywords, comma-separated (default: let)",
    )
    p.add_argument(
        "-t",
        "--types",
        type=parse_word_arg,
        metavar="WORDS",
        help="Default type names, comma-separated (default: String)",
    )
    p.add_argument("--selector", metavar="CSS", help="Elements to highlight")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover dadahl.toml)",
    )
    p.add_argument(
        "--source",
        action="store_true",
        help="Treat input as Dada source and emit an HTML fragment",
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens to stderr")
    p.add_argument(
        "--strict", action="store_true", help="Exit 1 if any element fails to highlight"
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return p


def parse_word_arg(s: str) -> tuple[str, ...]:
    """Parse a comma-separated word list argument."""
    words = parse_word_list(s)
    if not words:
        raise argparse.ArgumentTypeError(f"expected a comma-separated list of words: {s!r}")
    return tuple(words)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: built-in defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    data = load_config(config_path, input_dir)
    config = config_from_mapping(data, path=config_path or input_dir / CONFIG_FILENAME)

    changes: dict[str, object] = {}
    if args.keywords is not None:
        changes["default_keywords"] = args.keywords
    if args.types is not None:
        changes["default_types"] = args.types
    if args.selector:
        changes["selector"] = args.selector
    if changes:
        config = replace(config, **changes)

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        config=config,
        source_mode=args.source,
        debug=args.debug,
        strict=args.strict,
        verbose=args.verbose,
    )


def highlight_source_file(options: CliOptions) -> str:
    """Highlight a raw Dada source file using the default vocabularies."""
    from dadahl.classify import Vocabulary, classify
    from dadahl.debug import dump_tokens
    from dadahl.lexer import tokenize
    from dadahl.render import render

    source = options.input_file.read_text(encoding="utf-8")
    vocab = Vocabulary.from_lists(options.config.default_keywords, options.config.default_types)
    tokens = tokenize(source)
    categories = classify(tokens, vocab)
    if options.debug:
        dump_tokens(tokens, categories)
    return render(tokens, categories)


def highlight_file(options: CliOptions) -> tuple[str, int]:
    """Read, highlight and serialize an HTML file. Returns (html, failure count)."""
    from dadahl.page import SoupHost, highlight_page

    markup = options.input_file.read_text(encoding="utf-8")
    host = SoupHost.from_markup(markup)

    if options.debug:
        _dump_page_tokens(host, options.config)

    report = highlight_page(host, options.config)
    return host.to_html(), len(report.failures)


def _dump_page_tokens(host: SoupHost, config: HighlightConfig) -> None:
    from dadahl.classify import classify
    from dadahl.debug import dump_tokens
    from dadahl.lexer import tokenize
    from dadahl.page import vocabulary_for

    for index, node in enumerate(host.nodes(config.selector)):
        source = host.read(node, (config.keywords_attr, config.types_attr))
        tokens = tokenize(source.text)
        print(f"-- element {index}", file=sys.stderr)
        dump_tokens(tokens, classify(tokens, vocabulary_for(source, config)))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1). Does not call sys.exit().

    Usage errors exit with status 2 from argparse.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if options.verbose:
        logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    failures = 0
    try:
        if options.source_mode:
            html = highlight_source_file(options)
        else:
            html, failures = highlight_file(options)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if options.output_file:
        options.output_file.write_text(html, encoding="utf-8")
    else:
        sys.stdout.write(html)

    if failures:
        print(f"warning: {failures} element(s) left unhighlighted", file=sys.stderr)
        if options.strict:
            return 1
    return 0
