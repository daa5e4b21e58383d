"""--debug token dump to stderr."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from dadahl.classify import RenderCategory
from dadahl.tokens import Token


def dump_tokens(
    tokens: Sequence[Token],
    categories: Sequence[RenderCategory] | None = None,
    *,
    file: TextIO | None = None,
) -> None:
    """Print offset, category, render category and text per token to *file* (stderr)."""
    if file is None:
        file = sys.stderr
    width = len(str(tokens[-1].offset)) if tokens else 1
    for i, tok in enumerate(tokens):
        line = f"{tok.offset:>{width}} {tok.category.name:<11}"
        if categories is not None:
            line += f" {categories[i].name:<11}"
        file.write(f"{line} {tok.text!r}\n")
