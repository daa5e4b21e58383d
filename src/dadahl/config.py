"""Highlighter configuration: built-in defaults and TOML loading."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from dadahl.errors import ConfigError

CONFIG_FILENAME = "dadahl.toml"


@dataclass(frozen=True, slots=True)
class HighlightConfig:
    """Where to find highlightable elements and which vocabularies to assume.

    ``default_keywords`` and ``default_types`` apply to an element when the
    corresponding attribute is missing or lists no words.
    """

    selector: str = "code.language-dada"
    keywords_attr: str = "data-dada-keywords"
    types_attr: str = "data-dada-types"
    default_keywords: tuple[str, ...] = ("let",)
    default_types: tuple[str, ...] = ("String",)


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / CONFIG_FILENAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML: {exc}", path) from exc


_STRING_KEYS = {
    "selector": "selector",
    "keywords_attribute": "keywords_attr",
    "types_attribute": "types_attr",
}

_LIST_KEYS = {
    "keywords": "default_keywords",
    "types": "default_types",
}


def config_from_mapping(
    data: dict[str, Any],
    base: HighlightConfig | None = None,
    path: Path | None = None,
) -> HighlightConfig:
    """Apply the ``[highlight]`` table of a loaded config file over *base*."""
    config = base if base is not None else HighlightConfig()
    table = data.get("highlight")
    if table is None:
        return config
    if not isinstance(table, dict):
        raise ConfigError("[highlight] must be a table", path)

    changes: dict[str, Any] = {}
    for key, field_name in _STRING_KEYS.items():
        if key in table:
            value = table[key]
            if not isinstance(value, str) or not value:
                raise ConfigError(f"highlight.{key} must be a non-empty string", path)
            changes[field_name] = value
    for key, field_name in _LIST_KEYS.items():
        if key in table:
            value = table[key]
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"highlight.{key} must be a list of strings", path)
            changes[field_name] = tuple(value)
    return replace(config, **changes)
