"""Error types with formatted source context."""

from __future__ import annotations

from pathlib import Path


class ConfigError(Exception):
    """Raised when a configuration file holds a value of the wrong shape."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(self.format())

    def format(self) -> str:
        if self.path is None:
            return f"error: {self.message}"
        return f"error: {self.message}\n  --> {self.path}"
