"""Error types with formatted source context."""

from __future__ import annotations

from pathlib import Path


class ConfigError(Exception):
    """Raised on the first invalid entry in a configuration file."""

    def __init__(self, message: str, path: Path | None, key: str | None = None) -> None:
        self.message = message
        self.path = path
        self.key = key
        super().__init__(self.format())

    def format(self) -> str:
        location = str(self.path) if self.path is not None else "<config>"
        if self.key:
            location += f": {self.key}"
        gutter = "  "
        return f"error: {self.message}\n{gutter}--> {location}"


class UsageError(Exception):
    """Raised when a request names a line, column or language the document does not have."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def format(self) -> str:
        return f"error: {self.message}"
