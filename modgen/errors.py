"""Exceptions raised by the module generator.

Only ``InvalidInputError`` and ``UnrecoverableIOError`` are fatal.
``SourceMissingError`` is caught per layer mapping / per artifact by the
orchestrator and turned into a report entry.
"""

from __future__ import annotations

from pathlib import Path


class GeneratorError(Exception):
    """Base class for all generator errors."""


class InvalidInputError(GeneratorError):
    """Raised when a CLI argument or module name is missing or malformed."""


class SourceMissingError(GeneratorError):
    """Raised when a template directory or template file does not exist."""

    def __init__(self, path: str | Path, message: str = "") -> None:
        self.path = Path(path)
        super().__init__(message or f"Template source not found: {self.path}")


class UnrecoverableIOError(GeneratorError):
    """Raised when the target project cannot be written to."""

    def __init__(self, path: str | Path, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Cannot write {self.path}: {cause.strerror or cause}")
