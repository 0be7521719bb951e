"""Application specific exception hierarchy."""
from __future__ import annotations

from typing import Any


class ConverterError(RuntimeError):
    """Base exception that carries structured context."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


class ConfigError(ConverterError):
    """Raised when configuration validation fails."""


class InputReadError(ConverterError):
    """Raised when an input export cannot be read."""


class ExportParseError(ConverterError):
    """Raised when an input export is not well-formed XML."""


class ExportFormatError(ConverterError):
    """Raised when the XML document is not a JIRA RSS export."""


class EmptyExportError(ConverterError):
    """Raised when an export contains no issue items."""


class OutputExistsError(ConverterError):
    """Raised when the output file exists and overwriting was not requested."""


class OutputWriteError(ConverterError):
    """Raised when the Markdown output cannot be written."""


__all__ = [
    "ConverterError",
    "ConfigError",
    "InputReadError",
    "ExportParseError",
    "ExportFormatError",
    "EmptyExportError",
    "OutputExistsError",
    "OutputWriteError",
]
