"""Error taxonomy for declaration file loading."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class StubError(Exception):
    """Base class for every failure raised while loading declaration files."""


class FileReadError(StubError):
    """Raised when a declaration file cannot be opened or read."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read stub file '{path}': {cause}")


class ParseError(StubError):
    """Raised when file content is malformed or misses required fields."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to parse stub file '{path}': {cause}")


class UnsupportedFormat(StubError):
    def __init__(self, extension: str) -> None:
        self.format = extension
        super().__init__(f"Unsupported stub format: {extension!r}")


class ValidationError(StubError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Stub validation failed: {message}")


class DuplicateSymbol(StubError):
    """Raised when the same symbol name is declared more than once."""

    def __init__(self, symbol: str, path: Path | None = None) -> None:
        self.symbol = symbol
        self.path = path
        msg = f"Multiple stubs define the same symbol: {symbol}"
        if path is not None:
            msg = f"{msg} (in '{path}')"
        super().__init__(msg)


class TypeConversionError(StubError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Type conversion error: {message}")


class InvalidPattern(StubError):
    def __init__(self, pattern: str, reason: str = "") -> None:
        self.pattern = pattern
        self.reason = reason
        msg = f"Invalid file pattern: {pattern!r}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class ConfigError(StubError):
    """Raised when a config file exists but cannot be parsed."""


__all__ = [
    "ConfigError",
    "DuplicateSymbol",
    "FileReadError",
    "InvalidPattern",
    "ParseError",
    "StubError",
    "TypeConversionError",
    "UnsupportedFormat",
    "ValidationError",
]
