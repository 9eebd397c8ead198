"""Visibility context stamped onto converted catalog values."""

from __future__ import annotations

from pathlib import PurePath, PurePosixPath, PureWindowsPath

from pydantic import BaseModel, ConfigDict, Field

from catalog.models import APIContext, matches_file_pattern
from stubs.errors import InvalidPattern


class SymbolContext(BaseModel):
    """Dialect classifier plus an optional source-file predicate.

    ``file_pattern`` is an fnmatch pattern matched against the POSIX form of
    an analyzed source file's path; ``None`` makes the symbol visible from
    every file of the dialect.
    """

    model_config = ConfigDict(frozen=True)

    api_context: APIContext = APIContext.BZL
    file_pattern: str | None = Field(default=None)

    def matches(self, path: str | PurePath) -> bool:
        return matches_file_pattern(self.file_pattern, path)


DEFAULT_CONTEXT = SymbolContext()


def _check_brackets(pattern: str) -> None:
    """Reject a character class that fnmatch would read as a literal '['.

    Mirrors fnmatch.translate: after '[' an optional '!' and one leading
    ']' belong to the class, which ends at the next ']'.
    """
    i, n = 0, len(pattern)
    while i < n:
        ch = pattern[i]
        i += 1
        if ch != "[":
            continue
        j = i
        if j < n and pattern[j] == "!":
            j += 1
        if j < n and pattern[j] == "]":
            j += 1
        while j < n and pattern[j] != "]":
            j += 1
        if j >= n:
            raise InvalidPattern(pattern, "unclosed '['")
        i = j + 1


def _check_pattern(pattern: str) -> None:
    if not pattern.strip():
        raise InvalidPattern(pattern, "pattern is empty")

    if (
        PurePosixPath(pattern).is_absolute()
        or PureWindowsPath(pattern).is_absolute()
    ):
        raise InvalidPattern(pattern, "pattern must be relative")

    if ".." in pattern.replace("\\", "/").split("/"):
        raise InvalidPattern(pattern, "pattern must not contain '..' segments")

    _check_brackets(pattern)


def make_context(
    api_context: APIContext = APIContext.BZL,
    file_pattern: str | None = None,
) -> SymbolContext:
    """Build a context, rejecting malformed file patterns with InvalidPattern."""
    if file_pattern is not None:
        _check_pattern(file_pattern)
    return SymbolContext(api_context=api_context, file_pattern=file_pattern)


__all__ = ["DEFAULT_CONTEXT", "SymbolContext", "make_context"]
