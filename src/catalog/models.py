"""Builtin catalog models.

This module contains the shapes consumed by the language server's name
resolution: global values, their callable signatures, and type entries.
"""

from __future__ import annotations

from enum import IntEnum
from fnmatch import fnmatch
from pathlib import PurePath

from pydantic import BaseModel, Field


class APIContext(IntEnum):
    """Dialect/file-kind in which a catalog entry is visible."""

    ALL = 0
    BZL = 1
    BUILD = 2
    MODULE = 3
    REPO = 4
    WORKSPACE = 5


def matches_file_pattern(pattern: str | None, path: str | PurePath) -> bool:
    """Return True when path (POSIX form) matches pattern; None matches all."""
    if pattern is None:
        return True
    return fnmatch(PurePath(path).as_posix(), pattern)


class Param(BaseModel):
    """One parameter of a callable signature."""

    name: str
    type: str
    doc: str = ""
    default_value: str = Field(
        default="", description="Default value literal ('' means no default)"
    )
    is_mandatory: bool = False
    is_star_arg: bool = False
    is_star_star_arg: bool = False


class Callable(BaseModel):
    """A function signature; param order encodes positional order."""

    params: list[Param] = Field(default_factory=list)
    return_type: str


class Value(BaseModel):
    """A global symbol exposed to the resolver."""

    name: str
    type: str
    doc: str = ""
    callable: Callable | None = None
    api_context: APIContext = APIContext.BZL
    file_pattern: str | None = Field(
        default=None,
        description="fnmatch pattern restricting which source files see this value",
    )

    def is_visible_from(self, path: str | PurePath) -> bool:
        return matches_file_pattern(self.file_pattern, path)


class Type(BaseModel):
    """A named type entry with its member values."""

    name: str
    doc: str = ""
    fields: list[Value] = Field(default_factory=list)


class Builtins(BaseModel):
    """Aggregate catalog of globals and types."""

    types: list[Type] = Field(default_factory=list)
    globals: list[Value] = Field(default_factory=list)

    def merge(self, other: Builtins) -> None:
        """Append all of other's types and globals after the existing ones."""
        self.types.extend(other.types)
        self.globals.extend(other.globals)

    def visible_globals(self, path: str | PurePath) -> list[Value]:
        return [value for value in self.globals if value.is_visible_from(path)]

    def global_names(self) -> list[str]:
        return [value.name for value in self.globals]


__all__ = [
    "APIContext",
    "Builtins",
    "Callable",
    "Param",
    "Type",
    "Value",
    "matches_file_pattern",
]
