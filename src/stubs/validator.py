"""Consistency checks for a single declaration file."""

from __future__ import annotations

from typing import TYPE_CHECKING

from stubs.errors import DuplicateSymbol, ValidationError

if TYPE_CHECKING:
    from stubs.types import StubDefinition, StubSymbol


def is_valid_identifier(name: str) -> bool:
    """Return True for ASCII identifiers: [A-Za-z_][A-Za-z0-9_]*."""
    if not name:
        return False
    first, rest = name[0], name[1:]
    if not (first.isascii() and (first.isalpha() or first == "_")):
        return False
    return all(ch.isascii() and (ch.isalnum() or ch == "_") for ch in rest)


def validate_symbol(symbol: StubSymbol) -> None:
    if not symbol.name.strip():
        msg = "Symbol name cannot be empty"
        raise ValidationError(msg)

    if not is_valid_identifier(symbol.name):
        msg = f"Invalid symbol name: '{symbol.name}'"
        raise ValidationError(msg)


def validate_stub_definition(definition: StubDefinition) -> None:
    """Validate every symbol of one definition, stopping at the first error.

    Duplicates are only detected within this definition; symbols loaded from
    other files are not visible here.
    """
    seen: set[str] = set()
    for symbol in definition.symbols:
        validate_symbol(symbol)
        if symbol.name in seen:
            raise DuplicateSymbol(symbol.name)
        seen.add(symbol.name)


__all__ = ["is_valid_identifier", "validate_stub_definition", "validate_symbol"]
