"""Declaration stub loading for the Starlark builtin catalog.

Public surface used by the language server: load many files into one
catalog, load a single file, or validate a file without loading it.
"""

from stubs.context import DEFAULT_CONTEXT, SymbolContext, make_context
from stubs.errors import (
    ConfigError,
    DuplicateSymbol,
    FileReadError,
    InvalidPattern,
    ParseError,
    StubError,
    TypeConversionError,
    UnsupportedFormat,
    ValidationError,
)
from stubs.loader import (
    ConflictPolicy,
    LoadOutcome,
    StubLoader,
    load_custom_stubs,
    load_single_stub,
    validate_stub_file,
)
from stubs.parser import parse_stub_file, register_decoder

__all__ = [
    "DEFAULT_CONTEXT",
    "ConfigError",
    "ConflictPolicy",
    "DuplicateSymbol",
    "FileReadError",
    "InvalidPattern",
    "LoadOutcome",
    "ParseError",
    "StubError",
    "StubLoader",
    "SymbolContext",
    "TypeConversionError",
    "UnsupportedFormat",
    "ValidationError",
    "load_custom_stubs",
    "load_single_stub",
    "make_context",
    "parse_stub_file",
    "register_decoder",
    "validate_stub_file",
]
