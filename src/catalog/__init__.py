"""Builtin catalog surface consumed by the language server."""

from catalog.models import APIContext, Builtins, Callable, Param, Type, Value
from catalog.write import dump_builtins, write_builtins

__all__ = [
    "APIContext",
    "Builtins",
    "Callable",
    "Param",
    "Type",
    "Value",
    "dump_builtins",
    "write_builtins",
]
