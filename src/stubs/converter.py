"""Conversion of declaration definitions into catalog entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalog.models import Builtins, Callable, Param, Value
from stubs.context import DEFAULT_CONTEXT
from stubs.errors import TypeConversionError

if TYPE_CHECKING:
    from stubs.context import SymbolContext
    from stubs.types import StubCallable, StubDefinition, StubParam, StubSymbol


def convert_to_builtins(
    definition: StubDefinition,
    *,
    context: SymbolContext = DEFAULT_CONTEXT,
    strict: bool = False,
) -> Builtins:
    """Convert a definition into a catalog contribution.

    Every symbol becomes one global ``Value`` in declaration order, stamped
    with ``context``. The contribution never carries type entries.

    Args:
        definition: Parsed declaration file (validation is not re-run here)
        context: Visibility context applied to every produced value
        strict: Enforce signature well-formedness, raising
            ``TypeConversionError`` on the first inconsistency

    Returns:
        Builtins with one global per symbol.
    """
    builtins = Builtins()
    for symbol in definition.symbols:
        builtins.globals.append(
            convert_symbol_to_value(symbol, context=context, strict=strict)
        )
    return builtins


def convert_symbol_to_value(
    symbol: StubSymbol,
    *,
    context: SymbolContext = DEFAULT_CONTEXT,
    strict: bool = False,
) -> Value:
    callable_ = None
    if symbol.callable is not None:
        callable_ = _convert_callable(symbol.name, symbol.callable, strict=strict)

    return Value(
        name=symbol.name,
        type=symbol.type,
        doc=symbol.doc,
        callable=callable_,
        api_context=context.api_context,
        file_pattern=context.file_pattern,
    )


def _convert_callable(owner: str, callable_: StubCallable, *, strict: bool) -> Callable:
    if strict and not callable_.return_type.strip():
        msg = f"'{owner}' declares a callable without a return type"
        raise TypeConversionError(msg)

    return Callable(
        params=[_convert_param(owner, param, strict=strict) for param in callable_.params],
        return_type=callable_.return_type,
    )


def _convert_param(owner: str, param: StubParam, *, strict: bool) -> Param:
    if strict:
        _check_param(owner, param)

    return Param(
        name=param.name,
        type=param.type,
        doc=param.doc,
        default_value=param.default_value,
        is_mandatory=param.is_mandatory,
        is_star_arg=param.is_star_arg,
        is_star_star_arg=param.is_star_star_arg,
    )


def _check_param(owner: str, param: StubParam) -> None:
    if not param.name.strip():
        msg = f"'{owner}' has a parameter without a name"
        raise TypeConversionError(msg)
    if not param.type.strip():
        msg = f"Parameter '{param.name}' of '{owner}' has no type"
        raise TypeConversionError(msg)
    if param.is_star_arg and param.is_star_star_arg:
        msg = (
            f"Parameter '{param.name}' of '{owner}' cannot be both "
            "*args and **kwargs"
        )
        raise TypeConversionError(msg)


__all__ = ["convert_symbol_to_value", "convert_to_builtins"]
