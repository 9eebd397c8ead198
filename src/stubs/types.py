"""Declaration file models.

A ``StubDefinition`` is the parsed contents of one declaration file. It only
lives long enough to be validated or converted into catalog entries.

Scalar fields are strict: a JSON number where a string is expected (or a
string where a boolean is expected) is a schema error rather than a silent
coercion. Unknown keys are ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


class _StubModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class StubParam(_StubModel):
    """Function parameter definition."""

    name: StrictStr
    type: StrictStr
    doc: StrictStr = ""
    default_value: StrictStr = Field(
        default="", description="Default value literal ('' means no default)"
    )
    is_mandatory: StrictBool = False
    is_star_arg: StrictBool = Field(default=False, description="*args-style")
    is_star_star_arg: StrictBool = Field(default=False, description="**kwargs-style")


class StubCallable(_StubModel):
    """Function signature for callable symbols."""

    params: list[StubParam]
    return_type: StrictStr


class StubSymbol(_StubModel):
    """A single symbol definition from a declaration file."""

    name: StrictStr
    type: StrictStr = Field(description="Declared type (e.g., 'function', 'string')")
    doc: StrictStr = ""
    callable: StubCallable | None = None


class StubDefinition(_StubModel):
    """Symbols declared by one declaration file, in file order."""

    symbols: list[StubSymbol]


__all__ = ["StubCallable", "StubDefinition", "StubParam", "StubSymbol"]
