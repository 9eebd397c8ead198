"""Declaration file parsing with extension-keyed decoders.

JSON objects that repeat a key are accepted and the last occurrence wins,
so `{"name": "a", "name": "b", "type": "x"}` declares a symbol named "b".
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import orjson
import pydantic

from stubs.errors import FileReadError, ParseError, UnsupportedFormat
from stubs.types import StubDefinition
from utils import file_extension

if TYPE_CHECKING:
    from collections.abc import Callable

    Decoder = Callable[[str], StubDefinition]

logger = logging.getLogger(__name__)

_DECODERS: dict[str, Decoder] = {}


def register_decoder(extension: str, decoder: Decoder, *, replace: bool = False) -> None:
    """Register a decoder for files with the given extension (no leading dot)."""
    if extension.startswith("."):
        msg = f"Extension must not start with '.': {extension!r}"
        raise ValueError(msg)
    if extension in _DECODERS and not replace:
        msg = f"A decoder is already registered for '{extension}' files"
        raise ValueError(msg)
    _DECODERS[extension] = decoder


def unregister_decoder(extension: str) -> None:
    _DECODERS.pop(extension, None)


def supported_extensions() -> list[str]:
    return sorted(_DECODERS)


def _decode_json(content: str) -> StubDefinition:
    return StubDefinition.model_validate(orjson.loads(content))


def _decode_python(content: str) -> StubDefinition:
    # Reserved for a dialect-native stub parser.
    raise UnsupportedFormat("py")


register_decoder("json", _decode_json)
register_decoder("py", _decode_python)


def parse_stub_file(path: str | Path) -> StubDefinition:
    """Parse a declaration file and return its definition.

    The file is read first, then the decoder is chosen from the extension
    alone; content is never inspected to guess a format.

    Raises:
        FileReadError: If the file cannot be read as UTF-8 text.
        UnsupportedFormat: If no decoder handles the file's extension.
        ParseError: If the content is malformed or misses required fields.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(path, exc) from exc

    extension = file_extension(path)
    decoder = _DECODERS.get(extension)
    if decoder is None:
        raise UnsupportedFormat(extension)

    try:
        definition = decoder(content)
    except (orjson.JSONDecodeError, pydantic.ValidationError) as exc:
        raise ParseError(path, exc) from exc

    logger.debug("parsed %s: %d symbol(s)", path, len(definition.symbols))
    return definition


__all__ = [
    "parse_stub_file",
    "register_decoder",
    "supported_extensions",
    "unregister_decoder",
]
