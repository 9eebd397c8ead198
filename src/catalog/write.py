"""Catalog serialization."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from pathlib import Path

    from catalog.models import Builtins


def dump_builtins(builtins: Builtins) -> bytes:
    """Serialize a catalog as deterministic, indented JSON."""
    payload = builtins.model_dump(mode="json")
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    return orjson.dumps(payload, option=opts)


def write_builtins(path: Path, builtins: Builtins) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dump_builtins(builtins))


__all__ = ["dump_builtins", "write_builtins"]
