"""Shared utilities for starlark-stubs"""

from __future__ import annotations

from pathlib import Path


def file_extension(file_path: str | Path) -> str:
    """Return the extension of a path without its leading dot.

    Args:
        file_path: Path to a declaration file (str or Path object)

    Returns:
        Extension string (e.g., "json"), or "" when the file has none

    Examples:
        >>> file_extension("ext/custom.json")
        'json'
        >>> file_extension(Path("ext/custom.tar.py"))
        'py'
        >>> file_extension("ext/.json")
        ''
        >>> file_extension("ext/README")
        ''
    """
    suffix = Path(file_path).suffix
    return suffix[1:] if suffix else ""
