from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from catalog.models import APIContext
from stubs.context import SymbolContext, make_context
from stubs.errors import ConfigError, InvalidPattern
from stubs.loader import ConflictPolicy, StubLoader

CONFIG_FILENAME = "stubs.toml"


class ContextConfig(BaseModel):
    """Visibility context applied to every loaded stub."""

    model_config = ConfigDict(extra="forbid")

    api_context: APIContext = Field(
        default=APIContext.BZL,
        description="Dialect the stubs are visible in (by name, e.g. 'bzl')",
    )
    file_pattern: str | None = Field(
        default=None,
        description="fnmatch pattern limiting visibility to matching source files",
    )

    @field_validator("api_context", mode="before")
    @classmethod
    def validate_api_context(cls, v: Any) -> Any:
        """Accept API contexts by (case-insensitive) name as well as by number."""
        if isinstance(v, str):
            try:
                return APIContext[v.upper()]
            except KeyError:
                valid = ", ".join(ctx.name.lower() for ctx in APIContext)
                msg = f"Invalid api_context '{v}'. Valid contexts: {valid}"
                raise ValueError(msg) from None
        return v


class StubsConfig(BaseModel):
    """Configuration for a stub loading session."""

    model_config = ConfigDict(extra="forbid")

    files: list[str] = Field(
        default_factory=list,
        description="Declaration files to load, relative to the project root",
    )
    conflict_policy: ConflictPolicy = Field(
        default=ConflictPolicy.APPEND,
        description="How globals already present in the catalog are merged",
    )
    strict: bool = Field(
        default=False,
        description="Reject inconsistent callable signatures during conversion",
    )
    validate_on_load: bool = Field(
        default=False,
        description="Run the per-file validator before converting each file",
    )
    context: ContextConfig = Field(default_factory=ContextConfig)

    def symbol_context(self) -> SymbolContext:
        return make_context(self.context.api_context, self.context.file_pattern)

    def loader(self) -> StubLoader:
        return StubLoader(
            conflict_policy=self.conflict_policy,
            context=self.symbol_context(),
            strict=self.strict,
            validate=self.validate_on_load,
        )


def resolve_stub_paths(root: Path, config: StubsConfig) -> list[Path]:
    """Resolve configured files against root, keeping their declared order."""
    resolved_root = root.resolve()
    paths = []
    for entry in config.files:
        if not entry.strip():
            msg = "files entries must be non-empty paths"
            raise ConfigError(msg)
        path = Path(entry).expanduser()
        paths.append(path if path.is_absolute() else resolved_root / path)
    return paths


def load_config(root: Path) -> StubsConfig:
    """Load configuration from stubs.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return StubsConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        config = StubsConfig.model_validate(data)
        config.symbol_context()
    except (ValueError, InvalidPattern) as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
    return config


__all__ = [
    "CONFIG_FILENAME",
    "ContextConfig",
    "StubsConfig",
    "load_config",
    "resolve_stub_paths",
]
