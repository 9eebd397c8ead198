"""Loading and merging declaration files into one catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from catalog.models import Builtins
from stubs.context import DEFAULT_CONTEXT
from stubs.converter import convert_to_builtins
from stubs.errors import DuplicateSymbol, StubError
from stubs.parser import parse_stub_file
from stubs.validator import validate_stub_definition

if TYPE_CHECKING:
    from collections.abc import Iterable

    from catalog.models import Value
    from stubs.context import SymbolContext

logger = logging.getLogger(__name__)


class ConflictPolicy(str, Enum):
    """How a global whose name is already in the catalog is merged."""

    APPEND = "append"
    REJECT = "reject"
    FIRST_WINS = "first_wins"
    LAST_WINS = "last_wins"


@dataclass(frozen=True)
class LoadOutcome:
    """Result of loading one file.

    ``builtins`` is the file's own contribution before merging; under a
    keyed conflict policy the catalog may have dropped or replaced some of
    its entries.
    """

    path: Path
    builtins: Builtins | None = None
    error: StubError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class StubLoader:
    """Accumulates the catalog contributions of declaration files.

    A loader belongs to a single load session and is not safe for concurrent
    use. Each file is merged entirely or not at all.
    """

    def __init__(
        self,
        *,
        conflict_policy: ConflictPolicy = ConflictPolicy.APPEND,
        context: SymbolContext = DEFAULT_CONTEXT,
        strict: bool = False,
        validate: bool = False,
    ) -> None:
        self.conflict_policy = ConflictPolicy(conflict_policy)
        self.context = context
        self.strict = strict
        self.validate = validate
        self._builtins = Builtins()
        self._loaded: list[Path] = []
        self._finalized = False

    @property
    def builtins(self) -> Builtins:
        """Deep copy of the catalog accumulated so far."""
        return self._builtins.model_copy(deep=True)

    @property
    def loaded_paths(self) -> list[Path]:
        return list(self._loaded)

    def load_stub_file(
        self, path: str | Path, *, context: SymbolContext | None = None
    ) -> None:
        """Load a single declaration file and merge it into the catalog."""
        self._check_open()
        path = Path(path)
        self._merge(self._contribution(path, context), path)
        self._loaded.append(path)
        logger.debug("merged %s", path)

    def load_stub_files(self, paths: Iterable[str | Path]) -> None:
        """Load files in order, stopping at the first failure.

        Files merged before the failing one stay in the catalog; later files
        are never read.
        """
        for path in paths:
            self.load_stub_file(path)

    def load_each(self, paths: Iterable[str | Path]) -> list[LoadOutcome]:
        """Load every file, returning one outcome per path instead of raising."""
        self._check_open()
        outcomes: list[LoadOutcome] = []
        for raw_path in paths:
            path = Path(raw_path)
            try:
                contribution = self._contribution(path, None)
                self._merge(contribution, path)
            except StubError as exc:
                logger.warning("skipping %s: %s", path, exc)
                outcomes.append(LoadOutcome(path=path, error=exc))
                continue
            self._loaded.append(path)
            outcomes.append(LoadOutcome(path=path, builtins=contribution))
        return outcomes

    def into_builtins(self) -> Builtins:
        """Finish the session and hand the catalog to the caller."""
        self._check_open()
        self._finalized = True
        logger.info(
            "loaded %d stub file(s): %d global(s), %d type(s)",
            len(self._loaded),
            len(self._builtins.globals),
            len(self._builtins.types),
        )
        return self._builtins

    def _check_open(self) -> None:
        if self._finalized:
            msg = "StubLoader was already finalized by into_builtins()"
            raise RuntimeError(msg)

    def _contribution(self, path: Path, context: SymbolContext | None) -> Builtins:
        definition = parse_stub_file(path)
        if self.validate:
            validate_stub_definition(definition)
        return convert_to_builtins(
            definition,
            context=context if context is not None else self.context,
            strict=self.strict,
        )

    def _merge(self, other: Builtins, path: Path) -> None:
        if self.conflict_policy is ConflictPolicy.APPEND:
            globals_ = [*self._builtins.globals, *other.globals]
        else:
            globals_ = self._merge_keyed(other.globals, path)
        # Assigned only once every conflict check has passed.
        self._builtins.types = [*self._builtins.types, *other.types]
        self._builtins.globals = globals_

    def _merge_keyed(self, incoming: list[Value], path: Path) -> list[Value]:
        merged = list(self._builtins.globals)
        index = {value.name: i for i, value in enumerate(merged)}
        for value in incoming:
            position = index.get(value.name)
            if position is None:
                index[value.name] = len(merged)
                merged.append(value)
            elif self.conflict_policy is ConflictPolicy.REJECT:
                raise DuplicateSymbol(value.name, path)
            elif self.conflict_policy is ConflictPolicy.FIRST_WINS:
                logger.warning("%s: keeping earlier definition of '%s'", path, value.name)
            else:
                logger.warning("%s: replacing earlier definition of '%s'", path, value.name)
                merged[position] = value
        return merged


def load_custom_stubs(paths: Iterable[str | Path], **options: object) -> Builtins:
    """Load declaration files in order into one catalog (fail-fast)."""
    loader = StubLoader(**options)  # type: ignore[arg-type]
    loader.load_stub_files(paths)
    return loader.into_builtins()


def load_single_stub(path: str | Path, **options: object) -> Builtins:
    loader = StubLoader(**options)  # type: ignore[arg-type]
    loader.load_stub_file(path)
    return loader.into_builtins()


def validate_stub_file(path: str | Path) -> None:
    """Parse and validate a declaration file without building a catalog."""
    validate_stub_definition(parse_stub_file(path))


__all__ = [
    "ConflictPolicy",
    "LoadOutcome",
    "StubLoader",
    "load_custom_stubs",
    "load_single_stub",
    "validate_stub_file",
]
