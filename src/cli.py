"""Command-line interface for starlark-stubs."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from catalog.write import write_builtins
from stubs.config import load_config, resolve_stub_paths
from stubs.errors import StubError
from stubs.loader import validate_stub_file


def _add_logging_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="starlark-stubs")
    subparsers = parser.add_subparsers(dest="command", required=True)

    load_parser = subparsers.add_parser("load", help="Load stubs into a catalog")
    load_parser.add_argument(
        "paths",
        nargs="*",
        help="Declaration files (default: files listed in stubs.toml)",
    )
    _add_logging_options(load_parser)
    load_parser.add_argument(
        "--root",
        default=".",
        help="Project root holding stubs.toml (default: .)",
    )
    load_parser.add_argument(
        "--out",
        default=None,
        help="Write the catalog as JSON to this file",
    )
    load_parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Load every valid file and report failures instead of stopping",
    )

    validate_parser = subparsers.add_parser(
        "validate", help="Validate declaration files without loading them"
    )
    validate_parser.add_argument("paths", nargs="+", help="Declaration files")
    _add_logging_options(validate_parser)

    return parser


def _resolve_paths(paths: list[str]) -> list[Path]:
    return [Path(path).expanduser().resolve() for path in paths]


def _handle_load(
    root: Path, paths: list[str], out: str | None, *, keep_going: bool
) -> int:
    config = load_config(root)
    stub_paths = (
        _resolve_paths(paths) if paths else resolve_stub_paths(root, config)
    )
    loader = config.loader()

    exit_code = 0
    if keep_going:
        for outcome in loader.load_each(stub_paths):
            if not outcome.ok:
                sys.stderr.write(f"{outcome.path}: {outcome.error}\n")
                exit_code = 1
    else:
        loader.load_stub_files(stub_paths)

    builtins = loader.into_builtins()
    if out is not None:
        write_builtins(Path(out).expanduser().resolve(), builtins)
    else:
        sys.stdout.write(
            f"{len(loader.loaded_paths)} file(s), {len(builtins.globals)} global(s), "
            f"{len(builtins.types)} type(s)\n"
        )
    return exit_code


def _handle_validate(paths: list[str]) -> int:
    exit_code = 0
    for path in _resolve_paths(paths):
        try:
            validate_stub_file(path)
        except StubError as exc:
            sys.stderr.write(f"{path}: {exc}\n")
            exit_code = 1
    return exit_code


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "load":
            root = Path(args.root).expanduser().resolve()
            return _handle_load(root, args.paths, args.out, keep_going=args.keep_going)

        if args.command == "validate":
            return _handle_validate(args.paths)
    except StubError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
