from __future__ import annotations

import json
from pathlib import Path

import pytest

from stubs.errors import FileReadError, ParseError, UnsupportedFormat
from stubs.parser import (
    parse_stub_file,
    register_decoder,
    supported_extensions,
    unregister_decoder,
)
from stubs.types import StubDefinition

VALID_STUB = {
    "symbols": [
        {
            "name": "foo",
            "type": "function",
            "callable": {
                "params": [{"name": "x", "type": "int", "is_mandatory": True}],
                "return_type": "int",
            },
        }
    ]
}


def _write_stub(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_parse_json_applies_field_defaults(tmp_path: Path) -> None:
    path = _write_stub(
        tmp_path / "ext.json",
        {
            "symbols": [
                {"name": "VERSION", "type": "string"},
                {
                    "name": "foo",
                    "type": "function",
                    "callable": {
                        "params": [{"name": "x", "type": "int"}],
                        "return_type": "int",
                    },
                },
            ]
        },
    )

    definition = parse_stub_file(path)

    version, foo = definition.symbols
    assert version.doc == ""
    assert version.callable is None
    assert foo.callable is not None
    param = foo.callable.params[0]
    assert param.doc == ""
    assert param.default_value == ""
    assert param.is_mandatory is False
    assert param.is_star_arg is False
    assert param.is_star_star_arg is False


def test_parse_json_keeps_declared_values(tmp_path: Path) -> None:
    path = _write_stub(tmp_path / "ext.json", VALID_STUB)

    definition = parse_stub_file(path)

    assert len(definition.symbols) == 1
    foo = definition.symbols[0]
    assert foo.name == "foo"
    assert foo.callable is not None
    assert foo.callable.return_type == "int"
    assert foo.callable.params[0].is_mandatory is True


def test_parse_json_null_callable_is_absent(tmp_path: Path) -> None:
    path = _write_stub(
        tmp_path / "ext.json",
        {"symbols": [{"name": "a", "type": "string", "callable": None}]},
    )

    assert parse_stub_file(path).symbols[0].callable is None


def test_parse_json_ignores_unknown_keys(tmp_path: Path) -> None:
    path = _write_stub(
        tmp_path / "ext.json",
        {"version": 2, "symbols": [{"name": "a", "type": "string", "extra": 1}]},
    )

    assert parse_stub_file(path).symbols[0].name == "a"


def test_parse_missing_file_raises_file_read_error(tmp_path: Path) -> None:
    path = tmp_path / "missing.json"

    with pytest.raises(FileReadError) as exc_info:
        parse_stub_file(path)

    assert exc_info.value.path == path
    assert isinstance(exc_info.value.cause, OSError)


def test_parse_invalid_utf8_raises_file_read_error(tmp_path: Path) -> None:
    path = tmp_path / "ext.json"
    path.write_bytes(b'{"symbols": ["\xff"]}')

    with pytest.raises(FileReadError):
        parse_stub_file(path)


def test_parse_malformed_json_raises_parse_error(tmp_path: Path) -> None:
    path = tmp_path / "ext.json"
    path.write_text('{"symbols": [', encoding="utf-8")

    with pytest.raises(ParseError) as exc_info:
        parse_stub_file(path)

    assert exc_info.value.path == path
    assert exc_info.value.cause is not None
    assert str(path) in str(exc_info.value)


@pytest.mark.parametrize(
    "payload",
    [
        {},
        [],
        {"symbols": [{"type": "string"}]},
        {"symbols": [{"name": "a"}]},
        {"symbols": [{"name": "a", "type": "function", "callable": {"params": []}}]},
        {
            "symbols": [
                {"name": "a", "type": "function", "callable": {"return_type": "int"}}
            ]
        },
        {
            "symbols": [
                {
                    "name": "a",
                    "type": "function",
                    "callable": {"params": [{"name": "x"}], "return_type": "int"},
                }
            ]
        },
    ],
)
def test_parse_missing_required_fields_raises_parse_error(
    tmp_path: Path, payload: object
) -> None:
    path = _write_stub(tmp_path / "ext.json", payload)

    with pytest.raises(ParseError):
        parse_stub_file(path)


def test_parse_wrong_scalar_types_raise_parse_error(tmp_path: Path) -> None:
    path = _write_stub(
        tmp_path / "ext.json",
        {
            "symbols": [
                {
                    "name": "a",
                    "type": "function",
                    "callable": {
                        "params": [{"name": "x", "type": "int", "is_mandatory": "yes"}],
                        "return_type": "int",
                    },
                }
            ]
        },
    )

    with pytest.raises(ParseError):
        parse_stub_file(path)


@pytest.mark.parametrize(
    ("filename", "extension"),
    [("ext.py", "py"), ("ext.txt", "txt"), ("ext.JSON", "JSON"), ("ext", "")],
)
def test_non_json_extension_is_unsupported_even_with_valid_json(
    tmp_path: Path, filename: str, extension: str
) -> None:
    path = _write_stub(tmp_path / filename, VALID_STUB)

    with pytest.raises(UnsupportedFormat) as exc_info:
        parse_stub_file(path)

    assert exc_info.value.format == extension


def test_unsupported_extension_wins_over_malformed_content(tmp_path: Path) -> None:
    path = tmp_path / "ext.txt"
    path.write_text("not json at all", encoding="utf-8")

    with pytest.raises(UnsupportedFormat):
        parse_stub_file(path)


def test_registered_decoder_handles_new_extension(tmp_path: Path) -> None:
    def decode_lines(content: str) -> StubDefinition:
        return StubDefinition.model_validate(
            {
                "symbols": [
                    {"name": line.strip(), "type": "string"}
                    for line in content.splitlines()
                    if line.strip()
                ]
            }
        )

    register_decoder("names", decode_lines)
    try:
        path = tmp_path / "ext.names"
        path.write_text("alpha\nbeta\n", encoding="utf-8")

        definition = parse_stub_file(path)

        assert [symbol.name for symbol in definition.symbols] == ["alpha", "beta"]
        assert "names" in supported_extensions()
    finally:
        unregister_decoder("names")

    assert "names" not in supported_extensions()


def test_register_decoder_refuses_silent_replacement() -> None:
    with pytest.raises(ValueError, match="already registered"):
        register_decoder("json", lambda content: StubDefinition(symbols=[]))


def test_register_decoder_rejects_leading_dot() -> None:
    with pytest.raises(ValueError, match="must not start with"):
        register_decoder(".yaml", lambda content: StubDefinition(symbols=[]))


def test_fixture_stub_parses() -> None:
    fixture = Path(__file__).parent / "fixtures" / "stubs" / "rules.json"

    definition = parse_stub_file(fixture)

    assert [symbol.name for symbol in definition.symbols] == ["custom_rule", "VERSION"]


def test_parse_repeated_json_key_keeps_last_value(tmp_path: Path) -> None:
    path = tmp_path / "ext.json"
    path.write_text(
        '{"symbols": [{"name": "a", "name": "b", "type": "x"}]}', encoding="utf-8"
    )

    definition = parse_stub_file(path)

    assert [symbol.name for symbol in definition.symbols] == ["b"]


def test_unsupported_format_keeps_extension_attribute() -> None:
    error = UnsupportedFormat("yaml")

    assert error.format == "yaml"
    assert str(error) == "Unsupported stub format: 'yaml'"
