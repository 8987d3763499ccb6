"""Tests for hurl.parser.grammar.

Covers:
- each separator maps to its kind
- longest-separator-first precedence
- fallback to a shorter separator when the longer one leaves a bad key
- malformed tokens (no separator, empty key)
"""

from __future__ import annotations

import pytest

from hurl.exceptions import MalformedParameterError
from hurl.models import Header, ParameterKind
from hurl.parser import parse_parameter
from hurl.parser.grammar import SEPARATORS, split_parameter


# ------------------------------------------------------------------ #
# One token per kind
# ------------------------------------------------------------------ #


class TestSingleSeparators:
    @pytest.mark.parametrize(
        ("argument", "kind", "key", "value"),
        [
            ("X-API-TOKEN:abc123", ParameterKind.HEADER, "X-API-TOKEN", "abc123"),
            ("avatar@photo.png", ParameterKind.FILE_UPLOAD, "avatar", "photo.png"),
            ("foo==bar", ParameterKind.QUERY, "foo", "bar"),
            ("foo=bar", ParameterKind.DATA_FIELD, "foo", "bar"),
            ("bio=@bio.txt", ParameterKind.DATA_FIELD_FROM_FILE, "bio", "bio.txt"),
            ("ids:=[1,2,3]", ParameterKind.RAW_JSON_FIELD, "ids", "[1,2,3]"),
            ("meta:=@meta.json", ParameterKind.RAW_JSON_FIELD_FROM_FILE, "meta", "meta.json"),
        ],
    )
    def test_kind_key_and_value(self, argument, kind, key, value) -> None:
        assert split_parameter(argument) == (kind, key, value)

    def test_empty_value_is_allowed(self) -> None:
        assert split_parameter("X-Empty:") == (ParameterKind.HEADER, "X-Empty", "")


# ------------------------------------------------------------------ #
# Precedence
# ------------------------------------------------------------------ #


class TestPrecedence:
    def test_separator_table_is_longest_first(self) -> None:
        lengths = [len(sep) for sep, _ in SEPARATORS]
        assert lengths[0] == 3
        assert [sep for sep, _ in SEPARATORS] == [":=@", ":=", "=@", "==", "@", ":", "="]

    def test_raw_json_wins_over_header_and_data(self) -> None:
        kind, key, value = split_parameter("foo:=bar")
        assert kind is ParameterKind.RAW_JSON_FIELD
        assert key == "foo"
        assert value == "bar"

    def test_raw_json_from_file_wins_over_raw_json(self) -> None:
        assert split_parameter("foo:=@x.json")[0] is ParameterKind.RAW_JSON_FIELD_FROM_FILE

    def test_data_from_file_wins_over_upload(self) -> None:
        assert split_parameter("foo=@x.txt")[0] is ParameterKind.DATA_FIELD_FROM_FILE

    def test_query_wins_over_data(self) -> None:
        assert split_parameter("foo==a=b") == (ParameterKind.QUERY, "foo", "a=b")

    def test_header_value_may_contain_equals(self) -> None:
        assert split_parameter("Authorization:Bearer a=b") == (
            ParameterKind.HEADER,
            "Authorization",
            "Bearer a=b",
        )

    def test_header_value_may_contain_colons(self) -> None:
        assert split_parameter("Referer:http://example.com") == (
            ParameterKind.HEADER,
            "Referer",
            "http://example.com",
        )

    def test_upload_path_may_contain_colon(self) -> None:
        assert split_parameter("file@C:/tmp/a.txt") == (
            ParameterKind.FILE_UPLOAD,
            "file",
            "C:/tmp/a.txt",
        )


class TestFallbackToShorterSeparator:
    def test_header_with_at_sign_in_value(self) -> None:
        assert split_parameter("X-Email:bob@example.com") == (
            ParameterKind.HEADER,
            "X-Email",
            "bob@example.com",
        )

    def test_data_field_with_url_value(self) -> None:
        assert split_parameter("url=http://example.com") == (
            ParameterKind.DATA_FIELD,
            "url",
            "http://example.com",
        )

    def test_data_field_with_email_value(self) -> None:
        assert split_parameter("email=bob@example.com") == (
            ParameterKind.DATA_FIELD,
            "email",
            "bob@example.com",
        )


_HEADER_KEYS = ["k", "X-API-TOKEN", "Content-Type", "x_request.id", "A1"]
_HEADER_VALUES = [
    "v",
    "",
    "a=b",
    "a==b",
    "a=@b",
    "a:=b",
    "a:=@b",
    "x@y",
    "@file",
    "user:pw",
    "http://h:80/p?q=1&r=@x",
    "  spaced  ",
]


class TestHeaderSweep:
    """Any valid key followed by ``:`` is a header, whatever the value holds.

    Values starting with ``=`` are excluded: ``k:=...`` is a raw JSON field.
    """

    @pytest.mark.parametrize("key", _HEADER_KEYS)
    @pytest.mark.parametrize("value", _HEADER_VALUES)
    def test_split(self, key: str, value: str) -> None:
        assert split_parameter(f"{key}:{value}") == (ParameterKind.HEADER, key, value)

    @pytest.mark.parametrize("key", _HEADER_KEYS)
    @pytest.mark.parametrize("value", _HEADER_VALUES)
    def test_parse(self, key: str, value: str) -> None:
        assert parse_parameter(f"{key}:{value}") == Header(key=key, value=value)


# ------------------------------------------------------------------ #
# Malformed tokens
# ------------------------------------------------------------------ #


class TestMalformed:
    def test_no_separator(self) -> None:
        with pytest.raises(MalformedParameterError) as exc_info:
            split_parameter("justakey")
        assert exc_info.value.argument == "justakey"
        assert "no separator" in exc_info.value.reason
        assert "justakey" in str(exc_info.value)

    def test_empty_string(self) -> None:
        with pytest.raises(MalformedParameterError):
            split_parameter("")

    @pytest.mark.parametrize("argument", [":value", "=value", "==value", ":=1", "@file"])
    def test_empty_key(self, argument: str) -> None:
        with pytest.raises(MalformedParameterError) as exc_info:
            split_parameter(argument)
        assert exc_info.value.reason == "key is empty"
        assert exc_info.value.argument == argument
