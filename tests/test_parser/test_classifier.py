"""Tests for hurl.parser.classifier.

Covers:
- parse_parameter for every kind
- file-backed kinds read the file and report unreadable paths
- raw JSON kinds decode JSON and report the key and position on failure
- FileUpload is classified without touching the filesystem
- parse_parameters preserves order and stops at the first bad token
"""

from __future__ import annotations

from pathlib import Path

import pytest

from hurl.exceptions import FileReadError, InvalidJsonError, MalformedParameterError
from hurl.models import (
    DataField,
    DataFieldFromFile,
    FileUpload,
    Header,
    ParameterKind,
    Query,
    RawJsonField,
    RawJsonFieldFromFile,
)
from hurl.parser import classify, parse_parameter, parse_parameters


class TestLiteralKinds:
    def test_header(self) -> None:
        assert parse_parameter("X-API-TOKEN:abc123") == Header(key="X-API-TOKEN", value="abc123")

    def test_query(self) -> None:
        assert parse_parameter("foo==bar") == Query(key="foo", value="bar")

    def test_data_field(self) -> None:
        assert parse_parameter("foo=bar") == DataField(key="foo", value="bar")

    def test_file_upload_does_not_read_file(self) -> None:
        param = parse_parameter("avatar@/does/not/exist.png")
        assert param == FileUpload(key="avatar", filename="/does/not/exist.png")


class TestRawJson:
    def test_array(self) -> None:
        param = parse_parameter("foo:=[1,2,3]")
        assert isinstance(param, RawJsonField)
        assert param.json_ == [1, 2, 3]

    def test_string_literal(self) -> None:
        param = parse_parameter('foo:="bar"')
        assert param == RawJsonField(key="foo", json="bar")

    @pytest.mark.parametrize(
        ("literal", "expected"),
        [("true", True), ("null", None), ("1.5", 1.5), ('{"a":{"b":1}}', {"a": {"b": 1}})],
    )
    def test_literals(self, literal: str, expected: object) -> None:
        assert parse_parameter(f"x:={literal}").json_ == expected

    def test_bare_word_is_invalid_json_not_a_header(self) -> None:
        with pytest.raises(InvalidJsonError) as exc_info:
            parse_parameter("foo:=bar")
        assert exc_info.value.key == "foo"
        assert "line 1 column 1" in exc_info.value.detail

    def test_error_reports_position(self) -> None:
        with pytest.raises(InvalidJsonError) as exc_info:
            parse_parameter("foo:=[1,2,")
        assert "column" in str(exc_info.value)
        assert "'foo'" in str(exc_info.value)

    def test_too_deeply_nested(self) -> None:
        literal = "[" * 100_000 + "]" * 100_000
        with pytest.raises(InvalidJsonError, match="nested too deeply") as exc_info:
            parse_parameter(f"deep:={literal}")
        assert exc_info.value.key == "deep"


class TestFileKinds:
    def test_data_field_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bio.txt"
        path.write_text("line one\nline two\n", encoding="utf-8")

        param = parse_parameter(f"bio=@{path}")

        assert isinstance(param, DataFieldFromFile)
        assert param.key == "bio"
        assert param.filename == str(path)
        assert param.content == "line one\nline two\n"

    def test_raw_json_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "meta.json"
        path.write_text('{"bar": "this is from bar.json"}', encoding="utf-8")

        param = parse_parameter(f"foo:=@{path}")

        assert isinstance(param, RawJsonFieldFromFile)
        assert param.json_ == {"bar": "this is from bar.json"}

    def test_missing_file(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing.txt"
        with pytest.raises(FileReadError) as exc_info:
            parse_parameter(f"bio=@{missing}")
        assert exc_info.value.path == str(missing)
        assert str(missing) in str(exc_info.value)

    def test_directory_is_unreadable(self, tmp_path: Path) -> None:
        with pytest.raises(FileReadError):
            parse_parameter(f"meta:=@{tmp_path}")

    def test_invalid_json_in_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(InvalidJsonError) as exc_info:
            parse_parameter(f"meta:=@{path}")
        assert exc_info.value.key == "meta"


class TestClassify:
    def test_classify_takes_split_parts(self) -> None:
        assert classify(ParameterKind.HEADER, "Accept", "text/html") == Header(
            key="Accept", value="text/html"
        )


class TestParseParameters:
    def test_preserves_order(self) -> None:
        params = parse_parameters(["a:1", "b==2", "c=3", "d:=4"])
        assert [p.kind for p in params] == [
            ParameterKind.HEADER,
            ParameterKind.QUERY,
            ParameterKind.DATA_FIELD,
            ParameterKind.RAW_JSON_FIELD,
        ]

    def test_empty_list(self) -> None:
        assert parse_parameters([]) == []

    def test_first_error_propagates(self) -> None:
        with pytest.raises(MalformedParameterError) as exc_info:
            parse_parameters(["a:1", "broken", "also broken"])
        assert exc_info.value.argument == "broken"
