"""Turn split parameter tokens into typed :data:`~hurl.models.Parameter` models.

:func:`classify` is where files are read and raw JSON is decoded, so every
``FileReadError`` and ``InvalidJsonError`` originates here. Whether a
:class:`~hurl.models.FileUpload` is allowed depends on ``--form``, which is
checked later by :func:`hurl.request.build_request`; the classifier has no
access to CLI flags.
"""

from __future__ import annotations

import json
from typing import Any

from hurl.exceptions import FileReadError, InvalidJsonError
from hurl.models import (
    DataField,
    DataFieldFromFile,
    FileUpload,
    Header,
    Parameter,
    ParameterKind,
    Query,
    RawJsonField,
    RawJsonFieldFromFile,
)
from hurl.output import trace
from hurl.parser.grammar import split_parameter


def read_file(path: str) -> str:
    """Read the whole of *path* as UTF-8 text.

    The file is closed before returning, on success and on error.

    Raises:
        FileReadError: If the file cannot be opened, read, or decoded.
    """
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        detail = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        raise FileReadError(path, detail) from exc


def parse_json(key: str, text: str) -> Any:
    """Decode *text* as JSON on behalf of parameter *key*.

    Raises:
        InvalidJsonError: With the decoder's message and position.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidJsonError(
            key, f"{exc.msg} at line {exc.lineno} column {exc.colno}"
        ) from exc
    except RecursionError as exc:
        raise InvalidJsonError(key, "nested too deeply to decode") from exc


def classify(kind: ParameterKind, key: str, raw_value: str) -> Parameter:
    """Build the typed parameter for a split token.

    Args:
        kind: The kind chosen by :func:`~hurl.parser.grammar.split_parameter`.
        key: The text before the separator.
        raw_value: The text after the separator -- a literal value, a JSON
            literal, or a file path depending on *kind*.

    Returns:
        One of the seven parameter models.

    Raises:
        FileReadError: For ``=@`` and ``:=@`` when the file cannot be read.
        InvalidJsonError: For ``:=`` and ``:=@`` when the JSON is invalid.
    """
    if kind is ParameterKind.HEADER:
        return Header(key=key, value=raw_value)
    if kind is ParameterKind.QUERY:
        return Query(key=key, value=raw_value)
    if kind is ParameterKind.DATA_FIELD:
        return DataField(key=key, value=raw_value)
    if kind is ParameterKind.FILE_UPLOAD:
        return FileUpload(key=key, filename=raw_value)
    if kind is ParameterKind.DATA_FIELD_FROM_FILE:
        return DataFieldFromFile(
            key=key, filename=raw_value, content=read_file(raw_value)
        )
    if kind is ParameterKind.RAW_JSON_FIELD:
        return RawJsonField(key=key, json=parse_json(key, raw_value))
    if kind is ParameterKind.RAW_JSON_FIELD_FROM_FILE:
        text = read_file(raw_value)
        return RawJsonFieldFromFile(
            key=key, filename=raw_value, json=parse_json(key, text)
        )
    raise ValueError(f"Unknown parameter kind: {kind!r}")  # pragma: no cover


def parse_parameter(argument: str) -> Parameter:
    """Split and classify a single command-line token."""
    kind, key, raw_value = split_parameter(argument)
    trace(f"Parameter {argument!r} -> {kind.value} {key!r}")
    return classify(kind, key, raw_value)


def parse_parameters(arguments: list[str]) -> list[Parameter]:
    """Parse every token in *arguments*, preserving order.

    Stops at the first bad token; its exception propagates unchanged.

    Example::

        >>> [p.kind.value for p in parse_parameters(["a:1", "b==2", "c=3"])]
        ['header', 'query', 'data_field']
    """
    return [parse_parameter(argument) for argument in arguments]
