"""Canonical Pydantic models shared across all hurl modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Parameter models** -- one per separator in the parameter grammar,
produced by :mod:`hurl.parser` and consumed by :mod:`hurl.request`:
    :class:`Header`, :class:`FileUpload`, :class:`Query`,
    :class:`DataField`, :class:`DataFieldFromFile`, :class:`RawJsonField`,
    and :class:`RawJsonFieldFromFile`, joined into the :data:`Parameter`
    discriminated union.

**Pipeline models** -- the request about to be sent and the response about
to be printed:
    :class:`Method`, :class:`RequestSpec`, and :class:`ResponseView`.

**Configuration models** -- read from the user's config directory:
    :class:`HurlConfig`.
"""

from __future__ import annotations

import enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

RESERVED_KEY_CHARS = (":", "=", "@")
"""Characters that make up every separator and therefore may not appear in a key."""


# --- Parameters ---


class ParameterKind(str, enum.Enum):
    """The seven parameter kinds, one per separator."""

    HEADER = "header"
    FILE_UPLOAD = "file_upload"
    QUERY = "query"
    DATA_FIELD = "data_field"
    DATA_FIELD_FROM_FILE = "data_field_from_file"
    RAW_JSON_FIELD = "raw_json_field"
    RAW_JSON_FIELD_FROM_FILE = "raw_json_field_from_file"


class _ParameterBase(BaseModel):
    """Fields and checks shared by every parameter kind."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str

    @field_validator("key")
    @classmethod
    def _check_key(cls, value: str) -> str:
        if not value:
            raise ValueError("key must not be empty")
        for char in RESERVED_KEY_CHARS:
            if char in value:
                raise ValueError(f"key must not contain '{char}'")
        return value

    def is_data(self) -> bool:
        """Return ``True`` if this parameter contributes to the request body."""
        return False


class Header(_ParameterBase):
    """``key:value`` -- a request header."""

    kind: Literal[ParameterKind.HEADER] = ParameterKind.HEADER
    value: str


class FileUpload(_ParameterBase):
    """``key@filename`` -- a multipart file part (form mode only)."""

    kind: Literal[ParameterKind.FILE_UPLOAD] = ParameterKind.FILE_UPLOAD
    filename: str

    def is_data(self) -> bool:
        return True


class Query(_ParameterBase):
    """``key==value`` -- a URL query parameter."""

    kind: Literal[ParameterKind.QUERY] = ParameterKind.QUERY
    value: str


class DataField(_ParameterBase):
    """``key=value`` -- a string body field."""

    kind: Literal[ParameterKind.DATA_FIELD] = ParameterKind.DATA_FIELD
    value: str

    def is_data(self) -> bool:
        return True


class DataFieldFromFile(_ParameterBase):
    """``key=@filename`` -- a string body field read from a file.

    ``content`` holds the file's text as read at classification time.
    """

    kind: Literal[ParameterKind.DATA_FIELD_FROM_FILE] = ParameterKind.DATA_FIELD_FROM_FILE
    filename: str
    content: str = ""

    def is_data(self) -> bool:
        return True


class RawJsonField(_ParameterBase):
    """``key:=json`` -- a body field inserted as parsed JSON."""

    kind: Literal[ParameterKind.RAW_JSON_FIELD] = ParameterKind.RAW_JSON_FIELD
    json_: Any = Field(alias="json")

    def is_data(self) -> bool:
        return True


class RawJsonFieldFromFile(_ParameterBase):
    """``key:=@filename`` -- a body field holding the JSON parsed from a file."""

    kind: Literal[ParameterKind.RAW_JSON_FIELD_FROM_FILE] = (
        ParameterKind.RAW_JSON_FIELD_FROM_FILE
    )
    filename: str
    json_: Any = Field(default=None, alias="json")

    def is_data(self) -> bool:
        return True


Parameter = Annotated[
    Union[
        Header,
        FileUpload,
        Query,
        DataField,
        DataFieldFromFile,
        RawJsonField,
        RawJsonFieldFromFile,
    ],
    Field(discriminator="kind"),
]
"""Any one of the seven parameter models, discriminated on ``kind``."""


# --- Request / response ---


class Method(str, enum.Enum):
    """HTTP methods accepted on the command line."""

    HEAD = "HEAD"
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, value: str) -> Optional[Method]:
        """Return the method named by *value* (any case), or ``None``."""
        try:
            return cls(value.upper())
        except ValueError:
            return None


class RequestSpec(BaseModel):
    """Transport-agnostic description of one outgoing request.

    Built by :func:`hurl.request.build_request`. ``url`` already carries the
    query string assembled from ``query``; ``query`` is kept alongside for
    diagnostics. ``body`` is ``None`` when no data parameter was given,
    otherwise the field map that the transport encodes as JSON (default) or
    multipart/form-data (``form``). ``files`` maps upload field names to
    the paths to attach and is only populated in form mode.
    """

    method: Method
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    query: list[tuple[str, str]] = Field(default_factory=list)
    body: Optional[dict[str, Any]] = None
    form: bool = False
    files: dict[str, str] = Field(default_factory=dict)


class ResponseView(BaseModel):
    """Print-ready representation of a received response.

    Exactly one of ``json_body`` and ``text_body`` is set. ``json_body``
    keeps its keys sorted at every level so that rendering is stable.
    """

    version: str
    status_code: int
    reason: str = "Unknown"
    header_lines: list[str] = Field(default_factory=list)
    content_length: int = 0
    json_body: Optional[dict[str, Any]] = None
    text_body: Optional[str] = None

    @property
    def status_line(self) -> str:
        """The first output line, e.g. ``HTTP/1.1 200 OK``."""
        return f"{self.version} {self.status_code} {self.reason}"


# --- Configuration ---


class HurlConfig(BaseModel):
    """User-wide defaults persisted at ``~/.config/hurl/config.json``.

    Loaded by :func:`~hurl.config.load_config`. Fields here have the lowest
    precedence and can be overridden by environment variables or CLI flags.
    See :func:`~hurl.config.resolve_config` for the full precedence chain.
    """

    secure: bool = Field(
        default=False, description="Use https for URLs given without a scheme"
    )
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    default_headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers sent with every request (overridden by parameters)",
    )
