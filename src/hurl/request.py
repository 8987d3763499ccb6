"""Fold parsed parameters into a :class:`~hurl.models.RequestSpec`.

This module bridges the parameter parser and the transport. It is pure: the
same parameters and flags always give an equal ``RequestSpec``, and nothing
here touches the network or the filesystem (file contents were loaded by
the classifier; upload files are opened by the transport).

**Folding rules:**

* **Headers** (``key:value``) -- last write wins, compared
  case-insensitively; the first spelling's position is kept.
* **Query parameters** (``key==value``) -- multi-valued; every occurrence
  is appended to the URL in order.
* **Body fields** (``=``, ``=@``, ``:=``, ``:=@``) -- last write wins. In
  JSON mode raw JSON values are inserted as JSON and everything else as
  strings; in form mode every value becomes a form field.
* **File uploads** (``key@path``) -- only allowed in form mode, where each
  becomes a multipart file part named ``key``.

Each kind has its own map, so a header and a query parameter with the same
key never interact.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any, Optional
from urllib.parse import quote, urlencode

from hurl.exceptions import FileUploadRequiresFormError
from hurl.models import (
    DataField,
    DataFieldFromFile,
    FileUpload,
    Header,
    Method,
    Parameter,
    Query,
    RawJsonField,
    RawJsonFieldFromFile,
    RequestSpec,
)


def select_method(parameters: Sequence[Parameter]) -> Method:
    """Pick the method used when none is given on the command line.

    Returns:
        ``POST`` if any parameter carries data (body fields or uploads),
        ``GET`` otherwise.
    """
    if any(p.is_data() for p in parameters):
        return Method.POST
    return Method.GET


def resolve_url(url: str, secure: bool = False) -> str:
    """Add a default scheme to a URL given without one.

    Args:
        url: The URL as typed, e.g. ``"example.com/users"``.
        secure: Use ``https`` instead of ``http`` as the default.

    Example::

        >>> resolve_url("example.com/users", secure=True)
        'https://example.com/users'
        >>> resolve_url("http://example.com", secure=True)
        'http://example.com'
    """
    if "://" in url:
        return url
    scheme = "https" if secure else "http"
    return f"{scheme}://{url}"


def append_query(url: str, query: Sequence[tuple[str, str]]) -> str:
    """Append url-encoded *query* pairs to *url*, before any fragment.

    Example::

        >>> append_query("example.com", [("foo", "bar")])
        'example.com?foo=bar'
        >>> append_query("example.com/?a=1", [("b", "2"), ("b", "3")])
        'example.com/?a=1&b=2&b=3'
    """
    if not query:
        return url
    base, hash_mark, fragment = url.partition("#")
    joiner = "&" if "?" in base else "?"
    if base.endswith(("?", "&")):
        joiner = ""
    encoded = urlencode(list(query), quote_via=quote)
    return f"{base}{joiner}{encoded}{hash_mark}{fragment}"


def _set_header(headers: dict[str, str], name: str, value: str) -> dict[str, str]:
    """Return *headers* with *name* set to *value*, replacing any spelling of it."""
    lowered = name.lower()
    if not any(existing.lower() == lowered for existing in headers):
        return {**headers, name: value}
    return {
        (name if existing.lower() == lowered else existing): (
            value if existing.lower() == lowered else current
        )
        for existing, current in headers.items()
    }


def _form_value(value: Any) -> str:
    """Render a raw JSON value as a form field."""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def build_request(
    url: str,
    parameters: Sequence[Parameter],
    method: Optional[Method] = None,
    form: bool = False,
    base_headers: Optional[Mapping[str, str]] = None,
) -> RequestSpec:
    """Assemble the request described by *parameters*.

    Args:
        url: Target URL as typed on the command line. Query parameters are
            appended to it; no scheme is added here (see :func:`resolve_url`).
        parameters: Parsed parameters in command-line order.
        method: Explicit method, or ``None`` to let :func:`select_method`
            choose.
        form: Encode the body as multipart/form-data and allow uploads.
        base_headers: Headers applied before the header parameters (config
            defaults, then auth), so parameters override them.

    Returns:
        The assembled :class:`~hurl.models.RequestSpec`.

    Raises:
        FileUploadRequiresFormError: If a ``key@path`` upload is present
            and *form* is ``False``.

    Example::

        >>> spec = build_request("example.com", parse_parameters(["foo==bar"]))
        >>> spec.url
        'example.com?foo=bar'
    """
    headers: dict[str, str] = {}
    for name, value in (base_headers or {}).items():
        headers = _set_header(headers, name, value)

    query: list[tuple[str, str]] = []
    fields: dict[str, Any] = {}
    files: dict[str, str] = {}

    for param in parameters:
        if isinstance(param, Header):
            headers = _set_header(headers, param.key, param.value)
        elif isinstance(param, Query):
            query.append((param.key, param.value))
        elif isinstance(param, DataField):
            fields[param.key] = param.value
        elif isinstance(param, DataFieldFromFile):
            fields[param.key] = param.content
        elif isinstance(param, (RawJsonField, RawJsonFieldFromFile)):
            fields[param.key] = _form_value(param.json_) if form else param.json_
        elif isinstance(param, FileUpload):
            if not form:
                raise FileUploadRequiresFormError(param.key, param.filename)
            files[param.key] = param.filename

    return RequestSpec(
        method=method or select_method(parameters),
        url=append_query(url, query),
        headers=headers,
        query=query,
        body=fields or None,
        form=form,
        files=files,
    )
