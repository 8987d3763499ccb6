"""Response formatting -- maps a received response to printable text.

A response is first normalised into a :class:`~hurl.models.ResponseView`:

* status line ``"{version} {code} {reason}"`` with ``"Unknown"`` standing in
  for a missing reason phrase;
* header names rewritten to ``Title-Case-With-Hyphens`` and the lines sorted,
  so output does not depend on wire order;
* a ``Content-Length`` line holding the length of the body as received
  (which differs from the wire header for compressed responses);
* a JSON object body with its keys sorted, or the raw text when the body is
  not a JSON object.

:func:`format_response` is the pure entry point; :func:`print_api_response`
adapts an :class:`httpx.Response` and sends it to the output system.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from typing import Any, Optional, Union

import httpx

from hurl.models import ResponseView
from hurl.output import get_output

StatusLine = tuple[str, int, Optional[str]]
"""``(version, status_code, reason)`` as reported by the transport."""

_WORD_RE = re.compile(r"[A-Za-z0-9]+")
_CAMEL_RE = re.compile(r"([a-z0-9])([A-Z])")


def title_case_header(name: str) -> str:
    """Rewrite a header name as ``Title-Case-With-Hyphens``.

    Example::

        >>> title_case_header("content-type")
        'Content-Type'
        >>> title_case_header("x_request_id")
        'X-Request-Id'
        >>> title_case_header("WWW-Authenticate")
        'Www-Authenticate'
    """
    words = _WORD_RE.findall(_CAMEL_RE.sub(r"\1 \2", name))
    return "-".join(word[:1].upper() + word[1:].lower() for word in words)


def _sort_keys(value: Any) -> Any:
    """Return *value* with every nested object rebuilt in sorted key order."""
    if isinstance(value, dict):
        return {key: _sort_keys(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [_sort_keys(item) for item in value]
    return value


def parse_json_object(text: str) -> Optional[dict[str, Any]]:
    """Parse *text* as a JSON object with sorted keys.

    Returns:
        The sorted object, or ``None`` if *text* is not valid JSON, is
        valid JSON of another type (array, string, number...), or nests too
        deeply to decode and re-render.
    """
    try:
        value = json.loads(text)
        if not isinstance(value, dict):
            return None
        value = _sort_keys(value)
        # the indented encoder recurses in Python and can fail where the
        # C decoder did not
        json.dumps(value, indent=2)
    except (ValueError, TypeError, RecursionError):
        return None
    return value


def build_response_view(
    status: StatusLine,
    headers: Iterable[tuple[str, str]],
    body: Union[str, bytes],
    content_length: Optional[int] = None,
) -> ResponseView:
    """Normalise a response into a :class:`~hurl.models.ResponseView`.

    Args:
        status: ``(version, status_code, reason)``; an empty or ``None``
            reason becomes ``"Unknown"``.
        headers: ``(name, value)`` pairs in wire order. Repeated names are
            kept as separate lines. Any ``Content-Length`` is replaced by
            the resolved length.
        body: The decoded body. Bytes are decoded as UTF-8, replacing
            invalid sequences.
        content_length: Body length reported by the transport, if known.
            Defaults to the UTF-8 byte length of *body*.

    Returns:
        The view. Never raises for a body that is not JSON.
    """
    version, status_code, reason = status
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    if content_length is None:
        content_length = len(body) if isinstance(body, bytes) else len(text.encode("utf-8"))

    lines = [
        f"{title_case_header(name)}: {value}"
        for name, value in headers
        if title_case_header(name) != "Content-Length"
    ]
    lines.append(f"Content-Length: {content_length}")
    lines.sort()

    json_body = parse_json_object(text)
    return ResponseView(
        version=version,
        status_code=status_code,
        reason=reason or "Unknown",
        header_lines=lines,
        content_length=content_length,
        json_body=json_body,
        text_body=None if json_body is not None else text,
    )


def render_head(view: ResponseView) -> str:
    """Render the status line followed by one line per header."""
    return "\n".join([view.status_line, *view.header_lines])


def render_body(view: ResponseView) -> str:
    """Render the body: pretty JSON with sorted keys, or the raw text."""
    if view.json_body is not None:
        return json.dumps(view.json_body, indent=2, sort_keys=True, ensure_ascii=False)
    return view.text_body or ""


def render_view(view: ResponseView) -> str:
    """Render the whole response, head and body separated by a blank line."""
    return f"{render_head(view)}\n\n{render_body(view)}"


def format_response(
    status: StatusLine,
    headers: Iterable[tuple[str, str]],
    body: Union[str, bytes],
    content_length: Optional[int] = None,
) -> str:
    """Format a response as the text hurl prints.

    Pure and idempotent: the same arguments always give the same string.

    Example::

        >>> print(format_response(
        ...     ("HTTP/1.1", 200, "OK"),
        ...     [("content-type", "application/json")],
        ...     '{"b": 1, "a": 2}',
        ... ))
        HTTP/1.1 200 OK
        Content-Length: 16
        Content-Type: application/json
        <BLANKLINE>
        {
          "a": 2,
          "b": 1
        }
    """
    return render_view(build_response_view(status, headers, body, content_length))


def reported_content_length(response: httpx.Response) -> Optional[int]:
    """Return the body length the transport can vouch for, if any.

    The wire ``Content-Length`` describes the decoded body only when no
    ``Content-Encoding`` was applied; otherwise ``None`` is returned and the
    caller measures the decoded body itself.
    """
    if response.headers.get("content-encoding", "identity").lower() != "identity":
        return None
    raw = response.headers.get("content-length")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def view_from_httpx(response: httpx.Response) -> ResponseView:
    """Build a :class:`~hurl.models.ResponseView` from an :class:`httpx.Response`.

    The body is decoded with the response's charset; when the transport
    cannot vouch for a length, the decoded content's byte length is used.
    """
    content_length = reported_content_length(response)
    if content_length is None:
        content_length = len(response.content)
    return build_response_view(
        (response.http_version, response.status_code, response.reason_phrase),
        response.headers.multi_items(),
        response.text,
        content_length,
    )


def print_api_response(response: httpx.Response) -> ResponseView:
    """Format *response* and print it to stdout via the global output manager.

    Returns:
        The view that was printed.
    """
    output = get_output()
    view = view_from_httpx(response)
    if view.json_body is None and response.content:
        output.trace("Response body is not a JSON object; printing it verbatim")
    output.print_response(view)
    return view
