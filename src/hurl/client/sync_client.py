"""Synchronous HTTP transport for hurl.

This module provides :class:`SyncClient`, which sends one
:class:`~hurl.models.RequestSpec` over :class:`httpx.Client` and layers on:

- **Default scheme** -- URLs typed without a scheme get ``http://`` (or
  ``https://`` when ``secure`` is configured).
- **Body encoding** -- the field map is sent as a JSON object, or as
  multipart/form-data in form mode, with upload files attached as parts.
- **Dry-run mode** -- prints the request to stderr and returns a synthetic
  200 response without sending traffic.
- **Error mapping** -- network failures become
  :class:`~hurl.exceptions.TransportError`.

There are no retries; a request is sent exactly once.
"""

from __future__ import annotations

import json
import mimetypes
import os
from contextlib import ExitStack
from typing import Any, Optional

import httpx

from hurl.exceptions import FileReadError, InvalidUsageError, TransportError
from hurl.models import HurlConfig, RequestSpec
from hurl.output import get_output
from hurl.request import resolve_url


class SyncClient:
    """Synchronous HTTP client for a single request.

    Wraps :class:`httpx.Client`. Must be used as a context manager so that
    the underlying transport is properly opened and closed.

    Args:
        config: Effective configuration (timeout, SSL verification,
            default scheme).
        dry_run: When ``True``, requests are printed to stderr and a
            synthetic 200 response is returned without network I/O.
        transport: Optional httpx transport, e.g. :class:`httpx.MockTransport`
            in tests.

    Example::

        with SyncClient(config) as client:
            response = client.send(spec)
    """

    def __init__(
        self,
        config: Optional[HurlConfig] = None,
        dry_run: bool = False,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config or HurlConfig()
        self._dry_run = dry_run
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    def __enter__(self) -> SyncClient:
        self._client = httpx.Client(
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        client, self._client = self._client, None
        if client is not None:
            client.close()

    # -- sending ------------------------------------------------------ #

    def send(self, spec: RequestSpec) -> httpx.Response:
        """Send *spec* and return the response.

        Responses with 4xx/5xx status codes are returned like any other;
        they are the server's answer, not a transport failure.

        Args:
            spec: The request built by :func:`hurl.request.build_request`.

        Returns:
            The :class:`httpx.Response` from the server.

        Raises:
            FileReadError: If an upload file cannot be opened.
            InvalidUsageError: If the URL cannot be parsed.
            TransportError: On connection, DNS, TLS or timeout errors.
        """
        assert self._client is not None, "SyncClient.send() called outside its with-block"

        output = get_output()
        url = resolve_url(spec.url, self._config.secure)
        method = spec.method.value

        if self._dry_run:
            return self._print_dry_run(spec, url)

        output.debug(f"{method} {url}")
        for name, value in spec.headers.items():
            output.debug(f"  {name}: {value}")

        with ExitStack() as stack:
            kwargs: dict[str, Any] = {"headers": spec.headers}
            if spec.form:
                parts = self._multipart_parts(spec, stack)
                if parts:
                    kwargs["files"] = parts
            elif spec.body is not None:
                output.trace(f"JSON body: {json.dumps(spec.body, ensure_ascii=False)}")
                kwargs["json"] = spec.body

            try:
                return self._client.request(method, url, **kwargs)
            except httpx.InvalidURL as exc:
                raise InvalidUsageError(f"Invalid URL '{url}': {exc}") from exc
            except httpx.TimeoutException as exc:
                raise TransportError(
                    f"Request to {url} timed out after {self._config.timeout}s"
                ) from exc
            except httpx.TransportError as exc:
                raise TransportError(f"Request to {url} failed: {exc}") from exc

    # -- helpers ------------------------------------------------------ #

    def _multipart_parts(
        self, spec: RequestSpec, stack: ExitStack
    ) -> list[tuple[str, Any]]:
        """Build multipart parts: one per body field, then one per upload.

        Fields are sent as parts without a filename so the body is always
        multipart/form-data, even when nothing is uploaded. Upload files are
        opened on *stack* and closed when it exits.
        """
        parts: list[tuple[str, Any]] = [
            (key, (None, value)) for key, value in (spec.body or {}).items()
        ]
        for key, path in spec.files.items():
            try:
                handle = stack.enter_context(open(path, "rb"))
            except OSError as exc:
                raise FileReadError(path, exc.strerror or str(exc)) from exc
            content_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
            parts.append((key, (os.path.basename(path), handle, content_type)))
            get_output().trace(f"Attaching {path} as '{key}' ({content_type})")
        return parts

    def _print_dry_run(self, spec: RequestSpec, url: str) -> httpx.Response:
        """List what would be sent on stderr and answer with a stand-in 200."""
        output = get_output()
        output.info(f"[dry-run] {spec.method.value} {url}")

        for key, value in spec.headers.items():
            output.info(f"  Header: {key}: {value}")

        for key, value in spec.query:
            output.info(f"  Query: {key}={value}")

        if spec.form:
            for key, value in (spec.body or {}).items():
                output.info(f"  Form field: {key}={value}")
            for key, path in spec.files.items():
                output.info(f"  Form file: {key}@{path}")
        elif spec.body is not None:
            output.info(f"  Body (JSON): {json.dumps(spec.body, indent=2, ensure_ascii=False)}")

        return httpx.Response(
            200,
            json={"dry_run": True, "message": "Request was not sent"},
            request=httpx.Request(method=spec.method.value, url=url),
        )
