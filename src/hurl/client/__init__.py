"""HTTP client module for hurl.

Provides the transport and the response formatter:

:class:`SyncClient` -- blocking client backed by :class:`httpx.Client`.
:func:`format_response` -- pure formatting of status, headers and body.
:func:`print_api_response` -- format an :class:`httpx.Response` to stdout.

Example::

    from hurl.client import SyncClient, print_api_response

    with SyncClient(config) as client:
        print_api_response(client.send(spec))
"""

from hurl.client.response import format_response, print_api_response
from hurl.client.sync_client import SyncClient

__all__ = ["SyncClient", "format_response", "print_api_response"]
