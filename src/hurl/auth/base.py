"""Abstract base class for authentication schemes.

This module defines the two foundational types of the auth subsystem:

- :class:`AuthResult` -- a plain container for the HTTP headers that an
  auth scheme produces.
- :class:`AuthPlugin` -- the abstract base class that every authentication
  scheme extends.

See Also:
    :func:`hurl.auth.resolve_auth` for how CLI flags select a scheme.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AuthResult:
    """Container for authentication headers to inject into a request.

    :func:`hurl.request.build_request` applies these before any ``key:value``
    header parameters, so an explicit ``Authorization:...`` on the command
    line wins.

    Args:
        headers: HTTP headers to add (e.g. ``{"Authorization": "Bearer ..."}``).

    Example::

        result = AuthResult(headers={"Authorization": "Bearer tok123"})
        assert result.headers["Authorization"] == "Bearer tok123"
    """

    def __init__(self, headers: dict[str, str] | None = None):
        self.headers = headers or {}


class AuthPlugin(ABC):
    """Abstract base class for authentication schemes.

    A concrete scheme implements :meth:`authenticate`, turning the raw
    credential string from the command line into an :class:`AuthResult`.
    """

    @abstractmethod
    def authenticate(self, credential: str) -> AuthResult:
        """Build the auth headers for *credential*.

        Raises:
            AuthError: If the credential is unusable.
        """
