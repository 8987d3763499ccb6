"""Authentication for hurl.

Two schemes are available, each selected by its own CLI flag:

- ``--auth USER[:PASS]`` -- :class:`BasicAuthPlugin`
- ``--token TOKEN`` -- :class:`BearerAuthPlugin`

:func:`resolve_auth` picks the scheme from the flags and returns the headers
to send.
"""

from __future__ import annotations

from typing import Callable, Optional

from hurl.auth.base import AuthPlugin, AuthResult
from hurl.auth.basic import BasicAuthPlugin
from hurl.auth.bearer import BearerAuthPlugin
from hurl.exceptions import InvalidUsageError

__all__ = [
    "AuthPlugin",
    "AuthResult",
    "BasicAuthPlugin",
    "BearerAuthPlugin",
    "resolve_auth",
]


def resolve_auth(
    auth: Optional[str] = None,
    token: Optional[str] = None,
    prompt: Optional[Callable[[str], str]] = None,
) -> AuthResult:
    """Build the auth headers selected by ``--auth`` / ``--token``.

    Args:
        auth: ``username[:password]`` for Basic auth.
        token: Bearer token.
        prompt: Password prompt override forwarded to
            :class:`BasicAuthPlugin`.

    Returns:
        An :class:`AuthResult`; empty when neither flag was given.

    Raises:
        InvalidUsageError: If both flags are given.
        AuthError: If the chosen credential is unusable.
    """
    if auth is not None and token is not None:
        raise InvalidUsageError("--auth and --token cannot be used together")
    if auth is not None:
        return BasicAuthPlugin(prompt=prompt).authenticate(auth)
    if token is not None:
        return BearerAuthPlugin().authenticate(token)
    return AuthResult()
