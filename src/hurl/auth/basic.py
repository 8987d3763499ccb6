"""HTTP Basic authentication (``--auth``).

The credential is ``username:password``. A bare ``username`` makes the
plugin prompt for the password; ``username:`` means an empty password. The
result is Base64-encoded and sent as ``Authorization: Basic <encoded>`` per
:rfc:`7617`.
"""

from __future__ import annotations

import base64
import getpass
import sys
from typing import Callable, Optional

from hurl.auth.base import AuthPlugin, AuthResult
from hurl.exceptions import AuthError


class BasicAuthPlugin(AuthPlugin):
    """Authenticate via HTTP Basic authentication.

    Args:
        prompt: Callable used to ask for a missing password. Defaults to
            :func:`getpass.getpass`.
    """

    def __init__(self, prompt: Optional[Callable[[str], str]] = None) -> None:
        self._prompt = prompt or getpass.getpass

    def authenticate(self, credential: str) -> AuthResult:
        """Return a Basic auth header for ``username[:password]``.

        Raises:
            AuthError: If the username is empty, or the password is missing
                and stdin is not a terminal to prompt on.
        """
        username, sep, password = credential.partition(":")
        if not username:
            raise AuthError("Basic auth requires a username ('username:password')")
        if not sep:
            password = self._ask_password(username)
        raw = f"{username}:{password}"
        encoded = base64.b64encode(raw.encode("utf-8")).decode("ascii")
        return AuthResult(headers={"Authorization": f"Basic {encoded}"})

    def _ask_password(self, username: str) -> str:
        if self._prompt is getpass.getpass and not sys.stdin.isatty():
            raise AuthError(
                f"Cannot prompt for the password of '{username}': stdin is not a TTY "
                "(pass 'username:password', or 'username:' for no password)"
            )
        return self._prompt(f"Password for {username}: ")
