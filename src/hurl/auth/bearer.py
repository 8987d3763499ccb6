"""Bearer token authentication (``--token``)."""

from __future__ import annotations

from hurl.auth.base import AuthPlugin, AuthResult
from hurl.exceptions import AuthError


class BearerAuthPlugin(AuthPlugin):
    """Send the token as ``Authorization: Bearer <token>``."""

    def authenticate(self, credential: str) -> AuthResult:
        token = credential.strip()
        if not token:
            raise AuthError("Bearer token cannot be empty")
        return AuthResult(headers={"Authorization": f"Bearer {token}"})
