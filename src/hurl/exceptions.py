"""Exception hierarchy for hurl.

All exceptions inherit from :class:`HurlError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`hurl.exit_codes`.
The parser, request builder and client only ever *raise* these; the
top-level handler in :func:`hurl.app.main` catches ``HurlError`` and exits
with the appropriate code.

Subclass hierarchy::

    HurlError (exit 1)
    +-- InvalidUsageError            (exit 2)
    |   +-- MalformedParameterError  (exit 2)
    |   +-- FileUploadRequiresFormError (exit 2)
    +-- FileReadError                (exit 3)
    +-- InvalidJsonError             (exit 4)
    +-- AuthError                    (exit 5)
    +-- TransportError               (exit 6)
    +-- ConfigError                  (exit 1)
"""

from __future__ import annotations

from hurl.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_FILE_READ_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_JSON,
    EXIT_INVALID_USAGE,
)


class HurlError(Exception):
    """Base exception for all hurl errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(HurlError):
    """Raised for invalid CLI arguments (missing URL, conflicting flags)."""

    exit_code = EXIT_INVALID_USAGE


class MalformedParameterError(InvalidUsageError):
    """Raised when a parameter token has no separator or an empty key.

    Args:
        argument: The offending command-line token, verbatim.
        reason: Why the token was rejected.
    """

    def __init__(self, argument: str, reason: str):
        super().__init__(f"Malformed parameter '{argument}': {reason}")
        self.argument = argument
        self.reason = reason


class FileUploadRequiresFormError(InvalidUsageError):
    """Raised when a ``key@filename`` upload is used without ``--form``."""

    def __init__(self, key: str, filename: str):
        super().__init__(
            f"File upload '{key}@{filename}' requires form mode (use --form)"
        )
        self.key = key
        self.filename = filename


class FileReadError(HurlError):
    """Raised when a file named by a parameter cannot be opened or read.

    Args:
        path: The path as given on the command line.
        detail: The underlying OS error message.
    """

    exit_code = EXIT_FILE_READ_ERROR

    def __init__(self, path: str, detail: str):
        super().__init__(f"Cannot read file '{path}': {detail}")
        self.path = path
        self.detail = detail


class InvalidJsonError(HurlError):
    """Raised when a raw JSON parameter (``:=`` or ``:=@``) fails to parse.

    Args:
        key: The parameter key whose value was rejected.
        detail: The decoder's message, including line and column.
    """

    exit_code = EXIT_INVALID_JSON

    def __init__(self, key: str, detail: str):
        super().__init__(f"Invalid JSON for '{key}': {detail}")
        self.key = key
        self.detail = detail


class AuthError(HurlError):
    """Raised when ``--auth`` / ``--token`` credentials cannot be used."""

    exit_code = EXIT_AUTH_FAILURE


class TransportError(HurlError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused)."""

    exit_code = EXIT_CONNECTION_ERROR


class ConfigError(HurlError):
    """Raised for configuration problems (invalid JSON, bad environment values)."""

    exit_code = EXIT_GENERIC_FAILURE
