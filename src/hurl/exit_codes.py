"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~hurl.exceptions.HurlError` subclass.
Shell scripts can inspect the exit code to tell a bad command line from an
unreachable server without parsing stderr.

Example::

    $ hurl example.com 'data:=@missing.json'
    $ echo $?
    3   # EXIT_FILE_READ_ERROR -- the referenced file could not be read
"""

EXIT_SUCCESS = 0
"""The request was sent and the response printed."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command line was malformed (bad parameter token, missing URL, ...)."""

EXIT_FILE_READ_ERROR = 3
"""A file referenced by a parameter could not be opened or read."""

EXIT_INVALID_JSON = 4
"""A raw JSON parameter value could not be parsed."""

EXIT_AUTH_FAILURE = 5
"""Credentials given on the command line were unusable."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_INTERRUPTED = 130
"""The user pressed Ctrl-C."""
