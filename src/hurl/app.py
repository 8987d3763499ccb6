"""Typer application and CLI entry point for hurl.

The command line is ``hurl [OPTIONS] [METHOD] URL [PARAMETER]...``. This
module only wires the pieces together:

1. parameters are parsed by :func:`hurl.parser.parse_parameters`;
2. configuration is resolved by :func:`hurl.config.resolve_config`;
3. the request is assembled by :func:`hurl.request.build_request`;
4. it is sent by :class:`hurl.client.SyncClient`;
5. the response is printed by :func:`hurl.client.print_api_response`.

Every failure in those steps is a :class:`~hurl.exceptions.HurlError`; the
command prints it and exits with the error's ``exit_code``.
"""

from __future__ import annotations

import signal
import sys
from typing import Any, Optional

import typer

from hurl import __version__
from hurl.exceptions import HurlError, InvalidUsageError
from hurl.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED
from hurl.models import Method, RequestSpec


app = typer.Typer(
    name="hurl",
    help="A command line HTTP client.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Handle ``--version``: print ``hurl <version>`` and stop."""
    if value:
        typer.echo(f"hurl {__version__}")
        raise typer.Exit()


def split_command_line(args: list[str]) -> tuple[Optional[Method], str, list[str]]:
    """Split positional arguments into method, URL and parameter tokens.

    The first argument is taken as a method only if it names one
    (case-insensitively) and is followed by a URL.

    Raises:
        InvalidUsageError: If no URL was given.
    """
    if not args:
        raise InvalidUsageError("A URL is required")
    method = Method.parse(args[0])
    if method is None:
        return None, args[0], list(args[1:])
    if len(args) < 2:
        raise InvalidUsageError(f"{method.value} requires a URL")
    return method, args[1], list(args[2:])


def prepare_request(
    args: list[str],
    form: bool = False,
    auth: Optional[str] = None,
    token: Optional[str] = None,
    default_headers: Optional[dict[str, str]] = None,
) -> RequestSpec:
    """Turn the positional arguments and flags into a :class:`RequestSpec`.

    Args:
        args: ``[METHOD] URL [PARAMETER]...`` as given on the command line.
        form: Value of ``--form``.
        auth: Value of ``--auth``.
        token: Value of ``--token``.
        default_headers: Headers from the config file.

    Raises:
        HurlError: Any parse, auth or build failure.
    """
    from hurl.auth import resolve_auth
    from hurl.parser import parse_parameters
    from hurl.request import build_request

    method, url, tokens = split_command_line(args)
    parameters = parse_parameters(tokens)
    auth_result = resolve_auth(auth=auth, token=token)
    return build_request(
        url,
        parameters,
        method=method,
        form=form,
        base_headers={**(default_headers or {}), **auth_result.headers},
    )


@app.command(no_args_is_help=True)
def main_command(
    args: Optional[list[str]] = typer.Argument(
        None,
        metavar="[METHOD] URL [PARAMETER]...",
        help="Optional method (HEAD, GET, POST, PUT, PATCH, DELETE), the URL, "
        "then any number of key<separator>value parameters.",
        show_default=False,
    ),
    form: bool = typer.Option(
        False, "--form", "-f", help="Send the body as multipart/form-data."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress diagnostics. Overrides --verbose."
    ),
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="Verbose mode (-v, -vv)."
    ),
    auth: Optional[str] = typer.Option(
        None,
        "--auth",
        "-a",
        help="Basic auth as username:password. With only a username the "
        "password is prompted for; use 'username:' for no password.",
    ),
    token: Optional[str] = typer.Option(
        None, "--token", "-t", help="Bearer token sent in the Authorization header."
    ),
    secure: bool = typer.Option(
        False, "--secure", "-s", help="Use https for URLs given without a scheme."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print the request instead of sending it."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Never colour the output."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", min=0.001, help="Request timeout in seconds."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Send one HTTP request and print the response.

    Each PARAMETER is a key and a value joined by a separator that decides
    what it becomes:

    [bold]key:value[/bold]         header, e.g. X-API-TOKEN:abc123

    [bold]key==value[/bold]        query parameter, e.g. foo==bar becomes example.com?foo=bar

    [bold]key=value[/bold]         body field, e.g. foo=bar becomes {"foo":"bar"}

    [bold]key=@file[/bold]         body field read from a file

    [bold]key:=json[/bold]         raw JSON body field, e.g. foo:=[1,2,3] becomes {"foo":[1,2,3]}

    [bold]key:=@file[/bold]        raw JSON body field read from a file

    [bold]key@file[/bold]          file upload (requires --form)

    Without a METHOD, GET is used unless a body field or upload is given,
    in which case POST is used.
    """
    from hurl.client import SyncClient, print_api_response
    from hurl.config import resolve_config
    from hurl.output import OutputManager, error, set_output

    set_output(OutputManager(no_color=no_color, quiet=quiet, verbosity=verbose))

    try:
        config = resolve_config(cli_secure=secure, cli_timeout=timeout)
        spec = prepare_request(
            args or [],
            form=form,
            auth=auth,
            token=token,
            default_headers=config.default_headers,
        )
        with SyncClient(config, dry_run=dry_run) as client:
            response = client.send(spec)
        print_api_response(response)
    except HurlError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc


def _install_sigint_handler() -> None:
    """Exit with :data:`EXIT_INTERRUPTED` on Ctrl-C instead of a traceback."""

    def _on_sigint(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nInterrupted.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _on_sigint)


def main() -> None:
    """Console-script entry point.

    :class:`~hurl.exceptions.HurlError` is handled inside
    :func:`main_command`. Anything that escapes it is a bug: it is reported
    as ``Unexpected error`` and the process exits with
    :data:`EXIT_GENERIC_FAILURE`.
    """
    _install_sigint_handler()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nInterrupted.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from hurl.output import error

        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
