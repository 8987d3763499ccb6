"""Terminal output for hurl.

Two streams, never mixed:

* **stdout** carries the HTTP response and nothing else, so
  ``hurl example.com | jq`` style pipelines only see the response.
* **stderr** carries diagnostics: dry-run listings, ``-v`` request details
  and errors.

Styling is applied only when stdout is a terminal and colour has not been
turned off (``--no-color``, ``NO_COLOR`` or ``TERM=dumb``). The verbosity
ladder is ``--quiet`` (errors only), default (plus info lines), ``-v``
(plus ``[debug]`` lines) and ``-vv`` (plus ``[trace]`` lines).

:class:`OutputManager` holds those settings. The CLI builds one per
invocation and installs it with :func:`set_output`; library code calls the
module-level :func:`debug`, :func:`trace` and friends, which forward to
whichever manager is installed.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.text import Text

if TYPE_CHECKING:
    from hurl.models import ResponseView


class OutputFormat(str, Enum):
    """How stdout is rendered. ``AUTO`` picks one of the other two."""

    AUTO = "auto"
    PLAIN = "plain"
    RICH = "rich"


# label -> (minimum verbosity, rich style)
_DIAGNOSTIC_LEVELS = {
    "debug": (1, "dim"),
    "trace": (2, "dim italic"),
}


class OutputManager:
    """Writes responses to stdout and diagnostics to stderr.

    Args:
        format: Rendering for stdout. ``AUTO`` becomes ``RICH`` on a
            colour-capable terminal and ``PLAIN`` everywhere else.
        no_color: Turn off styling on both streams.
        quiet: Only errors reach stderr. Takes precedence over *verbosity*.
        verbosity: How many times ``-v`` was given.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbosity: int = 0,
    ) -> None:
        self._plain_text = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbosity = 0 if quiet else max(verbosity, 0)
        self._format = _resolve_format(format, self._plain_text)

        styled = self._format == OutputFormat.RICH
        self._out = Console(
            file=sys.stdout,
            no_color=self._plain_text,
            force_terminal=styled,
            highlight=False,
        )
        self._err = Console(
            file=sys.stderr,
            no_color=self._plain_text,
            stderr=True,
            highlight=False,
        )

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def verbosity(self) -> int:
        """Verbosity in effect; quiet mode forces it to ``0``."""
        return self._verbosity

    # -- stdout --------------------------------------------------------- #

    def print_data(self, text: str) -> None:
        """Write *text* and a newline to stdout exactly as given."""
        sys.stdout.write(f"{text}\n")
        sys.stdout.flush()

    def print_response(self, view: ResponseView) -> None:
        """Write *view* to stdout.

        Plain mode writes the head, a blank line and the body, which is the
        same text :func:`hurl.client.response.format_response` returns.
        Rich mode prints the same characters with the status line and
        header names coloured and a JSON body highlighted. Nothing is
        wrapped at the terminal width or read as markup or emoji codes, and
        a non-JSON body bypasses rich altogether.
        """
        from hurl.client.response import render_body, render_head

        body = render_body(view)
        if self._format != OutputFormat.RICH:
            for chunk in (render_head(view), "", body):
                self.print_data(chunk)
            return

        out = self._out
        head = Text(view.status_line, style="bold blue")
        for line in view.header_lines:
            name, _, value = line.partition(": ")
            head.append("\n")
            head.append(name, style="cyan")
            head.append(f": {value}")
        out.print(head, soft_wrap=True)
        out.print()
        if view.json_body is None:
            self.print_data(body)
        else:
            highlighted = Syntax(body, "json", theme="monokai").highlight(body)
            out.print(highlighted, soft_wrap=True)

    # -- stderr --------------------------------------------------------- #

    def info(self, message: str) -> None:
        """Plain status text, hidden by ``--quiet``."""
        if not self._quiet:
            self._emit(message, prefix="", style=None)

    def error(self, message: str) -> None:
        """``Error:``-prefixed text. Printed even with ``--quiet``."""
        self._emit(message, prefix="Error:", style="bold red")

    def debug(self, message: str) -> None:
        """Request-level detail, shown with ``-v``."""
        self._diagnostic("debug", message)

    def trace(self, message: str) -> None:
        """Parser and encoder detail, shown with ``-vv``."""
        self._diagnostic("trace", message)

    def _diagnostic(self, label: str, message: str) -> None:
        threshold, style = _DIAGNOSTIC_LEVELS[label]
        if self._verbosity >= threshold:
            self._emit(message, prefix=f"[{label}]", style=style, whole_line=True)

    def _emit(
        self,
        message: str,
        prefix: str,
        style: Optional[str],
        whole_line: bool = False,
    ) -> None:
        text = f"{prefix} {message}" if prefix else message
        if self._plain_text or style is None:
            sys.stderr.write(f"{text}\n")
            sys.stderr.flush()
        elif whole_line:
            self._err.print(escape(text), style=style)
        else:
            self._err.print(f"[{style}]{escape(prefix)}[/{style}] {escape(message)}")


def _resolve_format(requested: OutputFormat, plain_text: bool) -> OutputFormat:
    if requested != OutputFormat.AUTO:
        return requested
    if _is_tty() and not plain_text:
        return OutputFormat.RICH
    return OutputFormat.PLAIN


def _is_tty() -> bool:
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set to anything or ``TERM`` is ``dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# -- installed manager -------------------------------------------------- #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager. Tests call this between cases."""
    global _output
    _output = None


def print_response(view: ResponseView) -> None:
    get_output().print_response(view)


def info(message: str) -> None:
    get_output().info(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)


def trace(message: str) -> None:
    get_output().trace(message)
