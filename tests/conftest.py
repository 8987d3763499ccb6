"""Shared test fixtures for hurl.

Provides reusable fixtures for isolating configuration, managing output
state, faking the network with :class:`httpx.MockTransport`, and running
the CLI. These fixtures are automatically discovered by pytest and
available to all test modules without explicit imports.
"""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Callable

import httpx
import pytest
from typer.testing import CliRunner

from hurl.output import OutputFormat, OutputManager, reset_output, set_output


# -- output state ------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Drop the installed OutputManager once each test finishes.

    A manager binds its rich consoles to whatever sys.stdout and sys.stderr
    were when it was built, which under CliRunner or capsys are streams
    that stop existing after the test.
    """
    yield
    reset_output()


# -- configuration -----------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep every test away from the real ~/.config/hurl.

    Points XDG_CONFIG_HOME at a subdirectory of tmp_path and clears all
    HURL_* environment variables so that tests never read real user
    config.

    Returns:
        The config directory (``<tmp>/config``); ``hurl/config.json``
        below it is the file hurl reads.
    """
    config_dir = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_dir))
    monkeypatch.setattr("hurl.config._is_xdg_platform", lambda: True)
    for var in ["HURL_CONFIG", "HURL_SECURE", "HURL_TIMEOUT", "HURL_VERIFY_SSL"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    return config_dir


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# -- network -----------------------------------------------------------------


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it receives.

    Request bodies are read before the handler runs so tests can inspect
    ``request.content`` for multipart uploads too.
    """

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            request.read()
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Factory for a :class:`RecordingTransport` answering with a fixed response."""

    def _make(
        status_code: int = 200,
        json: object | None = None,
        text: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> RecordingTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            if json is not None:
                return httpx.Response(status_code, json=json, headers=headers)
            return httpx.Response(status_code, text=text or "", headers=headers)

        return RecordingTransport(handler)

    return _make


@pytest.fixture
def patch_transport(monkeypatch: pytest.MonkeyPatch):
    """Route every SyncClient created by the CLI through *transport*."""

    def _patch(transport: httpx.BaseTransport) -> None:
        from hurl.client.sync_client import SyncClient

        monkeypatch.setattr(
            "hurl.client.SyncClient",
            functools.partial(SyncClient, transport=transport),
        )

    return _patch


# -- cli ---------------------------------------------------------------------


@pytest.fixture
def cli_runner() -> CliRunner:
    """Typer CLI test runner."""
    return CliRunner()
