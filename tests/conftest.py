"""Shared test fixtures for davcli.

Provides fixtures for isolating the environment, managing global output
state, building clients over :class:`httpx.MockTransport`, and running the
CLI.  These fixtures are automatically discovered by pytest.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import httpx
import pytest

from davcli.auth.base import Authenticator
from davcli.client import WebDAVClient
from davcli.models import ClientConfig
from davcli.output import OutputFormat, OutputManager, reset_output, set_output

ROOT = "https://dav.example.com/webdav"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time; CliRunner swaps those streams per invocation.
    """
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, plain-format OutputManager."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate the process environment to a temporary directory.

    Clears the credential environment variables, points HOME and
    XDG_DATA_HOME into tmp_path and changes the working directory there.
    """
    for var in ["ROOT", "USER", "PASSWORD", "TOKEN", "DAVCLI_TIMEOUT", "NO_COLOR"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    (tmp_path / "home").mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def netrc_file(tmp_path: Path) -> Callable[[str], str]:
    """Return a factory writing a netrc file and returning its path."""

    def _write(content: str) -> str:
        path = tmp_path / "netrc"
        path.write_text(content)
        path.chmod(0o600)
        return str(path)

    return _write


# ---------------------------------------------------------------------------
# Client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_client() -> Callable[..., WebDAVClient]:
    """Return a factory building a WebDAVClient over a MockTransport handler."""

    def _make(
        handler: Callable[[httpx.Request], httpx.Response],
        authenticator: Authenticator | None = None,
        root: str = ROOT,
    ) -> WebDAVClient:
        return WebDAVClient(
            ClientConfig(root=root),
            authenticator=authenticator,
            transport=httpx.MockTransport(handler),
        )

    return _make


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
