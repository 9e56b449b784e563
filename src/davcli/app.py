"""Typer application and CLI entry point for davcli.

The CLI is a single command in the style of ``curl``: the operation is
chosen with ``-X <METHOD>`` and takes one or two paths::

    davcli --root https://dav.example.com/webdav -X ls /
    davcli -X put /backup/notes.txt ./notes.txt
    davcli -X mv /old.txt /new.txt

Endpoint and credentials come from flags or the environment (``ROOT``,
``USER``, ``PASSWORD``, ``TOKEN``); a ``.netrc`` entry for the endpoint's
host is used when no password is given.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.  Failed commands print their error to stdout and exit
with status 1; unexpected exceptions additionally leave a crash log under
the data directory.

See Also:
    :mod:`davcli.auth.manager`: How the authenticator is chosen.
    :mod:`davcli.commands`: The method-to-command table.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from davcli import __version__
from davcli.auth import resolve_authenticator
from davcli.client import WebDAVClient
from davcli.commands import get_command
from davcli.config import (
    ENV_PASSWORD,
    ENV_ROOT,
    ENV_TIMEOUT,
    ENV_TOKEN,
    ENV_USER,
    build_client_config,
    default_netrc_path,
)
from davcli.exceptions import DavcliError, InvalidUsageError
from davcli.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED
from davcli.output import OutputFormat, OutputManager, set_output

_METHOD_HELP = """Method:
LS <PATH> |
STAT <PATH> |
MKDIR <PATH> |
MKDIRALL <PATH> |
GET <PATH> [<FILE>] |
PUT <PATH> [<FILE>] |
MV <OLD> <NEW> |
CP <OLD> <NEW> |
DEL <PATH>"""


app = typer.Typer(
    name="davcli",
    help="Command-line client for WebDAV servers.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"davcli {__version__}")
        raise typer.Exit()


@app.command()
def main_command(
    paths: Optional[list[str]] = typer.Argument(
        None, help="Remote path, optionally followed by a local file or a destination."
    ),
    method: str = typer.Option("", "-X", "--method", help=_METHOD_HELP),
    root: Optional[str] = typer.Option(
        None, "--root", envvar=ENV_ROOT, help="WebDAV endpoint."
    ),
    user: Optional[str] = typer.Option(
        None, "--user", envvar=ENV_USER, help="User."
    ),
    password: Optional[str] = typer.Option(
        None, "--pw", envvar=ENV_PASSWORD, show_default=False, help="Password."
    ),
    token: Optional[str] = typer.Option(
        None, "--token", envvar=ENV_TOKEN, show_default=False, help="JWT bearer token."
    ),
    netrc_file: Optional[str] = typer.Option(
        None, "--netrc-file", help="Read login from netrc file [default: ~/.netrc]."
    ),
    timeout: float = typer.Option(
        30.0, "--timeout", envvar=ENV_TIMEOUT, help="Request timeout in seconds."
    ),
    insecure: bool = typer.Option(
        False, "--insecure", "-k", help="Do not verify TLS certificates."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Run one WebDAV operation against the root endpoint.

    Resolves the endpoint, picks the command for ``-X``, selects the
    authenticator (token, then password, then netrc, then anonymous) and
    runs the command.  Any :class:`~davcli.exceptions.DavcliError` or local
    I/O error is printed to stdout and turns into exit status 1.
    """
    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)

    try:
        config = build_client_config(root, timeout=timeout, insecure=insecure)
        if insecure:
            output.warning("TLS certificate verification is disabled")

        args = paths or []
        if not args or len(args) > 2:
            raise InvalidUsageError("Unsupported arguments")
        p0 = args[0]
        p1 = args[1] if len(args) > 1 else ""

        command = get_command(method)

        authenticator = resolve_authenticator(
            token=token,
            username=user,
            password=password,
            netrc_file=netrc_file or default_netrc_path(),
            root=config.root,
        )
        output.debug(f"Authenticating as '{authenticator.user}' ({authenticator.auth_type})")

        with WebDAVClient(config, authenticator=authenticator) as client:
            command(client, p0, p1)
    except DavcliError as exc:
        output.print_data(str(exc))
        raise typer.Exit(code=exc.exit_code)
    except OSError as exc:
        output.print_data(str(exc))
        raise typer.Exit(code=EXIT_GENERIC_FAILURE)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from davcli.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``davcli`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from davcli.output import error

        log_path = _write_crash_log(exc)
        error(f"Unexpected error: {exc}. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
