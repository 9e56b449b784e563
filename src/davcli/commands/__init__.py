"""Command dispatcher -- maps a method verb to a file command.

The verb given with ``-X`` is matched case-insensitively against the
aliases in :data:`COMMANDS`.  Unknown verbs are rejected by
:func:`get_command` before any network traffic happens.
"""

from __future__ import annotations

from typing import Callable

from davcli.client import WebDAVClient
from davcli.commands.files import (
    cmd_cp,
    cmd_get,
    cmd_ls,
    cmd_mkdir,
    cmd_mkdir_all,
    cmd_mv,
    cmd_put,
    cmd_rm,
    cmd_stat,
)
from davcli.exceptions import InvalidUsageError

Command = Callable[[WebDAVClient, str, str], None]

COMMANDS: dict[str, Command] = {
    "LS": cmd_ls,
    "LIST": cmd_ls,
    "PROPFIND": cmd_ls,
    "STAT": cmd_stat,
    "GET": cmd_get,
    "PULL": cmd_get,
    "READ": cmd_get,
    "DELETE": cmd_rm,
    "RM": cmd_rm,
    "DEL": cmd_rm,
    "MKCOL": cmd_mkdir,
    "MKDIR": cmd_mkdir,
    "MKCOLALL": cmd_mkdir_all,
    "MKDIRALL": cmd_mkdir_all,
    "MKDIRP": cmd_mkdir_all,
    "RENAME": cmd_mv,
    "MV": cmd_mv,
    "MOVE": cmd_mv,
    "COPY": cmd_cp,
    "CP": cmd_cp,
    "PUT": cmd_put,
    "PUSH": cmd_put,
    "WRITE": cmd_put,
}
"""Verb aliases, upper-case, to command functions."""


def get_command(method: str) -> Command:
    """Return the command registered for *method*.

    Args:
        method: The verb, in any case (``"ls"``, ``"MkDir"``, ...).

    Raises:
        InvalidUsageError: If the verb is not supported.  The message
            contains the verb exactly as given.
    """
    command = COMMANDS.get(method.strip().upper())
    if command is None:
        raise InvalidUsageError(f"Unsupported method: {method}")
    return command


__all__ = ["COMMANDS", "Command", "get_command"]
