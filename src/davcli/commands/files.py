"""File commands -- one function per supported method.

Every command takes the open :class:`~davcli.client.WebDAVClient` and the
two positional CLI arguments (the second may be empty), performs one file
operation and prints a one-line confirmation to stdout.

Local paths default to the remote path below the current directory, so
``davcli -X get /docs/a.txt`` writes ``./docs/a.txt``.
"""

from __future__ import annotations

import os
from pathlib import Path

from davcli.client import WebDAVClient
from davcli.exceptions import DavcliError
from davcli.output import OutputFormat, get_output


def _local_default(remote: str, local: str) -> str:
    if local:
        return local
    return os.path.join(".", remote.lstrip("/"))


def cmd_ls(client: WebDAVClient, p0: str, _: str) -> None:
    """List a collection."""
    entries = client.read_dir(p0)
    output = get_output()
    if output.format == OutputFormat.JSON:
        output.print_json([e.model_dump(mode="json") for e in entries])
        return
    if output.format == OutputFormat.RICH:
        rows = [
            [
                e.name + ("/" if e.is_dir else ""),
                "" if e.is_dir else str(e.size),
                e.modified.isoformat() if e.modified else "",
                e.etag or "",
            ]
            for e in entries
        ]
        output.print_table(["Name", "Size", "Modified", "ETag"], rows, title=p0)
        return
    output.print_data(f"ReadDir: '{p0}' entries: {len(entries)} ")
    for entry in entries:
        output.print_data(str(entry))


def cmd_stat(client: WebDAVClient, p0: str, _: str) -> None:
    """Show the metadata of one resource."""
    entry = client.stat(p0)
    output = get_output()
    if output.format == OutputFormat.JSON:
        output.print_json(entry.model_dump(mode="json"))
    else:
        output.print_data(str(entry))


def cmd_get(client: WebDAVClient, p0: str, p1: str) -> None:
    """Download *p0* to the local file *p1*.

    Nothing is written locally unless the server answers with content.
    """
    target = Path(_local_default(p0, p1))
    chunks = client.read_stream(p0)
    first = next(chunks, b"")

    target.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    with open(target, "wb") as f:
        f.write(first)
        written += len(first)
        for chunk in chunks:
            f.write(chunk)
            written += len(chunk)
    get_output().print_data(f"Written {written} bytes to: {target}")


def cmd_put(client: WebDAVClient, p0: str, p1: str) -> None:
    """Upload the local file *p1* to *p0*."""
    source = Path(_local_default(p0, p1))
    if source.is_dir():
        raise DavcliError(f"Open {source}: Path: '{source}' is a directory")
    with open(source, "rb") as stream:
        client.write_stream(p0, stream)
    get_output().print_data(f"Put: {source} -> {p0}")


def cmd_rm(client: WebDAVClient, p0: str, _: str) -> None:
    """Delete a file or collection."""
    client.remove(p0)
    get_output().print_data(f"Remove: {p0}")


def cmd_mkdir(client: WebDAVClient, p0: str, _: str) -> None:
    """Create one collection."""
    client.mkdir(p0)
    get_output().print_data(f"Mkdir: {p0}")


def cmd_mkdir_all(client: WebDAVClient, p0: str, _: str) -> None:
    """Create a collection and its missing parents."""
    client.mkdir_all(p0)
    get_output().print_data(f"MkdirAll: {p0}")


def cmd_mv(client: WebDAVClient, p0: str, p1: str) -> None:
    """Rename *p0* to *p1*, overwriting."""
    client.rename(p0, p1, overwrite=True)
    get_output().print_data(f"Rename: {p0} -> {p1}")


def cmd_cp(client: WebDAVClient, p0: str, p1: str) -> None:
    """Copy *p0* to *p1*, overwriting."""
    client.copy(p0, p1, overwrite=True)
    get_output().print_data(f"Copy: {p0} -> {p1}")
