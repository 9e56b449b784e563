"""Tests for the command dispatcher and the file commands."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from davcli.commands import COMMANDS, get_command
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
from davcli.exceptions import DavcliError, InvalidUsageError, NotFoundError
from davcli.output import OutputFormat, OutputManager, set_output

LISTING = b"""<?xml version="1.0"?>
<D:multistatus xmlns:D="DAV:">
  <D:response>
    <D:href>/webdav/docs/</D:href>
    <D:propstat><D:prop><D:resourcetype><D:collection/></D:resourcetype></D:prop>
    <D:status>HTTP/1.1 200 OK</D:status></D:propstat>
  </D:response>
  <D:response>
    <D:href>/webdav/docs/a.txt</D:href>
    <D:propstat><D:prop><D:resourcetype/><D:getcontentlength>3</D:getcontentlength>
    <D:getetag>"e1"</D:getetag></D:prop>
    <D:status>HTTP/1.1 200 OK</D:status></D:propstat>
  </D:response>
  <D:response>
    <D:href>/webdav/docs/sub/</D:href>
    <D:propstat><D:prop><D:resourcetype><D:collection/></D:resourcetype></D:prop>
    <D:status>HTTP/1.1 200 OK</D:status></D:propstat>
  </D:response>
</D:multistatus>
"""


def _handler(status: int, content: bytes = b"", seen: list | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        request.read()
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, content=content)

    return handler


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


class TestGetCommand:
    @pytest.mark.parametrize(
        "method,expected",
        [
            ("LS", cmd_ls),
            ("ls", cmd_ls),
            ("propfind", cmd_ls),
            ("Stat", cmd_stat),
            ("get", cmd_get),
            ("pull", cmd_get),
            ("del", cmd_rm),
            ("delete", cmd_rm),
            ("mkcol", cmd_mkdir),
            ("mkdirp", cmd_mkdir_all),
            ("mv", cmd_mv),
            ("rename", cmd_mv),
            ("cp", cmd_cp),
            ("push", cmd_put),
            ("write", cmd_put),
        ],
    )
    def test_aliases(self, method: str, expected) -> None:
        assert get_command(method) is expected

    def test_every_alias_is_upper_case(self) -> None:
        assert all(key == key.upper() for key in COMMANDS)

    def test_unknown_method(self) -> None:
        with pytest.raises(InvalidUsageError) as exc_info:
            get_command("FROB")
        assert "FROB" in str(exc_info.value)

    def test_unknown_method_keeps_case(self) -> None:
        with pytest.raises(InvalidUsageError, match="frob"):
            get_command("frob")

    def test_empty_method(self) -> None:
        with pytest.raises(InvalidUsageError):
            get_command("")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class TestListing:
    def test_ls(self, make_client, quiet_output, capsys) -> None:
        with make_client(_handler(207, LISTING)) as client:
            cmd_ls(client, "/docs", "")
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "ReadDir: '/docs' entries: 2 "
        assert lines[1].startswith("File: '/docs/a.txt' SIZE: 3")
        assert "ETAG: e1" in lines[1]
        assert lines[2] == "Dir : '/docs/sub/' - 'sub'"

    def test_ls_json(self, make_client, capsys) -> None:
        set_output(OutputManager(format=OutputFormat.JSON, no_color=True))
        with make_client(_handler(207, LISTING)) as client:
            cmd_ls(client, "/docs", "")
        data = json.loads(capsys.readouterr().out)
        assert [d["name"] for d in data] == ["a.txt", "sub"]
        assert data[1]["is_dir"] is True

    def test_ls_rich_table(self, make_client, capsys) -> None:
        set_output(OutputManager(format=OutputFormat.RICH, no_color=True))
        with make_client(_handler(207, LISTING)) as client:
            cmd_ls(client, "/docs", "")
        out = capsys.readouterr().out
        assert "Name" in out
        assert "a.txt" in out
        assert "sub/" in out
        assert "ReadDir" not in out

    def test_stat(self, make_client, quiet_output, capsys) -> None:
        with make_client(_handler(207, LISTING)) as client:
            cmd_stat(client, "/docs", "")
        assert capsys.readouterr().out.startswith("Dir : '/docs/'")

    def test_ls_not_found(self, make_client, quiet_output) -> None:
        with make_client(_handler(404)) as client:
            with pytest.raises(NotFoundError):
                cmd_ls(client, "/missing", "")


class TestTransfer:
    def test_get_explicit_target(self, make_client, quiet_output, isolated_env, capsys) -> None:
        target = isolated_env / "out" / "copy.txt"
        with make_client(_handler(200, b"hello")) as client:
            cmd_get(client, "/docs/a.txt", str(target))
        assert target.read_bytes() == b"hello"
        assert capsys.readouterr().out.strip() == f"Written 5 bytes to: {target}"

    def test_get_default_target(self, make_client, quiet_output, isolated_env: Path) -> None:
        with make_client(_handler(200, b"hello")) as client:
            cmd_get(client, "/docs/a.txt", "")
        assert (isolated_env / "docs" / "a.txt").read_bytes() == b"hello"

    def test_get_failure_writes_nothing(self, make_client, quiet_output, isolated_env: Path) -> None:
        with make_client(_handler(404)) as client:
            with pytest.raises(NotFoundError):
                cmd_get(client, "/docs/a.txt", "")
        assert not (isolated_env / "docs").exists()

    def test_put(self, make_client, quiet_output, isolated_env: Path, capsys) -> None:
        source = isolated_env / "notes.txt"
        source.write_bytes(b"notes")
        seen: list[httpx.Request] = []
        with make_client(_handler(201, seen=seen)) as client:
            cmd_put(client, "/backup/notes.txt", str(source))
        assert seen[0].method == "PUT"
        assert seen[0].content == b"notes"
        assert capsys.readouterr().out.strip() == f"Put: {source} -> /backup/notes.txt"

    def test_put_directory_fails(self, make_client, quiet_output, isolated_env: Path) -> None:
        seen: list[httpx.Request] = []
        with make_client(_handler(201, seen=seen)) as client:
            with pytest.raises(DavcliError, match="is a directory"):
                cmd_put(client, "/backup", str(isolated_env))
        assert seen == []

    def test_put_missing_file(self, make_client, quiet_output, isolated_env: Path) -> None:
        with make_client(_handler(201)) as client:
            with pytest.raises(OSError):
                cmd_put(client, "/backup/missing.txt", "")


class TestMutations:
    @pytest.mark.parametrize(
        "command,status,method,expected",
        [
            (cmd_rm, 204, "DELETE", "Remove: /a"),
            (cmd_mkdir, 201, "MKCOL", "Mkdir: /a"),
            (cmd_mkdir_all, 201, "MKCOL", "MkdirAll: /a"),
        ],
    )
    def test_single_path(self, make_client, quiet_output, capsys, command, status, method, expected) -> None:
        seen: list[httpx.Request] = []
        with make_client(_handler(status, seen=seen)) as client:
            command(client, "/a", "")
        assert seen[0].method == method
        assert capsys.readouterr().out.strip() == expected

    @pytest.mark.parametrize(
        "command,method,expected",
        [
            (cmd_mv, "MOVE", "Rename: /a -> /b"),
            (cmd_cp, "COPY", "Copy: /a -> /b"),
        ],
    )
    def test_two_paths(self, make_client, quiet_output, capsys, command, method, expected) -> None:
        seen: list[httpx.Request] = []
        with make_client(_handler(201, seen=seen)) as client:
            command(client, "/a", "/b")
        assert seen[0].method == method
        assert seen[0].headers["Overwrite"] == "T"
        assert capsys.readouterr().out.strip() == expected
