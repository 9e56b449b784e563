"""Tests for multistatus parsing."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from davcli.client.response import href_to_path, parse_multistatus
from davcli.exceptions import ServerError


def _response(href: str, props: str, status: str = "HTTP/1.1 200 OK") -> str:
    return (
        f"<D:response><D:href>{href}</D:href>"
        f"<D:propstat><D:prop>{props}</D:prop><D:status>{status}</D:status></D:propstat>"
        "</D:response>"
    )


def _multistatus(*responses: str) -> bytes:
    return (
        '<?xml version="1.0"?><D:multistatus xmlns:D="DAV:">'
        + "".join(responses)
        + "</D:multistatus>"
    ).encode()


class TestHrefToPath:
    @pytest.mark.parametrize(
        "href,base,expected",
        [
            ("/webdav/a.txt", "/webdav", "/a.txt"),
            ("/webdav/", "/webdav", "/"),
            ("/webdav", "/webdav", "/"),
            ("https://dav.example.com/webdav/dir/", "/webdav", "/dir/"),
            ("/webdav/my%20file.txt", "/webdav", "/my file.txt"),
            ("/a.txt", "", "/a.txt"),
            ("/webdavx/a.txt", "/webdav", "/webdavx/a.txt"),
        ],
    )
    def test_conversion(self, href: str, base: str, expected: str) -> None:
        assert href_to_path(href, base) == expected


class TestParseMultistatus:
    def test_file_properties(self) -> None:
        body = _multistatus(
            _response(
                "/webdav/a.txt",
                "<D:resourcetype/>"
                "<D:getcontentlength>42</D:getcontentlength>"
                "<D:getcontenttype>text/plain</D:getcontenttype>"
                "<D:getlastmodified>Wed, 01 Jan 2025 10:00:00 GMT</D:getlastmodified>"
                '<D:getetag>W/"v1"</D:getetag>',
            )
        )
        [info] = parse_multistatus(body, "/webdav")
        assert info.path == "/a.txt"
        assert info.name == "a.txt"
        assert info.is_dir is False
        assert info.size == 42
        assert info.content_type == "text/plain"
        assert info.modified == datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc)
        assert info.etag == "v1"

    def test_collection_has_zero_size(self) -> None:
        body = _multistatus(
            _response(
                "/webdav/dir/",
                "<D:resourcetype><D:collection/></D:resourcetype>"
                "<D:getcontentlength>4096</D:getcontentlength>",
            )
        )
        [info] = parse_multistatus(body, "/webdav")
        assert info.is_dir is True
        assert info.size == 0
        assert info.name == "dir"

    def test_failed_propstat_is_ignored(self) -> None:
        body = _multistatus(
            "<D:response><D:href>/a.txt</D:href>"
            "<D:propstat><D:prop><D:getcontentlength>7</D:getcontentlength></D:prop>"
            "<D:status>HTTP/1.1 200 OK</D:status></D:propstat>"
            "<D:propstat><D:prop><D:getcontenttype>x/y</D:getcontenttype></D:prop>"
            "<D:status>HTTP/1.1 404 Not Found</D:status></D:propstat>"
            "</D:response>"
        )
        [info] = parse_multistatus(body)
        assert info.size == 7
        assert info.content_type is None

    def test_unparsable_date_is_dropped(self) -> None:
        body = _multistatus(
            _response("/a.txt", "<D:getlastmodified>yesterday</D:getlastmodified>")
        )
        [info] = parse_multistatus(body)
        assert info.modified is None

    def test_response_without_href_is_skipped(self) -> None:
        body = _multistatus(
            "<D:response><D:propstat><D:prop/></D:propstat></D:response>",
            _response("/b.txt", ""),
        )
        assert [i.path for i in parse_multistatus(body)] == ["/b.txt"]

    def test_document_order(self) -> None:
        body = _multistatus(_response("/b", ""), _response("/a", ""))
        assert [i.name for i in parse_multistatus(body)] == ["b", "a"]

    def test_invalid_xml(self) -> None:
        with pytest.raises(ServerError, match="Invalid PROPFIND response"):
            parse_multistatus(b"<not-closed")

    def test_wrong_root_element(self) -> None:
        with pytest.raises(ServerError, match="unexpected root element"):
            parse_multistatus(b'<D:prop xmlns:D="DAV:"/>')
