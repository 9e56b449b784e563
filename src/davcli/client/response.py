"""WebDAV ``multistatus`` parsing.

``PROPFIND`` answers with a ``207 Multi-Status`` XML document holding one
``<D:response>`` per resource.  :func:`parse_multistatus` turns that
document into :class:`~davcli.models.FileInfo` objects with paths relative
to the client's root endpoint.

Only the properties the CLI displays are read: ``resourcetype``,
``getcontentlength``, ``getcontenttype``, ``getlastmodified`` and
``getetag``.  Unknown properties and namespaces are ignored.
"""

from __future__ import annotations

import posixpath
import xml.etree.ElementTree as ElementTree
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Optional
from urllib.parse import unquote, urlsplit

from davcli.exceptions import ServerError
from davcli.models import FileInfo

_DAV = "{DAV:}"

PROPFIND_BODY = (
    '<?xml version="1.0" encoding="utf-8"?>'
    '<d:propfind xmlns:d="DAV:"><d:prop>'
    "<d:displayname/><d:resourcetype/><d:getcontentlength/>"
    "<d:getcontenttype/><d:getetag/><d:getlastmodified/>"
    "</d:prop></d:propfind>"
)
"""Request body asking for the properties :func:`parse_multistatus` reads."""


def _text(node: Optional[ElementTree.Element]) -> Optional[str]:
    if node is None or node.text is None:
        return None
    value = node.text.strip()
    return value or None


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None


def href_to_path(href: str, base_path: str) -> str:
    """Convert an ``<D:href>`` to a path relative to the root endpoint.

    Servers send either an absolute URL or an absolute path, usually
    percent-encoded.  The root endpoint's own path prefix is removed.

    Args:
        href: Raw href text.
        base_path: Path component of the root endpoint, without trailing
            slash (``""`` for a root at ``/``).

    Returns:
        The decoded path, always starting with ``/``.  A trailing slash is
        kept if the server sent one.
    """
    path = unquote(urlsplit(href).path)
    if base_path and (path == base_path or path.startswith(base_path + "/")):
        path = path[len(base_path):]
    if not path.startswith("/"):
        path = "/" + path
    return path


def _propstat_ok(propstat: ElementTree.Element) -> bool:
    status = _text(propstat.find(f"{_DAV}status"))
    if status is None:
        return True
    parts = status.split()
    return len(parts) >= 2 and parts[1].startswith("2")


def _parse_response(node: ElementTree.Element, base_path: str) -> Optional[FileInfo]:
    href = _text(node.find(f"{_DAV}href"))
    if href is None:
        return None
    path = href_to_path(href, base_path)

    info: dict[str, object] = {}
    is_dir = False
    for propstat in node.findall(f"{_DAV}propstat"):
        if not _propstat_ok(propstat):
            continue
        prop = propstat.find(f"{_DAV}prop")
        if prop is None:
            continue
        resourcetype = prop.find(f"{_DAV}resourcetype")
        if resourcetype is not None and resourcetype.find(f"{_DAV}collection") is not None:
            is_dir = True
        length = _text(prop.find(f"{_DAV}getcontentlength"))
        if length is not None and length.isdigit():
            info["size"] = int(length)
        content_type = _text(prop.find(f"{_DAV}getcontenttype"))
        if content_type is not None:
            info["content_type"] = content_type
        modified = _parse_date(_text(prop.find(f"{_DAV}getlastmodified")))
        if modified is not None:
            info["modified"] = modified
        etag = _text(prop.find(f"{_DAV}getetag"))
        if etag is not None:
            info["etag"] = etag.removeprefix("W/").strip('"')

    name = posixpath.basename(path.rstrip("/"))
    if is_dir:
        info["size"] = 0
    return FileInfo(path=path, name=name, is_dir=is_dir, **info)


def parse_multistatus(content: bytes, base_path: str = "") -> list[FileInfo]:
    """Parse a ``207 Multi-Status`` body into file metadata.

    Args:
        content: Raw response body.
        base_path: Path component of the root endpoint, stripped from every
            href.

    Returns:
        One :class:`~davcli.models.FileInfo` per ``<D:response>``, in
        document order.

    Raises:
        ServerError: If the body is not well-formed XML or is not a
            ``multistatus`` document.
    """
    try:
        root = ElementTree.fromstring(content)
    except ElementTree.ParseError as exc:
        raise ServerError(f"Invalid PROPFIND response: {exc}") from exc
    if root.tag != f"{_DAV}multistatus":
        raise ServerError(f"Invalid PROPFIND response: unexpected root element {root.tag}")

    entries: list[FileInfo] = []
    for node in root.findall(f"{_DAV}response"):
        entry = _parse_response(node, base_path)
        if entry is not None:
            entries.append(entry)
    return entries
