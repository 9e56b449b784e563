"""Synchronous WebDAV client with pluggable, upgradable authentication.

This module provides :class:`WebDAVClient`, the blocking client behind every
davcli command.  It wraps :class:`httpx.Client` and layers on:

- **Auth decoration** -- the active
  :class:`~davcli.auth.base.Authenticator` sets the ``Authorization``
  header of every outgoing request just before it is sent.
- **Challenge handling** -- a username/password session that is answered
  with ``401`` switches to Digest or Basic according to the
  ``WWW-Authenticate`` header and retries once.  A Digest session whose
  nonce went stale refreshes the challenge and retries once.  A second 401
  for the same request raises :class:`~davcli.exceptions.AuthError`.
- **File operations** -- ``PROPFIND``, ``GET``, ``PUT``, ``DELETE``,
  ``MKCOL``, ``MOVE`` and ``COPY`` with the status handling WebDAV servers
  expect (missing parents on 409, tolerated 404 on delete, ...).
- **Error mapping** -- HTTP and network failures become typed
  :class:`~davcli.exceptions.DavcliError` subclasses.

The authenticator slot is guarded by a lock: decorating a request and
replacing the authenticator never interleave.
"""

from __future__ import annotations

import posixpath
import threading
from collections.abc import Iterator
from typing import IO, Any, Optional, Union
from urllib.parse import quote, urlsplit

import httpx

from davcli.auth.base import Authenticator
from davcli.auth.manager import is_negotiable
from davcli.client.response import PROPFIND_BODY, parse_multistatus
from davcli.exceptions import (
    AuthError,
    ConnectionError_,
    DavcliError,
    NotFoundError,
    ServerError,
)
from davcli.models import ClientConfig, FileInfo
from davcli.output import get_output
from davcli.plugins.basic import BasicAuth
from davcli.plugins.digest import (
    DigestAuth,
    is_digest_challenge,
    parse_digest_challenge,
)
from davcli.plugins.none import NoAuth

Content = Union[bytes, IO[bytes], None]


def _clean_path(path: str) -> str:
    """Normalise a user path to ``/a/b`` form, keeping a trailing slash."""
    trailing = path.endswith("/")
    cleaned = posixpath.normpath("/" + path.strip().lstrip("/"))
    if trailing and cleaned != "/":
        cleaned += "/"
    return cleaned


def _as_collection(path: str) -> str:
    cleaned = _clean_path(path)
    return cleaned if cleaned.endswith("/") else cleaned + "/"


def _parent(path: str) -> str:
    return posixpath.dirname(_clean_path(path).rstrip("/")) or "/"


class WebDAVClient:
    """Synchronous WebDAV client.

    Must be used as a context manager so that the underlying
    :class:`httpx.Client` is opened and closed.

    Args:
        config: Root endpoint and transport settings.
        authenticator: The authenticator to start with, usually from
            :func:`~davcli.auth.manager.resolve_authenticator`.  Defaults to
            :class:`~davcli.plugins.none.NoAuth`.
        transport: Optional :mod:`httpx` transport, e.g. a
            :class:`httpx.MockTransport` in tests.

    Example::

        with WebDAVClient(config, authenticator=auth) as client:
            for entry in client.read_dir("/photos"):
                print(entry)
    """

    def __init__(
        self,
        config: ClientConfig,
        authenticator: Optional[Authenticator] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: Optional[httpx.Client] = None
        self._auth_lock = threading.Lock()
        self._authenticator: Authenticator = authenticator or NoAuth()
        self._negotiable = is_negotiable(self._authenticator)
        self._base_path = urlsplit(config.root).path.rstrip("/")

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> WebDAVClient:
        kwargs: dict[str, Any] = {
            "timeout": self._config.timeout,
            "verify": self._config.verify_ssl,
            "follow_redirects": True,
        }
        if self._transport is not None:
            kwargs["transport"] = self._transport
        self._client = httpx.Client(**kwargs)
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Authenticator slot
    # ------------------------------------------------------------------ #

    @property
    def authenticator(self) -> Authenticator:
        """The authenticator applied to the next request."""
        with self._auth_lock:
            return self._authenticator

    def set_authenticator(self, authenticator: Authenticator) -> None:
        """Replace the active authenticator.

        The new authenticator is negotiable again only if it is a
        username/password (Basic) one.
        """
        with self._auth_lock:
            self._authenticator = authenticator
            self._negotiable = is_negotiable(authenticator)

    # ------------------------------------------------------------------ #
    # Core request
    # ------------------------------------------------------------------ #

    def url_for(self, path: str) -> str:
        """Return the absolute URL of *path* below the root endpoint."""
        return self._config.root + quote(_clean_path(path), safe="/")

    def request(
        self,
        method: str,
        path: str,
        headers: Optional[dict[str, str]] = None,
        content: Content = None,
        stream: bool = False,
    ) -> httpx.Response:
        """Send one logical request, answering at most one auth challenge.

        The active authenticator decorates the request.  On a 401 the
        client may switch scheme (or refresh a Digest nonce) and send the
        request a second time; it never sends it a third time.

        Args:
            method: HTTP or WebDAV method.
            path: Path below the root endpoint.
            headers: Extra request headers.
            content: Request body.  Seekable file objects are rewound
                before a retry.
            stream: Leave the response body unread (caller must close it).

        Returns:
            The response.  Any status other than 401 is returned as is.

        Raises:
            AuthError: If the request is still answered with 401 after the
                retry, or the challenge cannot be answered.
            ConnectionError_: On network or timeout errors.
        """
        start = _tell(content)
        url = self.url_for(path)

        response = self._send(method, url, headers, content, stream)
        if response.status_code != 401:
            return response
        response.close()

        retryable = isinstance(content, (bytes, type(None))) or start is not None
        if not retryable or not self._answer_challenge(response):
            raise self._auth_failure(method, path, response)

        if start is not None:
            content.seek(start)  # type: ignore[union-attr]
        response = self._send(method, url, headers, content, stream)
        if response.status_code == 401:
            response.close()
            raise self._auth_failure(method, path, response)
        return response

    def _send(
        self,
        method: str,
        url: str,
        headers: Optional[dict[str, str]],
        content: Content,
        stream: bool,
    ) -> httpx.Response:
        assert self._client is not None, "Client not initialised -- use as context manager"

        request = self._client.build_request(method, url, headers=headers, content=content)
        target = request.url.raw_path.decode("ascii")
        with self._auth_lock:
            authenticator = self._authenticator
            authenticator.authorize(request, method, target)

        get_output().debug(f"{method} {url} ({authenticator.auth_type})")
        try:
            response = self._client.send(request, stream=stream)
        except httpx.TransportError as exc:
            raise ConnectionError_(f"{method} {url}: {exc}") from exc
        get_output().debug(f"{method} {url} -> {response.status_code}")
        return response

    def _answer_challenge(self, response: httpx.Response) -> bool:
        """React to a 401; return True if the request should be retried."""
        output = get_output()
        values = response.headers.get_list("www-authenticate")
        challenge = next(
            (c for c in map(parse_digest_challenge, values) if c is not None),
            None,
        )

        with self._auth_lock:
            current = self._authenticator

            if isinstance(current, DigestAuth):
                if challenge is None:
                    return False
                output.debug(
                    f"Refreshing digest challenge (stale={challenge.stale})"
                )
                current.challenge(challenge)
                return True

            if not self._negotiable:
                return False

            upgraded: Authenticator
            if challenge is not None:
                upgraded = DigestAuth(current.user, current.password, challenge)
            else:
                if any(is_digest_challenge(v) for v in values):
                    output.debug("Malformed digest challenge, falling back to basic")
                upgraded = BasicAuth(current.user, current.password)
            output.debug(f"Server challenge: switching to {upgraded.auth_type}")
            self._authenticator = upgraded
            self._negotiable = False
            return True

    def _auth_failure(self, method: str, path: str, response: httpx.Response) -> AuthError:
        reason = response.reason_phrase or "Unauthorized"
        return AuthError(
            f"{method} {path}: HTTP {response.status_code} {reason}",
            status_code=response.status_code,
        )

    # ------------------------------------------------------------------ #
    # File operations
    # ------------------------------------------------------------------ #

    def _propfind(self, path: str, depth: str) -> list[FileInfo]:
        response = self.request(
            "PROPFIND",
            path,
            headers={
                "Depth": depth,
                "Content-Type": "application/xml;charset=UTF-8",
                "Accept": "application/xml,text/xml",
            },
            content=PROPFIND_BODY.encode("utf-8"),
        )
        if response.status_code != 207:
            self._raise_for_status(response, "PROPFIND", path)
        return parse_multistatus(response.content, self._base_path)

    def read_dir(self, path: str) -> list[FileInfo]:
        """List the members of a collection (``PROPFIND Depth: 1``).

        The collection itself is not part of the result.

        Raises:
            NotFoundError: If the collection does not exist.
        """
        target = _as_collection(path)
        entries = self._propfind(target, "1")
        own = target.rstrip("/") or "/"
        return [e for e in entries if (e.path.rstrip("/") or "/") != own]

    def stat(self, path: str) -> FileInfo:
        """Return the metadata of a single resource (``PROPFIND Depth: 0``).

        Raises:
            NotFoundError: If the resource does not exist.
        """
        entries = self._propfind(_clean_path(path), "0")
        if not entries:
            raise NotFoundError(f"STAT {path}: empty multistatus response", status_code=207)
        return entries[0]

    def read(self, path: str) -> bytes:
        """Download a file into memory."""
        response = self.request("GET", _clean_path(path))
        if response.status_code != 200:
            self._raise_for_status(response, "GET", path)
        return response.content

    def read_stream(self, path: str, chunk_size: int = 65536) -> Iterator[bytes]:
        """Download a file as a stream of byte chunks.

        The request is sent when iteration starts.
        """
        response = self.request("GET", _clean_path(path), stream=True)
        try:
            if response.status_code != 200:
                response.read()
                self._raise_for_status(response, "GET", path)
            yield from response.iter_bytes(chunk_size)
        except httpx.TransportError as exc:
            raise ConnectionError_(f"GET {path}: {exc}") from exc
        finally:
            response.close()

    def write(self, path: str, data: bytes) -> None:
        """Upload *data* to *path*, creating missing parent collections."""
        self._put(path, data)

    def write_stream(self, path: str, stream: IO[bytes]) -> None:
        """Upload the contents of a binary file object to *path*.

        Missing parent collections are created when *stream* is seekable.
        """
        self._put(path, stream)

    def _put(self, path: str, content: Content) -> None:
        target = _clean_path(path)
        start = _tell(content)
        response = self.request("PUT", target, content=content)
        if response.status_code == 409 and (start is not None or isinstance(content, bytes)):
            get_output().info(f"Creating missing parent collection {_parent(target)}")
            self.mkdir_all(_parent(target))
            if start is not None:
                content.seek(start)  # type: ignore[union-attr]
            response = self.request("PUT", target, content=content)
        if response.status_code not in (200, 201, 204):
            self._raise_for_status(response, "PUT", path)

    def remove(self, path: str) -> None:
        """Delete a file or collection.  A missing resource is not an error."""
        response = self.request("DELETE", _clean_path(path))
        if response.status_code not in (200, 204, 404):
            self._raise_for_status(response, "DELETE", path)

    def mkdir(self, path: str) -> None:
        """Create a single collection.

        Raises:
            ServerError: If it already exists (405) or the parent is
                missing (409).
        """
        response = self.request("MKCOL", _as_collection(path))
        if response.status_code != 201:
            self._raise_for_status(response, "MKCOL", path)

    def mkdir_all(self, path: str) -> None:
        """Create a collection and any missing parents.

        Existing collections along the way are accepted.
        """
        target = _as_collection(path)
        if target == "/":
            return
        response = self.request("MKCOL", target)
        if response.status_code in (201, 405):
            return
        if response.status_code != 409:
            self._raise_for_status(response, "MKCOL", path)

        current = ""
        for segment in target.strip("/").split("/"):
            current += "/" + segment
            response = self.request("MKCOL", current + "/")
            if response.status_code not in (201, 405):
                self._raise_for_status(response, "MKCOL", current)

    def rename(self, old: str, new: str, overwrite: bool = True) -> None:
        """Move *old* to *new* (``MOVE``)."""
        self._copy_move("MOVE", old, new, overwrite)

    def copy(self, old: str, new: str, overwrite: bool = True) -> None:
        """Copy *old* to *new* (``COPY``)."""
        self._copy_move("COPY", old, new, overwrite)

    def _copy_move(self, method: str, old: str, new: str, overwrite: bool) -> None:
        source = _clean_path(old)
        destination = _clean_path(new)
        headers = {
            "Destination": self.url_for(destination),
            "Overwrite": "T" if overwrite else "F",
        }
        response = self.request(method, source, headers=headers)
        if response.status_code == 409:
            get_output().info(f"Creating missing parent collection {_parent(destination)}")
            self.mkdir_all(_parent(destination))
            response = self.request(method, source, headers=headers)
        if response.status_code == 412:
            raise ServerError(
                f"{method} {old} -> {new}: destination exists",
                status_code=412,
            )
        if response.status_code not in (201, 204):
            self._raise_for_status(response, method, old)

    # ------------------------------------------------------------------ #
    # Error mapping
    # ------------------------------------------------------------------ #

    def _raise_for_status(self, response: httpx.Response, method: str, path: str) -> None:
        """Raise a typed exception for an unexpected status."""
        status = response.status_code
        reason = response.reason_phrase or ""
        message = f"{method} {path}: HTTP {status} {reason}".rstrip()

        exc: DavcliError
        if status in (401, 403):
            exc = AuthError(message, status_code=status)
        elif status == 404:
            exc = NotFoundError(message, status_code=status)
        else:
            exc = ServerError(message, status_code=status)
        raise exc


def _tell(content: Content) -> Optional[int]:
    """Return the position of a seekable body, or None."""
    if content is None or isinstance(content, bytes):
        return None
    try:
        if content.seekable():
            return content.tell()
    except (AttributeError, OSError, ValueError):
        return None
    return None
