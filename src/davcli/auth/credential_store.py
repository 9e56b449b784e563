"""Machine-credentials lookup backed by a ``.netrc`` file.

A ``.netrc`` file maps host names to a login and password::

    machine dav.example.com login alice password secret
    machine dav.example.com:8443 login bob password hunter2

:class:`NetrcStore` answers "which credentials belong to this endpoint?".
It never raises: a missing, unreadable or malformed file, an unknown host
or an entry without both a login and a password all come back as ``None``
so that the resolver can fall through to anonymous access.

See Also:
    :func:`~davcli.auth.manager.resolve_authenticator` -- the only caller.
"""

from __future__ import annotations

import netrc
from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

from davcli.models import Credentials
from davcli.output import debug


class NetrcStore:
    """Read-only view of a ``.netrc`` file.

    The file is parsed lazily on the first :meth:`lookup` and cached for the
    lifetime of the instance.

    Args:
        path: Location of the file.  ``~`` is expanded.

    Example::

        store = NetrcStore("~/.netrc")
        creds = store.lookup_url("https://dav.example.com/webdav")
        if creds is not None:
            print(creds.username)
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()
        self._parsed: Optional[netrc.netrc] = None
        self._loaded = False

    @property
    def path(self) -> Path:
        """The filesystem path of the ``.netrc`` file."""
        return self._path

    def _load(self) -> Optional[netrc.netrc]:
        if self._loaded:
            return self._parsed
        self._loaded = True
        if not self._path.is_file():
            debug(f"No netrc file at {self._path}")
            return None
        try:
            self._parsed = netrc.netrc(str(self._path))
        except (netrc.NetrcParseError, OSError, ValueError) as exc:
            debug(f"Ignoring unreadable netrc file {self._path}: {exc}")
            self._parsed = None
        return self._parsed

    def lookup(self, host: str) -> Optional[Credentials]:
        """Return the credentials for an exact ``machine`` name.

        The ``default`` entry of the file is not used: credentials are only
        sent to hosts the user listed explicitly.

        Args:
            host: Machine name as written in the file, with or without port.

        Returns:
            The credentials, or ``None`` if there is no entry or either
            field is empty.
        """
        parsed = self._load()
        if parsed is None or not host:
            return None
        entry = parsed.hosts.get(host)
        if entry is None:
            return None
        login, _account, password = entry
        if not login or not password:
            return None
        return Credentials(username=login, password=password)

    def lookup_url(self, url: str) -> Optional[Credentials]:
        """Return the credentials for the host of *url*.

        ``host:port`` is tried first, then the bare host name.

        Args:
            url: The endpoint URL, e.g. ``https://dav.example.com:8443/dav``.

        Returns:
            The matching credentials, or ``None``.
        """
        try:
            parts = urlsplit(url)
            hostname = parts.hostname or ""
            port = parts.port
        except ValueError:
            return None

        candidates = []
        if parts.netloc:
            candidates.append(parts.netloc.rpartition("@")[2])
        if port is not None:
            candidates.append(f"{hostname}:{port}")
        candidates.append(hostname)

        for candidate in dict.fromkeys(candidates):
            creds = self.lookup(candidate)
            if creds is not None:
                return creds
        return None
