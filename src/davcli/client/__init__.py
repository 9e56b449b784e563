"""HTTP client module for davcli.

Provides the blocking :class:`WebDAVClient`, which wraps :mod:`httpx` with
authenticator decoration, challenge-driven scheme upgrade, WebDAV file
operations and error mapping, plus :func:`parse_multistatus` for
``PROPFIND`` bodies.

Example::

    from davcli.client import WebDAVClient

    with WebDAVClient(config, authenticator=auth) as client:
        data = client.read("/notes.txt")
"""

from davcli.client.response import parse_multistatus
from davcli.client.sync_client import WebDAVClient

__all__ = ["WebDAVClient", "parse_multistatus"]
