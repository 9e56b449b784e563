"""Authentication for davcli.

This package defines the authenticator abstraction and how a session picks
one:

- :class:`Authenticator` -- abstract base class every credential scheme
  implements (see :mod:`davcli.plugins` for the built-in variants).
- :func:`resolve_authenticator` -- applies the token > password > netrc >
  anonymous precedence and returns the authenticator to start with.
- :class:`NetrcStore` -- read-only ``.netrc`` lookup by host.

Typical usage::

    from davcli.auth import resolve_authenticator

    authenticator = resolve_authenticator(
        token="", username="alice", password="secret",
        netrc_file="~/.netrc", root="https://dav.example.com/",
    )
"""

from davcli.auth.base import AUTHORIZATION_HEADER, Authenticator
from davcli.auth.credential_store import NetrcStore
from davcli.auth.manager import is_negotiable, resolve_authenticator

__all__ = [
    "AUTHORIZATION_HEADER",
    "Authenticator",
    "NetrcStore",
    "is_negotiable",
    "resolve_authenticator",
]
