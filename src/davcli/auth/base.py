"""Abstract base class for authenticators.

An :class:`Authenticator` is the capability every credential scheme
implements: it identifies itself (:attr:`~Authenticator.auth_type`),
exposes the identity and secret it was built from
(:attr:`~Authenticator.user`, :attr:`~Authenticator.password`), and
decorates outgoing requests (:meth:`~Authenticator.authorize`).

Concrete variants live under :mod:`davcli.plugins`:

- :class:`~davcli.plugins.none.NoAuth`
- :class:`~davcli.plugins.basic.BasicAuth`
- :class:`~davcli.plugins.digest.DigestAuth`
- :class:`~davcli.plugins.bearer.BearerAuth`

See Also:
    :mod:`davcli.auth.manager` for selecting a variant at startup.
    :class:`~davcli.client.sync_client.WebDAVClient` for how the active
    authenticator is applied and upgraded.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import httpx

AUTHORIZATION_HEADER = "Authorization"


class Authenticator(ABC):
    """Abstract base class for credential schemes.

    Subclasses must provide:

    1. An :attr:`auth_type` property returning a stable identifier
       (``"BasicAuth"``, ``"DigestAuth"``, ...).  The identifier shows up in
       ``--verbose`` output and is never secret.
    2. :attr:`user` and :attr:`password` properties.
    3. An :meth:`authorize` implementation that sets the ``Authorization``
       header on the request in place.

    :meth:`authorize` must never raise.  An authenticator without usable
    secret material produces a header the server will reject, which
    surfaces later as an HTTP 401.
    """

    @property
    @abstractmethod
    def auth_type(self) -> str:
        """Return the scheme identifier this authenticator implements."""
        ...

    @property
    @abstractmethod
    def user(self) -> str:
        """Return the identity associated with the credential."""
        ...

    @property
    @abstractmethod
    def password(self) -> str:
        """Return the secret (password or raw token)."""
        ...

    @abstractmethod
    def authorize(self, request: httpx.Request, method: str, path: str) -> None:
        """Decorate *request* with this scheme's credentials.

        Args:
            request: The outgoing request; its headers are modified in place.
            method: HTTP method of the request (``"PROPFIND"``, ``"PUT"``...).
            path: Request target path, used by challenge-response schemes.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(user={self.user!r})"
