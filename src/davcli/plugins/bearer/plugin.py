"""Bearer token authentication.

This module provides :class:`BearerAuth`.  A pre-issued token (typically a
JWT passed via ``--token`` or ``$TOKEN``) is sent verbatim as an
``Authorization: Bearer <token>`` header.

No token exchange, validation or refresh happens here; the token is opaque.

See Also:
    :class:`davcli.auth.base.Authenticator` for the base interface.
"""

from __future__ import annotations

import httpx

from davcli.auth.base import AUTHORIZATION_HEADER, Authenticator

BEARER_USER = "jwt-token"
"""Identity reported for bearer sessions; the token carries no username."""


class BearerAuth(Authenticator):
    """Authenticate via a Bearer token in the Authorization header.

    Args:
        token: The opaque token, used exactly as given.
    """

    def __init__(self, token: str) -> None:
        self._token = token

    @property
    def auth_type(self) -> str:
        return "BearerAuth"

    @property
    def user(self) -> str:
        return BEARER_USER

    @property
    def password(self) -> str:
        return self._token

    def authorize(self, request: httpx.Request, method: str, path: str) -> None:
        """Set ``Authorization: Bearer <token>`` on *request*."""
        request.headers[AUTHORIZATION_HEADER] = f"Bearer {self._token}"
