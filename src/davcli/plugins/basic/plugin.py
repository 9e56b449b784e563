"""HTTP Basic authentication.

This module provides :class:`BasicAuth`.  The ``username:password`` pair is
Base64-encoded and sent as an ``Authorization: Basic <encoded>`` header per
:rfc:`7617`.

See Also:
    :class:`davcli.auth.base.Authenticator` for the base interface.
"""

from __future__ import annotations

import base64

import httpx

from davcli.auth.base import AUTHORIZATION_HEADER, Authenticator


class BasicAuth(Authenticator):
    """Authenticate via HTTP Basic authentication.

    Args:
        username: Login name.  May be empty, in which case the server
            decides whether ``:password`` is acceptable.
        password: The password.
    """

    def __init__(self, username: str, password: str) -> None:
        self._username = username
        self._password = password

    @property
    def auth_type(self) -> str:
        return "BasicAuth"

    @property
    def user(self) -> str:
        return self._username

    @property
    def password(self) -> str:
        return self._password

    def authorize(self, request: httpx.Request, method: str, path: str) -> None:
        """Set ``Authorization: Basic base64(user:password)`` on *request*."""
        raw = f"{self._username}:{self._password}"
        encoded = base64.b64encode(raw.encode("utf-8")).decode("ascii")
        request.headers[AUTHORIZATION_HEADER] = f"Basic {encoded}"
