"""Anonymous access.

:class:`NoAuth` is selected when no token, password or ``.netrc`` entry is
available.  Requests go out without an ``Authorization`` header.
"""

from __future__ import annotations

import httpx

from davcli.auth.base import Authenticator


class NoAuth(Authenticator):
    """Send requests without credentials."""

    @property
    def auth_type(self) -> str:
        return "NoAuth"

    @property
    def user(self) -> str:
        return ""

    @property
    def password(self) -> str:
        return ""

    def authorize(self, request: httpx.Request, method: str, path: str) -> None:
        pass
