"""Exception hierarchy for davcli.

All exceptions inherit from :class:`DavcliError`.  Errors raised in
response to an HTTP status carry that status in
:attr:`DavcliError.status_code` so callers can tell a rejected credential
(401) from a forbidden resource (403) without parsing the message.

The CLI command catches ``DavcliError``, prints it and exits with
:data:`~davcli.exit_codes.EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    DavcliError
    +-- InvalidUsageError
    +-- AuthError
    +-- NotFoundError
    +-- ServerError
    +-- ConnectionError_
    +-- ConfigError
"""

from __future__ import annotations

from davcli.exit_codes import EXIT_GENERIC_FAILURE


class DavcliError(Exception):
    """Base exception for all davcli errors.

    Args:
        message: Human-readable error description.
        status_code: HTTP status that triggered the error, if any.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidUsageError(DavcliError):
    """Raised for unsupported methods or a wrong number of path arguments."""


class AuthError(DavcliError):
    """Raised when the server rejects the request with 401 or 403."""


class NotFoundError(DavcliError):
    """Raised when the server returns HTTP 404."""


class ServerError(DavcliError):
    """Raised for any other HTTP error status (409, 412, 5xx, ...)."""


class ConnectionError_(DavcliError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """


class ConfigError(DavcliError):
    """Raised for configuration problems such as a missing root endpoint."""
