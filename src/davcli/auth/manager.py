"""Credential resolver -- picks the authenticator a session starts with.

:func:`resolve_authenticator` is called once at startup with whatever the
user supplied on the command line or in the environment.  It applies a
fixed precedence, first match wins:

1. a non-empty **token** selects :class:`~davcli.plugins.bearer.BearerAuth`;
   username and password are ignored;
2. a non-empty **password** together with a username selects
   :class:`~davcli.plugins.basic.BasicAuth`.  The request client treats
   this session as *negotiable* and may upgrade it to Digest on the first
   401;
3. otherwise the **.netrc** file is consulted for the endpoint's host; an
   entry with both login and password is used as in case 2;
4. otherwise :class:`~davcli.plugins.none.NoAuth`.

Resolution never raises.  Anything that goes wrong while looking for
credentials degrades to the next branch, and ultimately to anonymous
access, so that public endpoints keep working and a wrong guess surfaces
as an HTTP 401 instead of a local error.  Values from the ``.netrc`` file
never override explicit flags.

See Also:
    :class:`~davcli.auth.base.Authenticator` -- the variant interface.
    :class:`~davcli.client.sync_client.WebDAVClient` -- consumes the result.
"""

from __future__ import annotations

from typing import Optional

from davcli.auth.base import Authenticator
from davcli.auth.credential_store import NetrcStore
from davcli.output import debug


def is_negotiable(authenticator: Authenticator) -> bool:
    """Return True if *authenticator* may still be upgraded to another scheme.

    Only username/password sessions that start out as Basic are negotiable;
    bearer and anonymous sessions keep their scheme for their lifetime.
    """
    from davcli.plugins.basic import BasicAuth

    return isinstance(authenticator, BasicAuth)


def resolve_authenticator(
    token: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    netrc_file: Optional[str] = None,
    root: Optional[str] = None,
) -> Authenticator:
    """Select the authenticator for a new session.

    Args:
        token: Bearer token, typically from ``--token`` / ``$TOKEN``.
        username: Login name, typically from ``--user`` / ``$USER``.
        password: Password, typically from ``--pw`` / ``$PASSWORD``.
        netrc_file: Path of the machine-credentials file to fall back to.
        root: Endpoint URL; its host selects the ``.netrc`` entry.

    Returns:
        A freshly constructed authenticator.  Never ``None``.
    """
    from davcli.plugins.basic import BasicAuth
    from davcli.plugins.bearer import BearerAuth
    from davcli.plugins.none import NoAuth

    if token:
        debug("Using bearer token authentication")
        return BearerAuth(token)

    if password:
        debug(f"Using password authentication for user '{username or ''}'")
        return BasicAuth(username or "", password)

    if netrc_file and root:
        creds = NetrcStore(netrc_file).lookup_url(root)
        if creds is not None:
            debug(f"Using credentials for user '{creds.username}' from {netrc_file}")
            return BasicAuth(creds.username, creds.password)

    debug("No credentials found, using anonymous access")
    return NoAuth()
