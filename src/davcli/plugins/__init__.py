"""Built-in authenticators, one sub-package per credential scheme.

- :mod:`davcli.plugins.none` -- ``NoAuth``, anonymous requests.
- :mod:`davcli.plugins.basic` -- ``BasicAuth``, :rfc:`7617`.
- :mod:`davcli.plugins.digest` -- ``DigestAuth``, :rfc:`7616`.
- :mod:`davcli.plugins.bearer` -- ``BearerAuth``, opaque token.

All of them implement :class:`davcli.auth.base.Authenticator`.
"""

from davcli.plugins.basic import BasicAuth
from davcli.plugins.bearer import BearerAuth
from davcli.plugins.digest import DigestAuth
from davcli.plugins.none import NoAuth

__all__ = ["BasicAuth", "BearerAuth", "DigestAuth", "NoAuth"]
