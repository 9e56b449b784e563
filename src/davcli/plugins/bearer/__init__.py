"""Bearer token authenticator.

See Also:
    :class:`~davcli.plugins.bearer.plugin.BearerAuth`
"""

from davcli.plugins.bearer.plugin import BEARER_USER, BearerAuth

__all__ = ["BEARER_USER", "BearerAuth"]
