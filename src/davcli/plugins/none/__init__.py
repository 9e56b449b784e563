"""Anonymous (no credentials) authenticator.

See Also:
    :class:`~davcli.plugins.none.plugin.NoAuth`
"""

from davcli.plugins.none.plugin import NoAuth

__all__ = ["NoAuth"]
