"""HTTP Basic authenticator.

Encodes a ``username:password`` pair using Base64 and sends it as an
``Authorization: Basic`` header per :rfc:`7617`.

See Also:
    :class:`~davcli.plugins.basic.plugin.BasicAuth`
    :mod:`davcli.auth.base` for the interface contract.
"""

from davcli.plugins.basic.plugin import BasicAuth

__all__ = ["BasicAuth"]
