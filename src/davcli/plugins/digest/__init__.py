"""HTTP Digest authenticator.

Implements challenge-response authentication per :rfc:`7616`.  Unlike the
other authenticators it is stateful: it must capture a server challenge
before it can compute a header.

See Also:
    :class:`~davcli.plugins.digest.plugin.DigestAuth`
    :func:`~davcli.plugins.digest.plugin.parse_digest_challenge`
"""

from davcli.plugins.digest.plugin import (
    DigestAuth,
    DigestChallenge,
    is_digest_challenge,
    parse_digest_challenge,
)

__all__ = [
    "DigestAuth",
    "DigestChallenge",
    "is_digest_challenge",
    "parse_digest_challenge",
]
