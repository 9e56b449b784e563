"""HTTP Digest authentication.

This module provides :class:`DigestAuth` and the challenge parser
:func:`parse_digest_challenge`.

Digest is challenge-response: the authenticator cannot produce a header
until the server has sent a ``WWW-Authenticate: Digest ...`` challenge
carrying a realm and a nonce.  The request client feeds that challenge in
through :meth:`DigestAuth.challenge`; from then on every
:meth:`~DigestAuth.authorize` call computes a fresh response per
:rfc:`7616` (and the older :rfc:`2069` form when the server offers no
``qop``).

A server answering a stale nonce with another challenge simply calls
:meth:`DigestAuth.challenge` again; the credentials stay the same.
"""

from __future__ import annotations

import hashlib
import secrets
from typing import Any, Callable, NamedTuple, Optional
from urllib.request import parse_http_list

import httpx

from davcli.auth.base import AUTHORIZATION_HEADER, Authenticator

_ALGORITHMS: dict[str, Callable[..., Any]] = {
    "MD5": hashlib.md5,
    "MD5-SESS": hashlib.md5,
    "SHA": hashlib.sha1,
    "SHA-SESS": hashlib.sha1,
    "SHA-256": hashlib.sha256,
    "SHA-256-SESS": hashlib.sha256,
    "SHA-512": hashlib.sha512,
    "SHA-512-SESS": hashlib.sha512,
}

_DEFAULT_ALGORITHM = "MD5"


class DigestChallenge(NamedTuple):
    """Parameters of a ``WWW-Authenticate: Digest`` challenge."""

    realm: str
    nonce: str
    algorithm: str = "MD5"
    qop: Optional[str] = None
    opaque: Optional[str] = None
    stale: bool = False


def _unquote(text: str) -> str:
    """Remove quoted-pair backslashes from the inside of a quoted-string."""
    chars = []
    it = iter(text)
    for ch in it:
        if ch == "\\":
            ch = next(it, "")
        chars.append(ch)
    return "".join(chars)


def _split_params(text: str) -> dict[str, str]:
    """Parse ``k=v, k="v"`` auth-params into a dict with lowercase keys."""
    params: dict[str, str] = {}
    for item in parse_http_list(text):
        if "=" not in item:
            continue
        key, value = item.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = _unquote(value[1:-1])
        params[key.strip().lower()] = value
    return params


def _is_scheme_start(item: str) -> bool:
    """Return True if a comma-separated challenge item opens a new scheme."""
    words = item.split(None, 1)
    return bool(words) and "=" not in words[0]


def _digest_params(header: str) -> Optional[str]:
    """Return the auth-params following the ``Digest`` scheme, or None.

    Scheme names are only recognised at item starts, outside quoted strings,
    so a realm such as ``"my digest area"`` is not mistaken for Digest.
    """
    items = parse_http_list(header)
    for index, item in enumerate(items):
        words = item.split(None, 1)
        if not words or words[0].lower() != "digest":
            continue
        params = words[1:]
        for following in items[index + 1:]:
            if _is_scheme_start(following):
                break
            params.append(following)
        return ", ".join(params)
    return None


def parse_digest_challenge(header: str) -> Optional[DigestChallenge]:
    """Extract a Digest challenge from a ``WWW-Authenticate`` value.

    The value may list several schemes (``Basic realm="x", Digest ...``);
    only the auth-params belonging to ``Digest`` are considered.

    Args:
        header: Raw ``WWW-Authenticate`` header value.

    Returns:
        The parsed challenge, or ``None`` when the header does not name
        Digest, lacks a realm or nonce, or asks for an unknown algorithm.
    """
    text = _digest_params(header)
    if text is None:
        return None

    params = _split_params(text)
    realm = params.get("realm")
    nonce = params.get("nonce")
    if realm is None or not nonce:
        return None

    algorithm = params.get("algorithm", _DEFAULT_ALGORITHM).upper()
    if algorithm not in _ALGORITHMS:
        return None

    return DigestChallenge(
        realm=realm,
        nonce=nonce,
        algorithm=algorithm,
        qop=params.get("qop"),
        opaque=params.get("opaque"),
        stale=params.get("stale", "").lower() == "true",
    )


def is_digest_challenge(header: str) -> bool:
    """Return True if *header* names the Digest scheme, parsable or not."""
    return _digest_params(header) is not None


def _quote(value: str) -> str:
    """Render *value* as an HTTP quoted-string."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class DigestAuth(Authenticator):
    """Authenticate via HTTP Digest.

    Starts *unchallenged*: :meth:`authorize` leaves the request untouched
    until :meth:`challenge` has been called with the server's parameters.

    Args:
        username: Login name.
        password: The password.  Only its digest is ever sent.
        challenge: Optional initial challenge, typically the one parsed
            from the 401 that triggered the upgrade to Digest.
    """

    def __init__(
        self,
        username: str,
        password: str,
        challenge: Optional[DigestChallenge] = None,
    ) -> None:
        self._username = username
        self._password = password
        self._challenge: Optional[DigestChallenge] = None
        self._nonce_count = 0
        if challenge is not None:
            self.challenge(challenge)

    @property
    def auth_type(self) -> str:
        return "DigestAuth"

    @property
    def user(self) -> str:
        return self._username

    @property
    def password(self) -> str:
        return self._password

    @property
    def is_challenged(self) -> bool:
        """Whether server challenge parameters have been captured."""
        return self._challenge is not None

    @property
    def current_challenge(self) -> Optional[DigestChallenge]:
        """The most recently captured challenge, if any."""
        return self._challenge

    def challenge(self, challenge: DigestChallenge) -> None:
        """Capture (or refresh) the server's challenge parameters.

        Resets the nonce count when the nonce changes.  An algorithm name is
        matched case-insensitively; an unknown one falls back to MD5.
        """
        algorithm = challenge.algorithm.upper()
        if algorithm not in _ALGORITHMS:
            algorithm = _DEFAULT_ALGORITHM
        if self._challenge is None or self._challenge.nonce != challenge.nonce:
            self._nonce_count = 0
        self._challenge = challenge._replace(algorithm=algorithm)

    def authorize(self, request: httpx.Request, method: str, path: str) -> None:
        """Set a computed ``Authorization: Digest ...`` header on *request*."""
        if self._challenge is None:
            return
        self._nonce_count += 1
        request.headers[AUTHORIZATION_HEADER] = self._build_header(
            self._challenge, method, path, self._nonce_count, secrets.token_hex(8)
        )

    def _build_header(
        self,
        challenge: DigestChallenge,
        method: str,
        uri: str,
        nonce_count: int,
        cnonce: str,
    ) -> str:
        hash_func = _ALGORITHMS[challenge.algorithm]

        def digest(data: str) -> str:
            return hash_func(data.encode("utf-8")).hexdigest()

        ha1 = digest(f"{self._username}:{challenge.realm}:{self._password}")
        if challenge.algorithm.endswith("-SESS"):
            ha1 = digest(f"{ha1}:{challenge.nonce}:{cnonce}")
        ha2 = digest(f"{method.upper()}:{uri}")

        qop = None
        if challenge.qop:
            offered = [q.strip().lower() for q in challenge.qop.split(",")]
            if "auth" in offered:
                qop = "auth"

        nc = f"{nonce_count:08x}"
        if qop:
            response = digest(f"{ha1}:{challenge.nonce}:{nc}:{cnonce}:{qop}:{ha2}")
        else:
            response = digest(f"{ha1}:{challenge.nonce}:{ha2}")

        parts = [
            f"username={_quote(self._username)}",
            f"realm={_quote(challenge.realm)}",
            f"nonce={_quote(challenge.nonce)}",
            f"uri={_quote(uri)}",
            f"algorithm={challenge.algorithm}",
            f'response="{response}"',
        ]
        if challenge.opaque is not None:
            parts.append(f"opaque={_quote(challenge.opaque)}")
        if qop:
            parts.extend([f"qop={qop}", f"nc={nc}", f"cnonce={_quote(cnonce)}"])
        return "Digest " + ", ".join(parts)
