"""Configuration: XDG paths, environment names, and client settings.

This module handles the small amount of configuration davcli needs:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.davcli/`` on macOS and Windows.  Only the data directory is used,
  for crash logs.  See :func:`get_data_dir`.
* **Environment variables** -- the names the CLI reads its defaults from
  (``ROOT``, ``USER``, ``PASSWORD``, ``TOKEN``, ``DAVCLI_TIMEOUT``).
* **Machine credentials** -- the default ``.netrc`` location, see
  :func:`default_netrc_path`.
* **Client settings** -- :func:`build_client_config` validates the
  endpoint and transport options into a
  :class:`~davcli.models.ClientConfig`.
"""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from davcli.exceptions import ConfigError
from davcli.models import ClientConfig

_APP_NAME = "davcli"

ENV_ROOT = "ROOT"
ENV_USER = "USER"
ENV_PASSWORD = "PASSWORD"
ENV_TOKEN = "TOKEN"
ENV_TIMEOUT = "DAVCLI_TIMEOUT"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform follows the XDG Base Directory layout (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/davcli/`` (default ``~/.local/share/davcli/``).
    On macOS/Windows: ``~/.davcli/logs/``.

    Returns:
        Absolute path to the data directory (guaranteed to exist).
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Machine credentials ---


def get_home() -> Path:
    """Return the user's home directory, preferring ``$HOME``."""
    home = os.environ.get("HOME")
    if home:
        return Path(home)
    return Path.home()


def default_netrc_path() -> str:
    """Return the default machine-credentials file, ``~/.netrc``."""
    return str(get_home() / ".netrc")


# --- Client settings ---


def build_client_config(
    root: Optional[str],
    timeout: float = 30.0,
    insecure: bool = False,
) -> ClientConfig:
    """Validate CLI/environment values into a :class:`~davcli.models.ClientConfig`.

    Args:
        root: The WebDAV root endpoint.  Usually comes from ``--root`` or
            ``$ROOT``.
        timeout: Transport timeout in seconds.
        insecure: Skip TLS certificate verification.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If *root* is missing or any value fails validation.
    """
    if not root:
        raise ConfigError("Set WebDAV ROOT")
    try:
        return ClientConfig(root=root, timeout=timeout, verify_ssl=not insecure)
    except ValidationError as exc:
        raise ConfigError(f"Invalid client configuration: {exc}") from exc
