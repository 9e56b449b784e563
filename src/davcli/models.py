"""Pydantic models shared across davcli modules.

**Configuration models**:
    :class:`ClientConfig` -- the endpoint and transport settings the CLI
    builds from flags and environment variables.

**Credential models**:
    :class:`Credentials` -- a username/password pair recovered from a
    ``.netrc`` file.  Transient; never written anywhere.

**Resource models**:
    :class:`FileInfo` -- metadata for one remote file or collection, parsed
    from a WebDAV ``multistatus`` response.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Config ---


class ClientConfig(BaseModel):
    """Endpoint and transport settings for :class:`~davcli.client.WebDAVClient`.

    Example::

        ClientConfig(root="https://dav.example.com/webdav", timeout=10)
    """

    root: str = Field(description="WebDAV root endpoint URL")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")

    @field_validator("root")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("root must not be empty")
        return value.rstrip("/")


# --- Credentials ---


class Credentials(BaseModel):
    """A username/password pair for a single host."""

    model_config = ConfigDict(frozen=True)

    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


# --- Resources ---


class FileInfo(BaseModel):
    """Metadata of a remote file or collection.

    Attributes:
        path: Absolute path below the root endpoint (``/docs/a.txt``).
        name: Last path segment (``a.txt``).
        is_dir: ``True`` for collections.
        size: Content length in bytes (0 for collections).
        content_type: ``getcontenttype`` property, if reported.
        modified: ``getlastmodified`` property, if reported and parsable.
        etag: ``getetag`` property with surrounding quotes removed.
    """

    path: str
    name: str
    is_dir: bool = False
    size: int = 0
    content_type: Optional[str] = None
    modified: Optional[datetime] = None
    etag: Optional[str] = None

    def __str__(self) -> str:
        if self.is_dir:
            return f"Dir : '{self.path}' - '{self.name}'"
        modified = self.modified.isoformat() if self.modified else ""
        return f"File: '{self.path}' SIZE: {self.size} MODIFIED: {modified} ETAG: {self.etag or ''} CTYPE: {self.content_type or ''}"
