"""davcli -- a command-line client for WebDAV file hosting.

This package talks to a WebDAV endpoint over HTTP(S) and exposes the usual
file operations (list, stat, read, write, rename, copy, delete, mkdir) as a
single ``-X <METHOD>`` style command.

Typical usage::

    export ROOT=https://dav.example.com/remote.php/webdav
    davcli --user alice --pw secret -X ls /photos
    davcli --token "$JWT" -X get /photos/cat.jpg ./cat.jpg

Authentication is selected once at startup from a bearer token, explicit
username/password, or a ``.netrc`` entry, and is applied to every request.
Username/password sessions are upgraded to Digest when the server asks for it.

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the package.
    config: XDG-aware paths and client configuration.
    exceptions: Exception hierarchy.
    exit_codes: Numeric process exit codes.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
