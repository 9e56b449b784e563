"""Numeric process exit codes.

The CLI does not differentiate failures at the process boundary: every
error maps to :data:`EXIT_GENERIC_FAILURE`.  Usage errors detected by
Typer itself keep Click's conventional code 2.

Example::

    $ davcli -X FROB /
    Unsupported method: FROB
    $ echo $?
    1
"""

EXIT_GENERIC_FAILURE = 1
"""Any error raised while resolving config, talking to the server, or touching local files."""

EXIT_INTERRUPTED = 130
"""The user pressed Ctrl-C."""
