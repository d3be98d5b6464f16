"""Numeric process exit codes for the ``lightning-mcp`` command.

Each constant maps to one error category and is referenced by the
corresponding :class:`~lightning_mcp.exceptions.LightningMCPError` subclass,
so wrapper scripts can tell a broken description document from a failed
``npm`` build without parsing stderr.

Example::

    $ lightning-mcp generate --doc swagger.json
    $ echo $?
    8   # EXIT_UNSUPPORTED_DOCUMENT -- Swagger 2.0 input
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred (including configuration errors)."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_DOCUMENT_ERROR = 7
"""The description document could not be loaded or is missing required fields."""

EXIT_UNSUPPORTED_DOCUMENT = 8
"""The description document is not an OpenAPI 3.x document."""

EXIT_BUILD_FAILURE = 9
"""``npm install`` or ``npm run build`` failed in the generated project."""

EXIT_INTERRUPTED = 130
"""The user pressed Ctrl-C."""
