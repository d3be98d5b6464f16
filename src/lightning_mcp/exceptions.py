"""Exception hierarchy for lightning-mcp.

All exceptions inherit from :class:`LightningMCPError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`lightning_mcp.exit_codes`. The entry point in
:func:`lightning_mcp.app.main` catches ``LightningMCPError`` and exits with
the matching code.

Normalization failures form a closed set: :class:`MalformedDocumentError`
and :class:`UnsupportedDocumentError`. Reference resolution failures are a
kind of malformed document. The schema type compiler never raises.

Subclass hierarchy::

    LightningMCPError (exit 1)
    +-- ConfigError                 (exit 1)
    +-- DocumentLoadError           (exit 7)
    +-- MalformedDocumentError      (exit 7)
    |   +-- UnresolvedReferenceError (exit 7)
    +-- UnsupportedDocumentError    (exit 8)
    +-- BuildError                  (exit 9)
"""

from lightning_mcp.exit_codes import (
    EXIT_BUILD_FAILURE,
    EXIT_DOCUMENT_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_UNSUPPORTED_DOCUMENT,
)


class LightningMCPError(Exception):
    """Base exception for all lightning-mcp errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(LightningMCPError):
    """Raised for a missing or invalid generator configuration file."""

    exit_code = EXIT_GENERIC_FAILURE


class DocumentLoadError(LightningMCPError):
    """Raised when the description document cannot be read, fetched, or parsed."""

    exit_code = EXIT_DOCUMENT_ERROR


class MalformedDocumentError(LightningMCPError):
    """Raised when required document fields (``info.title``, ``info.version``) are absent."""

    exit_code = EXIT_DOCUMENT_ERROR


class UnresolvedReferenceError(MalformedDocumentError):
    """Raised when a parameter, request body, or response ``$ref`` cannot be resolved.

    Covers missing targets, external references, and reference cycles.
    """


class UnsupportedDocumentError(LightningMCPError):
    """Raised when the document is not an OpenAPI 3.x description."""

    exit_code = EXIT_UNSUPPORTED_DOCUMENT


class BuildError(LightningMCPError):
    """Raised when installing or building the generated project fails."""

    exit_code = EXIT_BUILD_FAILURE
