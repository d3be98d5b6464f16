"""Description document parser -- load, resolve component ``$ref`` pointers, and normalize.

This sub-package is responsible for the first half of the lightning-mcp
pipeline: turning a raw OpenAPI 3.x document (JSON or YAML, local file, remote
URL, or stdin) into a :class:`~lightning_mcp.models.ParsedAPI` that the type
compiler and the project generator consume.

Typical usage::

    from lightning_mcp.parser import load_document, normalize, resolve_component_refs

    raw = load_document("https://petstore3.swagger.io/api/v3/openapi.json")
    api = normalize(resolve_component_refs(raw))

or, in one step, ``api = parse_document(source)``.

Sub-modules:

* :mod:`~lightning_mcp.parser.loader` -- I/O layer (URL, file, stdin) plus
  JSON/YAML format detection.
* :mod:`~lightning_mcp.parser.resolver` -- Resolution of parameter, request
  body, and response ``$ref`` pointers with cycle detection.
* :mod:`~lightning_mcp.parser.normalizer` -- Dialect checks and flattening of
  the document into :class:`~lightning_mcp.models.Operation` objects.
"""

from lightning_mcp.models import ParsedAPI
from lightning_mcp.parser.loader import load_document
from lightning_mcp.parser.normalizer import duplicate_operation_ids, normalize
from lightning_mcp.parser.resolver import resolve_component_refs

__all__ = [
    "parse_document",
    "load_document",
    "resolve_component_refs",
    "normalize",
    "duplicate_operation_ids",
]


def parse_document(source: str) -> ParsedAPI:
    """Load *source*, resolve its component references and normalize it."""
    return normalize(resolve_component_refs(load_document(source)))
