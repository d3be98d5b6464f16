"""Inspect commands -- examine a description document.

Provides the ``lightning-mcp inspect`` sub-command group with read-only
commands for viewing what the generator will see: the normalized operations,
the reusable schemas, and the API metadata. Every sub-command loads the
document through the same pipeline as ``generate``.
"""

from __future__ import annotations

from typing import Any

import typer

from lightning_mcp.commands import exit_on_error
from lightning_mcp.models import ParsedAPI
from lightning_mcp.output import format_response, get_output, info
from lightning_mcp.parser import parse_document

inspect_app = typer.Typer(no_args_is_help=True)

_DOC_HELP = "Description document: file path, URL, or '-' for stdin."
_MAX_LISTED_PROPERTIES = 5


def _load(doc: str) -> ParsedAPI:
    with exit_on_error():
        return parse_document(doc)


@inspect_app.command("operations")
def inspect_operations(
    doc: str = typer.Option(..., "--doc", help=_DOC_HELP),
) -> None:
    """List every operation in document order.

    Example::

        lightning-mcp inspect operations --doc petstore.yaml
    """
    api = _load(doc)

    headers = ["Method", "Path", "Operation ID", "Summary"]
    rows = [
        [op.method.value.upper(), op.path, op.operation_id, op.summary or "-"]
        for op in api.operations
    ]
    get_output().print_table(
        headers, rows, title=f"{api.info.title} -- Operations ({len(rows)})"
    )


@inspect_app.command("schemas")
def inspect_schemas(
    doc: str = typer.Option(..., "--doc", help=_DOC_HELP),
) -> None:
    """List the reusable schemas with their type and first property names.

    Example::

        lightning-mcp inspect schemas --doc petstore.yaml
    """
    api = _load(doc)

    if not api.schemas:
        info("No schemas defined in this document.")
        return

    headers = ["Schema", "Type", "Properties"]
    rows = [[name, *_describe_schema(schema)] for name, schema in api.schemas.items()]
    get_output().print_table(headers, rows, title=f"Schemas ({len(rows)})")


@inspect_app.command("info")
def inspect_info(
    doc: str = typer.Option(..., "--doc", help=_DOC_HELP),
) -> None:
    """Show API metadata (title, versions, servers, counts).

    Example::

        lightning-mcp inspect info --doc petstore.yaml
    """
    api = _load(doc)

    format_response({
        "title": api.info.title,
        "version": api.info.version,
        "openapi_version": api.openapi_version,
        "description": api.info.description or "-",
        "servers": [server.url for server in api.servers],
        "operations": len(api.operations),
        "schemas": len(api.schemas),
    })


def _describe_schema(schema: Any) -> list[str]:
    if not isinstance(schema, dict):
        return ["unknown", ""]

    if "$ref" in schema and "type" not in schema:
        schema_type = f"-> {schema['$ref']}"
    else:
        schema_type = str(schema.get("type", "-"))

    properties = schema.get("properties")
    names = list(properties) if isinstance(properties, dict) else []
    listed = ", ".join(names[:_MAX_LISTED_PROPERTIES])
    if len(names) > _MAX_LISTED_PROPERTIES:
        listed += "..."
    return [schema_type, listed]
