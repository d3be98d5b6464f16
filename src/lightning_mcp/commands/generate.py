"""Generate command -- write an MCP server project from a description document.

The command runs the whole pipeline:

1. Resolve the generator configuration (see :func:`~lightning_mcp.config.resolve_config`).
2. Load the document, resolve component references, and normalize it.
3. Warn about operationIds shared by several operations.
4. Render the project files and warn about dangling or duplicate type names.
5. List the generated tools.
6. Unless ``--no-install`` is given, run ``npm install`` and ``npm run build``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from lightning_mcp.commands import exit_on_error, with_type_options
from lightning_mcp.config import resolve_config
from lightning_mcp.generator import generate_project, install_and_build
from lightning_mcp.models import GeneratedProject, ReferenceMode
from lightning_mcp.output import (
    OutputFormat,
    get_output,
    info,
    success,
    suggest,
    warning,
)
from lightning_mcp.parser import duplicate_operation_ids, parse_document
from lightning_mcp.typegen import find_dangling_references, find_duplicate_names

DEFAULT_OUTPUT_DIR = "./generated-mcp-server"


def generate_command(
    doc: str = typer.Option(
        ..., "--doc", help="Description document: file path, URL, or '-' for stdin."
    ),
    output_dir: str = typer.Option(
        DEFAULT_OUTPUT_DIR, "--output", help="Output directory for the generated server."
    ),
    config_path: Optional[str] = typer.Option(
        None, "--config", help="Path to a generator configuration file."
    ),
    references: Optional[ReferenceMode] = typer.Option(
        None, "--references", help="How schema $ref nodes are compiled."
    ),
    dedupe_names: bool = typer.Option(
        False, "--dedupe-names", help="Suffix repeated type names instead of emitting duplicates."
    ),
    install: bool = typer.Option(
        True, "--install/--no-install", help="Run npm install and npm run build afterwards."
    ),
) -> None:
    """Generate an MCP server project from an OpenAPI 3.x document.

    Example::

        lightning-mcp generate --doc petstore.yaml --output ./petstore-mcp
        lightning-mcp generate --doc https://example.com/openapi.json --no-install
    """
    with exit_on_error():
        config = with_type_options(resolve_config(config_path), references, dedupe_names)

        info(f"Generating MCP server from {doc}...")
        api = parse_document(doc)

        for op_id in duplicate_operation_ids(api):
            warning(f"operationId '{op_id}' is shared by more than one operation")

        project = generate_project(api, output_dir, config)
        _report_type_problems(project)
        _print_tools(project)

        success(f"MCP server generated successfully at {Path(output_dir).resolve()}")

        if install:
            info("Installing dependencies and building the generated server...")
            install_and_build(project.output_dir)
            success("Build completed successfully")
        else:
            suggest(f"cd {output_dir} && npm install && npm run build")


def _report_type_problems(project: GeneratedProject) -> None:
    for name in find_duplicate_names(project.declarations):
        warning(f"Type '{name}' is declared more than once (use --dedupe-names)")
    for name in find_dangling_references(project.declarations):
        warning(f"Type '{name}' is referenced but never declared")


def _print_tools(project: GeneratedProject) -> None:
    output = get_output()

    if output.format == OutputFormat.JSON:
        output.print_json({
            "output_dir": str(project.output_dir),
            "package_name": project.package_name,
            "base_url": project.base_url,
            "tools": [tool.model_dump(mode="json") for tool in project.tools],
            "declarations": [decl.name for decl in project.declarations],
            "files": [str(path) for path in project.files],
        })
        return

    headers = ["Tool", "Method", "Path", "Description"]
    rows = [
        [tool.name, tool.method, tool.path, tool.description]
        for tool in project.tools
    ]
    output.print_table(
        headers, rows, title=f"Generated MCP server with {len(rows)} tools"
    )
