"""Types command -- print the TypeScript declarations compiled from a document."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from lightning_mcp.commands import exit_on_error, with_type_options
from lightning_mcp.config import resolve_config
from lightning_mcp.generator.project import atomic_write
from lightning_mcp.models import ReferenceMode
from lightning_mcp.output import OutputFormat, get_output, success
from lightning_mcp.parser import parse_document
from lightning_mcp.typegen import build_declarations, render_declaration, render_declarations


def types_command(
    doc: str = typer.Option(
        ..., "--doc", help="Description document: file path, URL, or '-' for stdin."
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
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Write the declarations to this file instead of stdout."
    ),
) -> None:
    """Print the TypeScript declarations for every schema and operation.

    Example::

        lightning-mcp types --doc petstore.yaml
        lightning-mcp types --doc petstore.yaml --references inline -o types.ts
    """
    with exit_on_error():
        config = with_type_options(resolve_config(config_path), references, dedupe_names)
        api = parse_document(doc)
        declarations = build_declarations(api, config.types)

        if output_file:
            atomic_write(Path(output_file), render_declarations(declarations))
            success(f"Wrote {len(declarations)} declarations to {output_file}")
            return

        output = get_output()
        if output.format == OutputFormat.JSON:
            output.print_json([
                {
                    "name": decl.name,
                    "kind": decl.kind.value,
                    "origin": decl.origin.value,
                    "source": render_declaration(decl),
                }
                for decl in declarations
            ])
        else:
            output.print_code(render_declarations(declarations))
