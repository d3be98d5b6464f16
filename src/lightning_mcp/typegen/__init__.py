"""Schema type compiler -- turn schema nodes into TypeScript declarations.

Typical usage::

    from lightning_mcp.typegen import build_declarations, render_declarations

    declarations = build_declarations(api, TypeCompilerConfig(reference_mode="inline"))
    print(render_declarations(declarations))

Sub-modules:

* :mod:`~lightning_mcp.typegen.naming` -- Identifier sanitization, declaration
  names, and literal/key quoting.
* :mod:`~lightning_mcp.typegen.compiler` -- The recursive schema compiler
  producing :class:`~lightning_mcp.models.TypeExpr` trees.
* :mod:`~lightning_mcp.typegen.declarations` -- Ordered declaration assembly
  for a whole API plus dangling/duplicate name checks.
* :mod:`~lightning_mcp.typegen.render` -- TypeScript text rendering.
"""

from lightning_mcp.typegen.compiler import SchemaCompiler, compile_schema
from lightning_mcp.typegen.declarations import (
    build_declarations,
    find_dangling_references,
    find_duplicate_names,
)
from lightning_mcp.typegen.render import render_declaration, render_declarations, render_type

__all__ = [
    "SchemaCompiler",
    "compile_schema",
    "build_declarations",
    "find_dangling_references",
    "find_duplicate_names",
    "render_type",
    "render_declaration",
    "render_declarations",
]
