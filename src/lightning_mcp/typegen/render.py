"""Render compiled type expressions and declarations as TypeScript source."""

from __future__ import annotations

from lightning_mcp.models import Declaration, DeclarationKind, TypeExpr, TypeKind
from lightning_mcp.typegen.naming import literal, property_key

TYPES_FILE_HEADER = (
    "// Type definitions generated by lightning-mcp from the API description.\n"
    "// Do not edit by hand; regenerate instead.\n"
)

_INDENT = "  "

_SCALARS = {
    TypeKind.ANY: "any",
    TypeKind.STRING: "string",
    TypeKind.NUMBER: "number",
    TypeKind.BOOLEAN: "boolean",
    TypeKind.MAPPING: "Record<string, any>",
}


def render_type(expr: TypeExpr, level: int = 0) -> str:
    """Render *expr* as a TypeScript type expression.

    *level* is the nesting level of the enclosing record; members of a
    record at level ``n`` are indented ``n + 1`` times.
    """
    if expr.kind in _SCALARS:
        return _SCALARS[expr.kind]

    if expr.kind is TypeKind.LITERALS:
        if not expr.literals:
            return "never"
        return " | ".join(literal(value) for value in expr.literals)

    if expr.kind is TypeKind.SEQUENCE:
        if expr.item is None:
            return "any[]"
        return f"Array<{render_type(expr.item, level)}>"

    if expr.kind is TypeKind.REFERENCE:
        return expr.name or "any"

    if not expr.properties:
        return "{}"

    pad = _INDENT * (level + 1)
    lines = ["{"]
    for prop in expr.properties:
        marker = "?" if prop.optional else ""
        lines.append(
            f"{pad}{property_key(prop.name)}{marker}: {render_type(prop.type, level + 1)};"
        )
    lines.append(_INDENT * level + "}")
    return "\n".join(lines)


def render_declaration(declaration: Declaration) -> str:
    """Render one declaration as an ``export interface`` or ``export type`` statement."""
    body = render_type(declaration.expression)
    if declaration.kind is DeclarationKind.RECORD:
        return f"export interface {declaration.name} {body}"
    return f"export type {declaration.name} = {body};"


def render_declarations(
    declarations: list[Declaration],
    header: str = TYPES_FILE_HEADER,
) -> str:
    """Render a whole ``types.ts`` file: *header*, then each declaration separated by a blank line."""
    parts = [render_declaration(declaration) for declaration in declarations]
    text = "\n\n".join(parts)
    if header:
        text = f"{header}\n{text}" if text else header
    elif not text:
        return ""
    return text if text.endswith("\n") else text + "\n"
