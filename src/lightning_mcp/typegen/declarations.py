"""Assemble the ordered declaration list for a whole API.

Declarations are emitted strictly in traversal order:

1. Every registry schema, in registry order, named by its registry key.
2. For each operation, in operation order:

   * ``<Op>Params`` -- a record of the operation's parameters, when it has any.
   * ``<Op>RequestBody`` -- when the request body has an ``application/json``
     schema.
   * ``<Op>Response<status>`` -- for each response with an
     ``application/json`` schema, in the responses' key order.

No ordering by dependency is attempted, so a declaration may reference a name
declared later or never. :func:`find_dangling_references` and
:func:`find_duplicate_names` report those cases for callers that want to
reject them.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Optional

from lightning_mcp.models import (
    Declaration,
    DeclarationKind,
    DeclarationOrigin,
    Operation,
    ParsedAPI,
    PropertyExpr,
    TypeCompilerConfig,
    TypeExpr,
    TypeKind,
)
from lightning_mcp.typegen.compiler import SchemaCompiler
from lightning_mcp.typegen.naming import (
    dedupe_name,
    params_type_name,
    request_body_type_name,
    response_type_name,
)

logger = logging.getLogger(__name__)


def build_declarations(
    api: ParsedAPI,
    config: Optional[TypeCompilerConfig] = None,
) -> list[Declaration]:
    """Compile every registry schema and operation payload into declarations.

    Args:
        api: The normalized API.
        config: Compiler options. With ``dedupe_names`` enabled a repeated
            name is suffixed with its occurrence count (``Pet2``).

    Returns:
        The declarations in emission order.

    Example::

        declarations = build_declarations(api)
        Path("types.ts").write_text(render_declarations(declarations))
    """
    config = config or TypeCompilerConfig()
    compiler = SchemaCompiler(api.schemas, config)
    declarations: list[Declaration] = []
    emitted: dict[str, int] = {}

    def emit(name: str, expression: TypeExpr, origin: DeclarationOrigin) -> None:
        if config.dedupe_names:
            unique = dedupe_name(name, emitted)
            if unique != name:
                logger.warning("Duplicate declaration name %s renamed to %s", name, unique)
                name = unique
        declarations.append(
            Declaration(
                name=name,
                kind=declaration_kind(expression),
                expression=expression,
                origin=origin,
            )
        )

    for schema_name, schema in api.schemas.items():
        emit(
            schema_name,
            compiler.compile(schema, schema_name, identity=schema_name),
            DeclarationOrigin.SCHEMA,
        )

    for operation in api.operations:
        op_id = operation.operation_id

        if operation.parameters:
            emit(
                params_type_name(op_id),
                _params_record(compiler, operation),
                DeclarationOrigin.PARAMETERS,
            )

        body = operation.request_body
        if body is not None and body.json_schema is not None:
            name = request_body_type_name(op_id)
            emit(name, compiler.compile(body.json_schema, name), DeclarationOrigin.REQUEST_BODY)

        for status_code, response in operation.responses.items():
            schema = response.json_schema
            if schema is None:
                continue
            name = response_type_name(op_id, status_code)
            emit(name, compiler.compile(schema, name), DeclarationOrigin.RESPONSE)

    return declarations


def declaration_kind(expression: TypeExpr) -> DeclarationKind:
    """Records become interfaces; every other expression becomes a type alias."""
    if expression.kind is TypeKind.RECORD:
        return DeclarationKind.RECORD
    return DeclarationKind.ALIAS


def _params_record(compiler: SchemaCompiler, operation: Operation) -> TypeExpr:
    # keyed by name: a repeated parameter name keeps its first position and last definition
    members: dict[str, PropertyExpr] = {}
    for param in operation.parameters:
        members[param.name] = PropertyExpr(
            name=param.name,
            optional=not param.required,
            type=compiler.compile(param.schema_, param.name),
        )
    return TypeExpr(kind=TypeKind.RECORD, properties=list(members.values()))


# ---------------------------------------------------------------------------
# Verification helpers
# ---------------------------------------------------------------------------


def find_dangling_references(declarations: list[Declaration]) -> list[str]:
    """Return referenced names that no declaration defines, in first-seen order."""
    defined = {declaration.name for declaration in declarations}
    dangling: list[str] = []
    for declaration in declarations:
        for name in _referenced_names(declaration.expression):
            if name not in defined and name not in dangling:
                dangling.append(name)
    return dangling


def find_duplicate_names(declarations: list[Declaration]) -> list[str]:
    """Return declaration names emitted more than once, in first-seen order."""
    counts = Counter(declaration.name for declaration in declarations)
    duplicates: list[str] = []
    for declaration in declarations:
        if counts[declaration.name] > 1 and declaration.name not in duplicates:
            duplicates.append(declaration.name)
    return duplicates


def _referenced_names(expression: TypeExpr) -> list[str]:
    names: list[str] = []
    stack = [expression]
    while stack:
        expr = stack.pop()
        if expr.kind is TypeKind.REFERENCE and expr.name:
            names.append(expr.name)
        if expr.item is not None:
            stack.append(expr.item)
        stack.extend(reversed([prop.type for prop in expr.properties]))
    return names
