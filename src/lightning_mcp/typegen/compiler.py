"""Recursive schema -> :class:`~lightning_mcp.models.TypeExpr` compiler.

The compiler dispatches on the schema's ``type`` keyword:

* ``string`` -- the string scalar, or a literal union when ``enum`` is a list.
* ``integer`` / ``number`` -- the number scalar.
* ``boolean`` -- the boolean scalar.
* ``array`` -- a sequence whose item is compiled recursively under the
  ``<context>Item`` naming context; no ``items`` gives a sequence of ``any``.
* ``object`` -- a record when at least one property is declared (each
  property compiled under its own name, optional unless listed in
  ``required``), otherwise an open string-keyed mapping.

A schema with no recognised ``type`` compiles to a reference when it carries
a string ``$ref`` and to ``any`` otherwise. OpenAPI 3.1 type lists use their
first non-``null`` entry.

Compilation never raises. Anything unrecognised, too deeply nested, or
pointing at an unknown schema becomes ``any``; the latter two cases are
logged as warnings.

How ``$ref`` nodes are handled is set by
:attr:`TypeCompilerConfig.reference_mode <lightning_mcp.models.TypeCompilerConfig.reference_mode>`:

* ``name`` -- the last path segment of the target, with no existence check.
* ``verify`` -- the same name if the schema registry defines it, else ``any``.
* ``inline`` -- the registry target compiled structurally. Registry names
  currently being expanded are tracked, and re-entering one yields a
  reference by name, so self-referential and mutually cyclic schemas
  terminate.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from lightning_mcp.models import (
    PropertyExpr,
    ReferenceMode,
    TypeCompilerConfig,
    TypeExpr,
    TypeKind,
)
from lightning_mcp.typegen.naming import reference_name

logger = logging.getLogger(__name__)

ANY = TypeExpr(kind=TypeKind.ANY)
STRING = TypeExpr(kind=TypeKind.STRING)
NUMBER = TypeExpr(kind=TypeKind.NUMBER)
BOOLEAN = TypeExpr(kind=TypeKind.BOOLEAN)
OPEN_MAPPING = TypeExpr(kind=TypeKind.MAPPING)


class SchemaCompiler:
    """Compile schema nodes against one schema registry.

    Args:
        schemas: The document's reusable schema registry, consulted in the
            ``verify`` and ``inline`` reference modes. It is read, never
            copied or modified.
        config: Compiler options; defaults preserve name-only references.

    Example::

        compiler = SchemaCompiler(api.schemas, TypeCompilerConfig(reference_mode="inline"))
        expr = compiler.compile(api.schemas["TreeNode"], "TreeNode", identity="TreeNode")
    """

    def __init__(
        self,
        schemas: Optional[dict[str, Any]] = None,
        config: Optional[TypeCompilerConfig] = None,
    ) -> None:
        self._schemas = schemas if schemas is not None else {}
        self._config = config if config is not None else TypeCompilerConfig()

    @property
    def config(self) -> TypeCompilerConfig:
        return self._config

    def compile(
        self,
        schema: Any,
        context: str = "",
        identity: Optional[str] = None,
    ) -> TypeExpr:
        """Compile *schema* under the naming *context*.

        Args:
            schema: Any schema node. Non-mappings compile to ``any``.
            context: Naming context of the node (declaration or property
                name); nested array items extend it with ``Item``.
            identity: Registry name of *schema* when it is itself a registry
                entry. It seeds the in-progress set so a self-reference
                compiles to a reference in ``inline`` mode.
        """
        in_progress = frozenset([identity]) if identity else frozenset()
        return self._compile(schema, context, 0, in_progress)

    def _compile(
        self,
        schema: Any,
        context: str,
        depth: int,
        in_progress: frozenset[str],
    ) -> TypeExpr:
        if depth > self._config.max_depth:
            logger.warning(
                "Schema at %s nests deeper than %d levels; using any",
                context or "<root>", self._config.max_depth,
            )
            return ANY

        if not isinstance(schema, dict):
            return ANY

        schema_type = resolve_schema_type(schema)

        if schema_type == "string":
            enum = schema.get("enum")
            if isinstance(enum, list):
                return TypeExpr(kind=TypeKind.LITERALS, literals=list(enum))
            return STRING

        if schema_type in ("integer", "number"):
            return NUMBER

        if schema_type == "boolean":
            return BOOLEAN

        if schema_type == "array":
            items = schema.get("items")
            if not isinstance(items, dict):
                return TypeExpr(kind=TypeKind.SEQUENCE)
            item = self._compile(items, f"{context}Item", depth + 1, in_progress)
            return TypeExpr(kind=TypeKind.SEQUENCE, item=item)

        if schema_type == "object":
            return self._compile_object(schema, depth, in_progress)

        ref = schema.get("$ref")
        if isinstance(ref, str):
            return self._compile_reference(ref, depth, in_progress)

        return ANY

    def _compile_object(
        self,
        schema: dict[str, Any],
        depth: int,
        in_progress: frozenset[str],
    ) -> TypeExpr:
        properties = schema.get("properties")
        if not isinstance(properties, dict) or not properties:
            return OPEN_MAPPING

        required = schema.get("required")
        required_names = (
            {str(name) for name in required if isinstance(name, (str, int))}
            if isinstance(required, list)
            else set()
        )

        members = [
            PropertyExpr(
                name=str(key),
                optional=str(key) not in required_names,
                type=self._compile(value, str(key), depth + 1, in_progress),
            )
            for key, value in properties.items()
        ]
        return TypeExpr(kind=TypeKind.RECORD, properties=members)

    def _compile_reference(
        self,
        ref: str,
        depth: int,
        in_progress: frozenset[str],
    ) -> TypeExpr:
        name = reference_name(ref)
        if not name:
            return ANY

        mode = self._config.reference_mode
        if mode is ReferenceMode.NAME:
            return TypeExpr(kind=TypeKind.REFERENCE, name=name)

        if name not in self._schemas:
            logger.warning("Schema reference %s does not resolve; using any", ref)
            return ANY

        if mode is ReferenceMode.VERIFY or name in in_progress:
            return TypeExpr(kind=TypeKind.REFERENCE, name=name)

        return self._compile(self._schemas[name], name, depth + 1, in_progress | {name})


def compile_schema(
    schema: Any,
    context: str = "",
    schemas: Optional[dict[str, Any]] = None,
    config: Optional[TypeCompilerConfig] = None,
) -> TypeExpr:
    """Compile a single schema node; shorthand for :meth:`SchemaCompiler.compile`."""
    return SchemaCompiler(schemas, config).compile(schema, context)


def resolve_schema_type(schema: dict[str, Any]) -> Optional[str]:
    """Return the schema's ``type``, taking the first non-null entry of a type list."""
    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        for entry in schema_type:
            if isinstance(entry, str) and entry != "null":
                return entry
        return None
    return schema_type if isinstance(schema_type, str) else None
