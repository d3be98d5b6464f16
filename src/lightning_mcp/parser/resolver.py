"""Resolve component ``$ref`` pointers ahead of normalization.

OpenAPI documents commonly share parameters, request bodies, and responses
through ``components`` and point at them with ``{"$ref": "#/components/..."}``.
The normalizer drops any such reference it meets, so this module replaces
them with their targets first.

Only the positions the normalizer dereferences are resolved: path items,
path- and operation-level parameters, request bodies, and responses. Schema
``$ref`` nodes are left untouched; they are handled by the type compiler,
which turns them into named references (see
:mod:`lightning_mcp.typegen.compiler`).

Chains (a reference whose target is itself a reference) are followed. A
missing target, an external reference, or a cycle raises
:class:`~lightning_mcp.exceptions.UnresolvedReferenceError` instead of
silently losing data.

The single public function is :func:`resolve_component_refs`.
"""

from __future__ import annotations

import copy
from typing import Any

from lightning_mcp.exceptions import UnresolvedReferenceError
from lightning_mcp.models import HTTPMethod

_HTTP_METHODS = tuple(m.value for m in HTTPMethod)


def resolve_component_refs(document: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *document* with operation-level ``$ref`` nodes resolved.

    Args:
        document: The raw description document, as returned by
            :func:`~lightning_mcp.parser.loader.load_document`.

    Returns:
        A **new** dictionary (deep copy). The input is not modified.

    Raises:
        UnresolvedReferenceError: If a reference is external, points at a
            non-existent location, or is part of a reference cycle.

    Example::

        raw = load_document("petstore.yaml")
        api = normalize(resolve_component_refs(raw))
    """
    root = copy.deepcopy(document)
    paths = root.get("paths")
    if not isinstance(paths, dict):
        return root

    for path, path_item in paths.items():
        path_item = _follow(path_item, root)
        paths[path] = path_item
        if not isinstance(path_item, dict):
            continue

        _resolve_parameter_list(path_item, root)

        for method in _HTTP_METHODS:
            operation = path_item.get(method)
            if not isinstance(operation, dict):
                continue

            _resolve_parameter_list(operation, root)

            if "requestBody" in operation:
                operation["requestBody"] = _follow(operation["requestBody"], root)

            responses = operation.get("responses")
            if isinstance(responses, dict):
                for status_code, response in responses.items():
                    responses[status_code] = _follow(response, root)

    return root


def _resolve_parameter_list(owner: dict[str, Any], root: dict[str, Any]) -> None:
    params = owner.get("parameters")
    if isinstance(params, list):
        owner["parameters"] = [_follow(param, root) for param in params]


def _follow(node: Any, root: dict[str, Any]) -> Any:
    """Follow *node* through any chain of ``$ref`` pointers to a concrete value.

    Raises:
        UnresolvedReferenceError: On a non-string, external, dangling, or
            cyclic reference.
    """
    seen: list[str] = []
    while isinstance(node, dict) and "$ref" in node:
        ref = node["$ref"]
        if not isinstance(ref, str):
            raise UnresolvedReferenceError(f"Invalid $ref value: {ref!r}")
        if ref in seen:
            chain = " -> ".join([*seen, ref])
            raise UnresolvedReferenceError(f"Circular $ref chain: {chain}")
        seen.append(ref)
        node = _resolve_pointer(ref, root)
    return node


def _resolve_pointer(ref: str, root: dict[str, Any]) -> Any:
    """Resolve an internal JSON Pointer reference such as ``#/components/responses/NotFound``.

    Handles RFC 6901 escaping (``~1`` for ``/``, ``~0`` for ``~``) and
    numeric indexes into lists.
    """
    if not ref.startswith("#/"):
        raise UnresolvedReferenceError(
            f"External $ref not supported: {ref}. "
            "Only internal references (#/...) are resolved."
        )

    current: Any = root
    for segment in ref[2:].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")

        if isinstance(current, dict):
            if segment not in current:
                raise UnresolvedReferenceError(
                    f"Cannot resolve $ref '{ref}': key '{segment}' not found"
                )
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError) as exc:
                raise UnresolvedReferenceError(
                    f"Cannot resolve $ref '{ref}': invalid array index '{segment}'"
                ) from exc
        else:
            raise UnresolvedReferenceError(
                f"Cannot resolve $ref '{ref}': cannot navigate into "
                f"{type(current).__name__}"
            )

    return current
