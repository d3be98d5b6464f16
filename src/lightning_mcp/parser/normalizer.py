"""Flatten an OpenAPI 3.x description document into a :class:`~lightning_mcp.models.ParsedAPI`.

The single public entry point is :func:`normalize`. Internally it delegates to
private helpers that each handle one section of the document:

* ``_normalize_info`` -- the ``info`` object (title, version, description).
* ``_detect_openapi_version`` -- the ``openapi`` / ``swagger`` dialect fields.
* ``_normalize_servers`` -- the ``servers`` array.
* ``_normalize_operations`` -- every (path, method) pair under ``paths``.
* ``_schema_registry`` -- the ``components.schemas`` map.

Normalization is all-or-nothing: the first structural failure raises and no
partial result is returned. Parameters and responses still expressed as
``$ref`` pointers are dropped (logged at debug level); run
:func:`~lightning_mcp.parser.resolver.resolve_component_refs` first to keep
them.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Any, Optional

from lightning_mcp.exceptions import MalformedDocumentError, UnsupportedDocumentError
from lightning_mcp.models import (
    ApiInfo,
    HTTPMethod,
    Operation,
    Parameter,
    ParameterLocation,
    ParsedAPI,
    RequestBody,
    ResponseSpec,
    ServerRef,
)

logger = logging.getLogger(__name__)

_HTTP_METHODS = frozenset(m.value for m in HTTPMethod)
_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


def normalize(document: Any) -> ParsedAPI:
    """Normalize a validated description document into a :class:`ParsedAPI`.

    Args:
        document: The parsed description document (ideally passed through
            :func:`~lightning_mcp.parser.resolver.resolve_component_refs`).

    Returns:
        The canonical API model: info, servers, operations in document
        order, and the schema registry.

    Raises:
        MalformedDocumentError: If ``info.title`` or ``info.version`` is
            absent, or ``servers`` is not a list.
        UnsupportedDocumentError: If the document is not a mapping, is a
            Swagger 2.x document, does not declare OpenAPI 3.x, or its
            ``paths`` is not a mapping.

    Example::

        api = normalize(resolve_component_refs(load_document("petstore.json")))
        for op in api.operations:
            print(op.method.value.upper(), op.path, op.operation_id)
    """
    if not isinstance(document, dict):
        raise UnsupportedDocumentError(
            f"Description document must be a mapping (got {type(document).__name__})"
        )

    info = _normalize_info(document)
    version = _detect_openapi_version(document)

    paths = document.get("paths")
    if paths is None:
        paths = {}
    elif not isinstance(paths, dict):
        raise UnsupportedDocumentError(
            f"'paths' must be a mapping (got {type(paths).__name__})"
        )

    return ParsedAPI(
        info=info,
        servers=_normalize_servers(document),
        operations=_normalize_operations(paths),
        schemas=_schema_registry(document),
        openapi_version=version,
    )


def duplicate_operation_ids(api: ParsedAPI) -> list[str]:
    """Return operationIds shared by more than one operation, in first-seen order.

    Synthesized ids can collide when two paths strip to the same characters
    (``/a-b`` and ``/ab``); callers decide whether that is fatal.
    """
    counts = Counter(op.operation_id for op in api.operations)
    seen: list[str] = []
    for op in api.operations:
        if counts[op.operation_id] > 1 and op.operation_id not in seen:
            seen.append(op.operation_id)
    return seen


def derive_operation_id(method: str, path: str) -> str:
    """Synthesize an operationId from the lower-cased method and the path's alphanumerics.

    ``derive_operation_id("get", "/users/{id}")`` returns ``"getusersid"``.
    """
    return f"{method.lower()}{_NON_ALPHANUMERIC.sub('', path)}"


def _normalize_info(document: dict[str, Any]) -> ApiInfo:
    info = document.get("info")
    if not isinstance(info, dict):
        raise MalformedDocumentError("Missing required 'info' object")

    title = _required_text(info, "title")
    version = _required_text(info, "version")
    return ApiInfo(
        title=title,
        version=version,
        description=_text(info.get("description")),
    )


def _required_text(info: dict[str, Any], key: str) -> str:
    value = info.get(key)
    # YAML reads ``version: 1.0`` as a float
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str) or not value:
        raise MalformedDocumentError(f"Missing required field 'info.{key}'")
    return value


def _detect_openapi_version(document: dict[str, Any]) -> str:
    """Return the declared OpenAPI version, rejecting other dialects."""
    if "swagger" in document:
        raise UnsupportedDocumentError(
            f"Swagger {document['swagger']} is not supported. "
            "Only OpenAPI 3.x documents are supported. "
            "Consider converting with https://converter.swagger.io"
        )

    version = document.get("openapi")
    if version is None:
        raise UnsupportedDocumentError(
            "Missing 'openapi' field. Is this an OpenAPI 3.x document?"
        )

    version_str = str(version)
    if not version_str.startswith("3."):
        raise UnsupportedDocumentError(
            f"Unsupported OpenAPI version: {version_str}. "
            "Only OpenAPI 3.x documents are supported."
        )
    return version_str


def _normalize_servers(document: dict[str, Any]) -> list[ServerRef]:
    servers = document.get("servers")
    if servers is None:
        return []
    if not isinstance(servers, list):
        raise MalformedDocumentError("'servers' must be a list")

    return [
        ServerRef(
            url=str(server.get("url", "/")),
            description=_text(server.get("description")),
        )
        for server in servers
        if isinstance(server, dict)
    ]


def _normalize_operations(paths: dict[str, Any]) -> list[Operation]:
    """Emit one :class:`Operation` per (path, method) pair that declares ``responses``.

    Path items are walked in document order, and so are the method keys
    within each path item. Path-level shared parameters are not merged in.
    """
    operations: list[Operation] = []

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue

        for key, operation in path_item.items():
            method = str(key).lower()
            if method not in _HTTP_METHODS:
                continue
            if not isinstance(operation, dict) or "responses" not in operation:
                logger.debug("Skipping %s %s: no responses declared", method, path)
                continue

            operation_id = operation.get("operationId")
            if not isinstance(operation_id, str) or not operation_id:
                operation_id = derive_operation_id(method, str(path))

            operations.append(
                Operation(
                    path=str(path),
                    method=HTTPMethod(method),
                    operation_id=operation_id,
                    summary=_text(operation.get("summary")),
                    description=_text(operation.get("description")),
                    parameters=_normalize_parameters(operation, path),
                    request_body=_normalize_request_body(operation.get("requestBody")),
                    responses=_normalize_responses(operation.get("responses"), path),
                )
            )

    return operations


def _normalize_parameters(operation: dict[str, Any], path: str) -> list[Parameter]:
    raw_params = operation.get("parameters")
    if not isinstance(raw_params, list):
        return []

    parameters: list[Parameter] = []
    for param in raw_params:
        if not isinstance(param, dict):
            continue
        if "$ref" in param:
            logger.debug("Dropping unresolved parameter %s on %s", param["$ref"], path)
            continue

        name = param.get("name")
        if not isinstance(name, str) or not name:
            logger.debug("Dropping unnamed parameter on %s", path)
            continue

        try:
            location = ParameterLocation(param.get("in"))
        except ValueError:
            logger.debug(
                "Dropping parameter %r on %s: unsupported location %r",
                name, path, param.get("in"),
            )
            continue

        schema = param.get("schema")
        parameters.append(
            Parameter(
                name=name,
                location=location,
                required=bool(param.get("required", False)),
                schema=schema if isinstance(schema, dict) else None,
                description=_text(param.get("description")),
            )
        )

    return parameters


def _normalize_request_body(body: Any) -> Optional[RequestBody]:
    if not isinstance(body, dict) or "$ref" in body:
        return None

    return RequestBody(
        description=_text(body.get("description")),
        required=bool(body.get("required", False)),
        content=_media_map(body.get("content")),
    )


def _normalize_responses(responses: Any, path: str) -> dict[str, ResponseSpec]:
    if not isinstance(responses, dict):
        return {}

    result: dict[str, ResponseSpec] = {}
    for status_code, response in responses.items():
        if not isinstance(response, dict):
            continue
        if "$ref" in response:
            logger.debug(
                "Dropping unresolved %s response %s on %s",
                status_code, response["$ref"], path,
            )
            continue

        result[str(status_code)] = ResponseSpec(
            description=_text(response.get("description")) or "",
            content=_media_map(response["content"]) if "content" in response else None,
        )

    return result


def _media_map(content: Any) -> dict[str, Optional[dict[str, Any]]]:
    """Reduce a ``content`` map to media type -> schema node (``None`` if absent)."""
    if not isinstance(content, dict):
        return {}

    result: dict[str, Optional[dict[str, Any]]] = {}
    for media_type, media in content.items():
        schema = media.get("schema") if isinstance(media, dict) else None
        result[str(media_type)] = schema if isinstance(schema, dict) else None
    return result


def _schema_registry(document: dict[str, Any]) -> dict[str, Any]:
    components = document.get("components")
    if not isinstance(components, dict):
        return {}
    schemas = components.get("schemas")
    return schemas if isinstance(schemas, dict) else {}


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None
