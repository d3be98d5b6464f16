"""Convert normalized operations into MCP tool descriptors.

Each :class:`~lightning_mcp.models.Operation` becomes exactly one
:class:`~lightning_mcp.models.MCPTool`, named by its operationId. Parameter
schemas are reduced to the handful of JSON types an MCP tool input schema
needs; structure beyond that is described by the generated ``types.ts``.
"""

from __future__ import annotations

from typing import Any, Optional

from lightning_mcp.models import (
    MCPTool,
    Operation,
    ParameterLocation,
    ParsedAPI,
    ToolParameter,
    ToolRequestBody,
)
from lightning_mcp.typegen.compiler import resolve_schema_type

_SIMPLE_TYPES: dict[str, str] = {
    "integer": "number",
    "number": "number",
    "boolean": "boolean",
    "array": "array",
    "object": "object",
}


def simple_type(schema: Optional[dict[str, Any]]) -> str:
    """Map a parameter schema to a JSON type name, defaulting to ``string``.

    Example::

        simple_type({"type": "integer", "format": "int64"})  # "number"
        simple_type({"type": ["integer", "null"]})           # "number"
        simple_type(None)                                    # "string"
    """
    if not schema:
        return "string"
    return _SIMPLE_TYPES.get(resolve_schema_type(schema), "string")


def build_tool(operation: Operation) -> MCPTool:
    method = operation.method.value.upper()
    body = operation.request_body

    return MCPTool(
        name=operation.operation_id,
        description=(
            operation.description
            or operation.summary
            or f"{method} {operation.path}"
        ),
        method=method,
        path=operation.path,
        parameters=[
            ToolParameter(
                name=param.name,
                type=simple_type(param.schema_),
                description=param.description or f"{param.name} parameter",
                required=param.required,
                location=param.location,
            )
            for param in operation.parameters
        ],
        request_body=(
            ToolRequestBody(
                description=body.description or "Request body",
                required=body.required,
            )
            if body is not None
            else None
        ),
    )


def build_tools(api: ParsedAPI) -> list[MCPTool]:
    """Build one tool per operation, in operation order."""
    return [build_tool(operation) for operation in api.operations]


def tool_input_schema(tool: MCPTool) -> dict[str, Any]:
    """Build the JSON Schema advertised as the tool's ``inputSchema``.

    Parameters become top-level properties; a request body is accepted as
    a single ``requestBody`` object property.
    """
    properties: dict[str, Any] = {}
    required: list[str] = []

    for param in tool.parameters:
        properties[param.name] = {"type": param.type, "description": param.description}
        if param.required and param.name not in required:
            required.append(param.name)

    if tool.request_body is not None:
        properties["requestBody"] = {
            "type": "object",
            "description": tool.request_body.description,
        }
        if tool.request_body.required:
            required.append("requestBody")

    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


def tool_route(tool: MCPTool) -> dict[str, Any]:
    """Describe how the generated server turns tool arguments into an HTTP request."""
    def names(location: ParameterLocation) -> list[str]:
        return [param.name for param in tool.parameters if param.location is location]

    return {
        "method": tool.method,
        "path": tool.path,
        "pathParams": names(ParameterLocation.PATH),
        "queryParams": names(ParameterLocation.QUERY),
        "headerParams": names(ParameterLocation.HEADER),
        "cookieParams": names(ParameterLocation.COOKIE),
        "hasBody": tool.request_body is not None,
    }
