"""lightning-mcp -- Generate MCP servers from OpenAPI 3.x description documents.

This package converts an API description into a runnable TypeScript Model
Context Protocol (MCP) server: one tool per API operation, plus TypeScript
type declarations for every reusable schema, parameter set, request body,
and response payload.

Typical workflow::

    lightning-mcp generate --doc openapi.yaml --output ./my-api-mcp
    lightning-mcp types --doc openapi.yaml --references inline

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: Generator configuration loading and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    parser: Document loading, reference resolution, and normalization.
    typegen: Schema type compiler and TypeScript rendering.
    generator: MCP server project emission and npm build.
"""

__version__ = "1.0.0"
