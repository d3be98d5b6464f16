"""Canonical Pydantic models shared across all lightning-mcp modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into four groups:

**Normalizer output** -- produced once by
:func:`~lightning_mcp.parser.normalizer.normalize` and read-only afterwards:
    :class:`HTTPMethod`, :class:`ParameterLocation`, :class:`ApiInfo`,
    :class:`ServerRef`, :class:`Parameter`, :class:`RequestBody`,
    :class:`ResponseSpec`, :class:`Operation`, and :class:`ParsedAPI`.

**Type compiler output** -- the expression tree built by
:mod:`lightning_mcp.typegen.compiler` and the named declarations assembled by
:mod:`lightning_mcp.typegen.declarations`:
    :class:`TypeKind`, :class:`TypeExpr`, :class:`PropertyExpr`,
    :class:`DeclarationKind`, :class:`DeclarationOrigin`, and
    :class:`Declaration`.

**Configuration** -- deserialised from a JSON config file:
    :class:`ReferenceMode`, :class:`TypeCompilerConfig`,
    :class:`DependencyVersions`, :class:`DevDependencyVersions`,
    :class:`TemplateConstants`, :class:`ScriptsConfig`, and
    :class:`GeneratorConfig`.

**Emission** -- consumed by the project templates:
    :class:`ToolParameter`, :class:`ToolRequestBody`, :class:`MCPTool`, and
    :class:`GeneratedProject`.

Schema nodes themselves stay plain ``dict`` values exactly as they appear in
the description document; the compiler dispatches on their shape.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Normalizer Output Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised as operation keys of an OpenAPI path item."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


class ParameterLocation(str, enum.Enum):
    """Locations where an API parameter can appear, per OpenAPI ``in`` field."""

    QUERY = "query"
    PATH = "path"
    HEADER = "header"
    COOKIE = "cookie"


class ApiInfo(BaseModel):
    """API metadata copied verbatim from the document's *Info Object*."""

    model_config = ConfigDict(frozen=True)

    title: str
    version: str
    description: Optional[str] = None


class ServerRef(BaseModel):
    """A server entry from the document's ``servers`` array.

    The first entry is the conventional default base URL of the generated
    server.
    """

    model_config = ConfigDict(frozen=True)

    url: str
    description: Optional[str] = None


class Parameter(BaseModel):
    """A single parameter declared directly on an operation.

    ``schema_`` is the raw schema node (``None`` when the parameter declares
    no schema). Parameter names are unique per location only by convention;
    duplicates are kept as declared.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    location: ParameterLocation
    required: bool = False
    schema_: Optional[dict[str, Any]] = Field(default=None, alias="schema")
    description: Optional[str] = None


class RequestBody(BaseModel):
    """Request body of an operation.

    ``content`` maps each media type to its schema node (``None`` when the
    media type object declares no schema). Only ``application/json`` is
    consumed by the type compiler.
    """

    model_config = ConfigDict(frozen=True)

    description: Optional[str] = None
    required: bool = False
    content: dict[str, Optional[dict[str, Any]]] = Field(default_factory=dict)

    @property
    def json_schema(self) -> Optional[dict[str, Any]]:
        """The ``application/json`` schema, or ``None``."""
        return self.content.get("application/json")


class ResponseSpec(BaseModel):
    """One entry of an operation's ``responses`` map.

    ``content`` is ``None`` when the response declares no content at all,
    as opposed to an empty mapping.
    """

    model_config = ConfigDict(frozen=True)

    description: str = ""
    content: Optional[dict[str, Optional[dict[str, Any]]]] = None

    @property
    def json_schema(self) -> Optional[dict[str, Any]]:
        """The ``application/json`` schema, or ``None``."""
        if not self.content:
            return None
        return self.content.get("application/json")


class Operation(BaseModel):
    """A single (path template, HTTP method) pair of the API.

    ``operation_id`` is always set: it is either the document's own
    ``operationId`` or the synthesized ``{method}{path stripped to
    [A-Za-z0-9]}`` fallback. Fallback ids are deterministic but not
    guaranteed unique; see
    :func:`~lightning_mcp.parser.normalizer.duplicate_operation_ids`.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    method: HTTPMethod
    operation_id: str
    summary: Optional[str] = None
    description: Optional[str] = None
    parameters: list[Parameter] = Field(default_factory=list)
    request_body: Optional[RequestBody] = None
    responses: dict[str, ResponseSpec] = Field(default_factory=dict)


class ParsedAPI(BaseModel):
    """Canonical, flattened model of a whole description document.

    Produced by the normalizer and consumed by the type compiler and the
    emission stage. ``schemas`` is the document's reusable schema registry
    (``components.schemas``), keyed by declared name in document order.
    """

    model_config = ConfigDict(frozen=True)

    info: ApiInfo
    servers: list[ServerRef] = Field(default_factory=list)
    operations: list[Operation] = Field(default_factory=list)
    schemas: dict[str, Any] = Field(default_factory=dict)
    openapi_version: str = Field(
        default="3.0.0", description="Declared OpenAPI version string"
    )


# --- Type Compiler Models ---


class TypeKind(str, enum.Enum):
    """Shape of a compiled :class:`TypeExpr`."""

    ANY = "any"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    LITERALS = "literals"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    RECORD = "record"
    REFERENCE = "reference"


class TypeExpr(BaseModel):
    """A compiled type expression.

    Only the fields relevant to ``kind`` are populated:

    * ``LITERALS`` -- ``literals`` holds the enum values in declaration order.
    * ``SEQUENCE`` -- ``item`` holds the element type, or ``None`` for a
      sequence of the universal type.
    * ``RECORD`` -- ``properties`` holds the members in declaration order.
    * ``REFERENCE`` -- ``name`` holds the referenced declaration name.

    Rendering to TypeScript text lives in
    :mod:`lightning_mcp.typegen.render`.
    """

    model_config = ConfigDict(frozen=True)

    kind: TypeKind
    name: Optional[str] = None
    literals: list[Any] = Field(default_factory=list)
    item: Optional[TypeExpr] = None
    properties: list[PropertyExpr] = Field(default_factory=list)


class PropertyExpr(BaseModel):
    """One member of a record :class:`TypeExpr`."""

    model_config = ConfigDict(frozen=True)

    name: str
    optional: bool = True
    type: TypeExpr


TypeExpr.model_rebuild()
PropertyExpr.model_rebuild()


class DeclarationKind(str, enum.Enum):
    """How a declaration is emitted: an ``interface`` or a ``type`` alias."""

    RECORD = "record"
    ALIAS = "alias"


class DeclarationOrigin(str, enum.Enum):
    """Which part of the document a declaration was derived from."""

    SCHEMA = "schema"
    PARAMETERS = "parameters"
    REQUEST_BODY = "request_body"
    RESPONSE = "response"


class Declaration(BaseModel):
    """A named, emittable type definition.

    The ordered list of declarations is handed to the file writer, which
    renders it into ``src/types.ts``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: DeclarationKind
    expression: TypeExpr
    origin: DeclarationOrigin = DeclarationOrigin.SCHEMA


# --- Configuration Models ---


class ReferenceMode(str, enum.Enum):
    """How the type compiler treats ``$ref`` schema nodes.

    ``NAME`` emits the last path segment unchecked, ``VERIFY`` checks the
    name against the schema registry, and ``INLINE`` expands the target
    structurally with cycle detection.
    """

    NAME = "name"
    VERIFY = "verify"
    INLINE = "inline"


class TypeCompilerConfig(BaseModel):
    """Options of the schema type compiler and declaration builder."""

    model_config = ConfigDict(populate_by_name=True)

    reference_mode: ReferenceMode = Field(
        default=ReferenceMode.NAME, alias="referenceMode"
    )
    max_depth: int = Field(
        default=64,
        ge=1,
        alias="maxDepth",
        description="Nesting depth beyond which schemas compile to any",
    )
    dedupe_names: bool = Field(
        default=False,
        alias="dedupeNames",
        description="Suffix repeated declaration names with their occurrence count",
    )


class DependencyVersions(BaseModel):
    """Runtime npm dependency versions of the generated project.

    Extra keys are treated as additional npm package names and are added to
    the generated ``package.json`` verbatim.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    mcp_sdk: str = Field(default="^1.13.2", alias="mcpSdk")
    axios: str = "^1.6.0"


class DevDependencyVersions(BaseModel):
    """Development npm dependency versions of the generated project."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    types_node: str = Field(default="^20.10.0", alias="typesNode")
    tsx: str = "^4.6.0"
    typescript: str = "^5.3.0"


class TemplateConstants(BaseModel):
    """Constants interpolated into the generated project files."""

    model_config = ConfigDict(populate_by_name=True)

    default_node_target: str = Field(default="ES2020", alias="defaultNodeTarget")
    default_module_system: str = Field(default="ESNext", alias="defaultModuleSystem")
    default_module_resolution: str = Field(
        default="node", alias="defaultModuleResolution"
    )
    content_type: str = Field(default="application/json", alias="contentType")
    http_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"],
        alias="httpMethods",
    )
    parameter_types: list[str] = Field(
        default_factory=lambda: ["query", "path", "header", "formData", "body"],
        alias="parameterTypes",
    )


class ScriptsConfig(BaseModel):
    """npm scripts of the generated ``package.json``."""

    build: str = "tsc"
    start: str = "node dist/index.js"
    dev: str = "tsx src/index.ts"


class GeneratorConfig(BaseModel):
    """Complete generator configuration.

    Loaded by :func:`~lightning_mcp.config.load_config`; every field has a
    default so a partial config file only overrides what it names.
    """

    model_config = ConfigDict(populate_by_name=True)

    dependencies: DependencyVersions = Field(default_factory=DependencyVersions)
    dev_dependencies: DevDependencyVersions = Field(
        default_factory=DevDependencyVersions, alias="devDependencies"
    )
    constants: TemplateConstants = Field(default_factory=TemplateConstants)
    scripts: ScriptsConfig = Field(default_factory=ScriptsConfig)
    types: TypeCompilerConfig = Field(default_factory=TypeCompilerConfig)


# --- Emission Models ---


class ToolParameter(BaseModel):
    """A parameter of a generated MCP tool, with a simplified JSON type."""

    name: str
    type: str = "string"
    description: str
    required: bool = False
    location: ParameterLocation


class ToolRequestBody(BaseModel):
    """Request body summary of a generated MCP tool."""

    description: str = "Request body"
    required: bool = False


class MCPTool(BaseModel):
    """One MCP tool of the generated server; maps 1:1 to an :class:`Operation`."""

    name: str
    description: str
    method: str
    path: str
    parameters: list[ToolParameter] = Field(default_factory=list)
    request_body: Optional[ToolRequestBody] = None


class GeneratedProject(BaseModel):
    """Summary of a generated server project, returned by the writer."""

    output_dir: Path
    package_name: str
    base_url: str
    tools: list[MCPTool] = Field(default_factory=list)
    declarations: list[Declaration] = Field(default_factory=list)
    files: list[Path] = Field(default_factory=list)
