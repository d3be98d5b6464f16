"""Tests for lightning_mcp.typegen.declarations."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from lightning_mcp.models import (
    Declaration,
    DeclarationKind,
    DeclarationOrigin,
    ParsedAPI,
    ReferenceMode,
    TypeCompilerConfig,
    TypeExpr,
    TypeKind,
)
from lightning_mcp.parser import normalize
from lightning_mcp.typegen.declarations import (
    build_declarations,
    declaration_kind,
    find_dangling_references,
    find_duplicate_names,
)
from lightning_mcp.typegen.render import render_type


def _api(paths: dict[str, Any], schemas: dict[str, Any] | None = None) -> ParsedAPI:
    doc: dict[str, Any] = {
        "openapi": "3.0.3",
        "info": {"title": "T", "version": "1"},
        "paths": paths,
    }
    if schemas is not None:
        doc["components"] = {"schemas": schemas}
    return normalize(doc)


def _by_name(declarations: list[Declaration]) -> dict[str, Declaration]:
    return {d.name: d for d in declarations}


# ---------------------------------------------------------------------------
# Emission order and naming
# ---------------------------------------------------------------------------


class TestBuildDeclarations:
    """Test declaration order, naming, and kinds for whole documents."""

    def test_petstore_order(self, petstore_api: ParsedAPI) -> None:
        names = [d.name for d in build_declarations(petstore_api)]
        assert names == [
            "Pet",
            "NewPet",
            "PetStatus",
            "Error",
            "TreeNode",
            "ListPetsParams",
            "ListPetsResponse200",
            "ListPetsResponsedefault",
            "Create_petRequestBody",
            "Create_petResponse201",
            "GetpetspetIdParams",
            "GetpetspetIdResponse200",
            "GetpetspetIdResponse404",
            "DeletePetParams",
            "ListTreesResponse200",
        ]

    def test_registry_before_operations(self) -> None:
        api = _api(
            {
                "/x": {
                    "post": {
                        "operationId": "op1",
                        "parameters": [{"name": "q", "in": "query", "schema": {"type": "string"}}],
                        "requestBody": {
                            "content": {"application/json": {"schema": {"$ref": "#/components/schemas/A"}}}
                        },
                        "responses": {"204": {"description": "none"}},
                    }
                }
            },
            schemas={"A": {"type": "string"}, "B": {"type": "integer"}},
        )
        names = [d.name for d in build_declarations(api)]
        assert names == ["A", "B", "Op1Params", "Op1RequestBody"]

    def test_kinds_and_origins(self, petstore_api: ParsedAPI) -> None:
        decls = _by_name(build_declarations(petstore_api))
        assert decls["Pet"].kind is DeclarationKind.RECORD
        assert decls["PetStatus"].kind is DeclarationKind.ALIAS
        assert decls["ListPetsResponse200"].kind is DeclarationKind.ALIAS
        assert decls["Pet"].origin is DeclarationOrigin.SCHEMA
        assert decls["ListPetsParams"].origin is DeclarationOrigin.PARAMETERS
        assert decls["Create_petRequestBody"].origin is DeclarationOrigin.REQUEST_BODY
        assert decls["ListTreesResponse200"].origin is DeclarationOrigin.RESPONSE

    def test_reference_by_name(self, petstore_api: ParsedAPI) -> None:
        decls = _by_name(build_declarations(petstore_api))
        assert render_type(decls["ListPetsResponse200"].expression) == "Array<Pet>"
        assert render_type(decls["Create_petRequestBody"].expression) == "NewPet"

    def test_params_record(self, petstore_api: ParsedAPI) -> None:
        decls = _by_name(build_declarations(petstore_api))
        assert render_type(decls["GetpetspetIdParams"].expression) == (
            '{\n  petId: number;\n  "X-Request-ID"?: string;\n}'
        )
        assert render_type(decls["ListPetsParams"].expression) == (
            "{\n  limit?: number;\n  status?: PetStatus;\n}"
        )

    def test_parameter_without_schema_is_any(self) -> None:
        api = _api({"/x": {"get": {"operationId": "op", "parameters": [{"name": "q", "in": "query"}], "responses": {}}}})
        decl = build_declarations(api)[0]
        assert render_type(decl.expression) == "{\n  q?: any;\n}"

    def test_repeated_parameter_name_last_wins(self) -> None:
        api = _api(
            {
                "/x/{id}": {
                    "get": {
                        "operationId": "op",
                        "parameters": [
                            {"name": "id", "in": "path", "required": True, "schema": {"type": "string"}},
                            {"name": "other", "in": "query", "schema": {"type": "string"}},
                            {"name": "id", "in": "query", "schema": {"type": "integer"}},
                        ],
                        "responses": {},
                    }
                }
            }
        )
        decl = build_declarations(api)[0]
        assert render_type(decl.expression) == "{\n  id?: number;\n  other?: string;\n}"

    def test_responses_without_json_skipped(self) -> None:
        api = _api(
            {
                "/x": {
                    "get": {
                        "operationId": "op",
                        "responses": {
                            "200": {"content": {"text/plain": {"schema": {"type": "string"}}}},
                            "201": {"content": {"application/json": {}}},
                            "202": {"content": {"application/json": {"schema": {"type": "boolean"}}}},
                        },
                    }
                }
            }
        )
        assert [d.name for d in build_declarations(api)] == ["OpResponse202"]

    def test_empty_api(self) -> None:
        assert build_declarations(_api({})) == []

    def test_inline_mode_self_reference(self, petstore_api: ParsedAPI) -> None:
        config = TypeCompilerConfig(reference_mode=ReferenceMode.INLINE)
        decls = _by_name(build_declarations(petstore_api, config))
        assert render_type(decls["TreeNode"].expression) == (
            "{\n  value?: string;\n  children?: Array<TreeNode>;\n}"
        )
        assert render_type(decls["ListTreesResponse200"].expression) == (
            "{\n  value?: string;\n  children?: Array<TreeNode>;\n}"
        )


# ---------------------------------------------------------------------------
# Duplicate names
# ---------------------------------------------------------------------------


def _colliding_api() -> ParsedAPI:
    # "ListPetsParams" is both a registry schema and a derived name
    return _api(
        {
            "/pets": {
                "get": {
                    "operationId": "listPets",
                    "parameters": [{"name": "q", "in": "query"}],
                    "responses": {},
                }
            }
        },
        schemas={"ListPetsParams": {"type": "string"}},
    )


class TestDuplicateNames:
    def test_duplicates_emitted_as_is_by_default(self) -> None:
        decls = build_declarations(_colliding_api())
        assert [d.name for d in decls] == ["ListPetsParams", "ListPetsParams"]
        assert find_duplicate_names(decls) == ["ListPetsParams"]

    def test_dedupe_names(self, caplog: pytest.LogCaptureFixture) -> None:
        config = TypeCompilerConfig(dedupe_names=True)
        with caplog.at_level(logging.WARNING, logger="lightning_mcp"):
            decls = build_declarations(_colliding_api(), config)
        assert [d.name for d in decls] == ["ListPetsParams", "ListPetsParams2"]
        assert find_duplicate_names(decls) == []
        assert "renamed to ListPetsParams2" in caplog.text


# ---------------------------------------------------------------------------
# Verification helpers
# ---------------------------------------------------------------------------


class TestFindDanglingReferences:
    def test_petstore_has_none(self, petstore_api: ParsedAPI) -> None:
        assert find_dangling_references(build_declarations(petstore_api)) == []

    def test_unknown_reference_reported_once(self) -> None:
        api = _api(
            {},
            schemas={
                "A": {"type": "array", "items": {"$ref": "#/components/schemas/Widget"}},
                "B": {
                    "type": "object",
                    "properties": {
                        "w": {"$ref": "#/components/schemas/Widget"},
                        "g": {"$ref": "#/components/schemas/Gadget"},
                    },
                },
            },
        )
        decls = build_declarations(api)
        assert render_type(decls[0].expression) == "Array<Widget>"
        assert find_dangling_references(decls) == ["Widget", "Gadget"]


class TestDeclarationKind:
    def test_record(self) -> None:
        assert declaration_kind(TypeExpr(kind=TypeKind.RECORD)) is DeclarationKind.RECORD

    @pytest.mark.parametrize("kind", [TypeKind.ANY, TypeKind.MAPPING, TypeKind.SEQUENCE, TypeKind.REFERENCE])
    def test_alias(self, kind: TypeKind) -> None:
        assert declaration_kind(TypeExpr(kind=kind)) is DeclarationKind.ALIAS
