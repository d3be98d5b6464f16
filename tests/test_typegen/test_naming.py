"""Tests for lightning_mcp.typegen.naming."""

from __future__ import annotations

import datetime
import json

import pytest

from lightning_mcp.typegen.naming import (
    dedupe_name,
    literal,
    operation_type_name,
    params_type_name,
    property_key,
    reference_name,
    request_body_type_name,
    response_type_name,
    sanitize_identifier,
    string_literal,
)


class TestDeclarationNames:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("listPets", "listPets"),
            ("list-pets", "list_pets"),
            ("get pets/{id}", "get_pets_id"),
            ("--weird  name--", "weird_name"),
            ("a__b", "a_b"),
        ],
    )
    def test_sanitize_identifier(self, value: str, expected: str) -> None:
        assert sanitize_identifier(value) == expected

    def test_operation_type_name_capitalizes(self) -> None:
        assert operation_type_name("listPets") == "ListPets"
        assert operation_type_name("create-pet") == "Create_pet"

    def test_derived_names(self) -> None:
        assert params_type_name("op1") == "Op1Params"
        assert request_body_type_name("op1") == "Op1RequestBody"
        assert response_type_name("op1", "200") == "Op1Response200"
        assert response_type_name("op1", "default") == "Op1Responsedefault"

    def test_reference_name_takes_last_segment(self) -> None:
        assert reference_name("#/components/schemas/Widget") == "Widget"
        assert reference_name("Widget") == "Widget"
        assert reference_name("#/components/schemas/") == ""


class TestDedupeName:
    def test_first_occurrence_unchanged(self) -> None:
        emitted: dict[str, int] = {}
        assert dedupe_name("Pet", emitted) == "Pet"

    def test_repeats_are_numbered(self) -> None:
        emitted: dict[str, int] = {}
        names = [dedupe_name("Pet", emitted) for _ in range(3)]
        assert names == ["Pet", "Pet2", "Pet3"]

    def test_suffix_collision_is_bumped(self) -> None:
        emitted: dict[str, int] = {}
        dedupe_name("Pet2", emitted)
        dedupe_name("Pet", emitted)
        assert dedupe_name("Pet", emitted) == "Pet3"


class TestLiterals:
    def test_bare_property_key(self) -> None:
        assert property_key("name") == "name"
        assert property_key("$id") == "$id"

    def test_quoted_property_key(self) -> None:
        assert property_key("x-rate-limit") == '"x-rate-limit"'
        assert property_key("1st") == '"1st"'

    def test_string_literal_round_trips(self) -> None:
        for value in ["a", "b's", 'say "hi"', "back\\slash", "line\nbreak"]:
            assert json.loads(string_literal(value)) == value

    def test_line_separators_escaped(self) -> None:
        rendered = string_literal("a\u2028b\u2029c")
        assert "\u2028" not in rendered
        assert "\u2029" not in rendered
        assert json.loads(rendered) == "a\u2028b\u2029c"

    def test_non_string_literals(self) -> None:
        assert literal(1) == "1"
        assert literal(True) == "true"
        assert literal(None) == "null"

    def test_other_literals_use_string_form(self) -> None:
        assert literal(datetime.date(2020, 1, 1)) == '"2020-01-01"'
        assert literal(["a", 1]) == "\"['a', 1]\""
