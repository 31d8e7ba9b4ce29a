"""Unit tests for the schema matcher."""

from __future__ import annotations

import pytest

from jsonguard.validation.matcher import match, type_of
from jsonguard.validation.schema import Schema


def _schema(raw: dict) -> Schema:
    return Schema.parse(raw)


class TestTypeOf:

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "null"),
            (True, "boolean"),
            (False, "boolean"),
            (0, "number"),
            (1.5, "number"),
            ("", "string"),
            ([], "array"),
            ((1, 2), "array"),
            ({}, "object"),
            (len, "function"),
        ],
    )
    def test_json_values(self, value, expected):
        assert type_of(value) == expected

    def test_non_json_value_reports_class_name(self):
        assert type_of(b"raw") == "bytes"


class TestTypeCheck:

    def test_type_mismatch_is_single_error_and_stops(self):
        schema = _schema({
            "type": "object",
            "required": ["a"],
            "properties": {"a": {"type": "number"}},
        })

        result = match("not an object", schema)

        assert result.errors == ['Expected type "object" but got "string".']
        assert result.warnings == []

    def test_boolean_is_not_a_number(self):
        result = match(True, _schema({"type": "number"}))
        assert result.errors == ['Expected type "number" but got "boolean".']

    def test_null_is_its_own_type(self):
        assert match(None, _schema({"type": "null"})).ok
        assert match(None, _schema({"type": "object"})).errors == [
            'Expected type "object" but got "null".'
        ]

    def test_no_type_means_no_structural_checks(self):
        result = match({}, _schema({"required": ["a"], "minItems": 3}))
        assert result.ok

    def test_error_carries_path_prefix(self):
        result = match(1, _schema({"type": "string"}), "data/menu")
        assert result.errors == ['data/menu: Expected type "string" but got "number".']


class TestObject:

    def test_missing_required_keys_independent_of_properties(self):
        result = match({}, _schema({"type": "object", "required": ["a", "b"]}))

        assert result.errors == [
            'Missing required key "a".',
            'Missing required key "b".',
        ]

    def test_required_key_with_null_value_is_present(self):
        result = match({"a": None}, _schema({"type": "object", "required": ["a"]}))
        assert result.ok

    def test_extra_keys_are_allowed(self):
        schema = _schema({"type": "object", "properties": {"a": {"type": "number"}}})
        assert match({"a": 1, "unexpected": "x"}, schema).ok

    def test_nested_paths_use_dots_and_brackets(self, menu_schema):
        document = {"title": "Lunch", "items": [{"name": "Soup", "price": "cheap"}]}

        result = match(document, _schema(menu_schema), "data/menu")

        assert result.errors == [
            'data/menu.items[0].price: Expected type "number" but got "string".'
        ]

    def test_root_property_path_has_no_leading_dot(self):
        schema = _schema({"type": "object", "properties": {"a": {"type": "string"}}})
        assert match({"a": 1}, schema).errors == ['a: Expected type "string" but got "number".']

    def test_sibling_violations_are_all_reported(self, menu_schema):
        document = {"items": [{"name": 1, "price": 2}, {"price": "x"}]}

        result = match(document, _schema(menu_schema))

        assert result.errors == [
            'Missing required key "title".',
            'items[0].name: Expected type "string" but got "number".',
            'items[1]: Missing required key "name".',
            'items[1].price: Expected type "number" but got "string".',
        ]


class TestCustomHook:

    def test_returned_message_becomes_error(self):
        schema = Schema(type="object", custom=lambda data: "total must be positive")
        assert match({}, schema, "order").errors == ["order: total must be positive"]

    @pytest.mark.parametrize("returned", [None, "", 0, True])
    def test_non_message_returns_are_ignored(self, returned):
        schema = Schema(type="object", custom=lambda data: returned)
        assert match({}, schema).ok

    def test_raised_exception_is_captured(self):
        def explode(data):
            raise ValueError("boom")

        result = match({}, Schema(type="object", custom=explode))

        assert result.errors == ["Custom validator threw: boom"]

    def test_hook_sees_full_data_after_structural_checks(self):
        seen = []

        def hook(data):
            seen.append(data)
            return None

        schema = Schema(type="object", required=("a",), custom=hook)
        result = match({"b": 2}, schema)

        assert seen == [{"b": 2}]
        assert result.errors == ['Missing required key "a".']

    def test_hook_is_not_run_for_non_object_schemas(self):
        calls = []
        schema = Schema(type="string", custom=lambda data: calls.append(data) or "bad")

        assert match("x", schema).ok
        assert calls == []


class TestArray:

    ARRAY = {"type": "array", "items": {"type": "number"}, "minItems": 2}

    def test_item_type_violation_at_index(self):
        result = match([1, "x"], _schema(self.ARRAY))
        assert result.errors == ['[1]: Expected type "number" but got "string".']

    def test_min_items_violation_only(self):
        result = match([1], _schema(self.ARRAY))
        assert result.errors == ["Array has 1 items; expected at least 2."]

    def test_items_default_to_unconstrained(self):
        assert match([1, "a", None, {}], _schema({"type": "array"})).ok

    def test_index_path_appends_to_parent(self):
        result = match([1, "x"], _schema(self.ARRAY), "scores")
        assert result.errors == ['scores[1]: Expected type "number" but got "string".']


class TestPattern:

    def test_pattern_uses_search_semantics(self):
        schema = _schema({"type": "string", "pattern": r"\d{4}"})
        assert match("year 2024", schema).ok

    def test_pattern_mismatch(self):
        schema = _schema({"type": "string", "pattern": r"^\d{4}$"})
        assert match("abc", schema, "year").errors == [r"year: String does not match pattern ^\d{4}$."]


class TestAnyOf:

    UNION = {"anyOf": [{"type": "string"}, {"type": "number"}]}

    def test_no_alternative_matches(self):
        result = match(True, _schema(self.UNION))

        assert result.errors == ["Value must match one of the allowed shapes."]
        assert result.warnings == [
            'anyOf[0] → Expected type "string" but got "boolean".',
            'anyOf[1] → Expected type "number" but got "boolean".',
        ]

    def test_first_alternative_matches_cleanly(self):
        result = match("ok", _schema(self.UNION))
        assert result.errors == []
        assert result.warnings == []

    def test_failed_alternatives_are_discarded_when_one_passes(self):
        result = match(3, _schema(self.UNION))
        assert result.ok
        assert result.warnings == []

    def test_any_of_short_circuits_type(self):
        schema = _schema({"type": "object", "anyOf": [{"type": "string"}]})
        assert match("text", schema).ok

    def test_warnings_keep_both_path_prefixes(self):
        schema = _schema({
            "type": "object",
            "properties": {"id": {"anyOf": [{"type": "string"}, {"type": "number"}]}},
        })

        result = match({"id": None}, schema, "doc")

        assert result.errors == ["doc.id: Value must match one of the allowed shapes."]
        assert result.warnings == [
            'doc.id: anyOf[0] → doc.id: Expected type "string" but got "null".',
            'doc.id: anyOf[1] → doc.id: Expected type "number" but got "null".',
        ]

    def test_empty_any_of_never_matches(self):
        result = match(1, _schema({"anyOf": []}))
        assert result.errors == ["Value must match one of the allowed shapes."]
        assert result.warnings == []


def test_matching_is_repeatable(menu_schema):
    schema = _schema(menu_schema)
    document = {"title": 1, "items": [{"name": "Soup"}, "x"]}

    first = match(document, schema, "menu")
    second = match(document, schema, "menu")

    assert first == second
    assert first.errors


def test_result_to_dict(menu_schema, menu_document):
    result = match(menu_document, _schema(menu_schema))
    assert result.to_dict() == {"status": "PASSED", "errors": [], "warnings": []}
