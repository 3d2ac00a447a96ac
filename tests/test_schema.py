"""Tests for schema normalization and type resolution."""

import pytest

from sheetsync.core.errors import UnsupportedTypeError
from sheetsync.core.schema import (
    DatabaseSchema,
    PropertyType,
    parse_schema,
    resolve_type_tag,
    to_property_type,
)


class TestResolveTypeTag:
    def test_explicit_type(self):
        definition = {"type": "relation", "relation": {"database_id": "ugu"}}
        assert resolve_type_tag(definition) == "relation"

    def test_single_key_variant(self):
        assert resolve_type_tag({"select": {}}) == "select"

    def test_empty_type_uses_variant_key(self):
        assert resolve_type_tag({"type": None, "title": {}}) == "title"

    def test_empty_type_without_variant_defaults_to_rich_text(self):
        assert resolve_type_tag({"type": ""}) == "rich_text"

    def test_descriptive_keys_ignored(self):
        definition = {"id": "abc", "name": "Tags", "multi_select": {"options": []}}
        assert resolve_type_tag(definition) == "multi_select"

    def test_ambiguous_variant_raises(self):
        with pytest.raises(UnsupportedTypeError):
            resolve_type_tag({"select": {}, "number": {}})

    def test_empty_definition_raises(self):
        with pytest.raises(UnsupportedTypeError):
            resolve_type_tag({})

    def test_error_names_field(self):
        with pytest.raises(UnsupportedTypeError, match="for Mixed") as exc:
            resolve_type_tag({"select": {}, "number": {}}, "Mixed")
        assert exc.value.field == "Mixed"
        assert exc.value.type_tag == "number|select"


class TestToPropertyType:
    def test_known_tag(self):
        assert to_property_type("multi_select") is PropertyType.MULTI_SELECT

    def test_enum_passthrough(self):
        assert to_property_type(PropertyType.DATE) is PropertyType.DATE

    def test_unknown_tag_raises(self):
        with pytest.raises(UnsupportedTypeError, match="formula"):
            to_property_type("formula", "Total")


class TestParseSchema:
    def test_properties_normalized(self):
        schema = parse_schema({
            "database_id": "db",
            "properties": {
                "Name": {"title": {}},
                "Count": {"type": "number", "number": {"format": "number"}},
            },
        })
        assert schema.properties["Name"].type == "title"
        assert schema.properties["Count"].property_type is PropertyType.NUMBER
        assert schema.properties["Count"].name == "Count"

    def test_null_definitions_skipped(self):
        schema = parse_schema({"properties": {"Gone": None, "Text": {"rich_text": {}}}})
        assert list(schema.properties) == ["Text"]

    def test_select_options_collected(self):
        schema = parse_schema({
            "properties": {
                "Select": {"select": {"options": [{"name": "hoge"}, {"name": "fuga"}]}},
                "Multi": {"multi_select": {"options": ["a", "b"]}},
                "Open": {"select": {}},
            },
        })
        assert schema.properties["Select"].options == ["hoge", "fuga"]
        assert schema.properties["Multi"].options == ["a", "b"]
        assert schema.properties["Open"].options is None

    def test_empty_option_list_kept(self):
        schema = parse_schema({"properties": {"Select": {"select": {"options": []}}}})
        assert schema.properties["Select"].options == []

    def test_unsupported_type_is_lazy(self):
        schema = parse_schema({"properties": {"Total": {"formula": {"expression": "1"}}}})
        assert schema.properties["Total"].type == "formula"
        with pytest.raises(UnsupportedTypeError):
            schema.properties["Total"].property_type

    def test_ambiguous_definition_is_lazy(self):
        schema = parse_schema({"properties": {"Mixed": {"select": {}, "number": {}}, "Empty": {}}})
        assert set(schema.properties) == {"Mixed", "Empty"}
        with pytest.raises(UnsupportedTypeError, match="Mixed"):
            schema.properties["Mixed"].property_type
        with pytest.raises(UnsupportedTypeError, match="Empty"):
            schema.properties["Empty"].property_type

    def test_parent_id_prefers_id(self):
        schema = parse_schema({"id": "from_id", "database_id": "from_db", "properties": {}})
        assert schema.parent_id == "from_id"
        assert parse_schema({"database_id": "db"}).parent_id == "db"
        assert parse_schema({"properties": {}}).parent_id is None

    def test_title_property(self):
        schema = parse_schema({"properties": {"Text": {"rich_text": {}}, "Name": {"title": {}}}})
        assert schema.title_property.name == "Name"

    def test_already_parsed_passthrough(self):
        schema = DatabaseSchema()
        assert parse_schema(schema) is schema

    def test_non_mapping_raises(self):
        with pytest.raises(ValueError, match="must be a mapping"):
            parse_schema(["not", "a", "schema"])

    def test_non_mapping_definition_raises(self):
        with pytest.raises(ValueError, match="Broken"):
            parse_schema({"properties": {"Broken": "select"}})
