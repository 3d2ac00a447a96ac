"""Tests for the schema file loader."""

import json
from unittest.mock import patch

import pytest

from sheetsync.core.schema import PropertyType
from sheetsync.core.schema_loader import list_schemas, load_schema, load_schema_file


class TestLoadSchema:
    def test_load_example_directly(self):
        """Can load _example_schema by name (underscore is just a list filter)."""
        schema = load_schema("_example_schema")
        assert schema.parent_id == "0123456789abcdef0123456789abcdef"
        assert schema.title_property.name == "Name"
        assert schema.properties["Tags"].options == ["urgent", "later"]
        assert schema.properties["Created"].property_type is PropertyType.CREATED_TIME

    def test_load_nonexistent_raises(self):
        with pytest.raises(FileNotFoundError):
            load_schema("nonexistent_schema")

    def test_json_file(self, tmp_path):
        (tmp_path / "tasks.json").write_text(json.dumps({
            "id": "db",
            "properties": {"Name": {"type": "title", "title": {}}},
        }))
        with patch("sheetsync.core.schema_loader.settings") as mock_settings:
            mock_settings.schemas_dir = str(tmp_path)
            schema = load_schema("tasks")
        assert schema.parent_id == "db"

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- just\n- a\n- list\n")
        with pytest.raises(ValueError, match="expected a mapping"):
            load_schema_file(path)


class TestListSchemas:
    def test_example_hidden(self):
        assert "_example_schema" not in list_schemas()

    def test_lists_files(self, tmp_path):
        (tmp_path / "tasks.yaml").write_text("properties: {}\n")
        (tmp_path / "people.yml").write_text("properties: {}\n")
        (tmp_path / "_draft.yaml").write_text("properties: {}\n")
        (tmp_path / "notes.txt").write_text("ignored")
        with patch("sheetsync.core.schema_loader.settings") as mock_settings:
            mock_settings.schemas_dir = str(tmp_path)
            assert list_schemas() == ["people", "tasks"]

    def test_missing_dir(self, tmp_path):
        with patch("sheetsync.core.schema_loader.settings") as mock_settings:
            mock_settings.schemas_dir = str(tmp_path / "absent")
            assert list_schemas() == []
