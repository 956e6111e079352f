from unittest.mock import MagicMock, patch

import pytest
import requests

from client_codegen.shared.errors import SchemaError
from client_codegen.shared.schema_loader import (
    fetch_schema,
    is_remote,
    load_document,
    load_schema,
)


class TestLoadSchema:
    def test_load_yaml(self, tmp_path):
        schema_path = tmp_path / "swagger.yaml"
        schema_path.write_text("paths:\n  /pets: {}\nschemes:\n  - https\n")

        assert load_schema(schema_path) == {"paths": {"/pets": {}}, "schemes": ["https"]}

    def test_load_json(self, tmp_path):
        schema_path = tmp_path / "swagger.json"
        schema_path.write_text('{"swagger": "2.0", "paths": {}}')

        assert load_schema(schema_path) == {"swagger": "2.0", "paths": {}}

    def test_load_schema_file_not_found(self, tmp_path):
        with pytest.raises(SchemaError) as exc_info:
            load_schema(tmp_path / "missing.yaml")

        assert "Failed to read schema file" in str(exc_info.value)

    def test_load_schema_invalid_yaml(self, tmp_path):
        schema_path = tmp_path / "swagger.yaml"
        schema_path.write_text("invalid: yaml: content: [\n")

        with pytest.raises(SchemaError) as exc_info:
            load_schema(schema_path)

        assert "Invalid YAML" in str(exc_info.value)

    def test_load_schema_invalid_json(self, tmp_path):
        schema_path = tmp_path / "swagger.json"
        schema_path.write_text("{not json")

        with pytest.raises(SchemaError) as exc_info:
            load_schema(schema_path)

        assert "Invalid JSON" in str(exc_info.value)

    def test_load_schema_not_dict(self, tmp_path):
        schema_path = tmp_path / "swagger.yaml"
        schema_path.write_text("- item1\n- item2\n")

        with pytest.raises(SchemaError) as exc_info:
            load_schema(schema_path)

        assert "Schema root must be a mapping" in str(exc_info.value)


class TestFetchSchema:
    @patch("requests.Session.get")
    def test_fetch_json(self, mock_get):
        response = MagicMock()
        response.text = '{"swagger": "2.0"}'
        response.headers = {"Content-Type": "application/json"}
        mock_get.return_value = response

        data = fetch_schema("https://example.com/swagger.json")

        assert data == {"swagger": "2.0"}
        response.raise_for_status.assert_called_once()

    @patch("requests.Session.get")
    def test_fetch_yaml(self, mock_get):
        response = MagicMock()
        response.text = "swagger: '2.0'\n"
        response.headers = {"Content-Type": "application/x-yaml"}
        mock_get.return_value = response

        assert fetch_schema("https://example.com/swagger.yaml") == {"swagger": "2.0"}

    @patch("requests.Session.get")
    def test_fetch_failure(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(SchemaError) as exc_info:
            fetch_schema("https://example.com/swagger.json")

        assert "Failed to fetch schema" in str(exc_info.value)
        assert exc_info.value.schema_path == "https://example.com/swagger.json"


class TestLoadDocument:
    def test_is_remote(self):
        assert is_remote("https://example.com/api.json")
        assert is_remote("http://example.com/api.json")
        assert not is_remote("api.json")

    @patch("client_codegen.shared.schema_loader.fetch_schema")
    def test_load_document_url(self, mock_fetch):
        mock_fetch.return_value = {"swagger": "2.0"}

        assert load_document("https://example.com/api.json") == {"swagger": "2.0"}
        mock_fetch.assert_called_once_with("https://example.com/api.json")

    def test_load_document_path(self, tmp_path):
        schema_path = tmp_path / "swagger.yaml"
        schema_path.write_text("swagger: '2.0'\n")

        assert load_document(str(schema_path)) == {"swagger": "2.0"}

    def test_load_document_accepts_path(self, tmp_path):
        schema_path = tmp_path / "swagger.json"
        schema_path.write_text('{"swagger": "2.0"}')

        assert load_document(schema_path) == {"swagger": "2.0"}

    def test_load_document_missing(self, tmp_path):
        with pytest.raises(SchemaError) as exc_info:
            load_document(tmp_path / "missing.yaml")
        assert "Failed to read schema file" in str(exc_info.value)
