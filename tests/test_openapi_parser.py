from pathlib import Path

import pytest

from param_check.errors import DocumentError
from param_check.parser.openapi import build_document, parse_openapi

FIXTURES = Path(__file__).parent / "fixtures"


class TestOpenApiParser:
    def test_parse_petstore_operations_count(self):
        document = parse_openapi(FIXTURES / "petstore.yaml")
        assert len(document.operations) == 3
        assert document.title == "Petstore"

    def test_parse_list_pets_parameters(self):
        document = parse_openapi(FIXTURES / "petstore.yaml")
        op = document.find_operation("get", "/pets")
        assert [p.name for p in op.parameters] == ["limit", None, "X-Trace-Id"]
        limit = op.parameters[0]
        assert limit.location == "query"
        assert limit.param_schema.type == "integer"
        assert limit.param_schema.format == "int32"

    def test_ref_kept_unresolved(self):
        document = parse_openapi(FIXTURES / "petstore.yaml")
        op = document.find_operation("get", "/pets")
        assert op.parameters[1].ref == "#/components/parameters/tagsParam"

    def test_components_parsed(self):
        document = parse_openapi(FIXTURES / "petstore.yaml")
        tags = document.components["tagsParam"]
        assert tags.name == "tags"
        assert tags.param_schema.type == "array"
        assert tags.param_schema.item_type == "string"

    def test_path_level_parameters_merged(self):
        document = parse_openapi(FIXTURES / "petstore.yaml")
        op = document.find_operation("get", "/pets/{petId}")
        assert [p.name for p in op.parameters] == ["petId", "verbose"]
        assert op.parameters[0].required is True

    def test_operation_overrides_path_level_parameter(self):
        document = build_document({
            "openapi": "3.0.0",
            "paths": {
                "/a/{id}": {
                    "parameters": [{"name": "id", "in": "path", "schema": {"type": "string"}}],
                    "get": {"parameters": [{"name": "id", "in": "path", "schema": {"type": "integer"}}]},
                }
            },
        })
        params = document.operations[0].parameters
        assert len(params) == 1
        assert params[0].param_schema.type == "integer"

    def test_swagger2_inline_types(self):
        document = parse_openapi(FIXTURES / "swagger2.yaml")
        op = document.find_operation("get", "/items")
        assert op.parameters[0].param_schema.format == "int64"
        assert document.components["ids"].param_schema.item_type == "string"

    def test_swagger2_body_and_form_parameters_dropped(self):
        document = parse_openapi(FIXTURES / "swagger2.yaml")
        op = document.find_operation("post", "/pets")
        assert [p.name for p in op.parameters] == ["dryRun", None]
        assert op.parameters[1].ref == "#/parameters/ownerBody"
        assert "ownerBody" not in document.components

    def test_openapi31_type_list(self):
        document = build_document({
            "openapi": "3.1.0",
            "paths": {"/a": {"get": {"parameters": [
                {"name": "n", "in": "query", "schema": {"type": ["integer", "null"]}},
            ]}}},
        })
        assert document.operations[0].parameters[0].param_schema.type == "integer"

    def test_non_operation_keys_skipped(self):
        document = build_document({
            "openapi": "3.0.0",
            "paths": {"/a": {"summary": "x", "servers": [], "get": {}}},
        })
        assert [op.method for op in document.operations] == ["get"]


class TestOpenApiParserErrors:
    def test_invalid_yaml(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("openapi: [invalid\n")
        with pytest.raises(DocumentError):
            parse_openapi(f)

    def test_not_a_mapping(self, tmp_path):
        f = tmp_path / "list.yaml"
        f.write_text("- a\n- b\n")
        with pytest.raises(DocumentError):
            parse_openapi(f)

    def test_not_openapi(self, tmp_path):
        f = tmp_path / "other.yaml"
        f.write_text("name: something\n")
        with pytest.raises(DocumentError, match="not an OpenAPI"):
            parse_openapi(f)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentError) as exc:
            parse_openapi(tmp_path / "missing.yaml")
        assert exc.value.context["path"].endswith("missing.yaml")
