import pytest
from pydantic import ValidationError

from pagebind.modules.swagger import (
    ParameterLocation,
    SpecificationParser,
    SpecificationType,
    UnsupportedFormatError,
    parse_specification,
)


def _contains_ref(node):
    if isinstance(node, dict):
        return "$ref" in node or any(_contains_ref(v) for v in node.values())
    if isinstance(node, list):
        return any(_contains_ref(v) for v in node)
    return False


class TestSwagger2Parsing:
    """Test cases for Swagger 2.0 documents."""

    def test_parse_metadata(self, swagger2_document):
        spec = parse_specification(swagger2_document)
        assert spec.title == "Test API"
        assert spec.version == "1.0.0"
        assert spec.spec_type == SpecificationType.SWAGGER_2
        assert spec.base_url == "https://api.example.com/v1"
        assert len(spec.endpoints) == 4

    def test_base_url_defaults_scheme_to_https(self, swagger2_document):
        del swagger2_document["schemes"]
        swagger2_document["host"] = "h.example.org"
        swagger2_document["basePath"] = "/api"
        assert parse_specification(swagger2_document).base_url == "https://h.example.org/api"

    def test_base_url_uses_first_scheme(self, swagger2_document):
        swagger2_document["schemes"] = ["http", "https"]
        assert parse_specification(swagger2_document).base_url == "http://api.example.com/v1"

    def test_base_url_without_base_path(self, swagger2_document):
        del swagger2_document["basePath"]
        assert parse_specification(swagger2_document).base_url == "https://api.example.com"

    def test_base_url_absent_without_host(self, swagger2_document):
        del swagger2_document["host"]
        assert parse_specification(swagger2_document).base_url is None

    def test_query_parameters(self, swagger2_document):
        endpoint = parse_specification(swagger2_document).find_endpoint("GET /users")
        assert endpoint is not None
        assert endpoint.method.value == "get"
        assert endpoint.summary == "Get all users"
        limit, tags = endpoint.parameters
        assert limit.name == "limit"
        assert limit.location == ParameterLocation.QUERY
        assert limit.type == "integer"
        assert limit.default == 10
        assert limit.required is False
        assert tags.type == "array<string>"

    def test_body_parameter_becomes_request_body(self, swagger2_document):
        endpoint = parse_specification(swagger2_document).find_endpoint("POST /users")
        assert endpoint.request_body is not None
        assert endpoint.request_body.required is True
        assert endpoint.request_body.content_type == "application/json"
        assert endpoint.request_body.body_schema["properties"]["name"] == {"type": "string"}
        assert [p.name for p in endpoint.parameters] == ["X-Request-Id"]
        assert endpoint.parameters[0].location == ParameterLocation.HEADER

    def test_path_level_parameters_are_inherited(self, swagger2_document):
        spec = parse_specification(swagger2_document)
        for endpoint_id in ("GET /users/{id}", "DELETE /users/{id}"):
            endpoint = spec.find_endpoint(endpoint_id)
            assert len(endpoint.parameters) == 1
            assert endpoint.parameters[0].name == "id"
            assert endpoint.parameters[0].location == ParameterLocation.PATH
            assert endpoint.parameters[0].required is True

    def test_operation_parameter_overrides_path_level(self, swagger2_document):
        swagger2_document["paths"]["/users/{id}"]["get"]["parameters"] = [
            {"name": "id", "in": "path", "type": "string", "required": True, "description": "override"}
        ]
        endpoint = parse_specification(swagger2_document).find_endpoint("GET /users/{id}")
        assert len(endpoint.parameters) == 1
        assert endpoint.parameters[0].type == "string"
        assert endpoint.parameters[0].description == "override"

    def test_responses_are_resolved(self, swagger2_document):
        endpoint = parse_specification(swagger2_document).find_endpoint("GET /users/{id}")
        assert set(endpoint.responses) == {"200", "404"}
        ok = endpoint.responses["200"]
        assert ok.description == "Success"
        assert ok.example == {"id": 7, "name": "Ada"}
        assert ok.response_schema["type"] == "object"
        assert endpoint.responses["404"].response_schema is None

    def test_nested_references_are_resolved(self, swagger2_document):
        spec = parse_specification(swagger2_document)
        schema = spec.find_endpoint("GET /users").responses["200"].response_schema
        assert schema["items"]["properties"]["id"] == {"type": "integer"}
        assert not _contains_ref(spec.model_dump(by_alias=True))


class TestOpenApi3Parsing:
    """Test cases for OpenAPI 3.x documents."""

    def test_parse_metadata(self, openapi3_document):
        spec = parse_specification(openapi3_document)
        assert spec.spec_type == SpecificationType.OPENAPI_3
        assert spec.title == "Shop API"
        assert spec.version == "2.0.0"
        assert spec.base_url == "https://shop.example.com/v2"
        assert [e.id for e in spec.endpoints] == [
            "GET /products",
            "POST /products",
            "GET /products/{productId}",
        ]

    def test_base_url_absent_without_servers(self, openapi3_document):
        del openapi3_document["servers"]
        assert parse_specification(openapi3_document).base_url is None

    def test_referenced_parameter(self, openapi3_document):
        endpoint = parse_specification(openapi3_document).find_endpoint("GET /products")
        limit, category = endpoint.parameters
        assert limit.name == "limit"
        assert limit.type == "integer"
        assert limit.default == 20
        assert category.enum == ["a", "b"]
        assert category.param_schema == {"type": "string", "enum": ["a", "b"]}

    def test_request_body_uses_first_content_type(self, openapi3_document):
        endpoint = parse_specification(openapi3_document).find_endpoint("POST /products")
        assert endpoint.request_body.required is True
        assert endpoint.request_body.content_type == "application/xml"
        assert endpoint.request_body.body_schema == {"type": "string"}

    def test_response_schema_and_example(self, openapi3_document):
        endpoint = parse_specification(openapi3_document).find_endpoint("GET /products/{productId}")
        ok = endpoint.responses["200"]
        assert ok.example == {"id": "p-1", "name": "Lamp", "price": 19.5}
        assert ok.response_schema["properties"]["category"] == {
            "type": "object",
            "properties": {"slug": {"type": "string"}},
        }
        assert endpoint.responses["default"].response_schema is None

    def test_header_parameters(self, openapi3_document):
        endpoint = parse_specification(openapi3_document).find_endpoint("GET /products/{productId}")
        header = endpoint.parameters[1]
        assert header.location == ParameterLocation.HEADER
        assert header.required is True

    def test_unresolvable_reference_is_kept(self, openapi3_document):
        openapi3_document["paths"]["/products"]["get"]["responses"]["200"]["content"]["application/json"]["schema"] = {
            "$ref": "#/components/schemas/Missing"
        }
        endpoint = parse_specification(openapi3_document).find_endpoint("GET /products")
        assert endpoint.responses["200"].response_schema == {"$ref": "#/components/schemas/Missing"}

    def test_unsupported_methods_are_ignored(self, openapi3_document):
        openapi3_document["paths"]["/products"]["head"] = {"responses": {}}
        openapi3_document["paths"]["/products"]["options"] = {"responses": {}}
        spec = parse_specification(openapi3_document)
        assert len(spec.endpoints) == 3

    def test_endpoints_by_method(self, openapi3_document):
        spec = parse_specification(openapi3_document)
        assert [e.id for e in spec.endpoints_by_method("GET")] == ["GET /products", "GET /products/{productId}"]
        assert len(spec.endpoints_by_method()) == 3

    def test_missing_endpoint(self, openapi3_document):
        assert parse_specification(openapi3_document).find_endpoint("DELETE /products") is None

    def test_specification_is_immutable(self, openapi3_document):
        spec = parse_specification(openapi3_document)
        with pytest.raises(ValidationError):
            spec.title = "Changed"

    def test_defaults_for_missing_info(self):
        spec = parse_specification({"openapi": "3.1.0", "paths": {}})
        assert spec.title == "API"
        assert spec.version == "1.0"
        assert spec.endpoints == []


class TestUnsupportedFormats:
    @pytest.mark.parametrize("document", [
        {},
        {"openapi": "2.0"},
        {"swagger": "1.2"},
        {"swagger": 2.0},
        {"info": {"title": "No marker"}},
        ["not", "a", "mapping"],
    ])
    def test_unsupported_document_raises(self, document):
        with pytest.raises(UnsupportedFormatError):
            SpecificationParser().parse(document)

    def test_logs_parse_summary(self, openapi3_document, logger):
        SpecificationParser(logger).parse(openapi3_document)
        logger.log_debug.assert_called_once()


class TestResponseDetails:
    """Test cases for unusual but valid response declarations."""

    def test_property_named_ref(self, openapi3_document):
        openapi3_document["components"]["schemas"]["Product"]["properties"]["$ref"] = {"type": "string"}
        endpoint = parse_specification(openapi3_document).find_endpoint("GET /products/{productId}")
        properties = endpoint.responses["200"].response_schema["properties"]
        assert properties["$ref"] == {"type": "string"}
        assert properties["category"]["properties"] == {"slug": {"type": "string"}}

    def test_named_examples_use_first_value(self, openapi3_document):
        media_type = openapi3_document["paths"]["/products"]["get"]["responses"]["200"]["content"]["application/json"]
        media_type["examples"] = {
            "sample": {"summary": "s", "value": [{"name": "Rex"}]},
            "other": {"value": [{"name": "Fido"}]},
        }
        endpoint = parse_specification(openapi3_document).find_endpoint("GET /products")
        assert endpoint.responses["200"].example == [{"name": "Rex"}]

    def test_referenced_named_example(self, openapi3_document):
        openapi3_document["components"]["examples"] = {"Lamp": {"value": {"name": "Lamp"}}}
        media_type = openapi3_document["paths"]["/products"]["get"]["responses"]["200"]["content"]["application/json"]
        media_type["examples"] = {"lamp": {"$ref": "#/components/examples/Lamp"}}
        endpoint = parse_specification(openapi3_document).find_endpoint("GET /products")
        assert endpoint.responses["200"].example == {"name": "Lamp"}

    def test_named_examples_without_value(self, openapi3_document):
        media_type = openapi3_document["paths"]["/products"]["get"]["responses"]["200"]["content"]["application/json"]
        media_type["examples"] = {"remote": {"externalValue": "https://example.com/products.json"}}
        endpoint = parse_specification(openapi3_document).find_endpoint("GET /products")
        assert endpoint.responses["200"].example is None

    def test_unresolved_response_reference_is_kept(self, openapi3_document, logger):
        openapi3_document["paths"]["/products"]["post"]["responses"]["201"] = {
            "$ref": "#/components/responses/Created"
        }
        endpoint = SpecificationParser(logger).parse(openapi3_document).find_endpoint("POST /products")
        assert endpoint.responses["201"].response_schema == {"$ref": "#/components/responses/Created"}
        logger.log_warning.assert_called_once()
