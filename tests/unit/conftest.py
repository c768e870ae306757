import pytest
from unittest.mock import Mock

from pagebind.modules.logging import BaseLogger


@pytest.fixture
def logger():
    return Mock(spec=BaseLogger)


@pytest.fixture
def swagger2_document():
    return {
        "swagger": "2.0",
        "info": {"title": "Test API", "version": "1.0.0"},
        "host": "api.example.com",
        "basePath": "/v1",
        "schemes": ["https"],
        "paths": {
            "/users": {
                "get": {
                    "summary": "Get all users",
                    "parameters": [
                        {"name": "limit", "in": "query", "type": "integer", "required": False, "default": 10},
                        {"name": "tags", "in": "query", "type": "array", "items": {"type": "string"}},
                    ],
                    "responses": {
                        "200": {
                            "description": "Success",
                            "schema": {"type": "array", "items": {"$ref": "#/definitions/User"}},
                        }
                    },
                },
                "post": {
                    "summary": "Create user",
                    "parameters": [
                        {"name": "body", "in": "body", "required": True, "schema": {"$ref": "#/definitions/User"}},
                        {"name": "X-Request-Id", "in": "header", "type": "string"},
                    ],
                    "responses": {"201": {"description": "Created"}},
                },
            },
            "/users/{id}": {
                "parameters": [{"name": "id", "in": "path", "type": "integer", "required": True}],
                "get": {
                    "summary": "Get user by ID",
                    "responses": {
                        "200": {
                            "description": "Success",
                            "schema": {"$ref": "#/definitions/User"},
                            "examples": {"application/json": {"id": 7, "name": "Ada"}},
                        },
                        "404": {"description": "Not found"},
                    },
                },
                "delete": {"responses": {"204": {"description": "Deleted"}}},
            },
        },
        "definitions": {
            "User": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer"},
                    "name": {"type": "string"},
                },
            }
        },
    }


@pytest.fixture
def openapi3_document():
    return {
        "openapi": "3.0.3",
        "info": {"title": "Shop API", "version": "2.0.0"},
        "servers": [{"url": "https://shop.example.com/v2"}, {"url": "https://staging.example.com/v2"}],
        "paths": {
            "/products": {
                "get": {
                    "summary": "List products",
                    "parameters": [
                        {"$ref": "#/components/parameters/Limit"},
                        {"name": "category", "in": "query", "schema": {"type": "string", "enum": ["a", "b"]}},
                    ],
                    "responses": {
                        "200": {
                            "description": "Products",
                            "content": {
                                "application/json": {
                                    "schema": {"type": "array", "items": {"$ref": "#/components/schemas/Product"}}
                                }
                            },
                        }
                    },
                },
                "post": {
                    "requestBody": {
                        "required": True,
                        "content": {
                            "application/xml": {"schema": {"type": "string"}},
                            "application/json": {"schema": {"$ref": "#/components/schemas/Product"}},
                        },
                    },
                    "responses": {"201": {"description": "Created"}},
                },
            },
            "/products/{productId}": {
                "get": {
                    "parameters": [
                        {"name": "productId", "in": "path", "required": True, "schema": {"type": "string"}},
                        {"name": "X-Tenant", "in": "header", "required": True, "schema": {"type": "string"}},
                    ],
                    "responses": {
                        "default": {"description": "Error"},
                        "200": {
                            "description": "A product",
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/Product"},
                                    "example": {"id": "p-1", "name": "Lamp", "price": 19.5},
                                }
                            },
                        },
                    },
                }
            },
        },
        "components": {
            "parameters": {
                "Limit": {"name": "limit", "in": "query", "schema": {"type": "integer", "default": 20}},
            },
            "schemas": {
                "Product": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "string"},
                        "name": {"type": "string", "example": "Desk"},
                        "price": {"type": "number"},
                        "inStock": {"type": "boolean"},
                        "category": {"$ref": "#/components/schemas/Category"},
                    },
                },
                "Category": {
                    "type": "object",
                    "properties": {"slug": {"type": "string"}},
                },
            },
        },
    }
