"""Structural JSON Schema for OpenAPI 3.x documents.

Only the shape of the document is described here; semantic checks such as
reference resolution are out of reach for a JSON Schema and are not attempted.
``paths`` is optional so that component-only documents validate.
"""

from __future__ import annotations

from typing import Any, Dict

from jsonschema import Draft202012Validator

COMPONENT_NAME_PATTERN = r"^[a-zA-Z0-9._-]+$"
_EXTENSIONS = {"^x-": {}}
_HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


def _ref_or(definition: str) -> Dict[str, Any]:
    return {
        "if": {"type": "object", "required": ["$ref"]},
        "then": {"$ref": "#/$defs/reference"},
        "else": {"$ref": f"#/$defs/{definition}"},
    }


def _named_map(definition: str) -> Dict[str, Any]:
    return {
        "type": "object",
        "propertyNames": {"pattern": COMPONENT_NAME_PATTERN},
        "additionalProperties": _ref_or(definition),
    }


OPENAPI_3_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["openapi", "info"],
    "properties": {
        "openapi": {"type": "string", "pattern": r"^3\.\d+\.\d+(-.+)?$"},
        "info": {"$ref": "#/$defs/info"},
        "jsonSchemaDialect": {"type": "string"},
        "servers": {"type": "array", "items": {"$ref": "#/$defs/server"}},
        "paths": {"$ref": "#/$defs/paths"},
        "webhooks": {"type": "object", "additionalProperties": _ref_or("pathItem")},
        "components": {"$ref": "#/$defs/components"},
        "security": {"type": "array", "items": {"$ref": "#/$defs/securityRequirement"}},
        "tags": {"type": "array", "items": {"$ref": "#/$defs/tag"}},
        "externalDocs": {"$ref": "#/$defs/externalDocs"},
    },
    "patternProperties": _EXTENSIONS,
    "additionalProperties": False,
    "$defs": {
        "reference": {
            "type": "object",
            "required": ["$ref"],
            "properties": {
                "$ref": {"type": "string", "minLength": 1},
                "summary": {"type": "string"},
                "description": {"type": "string"},
            },
        },
        "info": {
            "type": "object",
            "required": ["title", "version"],
            "properties": {
                "title": {"type": "string", "minLength": 1},
                "version": {"type": "string", "minLength": 1},
                "summary": {"type": "string"},
                "description": {"type": "string"},
                "termsOfService": {"type": "string"},
                "contact": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string"},
                        "url": {"type": "string"},
                        "email": {"type": "string"},
                    },
                },
                "license": {
                    "type": "object",
                    "required": ["name"],
                    "properties": {
                        "name": {"type": "string", "minLength": 1},
                        "url": {"type": "string"},
                        "identifier": {"type": "string"},
                    },
                },
            },
            "patternProperties": _EXTENSIONS,
            "additionalProperties": False,
        },
        "server": {
            "type": "object",
            "required": ["url"],
            "properties": {
                "url": {"type": "string", "minLength": 1},
                "description": {"type": "string"},
                "variables": {
                    "type": "object",
                    "additionalProperties": {
                        "type": "object",
                        "required": ["default"],
                        "properties": {
                            "default": {"type": "string"},
                            "enum": {"type": "array", "items": {"type": "string"}, "minItems": 1},
                            "description": {"type": "string"},
                        },
                    },
                },
            },
            "patternProperties": _EXTENSIONS,
            "additionalProperties": False,
        },
        "externalDocs": {
            "type": "object",
            "required": ["url"],
            "properties": {
                "url": {"type": "string", "minLength": 1},
                "description": {"type": "string"},
            },
            "patternProperties": _EXTENSIONS,
            "additionalProperties": False,
        },
        "tag": {
            "type": "object",
            "required": ["name"],
            "properties": {
                "name": {"type": "string", "minLength": 1},
                "description": {"type": "string"},
                "externalDocs": {"$ref": "#/$defs/externalDocs"},
            },
            "patternProperties": _EXTENSIONS,
            "additionalProperties": False,
        },
        "securityRequirement": {
            "type": "object",
            "additionalProperties": {"type": "array", "items": {"type": "string"}},
        },
        "paths": {
            "type": "object",
            "patternProperties": {"^/": {"$ref": "#/$defs/pathItem"}, **_EXTENSIONS},
            "additionalProperties": False,
        },
        "pathItem": {
            "type": "object",
            "properties": {
                "$ref": {"type": "string"},
                "summary": {"type": "string"},
                "description": {"type": "string"},
                "servers": {"type": "array", "items": {"$ref": "#/$defs/server"}},
                "parameters": {"type": "array", "items": _ref_or("parameter")},
                **{method: {"$ref": "#/$defs/operation"} for method in _HTTP_METHODS},
            },
            "patternProperties": _EXTENSIONS,
            "additionalProperties": False,
        },
        "operation": {
            "type": "object",
            "required": ["responses"],
            "properties": {
                "tags": {"type": "array", "items": {"type": "string"}},
                "summary": {"type": "string"},
                "description": {"type": "string"},
                "externalDocs": {"$ref": "#/$defs/externalDocs"},
                "operationId": {"type": "string"},
                "parameters": {"type": "array", "items": _ref_or("parameter")},
                "requestBody": _ref_or("requestBody"),
                "responses": {"$ref": "#/$defs/responses"},
                "callbacks": {"type": "object"},
                "deprecated": {"type": "boolean"},
                "security": {"type": "array", "items": {"$ref": "#/$defs/securityRequirement"}},
                "servers": {"type": "array", "items": {"$ref": "#/$defs/server"}},
            },
            "patternProperties": _EXTENSIONS,
            "additionalProperties": False,
        },
        "responses": {
            "type": "object",
            "minProperties": 1,
            "patternProperties": {
                r"^[1-5](?:[0-9]{2}|XX)$": _ref_or("response"),
                "^default$": _ref_or("response"),
                **_EXTENSIONS,
            },
            "additionalProperties": False,
        },
        "response": {
            "type": "object",
            "required": ["description"],
            "properties": {
                "description": {"type": "string"},
                "headers": {"type": "object", "additionalProperties": _ref_or("header")},
                "content": {"$ref": "#/$defs/content"},
                "links": {"type": "object"},
            },
            "patternProperties": _EXTENSIONS,
            "additionalProperties": False,
        },
        "requestBody": {
            "type": "object",
            "required": ["content"],
            "properties": {
                "description": {"type": "string"},
                "content": {"$ref": "#/$defs/content"},
                "required": {"type": "boolean"},
            },
            "patternProperties": _EXTENSIONS,
            "additionalProperties": False,
        },
        "content": {
            "type": "object",
            "additionalProperties": {"$ref": "#/$defs/mediaType"},
        },
        "mediaType": {
            "type": "object",
            "properties": {
                "schema": {"type": ["object", "boolean"]},
                "example": {},
                "examples": {"type": "object"},
                "encoding": {"type": "object"},
            },
            "patternProperties": _EXTENSIONS,
            "additionalProperties": False,
        },
        "parameter": {
            "type": "object",
            "required": ["name", "in"],
            "properties": {
                "name": {"type": "string", "minLength": 1},
                "in": {"enum": ["query", "header", "path", "cookie"]},
                "description": {"type": "string"},
                "required": {"type": "boolean"},
                "deprecated": {"type": "boolean"},
                "allowEmptyValue": {"type": "boolean"},
                "style": {"type": "string"},
                "explode": {"type": "boolean"},
                "allowReserved": {"type": "boolean"},
                "schema": {"type": ["object", "boolean"]},
                "content": {"$ref": "#/$defs/content"},
                "example": {},
                "examples": {"type": "object"},
            },
            "if": {"properties": {"in": {"const": "path"}}, "required": ["in"]},
            "then": {
                "required": ["required"],
                "properties": {"required": {"const": True}},
            },
            "patternProperties": _EXTENSIONS,
            "additionalProperties": False,
        },
        "header": {
            "type": "object",
            "properties": {
                "description": {"type": "string"},
                "required": {"type": "boolean"},
                "deprecated": {"type": "boolean"},
                "schema": {"type": ["object", "boolean"]},
                "content": {"$ref": "#/$defs/content"},
                "example": {},
                "examples": {"type": "object"},
            },
            "patternProperties": _EXTENSIONS,
            "additionalProperties": False,
        },
        "securityScheme": {
            "type": "object",
            "required": ["type"],
            "properties": {
                "type": {"enum": ["apiKey", "http", "mutualTLS", "oauth2", "openIdConnect"]},
            },
        },
        "schemaObject": {"type": ["object", "boolean"]},
        "example": {"type": "object"},
        "link": {"type": "object"},
        "callback": {"type": "object"},
        "components": {
            "type": "object",
            "properties": {
                "schemas": _named_map("schemaObject"),
                "responses": _named_map("response"),
                "parameters": _named_map("parameter"),
                "examples": _named_map("example"),
                "requestBodies": _named_map("requestBody"),
                "headers": _named_map("header"),
                "securitySchemes": _named_map("securityScheme"),
                "links": _named_map("link"),
                "callbacks": _named_map("callback"),
                "pathItems": _named_map("pathItem"),
            },
            "patternProperties": _EXTENSIONS,
            "additionalProperties": False,
        },
    },
}

Draft202012Validator.check_schema(OPENAPI_3_SCHEMA)

__all__ = ["COMPONENT_NAME_PATTERN", "OPENAPI_3_SCHEMA"]
