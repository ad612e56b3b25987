"""End-to-end tests for openapidoc.generator."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from openapidoc.definition import ExternalDocs, Info, OpenAPIDefinition, Server, Tag
from openapidoc.errors import ConfigError, MergeConflictError, ValidationError
from openapidoc.generator import Generator, generate_openapi_doc

HELLO_SOURCES = {
    "hello/api.py": '''
        """Hello world API."""


        class Message:
            """@openapi
            components:
              schemas:
                Message:
                  type: object
                  properties:
                    content:
                      type: string
                      description: The contents of a message
                      example: Hello world!
            """

            def __init__(self, content):
                self.content = content


        class ErrorResponse:
            """@openapi
            components:
              responses:
                NotFound:
                  description: The specified resource was not found
                  content:
                    application/json:
                      schema:
                        $ref: "#/components/schemas/Error"
                Unauthorized:
                  description: Unauthorized
                  content:
                    application/json:
                      schema:
                        $ref: "#/components/schemas/Error"
              schemas:
                Error:
                  type: object
                  properties:
                    status:
                      type: string
                    error:
                      type: string
            """


        def say_hello():
            """@openapi
            paths:
              /:
                get:
                  tags:
                    - hello
                  summary: Say Hello
                  description: Returns a hello message
                  operationId: sayHello
                  responses:
                    '200':
                      description: successful operation
                      content:
                        application/json:
                          schema:
                            $ref: "#/components/schemas/Message"
            """
            return Message("Hello world!")
    ''',
}

EXPECTED_HELLO = (
    '{"components":{"responses":{"NotFound":{"content":{"application/json":{"schema":'
    '{"$ref":"#/components/schemas/Error"}}},"description":"The specified resource was not found"},'
    '"Unauthorized":{"content":{"application/json":{"schema":{"$ref":"#/components/schemas/Error"}}},'
    '"description":"Unauthorized"}},"schemas":{"Error":{"properties":{"error":{"type":"string"},'
    '"status":{"type":"string"}},"type":"object"},"Message":{"properties":{"content":'
    '{"description":"The contents of a message","example":"Hello world!","type":"string"}},'
    '"type":"object"}}},"externalDocs":{"description":"Find out more","url":"http://example.com"},'
    '"info":{"description":"A hello world API","title":"Hello API","version":"1.0.0"},'
    '"openapi":"3.0.0","paths":{"/":{"get":{"description":"Returns a hello message",'
    '"operationId":"sayHello","responses":{"200":{"content":{"application/json":{"schema":'
    '{"$ref":"#/components/schemas/Message"}}},"description":"successful operation"}},'
    '"summary":"Say Hello","tags":["hello"]}}},"servers":[{"url":"http://localhost:8080"}],'
    '"tags":[{"description":"hello related apis","name":"hello"}]}'
)


def _hello_definition() -> OpenAPIDefinition:
    return OpenAPIDefinition(
        openapi="3.0.0",
        info=Info(title="Hello API", version="1.0.0", description="A hello world API"),
        servers=(Server(url="http://localhost:8080"),),
        tags=(Tag(name="hello", description="hello related apis"),),
        external_docs=ExternalDocs(description="Find out more", url="http://example.com"),
    )


def test_generate_openapi_doc_produces_sorted_compact_json(repo_builder) -> None:  # type: ignore[no-untyped-def]
    repo_builder.write(HELLO_SOURCES)

    result = generate_openapi_doc(_hello_definition(), validate=True, root=repo_builder.path())

    assert result == EXPECTED_HELLO


def test_generate_openapi_doc_fails_validation_for_empty_definition(repo_builder) -> None:  # type: ignore[no-untyped-def]
    repo_builder.write(HELLO_SOURCES)

    with pytest.raises(ValidationError) as excinfo:
        generate_openapi_doc(OpenAPIDefinition(), validate=True, root=repo_builder.path())

    assert "value of openapi must be a non-empty string" in str(excinfo.value)


def test_generate_openapi_doc_skips_validation_when_disabled(repo_builder) -> None:  # type: ignore[no-untyped-def]
    repo_builder.write(HELLO_SOURCES)

    result = json.loads(generate_openapi_doc(OpenAPIDefinition(), validate=False, root=repo_builder.path()))

    assert result["openapi"] == ""
    assert "Message" in result["components"]["schemas"]


def test_generator_without_annotations_returns_base(repo_builder) -> None:  # type: ignore[no-untyped-def]
    repo_builder.write({"plain.py": 'def ping():\n    """Return pong."""\n'})

    result = Generator().run(repo_builder.path(), _hello_definition())

    assert result.document == _hello_definition().to_document()
    assert [d.name for d in result.declarations] == ["ping"]


def test_generator_later_file_wins_for_shared_schema(repo_builder) -> None:  # type: ignore[no-untyped-def]
    repo_builder.write(
        {
            "b_errors.py": '''
                class ApiError:
                    """@openapi
                    components:
                      schemas:
                        Error:
                          type: object
                          required: [code]
                    """
            ''',
            "a_errors.py": '''
                class LegacyError:
                    """@openapi
                    components:
                      schemas:
                        Error:
                          type: object
                          required: [status, error]
                    """
            ''',
        }
    )

    result = Generator().run(repo_builder.path(), _hello_definition())

    assert result.document["components"]["schemas"]["Error"]["required"] == ["code"]


def test_generator_reports_merge_conflict(repo_builder) -> None:  # type: ignore[no-untyped-def]
    repo_builder.write(
        {
            "routes.py": '''
                def routes():
                    """@openapi
                    paths:
                      - /a
                    """
            ''',
        }
    )
    base = {"openapi": "3.0.0", "info": {"title": "T", "version": "1"}, "paths": {}}

    with pytest.raises(MergeConflictError) as excinfo:
        Generator().run(repo_builder.path(), base)

    assert "routes" in str(excinfo.value)


def test_generator_reads_definition_from_config(repo_builder) -> None:  # type: ignore[no-untyped-def]
    repo_builder.write(
        {
            ".openapidoc.yml": """
                definition:
                  openapi: 3.0.0
                  info:
                    title: Configured
                    version: "2.0"
                output:
                  path: build/openapi.yaml
                  format: yaml
            """,
            "api.py": '''
                def health():
                    """@openapi
                    paths:
                      /health:
                        get:
                          responses:
                            '204':
                              description: healthy
                    """
            ''',
        }
    )

    result = Generator().run_and_write(repo_builder.path())

    assert result.output_path == repo_builder.path().resolve() / "build" / "openapi.yaml"
    written = yaml.safe_load(result.output_path.read_text(encoding="utf-8"))
    assert written["info"]["title"] == "Configured"
    assert written["paths"]["/health"]["get"]["responses"]["204"]["description"] == "healthy"


def test_generator_requires_a_definition(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="No base definition"):
        Generator().run(tmp_path)


def test_generator_reads_fragments_starting_after_opening_quotes(repo_builder) -> None:  # type: ignore[no-untyped-def]
    repo_builder.write(
        {
            "api.py": '''
                class Message:
                    """
                    @openapi
                    components:
                      schemas:
                        Message:
                          type: object
                    """
            ''',
        }
    )

    result = Generator().run(repo_builder.path(), _hello_definition())

    assert result.document["components"]["schemas"]["Message"] == {"type": "object"}


def test_generator_normalizes_dates_in_configured_definition(repo_builder) -> None:  # type: ignore[no-untyped-def]
    repo_builder.write(
        {
            ".openapidoc.yml": """
                definition:
                  openapi: 3.0.0
                  info:
                    title: Dated
                    version: "1"
                  components:
                    schemas:
                      D:
                        example: 2024-01-01
            """,
            "api.py": '''
                class D:
                    """@openapi
                    components:
                      schemas:
                        D:
                          example: x
                    """
            ''',
        }
    )

    result = Generator().run(repo_builder.path())

    assert result.document["components"]["schemas"]["D"] == {"example": "x"}


def test_generator_renders_dates_in_configured_definition_without_fragments(repo_builder) -> None:  # type: ignore[no-untyped-def]
    repo_builder.write(
        {
            ".openapidoc.yml": """
                definition:
                  openapi: 3.0.0
                  info:
                    title: Dated
                    version: "1"
                  components:
                    schemas:
                      D:
                        type: string
                        example: 2024-01-01
                output:
                  path: openapi.json
            """,
        }
    )

    result = Generator().run_and_write(repo_builder.path())

    written = json.loads(result.output_path.read_text(encoding="utf-8"))
    assert written["components"]["schemas"]["D"]["example"] == "2024-01-01"
