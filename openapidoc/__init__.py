"""Generate OpenAPI 3 documents from ``@openapi`` annotated docstrings."""

from .assembler import DocumentAssembler, order_declarations
from .definition import (
    Components,
    Contact,
    ExternalDocs,
    Info,
    License,
    OpenAPIDefinition,
    Server,
    Tag,
)
from .errors import (
    ConfigError,
    FragmentDecodeError,
    MergeConflictError,
    OpenAPIDocError,
    SourceParseError,
    ValidationError,
)
from .generator import GenerationResult, Generator, generate_openapi_doc
from .merge import IncompatibleTypesError, deep_merge
from .models import Declaration, DeclarationKind, ValueKind, value_kind
from .selector import MARKER, select_fragment
from .validation import OpenAPISchemaValidator, ValidationIssue, validate_openapi_doc

__version__ = "0.1.0"

__all__ = [
    "Components",
    "ConfigError",
    "Contact",
    "Declaration",
    "DeclarationKind",
    "DocumentAssembler",
    "ExternalDocs",
    "FragmentDecodeError",
    "GenerationResult",
    "Generator",
    "IncompatibleTypesError",
    "Info",
    "License",
    "MARKER",
    "MergeConflictError",
    "OpenAPIDefinition",
    "OpenAPIDocError",
    "OpenAPISchemaValidator",
    "Server",
    "SourceParseError",
    "Tag",
    "ValidationError",
    "ValidationIssue",
    "ValueKind",
    "deep_merge",
    "generate_openapi_doc",
    "order_declarations",
    "select_fragment",
    "validate_openapi_doc",
    "value_kind",
]
