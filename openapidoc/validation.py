"""OpenAPI 3 structural validation of generated documents."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Protocol, Union

import yaml
from jsonschema import Draft202012Validator

from .errors import ValidationError
from .fragments import to_json_value
from .logging import get_logger
from .schema import OPENAPI_3_SCHEMA

_VERSION_PATTERN = re.compile(r"^3\.\d+\.\d+(-.+)?$")
_FAILURE_PREFIX = "OpenAPI document validation failed"


@dataclass
class ValidationIssue:
    """Represents a single structural problem in a document."""

    path: str
    message: str

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class Validator(Protocol):
    """Protocol implemented by document validators."""

    def validate(self, document: Mapping[str, Any]) -> List[ValidationIssue]:
        """Run validation and return any issues."""


class OpenAPISchemaValidator:
    """Checks required top-level fields, then the bundled OpenAPI 3 schema.

    Required-field problems are reported alone, mirroring how OpenAPI loaders
    stop at the first missing root field.
    """

    def __init__(self) -> None:
        self._validator = Draft202012Validator(OPENAPI_3_SCHEMA)
        self.logger = get_logger("validation")

    def validate(self, document: Mapping[str, Any]) -> List[ValidationIssue]:
        issue = self._check_required_fields(document)
        if issue is not None:
            return [issue]

        errors = sorted(
            self._validator.iter_errors(document),
            key=lambda error: [str(part) for part in error.absolute_path],
        )
        issues = [
            ValidationIssue(
                path=" -> ".join(str(part) for part in error.absolute_path),
                message=error.message,
            )
            for error in errors
        ]
        self.logger.debug("Schema validation reported %d issues", len(issues))
        return issues

    @staticmethod
    def _check_required_fields(document: Mapping[str, Any]) -> ValidationIssue | None:
        if not isinstance(document, Mapping):
            return ValidationIssue(path="", message="document must be an object")
        openapi = document.get("openapi")
        if not isinstance(openapi, str) or not openapi:
            return ValidationIssue(path="", message="value of openapi must be a non-empty string")
        if not _VERSION_PATTERN.match(openapi):
            return ValidationIssue(
                path="",
                message=f"unsupported openapi version {openapi!r}: only OpenAPI 3.x is supported",
            )
        info = document.get("info")
        if not isinstance(info, Mapping):
            return ValidationIssue(path="", message="value of info must be an object")
        for key in ("title", "version"):
            value = info.get(key)
            if not isinstance(value, str) or not value:
                return ValidationIssue(path="info", message=f"value of {key} must be a non-empty string")
        return None


def format_issues(issues: List[ValidationIssue]) -> str:
    return "; ".join(str(issue) for issue in issues)


def ensure_valid(document: Mapping[str, Any], validator: Validator | None = None) -> None:
    """Raise ValidationError when ``validator`` reports any issue."""
    validator = validator or OpenAPISchemaValidator()
    issues = validator.validate(document)
    if issues:
        raise ValidationError(f"{_FAILURE_PREFIX}: {format_issues(issues)}", issues)


def validate_openapi_doc(data: Union[bytes, str, Mapping[str, Any]]) -> bool:
    """Validate a serialized (JSON or YAML) or already loaded OpenAPI document.

    Returns True when valid and raises ValidationError otherwise. Empty input
    is treated as an empty document.
    """
    if isinstance(data, Mapping):
        document: Any = data
    else:
        try:
            text = data.decode("utf-8") if isinstance(data, bytes) else data
        except UnicodeDecodeError as exc:
            raise ValidationError(f"{_FAILURE_PREFIX}: document is not valid UTF-8: {exc}") from exc
        document = _load_text(text)
    ensure_valid(document if document is not None else {})
    return True


def _load_text(text: str) -> Any:
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    try:
        return to_json_value(yaml.safe_load(text))
    except yaml.YAMLError as exc:
        raise ValidationError(f"{_FAILURE_PREFIX}: document is neither JSON nor YAML: {exc}") from exc


__all__ = [
    "OpenAPISchemaValidator",
    "ValidationIssue",
    "Validator",
    "ensure_valid",
    "format_issues",
    "validate_openapi_doc",
]
