"""Exception hierarchy for openapidoc generation runs."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from openapidoc.models import Declaration
    from openapidoc.validation import ValidationIssue


class OpenAPIDocError(RuntimeError):
    """Base class for errors that abort a generation run."""


class ConfigError(OpenAPIDocError):
    """Raised when the configuration file cannot be parsed."""


class SourceParseError(OpenAPIDocError):
    """Raised when a source file cannot be parsed into declarations."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class DeclarationError(OpenAPIDocError):
    """An error attributable to a single annotated declaration."""

    def __init__(self, message: str, declaration: Optional["Declaration"] = None) -> None:
        super().__init__(message)
        self.declaration = declaration


class FragmentDecodeError(DeclarationError):
    """Raised when an @openapi block is not well-formed YAML."""


class MergeConflictError(DeclarationError):
    """Raised when a fragment disagrees in kind with the accumulated document."""


class ValidationError(OpenAPIDocError):
    """Raised when the finished document fails OpenAPI structural validation."""

    def __init__(self, message: str, issues: Sequence["ValidationIssue"] = ()) -> None:
        super().__init__(message)
        self.issues: List["ValidationIssue"] = list(issues)


__all__ = [
    "ConfigError",
    "DeclarationError",
    "FragmentDecodeError",
    "MergeConflictError",
    "OpenAPIDocError",
    "SourceParseError",
    "ValidationError",
]
