"""Core data models shared across openapidoc components."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class DeclarationKind(str, Enum):
    """Kinds of documented source entities."""

    TYPE = "type"
    METHOD = "method"
    FUNCTION = "function"


@dataclass(frozen=True)
class Declaration:
    """A documented declaration and its raw documentation text."""

    kind: DeclarationKind
    name: str
    doc: str
    owner: str = ""
    path: str = ""
    position: int = 0

    @property
    def qualified_name(self) -> str:
        if self.owner:
            return f"{self.owner}.{self.name}"
        return self.name

    def describe(self) -> str:
        """Return a human readable label used in diagnostics."""
        label = f"{self.kind.value} {self.qualified_name}"
        if self.path:
            label += f" ({self.path})"
        return label


class ValueKind(str, Enum):
    """Kinds of JSON-compatible values produced by fragment decoding."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


def value_kind(value: Any) -> ValueKind:
    """Classify a decoded value; raises TypeError for non JSON-compatible values."""
    if value is None:
        return ValueKind.NULL
    # bool is a subclass of int and must be checked first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, dict):
        return ValueKind.OBJECT
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    raise TypeError(f"Unsupported value of type {type(value).__name__}")
