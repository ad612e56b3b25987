"""Serialization of generated documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml


def render_document(document: Mapping[str, Any], fmt: str = "json", *, indent: Optional[int] = None) -> str:
    """Render ``document`` with sorted keys as JSON or YAML."""
    if fmt == "json":
        separators = (",", ":") if indent is None else (",", ": ")
        return json.dumps(document, sort_keys=True, indent=indent, separators=separators, ensure_ascii=False)
    if fmt == "yaml":
        return yaml.safe_dump(
            dict(document),
            sort_keys=True,
            allow_unicode=True,
            default_flow_style=False,
            indent=indent or 2,
        )
    raise ValueError(f"Unsupported output format: {fmt}")


def write_document(path: Path, document: Mapping[str, Any], fmt: str = "json", *, indent: Optional[int] = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    text = render_document(document, fmt, indent=indent)
    if not text.endswith("\n"):
        text += "\n"
    path.write_text(text, encoding="utf-8")
    return path


__all__ = ["render_document", "write_document"]
