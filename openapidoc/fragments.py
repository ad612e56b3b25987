"""Conversion of annotated YAML blocks into JSON-compatible value trees."""

from __future__ import annotations

import datetime as _dt
from typing import Any

import yaml


def decode_fragment(markup: str) -> Any:
    """Decode a YAML block into plain dicts, lists and scalars.

    Mapping keys are coerced to strings and timestamps are rendered in ISO
    format so the result serializes as JSON unchanged. Raises
    ``yaml.YAMLError`` on malformed markup.
    """
    loaded = yaml.safe_load(markup)
    return to_json_value(loaded)


def to_json_value(value: Any) -> Any:
    if isinstance(value, dict):
        return {_json_key(key): to_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]
    if isinstance(value, (_dt.datetime, _dt.date)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, set):
        return [to_json_value(item) for item in sorted(value, key=repr)]
    return value


def _json_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    if isinstance(key, (_dt.datetime, _dt.date)):
        return key.isoformat()
    return str(key)


__all__ = ["decode_fragment", "to_json_value"]
