"""Configuration loading for openapidoc (.openapidoc.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .definition import OpenAPIDefinition
from .errors import ConfigError

CONFIG_FILENAME = ".openapidoc.yml"
OUTPUT_FORMATS = ("json", "yaml")


@dataclass
class OutputConfig:
    """Where and how the generated document is written."""

    path: Optional[Path] = None
    format: str = "json"
    indent: Optional[int] = None


@dataclass
class OpenAPIDocConfig:
    """Represents the settings defined in .openapidoc.yml."""

    root: Path
    definition: Optional[OpenAPIDefinition] = None
    validate: bool = True
    exclude_paths: List[str] = field(default_factory=list)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(config_path: Path) -> OpenAPIDocConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return OpenAPIDocConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    definition = None
    definition_data = data.get("definition")
    if definition_data is not None:
        definition = OpenAPIDefinition.from_mapping(_as_dict(definition_data, "definition"))

    validate = _as_bool(data.get("validate"))

    output_data = _as_dict(data.get("output"), "output")
    output = OutputConfig()
    if output_data:
        path_str = _as_str(output_data.get("path"))
        output.path = root / path_str if path_str else None
        fmt = _as_str(output_data.get("format"))
        if fmt is not None:
            fmt = fmt.lower()
            if fmt not in OUTPUT_FORMATS:
                raise ConfigError(
                    f"output.format must be one of {', '.join(OUTPUT_FORMATS)}, got {fmt!r}"
                )
            output.format = fmt
        output.indent = _as_int(output_data.get("indent"))

    return OpenAPIDocConfig(
        root=root,
        definition=definition,
        validate=True if validate is None else validate,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        output=output,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any, where: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{where} must be a mapping")
    return value


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "OpenAPIDocConfig", "OutputConfig", "load_config"]
