"""Deep merge of JSON-compatible value trees."""

from __future__ import annotations

import copy
from typing import Any, Sequence, Tuple

from .models import ValueKind, value_kind


class IncompatibleTypesError(TypeError):
    """Raised when both sides of a merge hold different kinds at the same path."""

    def __init__(self, path: Sequence[str], target_kind: ValueKind, patch_kind: ValueKind) -> None:
        self.path: Tuple[str, ...] = tuple(path)
        self.target_kind = target_kind
        self.patch_kind = patch_kind
        location = format_path(self.path)
        super().__init__(
            f"cannot merge {patch_kind.value} into {target_kind.value} at {location}"
        )


def deep_merge(target: Any, patch: Any) -> Any:
    """Return a new tree combining ``patch`` into ``target``.

    Objects merge key by key; arrays and scalars of the same kind are replaced
    by ``patch``. Neither argument is mutated.
    """
    return _merge(target, patch, ())


def _merge(target: Any, patch: Any, path: Tuple[str, ...]) -> Any:
    target_kind = value_kind(target)
    patch_kind = value_kind(patch)
    if target_kind is not patch_kind:
        raise IncompatibleTypesError(path, target_kind, patch_kind)
    if target_kind is not ValueKind.OBJECT:
        return copy.deepcopy(patch)

    merged = {}
    for key, value in target.items():
        if key in patch:
            merged[key] = _merge(value, patch[key], path + (key,))
        else:
            merged[key] = copy.deepcopy(value)
    for key, value in patch.items():
        if key not in target:
            merged[key] = copy.deepcopy(value)
    return merged


def format_path(path: Sequence[str]) -> str:
    """Render a key path as a JSON pointer."""
    if not path:
        return "/"
    escaped = (str(part).replace("~", "~0").replace("/", "~1") for part in path)
    return "/" + "/".join(escaped)


__all__ = ["IncompatibleTypesError", "deep_merge", "format_path"]
