"""Tests for openapidoc.merge."""

from __future__ import annotations

import copy

import pytest

from openapidoc.merge import IncompatibleTypesError, deep_merge, format_path
from openapidoc.models import ValueKind


def test_merge_combines_disjoint_keys() -> None:
    target = {"info": {"title": "API"}}
    patch = {"paths": {"/": {}}}

    assert deep_merge(target, patch) == {"info": {"title": "API"}, "paths": {"/": {}}}


def test_merge_recurses_into_shared_objects() -> None:
    target = {"components": {"schemas": {"Message": {"type": "object"}}}}
    patch = {"components": {"schemas": {"Error": {"type": "object"}}}}

    merged = deep_merge(target, patch)

    assert merged == {
        "components": {
            "schemas": {
                "Message": {"type": "object"},
                "Error": {"type": "object"},
            }
        }
    }


def test_merge_replaces_scalars_and_arrays() -> None:
    target = {"info": {"version": "1.0.0"}, "tags": [{"name": "a"}, {"name": "b"}]}
    patch = {"info": {"version": "2.0.0"}, "tags": [{"name": "c"}]}

    merged = deep_merge(target, patch)

    assert merged["info"]["version"] == "2.0.0"
    assert merged["tags"] == [{"name": "c"}]


def test_merge_treats_int_and_float_as_numbers() -> None:
    assert deep_merge({"maximum": 10}, {"maximum": 10.5}) == {"maximum": 10.5}


def test_merge_null_replaces_null() -> None:
    assert deep_merge({"example": None}, {"example": None}) == {"example": None}


def test_merge_preserves_target_key_order_then_new_keys() -> None:
    merged = deep_merge({"b": 1, "a": 2}, {"c": 3, "b": 4})

    assert list(merged) == ["b", "a", "c"]
    assert merged == {"b": 4, "a": 2, "c": 3}


def test_merge_does_not_mutate_inputs() -> None:
    target = {"components": {"schemas": {"A": {"type": "object"}}}}
    patch = {"components": {"schemas": {"B": {"type": "string"}}}}
    target_before = copy.deepcopy(target)
    patch_before = copy.deepcopy(patch)

    merged = deep_merge(target, patch)
    merged["components"]["schemas"]["B"]["type"] = "integer"

    assert target == target_before
    assert patch == patch_before


@pytest.mark.parametrize(
    ("target", "patch", "kinds"),
    [
        ({"paths": {}}, {"paths": []}, (ValueKind.OBJECT, ValueKind.ARRAY)),
        ({"info": {"title": "x"}}, {"info": "x"}, (ValueKind.OBJECT, ValueKind.STRING)),
        ({"deprecated": True}, {"deprecated": "yes"}, (ValueKind.BOOLEAN, ValueKind.STRING)),
        ({"example": None}, {"example": 1}, (ValueKind.NULL, ValueKind.NUMBER)),
        ({"maximum": 1}, {"maximum": True}, (ValueKind.NUMBER, ValueKind.BOOLEAN)),
    ],
)
def test_merge_rejects_kind_mismatch(target, patch, kinds) -> None:  # type: ignore[no-untyped-def]
    with pytest.raises(IncompatibleTypesError) as excinfo:
        deep_merge(target, patch)

    key = next(iter(target))
    assert excinfo.value.path == (key,)
    assert (excinfo.value.target_kind, excinfo.value.patch_kind) == kinds
    assert f"/{key}" in str(excinfo.value)


def test_merge_reports_nested_path_of_conflict() -> None:
    target = {"components": {"schemas": {"Pet": {"type": "object"}}}}
    patch = {"components": {"schemas": {"Pet": ["not", "an", "object"]}}}

    with pytest.raises(IncompatibleTypesError) as excinfo:
        deep_merge(target, patch)

    assert excinfo.value.path == ("components", "schemas", "Pet")
    assert "/components/schemas/Pet" in str(excinfo.value)


def test_merge_is_associative() -> None:
    a = {"info": {"title": "A", "version": "1"}, "tags": [{"name": "a"}]}
    b = {"info": {"title": "B"}, "paths": {"/a": {"get": {"summary": "a"}}}}
    c = {"paths": {"/a": {"get": {"summary": "c"}, "post": {}}}, "tags": []}

    assert deep_merge(deep_merge(a, b), c) == deep_merge(a, deep_merge(b, c))


def test_merge_is_idempotent_on_identical_objects() -> None:
    x = {"components": {"schemas": {"Message": {"type": "object", "required": ["id"]}}}}

    assert deep_merge(x, x) == x


def test_merge_is_not_commutative() -> None:
    a = {"info": {"title": "A"}}
    b = {"info": {"title": "B"}}

    assert deep_merge(a, b) != deep_merge(b, a)


def test_format_path_escapes_pointer_tokens() -> None:
    assert format_path(()) == "/"
    assert format_path(("paths", "/pets/{id}", "get")) == "/paths/~1pets~1{id}/get"
