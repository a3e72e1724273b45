"""Narrowing helpers for untyped JSON loaded from the manifest."""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]

__all__ = ["StrDict", "as_str_dict", "get_str", "get_table", "is_str_dict"]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict whose keys are all strings."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a stripped, non-empty string value.

    JSON ``null``, a missing key, a non-string value and a blank string all
    come back as None.
    """
    value = table.get(key)
    if not isinstance(value, str):
        return None
    s = value.strip()
    return s or None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested JSON object from a mapping."""
    return as_str_dict(table.get(key))
