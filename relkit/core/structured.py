"""Helpers for reading untyped TOML tables.

Use these at the boundary where ``relkit.toml`` is parsed. They validate at
runtime and narrow types for the checker.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    """Return obj as StrDict if it matches, else None."""
    if is_str_dict(obj):
        return obj
    return None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table from a mapping.

    Raises:
        TypeError: If the key is present but is not a table.
    """
    value = table.get(key)
    if value is None:
        return None
    d = as_str_dict(value)
    if d is None:
        raise TypeError(f"[{key}] must be a table")
    return d


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value, stripping whitespace.

    Returns None if missing or empty after stripping.

    Raises:
        TypeError: If the key is present but is not a string.
    """
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string")
    s = value.strip()
    return s or None


def get_str_list(table: Mapping[str, object], key: str) -> tuple[str, ...] | None:
    """Get a list of strings as a tuple.

    An explicit empty list is returned as an empty tuple, a missing key as None.

    Raises:
        TypeError: If the key is present but is not a list of strings.
    """
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise TypeError(f"{key} must be a list of strings")
    items = cast(list[object], value)
    out: list[str] = []
    for item in items:
        if not isinstance(item, str):
            raise TypeError(f"{key} must be a list of strings")
        out.append(item)
    return tuple(out)
