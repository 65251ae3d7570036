"""Structured configuration values.

A config body is a tree of objects, arrays and scalars as produced by a
JSON or YAML parser. Equality between two bodies decides whether a
rewritten file is a real modification, so it is defined here on tagged
kinds rather than on Python's loose ``==`` (where ``1 == 1.0 == True``).
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any


class ValueKind(Enum):
    """Tag of a structured value node."""

    NULL = "null"
    BOOL = "bool"
    INTEGER = "integer"
    REAL = "real"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def value_kind(value: Any) -> ValueKind:
    """Return the tag of a structured value node.

    Raises:
        TypeError: If the value is outside the structured-value model.
    """
    if value is None:
        return ValueKind.NULL
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.REAL
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, dict):
        return ValueKind.OBJECT
    raise TypeError(f"unsupported value type: {type(value).__name__}")


def ensure_structured(value: Any, path: str = "$") -> None:
    """Check that every node of a tree is a structured value.

    Object keys must be strings and reals must be finite.

    Raises:
        TypeError: Naming the first offending node by its JSON-path.
    """
    kind = _kind_at(value, path)
    if kind is ValueKind.REAL and not math.isfinite(value):
        raise TypeError(f"non-finite number at {path}")
    if kind is ValueKind.ARRAY:
        for i, item in enumerate(value):
            ensure_structured(item, f"{path}[{i}]")
    elif kind is ValueKind.OBJECT:
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"non-string key {key!r} at {path}")
            ensure_structured(item, f"{path}.{key}")


def _kind_at(value: Any, path: str) -> ValueKind:
    try:
        return value_kind(value)
    except TypeError as e:
        raise TypeError(f"{e} at {path}") from None


def content_equal(left: Any, right: Any) -> bool:
    """Type-strict deep equality of two structured values.

    Two nodes are equal only when their kinds match: ``1``, ``1.0`` and
    ``True`` are three different values. Object key order is ignored,
    array order is not.
    """
    kind = value_kind(left)
    if kind is not value_kind(right):
        return False

    if kind is ValueKind.OBJECT:
        if left.keys() != right.keys():
            return False
        return all(content_equal(left[k], right[k]) for k in left)

    if kind is ValueKind.ARRAY:
        if len(left) != len(right):
            return False
        return all(content_equal(a, b) for a, b in zip(left, right))

    return bool(left == right)
