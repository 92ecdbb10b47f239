"""In-memory value model shared by every TOON component.

Values are plain JSON data (``None``, ``bool``, ``int``, ``float``, ``str``,
``list`` and ``dict`` with string keys). ``ValueKind`` closes that union so
callers dispatch on one tag instead of scattering ``isinstance`` checks.
"""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any

from .types import JsonValue

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class ValueKind(Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


SCALAR_KINDS = frozenset(
    {ValueKind.NULL, ValueKind.BOOL, ValueKind.NUMBER, ValueKind.STRING}
)


def kind_of(value: JsonValue) -> ValueKind:
    """
    Classify a normalized value.

    ``bool`` is checked before numbers since it subclasses ``int``.

    Raises:
        TypeError: If the value is not part of the JSON data model.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list):
        return ValueKind.ARRAY
    if isinstance(value, dict):
        return ValueKind.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def is_scalar(value: JsonValue) -> bool:
    """Check if value is a scalar (not an object or array)."""
    return kind_of(value) in SCALAR_KINDS


def normalize_value(value: Any) -> JsonValue:
    """
    Normalize a host value into the JSON value model.

    Converts:
    - NaN and infinities to null, -0.0 to 0
    - Tuples, sets and other iterables to lists (sets sorted by ``str``)
    - Objects with ``isoformat()`` (dates, datetimes) to ISO strings
    - Non-string object keys to strings

    Args:
        value: The value to normalize.

    Returns:
        A JSON-compatible value.
    """
    if value is None or isinstance(value, (bool, str)):
        return value

    if isinstance(value, (int, float)):
        if isinstance(value, float):
            if math.isnan(value) or math.isinf(value):
                return None
            if value == 0.0:
                return 0
        return value

    if isinstance(value, dict):
        return {str(k): normalize_value(v) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        return [normalize_value(v) for v in value]

    if isinstance(value, (set, frozenset)):
        return [normalize_value(v) for v in sorted(value, key=str)]

    if hasattr(value, "isoformat"):
        return value.isoformat()

    if hasattr(value, "__iter__"):
        return [normalize_value(v) for v in value]

    return str(value)


def child_path(path: str, key: str | int) -> str:
    """Extend a diagnostic path with an object key or array index."""
    if isinstance(key, int):
        return f"{path}[{key}]"
    if _IDENTIFIER.match(key):
        return f"{path}.{key}"
    escaped = key.replace("\\", "\\\\").replace('"', '\\"')
    return f'{path}["{escaped}"]'


def find_mismatch(expected: JsonValue, actual: JsonValue, path: str = "$") -> str | None:
    """
    Deep-compare two values and return the first path where they diverge.

    Objects compare by key set, then per key (key order is ignored). Arrays
    compare positionally. Booleans never equal numbers; numbers compare by
    numeric value, so ``1`` and ``1.0`` are equal.

    Returns:
        ``None`` when the values are structurally equal, otherwise a path such
        as ``$.tasks[1].title``.
    """
    kind = kind_of(expected)
    if kind is not kind_of(actual):
        return path

    if kind is ValueKind.OBJECT:
        for key in expected:
            if key not in actual:
                return child_path(path, key)
        for key in actual:
            if key not in expected:
                return child_path(path, key)
        for key, value in expected.items():
            mismatch = find_mismatch(value, actual[key], child_path(path, key))
            if mismatch is not None:
                return mismatch
        return None

    if kind is ValueKind.ARRAY:
        for index, (left, right) in enumerate(zip(expected, actual)):
            mismatch = find_mismatch(left, right, child_path(path, index))
            if mismatch is not None:
                return mismatch
        if len(expected) != len(actual):
            return child_path(path, min(len(expected), len(actual)))
        return None

    return None if expected == actual else path


def values_equal(left: JsonValue, right: JsonValue) -> bool:
    """Structural equality under the round-trip rules of ``find_mismatch``."""
    return find_mismatch(left, right) is None
