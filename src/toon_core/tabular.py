"""Tabular eligibility detection.

An array is written as a record block (one header line plus one row per
element) only when every element is an object with the same key set and
every value under every key is a scalar. Eligibility is purely structural:
it ignores array size and whether the table would actually be smaller.
"""

from __future__ import annotations

from .types import JsonValue
from .value import ValueKind, is_scalar, kind_of


def is_tabular(arr: list[JsonValue]) -> bool:
    """Check if array can use tabular format."""
    if not arr:
        return False

    # All elements must be objects
    if not all(kind_of(v) is ValueKind.OBJECT for v in arr):
        return False

    # All objects must have same keys; a header needs at least one field
    first_keys = set(arr[0].keys())
    if not first_keys:
        return False

    for item in arr[1:]:
        if set(item.keys()) != first_keys:
            return False

    # All values must be primitives
    return all(is_scalar(v) for item in arr for v in item.values())


def table_fields(arr: list[JsonValue]) -> list[str]:
    """Header fields of a tabular array, in the first element's key order."""
    return list(arr[0].keys())
