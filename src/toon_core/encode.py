"""TOON encoder implementation."""

from collections.abc import Generator
from typing import Any

from .primitives import encode_key, encode_primitive, format_array_header
from .tabular import is_tabular, table_fields
from .types import EncodeOptions, JsonValue
from .value import ValueKind, kind_of, normalize_value

ROOT_EMPTY_OBJECT = "{}"


def encode(value: Any, options: EncodeOptions | None = None) -> str:
    """
    Encode a Python value to TOON format.

    Args:
        value: The value to encode (dict, list, or primitive).
        options: Encoding options.

    Returns:
        The TOON-formatted string.
    """
    opts = options or EncodeOptions()
    return opts.line_terminator.join(encode_lines(value, opts))


def encode_lines(
    value: Any, options: EncodeOptions | None = None
) -> Generator[str, None, None]:
    """
    Encode a Python value to TOON format, yielding lines.

    This is memory-efficient for large data structures.

    Args:
        value: The value to encode.
        options: Encoding options.

    Yields:
        Lines of TOON output, without terminators.
    """
    opts = options or EncodeOptions()
    normalized = normalize_value(value)
    kind = kind_of(normalized)

    if kind is ValueKind.OBJECT:
        if not normalized:
            yield ROOT_EMPTY_OBJECT
        else:
            yield from _encode_object_lines(normalized, opts, 0)
    elif kind is ValueKind.ARRAY:
        yield from _encode_array(None, normalized, opts, 0)
    else:
        yield encode_primitive(normalized)


def _encode_object_lines(
    obj: dict, opts: EncodeOptions, depth: int
) -> Generator[str, None, None]:
    """Encode an object's key-value pairs."""
    for key, value in obj.items():
        yield from _encode_field(key, value, opts, depth)


def _encode_field(
    key: str, value: JsonValue, opts: EncodeOptions, depth: int
) -> Generator[str, None, None]:
    """Encode one key-value pair at the given depth."""
    indent = " " * (opts.indent * depth)
    kind = kind_of(value)

    if kind is ValueKind.OBJECT:
        # Empty objects are a bare key with no children
        yield f"{indent}{encode_key(key)}:"
        yield from _encode_object_lines(value, opts, depth + 1)
    elif kind is ValueKind.ARRAY:
        yield from _encode_array(key, value, opts, depth)
    else:
        yield f"{indent}{encode_key(key)}: {encode_primitive(value)}"


def _encode_array(
    key: str | None,
    arr: list,
    opts: EncodeOptions,
    depth: int,
    list_item: bool = False,
) -> Generator[str, None, None]:
    """
    Encode an array as a record block or a list block.

    When ``list_item`` is set the header shares a ``- `` marker line. A keyed
    header on a marker line opens an object, so its children sit one level
    deeper than the object's remaining fields.
    """
    lead = " " * (opts.indent * depth) + ("- " if list_item else "")
    child_depth = depth + 2 if list_item and key is not None else depth + 1

    if is_tabular(arr):
        fields = table_fields(arr)
        yield lead + format_array_header(len(arr), key, fields, opts.delimiter)
        for row in arr:
            yield _encode_tabular_row(row, fields, opts, child_depth)
    else:
        yield lead + format_array_header(len(arr), key, None, opts.delimiter)
        for item in arr:
            yield from _encode_list_item(item, opts, child_depth)


def _encode_list_item(
    item: JsonValue, opts: EncodeOptions, depth: int
) -> Generator[str, None, None]:
    """Encode a list item (after the - marker)."""
    indent = " " * (opts.indent * depth)
    kind = kind_of(item)

    if kind is ValueKind.OBJECT:
        if not item:
            # Empty object as list item
            yield f"{indent}-"
        else:
            yield from _encode_object_list_item(item, opts, depth)
    elif kind is ValueKind.ARRAY:
        yield from _encode_array(None, item, opts, depth, list_item=True)
    else:
        yield f"{indent}- {encode_primitive(item)}"


def _encode_object_list_item(
    obj: dict, opts: EncodeOptions, depth: int
) -> Generator[str, None, None]:
    """Encode an object as a list item with first field on hyphen line."""
    indent = " " * (opts.indent * depth)

    items = iter(obj.items())
    first_key, first_value = next(items)
    kind = kind_of(first_value)

    if kind is ValueKind.OBJECT:
        yield f"{indent}- {encode_key(first_key)}:"
        yield from _encode_object_lines(first_value, opts, depth + 2)
    elif kind is ValueKind.ARRAY:
        yield from _encode_array(first_key, first_value, opts, depth, list_item=True)
    else:
        yield f"{indent}- {encode_key(first_key)}: {encode_primitive(first_value)}"

    # Remaining fields at depth + 1
    for key, value in items:
        yield from _encode_field(key, value, opts, depth + 1)


def _encode_tabular_row(
    row: dict, fields: list[str], opts: EncodeOptions, depth: int
) -> str:
    """Encode a single tabular row."""
    indent = " " * (opts.indent * depth)
    values = [encode_primitive(row[f], opts.delimiter) for f in fields]
    return indent + opts.delimiter.join(values)
