"""TOON decoder implementation."""

from __future__ import annotations

import re
from collections.abc import AsyncIterable, Iterable
from typing import TYPE_CHECKING

from .encode import ROOT_EMPTY_OBJECT
from .errors import (
    EmptyDocumentError,
    IndentationError,
    MalformedTableRowError,
    UnexpectedTokenError,
    UnterminatedQuoteError,
)
from .primitives import parse_primitive, parse_string_literal
from .string_utils import find_unquoted_colon, has_unterminated_quote, split_by_delimiter
from .types import ArrayHeaderInfo, DecodeOptions, JsonValue, ParsedLine

if TYPE_CHECKING:
    from collections.abc import Generator

_QUOTED = r"\"(?:[^\"\\]|\\.)*\""

# Pattern for array header: key[N<delim?>]{fields}:
ARRAY_HEADER_PATTERN = re.compile(
    rf"^(?P<key>(?:[^:\[\]{{}}\"]+|{_QUOTED})?)"  # Optional key (possibly quoted)
    r"\[(?P<length>\d+)(?P<delim>[,\t|])?\]"  # [N<delim?>]
    rf"(?:\{{(?P<fields>(?:[^}}\"]|{_QUOTED})*)\}})?"  # Optional {fields}
    r":(?P<rest>.*)$"  # Colon and rest
)


def decode(text: str, options: DecodeOptions | None = None) -> JsonValue:
    """
    Decode TOON text to a Python value.

    Args:
        text: The TOON-formatted string.
        options: Decoding options.

    Returns:
        The decoded Python value.

    Raises:
        ToonDecodeError: For malformed input; the subclass names the failure.
    """
    return decode_lines(text.split("\n"), options)


def decode_lines(lines: Iterable[str], options: DecodeOptions | None = None) -> JsonValue:
    """
    Decode TOON from pre-split lines.

    Args:
        lines: Iterable of line strings.
        options: Decoding options.

    Returns:
        The decoded Python value.
    """
    opts = options or DecodeOptions()
    parsed_lines = list(_parse_lines(lines, opts.indent))

    if not parsed_lines:
        raise EmptyDocumentError("Document is empty")

    cursor = _Cursor(parsed_lines)
    result = _decode_root(cursor)

    leftover = cursor.peek()
    if leftover is not None:
        raise UnexpectedTokenError(
            f"Unexpected line: {leftover.content}", leftover.line_number
        )

    return result


async def decode_stream_async(
    lines: AsyncIterable[str], options: DecodeOptions | None = None
) -> JsonValue:
    """
    Decode TOON from an async iterable of lines.

    Args:
        lines: Async iterable of line strings.
        options: Decoding options.

    Returns:
        The decoded Python value.
    """
    collected = []
    async for line in lines:
        collected.append(line.rstrip("\n"))
    return decode_lines(collected, options)


class _Cursor:
    """Cursor for iterating through parsed lines."""

    def __init__(self, lines: list[ParsedLine]):
        self.lines = lines
        self.pos = 0

    def peek(self) -> ParsedLine | None:
        """Look at current line without advancing."""
        if self.pos < len(self.lines):
            return self.lines[self.pos]
        return None

    def advance(self) -> ParsedLine | None:
        """Get current line and advance position."""
        line = self.peek()
        if line:
            self.pos += 1
        return line

    def peek_at_depth(self, depth: int) -> ParsedLine | None:
        """Peek at next line at specific depth."""
        line = self.peek()
        if line and line.depth == depth:
            return line
        return None


def _parse_lines(lines: Iterable[str], indent_size: int) -> Generator[ParsedLine, None, None]:
    """Parse raw lines into ParsedLine objects, skipping blank lines."""
    max_depth = 0
    for i, raw in enumerate(lines, start=1):
        raw = raw.removesuffix("\r")
        if not raw.strip():
            continue

        # Count leading spaces
        stripped = raw.lstrip(" ")
        indent = len(raw) - len(stripped)

        if stripped[0] == "\t":
            raise IndentationError("Tab in indentation (use spaces)", i)

        if indent % indent_size != 0:
            raise IndentationError(
                f"Indentation {indent} is not a multiple of {indent_size}", i
            )

        depth = indent // indent_size
        if depth > max_depth:
            raise IndentationError(
                f"Indentation jumps to depth {depth}, expected at most {max_depth}", i
            )

        content = stripped.rstrip()
        if has_unterminated_quote(content):
            raise UnterminatedQuoteError(f"Unterminated string: {content}", i)

        max_depth = depth + (2 if _opens_item_field(content) else 1)

        yield ParsedLine(content=content, depth=depth, line_number=i)


def _opens_item_field(content: str) -> bool:
    """
    Check for a list marker line whose first object field opens a block.

    The block under ``- key:`` nests two levels below the marker.
    """
    if not content.startswith("- "):
        return False
    rest = content[2:]
    return rest.endswith(":") and not rest.startswith("[")


def _decode_root(cursor: _Cursor) -> JsonValue:
    """Decode the root value."""
    line = cursor.peek()
    content = line.content

    if content.startswith("["):
        return _decode_root_array(cursor)

    if find_unquoted_colon(content) == -1:
        cursor.advance()
        if cursor.peek() is None:
            if content == ROOT_EMPTY_OBJECT:
                return {}
            # Single primitive
            return parse_primitive(content, line.line_number)
        return _decode_headerless_table(line, cursor)

    # Root object
    return _decode_object(cursor, 0)


def _decode_root_array(cursor: _Cursor) -> list:
    """Decode a root-level array."""
    line = cursor.advance()
    match = ARRAY_HEADER_PATTERN.match(line.content)
    if not match or match.group("key"):
        raise UnexpectedTokenError(f"Invalid array header: {line.content}", line.line_number)
    return _decode_array_body(match, cursor, line, 1)


def _decode_headerless_table(header_line: ParsedLine, cursor: _Cursor) -> list[dict]:
    """
    Decode a root table written as a bare field line followed by row lines.

    The encoder never emits this form; it is accepted so hand-written tables
    such as ``id,name`` plus rows decode without an array header.
    """
    fields = [
        _parse_key(f, header_line)
        for f in split_by_delimiter(header_line.content, ",", header_line.line_number)
    ]
    if len(fields) < 2:
        raise UnexpectedTokenError(
            f"Expected key: value or array header, got: {header_line.content}",
            header_line.line_number,
        )

    # Rows sit either beside the field line or one level under it
    row_depth = cursor.peek().depth

    rows = []
    while line := cursor.peek_at_depth(row_depth):
        cursor.advance()
        rows.append(_decode_row(line, fields, ","))
    return rows


def _decode_object(cursor: _Cursor, depth: int) -> dict:
    """Decode an object at the given depth."""
    result: dict = {}
    _decode_fields_into(result, cursor, depth)
    return result


def _decode_fields_into(result: dict, cursor: _Cursor, depth: int) -> None:
    """Decode consecutive key-value lines at ``depth`` into ``result``."""
    while line := cursor.peek_at_depth(depth):
        cursor.advance()
        key, value = _decode_key_value(line, cursor, depth)
        if key in result:
            raise UnexpectedTokenError(f"Duplicate key: {key}", line.line_number)
        result[key] = value


def _decode_key_value(
    line: ParsedLine, cursor: _Cursor, depth: int
) -> tuple[str, JsonValue]:
    """Decode a key: value pair from a line."""
    content = line.content

    if content == "-" or content.startswith("- "):
        raise UnexpectedTokenError(f"List item outside of an array: {content}", line.line_number)

    # Check for array header pattern
    array_match = ARRAY_HEADER_PATTERN.match(content)
    if array_match:
        if not array_match.group("key"):
            raise UnexpectedTokenError(
                f"Array header without a key inside an object: {content}", line.line_number
            )
        key = _parse_key(array_match.group("key"), line)
        return key, _decode_array_body(array_match, cursor, line, depth + 1)

    # Regular key: value
    colon_pos = find_unquoted_colon(content)
    if colon_pos == -1:
        raise UnexpectedTokenError(f"Expected key: value, got: {content}", line.line_number)

    key = _parse_key(content[:colon_pos], line)
    value_part = content[colon_pos + 1 :].strip()

    if value_part:
        return key, parse_primitive(value_part, line.line_number)

    # Nested object, or an empty one when nothing is indented below
    next_line = cursor.peek()
    if next_line and next_line.depth > depth:
        return key, _decode_object(cursor, depth + 1)
    return key, {}


def _decode_array_body(
    match: re.Match, cursor: _Cursor, line: ParsedLine, child_depth: int
) -> list:
    """Decode the array introduced by a matched header line."""
    header = _parse_array_header_from_match(match, line)
    rest = match.group("rest").strip()

    if header.fields:
        if rest:
            raise UnexpectedTokenError(
                f"Unexpected content after table header: {rest}", line.line_number
            )
        return _decode_tabular_rows(cursor, header, child_depth, line)
    if rest:
        # Inline primitive array
        return _decode_inline_values(rest, header, line)
    return _decode_list_items(cursor, header, child_depth, line)


def _is_list_item(line: ParsedLine | None) -> bool:
    return line is not None and (line.content == "-" or line.content.startswith("- "))


def _decode_list_items(
    cursor: _Cursor, header: ArrayHeaderInfo, depth: int, header_line: ParsedLine
) -> list:
    """Decode list items (lines starting with -)."""
    result = []

    while len(result) < header.length:
        line = cursor.peek_at_depth(depth)
        if not _is_list_item(line):
            break
        cursor.advance()
        result.append(_decode_list_item(line, cursor, depth))

    if len(result) != header.length or _is_list_item(cursor.peek_at_depth(depth)):
        found = len(result) if len(result) < header.length else "more"
        raise UnexpectedTokenError(
            f"Array declares {header.length} items, found {found}",
            header_line.line_number,
        )

    return result


def _decode_list_item(line: ParsedLine, cursor: _Cursor, depth: int) -> JsonValue:
    """Decode a single list item."""
    content = line.content

    if content == "-":
        # Bare hyphen - check for nested content
        next_line = cursor.peek()
        if next_line and next_line.depth > depth:
            return _decode_object(cursor, depth + 1)
        return {}

    # Remove "- " prefix
    item_content = content[2:].strip()

    # Check for array header on hyphen line
    array_match = ARRAY_HEADER_PATTERN.match(item_content)
    if array_match:
        return _decode_list_item_array(array_match, cursor, line, depth)

    # Check for key: value on hyphen line
    colon_pos = find_unquoted_colon(item_content)
    if colon_pos != -1:
        # Object with first field on hyphen line
        return _decode_list_item_object(item_content, colon_pos, cursor, line, depth)

    return parse_primitive(item_content, line.line_number)


def _decode_list_item_array(
    match: re.Match, cursor: _Cursor, line: ParsedLine, depth: int
) -> dict | list:
    """Decode a list item that starts with an array header."""
    if not match.group("key"):
        # Bare array as list item
        return _decode_array_body(match, cursor, line, depth + 1)

    # Object with array as first field
    key = _parse_key(match.group("key"), line)
    result = {key: _decode_array_body(match, cursor, line, depth + 2)}
    _decode_fields_into(result, cursor, depth + 1)
    return result


def _decode_list_item_object(
    item_content: str, colon_pos: int, cursor: _Cursor, line: ParsedLine, depth: int
) -> dict:
    """Decode a list item that's an object with first field on hyphen line."""
    key = _parse_key(item_content[:colon_pos], line)
    value_part = item_content[colon_pos + 1 :].strip()

    if value_part:
        value = parse_primitive(value_part, line.line_number)
    else:
        # Check for nested content at depth + 2
        next_line = cursor.peek()
        if next_line and next_line.depth > depth + 1:
            value = _decode_object(cursor, depth + 2)
        else:
            value = {}

    result = {key: value}
    _decode_fields_into(result, cursor, depth + 1)
    return result


def _decode_tabular_rows(
    cursor: _Cursor, header: ArrayHeaderInfo, depth: int, header_line: ParsedLine
) -> list[dict]:
    """Decode tabular array rows."""
    result = []

    while len(result) < header.length:
        line = cursor.peek_at_depth(depth)
        if not line:
            break
        cursor.advance()
        result.append(_decode_row(line, header.fields, header.delimiter))

    if len(result) != header.length or cursor.peek_at_depth(depth):
        found = len(result) if len(result) < header.length else "more"
        raise MalformedTableRowError(
            f"Table declares {header.length} rows, found {found}",
            header_line.line_number,
        )

    return result


def _decode_row(line: ParsedLine, fields: list[str], delimiter: str) -> dict:
    """Decode one table row, aligning values to the header fields."""
    values = split_by_delimiter(line.content, delimiter, line.line_number)
    if len(values) != len(fields):
        raise MalformedTableRowError(
            f"Expected {len(fields)} values, got {len(values)}", line.line_number
        )
    return {
        field: parse_primitive(value, line.line_number)
        for field, value in zip(fields, values)
    }


def _decode_inline_values(values_str: str, header: ArrayHeaderInfo, line: ParsedLine) -> list:
    """Decode inline primitive array values."""
    values = split_by_delimiter(values_str, header.delimiter, line.line_number)
    result = [parse_primitive(v, line.line_number) for v in values]

    if len(result) != header.length:
        raise UnexpectedTokenError(
            f"Inline array declares {header.length} values, found {len(result)}",
            line.line_number,
        )

    return result


def _parse_array_header_from_match(match: re.Match, line: ParsedLine) -> ArrayHeaderInfo:
    """Parse ArrayHeaderInfo from a regex match."""
    length = int(match.group("length"))
    delimiter = match.group("delim") or ","

    fields_str = match.group("fields")
    if fields_str is not None:
        fields = [
            _parse_key(f, line)
            for f in split_by_delimiter(fields_str, delimiter, line.line_number)
        ]
    else:
        fields = []

    return ArrayHeaderInfo(length=length, delimiter=delimiter, fields=fields)


def _parse_key(key: str, line: ParsedLine) -> str:
    """Parse a key, handling quoted keys."""
    key = key.strip()
    if not key:
        raise UnexpectedTokenError("Missing key", line.line_number)
    if key.startswith('"'):
        return parse_string_literal(key, line.line_number)
    return key
