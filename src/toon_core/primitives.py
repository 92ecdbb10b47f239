"""Primitive value encoding and parsing for TOON."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from .errors import UnexpectedTokenError, UnterminatedQuoteError
from .string_utils import escape_string, is_safe_unquoted, looks_like_number, unescape_string

if TYPE_CHECKING:
    from .types import Delimiter, JsonPrimitive


def encode_primitive(value: JsonPrimitive, delimiter: Delimiter | None = None) -> str:
    """
    Encode a primitive value to TOON format.

    Args:
        value: The primitive value (str, int, float, bool, or None).
        delimiter: The delimiter of the enclosing inline array or table row,
            or None outside of one.

    Returns:
        The encoded string representation.
    """
    if value is None:
        return "null"

    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, (int, float)):
        return _encode_number(value)

    if isinstance(value, str):
        return encode_string_literal(value, delimiter)

    raise TypeError(f"Cannot encode value of type {type(value).__name__}")


def _encode_number(value: int | float) -> str:
    """Encode a number to TOON format."""
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return "null"
        # Normalize -0 to 0
        if value == 0.0:
            return "0"
        s = repr(value)
        # Whole floats collapse to integers
        if s.endswith(".0") and "e" not in s:
            return s[:-2]
        return s

    return str(value)


def encode_string_literal(value: str, delimiter: Delimiter | None = None) -> str:
    """Encode a string value, with or without quotes."""
    if is_safe_unquoted(value, delimiter):
        return value
    return f'"{escape_string(value)}"'


def encode_key(key: str, delimiter: Delimiter | None = None) -> str:
    """
    Encode an object key for TOON format.

    Keys need quoting if they contain special characters or internal spaces.

    Args:
        key: The key string.
        delimiter: The delimiter of the enclosing header field list, if any.

    Returns:
        The encoded key (quoted if necessary).
    """
    if " " not in key and is_safe_unquoted(key, delimiter):
        return key
    return f'"{escape_string(key)}"'


def format_bracket(length: int, delimiter: Delimiter) -> str:
    """Format the bracket portion of an array header."""
    if delimiter == ",":
        return f"[{length}]"
    return f"[{length}{delimiter}]"


def format_array_header(
    length: int,
    key: str | None = None,
    fields: list[str] | None = None,
    delimiter: Delimiter = ",",
) -> str:
    """
    Format an array header line.

    Args:
        length: The array length.
        key: Optional key name (None for root arrays or list items).
        fields: Optional field names for tabular format.
        delimiter: The delimiter (included in bracket if not comma).

    Returns:
        The formatted header string.
    """
    bracket = format_bracket(length, delimiter)

    fields_part = ""
    if fields:
        encoded_fields = [encode_key(f, delimiter) for f in fields]
        fields_part = "{" + delimiter.join(encoded_fields) + "}"

    if key is not None:
        return f"{encode_key(key)}{bracket}{fields_part}:"
    return f"{bracket}{fields_part}:"


def parse_primitive(token: str, line_number: int | None = None) -> JsonPrimitive:
    """
    Parse a primitive token to a Python value.

    Handles: quoted strings, numbers, null, true, false, unquoted strings.

    Args:
        token: The token string (trimmed).
        line_number: Source line, for error reporting.

    Returns:
        The parsed Python value.

    Raises:
        UnterminatedQuoteError: If a quoted string is never closed.
        UnexpectedTokenError: For characters after a closing quote or bad escapes.
    """
    # Empty token is empty string
    if not token:
        return ""

    if token.startswith('"'):
        return parse_string_literal(token, line_number)

    number = _try_parse_number(token)
    if number is not None:
        return number

    if token == "null":
        return None
    if token == "true":
        return True
    if token == "false":
        return False

    # Unquoted string
    return token


def parse_string_literal(token: str, line_number: int | None = None) -> str:
    """
    Parse a quoted string literal.

    Args:
        token: The token starting with '"'.
        line_number: Source line, for error reporting.

    Returns:
        The unescaped string content.
    """
    end = find_closing_quote(token, 0)
    if end == -1:
        raise UnterminatedQuoteError(f"Unterminated string: {token}", line_number)
    if end != len(token) - 1:
        raise UnexpectedTokenError(
            f"Unexpected characters after closing quote: {token[end + 1:]}", line_number
        )
    return unescape_string(token[1:end], line_number)


def find_closing_quote(s: str, start: int) -> int:
    """
    Find the closing quote in a string.

    Args:
        s: The string to search.
        start: The position of the opening quote.

    Returns:
        Index of the closing quote, or -1 if not found.
    """
    i = start + 1
    while i < len(s):
        char = s[i]
        if char == "\\":
            # Skip escape sequence
            i += 2
            continue
        if char == '"':
            return i
        i += 1
    return -1


def _try_parse_number(token: str) -> int | float | None:
    """
    Try to parse a token as a number.

    Returns None if it's not a valid number.
    """
    if not looks_like_number(token):
        return None

    if "." not in token and "e" not in token.lower():
        return int(token)

    value = float(token)
    # Normalize -0 to 0
    if value == 0.0:
        return 0
    return value
