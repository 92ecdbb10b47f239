"""String utilities for TOON encoding/decoding."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from .errors import UnexpectedTokenError, UnterminatedQuoteError

if TYPE_CHECKING:
    from .types import Delimiter

# TOON only allows these 5 escape sequences
ESCAPE_MAP = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

UNESCAPE_MAP = {
    "\\": "\\",
    '"': '"',
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

# Reserved literals that can't be unquoted strings
RESERVED_LITERALS = {"true", "false", "null"}

# Structural characters that require quoting
STRUCTURAL_CHARS = frozenset(':[]{}"\\')

CONTROL_CHARS = frozenset("\n\r\t")

# Number grammar shared by the encoder (quoting) and decoder (parsing)
NUMBER_PATTERN = re.compile(r"^-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?$")


def escape_string(value: str) -> str:
    """
    Escape a string for use in TOON quoted strings.

    Only the 5 valid TOON escape sequences are produced:
    - \\\\ (backslash)
    - \\" (double quote)
    - \\n (newline)
    - \\r (carriage return)
    - \\t (tab)

    Args:
        value: The string to escape.

    Returns:
        The escaped string (without surrounding quotes).
    """
    return "".join(ESCAPE_MAP.get(char, char) for char in value)


def unescape_string(value: str, line_number: int | None = None) -> str:
    """
    Unescape a TOON string that was inside quotes.

    Args:
        value: The string content (without surrounding quotes).
        line_number: Source line, for error reporting.

    Returns:
        The unescaped string.

    Raises:
        UnexpectedTokenError: On an unknown escape or a trailing backslash.
    """
    result = []
    i = 0
    while i < len(value):
        char = value[i]
        if char == "\\":
            if i + 1 >= len(value):
                raise UnexpectedTokenError("Backslash at end of string", line_number)
            next_char = value[i + 1]
            if next_char not in UNESCAPE_MAP:
                raise UnexpectedTokenError(
                    f"Invalid escape sequence: \\{next_char}", line_number
                )
            result.append(UNESCAPE_MAP[next_char])
            i += 2
        else:
            result.append(char)
            i += 1
    return "".join(result)


def looks_like_number(value: str) -> bool:
    """Check if a string matches the TOON number grammar."""
    return bool(NUMBER_PATTERN.match(value))


def is_safe_unquoted(value: str, delimiter: Delimiter | None = None) -> bool:
    """
    Check if a string can be safely represented without quotes.

    A string can be unquoted if:
    - Non-empty
    - No leading/trailing whitespace
    - Not a boolean/null/number literal
    - No structural chars, quotes or backslashes
    - No control chars (newline, carriage return, tab)
    - No active delimiter (when inside an inline array or table row)
    - Doesn't start with '-' (list marker)

    Args:
        value: The string to check.
        delimiter: The delimiter of the enclosing row, if any.

    Returns:
        True if the string can be unquoted.
    """
    if not value or value != value.strip():
        return False

    if value.lower() in RESERVED_LITERALS or looks_like_number(value):
        return False

    if any(c in STRUCTURAL_CHARS or c in CONTROL_CHARS for c in value):
        return False

    if delimiter is not None and delimiter in value:
        return False

    return not value.startswith("-")


def has_unterminated_quote(line: str) -> bool:
    """Check whether a quoted section is still open at the end of a line."""
    in_quotes = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == "\\" and in_quotes:
            i += 2
            continue
        if char == '"':
            in_quotes = not in_quotes
        i += 1
    return in_quotes


def find_unquoted_colon(line: str) -> int:
    """
    Find the position of the first unquoted colon in a line.

    Args:
        line: The line to search.

    Returns:
        Index of the colon, or -1 if not found.
    """
    in_quotes = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == "\\" and in_quotes:
            # Skip escape sequence
            i += 2
            continue
        if char == '"':
            in_quotes = not in_quotes
        elif char == ":" and not in_quotes:
            return i
        i += 1
    return -1


def split_by_delimiter(
    value: str, delimiter: Delimiter, line_number: int | None = None
) -> list[str]:
    """
    Split a string by delimiter, respecting quoted sections.

    Args:
        value: The string to split.
        delimiter: The delimiter character.
        line_number: Source line, for error reporting.

    Returns:
        List of values (still containing quotes if originally quoted).

    Raises:
        UnterminatedQuoteError: If a quoted section is never closed.
    """
    result = []
    current: list[str] = []
    in_quotes = False
    i = 0

    while i < len(value):
        char = value[i]
        if char == "\\" and in_quotes and i + 1 < len(value):
            # Keep escape sequence intact
            current.append(char)
            current.append(value[i + 1])
            i += 2
            continue
        if char == '"':
            in_quotes = not in_quotes
            current.append(char)
        elif char == delimiter and not in_quotes:
            result.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    if in_quotes:
        raise UnterminatedQuoteError(f"Unterminated string: {value}", line_number)

    # Add the last segment
    result.append("".join(current).strip())
    return result
