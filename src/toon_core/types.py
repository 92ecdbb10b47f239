"""Type definitions for TOON encoder/decoder."""

from dataclasses import dataclass, field
from typing import Literal

# JSON type aliases
JsonPrimitive = str | int | float | bool | None
JsonArray = list["JsonValue"]
JsonObject = dict[str, "JsonValue"]
JsonValue = JsonPrimitive | JsonArray | JsonObject

# Delimiter options
Delimiter = Literal[",", "\t", "|"]

DELIMITERS: tuple[str, ...] = (",", "\t", "|")


@dataclass
class EncodeOptions:
    """Options for TOON encoding."""

    indent: int = 2
    """Number of spaces per indentation level."""

    delimiter: Delimiter = ","
    """Delimiter for inline arrays and tabular rows."""

    line_terminator: str = "\n"
    """String placed between output lines."""

    def __post_init__(self) -> None:
        if self.indent < 1:
            raise ValueError(f"indent must be >= 1, got {self.indent}")
        if self.delimiter not in DELIMITERS:
            raise ValueError(f"Unsupported delimiter: {self.delimiter!r}")
        if self.line_terminator not in ("\n", "\r\n"):
            raise ValueError(f"Unsupported line terminator: {self.line_terminator!r}")


@dataclass
class DecodeOptions:
    """Options for TOON decoding."""

    indent: int = 2
    """Expected indentation size."""

    def __post_init__(self) -> None:
        if self.indent < 1:
            raise ValueError(f"indent must be >= 1, got {self.indent}")


@dataclass
class ParsedLine:
    """A parsed line with indentation info."""

    content: str
    """Content after stripping indentation."""

    depth: int
    """Indentation level (indent / indent_size)."""

    line_number: int
    """1-based line number."""


@dataclass
class ArrayHeaderInfo:
    """Parsed array header information."""

    length: int
    """Declared array length."""

    delimiter: Delimiter = ","
    """Delimiter for this array's values."""

    fields: list[str] = field(default_factory=list)
    """Field names for tabular format (empty for non-tabular)."""
