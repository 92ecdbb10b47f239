"""Exceptions raised by the TOON codec.

Every decode failure is fatal to that single call and carries the offending
1-based line number (``None`` when the document as a whole is at fault)
together with a human-readable reason.
"""

from __future__ import annotations


class ToonError(Exception):
    """Base class for all toon_core errors."""


class ToonDecodeError(ToonError, ValueError):
    """Raised when TOON text does not match the grammar."""

    def __init__(self, reason: str, line_number: int | None = None):
        self.reason = reason
        self.line_number = line_number
        if line_number is None:
            super().__init__(reason)
        else:
            super().__init__(f"Line {line_number}: {reason}")


class IndentationError(ToonDecodeError):  # noqa: A001
    """Indent is not a multiple of the unit, uses tabs, or skips a level."""


class MalformedTableRowError(ToonDecodeError):
    """Row field count differs from the header, or row count from N."""


class UnterminatedQuoteError(ToonDecodeError):
    """A quoted string is not closed before the end of its line."""


class EmptyDocumentError(ToonDecodeError):
    """The document is empty or whitespace-only."""


class UnexpectedTokenError(ToonDecodeError):
    """A line or token matches none of the grammar productions."""


class InvalidJsonError(ToonError, ValueError):
    """JSON input handed to the converter could not be parsed."""
