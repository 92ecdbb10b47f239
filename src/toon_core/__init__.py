"""
TOON (Token-Oriented Object Notation) core.

A compact, token-efficient text encoding of JSON data for LLM prompts, plus
the estimators that decide when the encoding is worth using.

Usage:
    import toon_core

    data = {"tasks": [{"id": "task-1", "status": "pending"}]}
    text = toon_core.encode(data)
    assert toon_core.decode(text) == data

    report = toon_core.estimate_savings(data)
    verdict = toon_core.is_suitable(data, toon_core.SuitabilityThresholds(min_data_size=100))
"""

from loguru import logger

__version__ = "0.1.0"

from .convert import json_to_toon, toon_to_json
from .decode import decode, decode_lines, decode_stream_async
from .encode import encode, encode_lines
from .errors import (
    EmptyDocumentError,
    IndentationError,
    InvalidJsonError,
    MalformedTableRowError,
    ToonDecodeError,
    ToonError,
    UnexpectedTokenError,
    UnterminatedQuoteError,
)
from .roundtrip import RoundTripResult, validate_round_trip
from .savings import SavingsReport, estimate_savings, to_json
from .suitability import SuitabilityResult, SuitabilityThresholds, is_suitable
from .tabular import is_tabular
from .tokens import estimate_tokens
from .types import DecodeOptions, EncodeOptions, JsonValue
from .value import ValueKind, kind_of, values_equal

# Library logging is opt-in: logger.enable("toon_core")
logger.disable("toon_core")

__all__ = [
    # Version
    "__version__",
    # Main API
    "encode",
    "encode_lines",
    "decode",
    "decode_lines",
    "decode_stream_async",
    "estimate_savings",
    "validate_round_trip",
    "is_suitable",
    "estimate_tokens",
    "is_tabular",
    "json_to_toon",
    "toon_to_json",
    "to_json",
    # Options
    "EncodeOptions",
    "DecodeOptions",
    "SuitabilityThresholds",
    # Results
    "SavingsReport",
    "RoundTripResult",
    "SuitabilityResult",
    # Types
    "JsonValue",
    "ValueKind",
    "kind_of",
    "values_equal",
    # Errors
    "ToonError",
    "ToonDecodeError",
    "IndentationError",
    "MalformedTableRowError",
    "UnterminatedQuoteError",
    "EmptyDocumentError",
    "UnexpectedTokenError",
    "InvalidJsonError",
]
