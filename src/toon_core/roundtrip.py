"""Round-trip validation: encode, decode, and compare with the original."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from loguru import logger

from .decode import decode
from .encode import encode
from .errors import ToonDecodeError
from .types import DecodeOptions, EncodeOptions
from .value import find_mismatch, normalize_value


@dataclass(frozen=True)
class RoundTripResult:
    """Outcome of a round-trip check."""

    is_valid: bool
    mismatch_path: str | None = None
    """First path where the decoded value differs, e.g. ``$.tasks[0].id``."""
    error: str | None = None
    """Decoder message when the encoded text failed to decode."""


def validate_round_trip(value: Any, options: EncodeOptions | None = None) -> RoundTripResult:
    """
    Check that ``decode(encode(value))`` reproduces ``value``.

    Object key order is not compared, and ``1 == 1.0`` since whole floats are
    written as integers.
    """
    opts = options or EncodeOptions()
    original = normalize_value(value)
    text = encode(original, opts)

    try:
        decoded = decode(text, DecodeOptions(indent=opts.indent))
    except ToonDecodeError as e:
        logger.warning("TOON round-trip failed to decode: {}", e)
        return RoundTripResult(is_valid=False, mismatch_path="$", error=str(e))

    mismatch = find_mismatch(original, decoded)
    if mismatch is not None:
        logger.warning("TOON round-trip mismatch at {}", mismatch)
        return RoundTripResult(is_valid=False, mismatch_path=mismatch)

    logger.debug("TOON round-trip ok ({} chars)", len(text))
    return RoundTripResult(is_valid=True)
