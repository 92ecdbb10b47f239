"""Text-level conversion between JSON and TOON documents."""

from __future__ import annotations

import json

import orjson

from .decode import decode
from .encode import encode
from .errors import InvalidJsonError
from .savings import to_json
from .types import DecodeOptions, EncodeOptions, JsonValue

# orjson reads integer literals beyond 64 bits as floats
_INT64_LIMIT = 2**63


def _has_widened_integer(value: JsonValue) -> bool:
    if isinstance(value, float):
        return value.is_integer() and abs(value) >= _INT64_LIMIT
    if isinstance(value, dict):
        return any(_has_widened_integer(v) for v in value.values())
    if isinstance(value, list):
        return any(_has_widened_integer(v) for v in value)
    return False


def json_to_toon(json_text: str | bytes, options: EncodeOptions | None = None) -> str:
    """
    Convert JSON text to TOON text.

    Integers of any width keep their exact value.

    Raises:
        InvalidJsonError: If the input is not valid JSON.
    """
    try:
        data = orjson.loads(json_text)
    except orjson.JSONDecodeError as e:
        raise InvalidJsonError(f"Invalid JSON: {e}") from e
    if _has_widened_integer(data):
        data = json.loads(json_text)
    return encode(data, options)


def toon_to_json(
    toon_text: str, options: DecodeOptions | None = None, *, pretty: bool = False
) -> str:
    """
    Convert TOON text to JSON text.

    Raises:
        ToonDecodeError: If the input is not valid TOON.
    """
    return to_json(decode(toon_text, options), pretty=pretty)
