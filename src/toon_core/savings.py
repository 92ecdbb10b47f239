"""Savings estimation: compare a value's JSON and TOON renderings."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import orjson
from loguru import logger

from .encode import encode
from .tokens import estimate_tokens
from .types import EncodeOptions
from .value import normalize_value


@dataclass(frozen=True)
class SavingsReport:
    """Character and estimated-token comparison of JSON vs TOON text.

    Percentages are kept at full precision; round them only for display.
    """

    json_length: int
    toon_length: int
    character_savings: int
    savings_percentage: float
    estimated_json_tokens: int
    estimated_toon_tokens: int
    estimated_token_savings: int
    estimated_token_savings_percentage: float

    def as_dict(self) -> dict[str, int | float]:
        """Camel-cased mapping for JSON-speaking collaborators."""
        return {
            "jsonLength": self.json_length,
            "toonLength": self.toon_length,
            "characterSavings": self.character_savings,
            "savingsPercentage": self.savings_percentage,
            "estimatedJsonTokens": self.estimated_json_tokens,
            "estimatedToonTokens": self.estimated_toon_tokens,
            "estimatedTokenSavings": self.estimated_token_savings,
            "estimatedTokenSavingsPercentage": self.estimated_token_savings_percentage,
        }

    def summary(self) -> str:
        return (
            f"{self.json_length} -> {self.toon_length} chars "
            f"({self.savings_percentage:.1f}% saved), "
            f"~{self.estimated_json_tokens} -> ~{self.estimated_toon_tokens} tokens "
            f"({self.estimated_token_savings_percentage:.1f}% saved)"
        )


def to_json(value: Any, *, pretty: bool = False) -> str:
    """
    Canonical JSON text for a value: compact, or indented by two spaces.

    orjson rejects integers wider than 64 bits and very deep nesting; those
    payloads go through the standard library encoder with the same layout.
    """
    data = normalize_value(value)
    try:
        return orjson.dumps(data, option=orjson.OPT_INDENT_2 if pretty else 0).decode()
    except orjson.JSONEncodeError as e:
        logger.debug("orjson cannot serialize payload ({}), using json module", e)
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def _savings(before: int, after: int) -> tuple[int, float]:
    """Absolute and percentage savings; zero when there is nothing to save from."""
    if before == 0:
        return 0, 0.0
    return before - after, (before - after) / before * 100


def estimate_savings(value: Any, options: EncodeOptions | None = None) -> SavingsReport:
    """
    Compare the JSON and TOON renderings of the same value.

    Args:
        value: The value to measure.
        options: Encoding options for the TOON side.

    Returns:
        A SavingsReport. Savings are negative when TOON is larger.
    """
    json_text = to_json(value)
    toon_text = encode(value, options)

    json_tokens = estimate_tokens(json_text)
    toon_tokens = estimate_tokens(toon_text)

    character_savings, savings_percentage = _savings(len(json_text), len(toon_text))
    token_savings, token_savings_percentage = _savings(json_tokens, toon_tokens)

    report = SavingsReport(
        json_length=len(json_text),
        toon_length=len(toon_text),
        character_savings=character_savings,
        savings_percentage=savings_percentage,
        estimated_json_tokens=json_tokens,
        estimated_toon_tokens=toon_tokens,
        estimated_token_savings=token_savings,
        estimated_token_savings_percentage=token_savings_percentage,
    )
    logger.debug("TOON savings: {}", report.summary())
    return report
