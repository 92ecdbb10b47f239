"""Suitability gate: decide whether converting a payload to TOON is worthwhile.

The gate is a pure function of the value and the thresholds handed in on each
call. Whether TOON is switched on at all belongs to the caller.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from loguru import logger

from .savings import estimate_savings, to_json
from .types import EncodeOptions

BELOW_MINIMUM_SIZE = "below minimum size"


@dataclass(frozen=True)
class SuitabilityThresholds:
    """Thresholds for the suitability gate."""

    min_data_size: int = 100
    """Minimum length of the canonical JSON text, in characters."""

    min_savings_threshold: float = 10.0
    """Minimum character savings, in percent."""

    def __post_init__(self) -> None:
        if self.min_data_size < 0:
            raise ValueError(f"min_data_size must be >= 0, got {self.min_data_size}")
        if self.min_savings_threshold < 0:
            raise ValueError(
                f"min_savings_threshold must be >= 0, got {self.min_savings_threshold}"
            )

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> SuitabilityThresholds:
        """
        Build thresholds from a host configuration block.

        Accepts ``minDataSize``/``minSavingsThreshold`` as well as their
        snake_case spellings; other keys (``enabled`` and the like) are ignored.
        """
        kwargs: dict[str, Any] = {}
        for field_name, camel in (
            ("min_data_size", "minDataSize"),
            ("min_savings_threshold", "minSavingsThreshold"),
        ):
            if camel in config:
                kwargs[field_name] = config[camel]
            elif field_name in config:
                kwargs[field_name] = config[field_name]
        if "min_data_size" in kwargs:
            kwargs["min_data_size"] = int(kwargs["min_data_size"])
        if "min_savings_threshold" in kwargs:
            kwargs["min_savings_threshold"] = float(kwargs["min_savings_threshold"])
        return cls(**kwargs)


@dataclass(frozen=True)
class SuitabilityResult:
    suitable: bool
    reason: str


def is_suitable(
    value: Any,
    thresholds: SuitabilityThresholds | None = None,
    options: EncodeOptions | None = None,
    *,
    json_size: int | None = None,
) -> SuitabilityResult:
    """
    Decide whether TOON conversion is worth applying to a value.

    Payloads whose canonical JSON is shorter than ``min_data_size`` are always
    rejected. Otherwise the value is suitable when the measured character
    savings reach ``min_savings_threshold`` percent.

    Callers that already serialized the payload may pass its length as
    ``json_size`` to skip re-serializing for the size check.
    """
    limits = thresholds or SuitabilityThresholds()

    json_length = len(to_json(value)) if json_size is None else json_size
    if json_length < limits.min_data_size:
        logger.debug(
            "TOON skipped: {} chars below minimum {}", json_length, limits.min_data_size
        )
        return SuitabilityResult(suitable=False, reason=BELOW_MINIMUM_SIZE)

    report = estimate_savings(value, options)
    suitable = report.savings_percentage >= limits.min_savings_threshold
    verdict = "meets" if suitable else "below"
    reason = (
        f"estimated savings {report.savings_percentage:.1f}% {verdict} "
        f"threshold {limits.min_savings_threshold:.1f}%"
    )
    logger.debug("TOON suitability: {}", reason)
    return SuitabilityResult(suitable=suitable, reason=reason)
