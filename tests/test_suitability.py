"""Tests for the suitability gate."""

import pytest

from toon_core import SuitabilityThresholds, estimate_savings, is_suitable, to_json
from toon_core.suitability import BELOW_MINIMUM_SIZE

TASKS = {
    "tasks": [
        {"id": "task-1", "title": "Test task", "status": "pending"},
        {"id": "task-2", "title": "Another task", "status": "done"},
    ]
}


class TestIsSuitable:
    def test_task_list_smoke(self):
        thresholds = SuitabilityThresholds(min_data_size=100, min_savings_threshold=10)
        assert len(to_json(TASKS)) > 100

        result = is_suitable(TASKS, thresholds)

        savings = estimate_savings(TASKS).savings_percentage
        assert result.suitable is (savings >= 10)
        assert result.suitable is True
        assert f"{savings:.1f}%" in result.reason

    def test_below_minimum_size(self):
        result = is_suitable({"a": 1}, SuitabilityThresholds(min_data_size=100))
        assert result.suitable is False
        assert result.reason == BELOW_MINIMUM_SIZE == "below minimum size"

    def test_size_check_ignores_savings(self):
        thresholds = SuitabilityThresholds(min_data_size=10_000, min_savings_threshold=0)
        assert is_suitable(TASKS, thresholds).reason == "below minimum size"

    def test_known_json_size(self):
        thresholds = SuitabilityThresholds(min_data_size=100, min_savings_threshold=10)
        assert is_suitable(TASKS, thresholds, json_size=50).reason == BELOW_MINIMUM_SIZE
        nested = {"a": {"b": {"c": {"d": {"e": "value"}}}}}
        result = is_suitable(nested, thresholds, json_size=500)
        assert result.suitable is False
        assert result.reason != BELOW_MINIMUM_SIZE

    def test_wide_integer_ids(self):
        rows = {"ids": [{"id": 2**64 + i, "n": "x"} for i in range(10)]}
        thresholds = SuitabilityThresholds(min_data_size=100, min_savings_threshold=10)
        result = is_suitable(rows, thresholds)
        assert result.suitable is True
        assert result.reason.startswith("estimated savings")

    def test_threshold_not_met(self):
        thresholds = SuitabilityThresholds(min_data_size=0, min_savings_threshold=99)
        result = is_suitable(TASKS, thresholds)
        assert result.suitable is False
        assert "below threshold 99.0%" in result.reason

    def test_negative_savings_rejected(self):
        nested = {"a": {"b": {"c": {"d": {"e": "value"}}}}}
        thresholds = SuitabilityThresholds(min_data_size=0, min_savings_threshold=0)
        assert is_suitable(nested, thresholds).suitable is False

    def test_default_thresholds(self):
        assert is_suitable(TASKS).suitable is True

    def test_repeatable(self):
        thresholds = SuitabilityThresholds(min_data_size=100, min_savings_threshold=10)
        assert is_suitable(TASKS, thresholds) == is_suitable(TASKS, thresholds)


class TestThresholds:
    def test_defaults(self):
        thresholds = SuitabilityThresholds()
        assert thresholds.min_data_size == 100
        assert thresholds.min_savings_threshold == 10.0

    def test_from_camel_case_mapping(self):
        thresholds = SuitabilityThresholds.from_mapping(
            {"enabled": True, "minDataSize": "250", "minSavingsThreshold": 15}
        )
        assert thresholds == SuitabilityThresholds(250, 15.0)

    def test_from_snake_case_mapping(self):
        thresholds = SuitabilityThresholds.from_mapping({"min_data_size": 5})
        assert thresholds == SuitabilityThresholds(min_data_size=5)

    def test_from_empty_mapping(self):
        assert SuitabilityThresholds.from_mapping({}) == SuitabilityThresholds()

    def test_negative_values_rejected(self):
        with pytest.raises(ValueError, match="min_data_size"):
            SuitabilityThresholds(min_data_size=-1)
        with pytest.raises(ValueError, match="min_savings_threshold"):
            SuitabilityThresholds.from_mapping({"minSavingsThreshold": -5})
