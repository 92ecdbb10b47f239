"""Tests for savings estimation."""

import pytest

from toon_core import EncodeOptions, encode, estimate_savings, estimate_tokens, to_json
from toon_core.savings import _savings


@pytest.fixture
def uniform_rows():
    return {
        "users": [
            {"id": i, "name": f"user{i}", "role": "admin" if i % 3 == 0 else "member"}
            for i in range(50)
        ]
    }


class TestToJson:
    def test_compact(self):
        assert to_json({"a": [1, None, True], "b": "x"}) == '{"a":[1,null,true],"b":"x"}'

    def test_normalizes_input(self):
        assert to_json({"t": (1, 2), "n": float("nan")}) == '{"t":[1,2],"n":null}'

    def test_wide_integer(self):
        assert to_json({"x": 2**70, "y": [1]}) == f'{{"x":{2**70},"y":[1]}}'

    def test_wide_integer_pretty(self):
        assert to_json({"x": 2**64}, pretty=True) == f'{{\n  "x": {2**64}\n}}'

    def test_pretty(self):
        assert to_json({"a": [1]}, pretty=True) == '{\n  "a": [\n    1\n  ]\n}'


class TestEstimateSavings:
    def test_uniform_array_saves(self, uniform_rows):
        report = estimate_savings(uniform_rows)
        assert report.savings_percentage > 0
        assert report.character_savings > 0
        assert report.estimated_token_savings > 0
        assert report.estimated_token_savings_percentage > 0

    def test_lengths_match_renderings(self, uniform_rows):
        report = estimate_savings(uniform_rows)
        json_text = to_json(uniform_rows)
        toon_text = encode(uniform_rows)
        assert report.json_length == len(json_text)
        assert report.toon_length == len(toon_text)
        assert report.character_savings == len(json_text) - len(toon_text)
        assert report.estimated_json_tokens == estimate_tokens(json_text)
        assert report.estimated_toon_tokens == estimate_tokens(toon_text)

    def test_percentage_full_precision(self, uniform_rows):
        report = estimate_savings(uniform_rows)
        expected = (report.json_length - report.toon_length) / report.json_length * 100
        assert report.savings_percentage == pytest.approx(expected)

    def test_nested_object_may_cost_more(self):
        report = estimate_savings({"a": {"b": {"c": {"d": {"e": "value"}}}}})
        assert report.savings_percentage <= 0
        assert report.character_savings <= 0

    def test_wide_integer(self):
        report = estimate_savings({"x": 2**70})
        assert report.json_length == len(f'{{"x":{2**70}}}')
        assert report.toon_length == len(f"x: {2**70}")

    def test_scalars(self):
        report = estimate_savings(None)
        assert report.json_length == 4
        assert report.toon_length == 4
        assert report.savings_percentage == 0

    def test_options_change_toon_side(self, uniform_rows):
        narrow = estimate_savings(uniform_rows)
        wide = estimate_savings(uniform_rows, EncodeOptions(indent=8))
        assert wide.toon_length > narrow.toon_length
        assert wide.json_length == narrow.json_length

    def test_as_dict(self, uniform_rows):
        data = estimate_savings(uniform_rows).as_dict()
        assert set(data) == {
            "jsonLength",
            "toonLength",
            "characterSavings",
            "savingsPercentage",
            "estimatedJsonTokens",
            "estimatedToonTokens",
            "estimatedTokenSavings",
            "estimatedTokenSavingsPercentage",
        }

    def test_summary(self, uniform_rows):
        assert "% saved" in estimate_savings(uniform_rows).summary()


class TestSavingsArithmetic:
    def test_zero_baseline(self):
        assert _savings(0, 5) == (0, 0.0)

    def test_growth_is_negative(self):
        assert _savings(10, 15) == (-5, -50.0)

    def test_shrink(self):
        assert _savings(200, 50) == (150, 75.0)
