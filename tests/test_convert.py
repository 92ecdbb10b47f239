"""Tests for JSON <-> TOON text conversion."""

import orjson
import pytest

from toon_core import InvalidJsonError, ToonDecodeError, json_to_toon, toon_to_json


class TestJsonToToon:
    def test_object(self):
        assert json_to_toon('{"a": 1, "b": {"c": "x"}}') == "a: 1\nb:\n  c: x"

    def test_bytes_input(self):
        assert json_to_toon(b'[{"id": 1}, {"id": 2}]') == "[2]{id}:\n  1\n  2"

    def test_wide_integer_kept_exact(self):
        assert json_to_toon('{"x": 123456789012345678901234567890}') == (
            "x: 123456789012345678901234567890"
        )

    def test_wide_float_literal(self):
        assert json_to_toon('{"x": 1e30, "y": 1.5}') == "x: 1e+30\ny: 1.5"

    def test_invalid_json(self):
        with pytest.raises(InvalidJsonError, match="Invalid JSON") as exc_info:
            json_to_toon("{invalid json")
        assert isinstance(exc_info.value.__cause__, orjson.JSONDecodeError)


class TestToonToJson:
    def test_compact(self):
        assert toon_to_json("a: 1\nb[2]:\n  - x\n  - null") == '{"a":1,"b":["x",null]}'

    def test_pretty(self):
        text = toon_to_json("a: 1", pretty=True)
        assert text == '{\n  "a": 1\n}'

    def test_wide_integer(self):
        text = "x: 123456789012345678901234567890"
        assert toon_to_json(text) == '{"x":123456789012345678901234567890}'
        assert toon_to_json(text, pretty=True) == '{\n  "x": 123456789012345678901234567890\n}'

    def test_invalid_toon(self):
        with pytest.raises(ToonDecodeError):
            toon_to_json("")

    def test_json_roundtrip(self):
        source = '{"tasks":[{"id":1,"title":"Parse","done":false}],"meta":{"v":"1.0"}}'
        assert toon_to_json(json_to_toon(source)) == source
