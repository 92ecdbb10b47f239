"""Tests for the heuristic token estimator."""

import pytest

from toon_core import estimate_tokens

SAMPLES = [
    "a",
    "hello",
    "hello world",
    '{"id":1,"name":"Alice"}',
    "users[2]{id,name}:\n  1,Alice\n  2,Bob",
    "    ",
    "日本語のテキスト",
    "!!!",
]


class TestEstimateTokens:
    def test_empty(self):
        assert estimate_tokens("") == 0

    @pytest.mark.parametrize("text", SAMPLES)
    def test_non_empty_is_positive(self, text):
        assert estimate_tokens(text) >= 1

    @pytest.mark.parametrize("text", SAMPLES)
    def test_doubling_never_decreases(self, text):
        previous = estimate_tokens(text)
        for _ in range(4):
            text = text + text
            current = estimate_tokens(text)
            assert current >= previous
            previous = current

    def test_grows_with_length(self):
        assert estimate_tokens("word " * 100) > estimate_tokens("word " * 10)

    def test_rough_prose_ratio(self):
        prose = "The quick brown fox jumps over the lazy dog. " * 10
        # A BPE tokenizer gives about 100 tokens for this text
        assert 75 <= estimate_tokens(prose) <= 130

    def test_punctuation_dense_text_counts_more(self):
        json_text = '{"a":1,"b":2,"c":3}'
        plain_text = "a 1 b 2 c 3 x y z q"
        assert len(json_text) == len(plain_text)
        assert estimate_tokens(json_text) > estimate_tokens(plain_text)
