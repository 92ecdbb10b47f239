"""Heuristic token estimation.

``estimate_tokens`` approximates what a BPE tokenizer such as cl100k_base or
o200k_base would report, without loading one. It blends two views of the
text: roughly four characters per token, and one token per three quarters of
a word plus half a token per punctuation symbol. The larger of the two wins,
which keeps punctuation-dense text (JSON) from being undercounted.

Expected error is within about 25% of a real tokenizer on English prose and
JSON; it is an approximation for comparing encodings, not a billing figure.
"""

from __future__ import annotations

import math
import re

CHARS_PER_TOKEN = 4.0
TOKENS_PER_WORD = 0.75
TOKENS_PER_SYMBOL = 0.5

_WORD = re.compile(r"\w+")
_SYMBOL = re.compile(r"[^\w\s]")


def estimate_tokens(text: str) -> int:
    """
    Estimate the LLM token count of a string.

    Returns 0 only for the empty string. Repeating the input never lowers the
    estimate.
    """
    if not text:
        return 0

    by_chars = len(text) / CHARS_PER_TOKEN
    words = len(_WORD.findall(text))
    symbols = len(_SYMBOL.findall(text))
    by_words = words * TOKENS_PER_WORD + symbols * TOKENS_PER_SYMBOL

    return max(1, math.ceil(max(by_chars, by_words)))
