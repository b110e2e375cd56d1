"""Default text normalizer and word n-gram builder."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence

Normalizer = Callable[[str], list[str]]
"""Turns raw text into an ordered word sequence. Must be deterministic."""

NgramBuilder = Callable[[Sequence[str], int], list[str]]
"""Turns a word sequence into fragments, element i starting at word i."""

_NON_WORD = re.compile(r"[\W_]+")


def clean_text(text: str) -> list[str]:
    """
    Normalize raw text into word tokens.

    Lower-cases the text, replaces every run of characters that are not
    letters or digits with a single space, then splits on whitespace.

    Args:
        text: Raw text as submitted

    Returns:
        Ordered list of words. Empty for empty or punctuation-only text.

    Example:
        >>> clean_text("Hello, World!  It's me.")
        ['hello', 'world', 'it', 's', 'me']
    """
    return _NON_WORD.sub(" ", text.lower()).split()


def extract_word_ngrams(words: Sequence[str], n: int) -> list[str]:
    """
    Build word n-grams joined by a single space.

    Returns max(0, len(words) - n + 1) fragments; fragment i covers
    words[i:i + n].
    """
    if n < 1 or len(words) < n:
        return []
    return [" ".join(words[i : i + n]) for i in range(len(words) - n + 1)]
