"""
Text preparation for fragment indexing.

This module provides:
- Normalization of raw text into lower-case word tokens
- Word n-gram construction aligned to start index

Usage:
    from plagiarism.text import clean_text, extract_word_ngrams

    words = clean_text("The cat sat, on the mat!")
    fragments = extract_word_ngrams(words, 3)
    # ["the cat sat", "cat sat on", "sat on the", "on the mat"]
"""

from .normalize import Normalizer, NgramBuilder, clean_text, extract_word_ngrams

__all__ = [
    "clean_text",
    "extract_word_ngrams",
    # Collaborator signatures
    "Normalizer",
    "NgramBuilder",
]
