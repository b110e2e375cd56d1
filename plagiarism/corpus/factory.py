"""Factory functions for creating a corpus store."""

from __future__ import annotations

from ..matching.matcher import ComparisonBudget
from ..matching.metrics import Metric
from ..text import NgramBuilder, Normalizer, clean_text, extract_word_ngrams
from .models import CorpusConfig
from .store import CorpusStore


def create_corpus_store(
    n: int = 6,
    s: int = 0,
    metric: Metric | str = Metric.EQUAL,
    prefer_untrusted_text: bool = True,
    deadline_seconds: float | None = None,
    max_comparisons: int | None = None,
    normalizer: Normalizer = clean_text,
    ngrams: NgramBuilder = extract_word_ngrams,
) -> CorpusStore:
    """
    Create an empty corpus store with custom configuration.

    This is the main entry point for the plagiarism package.

    Args:
        n: Fragment length in words (>= 1)
        s: Metric cutoff (max edit distance, or min overlap ratio x 100)
        metric: Comparison rule, as a Metric or its name
        prefer_untrusted_text: Which partition wins in all_normalized_text()
            when an owner id is in both
        deadline_seconds: Optional wall-clock limit per comparison run
        max_comparisons: Optional limit on oracle evaluations per run
        normalizer: Raw text -> words. Defaults to clean_text
        ngrams: Words -> fragments. Defaults to extract_word_ngrams

    Returns:
        Configured CorpusStore ready to use

    Raises:
        ConfigurationError: If n, s, metric or budget is invalid

    Example:
        store = create_corpus_store(n=4)

        # Or with fuzzy matching:
        store = create_corpus_store(n=4, s=2, metric=Metric.LEVENSHTEIN)
    """
    if isinstance(metric, str):
        metric = Metric.from_name(metric)

    config = CorpusConfig(
        n=n,
        s=s,
        metric=metric,
        prefer_untrusted_text=prefer_untrusted_text,
        budget=ComparisonBudget(
            deadline_seconds=deadline_seconds,
            max_comparisons=max_comparisons,
        ),
    )
    return CorpusStore(config, normalizer=normalizer, ngrams=ngrams)
