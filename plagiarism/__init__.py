"""
N-gram plagiarism detection.

Texts are split into overlapping word n-grams and compared pairwise, either
among untrusted submissions or against trusted reference material.

Usage:
    from plagiarism import Metric, create_corpus_store

    store = create_corpus_store(n=4, s=2, metric=Metric.LEVENSHTEIN)
    store.add_untrusted("alice", essay_a)
    store.add_untrusted("bob", essay_b)
    for result in store.check_untrusted_plagiarism():
        print(result.to_dict())
"""

from .corpus import (
    ComparisonBatch,
    CorpusConfig,
    CorpusStore,
    PlagiarismResult,
    create_corpus_store,
)
from .errors import ConfigurationError, PlagiarismError
from .fragments import FragmentLocation, TextEntry
from .matching import ComparisonBudget, Metric

__all__ = [
    "create_corpus_store",
    "CorpusStore",
    "CorpusConfig",
    "ComparisonBudget",
    "Metric",
    "PlagiarismResult",
    "ComparisonBatch",
    "TextEntry",
    "FragmentLocation",
    "PlagiarismError",
    "ConfigurationError",
]
