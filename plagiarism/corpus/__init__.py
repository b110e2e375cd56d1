"""
Corpus store and pairwise comparison of texts.

This module provides:
- Trusted / untrusted partitions of indexed texts, keyed by owner
- Within-untrusted and trusted-vs-untrusted comparison runs
- Location resolution of every matching fragment

Usage:
    from plagiarism.corpus import create_corpus_store

    store = create_corpus_store(n=3)
    store.add_trusted("textbook", reference_text)
    store.add_untrusted("alice", essay_a)
    store.add_untrusted("bob", essay_b)

    peer_results = store.check_untrusted_plagiarism()
    source_results = store.check_trusted_plagiarism()
"""

from .errors import CorpusError, LocationLookupError
from .factory import create_corpus_store
from .models import ComparisonBatch, CorpusConfig, PlagiarismResult
from .orchestrator import (
    ComparisonOrchestrator,
    resolve_locations,
    trusted_pairs,
    untrusted_pairs,
)
from .store import CorpusStore

__all__ = [
    # Factory (main entry point)
    "create_corpus_store",
    # Config
    "CorpusConfig",
    # Models
    "PlagiarismResult",
    "ComparisonBatch",
    # Errors
    "CorpusError",
    "LocationLookupError",
    # Components (for advanced usage/testing)
    "CorpusStore",
    "ComparisonOrchestrator",
    "resolve_locations",
    "trusted_pairs",
    "untrusted_pairs",
]
