"""Pytest configuration and shared fixtures."""

import pytest

from plagiarism.corpus import CorpusStore, create_corpus_store

SHARED_PASSAGE = (
    "It was the best of times, it was the worst of times, "
    "it was the age of wisdom."
)
UNRELATED_PASSAGE = "Call me Ishmael. Some years ago, never mind how long precisely."


@pytest.fixture
def equal_store() -> CorpusStore:
    """Empty store with 3-word fragments and exact matching."""
    return create_corpus_store(n=3)


@pytest.fixture
def populated_store(equal_store: CorpusStore) -> CorpusStore:
    """
    Store with two copied submissions, one original, and one source.

    alice and bob share SHARED_PASSAGE; carol is unrelated; the trusted
    source "dickens" is also SHARED_PASSAGE.
    """
    equal_store.add_trusted("dickens", SHARED_PASSAGE)
    equal_store.add_untrusted("alice", SHARED_PASSAGE)
    equal_store.add_untrusted("bob", "Preface. " + SHARED_PASSAGE)
    equal_store.add_untrusted("carol", UNRELATED_PASSAGE)
    return equal_store
