"""
Corpus store: trusted and untrusted texts, indexed by owner.

Texts are normalized and indexed once at insertion. Queries never modify
the store; each query sees whatever has been inserted so far.
"""

from __future__ import annotations

import logging
import threading

from ..fragments.indexer import build_text_entry
from ..fragments.models import OwnerID, TextEntry
from ..matching.matcher import create_matcher
from ..text import NgramBuilder, Normalizer, clean_text, extract_word_ngrams
from .models import ComparisonBatch, CorpusConfig, PlagiarismResult
from .orchestrator import ComparisonOrchestrator, trusted_pairs, untrusted_pairs

logger = logging.getLogger(__name__)


class CorpusStore:
    """
    Stores the corpus of trusted and untrusted texts.

    Each partition maps owner id -> TextEntry. Adding an owner that is
    already in a partition replaces its entry (last write wins). The same
    owner id may be in both partitions; the two entries are independent.

    Insertion is guarded by a lock. Queries copy both partitions under the
    lock and compare against that snapshot, so concurrent inserts never
    affect a running query.

    Usage:
        store = create_corpus_store(n=3)
        store.add_trusted("wiki", reference_text)
        store.add_untrusted("alice", essay_a)
        store.add_untrusted("bob", essay_b)

        for result in store.check_untrusted_plagiarism():
            print(f"{result.owner1} <-> {result.owner2}: {result.match_count}")
    """

    def __init__(
        self,
        config: CorpusConfig,
        normalizer: Normalizer = clean_text,
        ngrams: NgramBuilder = extract_word_ngrams,
    ):
        """
        Initialize an empty store.

        Matching strategy and work budget are built from config.

        Prefer using create_corpus_store() factory.
        """
        self._config = config
        self._orchestrator = ComparisonOrchestrator(
            create_matcher(config.metric, config.s), config.budget
        )
        self._normalizer = normalizer
        self._ngrams = ngrams
        self._trusted: dict[OwnerID, TextEntry] = {}
        self._untrusted: dict[OwnerID, TextEntry] = {}
        self._lock = threading.Lock()

    @property
    def config(self) -> CorpusConfig:
        """Corpus-wide configuration."""
        return self._config

    @property
    def trusted_owners(self) -> list[OwnerID]:
        """Owner ids in the trusted partition, sorted."""
        with self._lock:
            return sorted(self._trusted)

    @property
    def untrusted_owners(self) -> list[OwnerID]:
        """Owner ids in the untrusted partition, sorted."""
        with self._lock:
            return sorted(self._untrusted)

    def get_entry(self, owner: OwnerID, trusted: bool = False) -> TextEntry | None:
        """Get an owner's entry from one partition, or None if absent."""
        with self._lock:
            partition = self._trusted if trusted else self._untrusted
            return partition.get(owner)

    # --- Insertion ---

    def add_trusted(self, owner: OwnerID, raw_text: str) -> None:
        """Add a text as potential plagiarism source material."""
        self._insert(owner, raw_text, trusted=True)

    def add_untrusted(self, owner: OwnerID, raw_text: str) -> None:
        """Add a text to be screened for plagiarism."""
        self._insert(owner, raw_text, trusted=False)

    add_trusted_text = add_trusted
    add_untrusted_text = add_untrusted

    def _insert(self, owner: OwnerID, raw_text: str, trusted: bool) -> None:
        # Index outside the lock; only the dict write is exclusive
        words = self._normalizer(raw_text)
        entry = build_text_entry(owner, words, self._config.n, self._ngrams)
        kind = "trusted" if trusted else "untrusted"

        if entry.is_empty:
            logger.debug(
                f"{kind} text for {owner} has {len(words)} words, "
                f"fewer than n={self._config.n}: no fragments"
            )

        with self._lock:
            partition = self._trusted if trusted else self._untrusted
            replaced = owner in partition
            partition[owner] = entry

        if replaced:
            logger.debug(f"Replaced {kind} text for {owner}")

    # --- Queries ---

    def all_normalized_text(self) -> dict[OwnerID, list[str]]:
        """
        Get the normalized words of every text, keyed by owner.

        When an owner is in both partitions, the untrusted text wins if
        config.prefer_untrusted_text is True, otherwise the trusted text.
        """
        with self._lock:
            trusted = dict(self._trusted)
            untrusted = dict(self._untrusted)

        if self._config.prefer_untrusted_text:
            first, last = trusted, untrusted
        else:
            first, last = untrusted, trusted

        merged = {owner: list(entry.words) for owner, entry in first.items()}
        merged.update({owner: list(entry.words) for owner, entry in last.items()})
        return merged

    def check_untrusted_plagiarism(self) -> list[PlagiarismResult]:
        """Compare every pair of distinct untrusted owners once."""
        return list(self.compare_untrusted().results)

    def check_trusted_plagiarism(self) -> list[PlagiarismResult]:
        """Compare every trusted owner against every untrusted owner."""
        return list(self.compare_trusted().results)

    def compare_untrusted(self) -> ComparisonBatch:
        """Like check_untrusted_plagiarism(), returning the full batch."""
        _, untrusted = self._snapshot()
        return self._orchestrator.compare_all(
            untrusted_pairs(untrusted), untrusted, untrusted, trusted_owner1=False
        )

    def compare_trusted(self) -> ComparisonBatch:
        """Like check_trusted_plagiarism(), returning the full batch."""
        trusted, untrusted = self._snapshot()
        return self._orchestrator.compare_all(
            trusted_pairs(trusted, untrusted), trusted, untrusted, trusted_owner1=True
        )

    async def compare_untrusted_async(self, max_concurrent: int = 4) -> ComparisonBatch:
        """compare_untrusted() with pairs fanned out to worker threads."""
        _, untrusted = self._snapshot()
        return await self._orchestrator.compare_all_async(
            untrusted_pairs(untrusted),
            untrusted,
            untrusted,
            trusted_owner1=False,
            max_concurrent=max_concurrent,
        )

    async def compare_trusted_async(self, max_concurrent: int = 4) -> ComparisonBatch:
        """compare_trusted() with pairs fanned out to worker threads."""
        trusted, untrusted = self._snapshot()
        return await self._orchestrator.compare_all_async(
            trusted_pairs(trusted, untrusted),
            trusted,
            untrusted,
            trusted_owner1=True,
            max_concurrent=max_concurrent,
        )

    def _snapshot(self) -> tuple[dict[OwnerID, TextEntry], dict[OwnerID, TextEntry]]:
        with self._lock:
            return dict(self._trusted), dict(self._untrusted)
