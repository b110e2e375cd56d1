"""Unit tests for CorpusStore."""

from unittest.mock import MagicMock

import pytest

from plagiarism.corpus import CorpusConfig, CorpusStore, create_corpus_store
from plagiarism.fragments import FragmentLocation
from plagiarism.matching import Metric

SHARED = "it was the best of times it was the worst of times"


class TestCorpusStoreInsertion:
    """Tests for add_trusted / add_untrusted."""

    def test_entries_normalized_and_indexed(self, equal_store: CorpusStore) -> None:
        """Raw text is normalized and indexed with the store's n."""
        equal_store.add_untrusted("alice", "The cat sat. The CAT sat!")

        entry = equal_store.get_entry("alice")
        assert entry is not None
        assert entry.words == ("the", "cat", "sat", "the", "cat", "sat")
        assert entry.locations["the cat sat"] == (
            FragmentLocation(0, 3),
            FragmentLocation(3, 6),
        )

    def test_partitions_independent(self, equal_store: CorpusStore) -> None:
        """Same owner id can be trusted and untrusted at once."""
        equal_store.add_trusted("alice", "one two three")
        equal_store.add_untrusted("alice", "four five six")

        assert equal_store.get_entry("alice", trusted=True).words == (
            "one",
            "two",
            "three",
        )
        assert equal_store.get_entry("alice").words == ("four", "five", "six")

    def test_duplicate_owner_replaced(self, equal_store: CorpusStore) -> None:
        """Adding an owner again replaces the previous entry."""
        equal_store.add_untrusted("alice", "one two three")
        equal_store.add_untrusted("alice", "four five six")

        assert equal_store.untrusted_owners == ["alice"]
        assert equal_store.get_entry("alice").fragments == {"four five six"}

    def test_short_text_stored_without_fragments(
        self, equal_store: CorpusStore
    ) -> None:
        """Text shorter than n is valid and has no fragments."""
        equal_store.add_untrusted("alice", "too short")

        entry = equal_store.get_entry("alice")
        assert entry is not None
        assert entry.is_empty is True

    def test_empty_text_stored(self, equal_store: CorpusStore) -> None:
        """Empty text is stored, not rejected."""
        equal_store.add_untrusted("alice", "")
        assert equal_store.untrusted_owners == ["alice"]

    def test_aliases(self, equal_store: CorpusStore) -> None:
        """add_*_text are aliases of add_*."""
        equal_store.add_trusted_text("src", "a b c")
        equal_store.add_untrusted_text("sub", "a b c")

        assert equal_store.trusted_owners == ["src"]
        assert equal_store.untrusted_owners == ["sub"]

    def test_injected_normalizer_used(self) -> None:
        """Custom normalizer replaces clean_text."""
        normalizer = MagicMock(return_value=["x", "y"])
        store = create_corpus_store(n=2, normalizer=normalizer)

        store.add_untrusted("alice", "anything")

        normalizer.assert_called_once_with("anything")
        assert store.get_entry("alice").fragments == {"x y"}

    def test_matching_follows_config(self) -> None:
        """A store built from a config matches with that config's metric."""
        config = CorpusConfig(n=3, s=1, metric=Metric.LEVENSHTEIN)
        store = CorpusStore(config)
        store.add_untrusted("x", "the cat sat")
        store.add_untrusted("y", "the bat sat")

        results = store.check_untrusted_plagiarism()

        assert store.config.to_dict()["metric"] == "levenshtein"
        assert len(results) == 1
        assert results[0].matching_fragments == (("the cat sat", "the bat sat"),)
        assert results[0].equal_fragments is False

    def test_get_entry_missing(self, equal_store: CorpusStore) -> None:
        """Unknown owner returns None."""
        assert equal_store.get_entry("nobody") is None
        assert equal_store.get_entry("nobody", trusted=True) is None


class TestAllNormalizedText:
    """Tests for CorpusStore.all_normalized_text."""

    def test_merges_partitions(self, equal_store: CorpusStore) -> None:
        """Owners from both partitions are returned."""
        equal_store.add_trusted("src", "Alpha beta")
        equal_store.add_untrusted("sub", "Gamma")

        assert equal_store.all_normalized_text() == {
            "src": ["alpha", "beta"],
            "sub": ["gamma"],
        }

    def test_untrusted_wins_by_default(self, equal_store: CorpusStore) -> None:
        """On owner collision the untrusted text is returned."""
        equal_store.add_trusted("alice", "trusted words")
        equal_store.add_untrusted("alice", "untrusted words")

        assert equal_store.all_normalized_text() == {"alice": ["untrusted", "words"]}

    def test_trusted_wins_when_configured(self) -> None:
        """prefer_untrusted_text=False keeps the trusted text."""
        store = create_corpus_store(n=2, prefer_untrusted_text=False)
        store.add_untrusted("alice", "untrusted words")
        store.add_trusted("alice", "trusted words")

        assert store.all_normalized_text() == {"alice": ["trusted", "words"]}

    def test_empty_store(self, equal_store: CorpusStore) -> None:
        """Empty store gives empty mapping."""
        assert equal_store.all_normalized_text() == {}


class TestCheckUntrustedPlagiarism:
    """Tests for CorpusStore.check_untrusted_plagiarism."""

    def test_copied_pair_flagged(self, populated_store: CorpusStore) -> None:
        """Only the pair sharing text is reported."""
        results = populated_store.check_untrusted_plagiarism()

        assert len(results) == 1
        result = results[0]
        assert (result.owner1, result.owner2) == ("alice", "bob")
        assert result.trusted_owner1 is False

    def test_shifted_locations_resolved(self, populated_store: CorpusStore) -> None:
        """bob's copy is offset by the one-word preface."""
        result = populated_store.check_untrusted_plagiarism()[0]

        index = [fa for fa, _ in result.matching_fragments].index("it was the")
        locs_alice, locs_bob = result.matching_fragments_locations[index]
        assert locs_alice == ((0, 3), (6, 9), (12, 15))
        assert locs_bob == ((1, 4), (7, 10), (13, 16))

    def test_identical_texts_cover_shared_fragment_set(
        self, equal_store: CorpusStore
    ) -> None:
        """Identical texts match on exactly their whole fragment set."""
        equal_store.add_untrusted("x", SHARED)
        equal_store.add_untrusted("y", SHARED)

        results = equal_store.check_untrusted_plagiarism()

        assert len(results) == 1
        result = results[0]
        fragments = equal_store.get_entry("x").fragments
        assert {fa for fa, _ in result.matching_fragments} == fragments
        assert result.match_count == len(fragments)
        assert all(fa == fb for fa, fb in result.matching_fragments)
        assert result.equal_fragments is True

    def test_equal_metric_symmetric(self, equal_store: CorpusStore) -> None:
        """Swapping owner order gives the same matched fragment set."""
        equal_store.add_untrusted("x", "one two three four five six")
        equal_store.add_untrusted("y", "zero two three four five seven")
        forward = equal_store.check_untrusted_plagiarism()[0]

        # Re-insert under names that sort the other way round
        swapped = create_corpus_store(n=3)
        swapped.add_untrusted("b", "one two three four five six")
        swapped.add_untrusted("a", "zero two three four five seven")
        backward = swapped.check_untrusted_plagiarism()[0]

        assert (backward.owner1, backward.owner2) == ("a", "b")
        assert set(forward.matching_fragments) == set(backward.matching_fragments)

    def test_no_self_comparison(self, populated_store: CorpusStore) -> None:
        """owner1 and owner2 always differ."""
        populated_store.add_untrusted("dave", "it was the best of times")
        results = populated_store.check_untrusted_plagiarism()

        assert results
        assert all(r.owner1 != r.owner2 for r in results)
        pairs = [(r.owner1, r.owner2) for r in results]
        assert len(pairs) == len(set(pairs))
        assert not any((o2, o1) in pairs for o1, o2 in pairs)

    def test_no_shared_fragments_no_results(self, equal_store: CorpusStore) -> None:
        """Unrelated texts produce no results."""
        equal_store.add_untrusted("x", "one two three four")
        equal_store.add_untrusted("y", "five six seven eight")

        assert equal_store.check_untrusted_plagiarism() == []

    def test_overwrite_replaces_fragments(self, populated_store: CorpusStore) -> None:
        """Re-adding an owner changes what later queries see."""
        populated_store.add_untrusted(
            "bob", "Call me Ishmael. Some years ago, never mind how long precisely."
        )

        results = populated_store.check_untrusted_plagiarism()

        assert [(r.owner1, r.owner2) for r in results] == [("bob", "carol")]

    def test_results_unaffected_by_later_overwrite(
        self, populated_store: CorpusStore
    ) -> None:
        """Returned results keep their own copy of location data."""
        before = populated_store.check_untrusted_plagiarism()[0]
        snapshot = before.to_dict()

        populated_store.add_untrusted("bob", "completely different text now")

        assert before.to_dict() == snapshot

    def test_queries_repeatable(self, populated_store: CorpusStore) -> None:
        """Queries do not modify the store."""
        first = populated_store.check_untrusted_plagiarism()
        second = populated_store.check_untrusted_plagiarism()
        assert first == second

    def test_empty_entry_never_matches(self, equal_store: CorpusStore) -> None:
        """An owner without fragments is compared but never flagged."""
        equal_store.add_untrusted("x", SHARED)
        equal_store.add_untrusted("y", "it was")

        assert equal_store.check_untrusted_plagiarism() == []

    def test_similarity_metric(self) -> None:
        """Near-copies are found with an edit distance metric."""
        store = create_corpus_store(n=3, s=1, metric=Metric.LEVENSHTEIN)
        store.add_untrusted("x", "the cat sat")
        store.add_untrusted("y", "the bat sat")
        store.add_untrusted("z", "the bat set")

        results = store.check_untrusted_plagiarism()

        assert [(r.owner1, r.owner2) for r in results] == [("x", "y"), ("y", "z")]
        assert all(r.equal_fragments is False for r in results)


class TestCheckTrustedPlagiarism:
    """Tests for CorpusStore.check_trusted_plagiarism."""

    def test_sources_matched_against_submissions(
        self, populated_store: CorpusStore
    ) -> None:
        """Every copying submission is matched to the trusted source."""
        results = populated_store.check_trusted_plagiarism()

        assert [(r.owner1, r.owner2) for r in results] == [
            ("dickens", "alice"),
            ("dickens", "bob"),
        ]
        assert all(r.trusted_owner1 is True for r in results)

    def test_trusted_locations_from_trusted_partition(
        self, equal_store: CorpusStore
    ) -> None:
        """owner1 locations come from the trusted text of that owner."""
        equal_store.add_trusted("alice", "x y z alpha beta gamma")
        equal_store.add_untrusted("alice", "alpha beta gamma")

        results = equal_store.check_trusted_plagiarism()

        assert len(results) == 1
        assert results[0].matching_fragments_locations == ((((3, 6),), ((0, 3),)),)

    def test_no_trusted_texts(self, equal_store: CorpusStore) -> None:
        """Without trusted texts there is nothing to report."""
        equal_store.add_untrusted("x", SHARED)
        assert equal_store.check_trusted_plagiarism() == []


class TestCorpusStoreAsync:
    """Tests for the concurrent comparison methods."""

    @pytest.mark.asyncio
    async def test_untrusted_matches_sequential(
        self, populated_store: CorpusStore
    ) -> None:
        """Concurrent untrusted comparison returns the same results."""
        batch = await populated_store.compare_untrusted_async(max_concurrent=2)
        assert list(batch.results) == populated_store.check_untrusted_plagiarism()

    @pytest.mark.asyncio
    async def test_trusted_matches_sequential(
        self, populated_store: CorpusStore
    ) -> None:
        """Concurrent trusted comparison returns the same results."""
        batch = await populated_store.compare_trusted_async(max_concurrent=2)
        assert list(batch.results) == populated_store.check_trusted_plagiarism()
