"""Fragment indexer: word sequence -> fragment set + location mapping."""

from __future__ import annotations

from collections.abc import Sequence

from ..errors import ConfigurationError
from ..text import NgramBuilder, extract_word_ngrams
from .models import FragmentLocation, OwnerID, TextEntry


def index_fragments(
    words: Sequence[str],
    n: int,
    ngrams: NgramBuilder = extract_word_ngrams,
) -> tuple[frozenset[str], dict[str, tuple[FragmentLocation, ...]]]:
    """
    Split a word sequence into fragments and record where each occurs.

    Locations are collected in the same pass over the n-grams, since the
    position of a fragment cannot be recovered from the fragment set.

    Args:
        words: Normalized word sequence
        n: Fragment length in words (>= 1)
        ngrams: n-gram builder; element i must start at word i

    Returns:
        (fragments, locations). Both empty when len(words) < n.

    Raises:
        ConfigurationError: If n < 1

    Example:
        >>> fragments, locations = index_fragments(["a", "b", "a", "b"], 2)
        >>> sorted(fragments)
        ['a b', 'b a']
        >>> locations["a b"]
        (FragmentLocation(start=0, end=2), FragmentLocation(start=2, end=4))
    """
    if n < 1:
        raise ConfigurationError(f"Fragment length n must be >= 1, got {n}")

    if len(words) < n:
        return frozenset(), {}

    collected: dict[str, list[FragmentLocation]] = {}
    for start, fragment in enumerate(ngrams(words, n)):
        if fragment not in collected:
            collected[fragment] = []
        collected[fragment].append(FragmentLocation(start, start + n))

    locations = {fragment: tuple(locs) for fragment, locs in collected.items()}
    return frozenset(locations), locations


def build_text_entry(
    owner: OwnerID,
    words: Sequence[str],
    n: int,
    ngrams: NgramBuilder = extract_word_ngrams,
) -> TextEntry:
    """Index a word sequence and wrap it in an immutable TextEntry."""
    fragments, locations = index_fragments(words, n, ngrams)
    return TextEntry(
        owner=owner,
        words=tuple(words),
        fragments=fragments,
        locations=locations,
    )
