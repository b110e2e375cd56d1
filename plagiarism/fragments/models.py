"""Data models for fragment indexing."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, NamedTuple

OwnerID = str


class FragmentLocation(NamedTuple):
    """Half-open word index interval [start, end) of one fragment occurrence."""

    start: int
    end: int


@dataclass(frozen=True)
class TextEntry:
    """
    A single owner's text, broken into fragments.

    Immutable once built: words and location lists are tuples, fragments is
    a frozenset and locations is a read-only mapping.
    Invariant: locations.keys() == fragments.
    """

    owner: OwnerID
    words: tuple[str, ...]
    """Normalized text, word by word (kept for reporting)."""

    fragments: frozenset[str]
    """Unique fragment strings in the text."""

    locations: Mapping[str, tuple[FragmentLocation, ...]]
    """Fragment -> every location it occurs at, ordered by start."""

    def __post_init__(self) -> None:
        """Freeze the location mapping into a private copy."""
        object.__setattr__(
            self,
            "locations",
            MappingProxyType({f: tuple(locs) for f, locs in self.locations.items()}),
        )

    @property
    def fragment_count(self) -> int:
        """Number of distinct fragments."""
        return len(self.fragments)

    @property
    def is_empty(self) -> bool:
        """True when the text is shorter than one fragment."""
        return not self.fragments

    def locations_of(self, fragment: str) -> tuple[FragmentLocation, ...]:
        """Locations of a fragment. Raises KeyError if not in this text."""
        return self.locations[fragment]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "owner": self.owner,
            "word_count": len(self.words),
            "fragment_count": self.fragment_count,
        }
