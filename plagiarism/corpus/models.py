"""Data models for the corpus store and comparison results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import ConfigurationError
from ..fragments.models import FragmentLocation, OwnerID
from ..matching.matcher import ComparisonBudget
from ..matching.metrics import Metric, validate_cutoff

LocationPair = tuple[tuple[FragmentLocation, ...], tuple[FragmentLocation, ...]]


@dataclass(frozen=True)
class CorpusConfig:
    """Corpus-wide configuration, fixed when the store is created."""

    n: int = 6
    """Fragment length in words."""

    s: int = 0
    """Metric cutoff, read on the metric's own scale. Ignored for EQUAL."""

    metric: Metric = Metric.EQUAL
    """Fragment comparison rule."""

    prefer_untrusted_text: bool = True
    """
    Which partition wins in all_normalized_text() when an owner id is in both.
    True = untrusted (the text under scrutiny), False = trusted.
    """

    budget: ComparisonBudget = field(default_factory=ComparisonBudget)
    """Work limits for each comparison run. Unlimited by default."""

    def __post_init__(self) -> None:
        """Validate n and the cutoff for the chosen metric."""
        if self.n < 1:
            raise ConfigurationError(f"Fragment length n must be >= 1, got {self.n}")
        validate_cutoff(self.metric, self.s)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "n": self.n,
            "s": self.s,
            "metric": self.metric.value,
            "prefer_untrusted_text": self.prefer_untrusted_text,
            "deadline_seconds": self.budget.deadline_seconds,
            "max_comparisons": self.budget.max_comparisons,
        }


@dataclass(frozen=True)
class PlagiarismResult:
    """
    Evidence of overlap between two owners.

    Element i of matching_fragments_locations holds the locations of both
    members of matching_fragments[i]. Location data is held as tuples, so
    later changes to the store never alter a returned result.
    """

    owner1: OwnerID
    owner2: OwnerID

    matching_fragments: tuple[tuple[str, str], ...]
    """One (fragment from owner1, fragment from owner2) per match."""

    matching_fragments_locations: tuple[LocationPair, ...]
    """(locations in owner1, locations in owner2) per match."""

    trusted_owner1: bool
    """True when owner1 is a trusted source."""

    equal_fragments: bool
    """True when both fragments of every pair are identical (EQUAL metric)."""

    def __post_init__(self) -> None:
        """Validate fragments and locations line up."""
        if len(self.matching_fragments) != len(self.matching_fragments_locations):
            raise ValueError(
                f"matching_fragments ({len(self.matching_fragments)}) and "
                f"matching_fragments_locations ({len(self.matching_fragments_locations)}) "
                "must have the same length"
            )

    @property
    def match_count(self) -> int:
        """Number of matching fragment pairs."""
        return len(self.matching_fragments)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "owner1": self.owner1,
            "owner2": self.owner2,
            "matching_fragments": [list(pair) for pair in self.matching_fragments],
            "matching_fragments_locations": [
                [[list(loc) for loc in first], [list(loc) for loc in second]]
                for first, second in self.matching_fragments_locations
            ],
            "trusted_owner1": self.trusted_owner1,
            "equal_fragments": self.equal_fragments,
        }


@dataclass(frozen=True)
class ComparisonBatch:
    """
    Outcome of one comparison run over many owner pairs.

    When the work budget ran out, complete is False and results holds
    only the pairs finished before that point.
    """

    results: tuple[PlagiarismResult, ...]
    pairs_total: int
    pairs_compared: int
    complete: bool = True
    elapsed_ms: float = 0.0

    @property
    def match_count(self) -> int:
        """Total matching fragment pairs across all results."""
        return sum(r.match_count for r in self.results)

    @property
    def flagged_owners(self) -> frozenset[OwnerID]:
        """Owners appearing in at least one result."""
        return frozenset(
            owner for r in self.results for owner in (r.owner1, r.owner2)
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "results": [r.to_dict() for r in self.results],
            "pairs_total": self.pairs_total,
            "pairs_compared": self.pairs_compared,
            "complete": self.complete,
            "match_count": self.match_count,
            "flagged_owners": sorted(self.flagged_owners),
            "elapsed_ms": round(self.elapsed_ms, 1),
        }
