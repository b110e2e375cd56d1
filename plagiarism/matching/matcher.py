"""
Matching engine: find matching fragment pairs between two text entries.

Two strategies:
- EqualMatcher: hashed set intersection, O(min(|A|, |B|))
- SimilarityMatcher: every fragment against every fragment through a
  similarity oracle, O(|A| * |B|). This is the dominant cost of a run,
  so it charges a BudgetTracker and stops once the budget is spent.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from ..errors import ConfigurationError
from ..fragments.models import TextEntry
from .errors import BudgetExhaustedError
from .metrics import Metric, SimilarityOracle, get_oracle, validate_cutoff

FragmentPair = tuple[str, str]


@dataclass(frozen=True)
class ComparisonBudget:
    """Limits on the work a single comparison run may do."""

    deadline_seconds: float | None = None
    """Wall-clock limit for a run, measured from its start. None = no limit."""

    max_comparisons: int | None = None
    """Maximum oracle evaluations per run. None = no limit."""

    def __post_init__(self) -> None:
        """Validate limits are positive."""
        if self.deadline_seconds is not None and self.deadline_seconds <= 0:
            raise ConfigurationError(
                f"deadline_seconds must be > 0, got {self.deadline_seconds}"
            )
        if self.max_comparisons is not None and self.max_comparisons < 1:
            raise ConfigurationError(
                f"max_comparisons must be >= 1, got {self.max_comparisons}"
            )

    @property
    def unlimited(self) -> bool:
        """True when no limit is set."""
        return self.deadline_seconds is None and self.max_comparisons is None

    def start(self, clock: Callable[[], float] = time.monotonic) -> BudgetTracker:
        """Start tracking a run against this budget."""
        return BudgetTracker(self, clock)


class BudgetTracker:
    """
    Tracks work done in one run. Thread-safe.

    Usage:
        tracker = ComparisonBudget(max_comparisons=1_000_000).start()
        tracker.charge(500)  # raises BudgetExhaustedError once over
    """

    def __init__(
        self,
        budget: ComparisonBudget,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._budget = budget
        self._clock = clock
        self._started = clock()
        self._comparisons = 0
        self._exhausted = False
        self._lock = threading.Lock()

    @property
    def comparisons(self) -> int:
        """Oracle evaluations charged so far."""
        return self._comparisons

    @property
    def exhausted(self) -> bool:
        """True once any charge has exceeded the budget."""
        return self._exhausted

    def charge(self, comparisons: int) -> None:
        """
        Record work about to be done.

        Raises:
            BudgetExhaustedError: If the deadline has passed or the
                comparison limit would be exceeded
        """
        with self._lock:
            if not self._exhausted:
                self._comparisons += comparisons
                self._exhausted = self._over_budget()
            if self._exhausted:
                raise BudgetExhaustedError(
                    f"Comparison budget exhausted after {self._comparisons} comparisons",
                    comparisons=self._comparisons,
                )

    def _over_budget(self) -> bool:
        limit = self._budget.max_comparisons
        if limit is not None and self._comparisons > limit:
            return True
        deadline = self._budget.deadline_seconds
        if deadline is not None and self._clock() - self._started > deadline:
            return True
        return False


class FragmentMatcher(Protocol):
    """Finds matching fragment pairs between two entries."""

    metric: Metric

    def match(
        self,
        source: TextEntry,
        against: TextEntry,
        tracker: BudgetTracker | None = None,
    ) -> list[FragmentPair]:
        """Return (source_fragment, against_fragment) pairs. Empty = no evidence."""
        ...


class EqualMatcher:
    """Matches fragments by exact string equality via set intersection."""

    metric = Metric.EQUAL

    def match(
        self,
        source: TextEntry,
        against: TextEntry,
        tracker: BudgetTracker | None = None,
    ) -> list[FragmentPair]:
        """
        Return (f, f) for every fragment present in both entries.

        Sorted by fragment. Never charges the tracker.
        """
        shared = source.fragments & against.fragments
        return [(fragment, fragment) for fragment in sorted(shared)]


class SimilarityMatcher:
    """
    Matches fragments through a threshold similarity oracle.

    Each source fragment is compared against each fragment of the other
    entry. A fragment may match many fragments on the other side; the
    relation is not assumed to be symmetric.
    """

    def __init__(self, metric: Metric, cutoff: int, oracle: SimilarityOracle):
        """
        Initialize matcher.

        Prefer using create_matcher().
        """
        self.metric = metric
        self.cutoff = cutoff
        self._oracle = oracle

    def match(
        self,
        source: TextEntry,
        against: TextEntry,
        tracker: BudgetTracker | None = None,
    ) -> list[FragmentPair]:
        """
        Return every (fa, fb) the oracle accepts.

        Iterates both fragment sets in sorted order.

        Raises:
            BudgetExhaustedError: If the tracker runs out mid-sweep. Pairs
                found for this entry pair so far are discarded.
        """
        against_fragments = sorted(against.fragments)
        if not against_fragments:
            return []

        matches: list[FragmentPair] = []
        for source_fragment in sorted(source.fragments):
            if tracker is not None:
                tracker.charge(len(against_fragments))
            for against_fragment in against_fragments:
                if self._oracle(source_fragment, against_fragment, self.cutoff):
                    matches.append((source_fragment, against_fragment))
        return matches


def create_matcher(metric: Metric, cutoff: int = 0) -> FragmentMatcher:
    """
    Create the matcher for a metric.

    This is the only place that dispatches on the metric kind.

    Args:
        metric: Comparison rule
        cutoff: Metric-specific cutoff (ignored for EQUAL)

    Returns:
        EqualMatcher for EQUAL, SimilarityMatcher otherwise

    Raises:
        ConfigurationError: If cutoff is out of range for the metric

    Example:
        matcher = create_matcher(Metric.LEVENSHTEIN, cutoff=2)
        pairs = matcher.match(entry_a, entry_b)
    """
    validate_cutoff(metric, cutoff)
    if metric.is_equal:
        return EqualMatcher()
    return SimilarityMatcher(metric, cutoff, get_oracle(metric))
