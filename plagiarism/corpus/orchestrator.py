"""
Comparison orchestrator for running the matching engine over owner pairs.

Enumerates which owners to compare, runs the matcher on each pair and
resolves every match back to word locations in both texts.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping, Sequence
from itertools import combinations, product

from ..fragments.models import FragmentLocation, OwnerID, TextEntry
from ..matching.errors import BudgetExhaustedError
from ..matching.matcher import (
    BudgetTracker,
    ComparisonBudget,
    FragmentMatcher,
    FragmentPair,
)
from .errors import LocationLookupError
from .models import ComparisonBatch, LocationPair, PlagiarismResult

logger = logging.getLogger(__name__)

OwnerPair = tuple[OwnerID, OwnerID]
Partition = Mapping[OwnerID, TextEntry]


def untrusted_pairs(untrusted: Partition) -> list[OwnerPair]:
    """Every unordered pair of distinct owners, once, in sorted owner order."""
    return list(combinations(sorted(untrusted), 2))


def trusted_pairs(trusted: Partition, untrusted: Partition) -> list[OwnerPair]:
    """Every trusted owner against every untrusted owner."""
    return list(product(sorted(trusted), sorted(untrusted)))


class ComparisonOrchestrator:
    """
    Run a matcher over many owner pairs.

    The first owner of a pair is looked up in the first partition (trusted
    when comparing against reference material, otherwise untrusted); the
    second owner is looked up in the second partition.

    Usage:
        orchestrator = ComparisonOrchestrator(create_matcher(Metric.EQUAL))
        batch = orchestrator.compare_all(
            untrusted_pairs(untrusted), untrusted, untrusted, trusted_owner1=False
        )
        for result in batch.results:
            print(result.owner1, result.owner2, result.match_count)
    """

    def __init__(
        self,
        matcher: FragmentMatcher,
        budget: ComparisonBudget | None = None,
    ):
        """
        Initialize orchestrator.

        Args:
            matcher: Matching strategy for fragment pairs.
            budget: Work limits per run. Unlimited if None.
        """
        self._matcher = matcher
        self._budget = budget or ComparisonBudget()

    def _start_tracker(self) -> BudgetTracker | None:
        """Start a tracker for one run. None when nothing needs counting."""
        if self._budget.unlimited:
            return None
        return self._budget.start()

    @property
    def equal_fragments(self) -> bool:
        """True when matched fragment pairs are always identical strings."""
        return self._matcher.metric.is_equal

    def compare_all(
        self,
        pairs: Sequence[OwnerPair],
        first: Partition,
        second: Partition,
        trusted_owner1: bool,
    ) -> ComparisonBatch:
        """
        Compare every owner pair, one after another.

        Stops early if the budget runs out; pairs finished before that
        are kept and the batch is marked incomplete.

        Raises:
            LocationLookupError: If a matched fragment has no location
        """
        start_time = time.time()
        tracker = self._start_tracker()
        results: list[PlagiarismResult] = []
        compared = 0

        logger.info(
            f"Comparing {len(pairs)} owner pairs "
            f"(metric={self._matcher.metric.value}, trusted={trusted_owner1})"
        )

        for owner1, owner2 in pairs:
            try:
                result = self.compare_pair(
                    first[owner1], second[owner2], trusted_owner1, tracker
                )
            except BudgetExhaustedError as e:
                logger.warning(
                    f"Stopping after {compared}/{len(pairs)} pairs: {e}"
                )
                break
            compared += 1
            if result is not None:
                results.append(result)

        return self._finish(results, len(pairs), compared, tracker, start_time)

    async def compare_all_async(
        self,
        pairs: Sequence[OwnerPair],
        first: Partition,
        second: Partition,
        trusted_owner1: bool,
        max_concurrent: int = 4,
    ) -> ComparisonBatch:
        """
        Compare owner pairs concurrently in worker threads.

        Entries are immutable, so pairs share no mutable state. Rows are
        sorted by (owner1, owner2) after all workers finish, giving the same
        order as compare_all().

        Args:
            pairs: Owner pairs to compare
            first: Partition holding each pair's first owner
            second: Partition holding each pair's second owner
            trusted_owner1: Whether the first partition is trusted
            max_concurrent: Maximum pairs compared at the same time

        Raises:
            LocationLookupError: If a matched fragment has no location
        """
        start_time = time.time()
        tracker = self._start_tracker()
        semaphore = asyncio.Semaphore(max_concurrent)

        logger.info(
            f"Comparing {len(pairs)} owner pairs with {max_concurrent} workers "
            f"(metric={self._matcher.metric.value}, trusted={trusted_owner1})"
        )

        async def compare_with_semaphore(
            owner1: OwnerID, owner2: OwnerID
        ) -> tuple[bool, PlagiarismResult | None]:
            async with semaphore:
                if tracker is not None and tracker.exhausted:
                    return False, None
                try:
                    result = await asyncio.to_thread(
                        self.compare_pair,
                        first[owner1],
                        second[owner2],
                        trusted_owner1,
                        tracker,
                    )
                except BudgetExhaustedError:
                    return False, None
                return True, result

        outcomes = await asyncio.gather(
            *(compare_with_semaphore(owner1, owner2) for owner1, owner2 in pairs)
        )

        compared = sum(1 for done, _ in outcomes if done)
        results = sorted(
            (result for _, result in outcomes if result is not None),
            key=lambda r: (r.owner1, r.owner2),
        )

        if tracker is not None and tracker.exhausted:
            logger.warning(
                f"Comparison budget exhausted: {compared}/{len(pairs)} pairs compared"
            )

        return self._finish(results, len(pairs), compared, tracker, start_time)

    def compare_pair(
        self,
        source: TextEntry,
        against: TextEntry,
        trusted_owner1: bool,
        tracker: BudgetTracker | None = None,
    ) -> PlagiarismResult | None:
        """
        Compare two entries.

        Returns None when nothing matches (no evidence for this pair).

        Raises:
            BudgetExhaustedError: If the tracker runs out during matching
            LocationLookupError: If a matched fragment has no location
        """
        matching_fragments = self._matcher.match(source, against, tracker)
        if not matching_fragments:
            return None

        logger.debug(
            f"{source.owner} vs {against.owner}: "
            f"{len(matching_fragments)} matching fragments"
        )

        return PlagiarismResult(
            owner1=source.owner,
            owner2=against.owner,
            matching_fragments=tuple(matching_fragments),
            matching_fragments_locations=resolve_locations(
                matching_fragments, source, against
            ),
            trusted_owner1=trusted_owner1,
            equal_fragments=self.equal_fragments,
        )

    def _finish(
        self,
        results: list[PlagiarismResult],
        pairs_total: int,
        pairs_compared: int,
        tracker: BudgetTracker | None,
        start_time: float,
    ) -> ComparisonBatch:
        elapsed_ms = (time.time() - start_time) * 1000
        batch = ComparisonBatch(
            results=tuple(results),
            pairs_total=pairs_total,
            pairs_compared=pairs_compared,
            complete=tracker is None or not tracker.exhausted,
            elapsed_ms=elapsed_ms,
        )

        logger.info(
            f"Comparison complete: {len(batch.results)} flagged pairs, "
            f"{batch.match_count} matching fragments in {elapsed_ms:.1f}ms"
        )

        return batch


def resolve_locations(
    matching_fragments: Sequence[FragmentPair],
    source: TextEntry,
    against: TextEntry,
) -> tuple[LocationPair, ...]:
    """
    Look up where each matched fragment occurs in its own text.

    Raises:
        LocationLookupError: If either fragment is missing from its
            entry's location mapping
    """
    return tuple(
        (
            _locations_of(source, source_fragment),
            _locations_of(against, against_fragment),
        )
        for source_fragment, against_fragment in matching_fragments
    )


def _locations_of(entry: TextEntry, fragment: str) -> tuple[FragmentLocation, ...]:
    try:
        return entry.locations_of(fragment)
    except KeyError:
        raise LocationLookupError(
            f"Fragment '{fragment}' has no location in text of {entry.owner}",
            owner=entry.owner,
            fragment=fragment,
        ) from None
