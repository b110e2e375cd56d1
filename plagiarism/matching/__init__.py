"""
Matching engine for comparing fragment sets.

This module provides:
- Metric variants (exact equality and threshold similarity kinds)
- Similarity oracles (edit distances, token overlap ratio)
- Matchers that return matching fragment pairs between two entries
- Work budgets for bounding the similarity sweep

Usage:
    from plagiarism.matching import Metric, create_matcher

    matcher = create_matcher(Metric.LEVENSHTEIN, cutoff=2)
    pairs = matcher.match(entry_a, entry_b)
    # [("the cat sat", "the bat sat"), ...]
"""

from .errors import BudgetExhaustedError, MatchingError
from .matcher import (
    BudgetTracker,
    ComparisonBudget,
    EqualMatcher,
    FragmentMatcher,
    FragmentPair,
    SimilarityMatcher,
    create_matcher,
)
from .metrics import (
    SIMILARITY_ORACLES,
    Metric,
    SimilarityOracle,
    damerau_levenshtein_distance,
    get_oracle,
    is_similar,
    levenshtein_distance,
    overlap_ratio,
    validate_cutoff,
)

__all__ = [
    # Factory (main entry point)
    "create_matcher",
    # Metrics
    "Metric",
    "is_similar",
    "get_oracle",
    "validate_cutoff",
    "levenshtein_distance",
    "damerau_levenshtein_distance",
    "overlap_ratio",
    "SIMILARITY_ORACLES",
    "SimilarityOracle",
    # Budget
    "ComparisonBudget",
    "BudgetTracker",
    # Errors
    "MatchingError",
    "BudgetExhaustedError",
    # Components (for advanced usage/testing)
    "FragmentMatcher",
    "FragmentPair",
    "EqualMatcher",
    "SimilarityMatcher",
]
