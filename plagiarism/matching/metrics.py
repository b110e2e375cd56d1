"""
Metric variants and the similarity oracles behind them.

Each similarity metric pairs with an integer cutoff s read on its own scale:
- LEVENSHTEIN: character edit distance, similar when distance <= s
- DAMERAU_LEVENSHTEIN: edit distance where swapping two adjacent characters
  counts as one edit (optimal string alignment), similar when distance <= s
- OVERLAP_RATIO: word-token match ratio (2*M/T) scaled to 0-100,
  similar when ratio * 100 >= s

All boundaries are inclusive. EQUAL has no oracle: it is matched by set
intersection in the matching engine.

Adding a metric means adding an enum member and registering its oracle in
SIMILARITY_ORACLES. The matching engine does not change.
"""

from __future__ import annotations

from collections.abc import Callable
from difflib import SequenceMatcher
from enum import Enum

from rapidfuzz.distance import OSA, Levenshtein

from ..errors import ConfigurationError

SimilarityOracle = Callable[[str, str, int], bool]

MAX_RATIO_CUTOFF = 100


class Metric(str, Enum):
    """Fragment comparison rule."""

    EQUAL = "equal"
    LEVENSHTEIN = "levenshtein"
    DAMERAU_LEVENSHTEIN = "damerau_levenshtein"
    OVERLAP_RATIO = "overlap_ratio"

    @property
    def is_equal(self) -> bool:
        """True for exact-equality matching."""
        return self is Metric.EQUAL

    @classmethod
    def from_name(cls, name: str) -> Metric:
        """
        Look up a metric by name, case-insensitively.

        Raises:
            ConfigurationError: If no metric has that name
        """
        try:
            return cls(name.strip().lower())
        except ValueError as e:
            choices = ", ".join(m.value for m in cls)
            raise ConfigurationError(
                f"Unknown metric '{name}'. Expected one of: {choices}"
            ) from e


# --- Distance functions ---


def levenshtein_distance(a: str, b: str, score_cutoff: int | None = None) -> int:
    """
    Character edit distance (insert, delete, substitute each cost 1).

    With score_cutoff, any distance above it is reported as score_cutoff + 1.
    """
    return Levenshtein.distance(a, b, score_cutoff=score_cutoff)


def damerau_levenshtein_distance(
    a: str, b: str, score_cutoff: int | None = None
) -> int:
    """
    Optimal string alignment distance.

    Like levenshtein_distance, plus a transposition of two adjacent
    characters costs 1. No substring is edited more than once.
    """
    return OSA.distance(a, b, score_cutoff=score_cutoff)


def _overlap_counts(a: str, b: str) -> tuple[int, int]:
    """(M, T): tokens in matching blocks, and total tokens of both fragments."""
    tokens_a = a.split()
    tokens_b = b.split()
    matcher = SequenceMatcher(None, tokens_a, tokens_b, autojunk=False)
    matched = sum(block.size for block in matcher.get_matching_blocks())
    return matched, len(tokens_a) + len(tokens_b)


def overlap_ratio(a: str, b: str) -> float:
    """
    Word-token match ratio in [0.0, 1.0].

    ratio = 2 * M / T, where M is the number of tokens in matching blocks
    and T the total token count of both fragments.
    """
    matched, total = _overlap_counts(a, b)
    if not total:
        return 1.0
    return 2 * matched / total


# --- Oracles ---


def _within_levenshtein(a: str, b: str, cutoff: int) -> bool:
    return levenshtein_distance(a, b, score_cutoff=cutoff) <= cutoff


def _within_damerau_levenshtein(a: str, b: str, cutoff: int) -> bool:
    return damerau_levenshtein_distance(a, b, score_cutoff=cutoff) <= cutoff


def _above_overlap_ratio(a: str, b: str, cutoff: int) -> bool:
    # Integer form of 2*M/T * 100 >= cutoff
    matched, total = _overlap_counts(a, b)
    if not total:
        return cutoff <= MAX_RATIO_CUTOFF
    return 200 * matched >= cutoff * total


SIMILARITY_ORACLES: dict[Metric, SimilarityOracle] = {
    Metric.LEVENSHTEIN: _within_levenshtein,
    Metric.DAMERAU_LEVENSHTEIN: _within_damerau_levenshtein,
    Metric.OVERLAP_RATIO: _above_overlap_ratio,
}


def get_oracle(metric: Metric) -> SimilarityOracle:
    """
    Get the similarity oracle for a metric.

    Raises:
        ConfigurationError: If the metric has no oracle (e.g. EQUAL)
    """
    oracle = SIMILARITY_ORACLES.get(metric)
    if oracle is None:
        raise ConfigurationError(f"Metric {metric.value} has no similarity oracle")
    return oracle


def is_similar(a: str, b: str, metric: Metric, cutoff: int) -> bool:
    """
    Decide whether two fragments match under a metric and cutoff.

    Pure function. EQUAL is plain string equality.

    Example:
        >>> is_similar("the cat sat", "the bat sat", Metric.LEVENSHTEIN, 1)
        True
        >>> is_similar("the cat sat", "the bat set", Metric.LEVENSHTEIN, 1)
        False
    """
    if metric.is_equal:
        return a == b
    return get_oracle(metric)(a, b, cutoff)


def validate_cutoff(metric: Metric, cutoff: int) -> None:
    """
    Check a cutoff against the metric's scale.

    Raises:
        ConfigurationError: If cutoff is negative, or above 100 for OVERLAP_RATIO
    """
    if cutoff < 0:
        raise ConfigurationError(f"Metric cutoff must be >= 0, got {cutoff}")
    if metric is Metric.OVERLAP_RATIO and cutoff > MAX_RATIO_CUTOFF:
        raise ConfigurationError(
            f"Cutoff for {metric.value} must be <= {MAX_RATIO_CUTOFF}, got {cutoff}"
        )
