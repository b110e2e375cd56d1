"""Custom exceptions for the matching engine."""

from __future__ import annotations

from ..errors import PlagiarismError


class MatchingError(PlagiarismError):
    """Base exception for matching-related errors."""

    pass


class BudgetExhaustedError(MatchingError):
    """
    Raised when a comparison run exceeds its work budget.

    This can happen when:
    - The configured deadline passes during a similarity sweep
    - The number of oracle evaluations exceeds max_comparisons

    Callers abandon the in-flight pair and keep results gathered so far.
    """

    def __init__(self, message: str, comparisons: int = 0):
        super().__init__(message)
        self.comparisons = comparisons
