"""Base exceptions shared across the plagiarism package."""


class PlagiarismError(Exception):
    """Base exception for all plagiarism detection errors."""

    pass


class ConfigurationError(PlagiarismError, ValueError):
    """
    Raised when corpus or checker configuration is invalid.

    This can happen when:
    - Fragment length n is less than 1
    - Metric cutoff is negative, or above 100 for a ratio metric
    - Metric name is not recognized
    """

    pass
