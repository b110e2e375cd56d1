"""Custom exceptions for the command-line checker."""

from ..errors import PlagiarismError


class CheckerError(PlagiarismError):
    """Base exception for checker errors."""

    pass


class CorpusDirectoryError(CheckerError):
    """
    Raised when a corpus directory cannot be loaded.

    This can happen when:
    - The directory does not exist or is not a directory
    - A text file cannot be read
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
