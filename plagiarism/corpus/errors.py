"""Custom exceptions for the corpus store and comparison orchestrator."""

from __future__ import annotations

from ..errors import PlagiarismError


class CorpusError(PlagiarismError):
    """Base exception for corpus-related errors."""

    pass


class LocationLookupError(CorpusError):
    """
    Raised when a matched fragment has no recorded location.

    Every fragment returned by a matcher comes from an indexed TextEntry,
    so this indicates an internal bug:
    - A matcher returned a fragment the entry never contained
    - An entry was built with locations that disagree with its fragments
    """

    def __init__(self, message: str, owner: str, fragment: str):
        super().__init__(message)
        self.owner = owner
        self.fragment = fragment
