"""
Fragment indexing for plagiarism detection.

This module provides:
- Word n-gram indexing with location tracking
- The immutable per-owner TextEntry record

Usage:
    from plagiarism.fragments import build_text_entry

    entry = build_text_entry("alice", ["a", "b", "a", "b"], n=2)
    entry.fragments            # frozenset({"a b", "b a"})
    entry.locations["a b"]     # (FragmentLocation(0, 2), FragmentLocation(2, 4))
"""

from .indexer import build_text_entry, index_fragments
from .models import FragmentLocation, OwnerID, TextEntry

__all__ = [
    # Indexing (main entry points)
    "build_text_entry",
    "index_fragments",
    # Models
    "FragmentLocation",
    "OwnerID",
    "TextEntry",
]
