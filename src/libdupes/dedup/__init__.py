"""
Duplicate detection module for libdupes.

This module partitions the items of a library into duplicate sets by
running field-specific matching passes into a disjoint-set forest.

Main classes:
    - Duplicates: Runs detection for one library and answers queries
    - DisjointSetForest: Union-find over item ids
    - MatchingPass: Base class of the ISBN, DOI, legal and title passes

Example:
    >>> from libdupes.dedup import Duplicates
    >>> from libdupes.store import MemoryItemStore
    >>>
    >>> duplicates = Duplicates(MemoryItemStore(items), library_id=None)
    >>> duplicates.all_duplicate_ids()
    {1, 2, 7}
"""

from libdupes.dedup.duplicates import DetectionRun, Duplicates
from libdupes.dedup.forest import DisjointSetForest
from libdupes.dedup.normalize import normalize_string
from libdupes.dedup.passes import (
    CompositeFieldPass,
    ExactFieldPass,
    MatchingPass,
    MatchResult,
    TitleCreatorComparator,
    TitleCreatorPass,
    build_passes,
    scan_pass,
)

__all__ = [
    "Duplicates",
    "DetectionRun",
    "DisjointSetForest",
    "normalize_string",
    "MatchResult",
    "MatchingPass",
    "ExactFieldPass",
    "CompositeFieldPass",
    "TitleCreatorPass",
    "TitleCreatorComparator",
    "build_passes",
    "scan_pass",
]
