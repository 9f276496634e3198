"""
libdupes - duplicate detection for bibliographic libraries.

Items of a library are grouped into duplicate sets by a sequence of
field-specific matching passes merged through a disjoint-set forest.
"""

__version__ = "0.3.0"

from libdupes.core.config import DuplicatesConfig, LibDupesConfig, load_config
from libdupes.core.models import Creator, CreatorMode, DuplicateView, Item
from libdupes.dedup import DisjointSetForest, Duplicates, normalize_string
from libdupes.store import ItemStore, MemoryItemStore, load_items

__all__ = [
    "__version__",
    "Duplicates",
    "DisjointSetForest",
    "normalize_string",
    "DuplicatesConfig",
    "LibDupesConfig",
    "load_config",
    "Item",
    "Creator",
    "CreatorMode",
    "DuplicateView",
    "ItemStore",
    "MemoryItemStore",
    "load_items",
]
