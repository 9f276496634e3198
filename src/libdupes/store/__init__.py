"""
Item stores for libdupes.

Stores supply sorted candidate rows to the detection engine and
materialize its results.
"""

from libdupes.store.base import ItemStore
from libdupes.store.memory import MemoryItemStore, load_items, locale_sort_key

__all__ = [
    "ItemStore",
    "MemoryItemStore",
    "load_items",
    "locale_sort_key",
]
