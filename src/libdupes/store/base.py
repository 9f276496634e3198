"""
Base item store module for libdupes.

This module defines the abstract interface through which the detection
engine reads candidate rows from a metadata store and hands back the
computed duplicate id set.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence

from libdupes.core.models import CandidateRow, Collation, Creator, DuplicateView

logger = logging.getLogger(__name__)


class ItemStore(ABC):
    """Abstract base class for metadata stores.

    Every row-producing method must honor the same contract:

    - only items of the requested library take part,
    - soft-deleted items never take part,
    - items without a populated value are omitted (never an error),
    - rows come back sorted ascending by value under the requested collation.

    The store must present one consistent snapshot for the whole
    detection run.

    Example:
        >>> class MyStore(ItemStore):
        ...     def field_rows(self, library_id, fields, item_types=None, pattern=None):
        ...         return sorted(rows_from_db(...), key=lambda r: r.value)
        ...     ...
    """

    @abstractmethod
    def field_rows(
        self,
        library_id: Optional[int],
        fields: Sequence[str],
        item_types: Optional[Sequence[str]] = None,
        pattern: Optional[str] = None,
    ) -> List[CandidateRow]:
        """Get one (item_id, value) row per populated field.

        Args:
            library_id: Library to read from
            fields: Field names to read; an item yields one row per populated field
            item_types: Restrict to these item types (None or empty = all)
            pattern: Regex a value must match (re.search semantics)

        Returns:
            Rows sorted by binary collation on the value
        """
        pass

    @abstractmethod
    def composite_rows(
        self,
        library_id: Optional[int],
        fields: Sequence[str],
        item_types: Optional[Sequence[str]] = None,
        exclude_item_types: Optional[Sequence[str]] = None,
        qualifying_fields: Optional[Sequence[str]] = None,
        delimiter: str = "::",
        collation: Collation = Collation.LOCALE,
    ) -> List[CandidateRow]:
        """Get one row per item whose value concatenates several fields.

        Args:
            library_id: Library to read from
            fields: Field names, in concatenation order
            item_types: Restrict to these item types (None or empty = all)
            exclude_item_types: Skip these item types
            qualifying_fields: Items carrying none of these are omitted
            delimiter: Separator placed between field values
            collation: Ordering rule for the result

        Returns:
            Rows sorted by the requested collation
        """
        pass

    @abstractmethod
    def creator_rows(self, item_id: int, limit: int = 10) -> List[Creator]:
        """Get an item's creators in display order, at most ``limit`` of them."""
        pass

    @abstractmethod
    def create_duplicate_view(
        self, library_id: Optional[int], item_ids: Iterable[int], name: str = "tmpDuplicates"
    ) -> DuplicateView:
        """Materialize the duplicate id set as a temporary view.

        Replaces any previous view with the same name.

        Raises:
            StoreError: If the view cannot be written
        """
        pass

    def close(self) -> None:
        """Release any resources held by the store."""
        logger.debug(f"Closing {self.__class__.__name__}")

    def __enter__(self) -> "ItemStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
