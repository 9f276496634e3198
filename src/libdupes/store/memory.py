"""
In-memory item store.

Reference implementation of ItemStore over a list of Item objects, plus
loaders for item files (JSONL, JSON, YAML).
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import yaml
from pydantic import ValidationError as PydanticValidationError

from libdupes.core.models import CandidateRow, Collation, Creator, DuplicateView, Item
from libdupes.dedup.normalize import remove_diacritics
from libdupes.store.base import ItemStore
from libdupes.utils.exceptions import StoreError, ValidationError

logger = logging.getLogger(__name__)


def locale_sort_key(value: str) -> Tuple[str, str]:
    """Primary-strength collation key: accents and case ignored, raw value breaks ties."""
    return (remove_diacritics(value).casefold(), value)


class MemoryItemStore(ItemStore):
    """ItemStore backed by a list of items held in memory.

    Attributes:
        items: Items keyed by item id
        views: Materialized duplicate views keyed by (library_id, name)

    Example:
        >>> store = MemoryItemStore(load_items(Path("library.jsonl")))
        >>> rows = store.field_rows(None, ["DOI"], pattern=r"^10\\.")
    """

    def __init__(
        self,
        items: Iterable[Item] = (),
        locale_key: Callable[[str], Any] = locale_sort_key,
    ):
        """Initialize the store.

        Args:
            items: Items to serve
            locale_key: Sort key implementing the locale collation

        Raises:
            ValidationError: If two items share an id
        """
        self.items: Dict[int, Item] = {}
        self.locale_key = locale_key
        self.views: Dict[Tuple[Optional[int], str], DuplicateView] = {}

        for item in items:
            self.add(item)

        logger.debug(f"Initialized MemoryItemStore with {len(self.items)} items")

    def add(self, item: Item) -> None:
        """Add an item to the store."""
        if item.item_id in self.items:
            raise ValidationError("Duplicate item id", field="item_id", item_id=item.item_id)
        self.items[item.item_id] = item

    def _live_items(
        self,
        library_id: Optional[int],
        item_types: Optional[Sequence[str]] = None,
        exclude_item_types: Optional[Sequence[str]] = None,
    ) -> Iterable[Item]:
        for item in self.items.values():
            if item.deleted or item.library_id != library_id:
                continue
            if item_types and item.item_type not in item_types:
                continue
            if exclude_item_types and item.item_type in exclude_item_types:
                continue
            yield item

    def _sort(self, rows: List[CandidateRow], collation: Collation) -> List[CandidateRow]:
        if collation == Collation.LOCALE:
            return sorted(rows, key=lambda row: (self.locale_key(row.value), row.item_id))
        return sorted(rows, key=lambda row: (row.value, row.item_id))

    def field_rows(
        self,
        library_id: Optional[int],
        fields: Sequence[str],
        item_types: Optional[Sequence[str]] = None,
        pattern: Optional[str] = None,
    ) -> List[CandidateRow]:
        regex = re.compile(pattern) if pattern else None
        rows = []
        for item in self._live_items(library_id, item_types):
            for name in fields:
                value = item.get_field(name)
                if value is None:
                    continue
                if regex is not None and not regex.search(value):
                    continue
                rows.append(CandidateRow(item.item_id, value))
        return self._sort(rows, Collation.BINARY)

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
        rows = []
        for item in self._live_items(library_id, item_types, exclude_item_types):
            if qualifying_fields and not any(item.get_field(f) for f in qualifying_fields):
                continue
            values = [item.get_field(name) for name in fields]
            present = [v for v in values if v is not None]
            if not present:
                continue
            rows.append(CandidateRow(item.item_id, delimiter.join(present)))
        return self._sort(rows, collation)

    def creator_rows(self, item_id: int, limit: int = 10) -> List[Creator]:
        item = self.items.get(item_id)
        if item is None:
            return []
        return list(item.creators[:limit])

    def create_duplicate_view(
        self, library_id: Optional[int], item_ids: Iterable[int], name: str = "tmpDuplicates"
    ) -> DuplicateView:
        ids = sorted(set(item_ids))
        for item_id in ids:
            item = self.items.get(item_id)
            if item is None or item.library_id != library_id:
                raise StoreError(
                    "create_duplicate_view",
                    "Item does not belong to library",
                    item_id=item_id,
                    library_id=library_id,
                )

        view = DuplicateView(name=name, library_id=library_id, item_ids=ids)
        self.views[(library_id, name)] = view
        logger.debug(f"Stored view {name!r} with {len(ids)} items for library {library_id}")
        return view

    def close(self) -> None:
        self.views.clear()
        super().close()


def load_items(path: Path) -> List[Item]:
    """Load items from a JSONL, JSON or YAML file.

    JSON and YAML files hold either a list of items or a mapping with an
    ``items`` list.

    Args:
        path: Path to the item file

    Returns:
        Validated items, in file order

    Raises:
        ValidationError: If the file cannot be parsed or an item is invalid
    """
    path = Path(path)
    if not path.exists():
        raise ValidationError("Item file not found", path=str(path))

    suffix = path.suffix.lower()
    records: List[Tuple[int, Any]] = []

    try:
        with open(path, "r", encoding="utf-8") as f:
            if suffix == ".jsonl":
                for line_no, line in enumerate(f, 1):
                    if line.strip():
                        records.append((line_no, json.loads(line)))
            elif suffix in (".json", ".yml", ".yaml"):
                data = json.load(f) if suffix == ".json" else yaml.safe_load(f)
                if isinstance(data, dict):
                    data = data.get("items", [])
                if not isinstance(data, list):
                    raise ValidationError("Expected a list of items", path=str(path))
                records = list(enumerate(data, 1))
            else:
                raise ValidationError("Unsupported item file format", path=str(path))
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValidationError(f"Could not parse item file: {e}", path=str(path)) from e

    items = []
    for position, record in records:
        try:
            items.append(Item.model_validate(record))
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid item: {e.errors()[0]['msg']}", path=str(path), position=position
            ) from e

    logger.info(f"Loaded {len(items)} items from {path}")
    return items
