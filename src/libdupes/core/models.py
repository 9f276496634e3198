"""Core data models for libdupes."""

from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Dict, List, NamedTuple, Optional

from pydantic import BaseModel, Field, field_validator


class CreatorMode(IntEnum):
    """How a creator name is stored.

    Structured personal names carry separate last and first names;
    single-field names (institutions, mononyms) only carry a last name.
    """

    TWO_FIELD = 0
    SINGLE_FIELD = 1


class Collation(str, Enum):
    """Ordering rule used to sort candidate rows."""

    BINARY = "binary"
    LOCALE = "locale"


class Creator(BaseModel):
    """Contributor of an item.

    Attributes:
        last_name: Last name, or the full name for single-field creators
        first_name: First/given name(s); empty for single-field creators
        field_mode: Whether the name is structured or single-field
    """

    last_name: str = ""
    first_name: str = ""
    field_mode: CreatorMode = CreatorMode.TWO_FIELD

    @field_validator("last_name", "first_name", mode="before")
    @classmethod
    def none_to_empty(cls, v: Optional[str]) -> str:
        """Treat a missing name part as an empty string."""
        return "" if v is None else v


class Item(BaseModel):
    """A bibliographic record in a library.

    The duplicate detection core never owns items; stores build
    candidate rows from them.

    Attributes:
        item_id: Unique integer key of the item
        library_id: Owning library (None is the user's own library)
        item_type: Item type name (e.g., 'book', 'journalArticle', 'case')
        fields: Field name -> value mapping
        creators: Ordered list of contributors
        deleted: Soft-delete flag; deleted items never take part in detection
    """

    item_id: int
    library_id: Optional[int] = None
    item_type: str = "journalArticle"
    fields: Dict[str, str] = Field(default_factory=dict)
    creators: List[Creator] = Field(default_factory=list)
    deleted: bool = False

    @field_validator("fields", mode="before")
    @classmethod
    def stringify_values(cls, v: Optional[Dict]) -> Dict[str, str]:
        """Coerce field values to strings, dropping missing ones."""
        if not v:
            return {}
        return {str(k): str(val) for k, val in v.items() if val is not None}

    def get_field(self, name: str) -> Optional[str]:
        """Get a populated field value, or None if empty or missing."""
        value = self.fields.get(name)
        return value if value else None


class CandidateRow(NamedTuple):
    """One (item, comparison value) row of a matching pass."""

    item_id: int
    value: str


class DuplicateView(BaseModel):
    """Materialized duplicate id set, scoped to one library.

    Attributes:
        name: Name of the temporary view in the store
        library_id: Library the view belongs to
        item_ids: Sorted ids of every item with at least one duplicate
        created_at: When the view was materialized
    """

    name: str
    library_id: Optional[int] = None
    item_ids: List[int] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def __contains__(self, item_id: object) -> bool:
        return item_id in self.item_ids

    @property
    def size(self) -> int:
        """Number of items in the view."""
        return len(self.item_ids)


class DetectionStats(BaseModel):
    """Summary of one duplicate detection run.

    Attributes:
        library_id: Library that was scanned
        duplicate_items: Items that matched at least one other item
        duplicate_sets: Number of equivalence classes with more than one item
        largest_set: Size of the largest duplicate set
        merges_by_pass: Unions that joined two different sets, per pass
        duration_ms: Wall-clock duration of the run
    """

    library_id: Optional[int] = None
    duplicate_items: int = 0
    duplicate_sets: int = 0
    largest_set: int = 0
    merges_by_pass: Dict[str, int] = Field(default_factory=dict)
    duration_ms: float = 0.0
