"""
Per-run field caches.

Caches are built from one pass's rows (or fetched lazily) and live only
as long as the detection run that owns them.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, NamedTuple, Optional

from libdupes.core.models import CandidateRow, Creator, CreatorMode
from libdupes.dedup.normalize import first_initial, normalize_string


class FieldCache(Mapping[int, str]):
    """Read-only item id -> field value mapping."""

    def __init__(self, values: Optional[Dict[int, str]] = None):
        self._values: Dict[int, str] = dict(values or {})

    @classmethod
    def from_rows(cls, rows: Iterable[CandidateRow]) -> "FieldCache":
        """Build a cache from candidate rows; later rows win for repeated ids."""
        return cls({row.item_id: row.value for row in rows})

    def __getitem__(self, item_id: int) -> str:
        return self._values[item_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def conflicts(self, a: int, b: int) -> bool:
        """True when both items carry a value and the values differ."""
        if a not in self._values or b not in self._values:
            return False
        return self._values[a] != self._values[b]


class YearCache(Mapping[int, int]):
    """Read-only item id -> publication year mapping.

    Built from raw date values; only the first four characters are used,
    and unknown ('0000') or non-numeric years are skipped.
    """

    def __init__(self, years: Optional[Dict[int, int]] = None):
        self._years: Dict[int, int] = dict(years or {})

    @staticmethod
    def parse_year(value: Optional[str]) -> Optional[int]:
        if not value:
            return None
        prefix = value.strip()[:4]
        if len(prefix) != 4 or not prefix.isdigit() or prefix == "0000":
            return None
        return int(prefix)

    @classmethod
    def from_rows(cls, rows: Iterable[CandidateRow]) -> "YearCache":
        years = {}
        for row in rows:
            year = cls.parse_year(row.value)
            if year is not None:
                years[row.item_id] = year
        return cls(years)

    def __getitem__(self, item_id: int) -> int:
        return self._years[item_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._years)

    def __len__(self) -> int:
        return len(self._years)

    def too_far_apart(self, a: int, b: int, max_gap: int) -> bool:
        """True when both items have a year and they differ by more than max_gap."""
        if a not in self._years or b not in self._years:
            return False
        return abs(self._years[a] - self._years[b]) > max_gap


class CreatorKey(NamedTuple):
    """Comparable form of a creator: normalized last name + initial.

    ``initial`` is None for single-field names, which have no first name
    to take an initial from.
    """

    last_name: str
    initial: Optional[str]

    @classmethod
    def from_creator(cls, creator: Creator) -> "CreatorKey":
        last_name = normalize_string(creator.last_name)
        if creator.field_mode == CreatorMode.SINGLE_FIELD:
            return cls(last_name, None)
        return cls(last_name, first_initial(creator.first_name))

    def matches(self, other: "CreatorKey") -> bool:
        if not self.last_name:
            return False
        return self.last_name == other.last_name and self.initial == other.initial


class CreatorCache:
    """Lazily fetched, memoized creator keys per item."""

    def __init__(self, fetch: Callable[[int, int], List[Creator]], limit: int = 10):
        """
        Args:
            fetch: Called as fetch(item_id, limit) for items not cached yet
            limit: Maximum number of creators considered per item
        """
        self._fetch = fetch
        self._limit = limit
        self._keys: Dict[int, List[CreatorKey]] = {}

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def get(self, item_id: int) -> List[CreatorKey]:
        if item_id not in self._keys:
            creators = self._fetch(item_id, self._limit) or []
            self._keys[item_id] = [CreatorKey.from_creator(c) for c in creators[: self._limit]]
        return self._keys[item_id]


@dataclass
class RunCaches:
    """Every cache owned by one detection run."""

    identifiers: Dict[str, FieldCache] = field(default_factory=dict)
    years: YearCache = field(default_factory=YearCache)
    creators: Optional[CreatorCache] = None

    def identifier_conflict(self, names: Iterable[str], a: int, b: int) -> Optional[str]:
        """Name of the first identifier cache whose values for a and b conflict."""
        for name in names:
            cache = self.identifiers.get(name)
            if cache is not None and cache.conflicts(a, b):
                return name
        return None
