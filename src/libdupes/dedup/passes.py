"""
Matching passes for duplicate detection.

Every pass reads one sorted row sequence from the item store, scans it
once comparing each row with the rows that follow it, and merges
matching items in the run's disjoint-set forest.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Sequence

from libdupes.core.config import (
    CompositePassConfig,
    DuplicatesConfig,
    ExactPassConfig,
    TitlePassConfig,
)
from libdupes.core.models import CandidateRow, Collation
from libdupes.dedup.caches import CreatorCache, FieldCache, RunCaches, YearCache
from libdupes.dedup.forest import DisjointSetForest
from libdupes.dedup.normalize import normalize_string

if TYPE_CHECKING:
    from libdupes.dedup.duplicates import DetectionRun

logger = logging.getLogger(__name__)


class MatchResult(Enum):
    """Outcome of comparing two candidate rows."""

    MATCH = "match"
    # Not a match, but a later row may still match
    NO_MATCH_CONTINUE = "continue"
    # Not a match, and sort order rules out every later row
    NO_MATCH_STOP = "stop"


Comparator = Callable[[CandidateRow, CandidateRow], MatchResult]


def scan_pass(
    rows: Sequence[CandidateRow],
    forest: DisjointSetForest[int],
    compare: Optional[Comparator] = None,
    reprocess: bool = False,
) -> int:
    """Scan sorted rows once and merge matching items.

    Args:
        rows: Rows sorted ascending by comparison value
        forest: Forest receiving the merges
        compare: Row comparator; without one, raw values must be equal
        reprocess: Compare every row with every following row instead of
            skipping ahead past the last match. Needed whenever the match
            decision has more than one dimension (title + creators), since
            rows sharing a title may match a later row but not the next one.

    Returns:
        Number of unions that joined two different sets
    """
    merges = 0
    i = 0
    n = len(rows)

    while i < n:
        last_match: Optional[int] = None
        j = i + 1
        while j < n:
            if compare is not None:
                result = compare(rows[i], rows[j])
                if result is MatchResult.NO_MATCH_STOP:
                    break
                if result is MatchResult.NO_MATCH_CONTINUE:
                    j += 1
                    continue
            elif not rows[i].value or rows[i].value != rows[j].value:
                break

            if forest.union(rows[i].item_id, rows[j].item_id):
                merges += 1
            last_match = j
            j += 1

        if not reprocess and last_match is not None:
            i = last_match
        i += 1

    return merges


class TitleCreatorComparator:
    """Title + secondary-evidence comparator.

    Checks run in a fixed order, each failure ending the scan for the
    current row: comparable normalized titles, equal normalized titles,
    no conflicting strong identifier, years at most ``max_year_gap``
    apart. The creator check then decides between a match and moving on.
    """

    def __init__(self, caches: RunCaches, config: TitlePassConfig):
        if caches.creators is None:
            raise ValueError("TitleCreatorComparator needs a creator cache")
        self.caches = caches
        self.config = config
        self._normalized: Dict[int, str] = {}

    def _normalize(self, row: CandidateRow) -> str:
        value = self._normalized.get(row.item_id)
        if value is None:
            value = self._normalized[row.item_id] = normalize_string(row.value)
        return value

    def __call__(self, a: CandidateRow, b: CandidateRow) -> MatchResult:
        a_title = self._normalize(a)
        b_title = self._normalize(b)

        # A title stripped down to nothing cannot be compared
        if not a_title or not b_title:
            return MatchResult.NO_MATCH_STOP

        if a_title != b_title:
            return MatchResult.NO_MATCH_STOP

        if self.caches.identifier_conflict(self.config.veto_identifiers, a.item_id, b.item_id):
            return MatchResult.NO_MATCH_STOP

        if self.caches.years.too_far_apart(a.item_id, b.item_id, self.config.max_year_gap):
            return MatchResult.NO_MATCH_STOP

        return self.compare_creators(a.item_id, b.item_id)

    def compare_creators(self, a_id: int, b_id: int) -> MatchResult:
        """At least one creator must match on last name + first initial."""
        a_creators = self.caches.creators.get(a_id)
        b_creators = self.caches.creators.get(b_id)

        if not a_creators and not b_creators:
            return MatchResult.MATCH

        if not a_creators or not b_creators:
            return MatchResult.NO_MATCH_CONTINUE

        for a_creator in a_creators:
            for b_creator in b_creators:
                if a_creator.matches(b_creator):
                    return MatchResult.MATCH

        return MatchResult.NO_MATCH_CONTINUE


class MatchingPass(ABC):
    """Base class for matching passes.

    Attributes:
        name: Pass name, used for logging, statistics and cache keys
        reprocess: Whether scan_pass re-scans every row
    """

    reprocess = False

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def fetch_rows(self, run: "DetectionRun") -> List[CandidateRow]:
        """Get this pass's sorted candidate rows from the run's store."""
        pass

    def comparator(self, run: "DetectionRun") -> Optional[Comparator]:
        """Row comparator, or None for exact value matching."""
        return None

    def run(self, run: "DetectionRun") -> int:
        """Fetch rows, scan them and return the number of merges."""
        rows = self.fetch_rows(run)
        if not rows:
            logger.debug(f"Pass {self.name!r}: no candidate rows")
            return 0

        merges = scan_pass(rows, run.forest, self.comparator(run), self.reprocess)
        logger.debug(f"Pass {self.name!r}: {len(rows)} rows, {merges} merges")
        return merges

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


class ExactFieldPass(MatchingPass):
    """Exact matching on one field, optionally restricted by item type or pattern.

    The rows also seed an identifier cache under the pass name, used by
    the title pass to veto conflicting identifiers.
    """

    def __init__(self, name: str, config: ExactPassConfig):
        super().__init__(name)
        self.config = config

    def fetch_rows(self, run: "DetectionRun") -> List[CandidateRow]:
        rows = run.store.field_rows(
            run.library_id,
            [self.config.field],
            item_types=self.config.item_types or None,
            pattern=self.config.pattern,
        )
        run.caches.identifiers[self.name] = FieldCache.from_rows(rows)
        return rows


class CompositeFieldPass(MatchingPass):
    """Exact matching on several sub-fields joined into one value."""

    def __init__(self, name: str, config: CompositePassConfig):
        super().__init__(name)
        self.config = config

    def fetch_rows(self, run: "DetectionRun") -> List[CandidateRow]:
        return run.store.composite_rows(
            run.library_id,
            self.config.fields,
            item_types=self.config.item_types or None,
            delimiter=self.config.delimiter,
            collation=Collation.LOCALE,
        )


class TitleCreatorPass(MatchingPass):
    """Normalized title match backed by identifier, year and creator evidence."""

    reprocess = True

    def __init__(self, name: str, config: TitlePassConfig):
        super().__init__(name)
        self.config = config

    def fetch_rows(self, run: "DetectionRun") -> List[CandidateRow]:
        date_rows = run.store.field_rows(run.library_id, self.config.date_fields)
        run.caches.years = YearCache.from_rows(date_rows)
        run.caches.creators = CreatorCache(run.store.creator_rows, self.config.creator_limit)

        return run.store.composite_rows(
            run.library_id,
            self.config.qualifying_fields + self.config.extra_fields,
            exclude_item_types=self.config.exclude_item_types or None,
            qualifying_fields=self.config.qualifying_fields,
            delimiter=self.config.delimiter,
            collation=Collation.LOCALE,
        )

    def comparator(self, run: "DetectionRun") -> Comparator:
        return TitleCreatorComparator(run.caches, self.config)


def build_passes(config: DuplicatesConfig) -> List[MatchingPass]:
    """Build the enabled passes in run order: ISBN, DOI, legal, title."""
    passes: List[MatchingPass] = []
    if config.isbn.enabled:
        passes.append(ExactFieldPass("isbn", config.isbn))
    if config.doi.enabled:
        passes.append(ExactFieldPass("doi", config.doi))
    if config.legal.enabled:
        passes.append(CompositeFieldPass("legal", config.legal))
    if config.title.enabled:
        passes.append(TitleCreatorPass("title", config.title))
    return passes
