"""
Duplicate detection runs for libdupes.

This module provides the Duplicates class, which runs every matching
pass over one library and answers duplicate-set queries from the
resulting disjoint-set forest.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set

from libdupes.core.config import DuplicatesConfig
from libdupes.core.models import DetectionStats, DuplicateView
from libdupes.dedup.caches import RunCaches
from libdupes.dedup.forest import DisjointSetForest
from libdupes.dedup.passes import MatchingPass, build_passes
from libdupes.store.base import ItemStore
from libdupes.utils.exceptions import DetectionCancelledError, DuplicateViewError
from libdupes.utils.logging import PerformanceLogger

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int], None]


@dataclass
class DetectionRun:
    """State owned by one detection run: the forest and the field caches."""

    store: ItemStore
    library_id: Optional[int]
    forest: DisjointSetForest[int] = field(default_factory=DisjointSetForest)
    caches: RunCaches = field(default_factory=RunCaches)
    merges_by_pass: Dict[str, int] = field(default_factory=dict)


class Duplicates:
    """Duplicate detection for one library.

    Every call to find_duplicates() starts from an empty forest and empty
    caches, so repeated runs over unchanged data give the same partition.
    Query methods run detection on first use.

    Example:
        >>> duplicates = Duplicates(MemoryItemStore(items), library_id=None)
        >>> duplicates.duplicates_of(42)
        {42, 57}
    """

    name = "Duplicate Items"

    def __init__(
        self,
        store: ItemStore,
        library_id: Optional[int],
        config: Optional[DuplicatesConfig] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_check: Optional[Callable[[], bool]] = None,
    ):
        """Initialize a detector.

        Args:
            store: Metadata store supplying candidate rows
            library_id: Library to scan (None is the user's own library)
            config: Pass configuration (defaults to DuplicatesConfig())
            progress_callback: Optional callable(message, percentage)
            cancel_check: Optional callable polled before every pass; a
                true result aborts the run with DetectionCancelledError
        """
        self.store = store
        self._library_id = library_id
        self.config = config or DuplicatesConfig()
        self.progress_callback = progress_callback
        self.cancel_check = cancel_check
        self._run: Optional[DetectionRun] = None
        self._stats: Optional[DetectionStats] = None

    @property
    def library_id(self) -> Optional[int]:
        return self._library_id

    def _progress(self, message: str, percent: int) -> None:
        if self.progress_callback:
            self.progress_callback(message, percent)

    def find_duplicates(self) -> DisjointSetForest[int]:
        """Run every enabled pass from scratch.

        Returns:
            The forest partitioning every item that matched another item

        Raises:
            DetectionCancelledError: If the cancel check fired between passes
        """
        passes: List[MatchingPass] = build_passes(self.config)
        run = DetectionRun(self.store, self._library_id)

        with PerformanceLogger("Found duplicates", logger) as perf:
            for index, matching_pass in enumerate(passes):
                if self.cancel_check and self.cancel_check():
                    raise DetectionCancelledError(
                        next_pass=matching_pass.name, library_id=self._library_id
                    )
                self._progress(
                    f"Matching {matching_pass.name}...", int(100 * index / max(len(passes), 1))
                )
                run.merges_by_pass[matching_pass.name] = matching_pass.run(run)

        self._progress("Duplicate detection complete", 100)

        self._run = run
        self._stats = self._build_statistics(run, perf.elapsed_ms or 0.0)
        return run.forest

    @property
    def forest(self) -> DisjointSetForest[int]:
        """Forest of the latest run, running detection if needed."""
        if self._run is None:
            self.find_duplicates()
        return self._run.forest

    def all_duplicate_ids(self) -> Set[int]:
        """Every item that matched at least one other item."""
        return self.forest.all_ids()

    def duplicates_of(self, item_id: int) -> Set[int]:
        """Every item in item_id's duplicate set, item_id included.

        An item without duplicates is its own one-member set; querying it
        does not register it in the forest.
        """
        return self.forest.members_of(item_id) or {item_id}

    def duplicate_sets(self) -> List[List[int]]:
        """Every duplicate set as a sorted list, ordered by smallest member."""
        groups = [sorted(group) for group in self.forest.groups() if len(group) > 1]
        return sorted(groups)

    def duplicate_view(self) -> DuplicateView:
        """Materialize the duplicate id set in the store.

        Raises:
            DuplicateViewError: If the store could not write the view; the
                computed duplicate sets remain available
        """
        ids = sorted(self.all_duplicate_ids())
        try:
            view = self.store.create_duplicate_view(
                self._library_id, ids, name=self.config.view_name
            )
        except Exception as e:
            logger.error(f"Could not create duplicate view for library {self._library_id}: {e}")
            raise DuplicateViewError(
                library_id=self._library_id, cause=e, view=self.config.view_name, items=len(ids)
            ) from e

        logger.info(f"Created duplicate view {view.name!r} with {view.size} items")
        return view

    def _build_statistics(self, run: DetectionRun, duration_ms: float) -> DetectionStats:
        groups = [group for group in run.forest.groups() if len(group) > 1]
        return DetectionStats(
            library_id=self._library_id,
            duplicate_items=len(run.forest),
            duplicate_sets=len(groups),
            largest_set=max((len(g) for g in groups), default=0),
            merges_by_pass=dict(run.merges_by_pass),
            duration_ms=duration_ms,
        )

    def get_statistics(self) -> DetectionStats:
        """Statistics of the latest run, running detection if needed.

        Example:
            >>> stats = duplicates.get_statistics()
            >>> print(f"{stats.duplicate_sets} sets, {stats.duplicate_items} items")
        """
        if self._stats is None:
            self.find_duplicates()
        return self._stats
