"""
Disjoint-set forest (union-find) over hashable identifiers.

Bookkeeping lives in side tables keyed by identifier, so the forest
never touches caller-owned record objects. Only identifiers passed to
``find`` or ``union`` are registered; pure queries (``same_set``,
``members_of``) never register anything.
"""

from collections import defaultdict
from typing import Dict, Generic, Hashable, List, Set, TypeVar

T = TypeVar("T", bound=Hashable)


class DisjointSetForest(Generic[T]):
    """Disjoint Set Union with Path Compression and Union by Rank."""

    def __init__(self) -> None:
        self._parent: Dict[T, T] = {}
        self._rank: Dict[T, int] = {}

    def __len__(self) -> int:
        return len(self._parent)

    def __contains__(self, x: object) -> bool:
        return x in self._parent

    def _make_set(self, x: T) -> None:
        self._parent[x] = x
        self._rank[x] = 0

    def find(self, x: T) -> T:
        """Return the representative of x's set, registering x if unseen."""
        if x not in self._parent:
            self._make_set(x)
            return x

        root = x
        path: List[T] = []
        while self._parent[root] != root:
            path.append(root)
            root = self._parent[root]

        for node in path:
            self._parent[node] = root
        return root

    def union(self, x: T, y: T) -> bool:
        """Merge the sets containing x and y.

        Returns False when they already shared a set.
        """
        x_root = self.find(x)
        y_root = self.find(y)

        if x_root == y_root:
            return False

        if self._rank[x_root] < self._rank[y_root]:
            self._parent[x_root] = y_root
        elif self._rank[x_root] > self._rank[y_root]:
            self._parent[y_root] = x_root
        else:
            self._parent[y_root] = x_root
            self._rank[x_root] += 1
        return True

    def same_set(self, x: T, y: T) -> bool:
        """Whether x and y share a set; unregistered ids are singletons."""
        if x not in self._parent or y not in self._parent:
            return x == y
        return self.find(x) == self.find(y)

    def all_ids(self) -> Set[T]:
        """Every registered identifier, regardless of grouping."""
        return set(self._parent)

    def members_of(self, x: T) -> Set[T]:
        """All registered identifiers in x's set (empty if x is unregistered)."""
        if x not in self._parent:
            return set()
        x_root = self.find(x)
        return {obj for obj in self._parent if self.find(obj) == x_root}

    def groups(self) -> List[Set[T]]:
        """Every set in the forest, in registration order of its first member."""
        by_root: Dict[T, Set[T]] = defaultdict(set)
        for obj in list(self._parent):
            by_root[self.find(obj)].add(obj)
        return list(by_root.values())
