"""
Tests for the disjoint-set forest.
"""

import unittest

from libdupes.dedup.forest import DisjointSetForest


class TestDisjointSetForest(unittest.TestCase):
    def setUp(self):
        self.forest = DisjointSetForest()

    def test_find_registers_singleton(self):
        self.assertEqual(self.forest.find(7), 7)
        self.assertIn(7, self.forest)
        self.assertEqual(self.forest.members_of(7), {7})

    def test_find_is_idempotent(self):
        for a, b in [(1, 2), (3, 4), (2, 4), (5, 6)]:
            self.forest.union(a, b)
        for x in range(1, 7):
            root = self.forest.find(x)
            self.assertEqual(self.forest.find(root), root)

    def test_union_joins_sets(self):
        self.forest.union(1, 2)
        self.assertTrue(self.forest.same_set(1, 2))
        self.assertEqual(self.forest.members_of(1), self.forest.members_of(2))
        self.assertEqual(self.forest.members_of(1), {1, 2})

    def test_transitivity(self):
        self.forest.union("a", "b")
        self.forest.union("b", "c")
        self.assertTrue(self.forest.same_set("a", "c"))
        self.assertEqual(self.forest.members_of("a"), {"a", "b", "c"})

    def test_union_is_commutative(self):
        other = DisjointSetForest()
        pairs = [(1, 2), (3, 1), (4, 5), (5, 3)]
        for a, b in pairs:
            self.forest.union(a, b)
            other.union(b, a)
        self.assertEqual(
            sorted(sorted(g) for g in self.forest.groups()),
            sorted(sorted(g) for g in other.groups()),
        )

    def test_union_same_set_is_noop(self):
        self.assertTrue(self.forest.union(1, 2))
        root = self.forest.find(1)
        self.assertFalse(self.forest.union(2, 1))
        self.assertEqual(self.forest.find(1), root)
        self.assertEqual(len(self.forest), 2)

    def test_union_by_rank_attaches_smaller_tree(self):
        self.forest.union(1, 2)
        self.forest.union(1, 3)
        big_root = self.forest.find(1)
        self.forest.union(4, big_root)
        self.assertEqual(self.forest.find(4), big_root)

    def test_long_chain_has_no_recursion_limit(self):
        n = 50000
        forest = DisjointSetForest()
        # Build a chain by hand, bypassing union by rank
        for i in range(n):
            forest._make_set(i)
        for i in range(1, n):
            forest._parent[i] = i - 1
        self.assertEqual(forest.find(n - 1), 0)
        # Path was compressed
        self.assertEqual(forest._parent[n - 1], 0)

    def test_queries_do_not_register(self):
        self.forest.union(1, 2)
        self.assertEqual(self.forest.members_of(99), set())
        self.assertFalse(self.forest.same_set(1, 99))
        self.assertTrue(self.forest.same_set(99, 99))
        self.assertEqual(self.forest.all_ids(), {1, 2})

    def test_all_ids_and_groups(self):
        self.forest.union(1, 2)
        self.forest.union(3, 4)
        self.forest.union(4, 5)
        self.assertEqual(self.forest.all_ids(), {1, 2, 3, 4, 5})
        self.assertEqual(self.forest.groups(), [{1, 2}, {3, 4, 5}])


if __name__ == "__main__":
    unittest.main()
