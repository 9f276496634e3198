"""
Tests for per-run field caches.
"""

import unittest

from libdupes.core.models import CandidateRow as Row
from libdupes.core.models import Creator, CreatorMode
from libdupes.dedup.caches import CreatorCache, CreatorKey, FieldCache, RunCaches, YearCache


class TestFieldCaches(unittest.TestCase):
    def test_field_cache_conflicts(self):
        cache = FieldCache.from_rows([Row(1, "10.1/a"), Row(2, "10.1/b"), Row(3, "10.1/a")])
        self.assertEqual(len(cache), 3)
        self.assertTrue(cache.conflicts(1, 2))
        self.assertFalse(cache.conflicts(1, 3))
        self.assertFalse(cache.conflicts(1, 99))

    def test_year_parsing(self):
        self.assertEqual(YearCache.parse_year("1869"), 1869)
        self.assertEqual(YearCache.parse_year("2003-05-00 May 2003"), 2003)
        self.assertIsNone(YearCache.parse_year("0000-00-00 n.d."))
        self.assertIsNone(YearCache.parse_year("May 2003"))
        self.assertIsNone(YearCache.parse_year(""))

    def test_year_cache(self):
        years = YearCache.from_rows([Row(1, "1869"), Row(2, "1871-01-01"), Row(3, "0000")])
        self.assertEqual(dict(years), {1: 1869, 2: 1871})
        self.assertTrue(years.too_far_apart(1, 2, 1))
        self.assertFalse(years.too_far_apart(1, 2, 2))
        self.assertFalse(years.too_far_apart(1, 3, 0))

    def test_creator_keys(self):
        person = CreatorKey.from_creator(Creator(last_name="Dostoïevski", first_name="Fiodor"))
        self.assertEqual(person, CreatorKey("dostoievski", "f"))
        single = CreatorKey.from_creator(
            Creator(last_name="UNESCO", first_name="ignored", field_mode=CreatorMode.SINGLE_FIELD)
        )
        self.assertEqual(single, CreatorKey("unesco", None))

    def test_creator_cache_is_lazy(self):
        calls = []

        def fetch(item_id, limit):
            calls.append((item_id, limit))
            return [Creator(last_name="Tolstoy", first_name="Leo")]

        cache = CreatorCache(fetch, limit=5)
        self.assertEqual(len(cache), 0)
        cache.get(1)
        cache.get(1)
        self.assertEqual(calls, [(1, 5)])
        self.assertIn(1, cache)

    def test_identifier_conflict_order(self):
        caches = RunCaches(
            identifiers={
                "doi": FieldCache({1: "10.1/a", 2: "10.1/b"}),
                "isbn": FieldCache({1: "111", 2: "222"}),
            }
        )
        self.assertEqual(caches.identifier_conflict(["doi", "isbn"], 1, 2), "doi")
        self.assertEqual(caches.identifier_conflict(["isbn"], 1, 2), "isbn")
        self.assertIsNone(caches.identifier_conflict(["missing"], 1, 2))


if __name__ == "__main__":
    unittest.main()
