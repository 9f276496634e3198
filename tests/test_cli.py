"""
Tests for the libdupes command line interface.
"""

import json
import logging
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

from libdupes.cli import cli

ITEMS = [
    {"item_id": 1, "item_type": "book", "fields": {"title": "War and Peace", "ISBN": "9780199232765"}},
    {"item_id": 2, "item_type": "book", "fields": {"title": "War and Peace!", "ISBN": "9780199232765"}},
    {"item_id": 3, "fields": {"title": "Anna Karenina", "date": "1877"},
     "creators": [{"last_name": "Tolstoy", "first_name": "Leo"}]},
    {"item_id": 4, "fields": {"title": "Anna Karenina.", "date": "1877"},
     "creators": [{"last_name": "Tolstoy", "first_name": "L"}]},
    {"item_id": 5, "fields": {"title": "Fathers and Sons"}},
]


class TestFindCommand(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.items_path = self.dir / "library.jsonl"
        self.items_path.write_text(
            "\n".join(json.dumps(record) for record in ITEMS) + "\n", encoding="utf-8"
        )

    def tearDown(self):
        logging.getLogger().handlers.clear()
        self.tmp.cleanup()

    def invoke(self, *args):
        return self.runner.invoke(cli, list(args))

    def test_json_output(self):
        result = self.invoke("find", str(self.items_path), "--format", "json")
        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(result.stdout)
        self.assertIsNone(data["library_id"])
        self.assertEqual(data["duplicate_sets"], [[1, 2], [3, 4]])
        self.assertEqual(data["statistics"]["duplicate_items"], 4)
        self.assertEqual(data["statistics"]["merges_by_pass"]["isbn"], 1)

    def test_single_item(self):
        result = self.invoke("find", str(self.items_path), "--item", "4", "--format", "json")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(json.loads(result.stdout)["duplicate_sets"], [[3, 4]])

        result = self.invoke("find", str(self.items_path), "--item", "5", "--format", "json")
        self.assertEqual(json.loads(result.stdout)["duplicate_sets"], [])

    def test_table_output(self):
        result = self.invoke("find", str(self.items_path))
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Anna Karenina", result.output)
        self.assertIn("Matches by pass", result.output)

    def test_output_file(self):
        output = self.dir / "out" / "sets.json"
        result = self.invoke("-q", "find", str(self.items_path), "--output", str(output))
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "")
        self.assertEqual(json.loads(output.read_text(encoding="utf-8"))["duplicate_sets"],
                         [[1, 2], [3, 4]])

    def test_config_disables_pass(self):
        config_path = self.dir / "libdupes.yml"
        config_path.write_text("duplicates:\n  isbn:\n    field: ISBN\n    enabled: false\n",
                               encoding="utf-8")
        result = self.invoke(
            "--config", str(config_path), "find", str(self.items_path), "--format", "json"
        )
        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(result.stdout)
        self.assertNotIn("isbn", data["statistics"]["merges_by_pass"])
        # The title pass still pairs the two books
        self.assertEqual(data["duplicate_sets"], [[1, 2], [3, 4]])

    def test_invalid_item_file(self):
        bad = self.dir / "bad.jsonl"
        bad.write_text('{"fields": {}}\n', encoding="utf-8")
        result = self.invoke("find", str(bad))
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("Invalid item", result.output)

    def test_invalid_config(self):
        config_path = self.dir / "libdupes.yml"
        config_path.write_text("duplicates:\n  title:\n    max_year_gap: -3\n", encoding="utf-8")
        result = self.invoke("--config", str(config_path), "find", str(self.items_path))
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("Invalid configuration", result.output)

    def test_version(self):
        result = self.invoke("--version")
        self.assertEqual(result.exit_code, 0)
        self.assertIn("libdupes", result.output)


if __name__ == "__main__":
    unittest.main()
