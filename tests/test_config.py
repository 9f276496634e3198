"""
Tests for configuration loading and validation.
"""

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from libdupes.core.config import (
    DuplicatesConfig,
    LibDupesConfig,
    LogLevel,
    load_config,
    load_config_from_dict,
    merge_configs,
    save_config,
)
from libdupes.utils.exceptions import ConfigurationError


class TestDefaults(unittest.TestCase):
    def test_pass_defaults(self):
        config = DuplicatesConfig()
        self.assertEqual(config.isbn.field, "ISBN")
        self.assertEqual(config.isbn.item_types, ["book"])
        self.assertEqual(config.doi.pattern, r"^10\.")
        self.assertEqual(len(config.legal.fields), 12)
        self.assertEqual(config.legal.item_types, ["bill", "case", "statute"])
        self.assertEqual(config.title.max_year_gap, 1)
        self.assertEqual(config.title.creator_limit, 10)
        self.assertEqual(config.title.veto_identifiers, ["doi", "isbn"])
        self.assertEqual(config.view_name, "tmpDuplicates")

    def test_top_level_defaults(self):
        config = LibDupesConfig()
        self.assertIsNone(config.library_id)
        self.assertEqual(config.logging.level, LogLevel.WARNING)
        self.assertIsNone(config.logging.file)


class TestLoadConfig(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_load_yaml(self):
        path = self.dir / "libdupes.yml"
        path.write_text(
            "library_id: 4\n"
            "duplicates:\n"
            "  title:\n"
            "    max_year_gap: 2\n"
            "logging:\n"
            "  level: debug\n",
            encoding="utf-8",
        )
        config = load_config(path)
        self.assertEqual(config.library_id, 4)
        self.assertEqual(config.duplicates.title.max_year_gap, 2)
        self.assertEqual(config.duplicates.title.creator_limit, 10)
        self.assertEqual(config.logging.level, LogLevel.DEBUG)

    def test_empty_file_gives_defaults(self):
        path = self.dir / "empty.yml"
        path.write_text("", encoding="utf-8")
        self.assertEqual(load_config(path), LibDupesConfig())

    def test_missing_file(self):
        with self.assertRaises(ConfigurationError):
            load_config(self.dir / "missing.yml")

    def test_invalid_yaml(self):
        path = self.dir / "bad.yml"
        path.write_text("duplicates: [unclosed\n", encoding="utf-8")
        with self.assertRaises(ConfigurationError):
            load_config(path)

    def test_save_and_reload(self):
        config = load_config_from_dict({"library_id": 2, "logging": {"level": "INFO"}})
        path = self.dir / "nested" / "saved.yml"
        save_config(config, path)
        self.assertEqual(load_config(path), config)


class TestValidation(unittest.TestCase):
    def test_invalid_pattern(self):
        with self.assertRaises(ConfigurationError):
            load_config_from_dict({"duplicates": {"doi": {"field": "DOI", "pattern": "("}}})

    def test_unknown_pass_option(self):
        with self.assertRaises(ConfigurationError):
            load_config_from_dict({"duplicates": {"title": {"fuzzy": True}}})

    def test_negative_year_gap(self):
        with self.assertRaises(ConfigurationError):
            load_config_from_dict({"duplicates": {"title": {"max_year_gap": -1}}})

    def test_empty_legal_fields(self):
        with self.assertRaises(ConfigurationError):
            load_config_from_dict({"duplicates": {"legal": {"fields": []}}})

    def test_not_a_mapping(self):
        with self.assertRaises(ConfigurationError):
            load_config_from_dict(["library_id", 1])


class TestEnvironment(unittest.TestCase):
    def test_env_var_expansion(self):
        with mock.patch.dict(os.environ, {"LIBDUPES_LOG": "/tmp/dupes.log"}):
            config = load_config_from_dict({"logging": {"file": "${LIBDUPES_LOG}"}})
        self.assertEqual(config.logging.file, Path("/tmp/dupes.log"))

    def test_env_var_default(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            config = load_config_from_dict({"logging": {"level": "${LEVEL:-error}"}})
        self.assertEqual(config.logging.level, LogLevel.ERROR)


class TestMerge(unittest.TestCase):
    def test_merge_keeps_unrelated_values(self):
        base = load_config_from_dict({"library_id": 3})
        merged = merge_configs(base, {"duplicates": {"isbn": {"enabled": False}}})
        self.assertFalse(merged.duplicates.isbn.enabled)
        self.assertEqual(merged.duplicates.isbn.field, "ISBN")
        self.assertEqual(merged.library_id, 3)
        self.assertTrue(base.duplicates.isbn.enabled)


if __name__ == "__main__":
    unittest.main()
