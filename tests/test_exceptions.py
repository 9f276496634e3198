"""
Tests for the exception hierarchy.
"""

import unittest

from libdupes.utils.exceptions import (
    ConfigurationError,
    DetectionCancelledError,
    DetectionError,
    DuplicateViewError,
    LibDupesError,
    StoreError,
)


class TestExceptions(unittest.TestCase):
    def test_details_in_message(self):
        error = LibDupesError("Something failed", {"item_id": 4})
        self.assertEqual(str(error), "Something failed (item_id=4)")
        self.assertEqual(str(LibDupesError("Plain")), "Plain")

    def test_to_dict(self):
        data = ConfigurationError("Bad value", config_key="title.max_year_gap").to_dict()
        self.assertEqual(data["type"], "ConfigurationError")
        self.assertEqual(data["message"], "Bad value")
        self.assertEqual(data["details"], {"config_key": "title.max_year_gap"})
        self.assertIn("timestamp", data)

    def test_store_error_operation(self):
        error = StoreError("field_rows", "table missing")
        self.assertEqual(error.operation, "field_rows")
        self.assertEqual(error.message, "[field_rows] table missing")

    def test_duplicate_view_error(self):
        cause = OSError("disk full")
        error = DuplicateViewError(library_id=2, cause=cause)
        self.assertIsInstance(error, StoreError)
        self.assertEqual(error.library_id, 2)
        self.assertIs(error.cause, cause)
        self.assertEqual(error.details["cause"], "OSError: disk full")

    def test_cancelled_is_detection_error(self):
        error = DetectionCancelledError(next_pass="title")
        self.assertIsInstance(error, DetectionError)
        self.assertEqual(error.next_pass, "title")
        self.assertEqual(error.details, {"next_pass": "title"})


if __name__ == "__main__":
    unittest.main()
