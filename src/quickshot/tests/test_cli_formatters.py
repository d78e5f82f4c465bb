#!/usr/bin/env python3
"""
Unit tests for cli/formatters.py
"""

import json
import os
import sys
import unittest
from io import StringIO

# Add parent directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from quickshot.cli.formatters import (
    console,
    print_displays_table,
    print_error,
    print_info,
    print_json,
    print_resize_result,
    print_screenshot_result,
    print_warning,
)


class TestCliFormatters(unittest.TestCase):
    """Test cases for CLI formatters"""

    def setUp(self):
        """Set up test environment"""
        # Redirect rich console output to StringIO
        self.console_output = StringIO()
        console.file = self.console_output

    def tearDown(self):
        """Tear down test environment"""
        # None makes the console follow sys.stdout again
        console.file = None

    def test_print_error(self):
        print_error("Test error")
        output = self.console_output.getvalue()

        self.assertIn("Error", output)
        self.assertIn("Test error", output)

    def test_print_error_with_hint(self):
        print_error("Capture failed", hint="Grant access")
        output = self.console_output.getvalue()

        self.assertIn("Capture failed", output)
        self.assertIn("Grant access", output)

    def test_print_warning(self):
        print_warning("Test warning")
        output = self.console_output.getvalue()

        self.assertIn("Warning", output)
        self.assertIn("Test warning", output)

    def test_print_info(self):
        print_info("Test info")
        output = self.console_output.getvalue()

        self.assertIn("Info", output)
        self.assertIn("Test info", output)

    def test_print_json(self):
        print_json({"name": "test", "value": 123})
        self.assertEqual(json.loads(self.console_output.getvalue()), {"name": "test", "value": 123})

    def test_print_screenshot_result(self):
        result = {
            "content": [{"type": "image", "data": "AAAA", "mimeType": "image/jpeg"}],
            "width": 3118,
            "height": 2338,
            "bytes": 2_097_152,
        }
        print_screenshot_result(result, "shot.jpg")
        output = self.console_output.getvalue()

        self.assertIn("Screenshot Captured", output)
        self.assertIn("image/jpeg", output)
        self.assertIn("3118x2338", output)
        self.assertIn("2.00 MB", output)
        self.assertIn("Saved to", output)

    def test_print_screenshot_error(self):
        print_screenshot_result({"error": "No screen found", "kind": "CaptureUnavailable"})
        self.assertIn("No screen found", self.console_output.getvalue())

    def test_print_resize_result_unchanged(self):
        print_resize_result("small.png", "small.png")
        self.assertIn("left unchanged", self.console_output.getvalue())

    def test_print_displays_table(self):
        print_displays_table([
            {"id": 1, "x": 0, "y": 0, "width": 1920, "height": 1080},
            {"id": 2, "x": 1920, "y": 0, "width": 2560, "height": 1440},
        ])
        output = self.console_output.getvalue()

        self.assertIn("Available Displays", output)
        self.assertIn("2560", output)


if __name__ == "__main__":
    unittest.main()
