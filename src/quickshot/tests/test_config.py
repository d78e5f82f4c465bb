#!/usr/bin/env python3
"""
Unit tests for core/config.py and core/errors.py
"""

import os
import sys
import unittest

# Add parent directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from quickshot.core.config import (
    PipelineConfig,
    get_instance_name,
    load_config,
    validate_backend,
    validate_target_size,
)
from quickshot.core.errors import InvalidInput, PermissionDenied, QuickshotError


class TestConfig(unittest.TestCase):
    """Test cases for pipeline configuration"""

    def test_defaults(self):
        config = load_config(env={})
        self.assertEqual(config.target_size_bytes, 4_500_000)
        self.assertEqual(config.backend, "auto")
        self.assertIsNone(config.temp_dir)
        self.assertEqual(get_instance_name(config), "")

    def test_from_environment(self):
        config = load_config(env={
            "QUICKSHOT_TARGET_SIZE_BYTES": "2000000",
            "QUICKSHOT_BACKEND": "InProcess",
            "QUICKSHOT_TEMP_DIR": "/tmp/shots",
            "QUICKSHOT_INSTANCE_NAME": "left-monitor",
        })
        self.assertEqual(config.target_size_bytes, 2_000_000)
        self.assertEqual(config.backend, "inprocess")
        self.assertEqual(config.temp_dir, "/tmp/shots")
        self.assertEqual(get_instance_name(config), "left-monitor")

    def test_invalid_environment(self):
        with self.assertRaises(InvalidInput):
            load_config(env={"QUICKSHOT_TARGET_SIZE_BYTES": "lots"})
        with self.assertRaises(InvalidInput):
            load_config(env={"QUICKSHOT_TARGET_SIZE_BYTES": "0"})
        with self.assertRaises(InvalidInput):
            load_config(env={"QUICKSHOT_BACKEND": "gpu"})

    def test_validate_target_size(self):
        self.assertEqual(validate_target_size(1), 1)
        self.assertEqual(validate_target_size("42"), 42)
        for bad in (0, -1, None, "x"):
            with self.assertRaises(InvalidInput):
                validate_target_size(bad)

    def test_validate_backend(self):
        self.assertEqual(validate_backend(" External "), "external")
        self.assertEqual(validate_backend(""), "auto")

    def test_with_budget(self):
        config = PipelineConfig()
        self.assertIs(config.with_budget(None), config)
        self.assertEqual(config.with_budget(1000).target_size_bytes, 1000)
        self.assertEqual(config.target_size_bytes, 4_500_000)
        with self.assertRaises(InvalidInput):
            config.with_budget(0)


class TestErrors(unittest.TestCase):
    """Test cases for the error hierarchy"""

    def test_kinds(self):
        error = PermissionDenied("screencapture exited with code 1", hint="Grant access")
        self.assertIsInstance(error, QuickshotError)
        self.assertEqual(error.kind, "PermissionDenied")

    def test_message_includes_hint(self):
        error = PermissionDenied("screencapture exited with code 1", hint="Grant access")
        self.assertEqual(str(error), "screencapture exited with code 1. Grant access")
        self.assertEqual(str(InvalidInput("bad")), "bad")

    def test_to_dict(self):
        self.assertEqual(
            InvalidInput("bad").to_dict(),
            {"error": "bad", "kind": "InvalidInput"},
        )
        self.assertEqual(
            PermissionDenied("denied", hint="Grant access").to_dict()["hint"],
            "Grant access",
        )


if __name__ == "__main__":
    unittest.main()
