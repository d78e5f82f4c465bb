#!/usr/bin/env python3
"""
Unit tests for core/mss.py
"""

import os
import sys
import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

# Add parent directory to path to import module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from quickshot.core.errors import CaptureUnavailable, EncodeFailed
from quickshot.core.mss import get_displays, grab_display
from quickshot.core.types import DisplayInfo


DISPLAY = DisplayInfo(id=1, x=0, y=0, width=4, height=2)


def _fake_mss(sct):
    """Build a stand-in for mss.mss() whose context yields `sct`."""
    factory = MagicMock()
    factory.return_value.__enter__.return_value = sct
    return factory


class TestGrabDisplay(unittest.TestCase):
    """Test cases for raw pixel grabs"""

    def test_converts_bgrx_to_rgb(self):
        # One blue-green-red-pad pixel repeated across a 4x2 display
        sct = MagicMock()
        sct.grab.return_value = SimpleNamespace(size=(4, 2), bgra=b"\x01\x02\x03\xff" * 8)

        with patch("quickshot.core.mss.mss.mss", _fake_mss(sct)):
            img = grab_display(DISPLAY)

        self.assertEqual(img.mode, "RGB")
        self.assertEqual(img.size, (4, 2))
        self.assertEqual(img.getpixel((0, 0)), (3, 2, 1))
        self.assertEqual(
            sct.grab.call_args[0][0],
            {"left": 0, "top": 0, "width": 4, "height": 2},
        )

    def test_short_buffer_is_encode_failed(self):
        sct = MagicMock()
        sct.grab.return_value = SimpleNamespace(size=(4, 2), bgra=b"\x00" * 5)

        with patch("quickshot.core.mss.mss.mss", _fake_mss(sct)):
            with self.assertRaises(EncodeFailed):
                grab_display(DISPLAY)

    def test_grab_failure_is_capture_unavailable(self):
        sct = MagicMock()
        sct.grab.side_effect = RuntimeError("XGetImage failed")

        with patch("quickshot.core.mss.mss.mss", _fake_mss(sct)):
            with self.assertRaises(CaptureUnavailable):
                grab_display(DISPLAY)


class TestGetDisplays(unittest.TestCase):
    """Test cases for display enumeration"""

    def test_skips_combined_screen(self):
        sct = SimpleNamespace(monitors=[
            {"left": 0, "top": 0, "width": 4480, "height": 1440},
            {"left": 0, "top": 0, "width": 1920, "height": 1080},
            {"left": 1920, "top": 0, "width": 2560, "height": 1440},
        ])

        with patch("quickshot.core.mss.mss.mss", _fake_mss(sct)):
            displays = get_displays()

        self.assertEqual(displays, [
            DisplayInfo(id=1, x=0, y=0, width=1920, height=1080),
            DisplayInfo(id=2, x=1920, y=0, width=2560, height=1440),
        ])

    def test_no_physical_displays(self):
        sct = SimpleNamespace(monitors=[{"left": 0, "top": 0, "width": 0, "height": 0}])

        with patch("quickshot.core.mss.mss.mss", _fake_mss(sct)):
            with self.assertRaises(CaptureUnavailable):
                get_displays()


if __name__ == "__main__":
    unittest.main()
