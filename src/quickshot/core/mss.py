#!/usr/bin/env python3
"""
MSS (Screenshot) Low-Level Module

This module provides low-level wrapper functions for the MSS library: display
enumeration and raw pixel grabs, without any resizing or encoding.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- get_displays()
- grab_display(DisplayInfo(id=1, x=0, y=0, width=1920, height=1080))

Expected output:
- [DisplayInfo(id=1, x=0, y=0, width=1920, height=1080), ...]
- PIL Image of the display contents
"""

from typing import List

import mss
from PIL import Image
from loguru import logger

from quickshot.core.errors import CaptureUnavailable, EncodeFailed
from quickshot.core.types import DisplayInfo


def get_displays() -> List[DisplayInfo]:
    """
    Enumerate physical displays.

    mss lists the combined virtual screen at index 0; physical displays start
    at 1, which is also the id used for them here.

    Returns:
        List[DisplayInfo]: one entry per physical display

    Raises:
        CaptureUnavailable: if the display list cannot be read
    """
    try:
        with mss.mss() as sct:
            monitors = list(sct.monitors)
    except Exception as e:
        logger.error(f"Failed to enumerate displays: {str(e)}")
        raise CaptureUnavailable(f"Display enumeration failed: {str(e)}")

    displays = [
        DisplayInfo(
            id=i,
            x=monitor["left"],
            y=monitor["top"],
            width=monitor["width"],
            height=monitor["height"],
        )
        for i, monitor in enumerate(monitors)
        if i > 0
    ]
    if not displays:
        raise CaptureUnavailable("No displays found")
    return displays


def grab_display(display: DisplayInfo) -> Image.Image:
    """
    Copy the raw pixels of one display into a PIL image.

    Raises:
        CaptureUnavailable: if the grab fails
        EncodeFailed: if the pixel buffer cannot be converted
    """
    region = {
        "left": display.x,
        "top": display.y,
        "width": display.width,
        "height": display.height,
    }
    try:
        with mss.mss() as sct:
            sct_img = sct.grab(region)
    except Exception as e:
        logger.error(f"Failed to capture display {display.id}: {str(e)}")
        raise CaptureUnavailable(f"Failed to capture display {display.id}: {str(e)}")

    try:
        return Image.frombytes("RGB", sct_img.size, sct_img.bgra, "raw", "BGRX")
    except ValueError as e:
        logger.error(f"Failed to convert pixels of display {display.id}: {str(e)}")
        raise EncodeFailed(f"Failed to convert pixels of display {display.id}: {str(e)}")

