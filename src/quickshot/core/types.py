#!/usr/bin/env python3
"""
Data Model for Quickshot Core

Immutable request and artifact types that flow through the capture pipeline:
capture targets, display snapshots, image artifacts and resize plans.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- WholeDisplay(display_id=2)
- WindowBounds(x=2000, y=100, width=800, height=600)
- ImageArtifact.from_path("/tmp/quickshot_raw_ab12.png", width=4000, height=3000)

Expected output:
- Frozen dataclass instances
"""

import os
from dataclasses import dataclass
from typing import Optional, Union

from quickshot.core.constants import FORMAT_JPEG, FORMAT_PNG, FORMAT_RAW
from quickshot.core.errors import ArtifactNotFound


@dataclass(frozen=True)
class WholeDisplay:
    """Capture one physical display by id."""

    display_id: int


@dataclass(frozen=True)
class InteractiveWindowPick:
    """Let the user pick a window with the platform picker."""


@dataclass(frozen=True)
class WindowBounds:
    """Capture the display that holds the window with these on-screen bounds."""

    x: int
    y: int
    width: int
    height: int


CaptureTarget = Union[WholeDisplay, InteractiveWindowPick, WindowBounds]


@dataclass(frozen=True)
class DisplayInfo:
    """Snapshot of one display's geometry at capture time."""

    id: int
    x: int
    y: int
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        """True when the point lies in [origin, origin + size) on both axes."""
        return (
            self.x <= x < self.x + self.width
            and self.y <= y < self.y + self.height
        )


def format_from_extension(path: str) -> str:
    ext = os.path.splitext(path)[1].lower()
    if ext == ".png":
        return FORMAT_PNG
    if ext in (".jpg", ".jpeg"):
        return FORMAT_JPEG
    return FORMAT_RAW


@dataclass(frozen=True)
class ImageArtifact:
    """
    A transient image file at some pipeline stage.

    width and height are None when the producer never decoded pixels
    (the external tool backend); the resizer probes them on demand.
    """

    path: str
    byte_length: int
    width: Optional[int] = None
    height: Optional[int] = None
    format: str = FORMAT_RAW

    @classmethod
    def from_path(
        cls,
        path: str,
        width: Optional[int] = None,
        height: Optional[int] = None,
        format: Optional[str] = None,
    ) -> "ImageArtifact":
        """Build an artifact with its byte length read from the filesystem."""
        try:
            byte_length = os.path.getsize(path)
        except FileNotFoundError:
            raise ArtifactNotFound(f"File not found: {path}")
        return cls(
            path=path,
            byte_length=byte_length,
            width=width,
            height=height,
            format=format or format_from_extension(path),
        )


@dataclass(frozen=True)
class ResizePlan:
    """Scale and quality chosen for one resize-and-compress pass."""

    scale_factor: float
    quality: int
    width: int
    height: int
