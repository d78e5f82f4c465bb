#!/usr/bin/env python3
"""
Screenshot Capture Backends

This module acquires a raw PNG capture of a display or window. Two backends
satisfy the same CaptureBackend contract:

1. ScreencaptureBackend: shells out to the macOS `screencapture` utility.
   A failing subprocess almost always means screen recording permission is
   missing, so failures surface as PermissionDenied with remediation text.
2. MssCaptureBackend: enumerates displays with MSS and copies the pixel
   buffer in-process, saving it as PNG with Pillow.

The backend is chosen once from configuration by get_capture_backend().

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- backend.capture(WholeDisplay(2), artifacts)
- backend.capture(WindowBounds(2000, 100, 800, 600), artifacts)

Expected output:
- ImageArtifact(path="/tmp/quickshot_raw_<hex>.png", byte_length=..., format="png")
"""

import os
import platform
import subprocess
import time
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from PIL import Image
from loguru import logger

from quickshot.core.artifacts import ArtifactManager
from quickshot.core.constants import (
    BACKEND_AUTO,
    BACKEND_EXTERNAL,
    BACKEND_INPROCESS,
    FORMAT_PNG,
    OPEN_BIN,
    PERMISSION_HINT,
    PRIMARY_DISPLAY_ID,
    SCREEN_CAPTURE_SETTINGS_URL,
    SCREENCAPTURE_BIN,
)
from quickshot.core.errors import (
    CaptureUnavailable,
    EncodeFailed,
    InvalidInput,
    PermissionDenied,
)
from quickshot.core.locator import find_display, locate_display, primary_display
from quickshot.core.mss import get_displays, grab_display
from quickshot.core.types import (
    CaptureTarget,
    DisplayInfo,
    ImageArtifact,
    InteractiveWindowPick,
    WholeDisplay,
    WindowBounds,
)

DisplayEnumerator = Callable[[], List[DisplayInfo]]


class CaptureBackend(ABC):
    """Platform strategy that turns a CaptureTarget into a raw PNG artifact."""

    name = "capture"

    @abstractmethod
    def capture(self, target: CaptureTarget, artifacts: ArtifactManager) -> ImageArtifact:
        """
        Capture the target into a file owned by `artifacts`.

        Raises:
            PermissionDenied, CaptureUnavailable, EncodeFailed
        """


class ScreencaptureBackend(CaptureBackend):
    """Capture through the macOS `screencapture` command line tool."""

    name = BACKEND_EXTERNAL

    def __init__(
        self,
        enumerate_displays: DisplayEnumerator = get_displays,
        binary: str = SCREENCAPTURE_BIN,
    ):
        self.enumerate_displays = enumerate_displays
        self.binary = binary

    def _target_args(self, target: CaptureTarget) -> List[str]:
        if isinstance(target, WholeDisplay):
            return ["-D", str(target.display_id)]
        if isinstance(target, InteractiveWindowPick):
            return ["-w"]
        if isinstance(target, WindowBounds):
            display_id = locate_display(target, self.enumerate_displays())
            return ["-D", str(display_id)]
        raise InvalidInput(f"Unsupported capture target: {target!r}")

    def _run(self, args: List[str], path: str) -> subprocess.CompletedProcess:
        command = [self.binary, "-x", "-t", "png"] + args + [path]
        logger.debug(f"Running: {' '.join(command)}")
        try:
            return subprocess.run(command, capture_output=True, text=True)
        except OSError as e:
            raise CaptureUnavailable(f"Failed to run {self.binary}: {str(e)}")

    def capture(self, target, artifacts):
        args = self._target_args(target)
        raw_path = artifacts.allocate("raw", "png")

        capture_time = time.time()
        result = self._run(args, raw_path)

        if result.returncode != 0 and args[0] == "-D":
            # The display id may be stale; try the main display once
            logger.warning(
                f"Failed to capture display {args[1]}. Falling back to main display."
            )
            result = self._run(["-m"], raw_path)

        logger.info(f"Raw capture completed in {time.time() - capture_time:.3f}s")

        if result.returncode != 0:
            raise PermissionDenied(
                f"{self.binary} exited with code {result.returncode}",
                hint=PERMISSION_HINT,
            )
        if not os.path.isfile(raw_path) or os.path.getsize(raw_path) == 0:
            raise PermissionDenied("Screen recording permission denied", hint=PERMISSION_HINT)

        return ImageArtifact.from_path(raw_path, format=FORMAT_PNG)


class MssCaptureBackend(CaptureBackend):
    """In-process capture: MSS pixel grab, PNG encode with Pillow."""

    name = BACKEND_INPROCESS

    def __init__(
        self,
        enumerate_displays: DisplayEnumerator = get_displays,
        grab: Callable[[DisplayInfo], Image.Image] = grab_display,
    ):
        self.enumerate_displays = enumerate_displays
        self.grab = grab

    def _select_display(self, target: CaptureTarget, displays: List[DisplayInfo]) -> DisplayInfo:
        if isinstance(target, InteractiveWindowPick):
            raise CaptureUnavailable("Window capture not implemented for this platform")

        display = None
        if isinstance(target, WholeDisplay):
            display = next((d for d in displays if d.id == target.display_id), None)
            if display is None:
                logger.warning(f"Display {target.display_id} not found, using main display")
        elif isinstance(target, WindowBounds):
            display = find_display(target, displays)
            if display is None:
                logger.info("Window not found on any display, using main display")
        else:
            raise InvalidInput(f"Unsupported capture target: {target!r}")

        display = display or primary_display(displays, PRIMARY_DISPLAY_ID)
        if display is None:
            raise CaptureUnavailable("No screen found")
        return display

    def capture(self, target, artifacts):
        display = self._select_display(target, self.enumerate_displays())
        logger.info(
            f"Taking screenshot of display {display.id} at ({display.x}, {display.y}), "
            f"{display.width}x{display.height}"
        )

        capture_time = time.time()
        img = self.grab(display)
        logger.info(f"Raw capture completed in {time.time() - capture_time:.3f}s")

        raw_path = artifacts.allocate("raw", "png")
        try:
            img.save(raw_path, format="PNG")
        except (OSError, ValueError) as e:
            raise EncodeFailed(f"Failed to save raw capture: {str(e)}")

        return ImageArtifact.from_path(
            raw_path, width=img.width, height=img.height, format=FORMAT_PNG
        )


def get_capture_backend(name: str = BACKEND_AUTO, system: Optional[str] = None) -> CaptureBackend:
    """
    Select the capture backend for a configured backend name.

    "auto" resolves to `screencapture` on macOS and MSS elsewhere.
    """
    system = system or platform.system()
    if name == BACKEND_AUTO:
        name = BACKEND_EXTERNAL if system == "Darwin" else BACKEND_INPROCESS

    if name == BACKEND_EXTERNAL:
        return ScreencaptureBackend()
    if name == BACKEND_INPROCESS:
        return MssCaptureBackend()
    raise InvalidInput(f"Unknown capture backend: {name}")


def open_capture_settings(system: Optional[str] = None) -> None:
    """
    Open the OS screen recording privacy settings.

    Raises:
        CaptureUnavailable: on platforms other than macOS, or if `open` fails
    """
    system = system or platform.system()
    if system != "Darwin":
        raise CaptureUnavailable("Opening screen recording settings is only supported on macOS")

    try:
        result = subprocess.run([OPEN_BIN, SCREEN_CAPTURE_SETTINGS_URL], capture_output=True, text=True)
    except OSError as e:
        raise CaptureUnavailable(f"Failed to open screen recording settings: {str(e)}")
    if result.returncode != 0:
        raise CaptureUnavailable(
            f"Failed to open screen recording settings (exit code {result.returncode})"
        )
