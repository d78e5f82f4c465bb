#!/usr/bin/env python3
"""
Utility Functions for Quickshot Core

This module provides helpers shared by the command layers: target parsing,
path validation and standardized error responses.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- parse_bounds("2000,100,800,600")
- build_target(display=None, window=False, bounds="2000,100,800,600")
- format_error_response(PermissionDenied("screencapture exited with code 1", hint="..."))

Expected output:
- WindowBounds(x=2000, y=100, width=800, height=600)
- WindowBounds(x=2000, y=100, width=800, height=600)
- {"error": "...", "kind": "PermissionDenied", "hint": "..."}
"""

import os
import platform
from typing import Any, Dict, List, Optional, Sequence, Union

from quickshot.core.constants import PRIMARY_DISPLAY_ID
from quickshot.core.errors import ArtifactNotFound, InvalidInput, QuickshotError
from quickshot.core.types import (
    CaptureTarget,
    InteractiveWindowPick,
    WholeDisplay,
    WindowBounds,
)


def parse_bounds(value: Union[str, Sequence[int]]) -> WindowBounds:
    """
    Convert "x,y,width,height" or a 4-item sequence into WindowBounds.

    Raises:
        InvalidInput: wrong arity, non-integers or non-positive size
    """
    if isinstance(value, str):
        parts: List[Any] = [p.strip() for p in value.split(",")]
    else:
        parts = list(value)

    if len(parts) != 4:
        raise InvalidInput(f"Bounds must have 4 elements [x, y, width, height], got {len(parts)}")

    try:
        x, y, width, height = (int(p) for p in parts)
    except (TypeError, ValueError):
        raise InvalidInput(f"Bounds must be integers, got {value!r}")

    if width <= 0 or height <= 0:
        raise InvalidInput(f"Bounds width and height must be positive, got {width}x{height}")
    return WindowBounds(x=x, y=y, width=width, height=height)


def build_target(
    display: Optional[int] = None,
    window: bool = False,
    bounds: Optional[Union[str, Sequence[int]]] = None,
) -> CaptureTarget:
    """
    Build a CaptureTarget from command options.

    At most one of display/window/bounds may be given; with none, the
    primary display is captured.
    """
    chosen = sum([display is not None, bool(window), bounds is not None])
    if chosen > 1:
        raise InvalidInput("Choose only one of display, window or bounds")

    if window:
        return InteractiveWindowPick()
    if bounds is not None:
        return parse_bounds(bounds)
    if display is not None:
        if display < 1:
            raise InvalidInput(f"Display id must be >= 1, got {display}")
        return WholeDisplay(display_id=display)
    return WholeDisplay(display_id=PRIMARY_DISPLAY_ID)


def validate_image_path(file_path: Any) -> str:
    """Reject empty or non-string paths and missing files."""
    if not isinstance(file_path, str) or not file_path.strip():
        raise InvalidInput(f"Invalid file path: {file_path!r}")
    if os.path.isdir(file_path):
        raise InvalidInput(f"Not a file: {file_path}")
    if not os.path.exists(file_path):
        raise ArtifactNotFound(f"File not found: {file_path}")
    return file_path


def get_system_info() -> Dict[str, str]:
    """
    Get system information for debugging.

    Returns:
        Dict[str, str]: System information
    """
    return {
        "platform": platform.system(),
        "platform_version": platform.version(),
        "python_version": platform.python_version(),
        "architecture": platform.architecture()[0],
    }


def format_error_response(
    error: Union[QuickshotError, str],
    include_system_info: bool = False,
) -> Dict[str, Any]:
    """
    Creates a standardized error response.

    Args:
        error: Pipeline error or plain message
        include_system_info: Whether to include system information

    Returns:
        Dict[str, Any]: Error response dictionary
    """
    if isinstance(error, QuickshotError):
        response = error.to_dict()
    else:
        response = {"error": str(error)}

    if include_system_info:
        response["system_info"] = get_system_info()

    return response
