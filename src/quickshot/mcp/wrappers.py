#!/usr/bin/env python3
"""
MCP Wrappers for Quickshot

This module provides MCP-specific wrapper functions for the core capture and
resize commands, handling parameter validation and error formatting for MCP.

This module is part of the Integration Layer and can depend on both
Core Layer and Presentation Layer components.

Sample input:
- capture_screen_wrapper(config, bounds=[2000, 100, 800, 600])
- resize_image_wrapper(config, "/tmp/big.png", 4_500_000)

Expected output:
- {"success": True, "content": [...], "width": 3118, "height": 2338, "bytes": ...}
- {"success": True, "path": "/tmp/quickshot_resized_<hex>.jpg"}
"""

from typing import Any, Dict, List, Optional, Union

from loguru import logger

from quickshot.core.capture import open_capture_settings
from quickshot.core.config import PipelineConfig
from quickshot.core.errors import QuickshotError
from quickshot.core.pipeline import capture_screenshot, list_displays, resize_image
from quickshot.core.types import CaptureTarget, InteractiveWindowPick
from quickshot.core.utils import build_target, format_error_response


def format_mcp_response(
    success: bool,
    data: Optional[Dict[str, Any]] = None,
    error: Optional[str] = None
) -> Dict[str, Any]:
    """
    Format a response in MCP-compatible format.

    Args:
        success: Whether the operation was successful
        data: Response data; merged in on success, and on failure too
            (error kind, remediation hint)
        error: Error message (for failed operations)

    Returns:
        Dict[str, Any]: MCP-compatible response
    """
    response: Dict[str, Any] = {"success": success}

    if data is not None:
        response.update(data)
    if not success and error is not None:
        response["error"] = error

    return response


def _error_response(error: Union[QuickshotError, Dict[str, Any]]) -> Dict[str, Any]:
    details = format_error_response(error) if isinstance(error, QuickshotError) else dict(error)
    message = details.pop("error")
    return format_mcp_response(False, data=details, error=message)


def _capture(config: PipelineConfig, target: CaptureTarget, target_size_bytes: Optional[int]) -> Dict[str, Any]:
    try:
        config = config.with_budget(target_size_bytes)
    except QuickshotError as e:
        return _error_response(e)

    result = capture_screenshot(target, config)
    if "error" in result:
        return _error_response(result)
    return format_mcp_response(True, data=result)


def capture_screen_wrapper(
    config: PipelineConfig,
    display: Optional[int] = None,
    bounds: Optional[Union[List[int], str]] = None,
    target_size_bytes: Optional[int] = None,
) -> Dict[str, Any]:
    """
    MCP wrapper for display capture.

    Args:
        config: Pipeline configuration
        display: Display id; None with no bounds captures the main display
        bounds: [x, y, width, height] of a reference window; its display is captured
        target_size_bytes: Budget override

    Returns:
        Dict[str, Any]: MCP-compatible response
    """
    try:
        target = build_target(display=display, bounds=bounds)
    except QuickshotError as e:
        return _error_response(e)
    return _capture(config, target, target_size_bytes)


def capture_window_wrapper(
    config: PipelineConfig,
    target_size_bytes: Optional[int] = None,
) -> Dict[str, Any]:
    """MCP wrapper for interactive window capture."""
    return _capture(config, InteractiveWindowPick(), target_size_bytes)


def resize_image_wrapper(
    config: PipelineConfig,
    file_path: str,
    target_size_bytes: Optional[int] = None,
) -> Dict[str, Any]:
    """
    MCP wrapper for the standalone resize command.

    Returns:
        Dict[str, Any]: MCP-compatible response with the resulting path
    """
    target_bytes = target_size_bytes if target_size_bytes is not None else config.target_size_bytes
    try:
        path = resize_image(file_path, target_bytes, config)
    except QuickshotError as e:
        logger.error(f"Resize operation failed: {str(e)}")
        return _error_response(e)
    return format_mcp_response(True, data={"path": path})


def displays_wrapper() -> Dict[str, Any]:
    """MCP wrapper for the display topology."""
    try:
        return format_mcp_response(True, data={"displays": list_displays()})
    except QuickshotError as e:
        return _error_response(e)


def open_settings_wrapper() -> Dict[str, Any]:
    """MCP wrapper for opening the screen recording settings."""
    try:
        open_capture_settings()
    except QuickshotError as e:
        return _error_response(e)
    return format_mcp_response(True, data={"opened": True})
