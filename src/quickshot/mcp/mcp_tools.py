#!/usr/bin/env python3
"""
MCP Tools for Quickshot

This module registers the capture and resize commands as tools on a FastMCP
server. Capture runs on a worker thread so the server loop stays responsive
while screencapture, sips or Pillow work.

This module is part of the Integration Layer and can depend on both
Core Layer and Presentation Layer components.

Sample input:
- create_mcp_server(config=load_config())

Expected output:
- Configured MCP server with registered tools
"""

import asyncio
from typing import Any, Dict, List, Optional, Union

from loguru import logger
from mcp.server.fastmcp import FastMCP

from quickshot.core.config import PipelineConfig, load_config
from quickshot.mcp.wrappers import (
    capture_screen_wrapper,
    capture_window_wrapper,
    resize_image_wrapper,
    displays_wrapper,
    open_settings_wrapper
)


def create_mcp_server(
    name: str = "Quickshot",
    host: str = "localhost",
    port: int = 3000,
    config: Optional[PipelineConfig] = None
) -> FastMCP:
    """
    Create and configure MCP server with capture tools

    Args:
        name: Name for the MCP server
        host: Host to listen on
        port: Port to listen on
        config: Pipeline configuration; loaded from the environment when None

    Returns:
        FastMCP: Configured MCP server instance
    """
    config = config or load_config()
    mcp = FastMCP(name, host=host, port=port)

    logger.info(f"Initialized FastMCP server: {name} on {host}:{port}")

    register_capture_tools(mcp, config)
    register_resize_tool(mcp, config)
    register_utility_tools(mcp)

    return mcp


def register_capture_tools(mcp: FastMCP, config: PipelineConfig) -> None:
    """
    Register capture_screen and capture_window with the MCP server

    Args:
        mcp: MCP server instance
        config: Pipeline configuration shared by the tools
    """
    @mcp.tool()
    async def capture_screen(
        display: Optional[int] = None,
        bounds: Optional[Union[List[int], str]] = None,
        target_size_bytes: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Captures a display and returns it as base64, shrunk to fit a byte budget.

        Args:
            display (int, optional): Display id to capture. Defaults to the main display.
            bounds (list or str, optional): [x, y, width, height] of a reference window;
                                            the display containing its top-left corner is captured.
            target_size_bytes (int, optional): Maximum image size in bytes. Defaults to 4,500,000.

        Returns:
            dict: MCP-compliant response containing:
                - content: List with a single image object (type, base64 data, MIME type).
                - width, height, bytes: Delivered image metadata.
                On error:
                - error, kind, hint: Error message, error kind and remediation text.
                - success: Boolean indicating success/failure.
        """
        logger.info(f"Screen capture requested: display={display}, bounds={bounds}")
        return await asyncio.to_thread(
            capture_screen_wrapper, config, display, bounds, target_size_bytes
        )

    @mcp.tool()
    async def capture_window(target_size_bytes: Optional[int] = None) -> Dict[str, Any]:
        """
        Lets the user pick a window interactively and returns it as base64 within a byte budget.
        Only available with the external (macOS screencapture) backend.

        Args:
            target_size_bytes (int, optional): Maximum image size in bytes. Defaults to 4,500,000.

        Returns:
            dict: Same shape as capture_screen.
        """
        logger.info("Window capture requested")
        return await asyncio.to_thread(capture_window_wrapper, config, target_size_bytes)


def register_resize_tool(mcp: FastMCP, config: PipelineConfig) -> None:
    """
    Register resize_image with the MCP server

    Args:
        mcp: MCP server instance
        config: Pipeline configuration shared by the tools
    """
    @mcp.tool()
    async def resize_image(file_path: str, target_size_bytes: Optional[int] = None) -> Dict[str, Any]:
        """
        Shrinks an image file to fit a byte budget.

        Args:
            file_path (str): Path to a PNG or JPEG file.
            target_size_bytes (int, optional): Maximum size in bytes. Defaults to 4,500,000.

        Returns:
            dict: MCP-compliant response containing:
                - path: The input path if it already fits, otherwise a new JPEG path.
                - success: Boolean indicating success/failure.
        """
        logger.info(f"Resize requested for {file_path}")
        return await asyncio.to_thread(resize_image_wrapper, config, file_path, target_size_bytes)


def register_utility_tools(mcp: FastMCP) -> None:
    """
    Register list_displays and open_capture_settings with the MCP server

    Args:
        mcp: MCP server instance
    """
    @mcp.tool()
    def list_displays() -> Dict[str, Any]:
        """
        Returns the connected displays with their id, origin and size.
        """
        logger.info("Display list requested")
        return displays_wrapper()

    @mcp.tool()
    def open_capture_settings() -> Dict[str, Any]:
        """
        Opens the macOS screen recording privacy settings so the user can grant permission.
        """
        logger.info("Opening screen recording settings")
        return open_settings_wrapper()
