"""
Quickshot

Screen and window capture that fits a caller-specified byte budget, over two
platform backends: external OS tools (screencapture/sips) or an in-process
pipeline (MSS/Pillow).

This package is organised in three layers:

1. Core Layer: capture, resize and artifact lifecycle logic
2. Presentation Layer: CLI interface with rich formatting
3. Integration Layer: MCP tools for agent and app integration

Usage:
    # Direct API usage (Core Layer)
    from quickshot.core import capture_screenshot, load_config, WholeDisplay
    result = capture_screenshot(WholeDisplay(1), load_config())

    # CLI usage (Presentation Layer)
    # quickshot screenshot --display 1 --budget 4500000

    # MCP server usage (Integration Layer)
    # quickshot-mcp start
"""

__version__ = "1.0.0"

# Core functionality
from quickshot.core import (
    capture_screenshot,
    capture_and_encode,
    resize_image,
    load_config,
)

__all__ = [
    'capture_screenshot',
    'capture_and_encode',
    'resize_image',
    'load_config',

    '__version__',
]
