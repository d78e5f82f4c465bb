"""
MCP Layer for Quickshot

This package exposes capture and resize as MCP tools for AI agents.

Usage:
    # Start the MCP server
    python -m quickshot.mcp.mcp_server start

    # Use the MCP server in Python
    from quickshot.mcp import create_mcp_server
    mcp = create_mcp_server()
    mcp.run()
"""

from quickshot.mcp.mcp_tools import create_mcp_server

from quickshot.mcp.mcp_server import (
    main,
    health_check,
    get_server_info,
    configure_logging
)

from quickshot.mcp.wrappers import (
    capture_screen_wrapper,
    capture_window_wrapper,
    resize_image_wrapper,
    displays_wrapper,
    open_settings_wrapper,
    format_mcp_response
)

__all__ = [
    # MCP server
    'create_mcp_server',
    'main',
    'health_check',
    'get_server_info',
    'configure_logging',

    # MCP wrappers
    'capture_screen_wrapper',
    'capture_window_wrapper',
    'resize_image_wrapper',
    'displays_wrapper',
    'open_settings_wrapper',
    'format_mcp_response'
]

# Example configuration for .mcp.json
EXAMPLE_MCP_CONFIG = """
{
  "mcpServers": {
    "quickshot": {
      "command": "quickshot-mcp",
      "args": ["start"],
      "env": {"QUICKSHOT_TARGET_SIZE_BYTES": "4500000"}
    }
  }
}
"""
