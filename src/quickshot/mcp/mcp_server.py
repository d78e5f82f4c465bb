#!/usr/bin/env python3
"""
MCP Server Entry Point for Quickshot

This is the main entry point for the quickshot MCP server, designed to be
directly referenced in the .mcp.json configuration.

This module is part of the Integration Layer and connects the MCP functionality
to the application core.
"""

import argparse
import json
import os
import platform
import sys
from typing import Any, Dict

from loguru import logger

from quickshot import __version__
from quickshot.core.config import load_config, get_instance_name
from quickshot.core.errors import QuickshotError
from quickshot.core.pipeline import list_displays
from quickshot.mcp.mcp_tools import create_mcp_server


def ensure_log_directory() -> None:
    """Ensure log directory exists"""
    os.makedirs("logs", exist_ok=True)


def configure_logging(level: str = "INFO") -> None:
    """
    Configure logging with proper format and level.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    ensure_log_directory()

    logger.remove()

    logger.add(
        "logs/quickshot.log",
        rotation="10 MB",
        retention="1 week",
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}"
    )

    # stdout carries the MCP stdio transport
    logger.add(
        sys.stderr,
        format="<level>{level: <8}</level> | {message}",
        level=level,
        colorize=True
    )


def get_server_info() -> Dict[str, Any]:
    """
    Get server information.

    Returns:
        Dict[str, Any]: Server information
    """
    config = load_config()
    return {
        "name": get_instance_name(config) or "Quickshot",
        "version": __version__,
        "description": "Screen capture for MCP clients, shrunk to fit a byte budget",
        "backend": config.backend,
        "target_size_bytes": config.target_size_bytes,
    }


def health_check() -> Dict[str, Any]:
    """
    Perform a health check by enumerating displays.

    Returns:
        Dict[str, Any]: Health check results
    """
    import mss
    import PIL

    try:
        displays = list_displays()
    except QuickshotError as e:
        return {
            "status": "unhealthy",
            "error": str(e),
            "kind": e.kind,
        }

    return {
        "status": "healthy",
        "platform": platform.system(),
        "python_version": platform.python_version(),
        "mss_version": getattr(mss, "__version__", "unknown"),
        "pil_version": getattr(PIL, "__version__", "unknown"),
        "displays": len(displays),
    }


def main() -> int:
    """
    Main entry point for the MCP server.

    Returns:
        int: Exit code
    """
    parser = argparse.ArgumentParser(description="Quickshot MCP Server")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    start_parser = subparsers.add_parser("start", help="Start the MCP server")
    start_parser.add_argument("--host", type=str, default="localhost", help="Host to listen on")
    start_parser.add_argument("--port", type=int, default=3000, help="Port to listen on")
    start_parser.add_argument(
        "--transport", choices=["stdio", "sse"], default="stdio", help="MCP transport"
    )
    start_parser.add_argument("--debug", action="store_true", help="Enable debug mode")

    subparsers.add_parser("health", help="Check server health")
    subparsers.add_parser("info", help="Display server information")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "start":
        log_level = "DEBUG" if args.debug else "INFO"
        configure_logging(log_level)

        logger.info("Starting MCP server for quickshot")
        logger.info(f"Host: {args.host}, Port: {args.port}, Transport: {args.transport}")

        try:
            config = load_config()
            mcp = create_mcp_server(
                name=get_instance_name(config) or "Quickshot",
                host=args.host,
                port=args.port,
                config=config
            )
            mcp.run(transport=args.transport)
        except KeyboardInterrupt:
            logger.info("Server stopped by user")
            return 0
        except QuickshotError as e:
            logger.error(f"Server failed to start: {str(e)}")
            return 1

    elif args.command == "health":
        result = health_check()
        print(json.dumps(result, indent=2))
        return 0 if result["status"] == "healthy" else 1

    elif args.command == "info":
        print(json.dumps(get_server_info(), indent=2))
        return 0

    return 0


if __name__ == "__main__":
    """
    Usage:
      python -m quickshot.mcp.mcp_server start [--host HOST] [--port PORT] [--transport stdio|sse] [--debug]
      python -m quickshot.mcp.mcp_server health
      python -m quickshot.mcp.mcp_server info
    """
    sys.exit(main())
