"""
CLI Layer for Quickshot

This package contains the command line interface, providing a rich interface
for human users and structured JSON output for scripts.

The CLI layer is designed to:
1. Handle user interaction concerns
2. Format outputs for human readability
3. Parse and validate command-line arguments
4. Implement CLI-specific error handling

Usage:
    from quickshot.cli import app as quickshot_app

    # Run the CLI app
    quickshot_app()
"""

# CLI application
from quickshot.cli.cli import app

# Formatters for rich output
from quickshot.cli.formatters import (
    print_screenshot_result,
    print_resize_result,
    print_displays_table,
    print_error,
    print_warning,
    print_info,
    print_json,
    create_progress,
    console
)

# Response schemas
from quickshot.cli.schemas import format_cli_response

__all__ = [
    'app',

    'print_screenshot_result',
    'print_resize_result',
    'print_displays_table',
    'print_error',
    'print_warning',
    'print_info',
    'print_json',
    'create_progress',
    'console',

    'format_cli_response'
]
