#!/usr/bin/env python3
"""
Formatters for Quickshot CLI

This module provides rich formatting utilities for the CLI presentation layer:
result panels, the display table, progress indicators and JSON output.

This module is part of the Presentation Layer and should only depend on
Core Layer components, not on Integration Layer.

Sample input:
- Screenshot result dictionary
- Display list
- Error messages with remediation hints

Expected output:
- Rich formatted tables, panels, and progress indicators
"""

import os
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.text import Text


# Initialize console
console = Console()


# Color scheme
COLORS = {
    "success": "green",
    "error": "red",
    "warning": "yellow",
    "info": "blue",
    "path": "cyan",
    "highlight": "magenta",
    "dim": "grey70",
}


def _format_size(size_bytes: int) -> str:
    if size_bytes >= 1_048_576:
        return f"{size_bytes / 1_048_576:.2f} MB"
    return f"{size_bytes / 1024:.1f} KB"


def print_screenshot_result(result: Dict[str, Any], output_path: Optional[str] = None) -> None:
    """
    Format and print a capture result to the console.

    Args:
        result: Capture result dictionary
        output_path: File the image was written to, if any
    """
    if "error" in result:
        print_error(result["error"], hint=result.get("hint"))
        return

    content = result.get("content", [{}])[0]

    info = Text()
    info.append("Format: ", style=COLORS["dim"])
    info.append(f"{content.get('mimeType', 'unknown')}\n", style=COLORS["highlight"])
    info.append("Dimensions: ", style=COLORS["dim"])
    width, height = result.get("width"), result.get("height")
    dims = f"{width}x{height}" if width and height else "unknown"
    info.append(f"{dims}\n", style=COLORS["info"])
    info.append("Size: ", style=COLORS["dim"])
    info.append(_format_size(result.get("bytes", 0)), style=COLORS["info"])

    if output_path:
        info.append("\nSaved to: ", style=COLORS["dim"])
        info.append(os.path.abspath(output_path), style=COLORS["path"])

    panel = Panel(
        info,
        title="[bold green]Screenshot Captured Successfully",
        border_style=COLORS["success"],
        padding=(1, 2)
    )

    console.print(panel)


def print_resize_result(source_path: str, result_path: str) -> None:
    """
    Format and print the outcome of a resize command.

    Args:
        source_path: File given to the command
        result_path: File returned by the command
    """
    info = Text()
    info.append("Source: ", style=COLORS["dim"])
    info.append(f"{source_path}", style=COLORS["path"])
    if os.path.exists(source_path):
        info.append(f" ({_format_size(os.path.getsize(source_path))})", style=COLORS["info"])

    info.append("\nResult: ", style=COLORS["dim"])
    info.append(f"{result_path}", style=COLORS["path"])
    if os.path.exists(result_path):
        info.append(f" ({_format_size(os.path.getsize(result_path))})", style=COLORS["info"])

    if result_path == source_path:
        info.append("\n\nAlready within budget, file left unchanged", style=COLORS["dim"])

    panel = Panel(
        info,
        title="[bold green]Image Fits Budget",
        border_style=COLORS["success"],
        padding=(1, 2)
    )

    console.print(panel)


def print_error(message: str, title: str = "Error", hint: Optional[str] = None) -> None:
    """
    Format and print error message to the console.

    Args:
        message: Error message
        title: Panel title
        hint: Remediation text shown under the message
    """
    text = Text(message, style=COLORS["error"])
    if hint and hint not in message:
        text.append(f"\n\n{hint}", style=COLORS["warning"])

    panel = Panel(
        text,
        title=f"[bold {COLORS['error']}]{title}",
        border_style=COLORS["error"],
        padding=(1, 2)
    )

    console.print(panel)


def print_warning(message: str, title: str = "Warning") -> None:
    """
    Format and print warning message to the console.

    Args:
        message: Warning message
        title: Panel title
    """
    panel = Panel(
        Text(message, style=COLORS["warning"]),
        title=f"[bold {COLORS['warning']}]{title}",
        border_style=COLORS["warning"],
        padding=(1, 2)
    )

    console.print(panel)


def print_info(message: str, title: str = "Info") -> None:
    """
    Format and print info message to the console.

    Args:
        message: Info message
        title: Panel title
    """
    panel = Panel(
        Text(message, style=COLORS["info"]),
        title=f"[bold {COLORS['info']}]{title}",
        border_style=COLORS["info"],
        padding=(1, 2)
    )

    console.print(panel)


def print_json(data: Dict[str, Any]) -> None:
    """Print data as JSON (plain when stdout is not a terminal)."""
    console.print_json(data=data)


def print_displays_table(displays: List[Dict[str, int]]) -> None:
    """
    Format and print the display topology as a table.

    Args:
        displays: Display dictionaries with id, x, y, width, height
    """
    table = Table(title="Available Displays")

    table.add_column("Display", style=COLORS["highlight"])
    table.add_column("X", justify="right", style=COLORS["info"])
    table.add_column("Y", justify="right", style=COLORS["info"])
    table.add_column("Width", justify="right", style=COLORS["info"])
    table.add_column("Height", justify="right", style=COLORS["info"])

    for display in displays:
        table.add_row(
            str(display["id"]),
            str(display["x"]),
            str(display["y"]),
            str(display["width"]),
            str(display["height"])
        )

    console.print(table)


def create_progress(description: str = "Processing") -> Progress:
    """
    Create a progress indicator.

    Args:
        description: Progress description

    Returns:
        Progress: Rich progress indicator
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
