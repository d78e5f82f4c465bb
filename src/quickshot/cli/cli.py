#!/usr/bin/env python3
"""
Command Line Interface for Quickshot

This module provides a CLI for budget-constrained screen capture using Typer
and Rich: capture a display or window, shrink an existing image to a byte
budget, and inspect the display topology.

This module is part of the Presentation Layer and should only depend on
Core Layer components, not on Integration Layer.

Sample input:
- quickshot screenshot --display 2 --budget 2000000 -o shot.jpg
- quickshot resize ~/Desktop/big.png --budget 4500000
- quickshot --json tools displays

Expected output:
- Formatted console output of operation results
- Files saved to disk
- Structured JSON output for machine consumption
"""

import base64
import sys
from dataclasses import replace
from typing import Any, Dict, Optional

import typer
from loguru import logger

from quickshot import __version__
from quickshot.core.config import load_config, get_instance_name
from quickshot.core.capture import open_capture_settings
from quickshot.core.errors import InvalidInput, QuickshotError
from quickshot.core.pipeline import capture_screenshot, list_displays, resize_image
from quickshot.core.utils import build_target
from quickshot.cli.formatters import (
    print_screenshot_result,
    print_resize_result,
    print_displays_table,
    print_error,
    print_info,
    print_json,
    create_progress
)
from quickshot.cli.validators import (
    validate_budget_option,
    validate_bounds_option,
    validate_display_option,
    validate_backend_option,
    validate_file_exists,
    validate_output_path,
    validate_json_output
)
from quickshot.cli.schemas import format_cli_response, error_details


# Initialize typer app with command groups
app = typer.Typer(
    help="Quickshot: screen capture that fits a byte budget",
    rich_markup_mode="rich",
    add_completion=False
)

tools_app = typer.Typer(help="Utility tools", rich_markup_mode="rich")
app.add_typer(tools_app, name="tools", help="Utility tools")


def _fail(ctx: typer.Context, message: str, details: Optional[Dict[str, Any]] = None) -> None:
    """Report an error in the active output mode and exit with code 1."""
    if ctx.obj.get("json_output", False):
        print_json(format_cli_response(False, error=message, details=details))
    else:
        print_error(message, hint=(details or {}).get("hint"))
    sys.exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output results as JSON",
        callback=validate_json_output
    ),
    backend: Optional[str] = typer.Option(
        None,
        "--backend",
        help="Capture/encode backend: auto, external or inprocess",
        callback=validate_backend_option
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Show pipeline logs on stderr"
    ),
):
    """
    Quickshot - Captures screenshots that fit a byte budget

    Images over budget are re-encoded or scaled down with the cheapest
    transform expected to fit.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format="<level>{level}: {message}</level>",
        level="INFO" if verbose else "WARNING",
        colorize=True
    )

    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json_output

    try:
        config = load_config()
    except InvalidInput as e:
        _fail(ctx, f"Invalid configuration: {e}")
    if backend is not None:
        config = replace(config, backend=backend)
    ctx.obj["config"] = config


@app.command("screenshot")
def screenshot_command(
    ctx: typer.Context,
    display: Optional[int] = typer.Option(
        None,
        "--display", "-d",
        help="Display id to capture (1 is the main display)",
        callback=validate_display_option
    ),
    window: bool = typer.Option(
        False,
        "--window", "-w",
        help="Pick a window interactively"
    ),
    bounds: Optional[str] = typer.Option(
        None,
        "--bounds", "-b",
        help="Capture the display holding a window at 'x,y,width,height'",
        callback=validate_bounds_option
    ),
    budget: Optional[int] = typer.Option(
        None,
        "--budget",
        help="Maximum output size in bytes (default from QUICKSHOT_TARGET_SIZE_BYTES)",
        callback=validate_budget_option
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output", "-o",
        help="Write the image to this file",
        callback=validate_output_path
    ),
):
    """
    Take a screenshot that fits the byte budget.
    """
    json_output = ctx.obj.get("json_output", False)

    try:
        target = build_target(display=display, window=window, bounds=bounds)
        config = ctx.obj["config"].with_budget(budget)
    except InvalidInput as e:
        _fail(ctx, str(e), {"kind": e.kind})

    if not json_output:
        with create_progress("Taking screenshot") as progress:
            progress.add_task("Capturing screen...", total=None)
            result = capture_screenshot(target, config)
    else:
        result = capture_screenshot(target, config)

    if "error" in result:
        _fail(ctx, result["error"], error_details(result))

    if output:
        try:
            with open(output, "wb") as f:
                f.write(base64.b64decode(result["content"][0]["data"]))
        except OSError as e:
            logger.error(f"Failed to write {output}: {str(e)}")
            _fail(ctx, f"Failed to write {output}: {str(e)}")

    if json_output:
        # Exclude large base64 content
        data = {key: value for key, value in result.items() if key != "content"}
        data["mimeType"] = result["content"][0]["mimeType"]
        if output:
            data["file"] = output
        print_json(format_cli_response(True, data=data))
    else:
        print_screenshot_result(result, output)


@app.command("resize")
def resize_command(
    ctx: typer.Context,
    image_path: str = typer.Argument(
        ...,
        help="Path to the image file to fit",
        callback=validate_file_exists
    ),
    budget: Optional[int] = typer.Option(
        None,
        "--budget",
        help="Maximum output size in bytes (default from QUICKSHOT_TARGET_SIZE_BYTES)",
        callback=validate_budget_option
    ),
):
    """
    Fit an existing image to the byte budget and print the resulting path.
    """
    json_output = ctx.obj.get("json_output", False)
    config = ctx.obj["config"]
    target_bytes = budget if budget is not None else config.target_size_bytes

    try:
        result_path = resize_image(image_path, target_bytes, config)
    except QuickshotError as e:
        logger.error(f"Resize command failed: {str(e)}")
        _fail(ctx, str(e), {"kind": e.kind})

    if json_output:
        print_json(format_cli_response(True, data={"path": result_path, "source": image_path}))
    else:
        print_resize_result(image_path, result_path)


@tools_app.command("displays")
def show_displays(ctx: typer.Context):
    """
    Show connected displays and their geometry.
    """
    try:
        displays = list_displays()
    except QuickshotError as e:
        _fail(ctx, str(e), {"kind": e.kind})

    if ctx.obj.get("json_output", False):
        print_json(format_cli_response(True, data={"displays": displays}))
    else:
        print_displays_table(displays)


@tools_app.command("settings")
def open_settings(ctx: typer.Context):
    """
    Open the macOS screen recording privacy settings.
    """
    try:
        open_capture_settings()
    except QuickshotError as e:
        _fail(ctx, str(e), {"kind": e.kind})

    if ctx.obj.get("json_output", False):
        print_json(format_cli_response(True, data={"opened": True}))
    else:
        print_info("Opened screen recording settings")


@tools_app.command("version")
def show_version(ctx: typer.Context):
    """
    Show version information.
    """
    config = ctx.obj["config"]
    version_info = {
        "name": "quickshot",
        "version": __version__,
        "backend": config.backend,
        "instance": get_instance_name(config),
    }

    if ctx.obj.get("json_output", False):
        print_json(format_cli_response(True, data=version_info))
    else:
        print_info(
            f"Name: {version_info['name']}\n"
            f"Version: {version_info['version']}\n"
            f"Backend: {version_info['backend']}\n"
            f"Instance: {version_info['instance'] or '(default)'}"
        )


if __name__ == "__main__":
    app()
