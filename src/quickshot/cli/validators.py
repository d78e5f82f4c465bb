#!/usr/bin/env python3
"""
Validators for Quickshot CLI

This module provides Typer callbacks that validate CLI inputs and turn core
InvalidInput errors into friendly messages.

This module is part of the Presentation Layer and should only depend on
Core Layer components, not on Integration Layer.

Sample input:
- --budget 0
- --bounds 2000,100,800

Expected output:
- Error panel and exit code 1
"""

import os
from typing import Optional

import typer

from quickshot.core.config import validate_backend, validate_target_size
from quickshot.core.errors import InvalidInput
from quickshot.core.utils import parse_bounds
from quickshot.cli.formatters import print_error


def validate_budget_option(ctx: typer.Context, value: Optional[int]) -> Optional[int]:
    """
    Typer callback for validating the byte budget.

    Args:
        ctx: Typer context
        value: Budget in bytes, None to use the configured default

    Returns:
        Optional[int]: Validated budget
    """
    if value is None:
        return None
    try:
        return validate_target_size(value)
    except InvalidInput as e:
        print_error(str(e))
        raise typer.Exit(1)


def validate_bounds_option(ctx: typer.Context, value: Optional[str]) -> Optional[str]:
    """
    Typer callback for validating 'x,y,width,height' window bounds.

    The string is returned unchanged; parsing happens again in build_target.
    """
    if value is None:
        return None
    try:
        parse_bounds(value)
    except InvalidInput as e:
        print_error(f"{e}. Expected 'x,y,width,height'")
        raise typer.Exit(1)
    return value


def validate_display_option(ctx: typer.Context, value: Optional[int]) -> Optional[int]:
    if value is not None and value < 1:
        print_error(f"Display id must be 1 or greater, got {value}")
        raise typer.Exit(1)
    return value


def validate_backend_option(ctx: typer.Context, value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    try:
        return validate_backend(value)
    except InvalidInput as e:
        print_error(str(e))
        raise typer.Exit(1)


def validate_file_exists(ctx: typer.Context, value: str) -> str:
    """
    Typer callback for validating a file exists.

    Args:
        ctx: Typer context
        value: File path from CLI

    Returns:
        str: Validated file path
    """
    if not os.path.exists(value):
        print_error(f"File not found: {value}")
        raise typer.Exit(1)

    if not os.path.isfile(value):
        print_error(f"Not a file: {value}")
        raise typer.Exit(1)

    return value


def validate_output_path(ctx: typer.Context, value: Optional[str]) -> Optional[str]:
    """Ensure the parent directory of an output file exists."""
    if value is None:
        return None

    directory = os.path.dirname(os.path.abspath(value))
    try:
        os.makedirs(directory, exist_ok=True)
        return value
    except OSError as e:
        print_error(f"Cannot create output directory: {directory}. Error: {str(e)}")
        raise typer.Exit(1)


def validate_json_output(ctx: typer.Context, value: bool) -> bool:
    """
    Typer callback for validating JSON output option.

    Args:
        ctx: Typer context
        value: JSON output flag from CLI

    Returns:
        bool: Validated JSON output flag
    """
    # Store in context for other callbacks to access
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = value
    return value
