#!/usr/bin/env python3
"""
Response Schemas for Quickshot CLI

Pydantic models for the structured JSON the CLI prints with --json.

This module is part of the Presentation Layer and should only depend on
Core Layer components, not on Integration Layer.

Third-party package documentation:
- Pydantic: https://docs.pydantic.dev/

Response Format:
  {"success": True, "data": {"path": "/tmp/quickshot_resized_<hex>.jpg"}}
  # or
  {"success": False, "error": "...", "details": {"kind": "PermissionDenied", "hint": "..."}}
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error response model"""
    success: bool = False
    error: str
    details: Optional[Dict[str, Any]] = None


class SuccessResponse(BaseModel):
    """Success response model"""
    success: bool = True
    data: Dict[str, Any]


def format_cli_response(
    success: bool,
    data: Optional[Dict[str, Any]] = None,
    error: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Format a standardized CLI response.

    Args:
        success: Whether the operation was successful
        data: Response data (for successful operations)
        error: Error message (for failed operations)
        details: Extra error fields such as kind and hint

    Returns:
        Dict[str, Any]: Formatted response
    """
    if success and data is not None:
        return SuccessResponse(data=data).model_dump()
    elif not success and error is not None:
        response = ErrorResponse(error=error, details=details).model_dump()
        if response.get('details') is None:
            del response['details']
        return response
    else:
        return {"success": success}


def error_details(result: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Pull kind/hint out of a core error dictionary."""
    details = {key: result[key] for key in ("kind", "hint") if result.get(key)}
    return details or None
