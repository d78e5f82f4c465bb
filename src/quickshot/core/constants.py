#!/usr/bin/env python3
"""
Constants for Quickshot Core

This module defines the tunable constants used by the capture and resize
pipeline, so every backend and the resizer agree on the same numbers.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- None (module contains only constants)

Expected output:
- None (module contains only constants)
"""

from typing import Dict, Any

# Byte budget used when the caller does not supply one (4.5 MB)
DEFAULT_TARGET_SIZE_BYTES: int = 4_500_000

# Resize settings. The estimates are empirical and kept tunable.
RESIZE_SETTINGS: Dict[str, Any] = {
    "BYTES_PER_PIXEL_ESTIMATE": 0.5,  # JPEG bytes per pixel at quality 85
    "SAFETY_MARGIN": 0.9,  # Multiplier on the estimated scale factor
    "MIN_SCALE_FACTOR": 0.3,  # Never scale below 30% linear dimension
    "MAX_SCALE_FACTOR": 1.0,
    "COMPRESS_QUALITY": 85,  # JPEG quality for both re-encode branches
    "COMPRESS_ONLY_RATIO": 2,  # Overshoot below ratio * budget tries re-encode only
}

# Artifact formats
FORMAT_RAW = "raw"
FORMAT_PNG = "png"
FORMAT_JPEG = "jpeg"

MIME_TYPES: Dict[str, str] = {
    FORMAT_PNG: "image/png",
    FORMAT_JPEG: "image/jpeg",
    FORMAT_RAW: "application/octet-stream",
}

# Prefix for every temporary file the pipeline creates
TEMP_FILE_PREFIX = "quickshot"

# Backend names accepted by configuration
BACKEND_AUTO = "auto"
BACKEND_EXTERNAL = "external"
BACKEND_INPROCESS = "inprocess"
BACKEND_CHOICES = (BACKEND_AUTO, BACKEND_EXTERNAL, BACKEND_INPROCESS)

# External tools
SCREENCAPTURE_BIN = "screencapture"
SIPS_BIN = "sips"
OPEN_BIN = "open"

# Display id used when no display contains the reference window
PRIMARY_DISPLAY_ID = 1

# Remediation text attached to capture permission failures
PERMISSION_HINT = (
    "Screen recording permission is required. Please enable it in "
    "System Preferences > Security & Privacy > Privacy > Screen Recording"
)
SCREEN_CAPTURE_SETTINGS_URL = (
    "x-apple.systempreferences:com.apple.preference.security?Privacy_ScreenCapture"
)

# Environment variables read by quickshot.core.config
ENV_TARGET_SIZE_BYTES = "QUICKSHOT_TARGET_SIZE_BYTES"
ENV_BACKEND = "QUICKSHOT_BACKEND"
ENV_TEMP_DIR = "QUICKSHOT_TEMP_DIR"
ENV_INSTANCE_NAME = "QUICKSHOT_INSTANCE_NAME"


if __name__ == "__main__":
    """Validate module constants"""
    import sys

    all_validation_failures = []
    total_tests = 0

    # Test 1: scale bounds are ordered
    total_tests += 1
    if not (0 < RESIZE_SETTINGS["MIN_SCALE_FACTOR"] <= RESIZE_SETTINGS["MAX_SCALE_FACTOR"] <= 1.0):
        all_validation_failures.append(
            f"Invalid scale range: {RESIZE_SETTINGS['MIN_SCALE_FACTOR']}..{RESIZE_SETTINGS['MAX_SCALE_FACTOR']}"
        )

    # Test 2: quality in range
    total_tests += 1
    if not (1 <= RESIZE_SETTINGS["COMPRESS_QUALITY"] <= 100):
        all_validation_failures.append(f"Invalid quality: {RESIZE_SETTINGS['COMPRESS_QUALITY']}")

    # Test 3: default budget positive
    total_tests += 1
    if DEFAULT_TARGET_SIZE_BYTES <= 0:
        all_validation_failures.append(f"Default budget must be positive, got {DEFAULT_TARGET_SIZE_BYTES}")

    if all_validation_failures:
        print(f"❌ VALIDATION FAILED - {len(all_validation_failures)} of {total_tests} tests failed:")
        for failure in all_validation_failures:
            print(f"  - {failure}")
        sys.exit(1)
    else:
        print(f"✅ VALIDATION PASSED - All {total_tests} tests produced expected results")
        sys.exit(0)
