#!/usr/bin/env python3
"""
Size-Constrained Resizer

This module shrinks a captured image until it fits a byte budget, applying
the cheapest transform that is expected to suffice:

1. PASS_THROUGH: the file already fits, return it untouched
2. COMPRESS_ONLY: small overshoot (< 2x budget), re-encode as JPEG at 85
3. RESIZE: scale both dimensions by an estimated factor, then JPEG at 85

The resize branch is a single estimate, not a search: an overshoot after it is
returned as best effort so the latency of an interactive capture stays bounded.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- 4000x3000 PNG of 36,000,000 bytes, target_bytes=4,500,000

Expected output:
- choose_transform -> Transform.RESIZE (36M >= 2 * 4.5M)
- scale = sqrt((4.5M / 0.5) / 12M) * 0.9 ~= 0.779
- JPEG of 3118x2338
"""

import math
import os
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from loguru import logger

from quickshot.core.artifacts import ArtifactManager
from quickshot.core.codecs import EncoderBackend
from quickshot.core.config import validate_target_size
from quickshot.core.constants import FORMAT_JPEG, RESIZE_SETTINGS
from quickshot.core.errors import ArtifactNotFound
from quickshot.core.types import ImageArtifact, ResizePlan


class Transform(Enum):
    PASS_THROUGH = "pass_through"
    COMPRESS_ONLY = "compress_only"
    RESIZE = "resize"


@dataclass(frozen=True)
class ResizeSettings:
    """Tunable estimates for the resize decision."""

    bytes_per_pixel_estimate: float = RESIZE_SETTINGS["BYTES_PER_PIXEL_ESTIMATE"]
    safety_margin: float = RESIZE_SETTINGS["SAFETY_MARGIN"]
    min_scale_factor: float = RESIZE_SETTINGS["MIN_SCALE_FACTOR"]
    max_scale_factor: float = RESIZE_SETTINGS["MAX_SCALE_FACTOR"]
    quality: int = RESIZE_SETTINGS["COMPRESS_QUALITY"]
    compress_only_ratio: float = RESIZE_SETTINGS["COMPRESS_ONLY_RATIO"]


DEFAULT_RESIZE_SETTINGS = ResizeSettings()


def _mb(size: int) -> str:
    return f"{size} bytes ({size / 1_048_576:.2f} MB)"


def choose_transform(
    byte_length: int,
    target_bytes: int,
    settings: ResizeSettings = DEFAULT_RESIZE_SETTINGS,
) -> Transform:
    """
    Decide which transform the first pass should apply.

    Args:
        byte_length: Current size of the image file
        target_bytes: Byte budget

    Returns:
        Transform: PASS_THROUGH, COMPRESS_ONLY or RESIZE
    """
    if byte_length <= target_bytes:
        return Transform.PASS_THROUGH
    if byte_length < target_bytes * settings.compress_only_ratio:
        return Transform.COMPRESS_ONLY
    return Transform.RESIZE


def compute_scale_factor(
    original_pixels: int,
    target_bytes: int,
    settings: ResizeSettings = DEFAULT_RESIZE_SETTINGS,
) -> float:
    """
    Estimate the linear scale that brings the encoded size under budget.

    target_pixels = target_bytes / bytes_per_pixel_estimate
    scale = sqrt(target_pixels / original_pixels) * safety_margin,
    clamped to [min_scale_factor, max_scale_factor].
    """
    if original_pixels <= 0:
        return settings.max_scale_factor

    target_pixels = target_bytes / settings.bytes_per_pixel_estimate
    # Square root because the scale applies to both axes
    scale = math.sqrt(target_pixels / original_pixels) * settings.safety_margin
    return min(settings.max_scale_factor, max(settings.min_scale_factor, scale))


def scaled_dimensions(width: int, height: int, scale_factor: float) -> Tuple[int, int]:
    """Apply a uniform scale, never going below 1 pixel per axis."""
    new_width = max(1, int(round(width * scale_factor)))
    new_height = max(1, int(round(height * scale_factor)))
    return new_width, new_height


def plan_resize(
    width: int,
    height: int,
    target_bytes: int,
    settings: ResizeSettings = DEFAULT_RESIZE_SETTINGS,
) -> ResizePlan:
    scale_factor = compute_scale_factor(width * height, target_bytes, settings)
    new_width, new_height = scaled_dimensions(width, height, scale_factor)
    return ResizePlan(
        scale_factor=scale_factor,
        quality=settings.quality,
        width=new_width,
        height=new_height,
    )


def resize_to_budget(
    artifact: ImageArtifact,
    target_bytes: int,
    encoder: EncoderBackend,
    artifacts: ArtifactManager,
    settings: ResizeSettings = DEFAULT_RESIZE_SETTINGS,
) -> ImageArtifact:
    """
    Return an artifact that fits target_bytes, or the best single-pass effort.

    New files are allocated from `artifacts`; the input file is never deleted
    here, since its owner decides (it may be a caller's own file).

    Args:
        artifact: Input image
        target_bytes: Byte budget, strictly positive
        encoder: Backend used for re-encoding and dimension probing
        artifacts: Owner of any file this call creates
        settings: Resize estimates

    Returns:
        ImageArtifact: the input itself on pass-through, otherwise a JPEG

    Raises:
        InvalidInput: non-positive budget
        ArtifactNotFound: input file missing
        EncodeFailed: decode or encode failed
    """
    target_bytes = validate_target_size(target_bytes)
    if not os.path.isfile(artifact.path):
        raise ArtifactNotFound(f"File not found: {artifact.path}")

    start_time = time.time()
    logger.info(f"Starting image resize for: {artifact.path}")

    # Sizes are always read fresh from disk
    current = ImageArtifact.from_path(
        artifact.path, width=artifact.width, height=artifact.height, format=artifact.format
    )
    logger.info(f"Original file size: {_mb(current.byte_length)}")

    transform = choose_transform(current.byte_length, target_bytes, settings)

    if transform is Transform.PASS_THROUGH:
        logger.info("File already under target size, skipping compression")
        return current

    if transform is Transform.COMPRESS_ONLY:
        logger.info(f"Using compression only with quality: {settings.quality}")
        compressed = _encode(current, encoder, artifacts, settings.quality)
        logger.info(f"Compressed size: {_mb(compressed.byte_length)}")

        if compressed.byte_length <= target_bytes:
            logger.info("Compression successful, under target size")
            return compressed

        artifacts.release(compressed.path)
        logger.info("Simple compression not sufficient, proceeding to resize")

    width, height = current.width, current.height
    if width is None or height is None:
        width, height = encoder.probe_dimensions(current.path)
    logger.info(f"Original dimensions: {width}x{height}")

    plan = plan_resize(width, height, target_bytes, settings)
    logger.info(
        f"Using scale factor {plan.scale_factor:.2f}, new dimensions: {plan.width}x{plan.height}"
    )

    resized = _encode(current, encoder, artifacts, plan.quality, size=(plan.width, plan.height))
    logger.info(f"Final size: {_mb(resized.byte_length)}")
    if resized.byte_length > target_bytes:
        logger.warning(
            f"Resized image still exceeds target ({_mb(resized.byte_length)} > {_mb(target_bytes)}), "
            "returning best effort"
        )

    logger.info(f"Total image processing took {time.time() - start_time:.3f}s")
    return resized


def _encode(
    source: ImageArtifact,
    encoder: EncoderBackend,
    artifacts: ArtifactManager,
    quality: int,
    size: Optional[Tuple[int, int]] = None,
) -> ImageArtifact:
    output_path = artifacts.allocate("resized", "jpg")
    encoder.encode(source.path, output_path, quality, size=size)
    width, height = size if size is not None else (source.width, source.height)
    return ImageArtifact.from_path(output_path, width=width, height=height, format=FORMAT_JPEG)


if __name__ == "__main__":
    """Validate the resize decision against the documented scenarios"""
    import sys

    all_validation_failures = []
    total_tests = 0

    # Test 1: 36 MB capture, 4.5 MB budget goes straight to resize
    total_tests += 1
    if choose_transform(36_000_000, 4_500_000) is not Transform.RESIZE:
        all_validation_failures.append("36MB/4.5MB should resize")

    # Test 2: 5 MB capture, 4.5 MB budget tries compression only
    total_tests += 1
    if choose_transform(5_000_000, 4_500_000) is not Transform.COMPRESS_ONLY:
        all_validation_failures.append("5MB/4.5MB should compress only")

    # Test 3: 4000x3000 scales to roughly 3118x2338
    total_tests += 1
    plan = plan_resize(4000, 3000, 4_500_000)
    if (plan.width, plan.height) != (3118, 2338):
        all_validation_failures.append(f"Expected 3118x2338, got {plan.width}x{plan.height}")

    if all_validation_failures:
        print(f"❌ VALIDATION FAILED - {len(all_validation_failures)} of {total_tests} tests failed:")
        for failure in all_validation_failures:
            print(f"  - {failure}")
        sys.exit(1)
    else:
        print(f"✅ VALIDATION PASSED - All {total_tests} tests produced expected results")
        sys.exit(0)
