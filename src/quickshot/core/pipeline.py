#!/usr/bin/env python3
"""
Capture Pipeline and Delivery

This module wires the stages together: capture a raw image, fit it to the
byte budget, and deliver it as base64. Every intermediate file is owned by an
ArtifactManager scoped to the request, so nothing is left in the temp
directory whichever branch runs or fails.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- capture_screenshot(WholeDisplay(1), load_config())
- resize_image("/Users/me/Desktop/big.png", 4_500_000, load_config())

Expected output:
- {"content": [{"type": "image", "data": "<base64>", "mimeType": "image/jpeg"}],
   "width": 3118, "height": 2338, "bytes": 4200311}
- "/tmp/quickshot_resized_<hex>.jpg"
"""

import asyncio
import base64
import time
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Optional, Tuple

from loguru import logger

from quickshot.core.artifacts import ArtifactManager
from quickshot.core.capture import CaptureBackend, get_capture_backend
from quickshot.core.codecs import EncoderBackend, get_encoder_backend
from quickshot.core.config import PipelineConfig
from quickshot.core.constants import MIME_TYPES
from quickshot.core.errors import ArtifactNotFound, QuickshotError
from quickshot.core.image_processing import (
    DEFAULT_RESIZE_SETTINGS,
    ResizeSettings,
    resize_to_budget,
)
from quickshot.core.mss import get_displays
from quickshot.core.types import CaptureTarget, DisplayInfo, ImageArtifact
from quickshot.core.utils import format_error_response, validate_image_path


def encode_artifact(artifact: ImageArtifact) -> str:
    """Read an artifact and return its bytes as standard base64."""
    try:
        with open(artifact.path, "rb") as f:
            data = f.read()
    except FileNotFoundError:
        raise ArtifactNotFound(f"File not found: {artifact.path}")
    return base64.b64encode(data).decode("utf-8")


def _capture_to_payload(
    target: CaptureTarget,
    config: PipelineConfig,
    capture_backend: Optional[CaptureBackend],
    encoder: Optional[EncoderBackend],
    settings: ResizeSettings,
) -> Tuple[str, ImageArtifact]:
    capture_backend = capture_backend or get_capture_backend(config.backend)
    encoder = encoder or get_encoder_backend(config.backend)

    start_time = time.time()
    logger.info(
        f"Starting screenshot capture of {target} with {capture_backend.name} backend, "
        f"budget {config.target_size_bytes} bytes"
    )

    with ArtifactManager(config.temp_dir) as artifacts:
        raw = capture_backend.capture(target, artifacts)
        final = resize_to_budget(raw, config.target_size_bytes, encoder, artifacts, settings)
        if final.path != raw.path:
            artifacts.release(raw.path)
        payload = encode_artifact(final)

    logger.info(f"Total screenshot process took {time.time() - start_time:.3f}s")
    return payload, final


def capture_and_encode(
    target: CaptureTarget,
    config: PipelineConfig,
    capture_backend: Optional[CaptureBackend] = None,
    encoder: Optional[EncoderBackend] = None,
    settings: ResizeSettings = DEFAULT_RESIZE_SETTINGS,
) -> str:
    """
    Capture, fit to budget and return the image as base64.

    Raises:
        QuickshotError: any pipeline failure, after temporary files are removed
    """
    payload, _ = _capture_to_payload(target, config, capture_backend, encoder, settings)
    return payload


def capture_screenshot(
    target: CaptureTarget,
    config: PipelineConfig,
    capture_backend: Optional[CaptureBackend] = None,
    encoder: Optional[EncoderBackend] = None,
    settings: ResizeSettings = DEFAULT_RESIZE_SETTINGS,
) -> Dict[str, Any]:
    """
    Capture command entry point.

    Returns:
        dict: Response containing:
            - content: List with image object (type, base64, MIME type)
            - width, height, bytes: metadata of the delivered image
            - On error: error message, kind and optional remediation hint
    """
    try:
        payload, final = _capture_to_payload(target, config, capture_backend, encoder, settings)
    except QuickshotError as e:
        logger.error(f"Screenshot failed: {str(e)}")
        return format_error_response(e)

    return {
        "content": [
            {
                "type": "image",
                "data": payload,
                "mimeType": MIME_TYPES.get(final.format, "image/png"),
            }
        ],
        "width": final.width,
        "height": final.height,
        "bytes": final.byte_length,
    }


async def capture_screenshot_async(
    target: CaptureTarget,
    config: PipelineConfig,
    capture_backend: Optional[CaptureBackend] = None,
    encoder: Optional[EncoderBackend] = None,
    settings: ResizeSettings = DEFAULT_RESIZE_SETTINGS,
) -> Dict[str, Any]:
    """Run capture_screenshot on a worker thread; it cannot be cancelled midway."""
    return await asyncio.to_thread(
        capture_screenshot, target, config, capture_backend, encoder, settings
    )


def resize_image(
    file_path: str,
    target_bytes: int,
    config: PipelineConfig,
    encoder: Optional[EncoderBackend] = None,
    settings: ResizeSettings = DEFAULT_RESIZE_SETTINGS,
) -> str:
    """
    Standalone resize command.

    Returns file_path itself when the file already fits; otherwise the path
    of a new JPEG in the temp directory, which the caller then owns.

    Raises:
        InvalidInput, ArtifactNotFound, EncodeFailed
    """
    validate_image_path(file_path)
    encoder = encoder or get_encoder_backend(config.backend)

    with ArtifactManager(config.temp_dir) as artifacts:
        result = resize_to_budget(
            ImageArtifact.from_path(file_path), target_bytes, encoder, artifacts, settings
        )
        if result.path != file_path:
            artifacts.detach(result.path)
    return result.path


def list_displays(enumerate_displays: Callable[[], List[DisplayInfo]] = get_displays) -> List[Dict[str, int]]:
    """Display topology snapshot as plain dictionaries."""
    return [asdict(display) for display in enumerate_displays()]
