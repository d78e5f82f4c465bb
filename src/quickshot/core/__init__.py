"""
Core Layer for Quickshot

This package contains the business logic for budget-constrained screen
capture: platform capture backends, the display locator, encoder backends,
the size-constrained resizer and the temporary artifact manager.

The core layer is designed to be:
1. Independent of UI or integration concerns
2. Fully testable in isolation
3. Explicitly configured (no environment reads outside config.load_config)

Usage:
    from quickshot.core import capture_screenshot, load_config, WholeDisplay
    result = capture_screenshot(WholeDisplay(1), load_config())
"""

# Constants and configuration
from quickshot.core.constants import DEFAULT_TARGET_SIZE_BYTES, RESIZE_SETTINGS
from quickshot.core.config import PipelineConfig, load_config, get_instance_name

# Errors
from quickshot.core.errors import (
    QuickshotError,
    PermissionDenied,
    CaptureUnavailable,
    ArtifactNotFound,
    EncodeFailed,
    InvalidInput,
)

# Data model
from quickshot.core.types import (
    CaptureTarget,
    WholeDisplay,
    InteractiveWindowPick,
    WindowBounds,
    DisplayInfo,
    ImageArtifact,
    ResizePlan,
)

# Pipeline stages
from quickshot.core.artifacts import ArtifactManager
from quickshot.core.locator import locate, locate_display, find_display
from quickshot.core.capture import (
    CaptureBackend,
    ScreencaptureBackend,
    MssCaptureBackend,
    get_capture_backend,
    open_capture_settings,
)
from quickshot.core.codecs import (
    EncoderBackend,
    SipsEncoder,
    PillowEncoder,
    get_encoder_backend,
)
from quickshot.core.image_processing import (
    Transform,
    ResizeSettings,
    choose_transform,
    compute_scale_factor,
    plan_resize,
    resize_to_budget,
)
from quickshot.core.pipeline import (
    encode_artifact,
    capture_and_encode,
    capture_screenshot,
    capture_screenshot_async,
    resize_image,
    list_displays,
)

# Utilities
from quickshot.core.utils import build_target, parse_bounds, format_error_response

__all__ = [
    'DEFAULT_TARGET_SIZE_BYTES',
    'RESIZE_SETTINGS',
    'PipelineConfig',
    'load_config',
    'get_instance_name',

    'QuickshotError',
    'PermissionDenied',
    'CaptureUnavailable',
    'ArtifactNotFound',
    'EncodeFailed',
    'InvalidInput',

    'CaptureTarget',
    'WholeDisplay',
    'InteractiveWindowPick',
    'WindowBounds',
    'DisplayInfo',
    'ImageArtifact',
    'ResizePlan',

    'ArtifactManager',
    'locate',
    'locate_display',
    'find_display',
    'CaptureBackend',
    'ScreencaptureBackend',
    'MssCaptureBackend',
    'get_capture_backend',
    'open_capture_settings',
    'EncoderBackend',
    'SipsEncoder',
    'PillowEncoder',
    'get_encoder_backend',
    'Transform',
    'ResizeSettings',
    'choose_transform',
    'compute_scale_factor',
    'plan_resize',
    'resize_to_budget',
    'encode_artifact',
    'capture_and_encode',
    'capture_screenshot',
    'capture_screenshot_async',
    'resize_image',
    'list_displays',

    'build_target',
    'parse_bounds',
    'format_error_response',
]
