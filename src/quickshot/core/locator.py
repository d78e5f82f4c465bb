"""
Display/Window Locator

Decides which physical display a window occupies by testing its top-left
origin against each display's bounds. Selection always ends with a usable id:
when nothing contains the origin the primary display is used.

Sample input:
- locate_display(WindowBounds(2000, 100, 800, 600),
                 [DisplayInfo(1, 0, 0, 1920, 1080)])

Expected output:
- 1 (primary fallback, the origin lies outside every display)
"""

from typing import Callable, List, Optional

from loguru import logger

from quickshot.core.constants import PRIMARY_DISPLAY_ID
from quickshot.core.types import DisplayInfo, WindowBounds


def find_display(bounds: WindowBounds, displays: List[DisplayInfo]) -> Optional[DisplayInfo]:
    """First display whose bounds contain the window origin, or None."""
    for display in displays:
        if display.contains(bounds.x, bounds.y):
            return display
    return None


def primary_display(displays: List[DisplayInfo], primary_id: int = PRIMARY_DISPLAY_ID) -> Optional[DisplayInfo]:
    for display in displays:
        if display.id == primary_id:
            return display
    return displays[0] if displays else None


def locate_display(
    bounds: WindowBounds,
    displays: List[DisplayInfo],
    primary_id: int = PRIMARY_DISPLAY_ID,
) -> int:
    """
    Pick the display id for a window.

    Args:
        bounds: On-screen bounds of the reference window
        displays: Display topology snapshot
        primary_id: Id returned when no display contains the origin

    Returns:
        int: id of the containing display, or primary_id
    """
    display = find_display(bounds, displays)
    if display is None:
        logger.info(
            f"Window origin ({bounds.x}, {bounds.y}) not on any display, "
            f"using primary display {primary_id}"
        )
        return primary_id

    logger.info(f"Window origin ({bounds.x}, {bounds.y}) is on display {display.id}")
    return display.id


def locate(
    bounds: WindowBounds,
    enumerate_displays: Callable[[], List[DisplayInfo]],
    primary_id: int = PRIMARY_DISPLAY_ID,
) -> int:
    """
    Enumerate displays and locate the window.

    Enumeration failures (CaptureUnavailable) propagate to the caller.
    """
    return locate_display(bounds, enumerate_displays(), primary_id)
