#!/usr/bin/env python3
"""
Temporary Artifact Manager

This module allocates and cleans up the temporary files that carry image bytes
between capture, resize and delivery. Every path it hands out is unique per
call, so concurrent pipeline invocations never share a filename.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- with ArtifactManager() as artifacts:
      raw_path = artifacts.allocate("raw", "png")

Expected output:
- /tmp/quickshot_raw_3f2a...c1.png, deleted when the block exits
"""

import os
import tempfile
import uuid
from typing import List, Optional

from loguru import logger

from quickshot.core.constants import TEMP_FILE_PREFIX


def remove_file_quietly(path: str) -> bool:
    """
    Delete a file, logging instead of raising on failure.

    Returns:
        bool: True if the file is gone afterwards
    """
    try:
        os.remove(path)
        logger.debug(f"Removed temporary file {path}")
        return True
    except FileNotFoundError:
        return True
    except OSError as e:
        logger.warning(f"Failed to remove temporary file {path}: {str(e)}")
        return False


class ArtifactManager:
    """Scoped owner of the temporary files created for one request."""

    def __init__(self, temp_dir: Optional[str] = None, prefix: str = TEMP_FILE_PREFIX):
        self.temp_dir = temp_dir or tempfile.gettempdir()
        self.prefix = prefix
        self._owned: List[str] = []

    def __enter__(self) -> "ArtifactManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    @property
    def owned(self) -> List[str]:
        return list(self._owned)

    def allocate(self, stem: str, extension: str) -> str:
        """
        Reserve a collision-resistant path in the temp directory.

        The file itself is not created; the producer writes it.
        """
        os.makedirs(self.temp_dir, exist_ok=True)
        filename = f"{self.prefix}_{stem}_{uuid.uuid4().hex}.{extension.lstrip('.')}"
        path = os.path.join(self.temp_dir, filename)
        self._owned.append(path)
        return path

    def release(self, path: str) -> None:
        """Delete one owned file now instead of at cleanup."""
        if path in self._owned:
            self._owned.remove(path)
            remove_file_quietly(path)

    def detach(self, path: str) -> str:
        """Hand an owned file over to the caller; it survives cleanup."""
        if path in self._owned:
            self._owned.remove(path)
        return path

    def cleanup(self) -> None:
        """Best-effort delete of every file still owned."""
        while self._owned:
            remove_file_quietly(self._owned.pop())
