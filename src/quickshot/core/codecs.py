#!/usr/bin/env python3
"""
Encoder/Decoder Backends

This module turns an image file into a compressed JPEG (optionally resized)
and probes image dimensions. Two implementations share one interface:

1. SipsEncoder: shells out to the macOS `sips` converter; pixels never enter
   this process.
2. PillowEncoder: decodes in-process with Pillow. The full image is held in
   memory, so very large captures are bounded by available RAM.

This module is part of the Core Layer and should have no dependencies on
Presentation or Integration layers.

Sample input:
- encoder.encode("/tmp/raw.png", "/tmp/out.jpg", quality=85, size=(3118, 2338))
- encoder.probe_dimensions("/tmp/raw.png")

Expected output:
- /tmp/out.jpg written as a 3118x2338 JPEG
- (4000, 3000)
"""

import os
import platform
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from PIL import Image
from loguru import logger

from quickshot.core.constants import (
    BACKEND_AUTO,
    BACKEND_EXTERNAL,
    BACKEND_INPROCESS,
    SIPS_BIN,
)
from quickshot.core.errors import ArtifactNotFound, EncodeFailed, InvalidInput


def ensure_rgb(img: Image.Image) -> Image.Image:
    """
    Converts image to RGB mode if needed for JPEG compatibility.

    Args:
        img: PIL Image object to convert

    Returns:
        PIL.Image: Image in RGB mode
    """
    if img.mode in ('LA', 'PA') or (img.mode == 'P' and 'transparency' in img.info):
        # Transparent palette and grayscale images take the same white flattening
        img = img.convert('RGBA')

    if img.mode == 'RGBA':
        # Flatten onto white using the alpha channel as mask
        background = Image.new('RGB', img.size, (255, 255, 255))
        background.paste(img, mask=img.split()[3])
        return background
    elif img.mode != 'RGB':
        return img.convert('RGB')
    return img


def _require_file(path: str) -> None:
    if not os.path.isfile(path):
        raise ArtifactNotFound(f"File not found: {path}")


class EncoderBackend(ABC):
    """Quality-parameterized JPEG encoding and dimension probing."""

    name = "encoder"

    @abstractmethod
    def encode(
        self,
        source_path: str,
        target_path: str,
        quality: int,
        size: Optional[Tuple[int, int]] = None,
    ) -> None:
        """
        Write source_path to target_path as JPEG.

        Args:
            source_path: Existing image file
            target_path: Output path (overwritten)
            quality: JPEG quality 0-100
            size: Optional (width, height) to resample to first

        Raises:
            ArtifactNotFound: source_path does not exist
            EncodeFailed: decode, resample or encode failed
        """

    @abstractmethod
    def probe_dimensions(self, path: str) -> Tuple[int, int]:
        """Return (width, height) of an image file."""


class PillowEncoder(EncoderBackend):
    """In-process codec built on Pillow."""

    name = BACKEND_INPROCESS

    def encode(self, source_path, target_path, quality, size=None):
        _require_file(source_path)
        try:
            with Image.open(source_path) as img:
                img.load()
                out = ensure_rgb(img)
                if size is not None and size != out.size:
                    logger.info(
                        f"Resizing image from {out.width}x{out.height} to {size[0]}x{size[1]}"
                    )
                    out = out.resize(size, Image.LANCZOS)
                out.save(target_path, format="JPEG", quality=quality)
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            logger.error(f"Pillow encode of {source_path} failed: {str(e)}")
            raise EncodeFailed(f"Failed to encode {source_path}: {str(e)}")

    def probe_dimensions(self, path):
        _require_file(path)
        try:
            # Image.open reads the header only; pixels load lazily
            with Image.open(path) as img:
                return img.size
        except (OSError, Image.DecompressionBombError) as e:
            raise EncodeFailed(f"Failed to read image dimensions of {path}: {str(e)}")


class SipsEncoder(EncoderBackend):
    """External converter backed by the macOS `sips` tool."""

    name = BACKEND_EXTERNAL

    def __init__(self, binary: str = SIPS_BIN):
        self.binary = binary

    def _run(self, args: List[str]) -> subprocess.CompletedProcess:
        command = [self.binary] + args
        logger.debug(f"Running: {' '.join(command)}")
        try:
            return subprocess.run(command, capture_output=True, text=True)
        except OSError as e:
            raise EncodeFailed(f"Failed to run {self.binary}: {str(e)}")

    def encode(self, source_path, target_path, quality, size=None):
        _require_file(source_path)
        args = ["-s", "format", "jpeg", "-s", "formatOptions", f"{quality}%"]
        if size is not None:
            width, height = size
            args += ["--resampleHeightWidth", str(height), str(width)]
        args += [source_path, "--out", target_path]

        result = self._run(args)
        if result.returncode != 0 or not os.path.isfile(target_path):
            stderr = (result.stderr or "").strip()
            logger.error(f"sips failed with exit code {result.returncode}: {stderr}")
            raise EncodeFailed(
                f"{self.binary} failed to encode {source_path} (exit code {result.returncode})"
                + (f": {stderr}" if stderr else "")
            )

    def probe_dimensions(self, path):
        _require_file(path)
        result = self._run(["-g", "pixelWidth", "-g", "pixelHeight", path])
        if result.returncode != 0:
            raise EncodeFailed(f"{self.binary} could not read dimensions of {path}")
        return parse_sips_dimensions(result.stdout)


def parse_sips_dimensions(output: str) -> Tuple[int, int]:
    """
    Parse `sips -g pixelWidth -g pixelHeight` output.

    Sample input:
        /tmp/raw.png
          pixelWidth: 4000
          pixelHeight: 3000
    """
    values = {}
    for line in output.splitlines():
        key, sep, value = line.strip().partition(":")
        if sep and key in ("pixelWidth", "pixelHeight"):
            try:
                values[key] = int(value.strip())
            except ValueError:
                raise EncodeFailed(f"Invalid sips output line: {line.strip()}")

    if "pixelWidth" not in values or "pixelHeight" not in values:
        raise EncodeFailed("Could not find dimensions in sips output")
    return values["pixelWidth"], values["pixelHeight"]


def get_encoder_backend(name: str = BACKEND_AUTO, system: Optional[str] = None) -> EncoderBackend:
    """
    Select the encoder for a configured backend name.

    "auto" resolves to the external tool on macOS and Pillow elsewhere.
    """
    system = system or platform.system()
    if name == BACKEND_AUTO:
        name = BACKEND_EXTERNAL if system == "Darwin" else BACKEND_INPROCESS

    if name == BACKEND_EXTERNAL:
        return SipsEncoder()
    if name == BACKEND_INPROCESS:
        return PillowEncoder()
    raise InvalidInput(f"Unknown encoder backend: {name}")
