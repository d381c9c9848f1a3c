"""Helpers for opening source images with Pillow."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Optional
import logging

from PIL import Image, UnidentifiedImageError

from ..domain.models import SourceImage

_LOGGER = logging.getLogger(__name__)


def load_source_image(source: Path) -> Optional[SourceImage]:
    """Return a :class:`SourceImage` for *source*, or ``None`` if it cannot be decoded.

    The pixels are loaded eagerly so the file handle is released, and the EXIF
    orientation is kept alongside them rather than applied, which leaves the
    caller's bitmap untouched until the crop is extracted.
    """

    try:
        with Image.open(source) as img:
            img.load()
            orientation = SourceImage.from_image(img).orientation
            pixels = img.copy()
    except (UnidentifiedImageError, OSError):
        _LOGGER.exception("Pillow failed to load image from %s", source)
        return None
    return SourceImage(pixels=pixels, orientation=orientation)


def source_image_from_bytes(data: bytes) -> Optional[SourceImage]:
    """Return a :class:`SourceImage` decoded from encoded *data*."""

    try:
        with Image.open(BytesIO(data)) as img:
            img.load()
            orientation = SourceImage.from_image(img).orientation
            pixels = img.copy()
    except (UnidentifiedImageError, OSError):
        _LOGGER.exception("Pillow failed to decode image bytes")
        return None
    return SourceImage(pixels=pixels, orientation=orientation)
