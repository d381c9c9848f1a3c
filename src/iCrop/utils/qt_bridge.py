"""Conversions between Pillow images and Qt's :class:`QImage`.

Qt front-ends hand their decoded ``QImage`` to a crop session and display the
result; this module is the only place the core touches Qt types.
"""

from __future__ import annotations

import logging
from typing import Optional

from PIL import Image, ImageQt
from PySide6.QtGui import QImage

from ..domain.models import SourceImage

_LOGGER = logging.getLogger(__name__)


def pil_to_qimage(image: Image.Image) -> QImage:
    """Return a detached :class:`QImage` copy of *image*."""

    # ``ImageQt`` keeps a reference to a buffer owned by the Python wrapper;
    # copying detaches the pixels so the result outlives it.
    if image.mode not in ("RGB", "RGBA", "L", "1", "P"):
        image = image.convert("RGBA")
    return QImage(ImageQt.ImageQt(image)).copy()


def qimage_to_pil(image: QImage) -> Optional[Image.Image]:
    """Return a Pillow image for *image*, or ``None`` for a null image."""

    if image.isNull():
        return None
    return ImageQt.fromqimage(image)


def source_image_from_qimage(image: QImage) -> Optional[SourceImage]:
    """Wrap a decoded Qt image as an upright :class:`SourceImage`.

    ``QImageReader`` with auto-transform already applied the EXIF orientation,
    so the orientation is reset to ``1``.
    """

    pixels = qimage_to_pil(image)
    if pixels is None:
        _LOGGER.warning("Cannot build a crop source from a null QImage")
        return None
    return SourceImage(pixels=pixels, orientation=1)
