"""Arbitrary-angle rotation onto an expanded canvas."""

from __future__ import annotations

import logging
import math

from PIL import Image

from .. import config
from ..errors import RotationError

_LOGGER = logging.getLogger(__name__)

# Quarter turns are done with lossless transposes.  Keys are clockwise degrees.
_QUARTER_TURNS: dict[int, Image.Transpose] = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}


def rotated_bounds(size: tuple[float, float], angle: float) -> tuple[float, float]:
    """Return the axis-aligned bounding box of *size* rotated by *angle* radians."""

    width, height = float(size[0]), float(size[1])
    cos_a = abs(math.cos(angle))
    sin_a = abs(math.sin(angle))
    return (width * cos_a + height * sin_a, width * sin_a + height * cos_a)


def _clockwise_degrees(angle: float) -> float:
    degrees = math.degrees(angle) % 360.0
    nearest = round(degrees)
    if abs(degrees - nearest) < 1e-7:
        degrees = float(nearest % 360)
    return degrees


def rotate_image(
    image: Image.Image,
    angle: float,
    max_pixels: int = config.MAX_ROTATED_PIXELS,
) -> Image.Image:
    """Return a new image rotated by *angle* radians, clockwise on screen.

    The canvas grows to the rotated content's bounding box so no corner is
    clipped. Uncovered areas are zero-filled, which is fully transparent for
    modes with an alpha channel. The input's mode is preserved.

    Raises
    ------
    RotationError
        If the expanded canvas would be empty, larger than *max_pixels*, or
        Pillow fails to allocate it.
    """

    if not math.isfinite(angle):
        raise RotationError(f"Cannot rotate by non-finite angle {angle!r}")

    degrees = _clockwise_degrees(angle)
    if degrees == 0.0:
        return image.copy()

    width, height = rotated_bounds(image.size, angle)
    out_w = math.ceil(width - 1e-6)
    out_h = math.ceil(height - 1e-6)
    if out_w <= 0 or out_h <= 0:
        raise RotationError(f"Rotated surface would be empty ({out_w}x{out_h})")
    if out_w * out_h > max_pixels:
        raise RotationError(
            f"Rotated surface {out_w}x{out_h} exceeds the limit of {max_pixels} pixels"
        )

    try:
        quarter = _QUARTER_TURNS.get(int(degrees)) if degrees.is_integer() else None
        if quarter is not None:
            rotated = image.transpose(quarter)
        else:
            # Pillow rotates counter-clockwise for positive angles.
            rotated = image.rotate(
                -degrees,
                resample=Image.Resampling.BICUBIC,
                expand=True,
            )
    except (MemoryError, ValueError, OSError) as exc:
        raise RotationError(f"Failed to allocate rotated surface: {exc}") from exc

    _LOGGER.debug(
        "Rotated %sx%s by %.3f deg to %sx%s", image.width, image.height, degrees, *rotated.size
    )
    return rotated
