"""
Coordinate conversion between view space and image-pixel space.

## Coordinate Systems

**View space**: layout units of the on-screen viewport. The image is laid out
scale-to-fit inside the viewport (its *displayed extent*), then the session's
``scale`` and ``translation`` are applied about the viewport centre. The mask
window is a square of side ``2 × radius`` pinned to the viewport centre.

**Image-pixel space**: native pixels of the bitmap being cropped. The bitmap's
centre always corresponds to the displayed image's centre, including after a
rotation about that centre with an expanded canvas.

All functions here are pure. The only failure mode is asking for a conversion
before the viewport has been measured, which raises
:class:`~iCrop.errors.LayoutNotReadyError`.
"""

from __future__ import annotations

import math
from typing import Optional

from ..domain.models import ViewportSize
from ..errors import LayoutNotReadyError

Rect = tuple[float, float, float, float]


def require_layout(viewport_size: Optional[ViewportSize]) -> ViewportSize:
    """Return *viewport_size* or raise when layout has not happened yet."""

    if viewport_size is None or not viewport_size.is_valid:
        raise LayoutNotReadyError(
            f"Viewport size is not known yet (got {viewport_size!r}); defer until layout"
        )
    return viewport_size


def _require_image_size(image_size: tuple[float, float]) -> tuple[float, float]:
    width, height = float(image_size[0]), float(image_size[1])
    if not (width > 0 and height > 0 and math.isfinite(width) and math.isfinite(height)):
        raise ValueError(f"image size must be positive, got {image_size!r}")
    return width, height


def fit_ratio(image_size: tuple[float, float], viewport_size: ViewportSize) -> float:
    """Return the uniform factor that fits *image_size* inside the viewport."""

    viewport = require_layout(viewport_size)
    width, height = _require_image_size(image_size)
    return min(viewport.width / width, viewport.height / height)


def displayed_extent(
    image_size: tuple[float, float], viewport_size: ViewportSize
) -> tuple[float, float]:
    """Return the scale-to-fit size of the image inside the viewport.

    Parameters
    ----------
    image_size:
        Upright ``(width, height)`` of the source bitmap in pixels.
    viewport_size:
        Measured viewport the image is laid out in.

    Returns
    -------
    tuple[float, float]
        Displayed ``(width, height)`` in view units. The limiting dimension
        matches the viewport exactly.
    """

    viewport = require_layout(viewport_size)
    width, height = _require_image_size(image_size)
    ratio = fit_ratio((width, height), viewport)
    # Snap the limiting axis so no rounding error leaks past the viewport edge.
    if viewport.width / width <= viewport.height / height:
        return (float(viewport.width), height * ratio)
    return (width * ratio, float(viewport.height))


def image_pixels_per_view_unit(
    image_size: tuple[float, float], viewport_size: ViewportSize
) -> float:
    """Return how many native pixels one displayed view unit covers."""

    return 1.0 / fit_ratio(image_size, viewport_size)


def mask_window_in_view(
    translation: tuple[float, float], scale: float, radius: float
) -> Rect:
    """Return the mask window relative to the displayed image's centre.

    The window is expressed in *unscaled* display units, i.e. the frame of the
    image at scale 1. Panning the image by ``translation`` moves the window by
    ``-translation`` relative to the image, and zooming by ``scale`` shrinks it
    by the same factor.

    Returns
    -------
    tuple[float, float, float, float]
        ``(left, top, right, bottom)`` with the image centre at ``(0, 0)``.
    """

    safe_scale = max(float(scale), 1e-9)
    tx, ty = translation
    cx = -float(tx) / safe_scale
    cy = -float(ty) / safe_scale
    half = float(radius) / safe_scale
    return (cx - half, cy - half, cx + half, cy + half)


def view_rect_to_pixels(
    rect: Rect, pixels_per_unit: float, bitmap_size: tuple[int, int]
) -> Rect:
    """Map a centre-relative view rectangle onto *bitmap_size* pixel coordinates.

    The result is not rounded or clamped; see :func:`iCrop.core.crop.crop_rect`.
    """

    left, top, right, bottom = rect
    centre_x = bitmap_size[0] * 0.5
    centre_y = bitmap_size[1] * 0.5
    return (
        centre_x + left * pixels_per_unit,
        centre_y + top * pixels_per_unit,
        centre_x + right * pixels_per_unit,
        centre_y + bottom * pixels_per_unit,
    )


def rect_inside_extent(rect: Rect, extent: tuple[float, float], tolerance: float = 1e-6) -> bool:
    """Return ``True`` when a centre-relative *rect* lies within *extent*."""

    half_w = extent[0] * 0.5 + tolerance
    half_h = extent[1] * 0.5 + tolerance
    left, top, right, bottom = rect
    return left >= -half_w and right <= half_w and top >= -half_h and bottom <= half_h
