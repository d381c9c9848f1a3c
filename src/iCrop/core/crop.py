"""Extract the framed region of a bitmap, optionally masked to a circle."""

from __future__ import annotations

import logging
import math
from typing import Optional, Union

import numpy as np
from PIL import Image

from ..domain.models import MaskGeometry, MaskShape, ViewportState
from ..errors import DegenerateCropError
from .geometry import mask_window_in_view, view_rect_to_pixels

_LOGGER = logging.getLogger(__name__)

Fill = Union[int, tuple[int, ...], str]

# Alpha-capable counterpart used when a circular mask needs transparency.
_ALPHA_MODES: dict[str, str] = {
    "RGBA": "RGBA",
    "LA": "LA",
    "PA": "RGBA",
    "RGBa": "RGBA",
    "La": "LA",
    "RGB": "RGBA",
    "L": "LA",
}


def _snapped_window(
    state: ViewportState,
    radius: float,
    pixels_per_unit: float,
    bitmap_size: tuple[int, int],
) -> tuple[int, int, int]:
    """Return the committed mask window as whole-pixel ``(left, top, side)``, unclamped.

    The side is rounded once and shared by both axes so the window stays
    square whatever fractional offset the translation produces.
    """

    view_rect = mask_window_in_view(state.last_translation, state.last_scale, radius)
    left, top, right, _ = view_rect_to_pixels(view_rect, pixels_per_unit, bitmap_size)
    if not all(math.isfinite(v) for v in (left, top, right)):
        raise DegenerateCropError("Crop rectangle is not finite")

    side = int(round(right - left))
    x = _settle(int(round(left)), side, bitmap_size[0])
    y = _settle(int(round(top)), side, bitmap_size[1])
    return x, y, side


def _settle(start: int, side: int, limit: int) -> int:
    # A window that fits but overhangs by one pixel after rounding is slid back.
    if side <= limit:
        if start == -1:
            return 0
        if start + side == limit + 1:
            return limit - side
    return start


def crop_rect(
    state: ViewportState,
    radius: float,
    pixels_per_unit: float,
    bitmap_size: tuple[int, int],
) -> tuple[int, int, int, int]:
    """Return the committed crop window as a ``(left, top, right, bottom)`` pixel box.

    The window is snapped to a whole-pixel square and then clamped to the
    bitmap, so it never indexes outside it. A window wider than the bitmap on
    one axis keeps only the covered part on that axis.

    Raises
    ------
    DegenerateCropError
        When the clamped box is empty or the inputs are not finite.
    """

    left, top, side = _snapped_window(state, radius, pixels_per_unit, bitmap_size)
    img_w, img_h = bitmap_size
    box = (
        max(0, min(img_w, left)),
        max(0, min(img_h, top)),
        max(0, min(img_w, left + side)),
        max(0, min(img_h, top + side)),
    )
    if box[2] - box[0] <= 0 or box[3] - box[1] <= 0:
        raise DegenerateCropError(
            f"Crop rectangle {box} is empty for a {img_w}x{img_h} bitmap"
        )
    return box


def crop_to_square(
    image: Image.Image,
    state: ViewportState,
    mask: MaskGeometry,
    pixels_per_unit: float,
) -> Image.Image:
    """Return the unmasked pixel region under the mask window."""

    box = crop_rect(state, mask.radius, pixels_per_unit, image.size)
    return image.crop(box)


def circle_mask(
    size: tuple[int, int],
    centre: Optional[tuple[float, float]] = None,
    radius: Optional[float] = None,
) -> np.ndarray:
    """Return a boolean array that is ``True`` inside a circle over *size*.

    Pixels are tested at their centres. Without *centre* and *radius* the
    circle is the one inscribed in *size*; otherwise *centre* is in the
    array's pixel coordinates and may lie outside it.
    """

    width, height = size
    if centre is None:
        centre = (width * 0.5, height * 0.5)
    if radius is None:
        radius = min(width, height) * 0.5
    ys, xs = np.ogrid[:height, :width]
    dx = xs + 0.5 - centre[0]
    dy = ys + 0.5 - centre[1]
    return (dx * dx + dy * dy) <= radius * radius


def crop_to_circle(
    image: Image.Image,
    state: ViewportState,
    mask: MaskGeometry,
    pixels_per_unit: float,
    fill: Optional[Fill] = None,
) -> Image.Image:
    """Return the framed region with everything outside the mask circle removed.

    The circle is the one framed on screen, so when the window overhangs the
    bitmap it stays centred on the window rather than on the covered part.
    Without *fill* the outside becomes fully transparent; modes lacking alpha
    are widened (``RGB`` to ``RGBA``, ``L`` to ``LA``). With *fill* the outside
    is painted in that colour and the input mode is kept.
    """

    left, top, side = _snapped_window(state, mask.radius, pixels_per_unit, image.size)
    box = crop_rect(state, mask.radius, pixels_per_unit, image.size)
    region = image.crop(box)
    half = side * 0.5
    inside = circle_mask(
        region.size, centre=(left + half - box[0], top + half - box[1]), radius=half
    )

    if fill is not None:
        background = Image.new(region.mode, region.size, fill)
        stencil = Image.fromarray((inside * 255).astype(np.uint8))
        return Image.composite(region, background, stencil)

    target_mode = _ALPHA_MODES.get(region.mode, "RGBA")
    if region.mode != target_mode:
        region = region.convert(target_mode)
    pixels = np.array(region)
    alpha = pixels[..., -1]
    alpha[~inside] = 0
    if target_mode == "RGBA":
        pixels[~inside, :3] = 0
    else:
        pixels[~inside, 0] = 0
    return Image.fromarray(pixels)


def extract_crop(
    image: Image.Image,
    state: ViewportState,
    mask: MaskGeometry,
    pixels_per_unit: float,
    circular: bool,
    fill: Optional[Fill] = None,
) -> Image.Image:
    """Produce the final bitmap for *image* (already rotated, if rotation applies)."""

    if mask.shape is MaskShape.CIRCLE and circular:
        output = crop_to_circle(image, state, mask, pixels_per_unit, fill)
    else:
        output = crop_to_square(image, state, mask, pixels_per_unit)
    _LOGGER.debug(
        "Extracted %s crop %sx%s (%s) from %sx%s",
        mask.shape.value,
        output.width,
        output.height,
        output.mode,
        image.width,
        image.height,
    )
    return output
