"""
Legal zoom and pan ranges, and the gesture update functions that honour them.

Every function takes the current :class:`~iCrop.domain.models.ViewportState`
and returns a new one; nothing here mutates state in place. Scale is always
clamped before translation, because the translation limits are derived from
the scale that will actually be displayed.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace

from .. import config as defaults
from ..domain.models import CropConfiguration, ViewportSize, ViewportState
from .geometry import displayed_extent, require_layout

_LOGGER = logging.getLogger(__name__)

Vector = tuple[float, float]


def max_scale_range(config: CropConfiguration, viewport_size: ViewportSize) -> tuple[float, float]:
    """Return ``(min_scale, max_scale)``.

    Below fit-to-window the mask would show empty space, so the lower bound
    is fixed at ``1.0``.
    """

    require_layout(viewport_size)
    upper = max(defaults.MIN_SCALE, float(config.max_magnification_scale))
    return (defaults.MIN_SCALE, upper)


def _translation_limits(config: CropConfiguration, scale: float, extent: Vector) -> Vector:
    side = float(config.mask_radius) * 2.0
    return (
        max(0.0, (extent[0] * scale - side) / 2.0),
        max(0.0, (extent[1] * scale - side) / 2.0),
    )


def max_translation_range(
    config: CropConfiguration,
    state: ViewportState,
    image_size: tuple[int, int],
    viewport_size: ViewportSize,
) -> Vector:
    """Return ``(max_x, max_y)`` for the live scale of *state*.

    The legal translation range is ``[-max_x, max_x] × [-max_y, max_y]``; any
    translation inside it keeps the mask window covered by the scaled image.
    """

    extent = displayed_extent(image_size, viewport_size)
    return _translation_limits(config, state.scale, extent)


def clamp_scale(scale: float, scale_range: tuple[float, float]) -> float:
    lower, upper = scale_range
    return min(max(float(scale), lower), upper)


def clamp_translation(translation: Vector, limits: Vector) -> Vector:
    max_x, max_y = limits
    x, y = translation
    return (
        min(max(float(x), -max_x), max_x),
        min(max(float(y), -max_y), max_y),
    )


def apply_magnification(
    state: ViewportState,
    magnitude: float,
    config: CropConfiguration,
    image_size: tuple[int, int],
    viewport_size: ViewportSize,
) -> ViewportState:
    """Return *state* with the live scale driven by a pinch of *magnitude*.

    ``magnitude`` is the gesture's cumulative relative size (``1.0`` = no
    change). It is scaled by ``zoom_sensitivity`` and applied to the committed
    scale; the committed translation is then re-clamped to the new scale.
    """

    scale_range = max_scale_range(config, viewport_size)
    if not math.isfinite(magnitude):
        _LOGGER.debug("Ignoring non-finite magnification %r", magnitude)
        return state
    factor = 1.0 + (float(magnitude) - 1.0) * float(config.zoom_sensitivity)
    proposed = state.last_scale * factor
    scale = clamp_scale(proposed, scale_range)
    extent = displayed_extent(image_size, viewport_size)
    translation = clamp_translation(
        state.last_translation, _translation_limits(config, scale, extent)
    )
    if scale != proposed:
        _LOGGER.debug("Clamped scale %.4f to %.4f", proposed, scale)
    return replace(state, scale=scale, translation=translation)


def apply_pan(
    state: ViewportState,
    delta: Vector,
    config: CropConfiguration,
    image_size: tuple[int, int],
    viewport_size: ViewportSize,
) -> ViewportState:
    """Return *state* panned by the gesture's cumulative *delta* from the committed offset."""

    extent = displayed_extent(image_size, viewport_size)
    dx, dy = delta
    if not (math.isfinite(dx) and math.isfinite(dy)):
        _LOGGER.debug("Ignoring non-finite pan delta %r", delta)
        return state
    scale = clamp_scale(state.scale, max_scale_range(config, viewport_size))
    proposed = (state.last_translation[0] + dx, state.last_translation[1] + dy)
    translation = clamp_translation(proposed, _translation_limits(config, scale, extent))
    return replace(state, scale=scale, translation=translation)


def apply_rotation(state: ViewportState, delta: float) -> ViewportState:
    """Return *state* rotated by the gesture's cumulative *delta* radians."""

    if not math.isfinite(delta):
        return state
    return replace(state, rotation_angle=state.last_rotation_angle + float(delta))


def commit(
    state: ViewportState,
    config: CropConfiguration,
    image_size: tuple[int, int],
    viewport_size: ViewportSize,
    *,
    scale: bool = True,
    translation: bool = True,
    rotation: bool = True,
) -> ViewportState:
    """Copy the selected live values into their committed counterparts.

    The committed translation is re-clamped against the committed scale so a
    pan that ends while a pinch is still running cannot leave a committed
    offset outside the bounds of the committed scale.
    """

    last_scale = state.scale if scale else state.last_scale
    last_translation = state.translation if translation else state.last_translation
    last_rotation = state.rotation_angle if rotation else state.last_rotation_angle
    extent = displayed_extent(image_size, viewport_size)
    last_scale = clamp_scale(last_scale, max_scale_range(config, viewport_size))
    last_translation = clamp_translation(
        last_translation, _translation_limits(config, last_scale, extent)
    )
    committed = replace(
        state,
        last_scale=last_scale,
        last_translation=last_translation,
        last_rotation_angle=last_rotation,
    )
    _LOGGER.debug(
        "Committed scale=%.4f translation=(%.2f, %.2f) angle=%.4f",
        committed.last_scale,
        committed.last_translation[0],
        committed.last_translation[1],
        committed.last_rotation_angle,
    )
    return committed


def reclamp(
    state: ViewportState,
    config: CropConfiguration,
    image_size: tuple[int, int],
    viewport_size: ViewportSize,
) -> ViewportState:
    """Bring live and committed values back inside the current bounds.

    Needed whenever the viewport is re-measured, since the displayed extent
    and therefore the translation limits change with it.
    """

    scale_range = max_scale_range(config, viewport_size)
    extent = displayed_extent(image_size, viewport_size)
    scale = clamp_scale(state.scale, scale_range)
    last_scale = clamp_scale(state.last_scale, scale_range)
    return replace(
        state,
        scale=scale,
        translation=clamp_translation(state.translation, _translation_limits(config, scale, extent)),
        last_scale=last_scale,
        last_translation=clamp_translation(
            state.last_translation, _translation_limits(config, last_scale, extent)
        ),
    )
