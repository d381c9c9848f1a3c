"""Crop session: the gesture stream in, the framed bitmap out."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from PIL import Image

from .core import bounds
from .core.crop import Fill, extract_crop
from .core.geometry import displayed_extent, image_pixels_per_view_unit, require_layout
from .core.rotation import rotate_image
from .domain.models import (
    CropConfiguration,
    MaskGeometry,
    MaskShape,
    SourceImage,
    ViewportSize,
    ViewportState,
)
from .errors import DegenerateCropError, LayoutNotReadyError, RotationError
from .errors.handler import ErrorHandler, ErrorSeverity
from .events.bus import EventBus
from .events.crop_events import (
    CropCompletedEvent,
    GestureCommittedEvent,
    RotationFallbackEvent,
)

_LOGGER = logging.getLogger(__name__)


class CropSession:
    """Own the view transform of one crop and turn it into a bitmap.

    The front-end reports layout once via :meth:`set_viewport_size`, forwards
    pinch, drag and rotation gestures as they change and end, and finally
    calls :meth:`complete`. Every gesture update is clamped before it becomes
    visible, so :attr:`state` is always legal.

    All calls are expected on a single thread; the session holds no locks.
    """

    def __init__(
        self,
        source: Union[SourceImage, Image.Image],
        configuration: Union[CropConfiguration, Mapping[str, Any], None] = None,
        mask_shape: Optional[MaskShape] = None,
        *,
        event_bus: Optional[EventBus] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        if isinstance(source, Image.Image):
            source = SourceImage.from_image(source)
        if not isinstance(configuration, CropConfiguration):
            configuration = CropConfiguration.from_mapping(configuration)
        self._source = source
        self._config = configuration
        self._mask = configuration.mask_geometry(mask_shape)
        self._events = event_bus or EventBus()
        self._error_handler = error_handler
        self._viewport: Optional[ViewportSize] = None
        self._state = ViewportState.initial()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def state(self) -> ViewportState:
        return self._state

    @property
    def mask(self) -> MaskGeometry:
        return self._mask

    @property
    def configuration(self) -> CropConfiguration:
        return self._config

    @property
    def source(self) -> SourceImage:
        return self._source

    @property
    def viewport_size(self) -> Optional[ViewportSize]:
        return self._viewport

    @property
    def events(self) -> EventBus:
        return self._events

    def displayed_extent(self) -> tuple[float, float]:
        return displayed_extent(self._source.size, self._layout())

    def scale_range(self) -> tuple[float, float]:
        return bounds.max_scale_range(self._config, self._layout())

    def translation_range(self) -> tuple[float, float]:
        return bounds.max_translation_range(
            self._config, self._state, self._source.size, self._layout()
        )

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def set_viewport_size(self, size: Union[ViewportSize, tuple[float, float]]) -> None:
        """Record the measured display size of the unscaled image."""

        if not isinstance(size, ViewportSize):
            size = ViewportSize(float(size[0]), float(size[1]))
        self._viewport = require_layout(size)
        self._state = bounds.reclamp(self._state, self._config, self._source.size, size)
        _LOGGER.debug("Viewport measured at %.1fx%.1f", size.width, size.height)

    def _layout(self) -> ViewportSize:
        if self._viewport is None:
            raise LayoutNotReadyError("Viewport size is not known yet; defer until layout")
        return self._viewport

    # ------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------
    def magnify_changed(self, magnitude: float) -> ViewportState:
        self._state = bounds.apply_magnification(
            self._state, magnitude, self._config, self._source.size, self._layout()
        )
        return self._state

    def magnify_ended(self) -> ViewportState:
        return self._commit("magnify", scale=True, translation=True, rotation=False)

    def drag_changed(self, dx: float, dy: float) -> ViewportState:
        self._state = bounds.apply_pan(
            self._state, (dx, dy), self._config, self._source.size, self._layout()
        )
        return self._state

    def drag_ended(self) -> ViewportState:
        return self._commit("drag", scale=False, translation=True, rotation=False)

    def rotate_changed(self, delta: float) -> ViewportState:
        if not self._config.rotate_image_enabled:
            return self._state
        self._state = bounds.apply_rotation(self._state, delta)
        return self._state

    def rotate_ended(self) -> ViewportState:
        if not self._config.rotate_image_enabled:
            return self._state
        return self._commit("rotate", scale=False, translation=False, rotation=True)

    def _commit(self, gesture: str, **which: bool) -> ViewportState:
        self._state = bounds.commit(
            self._state, self._config, self._source.size, self._layout(), **which
        )
        self._events.publish(
            GestureCommittedEvent(
                gesture=gesture,
                scale=self._state.last_scale,
                translation=self._state.last_translation,
                rotation_angle=self._state.last_rotation_angle,
            )
        )
        return self._state

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------
    def complete(self, fill: Optional[Fill] = None) -> Image.Image:
        """Return the bitmap framed by the committed transform.

        Rotation runs first when enabled. If it fails the crop continues on
        the unrotated image. A degenerate crop is reported and re-raised.

        Parameters
        ----------
        fill:
            Colour painted outside a circular mask instead of transparency.
        """

        viewport = self._layout()
        pixels_per_unit = image_pixels_per_view_unit(self._source.size, viewport)
        image = self._source.oriented()

        angle = self._state.last_rotation_angle
        if self._config.rotate_image_enabled and angle != 0.0:
            try:
                image = rotate_image(image, angle, self._config.max_rotated_pixels)
            except RotationError as exc:
                _LOGGER.warning("Rotation by %.4f rad failed, cropping unrotated image: %s", angle, exc)
                self._report(exc, ErrorSeverity.WARNING, {"angle": angle})
                self._events.publish(RotationFallbackEvent(angle=angle, reason=str(exc)))

        try:
            output = extract_crop(
                image,
                self._state,
                self._mask,
                pixels_per_unit,
                circular=self._config.crop_to_circle_enabled,
                fill=fill,
            )
        except DegenerateCropError as exc:
            self._report(exc, ErrorSeverity.ERROR, {"state": self._state})
            raise

        _LOGGER.info(
            "Completed %s crop: %sx%s %s", self._mask.shape.value, output.width, output.height, output.mode
        )
        self._events.publish(
            CropCompletedEvent(
                shape=self._mask.shape.value,
                circular=self._mask.shape is MaskShape.CIRCLE and self._config.crop_to_circle_enabled,
                size=output.size,
                mode=output.mode,
            )
        )
        return output

    def _report(self, error: Exception, severity: ErrorSeverity, context: dict) -> None:
        if self._error_handler is not None:
            self._error_handler.handle(error, severity, context)
