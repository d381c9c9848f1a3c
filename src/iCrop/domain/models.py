from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from jsonschema import ValidationError
from PIL import Image

from .. import config
from ..errors import ConfigurationError
from ..settings.schema import merge_with_defaults

# Pillow transposes that bring each EXIF orientation upright, matching
# ``PIL.ImageOps.exif_transpose``.
_ORIENTATION_TRANSPOSES: dict[int, Image.Transpose] = {
    2: Image.Transpose.FLIP_LEFT_RIGHT,
    3: Image.Transpose.ROTATE_180,
    4: Image.Transpose.FLIP_TOP_BOTTOM,
    5: Image.Transpose.TRANSPOSE,
    6: Image.Transpose.ROTATE_270,
    7: Image.Transpose.TRANSVERSE,
    8: Image.Transpose.ROTATE_90,
}


class MaskShape(str, Enum):
    CIRCLE = "circle"
    SQUARE = "square"


@dataclass(frozen=True)
class MaskGeometry:
    """Crop window fixed for the duration of a session."""

    radius: float
    shape: MaskShape = MaskShape.CIRCLE

    def __post_init__(self) -> None:
        if not (self.radius > 0 and math.isfinite(self.radius)):
            raise ValueError(f"mask radius must be positive, got {self.radius!r}")

    @property
    def side(self) -> float:
        return self.radius * 2.0


@dataclass(frozen=True)
class ViewportSize:
    """Laid-out size of the displayed image before scale and rotation."""

    width: float
    height: float

    @property
    def is_valid(self) -> bool:
        return (
            math.isfinite(self.width)
            and math.isfinite(self.height)
            and self.width > 0
            and self.height > 0
        )

    def as_tuple(self) -> tuple[float, float]:
        return (float(self.width), float(self.height))


@dataclass(frozen=True)
class ViewportState:
    """Live and committed view transform of a crop session.

    Live values track the gesture in progress; the ``last_*`` values are the
    anchor the next gesture starts from.
    """

    scale: float = 1.0
    translation: tuple[float, float] = (0.0, 0.0)
    rotation_angle: float = 0.0
    last_scale: float = 1.0
    last_translation: tuple[float, float] = (0.0, 0.0)
    last_rotation_angle: float = 0.0

    @classmethod
    def initial(cls) -> ViewportState:
        return cls()


@dataclass(frozen=True)
class SourceImage:
    """Caller-owned bitmap plus its EXIF orientation.

    The bitmap is never modified; :meth:`oriented` returns an upright copy.
    """

    pixels: Image.Image
    orientation: int = 1

    def __post_init__(self) -> None:
        if self.orientation not in range(1, 9):
            object.__setattr__(self, "orientation", 1)

    @classmethod
    def from_image(cls, image: Image.Image) -> SourceImage:
        """Wrap *image*, reading the orientation from its EXIF block."""

        try:
            orientation = int(image.getexif().get(config.EXIF_ORIENTATION_TAG, 1))
        except (TypeError, ValueError):
            orientation = 1
        return cls(pixels=image, orientation=orientation)

    @property
    def size(self) -> tuple[int, int]:
        """Upright ``(width, height)``; orientations 5-8 swap the axes."""

        width, height = self.pixels.size
        if self.orientation >= 5:
            return (height, width)
        return (width, height)

    @property
    def mode(self) -> str:
        return self.pixels.mode

    def oriented(self) -> Image.Image:
        method = _ORIENTATION_TRANSPOSES.get(self.orientation)
        if method is None:
            return self.pixels.copy()
        return self.pixels.transpose(method)


@dataclass(frozen=True)
class CropConfiguration:
    mask_radius: float = config.DEFAULT_MASK_RADIUS
    max_magnification_scale: float = config.DEFAULT_MAX_MAGNIFICATION_SCALE
    zoom_sensitivity: float = config.DEFAULT_ZOOM_SENSITIVITY
    rotate_image_enabled: bool = config.DEFAULT_ROTATE_IMAGE_ENABLED
    crop_to_circle_enabled: bool = config.DEFAULT_CROP_TO_CIRCLE_ENABLED
    mask_shape: MaskShape = MaskShape(config.DEFAULT_MASK_SHAPE)
    max_rotated_pixels: int = config.MAX_ROTATED_PIXELS

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]] = None) -> CropConfiguration:
        """Build a configuration from *values*, filling gaps with the defaults.

        Raises
        ------
        ConfigurationError
            When the merged mapping does not satisfy the configuration schema.
        """

        try:
            merged = merge_with_defaults(dict(values or {}))
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid crop configuration: {exc.message}") from exc
        return cls(
            mask_radius=float(merged["mask_radius"]),
            max_magnification_scale=float(merged["max_magnification_scale"]),
            zoom_sensitivity=float(merged["zoom_sensitivity"]),
            rotate_image_enabled=bool(merged["rotate_image_enabled"]),
            crop_to_circle_enabled=bool(merged["crop_to_circle_enabled"]),
            mask_shape=MaskShape(merged["mask_shape"]),
            max_rotated_pixels=int(merged["max_rotated_pixels"]),
        )

    def mask_geometry(self, shape: Optional[MaskShape] = None) -> MaskGeometry:
        return MaskGeometry(radius=self.mask_radius, shape=shape or self.mask_shape)
