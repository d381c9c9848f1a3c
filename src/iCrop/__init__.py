"""Pan, zoom and rotate a photo inside a fixed mask and export the framed crop."""

from __future__ import annotations

from .domain.models import (
    CropConfiguration,
    MaskGeometry,
    MaskShape,
    SourceImage,
    ViewportSize,
    ViewportState,
)
from .errors import (
    ConfigurationError,
    DegenerateCropError,
    ICropError,
    LayoutNotReadyError,
    RotationError,
)
from .session import CropSession

__all__ = [
    "ConfigurationError",
    "CropConfiguration",
    "CropSession",
    "DegenerateCropError",
    "ICropError",
    "LayoutNotReadyError",
    "MaskGeometry",
    "MaskShape",
    "RotationError",
    "SourceImage",
    "ViewportSize",
    "ViewportState",
]
