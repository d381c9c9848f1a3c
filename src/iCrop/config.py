"""Default configuration values for iCrop."""

from __future__ import annotations

from typing import Final

# Half the side of the on-screen crop window, in view units.
DEFAULT_MASK_RADIUS: Final[float] = 130.0

# Zoom is bounded below by fit-to-window (scale 1.0) and above by this factor.
MIN_SCALE: Final[float] = 1.0
DEFAULT_MAX_MAGNIFICATION_SCALE: Final[float] = 4.0

# Multiplier applied to the relative pinch magnitude reported by the front-end.
# ``1.0`` passes the gesture through unchanged.
DEFAULT_ZOOM_SENSITIVITY: Final[float] = 1.0

DEFAULT_ROTATE_IMAGE_ENABLED: Final[bool] = True
DEFAULT_CROP_TO_CIRCLE_ENABLED: Final[bool] = False
DEFAULT_MASK_SHAPE: Final[str] = "circle"

# Largest surface, in pixels, the rotation step will allocate.
MAX_ROTATED_PIXELS: Final[int] = 16384 * 16384

# EXIF tag holding the camera orientation (values 1-8).
EXIF_ORIENTATION_TAG: Final[int] = 0x0112
