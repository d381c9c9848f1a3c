"""Schema helpers for crop session configuration mappings."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from .. import config

CONFIGURATION_SCHEMA: dict[str, Any] = {
    "$id": "iCrop/configuration.schema.json",
    "type": "object",
    "required": [
        "mask_radius",
        "max_magnification_scale",
        "zoom_sensitivity",
        "rotate_image_enabled",
        "crop_to_circle_enabled",
    ],
    "properties": {
        "mask_radius": {"type": "number", "exclusiveMinimum": 0},
        "max_magnification_scale": {"type": "number", "minimum": config.MIN_SCALE},
        "zoom_sensitivity": {"type": "number", "exclusiveMinimum": 0},
        "rotate_image_enabled": {"type": "boolean"},
        "crop_to_circle_enabled": {"type": "boolean"},
        "mask_shape": {"type": "string", "enum": ["circle", "square"]},
        "max_rotated_pixels": {"type": "integer", "minimum": 1},
    },
    "additionalProperties": False,
}

DEFAULT_CONFIGURATION: dict[str, Any] = {
    "mask_radius": config.DEFAULT_MASK_RADIUS,
    "max_magnification_scale": config.DEFAULT_MAX_MAGNIFICATION_SCALE,
    "zoom_sensitivity": config.DEFAULT_ZOOM_SENSITIVITY,
    "rotate_image_enabled": config.DEFAULT_ROTATE_IMAGE_ENABLED,
    "crop_to_circle_enabled": config.DEFAULT_CROP_TO_CIRCLE_ENABLED,
    "mask_shape": config.DEFAULT_MASK_SHAPE,
    "max_rotated_pixels": config.MAX_ROTATED_PIXELS,
}

# Front-ends that use camelCase option names can pass
# their mapping unchanged.
_ALIASES: dict[str, str] = {
    "maskRadius": "mask_radius",
    "maxMagnificationScale": "max_magnification_scale",
    "zoomSensitivity": "zoom_sensitivity",
    "rotateImage": "rotate_image_enabled",
    "rotateImageEnabled": "rotate_image_enabled",
    "cropImageCircular": "crop_to_circle_enabled",
    "cropToCircleEnabled": "crop_to_circle_enabled",
    "maskShape": "mask_shape",
}

_validator = Draft202012Validator(CONFIGURATION_SCHEMA)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_CONFIGURATION` and validate the result."""

    merged = deepcopy(DEFAULT_CONFIGURATION)
    if data:
        for key, value in data.items():
            key = _ALIASES.get(key, key)
            if key == "mask_shape" and isinstance(value, str):
                merged[key] = value.lower()
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_configuration(data: dict[str, Any]) -> None:
    """Validate *data* against the configuration schema."""

    _validator.validate(data)


__all__ = [
    "CONFIGURATION_SCHEMA",
    "DEFAULT_CONFIGURATION",
    "merge_with_defaults",
    "validate_configuration",
]
