import pytest
from jsonschema import ValidationError

from iCrop.domain.models import CropConfiguration, MaskShape
from iCrop.errors import ConfigurationError
from iCrop.settings.schema import DEFAULT_CONFIGURATION, merge_with_defaults, validate_configuration


def test_defaults_validate():
    validate_configuration(DEFAULT_CONFIGURATION)


def test_merge_fills_missing_values():
    merged = merge_with_defaults({"mask_radius": 90})

    assert merged["mask_radius"] == 90
    assert merged["max_magnification_scale"] == DEFAULT_CONFIGURATION["max_magnification_scale"]


def test_merge_accepts_camel_case_names():
    merged = merge_with_defaults(
        {"maskRadius": 80, "rotateImage": False, "cropImageCircular": True, "maskShape": "SQUARE"}
    )

    assert merged["mask_radius"] == 80
    assert merged["rotate_image_enabled"] is False
    assert merged["crop_to_circle_enabled"] is True
    assert merged["mask_shape"] == "square"


def test_merge_does_not_mutate_defaults():
    merge_with_defaults({"mask_radius": 10})

    assert DEFAULT_CONFIGURATION["mask_radius"] == 130.0


@pytest.mark.parametrize(
    "values",
    [
        {"mask_radius": 0},
        {"max_magnification_scale": 0.5},
        {"zoom_sensitivity": -1},
        {"rotate_image_enabled": "yes"},
        {"mask_shape": "hexagon"},
        {"unknown_option": 1},
    ],
)
def test_invalid_values_are_rejected(values):
    with pytest.raises(ValidationError):
        merge_with_defaults(values)


def test_configuration_from_mapping():
    config = CropConfiguration.from_mapping({"maskRadius": 64, "maskShape": "square"})

    assert config.mask_radius == 64.0
    assert config.mask_shape is MaskShape.SQUARE
    assert config.mask_geometry().side == 128.0
    assert config.mask_geometry(MaskShape.CIRCLE).shape is MaskShape.CIRCLE


def test_configuration_from_mapping_wraps_validation_errors():
    with pytest.raises(ConfigurationError):
        CropConfiguration.from_mapping({"max_magnification_scale": 0.1})


def test_configuration_from_none_uses_defaults():
    assert CropConfiguration.from_mapping(None) == CropConfiguration()
