import sys
from pathlib import Path

import pytest
from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Ensure the project sources are importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from iCrop.domain.models import CropConfiguration, SourceImage, ViewportSize  # noqa: E402


@pytest.fixture
def landscape_image() -> Image.Image:
    """1200x800 image whose left half is red and right half is blue."""
    img = Image.new("RGB", (1200, 800), (255, 0, 0))
    img.paste((0, 0, 255), (600, 0, 1200, 800))
    return img


@pytest.fixture
def landscape_source(landscape_image) -> SourceImage:
    return SourceImage(pixels=landscape_image)


@pytest.fixture
def square_viewport() -> ViewportSize:
    return ViewportSize(300.0, 300.0)


@pytest.fixture
def scenario_config() -> CropConfiguration:
    return CropConfiguration(mask_radius=100.0, max_magnification_scale=4.0)
