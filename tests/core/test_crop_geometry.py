import math

import pytest

from iCrop.core.geometry import (
    displayed_extent,
    image_pixels_per_view_unit,
    mask_window_in_view,
    rect_inside_extent,
    require_layout,
    view_rect_to_pixels,
)
from iCrop.domain.models import ViewportSize
from iCrop.errors import LayoutNotReadyError


def test_landscape_image_fits_width(square_viewport):
    assert displayed_extent((1200, 800), square_viewport) == pytest.approx((300.0, 200.0))


def test_portrait_image_fits_height(square_viewport):
    assert displayed_extent((800, 1200), square_viewport) == pytest.approx((200.0, 300.0))


def test_limiting_dimension_matches_viewport_exactly():
    viewport = ViewportSize(333.0, 1000.0)
    width, height = displayed_extent((997, 613), viewport)
    assert width == 333.0
    assert height <= 1000.0


def test_small_image_is_scaled_up(square_viewport):
    assert displayed_extent((60, 30), square_viewport) == pytest.approx((300.0, 150.0))


def test_pixels_per_view_unit(square_viewport):
    assert image_pixels_per_view_unit((1200, 800), square_viewport) == pytest.approx(4.0)
    assert image_pixels_per_view_unit((60, 30), square_viewport) == pytest.approx(0.2)


@pytest.mark.parametrize(
    "viewport",
    [None, ViewportSize(0.0, 300.0), ViewportSize(300.0, -1.0), ViewportSize(math.nan, 10.0)],
)
def test_geometry_before_layout_raises(viewport):
    with pytest.raises(LayoutNotReadyError):
        require_layout(viewport)
    with pytest.raises(LayoutNotReadyError):
        displayed_extent((1200, 800), viewport)
    with pytest.raises(LayoutNotReadyError):
        image_pixels_per_view_unit((1200, 800), viewport)


def test_invalid_image_size_is_rejected(square_viewport):
    with pytest.raises(ValueError):
        displayed_extent((0, 800), square_viewport)


def test_mask_window_moves_against_translation_and_shrinks_with_scale():
    left, top, right, bottom = mask_window_in_view((20.0, -10.0), 2.0, 100.0)

    assert (left, top, right, bottom) == pytest.approx((-60.0, -45.0, 40.0, 55.0))


def test_mask_window_at_identity_is_centred():
    assert mask_window_in_view((0.0, 0.0), 1.0, 50.0) == pytest.approx((-50.0, -50.0, 50.0, 50.0))


def test_view_rect_to_pixels_is_centre_relative():
    rect = view_rect_to_pixels((-25.0, -25.0, 25.0, 25.0), 4.0, (1200, 800))

    assert rect == pytest.approx((500.0, 300.0, 700.0, 500.0))


def test_rect_inside_extent():
    assert rect_inside_extent((-100.0, -100.0, 100.0, 100.0), (300.0, 200.0))
    assert not rect_inside_extent((-100.0, -101.0, 100.0, 99.0), (300.0, 200.0))
