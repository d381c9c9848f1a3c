import pytest
from PIL import Image

pytest.importorskip("PySide6.QtGui")

from iCrop.utils.qt_bridge import pil_to_qimage, qimage_to_pil, source_image_from_qimage  # noqa: E402


def test_round_trip_preserves_size_and_colour():
    img = Image.new("RGBA", (40, 30), (10, 200, 30, 255))

    qimage = pil_to_qimage(img)
    back = qimage_to_pil(qimage)

    assert (qimage.width(), qimage.height()) == (40, 30)
    assert back.size == (40, 30)
    assert back.convert("RGBA").getpixel((5, 5)) == (10, 200, 30, 255)


def test_null_qimage_has_no_source():
    from PySide6.QtGui import QImage

    assert qimage_to_pil(QImage()) is None
    assert source_image_from_qimage(QImage()) is None


def test_qimage_source_is_upright():
    qimage = pil_to_qimage(Image.new("RGB", (16, 8), "white"))

    source = source_image_from_qimage(qimage)

    assert source.orientation == 1
    assert source.size == (16, 8)
