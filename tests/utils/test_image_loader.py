import io

from PIL import Image

from iCrop.utils.image_loader import load_source_image, source_image_from_bytes


def create_test_image_with_exif(orientation=6):
    """
    Create a 100x50 red JPEG carrying an EXIF orientation.
    Orientation 6 means the camera was rotated 90 CW.
    """
    img = Image.new("RGB", (100, 50), "red")
    exif = img.getexif()
    exif[0x0112] = orientation
    buf = io.BytesIO()
    img.save(buf, format="JPEG", exif=exif)
    return buf.getvalue()


def test_load_keeps_orientation_separate(tmp_path):
    path = tmp_path / "rotated.jpg"
    path.write_bytes(create_test_image_with_exif(orientation=6))

    source = load_source_image(path)

    assert source is not None
    assert source.pixels.size == (100, 50)
    assert source.orientation == 6
    assert source.size == (50, 100)
    assert source.oriented().size == (50, 100)


def test_decode_from_bytes():
    source = source_image_from_bytes(create_test_image_with_exif(orientation=3))

    assert source is not None
    assert source.orientation == 3
    assert source.size == (100, 50)


def test_png_without_exif_is_upright(tmp_path):
    path = tmp_path / "plain.png"
    Image.new("RGBA", (20, 10), (0, 0, 255, 255)).save(path)

    source = load_source_image(path)

    assert source.orientation == 1
    assert source.mode == "RGBA"
    assert source.oriented().tobytes() == source.pixels.tobytes()


def test_undecodable_input_returns_none(tmp_path):
    path = tmp_path / "broken.jpg"
    path.write_bytes(b"not an image")

    assert load_source_image(path) is None
    assert source_image_from_bytes(b"still not an image") is None


def test_missing_file_returns_none(tmp_path):
    assert load_source_image(tmp_path / "missing.png") is None
