"""Tests for image downscaling."""

import io

from PIL import Image

from bitesnaps.services.images import (
    EXIF_ORIENTATION_TAG,
    detect_mime_type,
    downscale_image,
)
from tests.conftest import make_image_bytes


def test_wide_image_is_scaled_to_max_width() -> None:
    original = make_image_bytes(1600, 1200)

    result = downscale_image(original, max_width=800, quality=60)

    with Image.open(io.BytesIO(result)) as image:
        assert image.format == "JPEG"
        assert image.size == (800, 600)


def test_scaled_height_preserves_aspect_ratio() -> None:
    original = make_image_bytes(1000, 333)

    result = downscale_image(original, max_width=400, quality=60)

    with Image.open(io.BytesIO(result)) as image:
        width, height = image.size
    assert width == 400
    assert abs(height - 333 * 400 / 1000) <= 1


def test_narrow_image_passes_through_unchanged() -> None:
    original = make_image_bytes(640, 480)

    assert downscale_image(original, max_width=800, quality=60) == original


def test_exact_width_passes_through_unchanged() -> None:
    original = make_image_bytes(800, 200)

    assert downscale_image(original, max_width=800, quality=60) == original


def _rotated_jpeg(width: int, height: int) -> bytes:
    exif = Image.Exif()
    exif[EXIF_ORIENTATION_TAG] = 6
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color=(120, 200, 80)).save(
        buffer, format="JPEG", exif=exif.tobytes()
    )
    return buffer.getvalue()


def test_narrow_rotated_image_is_transposed() -> None:
    original = _rotated_jpeg(600, 400)

    result = downscale_image(original, max_width=800, quality=60)

    assert result != original
    with Image.open(io.BytesIO(result)) as image:
        assert image.size == (400, 600)
        assert image.getexif().get(EXIF_ORIENTATION_TAG, 1) == 1


def test_rotated_image_is_scaled_after_transpose() -> None:
    original = _rotated_jpeg(1600, 1000)

    result = downscale_image(original, max_width=800, quality=60)

    with Image.open(io.BytesIO(result)) as image:
        assert image.size == (800, 1280)


def test_undecodable_bytes_fall_back_to_original() -> None:
    original = b"definitely not an image"

    assert downscale_image(original, max_width=800, quality=60) == original


def test_detect_mime_type_signatures() -> None:
    assert detect_mime_type(make_image_bytes(4, 4, "PNG")) == "image/png"
    assert detect_mime_type(make_image_bytes(4, 4, "JPEG")) == "image/jpeg"
    assert detect_mime_type(make_image_bytes(4, 4, "GIF")) == "image/gif"
    assert detect_mime_type(b"RIFF\x00\x00\x00\x00WEBPVP8 ") == "image/webp"
    assert detect_mime_type(b"unknown") == "image/jpeg"
