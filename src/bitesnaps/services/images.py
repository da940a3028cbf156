"""Client-side style image downscaling before upload."""

import io
import logging

from PIL import Image, ImageOps

logger = logging.getLogger(__name__)

DEFAULT_MAX_WIDTH = 800
DEFAULT_QUALITY = 60
EXIF_ORIENTATION_TAG = 0x0112


def downscale_image(
    image_bytes: bytes,
    max_width: int = DEFAULT_MAX_WIDTH,
    quality: int = DEFAULT_QUALITY,
) -> bytes:
    """Shrink an image to at most ``max_width`` pixels wide as JPEG.

    Images that already fit and carry no EXIF rotation are returned
    unchanged. Any decode or encode failure falls back to the original bytes.
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as source:
            rotated = source.getexif().get(EXIF_ORIENTATION_TAG, 1) != 1
            if source.width <= max_width and not rotated:
                return image_bytes
            image = ImageOps.exif_transpose(source).convert("RGB")
        width, height = image.size
        if width > max_width:
            new_height = max(1, round(height * max_width / width))
            image = image.resize((max_width, new_height), Image.Resampling.LANCZOS)
        buffer = io.BytesIO()
        image.save(buffer, format="JPEG", quality=quality, optimize=True)
        return buffer.getvalue()
    except Exception:
        logger.warning("Image downscale failed, sending original bytes", exc_info=True)
        return image_bytes


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer an image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return "image/jpeg"
