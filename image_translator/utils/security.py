"""Validation of uploaded image payloads."""
from io import BytesIO
from typing import Optional

from PIL import Image, UnidentifiedImageError

from image_translator.config import config
from image_translator.utils.logger import get_logger

logger = get_logger(__name__)

ALLOWED_IMAGE_FORMATS = {'JPEG', 'PNG', 'GIF', 'WEBP', 'BMP', 'TIFF'}


class ImageValidationError(ValueError):
    """Raised when an upload is not an acceptable image."""


def is_image_content_type(content_type: Optional[str]) -> bool:
    """Check that a declared MIME type is an image type (image/*)."""
    if not content_type:
        return False
    return content_type.split(';', 1)[0].strip().lower().startswith('image/')


def validate_image_bytes(
    data: bytes,
    content_type: Optional[str] = None,
    max_bytes: Optional[int] = None
) -> str:
    """
    Validate an uploaded payload is a decodable image within size limits.

    Args:
        data: Raw uploaded bytes
        content_type: Declared MIME type, checked when given
        max_bytes: Size limit (default: config.max_image_bytes)

    Returns:
        str: Detected image format (e.g. "PNG")

    Raises:
        ImageValidationError: If the payload is empty, too large, not
            declared as an image, or cannot be decoded as one
    """
    if not data:
        raise ImageValidationError("Empty upload")

    if content_type is not None and not is_image_content_type(content_type):
        logger.warning("Invalid upload content type", content_type=content_type)
        raise ImageValidationError(f"Not an image content type: {content_type}")

    limit = max_bytes or config.max_image_bytes
    if len(data) > limit:
        logger.warning("Image too large", size=len(data), max_bytes=limit)
        raise ImageValidationError(f"Image exceeds {limit} bytes")

    try:
        with Image.open(BytesIO(data)) as image:
            image_format = image.format
            image.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as e:
        logger.warning("Invalid image payload", error=str(e))
        raise ImageValidationError("Payload is not a readable image") from e

    if image_format not in ALLOWED_IMAGE_FORMATS:
        logger.warning("Unsupported image format", image_format=image_format)
        raise ImageValidationError(f"Unsupported image format: {image_format}")

    return image_format
