from __future__ import annotations

import base64
import binascii
import logging
import mimetypes
import re
from typing import Optional

from errors import (
    EmptyImageError,
    ImageTooLargeError,
    InvalidImageEncodingError,
    UnsupportedImageTypeError,
)

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = ("image/png", "image/jpeg", "image/webp")
MAX_IMAGE_BYTES = 10 * 1024 * 1024
RECOMMENDED_IMAGE_BYTES = 4 * 1024 * 1024

_DATA_URL_PATTERN = re.compile(r"^data:(image/\w+);base64,(.*)$")


def _format_megabytes(size: int) -> str:
    return f"{size / 1024 / 1024:.1f}MB"


def resolve_mime_type(content_type: Optional[str], filename: Optional[str]) -> str:
    """Prefer the declared content type, otherwise guess it from the filename."""
    if content_type and content_type != "application/octet-stream":
        return content_type.split(";", 1)[0].strip().lower()
    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed
    return ""


def validate_image(mime_type: str, size: int) -> Optional[str]:
    """Reject unsupported or oversized uploads.

    Returns a warning message for files above the recommended size, or None.
    """
    if mime_type not in ALLOWED_IMAGE_TYPES:
        raise UnsupportedImageTypeError()

    if size <= 0:
        raise EmptyImageError()

    if size > MAX_IMAGE_BYTES:
        raise ImageTooLargeError(
            f"File is too large ({_format_megabytes(size)}). Please upload an image smaller than 10MB.",
            size=size,
        )

    if size > RECOMMENDED_IMAGE_BYTES:
        warning = f"Large file detected ({_format_megabytes(size)}). This may take longer to process."
        logger.warning(warning)
        return warning
    return None


def to_data_url(payload: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(payload).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def parse_data_url(image_data: str) -> tuple[str, bytes]:
    """Split an embedded image reference into its MIME type and raw bytes."""
    match = _DATA_URL_PATTERN.match(image_data or "")
    if not match:
        raise InvalidImageEncodingError()

    mime_type, encoded = match.groups()
    try:
        payload = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidImageEncodingError() from exc
    return mime_type, payload
