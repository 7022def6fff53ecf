"""Validation of user-supplied images at the service boundary."""

from __future__ import annotations

import base64
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from customizer.config.settings import MAX_UPLOAD_BYTES
from customizer.errors import ValidationRejectedError

ACCEPTED_CONTENT_TYPES = ("image/png", "image/jpeg", "image/webp")
_MIB = 1024 * 1024


class UploadRejectedError(ValidationRejectedError):
    """Raised when an uploaded image is refused before any processing."""

    def __init__(self, title: str, description: str) -> None:
        self.title = title
        self.description = description
        super().__init__(f"{title}: {description}")


class UploadTooLargeError(UploadRejectedError):
    """Raised for uploads above the configured size limit."""


def _describe_size(size: int) -> str:
    if size >= _MIB:
        return f"{size / _MIB:g}MB"
    if size >= 1024:
        return f"{size / 1024:g}KB"
    return f"{size} bytes"


def validate_upload(
    data: bytes,
    content_type: str | None,
    *,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> str:
    """Check size, MIME type and decodability of an image; return its MIME type."""

    if len(data) > max_bytes:
        raise UploadTooLargeError(
            "File too large",
            f"Please upload an image smaller than {_describe_size(max_bytes)}.",
        )
    if not data:
        raise UploadRejectedError("Empty file", "The selected file contains no data.")

    try:
        with Image.open(BytesIO(data)) as img:
            img.verify()
            detected = Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise UploadRejectedError(
            "Error reading file",
            "Could not read the selected file.",
        ) from exc

    mime = detected or content_type
    if mime not in ACCEPTED_CONTENT_TYPES:
        raise UploadRejectedError(
            "Unsupported image",
            "Please upload a PNG, JPEG or WebP image.",
        )
    return mime


def to_data_uri(data: bytes, content_type: str) -> str:
    """Encode raw bytes as a base64 ``data:`` URI."""

    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"
