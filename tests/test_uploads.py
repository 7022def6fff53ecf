"""Tests for upload validation at the boundary."""

from __future__ import annotations

import base64
from io import BytesIO

import pytest
from PIL import Image

from customizer.uploads import UploadRejectedError, UploadTooLargeError, to_data_uri, validate_upload


def test_png_is_accepted(png_bytes: bytes) -> None:
    assert validate_upload(png_bytes, "application/octet-stream") == "image/png"


def test_jpeg_detected_from_content() -> None:
    buffer = BytesIO()
    Image.new("RGB", (4, 4), "green").save(buffer, format="JPEG")

    assert validate_upload(buffer.getvalue(), None) == "image/jpeg"


def test_oversized_upload_rejected(png_bytes: bytes) -> None:
    with pytest.raises(UploadTooLargeError) as exc_info:
        validate_upload(png_bytes, "image/png", max_bytes=len(png_bytes) - 1)

    assert exc_info.value.title == "File too large"


def test_default_limit_is_four_mebibytes() -> None:
    with pytest.raises(UploadTooLargeError) as exc_info:
        validate_upload(b"\0" * (4 * 1024 * 1024 + 1), "image/png")

    assert exc_info.value.description == "Please upload an image smaller than 4MB."


@pytest.mark.parametrize(
    ("max_bytes", "expected"),
    [(16, "16 bytes"), (512 * 1024, "512KB"), (1536 * 1024, "1.5MB")],
)
def test_limit_below_a_mebibyte_is_described_exactly(png_bytes: bytes, max_bytes: int, expected: str) -> None:
    data = png_bytes + b"\0" * max_bytes

    with pytest.raises(UploadTooLargeError) as exc_info:
        validate_upload(data, "image/png", max_bytes=max_bytes)

    assert exc_info.value.description == f"Please upload an image smaller than {expected}."


def test_unsupported_format_rejected() -> None:
    buffer = BytesIO()
    Image.new("RGB", (4, 4), "green").save(buffer, format="BMP")

    with pytest.raises(UploadRejectedError):
        validate_upload(buffer.getvalue(), "image/bmp")


@pytest.mark.parametrize("payload", [b"", b"GIF? no, just text"])
def test_unreadable_payload_rejected(payload: bytes) -> None:
    with pytest.raises(UploadRejectedError):
        validate_upload(payload, "image/png")


def test_to_data_uri(png_bytes: bytes) -> None:
    uri = to_data_uri(png_bytes, "image/png")

    prefix, encoded = uri.split(",", 1)
    assert prefix == "data:image/png;base64"
    assert base64.b64decode(encoded) == png_bytes
