"""
Tests for encoding still images as data URIs.
"""
import base64

import pytest

from src.shared.application.services.still_image_source import StillImageSource

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def test_png_to_data_uri(tmp_path):
    path = tmp_path / "still.png"
    path.write_bytes(PNG_BYTES)

    uri = StillImageSource().to_data_uri(path)

    prefix = "data:image/png;base64,"
    assert uri.startswith(prefix)
    assert base64.b64decode(uri[len(prefix):]) == PNG_BYTES


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        StillImageSource().to_data_uri(tmp_path / "missing.png")


def test_non_image_rejected(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("not an image")

    with pytest.raises(ValueError):
        StillImageSource().to_data_uri(path)


def test_size_limit(tmp_path):
    path = tmp_path / "big.jpg"
    path.write_bytes(b"x" * 11)

    with pytest.raises(ValueError):
        StillImageSource(max_bytes=10).to_data_uri(path)
