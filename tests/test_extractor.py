"""Tests for icon re-encoding and the APK extractor."""

import io

import pytest
from PIL import Image, UnidentifiedImageError

from apkhub.errors import ExtractionError
from apkhub.extractor import to_png


class TestToPng:
    def test_reencodes_other_formats(self):
        src = io.BytesIO()
        Image.new("RGB", (8, 8), "red").save(src, format="BMP")
        png = to_png(src.getvalue())
        assert png.startswith(b"\x89PNG")
        with Image.open(io.BytesIO(png)) as img:
            assert img.size == (8, 8)

    def test_rejects_non_images(self):
        with pytest.raises(UnidentifiedImageError):
            to_png(b"<adaptive-icon/>")


class TestApkExtractor:
    def test_garbage_file_raises_extraction_error(self, tmp_path):
        pytest.importorskip("pyaxmlparser")
        from apkhub.extractor import ApkExtractor

        path = tmp_path / "broken.apk"
        path.write_bytes(b"definitely not a zip")
        with pytest.raises(ExtractionError):
            ApkExtractor().extract(path)
