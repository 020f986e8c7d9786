"""
Tests for the file-to-file wrapper.
"""
import logging

import cv2
import pytest

from compression import CompressionOptions, DecodeError, compress_file, decode_image

JPEG_MAGIC = b'\xff\xd8'


@pytest.fixture
def png_file(tmp_path, bgr_image):
    path = tmp_path / "input.png"
    assert cv2.imwrite(str(path), bgr_image)
    return path


class TestCompressFile:
    """Tests for compress_file."""

    def test_writes_jpeg(self, png_file, tmp_path):
        out = tmp_path / "out.jpg"
        written = compress_file(str(png_file), str(out))
        data = out.read_bytes()
        assert data.startswith(JPEG_MAGIC)
        assert written == len(data)

    def test_png_destination_still_gets_jpeg(self, png_file, tmp_path, caplog):
        out = tmp_path / "out.png"
        with caplog.at_level(logging.WARNING, logger="compression"):
            compress_file(str(png_file), str(out))
        assert out.read_bytes().startswith(JPEG_MAGIC)
        assert "out.png" in caplog.text

    def test_applies_options(self, png_file, tmp_path):
        out = tmp_path / "small.jpg"
        compress_file(str(png_file), str(out), CompressionOptions(quality=50, max_width=16))
        assert decode_image(out.read_bytes()).shape[:2] == (12, 16)

    def test_missing_input(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            compress_file(str(tmp_path / "missing.png"), str(tmp_path / "out.jpg"))

    def test_undecodable_input(self, tmp_path):
        bad = tmp_path / "bad.jpg"
        bad.write_bytes(b"not an image at all")
        out = tmp_path / "out.jpg"
        with pytest.raises(DecodeError):
            compress_file(str(bad), str(out))
        assert not out.exists()

    def test_unwritable_output(self, png_file, tmp_path):
        with pytest.raises(OSError):
            compress_file(str(png_file), str(tmp_path / "no_such_dir" / "out.jpg"))
