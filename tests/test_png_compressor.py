"""
Tests for lossless PNG encoding.
"""
import io

import numpy as np
import pytest

from compression import CompressionOptions, EncodeError, compress_png, decode_image, encode_png

PNG_MAGIC = b'\x89PNG\r\n\x1a\n'


def _png(image, options=None):
    buffer = io.BytesIO()
    compress_png(image, buffer, options)
    return buffer.getvalue()


class TestCompressPNG:
    """Tests for lossless stream encoding."""

    def test_writes_png(self, bgr_image):
        assert _png(bgr_image).startswith(PNG_MAGIC)

    def test_lossless(self, bgr_image):
        np.testing.assert_array_equal(decode_image(_png(bgr_image)), bgr_image)

    def test_quality_has_no_effect(self, bgr_image):
        low = _png(bgr_image, CompressionOptions(quality=10))
        high = _png(bgr_image, CompressionOptions(quality=100))
        assert low == high

    def test_uses_maximum_compression(self, bgr_image):
        assert _png(bgr_image) == encode_png(bgr_image, 9)

    def test_applies_dimension_limits(self, bgr_image):
        data = _png(bgr_image, CompressionOptions(max_height=12))
        assert decode_image(data).shape == (12, 16, 3)

    def test_alpha_kept_without_resize(self, bgra_image):
        decoded = decode_image(_png(bgra_image))
        np.testing.assert_array_equal(decoded, bgra_image)

    def test_axis_truncated_to_zero(self):
        narrow = np.full((2000, 3, 3), 128, dtype=np.uint8)
        with pytest.raises(EncodeError):
            _png(narrow, CompressionOptions(max_height=400))

    def test_sink_failure_propagates(self, bgr_image, tmp_path):
        path = tmp_path / "out.png"
        path.write_bytes(b"")
        with open(path, 'rb') as read_only:
            with pytest.raises(OSError):
                compress_png(bgr_image, read_only)
