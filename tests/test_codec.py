"""
Tests for the encode/decode boundary.
"""
import cv2
import numpy as np
import pytest

from compression import DecodeError, EncodeError, decode_image, encode_image


class TestDecodeImage:
    """Tests for decoding bytes into pixel grids."""

    def test_empty_input(self):
        with pytest.raises(DecodeError):
            decode_image(b"")

    def test_garbage_input(self):
        with pytest.raises(DecodeError):
            decode_image(b"definitely not an image")

    def test_decodes_png(self, bgr_image):
        data = encode_image(bgr_image, '.png')
        np.testing.assert_array_equal(decode_image(data), bgr_image)

    def test_sixteen_bit_scaled_to_eight(self):
        deep = np.full((4, 4, 3), 65535, dtype=np.uint16)
        decoded = decode_image(encode_image(deep, '.png'))
        assert decoded.dtype == np.uint8
        assert decoded.max() == 255

    def test_grayscale_kept(self, gray_image):
        decoded = decode_image(encode_image(gray_image, '.png'))
        assert decoded.shape == gray_image.shape


class TestEncodeImage:
    """Tests for encoder error mapping."""

    def test_unknown_extension(self, bgr_image):
        with pytest.raises(EncodeError):
            encode_image(bgr_image, '.notaformat')

    def test_failed_encode(self, bgr_image, monkeypatch):
        monkeypatch.setattr(cv2, 'imencode', lambda *args: (False, None))
        with pytest.raises(EncodeError):
            encode_image(bgr_image, '.jpg')
