"""
Thin wrapper around the OpenCV encoders.
"""

import cv2
import numpy as np
from typing import List, Optional

from .errors import DecodeError, EncodeError


def encode_image(image: np.ndarray, ext: str,
                 params: Optional[List[int]] = None) -> bytes:
    """
    Encode an image into an in-memory byte string.

    Args:
        image: Pixel grid to encode
        ext: Encoder extension, e.g. '.jpg' or '.png'
        params: OpenCV imwrite parameters

    Returns:
        Encoded bytes

    Raises:
        EncodeError: if the encoder rejects the image
    """
    try:
        success, buffer = cv2.imencode(ext, image, params or [])
    except cv2.error as exc:
        raise EncodeError(f"Failed to encode image as {ext}: {exc}") from exc

    if not success:
        raise EncodeError(f"Failed to encode image as {ext}")

    return buffer.tobytes()


def to_uint8(image: np.ndarray) -> np.ndarray:
    """
    Scale 16-bit samples down to 8 bits; other dtypes pass through.

    Args:
        image: Decoded image

    Returns:
        uint8 image
    """
    if image.dtype == np.uint16:
        return (image // 257).astype(np.uint8)
    return image


def decode_image(data: bytes) -> np.ndarray:
    """
    Decode encoded image bytes into a pixel grid.

    Alpha channels are kept, so PNG input with transparency comes back
    as BGRA.

    Args:
        data: Encoded image bytes (JPEG, PNG, ...)

    Returns:
        Grayscale, BGR or BGRA uint8 numpy array

    Raises:
        DecodeError: if the bytes are not a decodable image
    """
    if not data:
        raise DecodeError("Could not decode image from empty input")

    nparr = np.frombuffer(data, np.uint8)
    try:
        image = cv2.imdecode(nparr, cv2.IMREAD_UNCHANGED)
    except cv2.error as exc:
        raise DecodeError(f"Could not decode image: {exc}") from exc

    if image is None:
        raise DecodeError("Could not decode image from bytes")

    return to_uint8(image)
