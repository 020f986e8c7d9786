"""
Common image utility functions for the compression app.
"""

import cv2
import numpy as np
from typing import Union, BinaryIO
from PIL import Image

from compression import decode_image, flatten_alpha


def load_image(source: Union[str, bytes, BinaryIO, np.ndarray]) -> np.ndarray:
    """
    Load image from various sources.

    Args:
        source: File path, bytes, readable binary stream, or numpy array

    Returns:
        Grayscale, BGR or BGRA numpy array

    Raises:
        DecodeError: if the data is not a decodable image
        OSError: if the path cannot be read
    """
    if isinstance(source, np.ndarray):
        return source

    if isinstance(source, str):
        with open(source, 'rb') as f:
            return decode_image(f.read())

    if isinstance(source, (bytes, bytearray)):
        return decode_image(bytes(source))

    if hasattr(source, 'read'):
        if hasattr(source, 'seek'):
            source.seek(0)
        return decode_image(source.read())

    raise TypeError(f"Unsupported image source type: {type(source)}")


def bgr_to_pil(image: np.ndarray) -> Image.Image:
    """
    Convert an OpenCV array to a PIL Image for display.

    Args:
        image: Grayscale, BGR or BGRA numpy array

    Returns:
        PIL Image (L, RGB or RGBA)
    """
    if image.ndim == 2:
        return Image.fromarray(image)
    if image.shape[2] == 4:
        return Image.fromarray(cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA))
    return Image.fromarray(cv2.cvtColor(image, cv2.COLOR_BGR2RGB))


def get_image_info(image: np.ndarray) -> dict:
    """
    Get information about an image.

    Args:
        image: Input image

    Returns:
        Dictionary with image information
    """
    h, w = image.shape[:2]
    channels = image.shape[2] if image.ndim > 2 else 1

    return {
        "width": w,
        "height": h,
        "channels": channels,
        "has_alpha": channels == 4,
        "dtype": str(image.dtype),
        "raw_size_bytes": image.nbytes,
        "aspect_ratio": round(w / h, 3) if h else 0.0,
        "mean_brightness": round(float(np.mean(flatten_alpha(image))), 2),
    }
