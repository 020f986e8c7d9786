"""
Lossless PNG compression at maximum effort.
"""

import cv2
import numpy as np
from typing import BinaryIO, Optional

from .codec import encode_image
from .options import CompressionOptions, default_options
from .resize import fit_image


MAX_COMPRESSION_LEVEL = 9


def encode_png(image: np.ndarray,
               compression_level: int = MAX_COMPRESSION_LEVEL) -> bytes:
    """
    Encode image as PNG.

    Args:
        image: Grayscale, BGR or BGRA numpy array
        compression_level: zlib effort (0-9)

    Returns:
        PNG bytes
    """
    return encode_image(image, '.png', [cv2.IMWRITE_PNG_COMPRESSION, compression_level])


def compress_png(image: np.ndarray, sink: BinaryIO,
                 options: Optional[CompressionOptions] = None) -> int:
    """
    Fit image to the option limits and write it to sink as PNG.

    PNG is lossless, so options.quality has no effect.

    Args:
        image: Grayscale, BGR or BGRA numpy array
        sink: Writable binary stream
        options: Compression options (default: no limits)

    Returns:
        Number of bytes written

    Raises:
        EncodeError: if the encoder fails
        OSError: if writing to sink fails
    """
    if options is None:
        options = default_options()

    fitted = fit_image(image, options.max_width, options.max_height)
    data = encode_png(fitted)
    sink.write(data)
    return len(data)
