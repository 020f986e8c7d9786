"""
File-to-file compression helpers.
"""

import logging
import os

from typing import Optional

from .codec import decode_image
from .jpeg_compressor import compress_jpeg
from .options import CompressionOptions


logger = logging.getLogger(__name__)

JPEG_EXTENSIONS = ('.jpg', '.jpeg')


def compress_file(input_path: str, output_path: str,
                  options: Optional[CompressionOptions] = None) -> int:
    """
    Compress an image file into a JPEG file.

    The output is always JPEG, whatever extension output_path has.

    Args:
        input_path: Path of the image to read
        output_path: Path to write the JPEG to
        options: Compression options (default: quality 80, no limits)

    Returns:
        Number of bytes written

    Raises:
        OSError: if either file cannot be opened, read or written
        DecodeError: if the input is not a decodable image
        EncodeError: if the encoder fails
    """
    with open(input_path, 'rb') as src:
        data = src.read()

    image = decode_image(data)

    ext = os.path.splitext(output_path)[1].lower()
    if ext not in JPEG_EXTENSIONS:
        logger.warning("Writing JPEG data to %s despite its %r extension",
                       output_path, ext)

    with open(output_path, 'wb') as out:
        written = compress_jpeg(image, out, options)

    logger.info("Compressed %s -> %s (%d bytes)", input_path, output_path, written)
    return written
