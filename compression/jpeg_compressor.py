"""
JPEG compression module with target size optimization.
Implements a descending quality search for achieving a byte budget.
"""

import logging

import cv2
import numpy as np
from typing import BinaryIO, Dict, List, Optional, Tuple
from dataclasses import dataclass

from .codec import encode_image
from .options import CompressionOptions, default_options, normalize_quality
from .resize import fit_image, flatten_alpha


logger = logging.getLogger(__name__)

START_QUALITY = 95
QUALITY_STEP = 5
MIN_QUALITY = 10


@dataclass
class CompressionResult:
    """Result from a size-targeted JPEG compression."""
    image_bytes: bytes
    quality: int
    file_size_bytes: int
    target_bytes: int
    within_target: bool
    iterations: int

    @property
    def file_size_kb(self) -> float:
        return self.file_size_bytes / 1024.0


def encode_jpeg(image: np.ndarray, quality: int) -> bytes:
    """
    Encode image as JPEG at the given quality.

    Transparent images are composited over black, since JPEG has no
    alpha channel. Quality is passed through unchanged.

    Args:
        image: Grayscale, BGR or BGRA numpy array
        quality: JPEG quality (1-100)

    Returns:
        Compressed JPEG bytes
    """
    return encode_image(flatten_alpha(image), '.jpg',
                        [cv2.IMWRITE_JPEG_QUALITY, int(quality)])


class JPEGCompressor:
    """
    JPEG compression with size-targeted quality selection.

    Features:
    - Linear quality descent for a target file size
    - Batch compression to multiple targets
    - Quality vs. size sampling
    """

    def __init__(self, start_quality: int = START_QUALITY,
                 quality_step: int = QUALITY_STEP,
                 min_quality: int = MIN_QUALITY):
        """
        Initialize compressor.

        Args:
            start_quality: First quality tried by the search
            quality_step: Amount quality drops between attempts
            min_quality: Quality floor, tried last
        """
        if quality_step <= 0:
            raise ValueError(f"quality_step must be positive, got {quality_step}")
        self.start_quality = start_quality
        self.quality_step = quality_step
        self.min_quality = min_quality

    def compress(self, image: np.ndarray, quality: int) -> bytes:
        """
        Compress image to JPEG with specified quality.

        Args:
            image: BGR numpy array
            quality: JPEG quality; values outside (0, 100] become 80

        Returns:
            Compressed JPEG bytes
        """
        return encode_jpeg(image, normalize_quality(quality))

    def compress_to_target_size(self, image: np.ndarray,
                                target_bytes: int) -> CompressionResult:
        """
        Find the highest quality whose output fits within target_bytes.

        Qualities are tried from start_quality downwards in quality_step
        increments. The first one that fits is returned. If none fits,
        the image is encoded at min_quality and returned anyway; check
        within_target to tell the two cases apart.

        Args:
            image: BGR numpy array
            target_bytes: Maximum acceptable size in bytes

        Returns:
            CompressionResult with compressed data and metadata

        Raises:
            EncodeError: if any encode attempt fails
        """
        quality = self.start_quality
        iterations = 0

        while quality >= self.min_quality:
            iterations += 1
            compressed = encode_jpeg(image, quality)
            logger.debug("Quality %d -> %d bytes (target %d)",
                         quality, len(compressed), target_bytes)

            if len(compressed) <= target_bytes:
                logger.info("Reached %d bytes at quality %d after %d attempt(s)",
                            len(compressed), quality, iterations)
                return CompressionResult(
                    image_bytes=compressed,
                    quality=quality,
                    file_size_bytes=len(compressed),
                    target_bytes=target_bytes,
                    within_target=True,
                    iterations=iterations
                )

            quality -= self.quality_step

        # Best effort at the quality floor
        iterations += 1
        compressed = encode_jpeg(image, self.min_quality)
        logger.warning("Target of %d bytes not reachable; returning %d bytes at quality %d",
                       target_bytes, len(compressed), self.min_quality)

        return CompressionResult(
            image_bytes=compressed,
            quality=self.min_quality,
            file_size_bytes=len(compressed),
            target_bytes=target_bytes,
            within_target=len(compressed) <= target_bytes,
            iterations=iterations
        )

    def compress_to_multiple_targets(self, image: np.ndarray,
                                     targets_bytes: List[int]) -> Dict[int, CompressionResult]:
        """
        Compress image to multiple target sizes.

        Args:
            image: BGR numpy array
            targets_bytes: List of target sizes in bytes

        Returns:
            Dictionary mapping target size to CompressionResult
        """
        results = {}

        for target in sorted(targets_bytes, reverse=True):
            results[target] = self.compress_to_target_size(image, target)

        return results

    def get_quality_vs_size_curve(self, image: np.ndarray,
                                  quality_steps: int = 20) -> List[Tuple[int, float]]:
        """
        Generate quality vs file size data points.

        Args:
            image: BGR numpy array
            quality_steps: Number of quality levels to test

        Returns:
            List of (quality, size_kb) tuples
        """
        step = max(1, 100 // quality_steps)
        results = []

        for q in range(step, 101, step):
            compressed = encode_jpeg(image, q)
            results.append((q, len(compressed) / 1024.0))

        return results


def compress_jpeg(image: np.ndarray, sink: BinaryIO,
                  options: Optional[CompressionOptions] = None) -> int:
    """
    Fit image to the option limits and write it to sink as JPEG.

    Args:
        image: BGR numpy array
        sink: Writable binary stream
        options: Compression options (default: quality 80, no limits)

    Returns:
        Number of bytes written

    Raises:
        EncodeError: if the encoder fails
        OSError: if writing to sink fails
    """
    if options is None:
        options = default_options()

    fitted = fit_image(image, options.max_width, options.max_height)
    data = encode_jpeg(fitted, normalize_quality(options.quality))
    sink.write(data)
    return len(data)


def compress_to_size(image: np.ndarray, target_bytes: int) -> bytes:
    """
    Convenience function to compress image to a target size.

    Args:
        image: BGR numpy array
        target_bytes: Target size in bytes

    Returns:
        JPEG bytes at or under target_bytes, or the quality-10
        encoding if the target cannot be reached
    """
    return JPEGCompressor().compress_to_target_size(image, target_bytes).image_bytes
