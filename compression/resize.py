"""
Dimension fitting for compression.
Shrinks images to bounding dimensions while preserving aspect ratio.
"""

import logging

import cv2
import numpy as np
from typing import Tuple

from .errors import EncodeError


logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND = (0, 0, 0)


def fit_dimensions(width: int, height: int,
                   max_width: int, max_height: int) -> Tuple[int, int]:
    """
    Compute target dimensions within the given limits.

    The width limit is applied first, then the height limit is applied
    to the already scaled size. Each pass truncates the dependent axis,
    so the order matters for the final rounding.

    Args:
        width: Source width
        height: Source height
        max_width: Maximum width (<= 0 means no limit)
        max_height: Maximum height (<= 0 means no limit)

    Returns:
        Tuple of (new_width, new_height)
    """
    new_w, new_h = width, height

    # Width pass
    if max_width > 0 and new_w > max_width:
        ratio = max_width / new_w
        new_w = max_width
        new_h = int(height * ratio)

    # Height pass, on the result of the width pass
    if max_height > 0 and new_h > max_height:
        ratio = max_height / new_h
        new_h = max_height
        new_w = int(new_w * ratio)

    return new_w, new_h


def flatten_alpha(image: np.ndarray,
                  background: Tuple[int, int, int] = DEFAULT_BACKGROUND) -> np.ndarray:
    """
    Composite a BGRA image over an opaque background color.

    Args:
        image: Input image
        background: BGR background color

    Returns:
        BGR image, or the input itself if it has no alpha channel
    """
    if image.ndim != 3 or image.shape[2] != 4:
        return image

    color = image[:, :, :3].astype(np.float32)
    alpha = image[:, :, 3:4].astype(np.float32) / 255.0
    bg = np.array(background, dtype=np.float32).reshape(1, 1, 3)

    blended = color * alpha + bg * (1.0 - alpha)
    return np.clip(np.rint(blended), 0, 255).astype(np.uint8)


def fit_image(image: np.ndarray, max_width: int, max_height: int,
              background: Tuple[int, int, int] = DEFAULT_BACKGROUND) -> np.ndarray:
    """
    Resize image to fit within max_width x max_height.

    The input is never modified. When no resize is needed the same
    array object is returned.

    Args:
        image: Input image (grayscale, BGR or BGRA)
        max_width: Maximum width (<= 0 means no limit)
        max_height: Maximum height (<= 0 means no limit)
        background: BGR color to composite transparent pixels over

    Returns:
        Resized image, or the input image if it already fits

    Raises:
        EncodeError: if the resampler rejects the computed size, e.g. an
            axis truncated to zero
    """
    if max_width <= 0 and max_height <= 0:
        return image

    h, w = image.shape[:2]
    new_w, new_h = fit_dimensions(w, h, max_width, max_height)

    if new_w == w and new_h == h:
        return image

    logger.debug("Resizing %dx%d -> %dx%d", w, h, new_w, new_h)

    source = flatten_alpha(image, background)
    try:
        return cv2.resize(source, (new_w, new_h), interpolation=cv2.INTER_CUBIC)
    except cv2.error as exc:
        raise EncodeError(f"Failed to resize {w}x{h} to {new_w}x{new_h}: {exc}") from exc
