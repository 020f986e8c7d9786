"""
Compression options and named quality levels.
"""

from dataclasses import dataclass
from enum import IntEnum


DEFAULT_QUALITY = 80


class Quality(IntEnum):
    """Named JPEG quality levels for easy reference."""
    LOW = 30
    MEDIUM = 60
    HIGH = 80
    BEST = 95


@dataclass
class CompressionOptions:
    """
    Options controlling resize and encode behavior.

    Quality is not validated here; out-of-range values are replaced
    by DEFAULT_QUALITY when the image is encoded. A max dimension of
    0 (or less) leaves that axis unconstrained.
    """
    quality: int = DEFAULT_QUALITY
    max_width: int = 0
    max_height: int = 0


def default_options() -> CompressionOptions:
    """Return quality 80 with no dimension limits."""
    return CompressionOptions(quality=DEFAULT_QUALITY, max_width=0, max_height=0)


def normalize_quality(quality: int) -> int:
    """
    Map a requested quality onto the encoder's accepted range.

    100 is kept, but 0, negatives and anything above 100 fall back to
    DEFAULT_QUALITY.
    """
    if quality <= 0 or quality > 100:
        return DEFAULT_QUALITY
    return int(quality)
