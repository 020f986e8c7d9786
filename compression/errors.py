"""
Exceptions raised by the compression modules.
I/O failures are left as the builtin OSError.
"""


class CompressionError(Exception):
    """Base class for compression failures."""


class DecodeError(CompressionError):
    """Input bytes could not be decoded into a pixel grid."""


class EncodeError(CompressionError):
    """The encoder rejected the pixel grid or failed internally."""
