"""Compression modules for image size and quality reduction."""

from .errors import CompressionError, DecodeError, EncodeError
from .options import Quality, CompressionOptions, default_options, normalize_quality
from .resize import fit_dimensions, fit_image, flatten_alpha
from .codec import decode_image, encode_image
from .jpeg_compressor import (
    JPEGCompressor,
    CompressionResult,
    encode_jpeg,
    compress_jpeg,
    compress_to_size
)
from .png_compressor import encode_png, compress_png
from .file_ops import compress_file
from .metrics import calculate_metrics, calculate_psnr, calculate_ssim, calculate_mse

__all__ = [
    'CompressionError',
    'DecodeError',
    'EncodeError',
    'Quality',
    'CompressionOptions',
    'default_options',
    'normalize_quality',
    'fit_dimensions',
    'fit_image',
    'flatten_alpha',
    'decode_image',
    'encode_image',
    'JPEGCompressor',
    'CompressionResult',
    'encode_jpeg',
    'compress_jpeg',
    'compress_to_size',
    'encode_png',
    'compress_png',
    'compress_file',
    'calculate_metrics',
    'calculate_psnr',
    'calculate_ssim',
    'calculate_mse'
]
