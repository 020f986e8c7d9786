"""
Quality metrics for compressed output.
Compares a decoded result against the pixel grid it was encoded from.
"""

import cv2
import numpy as np
from typing import Dict, Any
from dataclasses import dataclass

from .codec import decode_image
from .resize import flatten_alpha


MAX_PIXEL = 255.0

SSIM_SIGMA = 1.5
SSIM_C1 = (0.01 * MAX_PIXEL) ** 2
SSIM_C2 = (0.03 * MAX_PIXEL) ** 2


@dataclass
class QualityMetrics:
    """Quality and size figures for one compressed output."""
    psnr: float
    ssim: float
    mse: float
    file_size_bytes: int
    compression_ratio: float
    bits_per_pixel: float


def _as_gray(image: np.ndarray) -> np.ndarray:
    image = flatten_alpha(image)
    if image.ndim == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    return image


def _match(original: np.ndarray, compressed: np.ndarray) -> np.ndarray:
    """Bring compressed to the size and channel layout of original."""
    original = flatten_alpha(original)
    compressed = flatten_alpha(compressed)

    if original.shape[:2] != compressed.shape[:2]:
        compressed = cv2.resize(compressed, (original.shape[1], original.shape[0]),
                                interpolation=cv2.INTER_AREA)

    if original.ndim == 2 and compressed.ndim == 3:
        compressed = cv2.cvtColor(compressed, cv2.COLOR_BGR2GRAY)
    elif original.ndim == 3 and compressed.ndim == 2:
        compressed = cv2.cvtColor(compressed, cv2.COLOR_GRAY2BGR)

    return compressed


def calculate_mse(original: np.ndarray, compressed: np.ndarray) -> float:
    """
    Calculate Mean Squared Error between two images.

    Returns:
        MSE value (lower is better, 0 = identical)
    """
    compressed = _match(original, compressed)
    diff = flatten_alpha(original).astype(np.float64) - compressed.astype(np.float64)
    return float(np.mean(diff ** 2))


def calculate_psnr(original: np.ndarray, compressed: np.ndarray) -> float:
    """
    Calculate Peak Signal-to-Noise Ratio in dB.

    Returns:
        PSNR (higher is better, inf = identical)
    """
    mse = calculate_mse(original, compressed)
    if mse == 0:
        return float('inf')
    return float(10 * np.log10((MAX_PIXEL ** 2) / mse))


def calculate_ssim(original: np.ndarray, compressed: np.ndarray,
                   window_size: int = 11) -> float:
    """
    Calculate the Structural Similarity Index on luminance.

    Args:
        original: Reference image
        compressed: Image to compare
        window_size: Size of the Gaussian window

    Returns:
        SSIM value (1 = identical)
    """
    reference = _as_gray(original).astype(np.float64)
    candidate = _as_gray(_match(original, compressed)).astype(np.float64)

    def blur(values: np.ndarray) -> np.ndarray:
        return cv2.GaussianBlur(values, (window_size, window_size), SSIM_SIGMA)

    mean_ref = blur(reference)
    mean_cand = blur(candidate)
    var_ref = blur(reference * reference) - mean_ref * mean_ref
    var_cand = blur(candidate * candidate) - mean_cand * mean_cand
    covariance = blur(reference * candidate) - mean_ref * mean_cand

    luminance = (2 * mean_ref * mean_cand + SSIM_C1) / (mean_ref ** 2 + mean_cand ** 2 + SSIM_C1)
    structure = (2 * covariance + SSIM_C2) / (var_ref + var_cand + SSIM_C2)

    return float(np.mean(luminance * structure))


def calculate_metrics(original: np.ndarray, encoded: bytes) -> QualityMetrics:
    """
    Decode an encoded output and measure it against the original.

    Compression ratio is relative to the raw size of the original
    array; bits per pixel are relative to the decoded output size.

    Args:
        original: Pixel grid that was compressed
        encoded: Encoded bytes produced from it

    Returns:
        QualityMetrics for the output
    """
    decoded = decode_image(encoded)
    size = len(encoded)
    height, width = decoded.shape[:2]

    return QualityMetrics(
        psnr=calculate_psnr(original, decoded),
        ssim=calculate_ssim(original, decoded),
        mse=calculate_mse(original, decoded),
        file_size_bytes=size,
        compression_ratio=original.nbytes / size if size else float('inf'),
        bits_per_pixel=size * 8 / (width * height) if width * height else 0.0
    )


def get_quality_assessment(metrics: QualityMetrics) -> Dict[str, Any]:
    """
    Get human-readable ratings for a set of metrics.

    Returns:
        Dictionary with PSNR and SSIM ratings and rounded figures
    """
    # >40 dB imperceptible, <25 dB clearly degraded
    if metrics.psnr == float('inf'):
        psnr_rating = "Identical"
    elif metrics.psnr > 40:
        psnr_rating = "Excellent"
    elif metrics.psnr > 35:
        psnr_rating = "Very Good"
    elif metrics.psnr > 30:
        psnr_rating = "Good"
    elif metrics.psnr > 25:
        psnr_rating = "Fair"
    else:
        psnr_rating = "Poor"

    if metrics.ssim > 0.95:
        ssim_rating = "Excellent"
    elif metrics.ssim > 0.90:
        ssim_rating = "Very Good"
    elif metrics.ssim > 0.85:
        ssim_rating = "Good"
    elif metrics.ssim > 0.80:
        ssim_rating = "Fair"
    else:
        ssim_rating = "Poor"

    return {
        "psnr_rating": psnr_rating,
        "ssim_rating": ssim_rating,
        "details": {
            "psnr_db": round(metrics.psnr, 2) if metrics.psnr != float('inf') else "Identical",
            "ssim_index": round(metrics.ssim, 4),
            "mse": round(metrics.mse, 2),
            "size_kb": round(metrics.file_size_bytes / 1024.0, 1),
            "compression_ratio": round(metrics.compression_ratio, 1),
            "bits_per_pixel": round(metrics.bits_per_pixel, 2),
        }
    }
