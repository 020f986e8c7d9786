"""
Tests for quality metrics.
"""
import pytest

from compression import encode_jpeg, encode_png
from compression.metrics import (
    QualityMetrics,
    calculate_metrics,
    calculate_mse,
    calculate_psnr,
    calculate_ssim,
    get_quality_assessment
)


class TestMetrics:
    """Tests for PSNR, SSIM and size figures."""

    def test_identical_images(self, bgr_image):
        assert calculate_mse(bgr_image, bgr_image) == 0
        assert calculate_psnr(bgr_image, bgr_image) == float('inf')
        assert calculate_ssim(bgr_image, bgr_image) > 0.999

    def test_ssim_symmetric(self, bgr_image):
        degraded = bgr_image // 2
        assert calculate_ssim(bgr_image, degraded) == pytest.approx(calculate_ssim(degraded, bgr_image))

    def test_ssim_drops_for_unrelated_image(self, bgr_image, noisy_image):
        unrelated = noisy_image[:48, :64]
        assert calculate_ssim(bgr_image, unrelated) < 0.5

    def test_lossless_output(self, bgr_image):
        metrics = calculate_metrics(bgr_image, encode_png(bgr_image))
        assert metrics.psnr == float('inf')
        assert metrics.file_size_bytes > 0

    def test_lossy_output(self, bgr_image):
        data = encode_jpeg(bgr_image, 90)
        metrics = calculate_metrics(bgr_image, data)
        assert 20 < metrics.psnr < float('inf')
        assert 0 < metrics.ssim <= 1
        assert metrics.compression_ratio == bgr_image.nbytes / len(data)
        assert metrics.bits_per_pixel == len(data) * 8 / (64 * 48)

    def test_lower_quality_scores_lower(self, noisy_image):
        high = calculate_metrics(noisy_image, encode_jpeg(noisy_image, 95))
        low = calculate_metrics(noisy_image, encode_jpeg(noisy_image, 10))
        assert high.psnr > low.psnr

    def test_transparent_original(self, bgra_image):
        metrics = calculate_metrics(bgra_image, encode_jpeg(bgra_image, 95))
        assert metrics.psnr > 25

    def test_assessment(self):
        metrics = QualityMetrics(psnr=float('inf'), ssim=1.0, mse=0.0,
                                 file_size_bytes=2048, compression_ratio=4.0,
                                 bits_per_pixel=6.0)
        assessment = get_quality_assessment(metrics)
        assert assessment["psnr_rating"] == "Identical"
        assert assessment["ssim_rating"] == "Excellent"
        assert assessment["details"]["size_kb"] == 2.0

    def test_assessment_poor(self):
        metrics = QualityMetrics(psnr=20.0, ssim=0.5, mse=500.0,
                                 file_size_bytes=100, compression_ratio=100.0,
                                 bits_per_pixel=0.1)
        assessment = get_quality_assessment(metrics)
        assert assessment["psnr_rating"] == "Poor"
        assert assessment["ssim_rating"] == "Poor"
