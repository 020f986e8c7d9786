"""
Shared fixtures: small synthetic images built with numpy.
"""
import numpy as np
import pytest


@pytest.fixture
def bgr_image():
    """64x48 BGR image with a gradient and fixed noise."""
    rng = np.random.RandomState(42)
    y, x = np.mgrid[0:48, 0:64]
    base = np.stack([x * 4, y * 5, (x + y) * 2], axis=2).astype(np.int16)
    noise = rng.randint(-20, 20, size=base.shape)
    return np.clip(base + noise, 0, 255).astype(np.uint8)


@pytest.fixture
def noisy_image():
    """256x256 BGR random noise, which JPEG compresses poorly."""
    rng = np.random.RandomState(7)
    return rng.randint(0, 256, size=(256, 256, 3)).astype(np.uint8)


@pytest.fixture
def bgra_image(bgr_image):
    """BGR fixture with a left-to-right alpha ramp."""
    alpha = np.tile(np.linspace(0, 255, bgr_image.shape[1]).astype(np.uint8),
                    (bgr_image.shape[0], 1))
    return np.dstack([bgr_image, alpha])


@pytest.fixture
def gray_image():
    """40x30 single-channel image."""
    y, x = np.mgrid[0:30, 0:40]
    return ((x * 6 + y * 2) % 256).astype(np.uint8)
