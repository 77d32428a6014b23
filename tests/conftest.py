"""
Pytest fixtures for stagblur tests
"""

import pytest

from stagblur import samples
from stagblur.bitmap import write_bitmap


@pytest.fixture
def noise_image():
    """Small non-square random image."""
    return samples.noise(13, 9, seed=42)


@pytest.fixture
def gradient_image():
    """Gradient image with distinct channels."""
    return samples.gradient(17, 11)


@pytest.fixture
def impulse_4x4():
    """4x4 black image with pixel (1, 1) set to 255."""
    return samples.impulse(4, 4, row=1, col=1)


@pytest.fixture
def bitmap_file(tmp_path, gradient_image):
    """A 24-bit BMP on disk.
    :return: The file path
    """
    return write_bitmap(tmp_path / "gradient.bmp", gradient_image)
