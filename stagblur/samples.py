# stagblur - Sample Images
"""
Synthetic images for demos, benchmarks and tests.
"""

from __future__ import annotations

import numpy as np

from .image import ChannelImage


def flat(width: int, height: int, color: tuple[int, int, int] = (128, 64, 32)) -> ChannelImage:
    """Uniform image filled with ``color``."""
    pixels = np.empty((height, width, 3), dtype=np.uint8)
    pixels[:, :] = color
    return ChannelImage.from_pixels(pixels)


def impulse(
    width: int,
    height: int,
    row: int,
    col: int,
    value: int = 255,
) -> ChannelImage:
    """Black image with a single bright pixel at ``(row, col)`` in every channel."""
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    pixels[row, col] = value
    return ChannelImage.from_pixels(pixels)


def gradient(width: int, height: int) -> ChannelImage:
    """Red ramps left to right, green top to bottom, blue diagonally."""
    xs = np.linspace(0, 255, width)
    ys = np.linspace(0, 255, height)
    pixels = np.empty((height, width, 3), dtype=np.uint8)
    pixels[:, :, 0] = xs[np.newaxis, :].round()
    pixels[:, :, 1] = ys[:, np.newaxis].round()
    pixels[:, :, 2] = ((xs[np.newaxis, :] + ys[:, np.newaxis]) / 2).round()
    return ChannelImage.from_pixels(pixels)


def noise(width: int, height: int, seed: int | None = 0) -> ChannelImage:
    """Uniform random samples; reproducible for a fixed ``seed``."""
    rng = np.random.default_rng(seed)
    pixels = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    return ChannelImage.from_pixels(pixels)


SAMPLE_GENERATORS = {
    'gradient': gradient,
    'noise': noise,
    'flat': flat,
}
"Generators taking ``(width, height)``"


__all__ = ['flat', 'impulse', 'gradient', 'noise', 'SAMPLE_GENERATORS']
