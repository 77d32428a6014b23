# stagblur Kernels - Serial Reference
"""
Single-threaded Gaussian blur.

This is the correctness oracle the parallel kernel is compared against. It
walks the window of every pixel in row-major order and keeps all running
sums local to that pixel.
"""

from __future__ import annotations

import logging

import numpy as np

from stagblur.image import ChannelImage
from .weighting import clamp, gaussian_weight, round_half_up

logger = logging.getLogger(__name__)


def _blur_pixel(
    i: int,
    j: int,
    radius: int,
    width: int,
    height: int,
    red: list[int],
    green: list[int],
    blue: list[int],
) -> tuple[int, int, int]:
    """Weighted average of the window around pixel ``(i, j)``."""
    red_sum = green_sum = blue_sum = weight_sum = 0.0

    for row in range(i - radius, i + radius + 1):
        y = clamp(row, 0, height - 1)
        for col in range(j - radius, j + radius + 1):
            x = clamp(col, 0, width - 1)
            pos = y * width + x
            weight = gaussian_weight(row - i, col - j, radius)

            red_sum += red[pos] * weight
            green_sum += green[pos] * weight
            blue_sum += blue[pos] * weight
            weight_sum += weight

    return (
        round_half_up(red_sum / weight_sum),
        round_half_up(green_sum / weight_sum),
        round_half_up(blue_sum / weight_sum),
    )


def blur_serial(radius: int, image: ChannelImage) -> ChannelImage:
    """Blur ``image`` on the calling thread.

    :param radius: Non-negative blur radius; 0 returns a copy of the input
    :param image: Source image, not modified
    :returns: A new image with the same dimensions
    """
    width, height = image.width, image.height
    red, green, blue = (c.tolist() for c in image.channels)
    out_red = [0] * image.pixel_count
    out_green = [0] * image.pixel_count
    out_blue = [0] * image.pixel_count

    logger.debug(f"Serial blur: {width}x{height}, radius={radius}")

    for i in range(height):
        for j in range(width):
            pos = i * width + j
            out_red[pos], out_green[pos], out_blue[pos] = _blur_pixel(
                i, j, radius, width, height, red, green, blue
            )

    return ChannelImage(
        width=width,
        height=height,
        red=np.array(out_red, dtype=np.uint8),
        green=np.array(out_green, dtype=np.uint8),
        blue=np.array(out_blue, dtype=np.uint8),
    )


__all__ = ["blur_serial"]
