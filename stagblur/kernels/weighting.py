# stagblur Kernels - Tap Weighting & Boundary Clamp
"""
Helpers shared by the serial and parallel blur kernels.

Out-of-range taps are handled by edge replication: a tap outside the image
takes the value of the nearest edge pixel.
"""

from __future__ import annotations

import math

import numpy as np


def clamp(value: int, low: int, high: int) -> int:
    """Restrict ``value`` to ``[low, high]``."""
    if value < low:
        return low
    if value > high:
        return high
    return value


def clamp_indices(indices: np.ndarray, low: int, high: int) -> np.ndarray:
    """Array form of :func:`clamp`."""
    return np.clip(indices, low, high)


def gaussian_weight(d_row: int, d_col: int, radius: int) -> float:
    """Gaussian weight of the tap at offset ``(d_row, d_col)``.

    Uses ``sigma = radius``. Radius 0 is the identity filter: the centre tap
    weighs 1.0 and every other tap 0.0.

    :param d_row: Row offset of the tap from the target pixel
    :param d_col: Column offset of the tap from the target pixel
    :param radius: Blur radius
    :returns: The unnormalized weight
    """
    if radius == 0:
        return 1.0 if d_row == 0 and d_col == 0 else 0.0
    sigma_sq = float(radius * radius)
    square = d_row * d_row + d_col * d_col
    return math.exp(-square / (2.0 * sigma_sq)) / (2.0 * math.pi * sigma_sq)


def tap_offsets(radius: int) -> list[tuple[int, int]]:
    """Window offsets in row-major order.

    Both kernels accumulate taps in exactly this order.
    """
    span = range(-radius, radius + 1)
    return [(d_row, d_col) for d_row in span for d_col in span]


def round_half_up(value: float) -> int:
    """Round to nearest with halves going up (C ``round`` for values >= 0)."""
    return int(math.floor(value + 0.5))


def round_half_up_array(values: np.ndarray) -> np.ndarray:
    """Array form of :func:`round_half_up`, clipped to the uint8 range."""
    return np.clip(np.floor(values + 0.5), 0, 255).astype(np.uint8)


__all__ = [
    "clamp",
    "clamp_indices",
    "gaussian_weight",
    "tap_offsets",
    "round_half_up",
    "round_half_up_array",
]
