# stagblur - Channel Image
"""
Implements :class:`ChannelImage`, the planar RGB representation the blur
kernels operate on.

Each channel is a flat row-major ``uint8`` buffer of ``width * height``
samples, so sample ``(row, col)`` lives at ``row * width + col``.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .errors import ImageShapeError, ImageSampleError

CHANNEL_NAMES = ("red", "green", "blue")
"Channel order used throughout stagblur"


@dataclass(eq=False)
class ChannelImage:
    """Three independent 8-bit channels of identical shape.

    :param width: Width in pixels
    :param height: Height in pixels
    :param red: Flat row-major red samples
    :param green: Flat row-major green samples
    :param blue: Flat row-major blue samples
    """

    width: int
    height: int
    red: np.ndarray
    green: np.ndarray
    blue: np.ndarray

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ImageShapeError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        expected = self.width * self.height
        for name in CHANNEL_NAMES:
            raw = np.asarray(getattr(self, name)).reshape(-1)
            if raw.size != expected:
                raise ImageShapeError(
                    f"Channel '{name}' has {raw.size} samples, "
                    f"expected {expected} for {self.width}x{self.height}"
                )
            # Samples must already be 8-bit values, never wrapped by a cast
            if not np.issubdtype(raw.dtype, np.integer):
                raise ImageSampleError(f"Channel '{name}' has non-integer samples ({raw.dtype})")
            low, high = int(raw.min()), int(raw.max())
            if low < 0 or high > 255:
                raise ImageSampleError(
                    f"Channel '{name}' has samples outside [0, 255] (min {low}, max {high})"
                )
            setattr(self, name, raw.astype(np.uint8, copy=False))

    @classmethod
    def from_pixels(cls, pixels: np.ndarray) -> 'ChannelImage':
        """Deinterleave an ``(height, width, 3)`` RGB array.

        :param pixels: Interleaved uint8 pixel data
        :returns: The planar image
        """
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ImageShapeError(f"Expected (height, width, 3) pixels, got {pixels.shape}")
        height, width = pixels.shape[:2]
        return cls(
            width=width,
            height=height,
            red=np.array(pixels[:, :, 0]).reshape(-1),
            green=np.array(pixels[:, :, 1]).reshape(-1),
            blue=np.array(pixels[:, :, 2]).reshape(-1),
        )

    @classmethod
    def empty_like(cls, other: 'ChannelImage') -> 'ChannelImage':
        """Zero-filled image with the same dimensions as ``other``."""
        count = other.width * other.height
        return cls(
            width=other.width,
            height=other.height,
            red=np.zeros(count, dtype=np.uint8),
            green=np.zeros(count, dtype=np.uint8),
            blue=np.zeros(count, dtype=np.uint8),
        )

    def to_pixels(self) -> np.ndarray:
        """Re-interleave into an ``(height, width, 3)`` uint8 array."""
        stacked = np.stack(self.channels, axis=-1)
        return stacked.reshape(self.height, self.width, 3)

    @property
    def channels(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """The red, green and blue buffers."""
        return self.red, self.green, self.blue

    def channel(self, name: str) -> np.ndarray:
        """Return a single channel buffer by name ('red', 'green' or 'blue')."""
        if name not in CHANNEL_NAMES:
            raise KeyError(f"Unknown channel: {name}")
        return getattr(self, name)

    @property
    def size(self) -> tuple[int, int]:
        """``(width, height)`` tuple."""
        return self.width, self.height

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def copy(self) -> 'ChannelImage':
        return ChannelImage(
            self.width,
            self.height,
            self.red.copy(),
            self.green.copy(),
            self.blue.copy(),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChannelImage):
            return NotImplemented
        return self.size == other.size and all(
            np.array_equal(a, b) for a, b in zip(self.channels, other.channels)
        )

    def __repr__(self) -> str:
        return f"ChannelImage({self.width}x{self.height})"


__all__ = ["ChannelImage", "CHANNEL_NAMES"]
