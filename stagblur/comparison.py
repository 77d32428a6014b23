"""Image comparison utilities.

Checks that two kernels produced equivalent output. Differences are measured
per channel sample in 8-bit units.
"""
from typing import NamedTuple

import numpy as np

from .image import ChannelImage, CHANNEL_NAMES


class ComparisonResult(NamedTuple):
    """Result of comparing two images."""
    match: bool
    max_diff: int
    diff_count: int  # Samples differing by more than the tolerance
    total_samples: int
    message: str

    def to_dict(self) -> dict:
        return self._asdict()


def channel_differences(a: ChannelImage, b: ChannelImage) -> dict[str, np.ndarray]:
    """Absolute per-sample difference of each channel.

    Args:
        a: First image
        b: Second image, same size as ``a``

    Returns:
        Mapping of channel name to an int16 difference buffer
    """
    return {
        name: np.abs(a.channel(name).astype(np.int16) - b.channel(name).astype(np.int16))
        for name in CHANNEL_NAMES
    }


def compare_images(a: ChannelImage, b: ChannelImage, tolerance: int = 1) -> ComparisonResult:
    """Compare two images sample by sample.

    Args:
        a: Reference output
        b: Output under test
        tolerance: Largest allowed absolute difference per sample

    Returns:
        ComparisonResult; a size mismatch is reported as a non-match
    """
    if a.size != b.size:
        return ComparisonResult(
            match=False,
            max_diff=255,
            diff_count=0,
            total_samples=0,
            message=f"Size mismatch: {a.width}x{a.height} vs {b.width}x{b.height}",
        )

    diffs = channel_differences(a, b)
    total = a.pixel_count * len(CHANNEL_NAMES)
    max_diff = max(int(d.max()) for d in diffs.values())
    diff_count = sum(int(np.count_nonzero(d > tolerance)) for d in diffs.values())
    match = diff_count == 0

    if max_diff == 0:
        message = "Identical"
    elif match:
        message = f"Match within tolerance (max diff {max_diff} <= {tolerance})"
    else:
        message = (
            f"Mismatch: {diff_count}/{total} samples differ by more than "
            f"{tolerance} (max diff {max_diff})"
        )

    return ComparisonResult(
        match=match,
        max_diff=max_diff,
        diff_count=diff_count,
        total_samples=total,
        message=message,
    )
