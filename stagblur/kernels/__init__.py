# stagblur Kernels
"""
Gaussian blur kernels.

- :func:`blur_serial` - single-threaded reference
- :func:`blur_parallel` - tiled fan-out over a thread pool
"""

from .weighting import (
    clamp,
    clamp_indices,
    gaussian_weight,
    tap_offsets,
    round_half_up,
    round_half_up_array,
)
from .reference import blur_serial
from .parallel import (
    blur_parallel,
    blur_parallel_with_stats,
    plan_tiles,
    resolve_workers,
    ParallelBlurStats,
)

__all__ = [
    # Weighting
    "clamp",
    "clamp_indices",
    "gaussian_weight",
    "tap_offsets",
    "round_half_up",
    "round_half_up_array",
    # Kernels
    "blur_serial",
    "blur_parallel",
    "blur_parallel_with_stats",
    "plan_tiles",
    "resolve_workers",
    "ParallelBlurStats",
]
