"""
stagblur - Gaussian blur of 24-bit bitmaps with a serial reference kernel
and a data-parallel kernel
"""

from .errors import BlurError, ImageShapeError, ImageSampleError, InvalidRadiusError, BitmapFormatError
from .image import ChannelImage, CHANNEL_NAMES
from .kernels import (
    blur_serial,
    blur_parallel,
    blur_parallel_with_stats,
    clamp,
    gaussian_weight,
    ParallelBlurStats,
)
from .filters import BlurFilter, GaussianBlurSerial, GaussianBlurParallel, FILTER_REGISTRY
from .comparison import ComparisonResult, compare_images
from .benchmark import Benchmark, BenchmarkConfig, BenchmarkResult, KernelTiming, time_call
from .bitmap import read_bitmap, write_bitmap, output_paths
from .config import Settings, get_settings

__version__ = "0.1.0"

__all__ = [
    # Errors
    "BlurError",
    "ImageShapeError",
    "ImageSampleError",
    "InvalidRadiusError",
    "BitmapFormatError",
    # Image
    "ChannelImage",
    "CHANNEL_NAMES",
    # Kernels
    "blur_serial",
    "blur_parallel",
    "blur_parallel_with_stats",
    "clamp",
    "gaussian_weight",
    "ParallelBlurStats",
    # Filters
    "BlurFilter",
    "GaussianBlurSerial",
    "GaussianBlurParallel",
    "FILTER_REGISTRY",
    # Comparison & benchmark
    "ComparisonResult",
    "compare_images",
    "Benchmark",
    "BenchmarkConfig",
    "BenchmarkResult",
    "KernelTiming",
    "time_call",
    # Bitmap I/O
    "read_bitmap",
    "write_bitmap",
    "output_paths",
    # Config
    "Settings",
    "get_settings",
]
