# stagblur Kernels - Data-Parallel Blur
"""
Data-parallel Gaussian blur.

Every output pixel is an independent reduction over read-only input, so the
image is split into horizontal tiles of rows and the tiles are fanned out to
a thread pool:

- Copy-in: the three channels are copied once into read-only float buffers
  shared by all workers
- Fan-out: one task per tile, each writing only its own output rows
- Join: every task finishes before anything is returned
- Copy-out: results are rounded back to uint8 once, after the join

numpy releases the GIL inside the per-tap array operations, so tiles run
concurrently on multiple cores.
"""

from __future__ import annotations

import logging
import math
import os
import time
from concurrent.futures import ThreadPoolExecutor, Future
from dataclasses import dataclass

import numpy as np

from stagblur.config import get_settings
from stagblur.image import ChannelImage
from .weighting import clamp_indices, gaussian_weight, round_half_up_array, tap_offsets

logger = logging.getLogger(__name__)


@dataclass
class ParallelBlurStats:
    """Execution details of a single parallel blur call.

    :param workers: Number of worker threads used
    :param tiles: Number of row tiles dispatched
    :param elapsed_s: Wall time including copy-in and copy-out
    """
    workers: int
    tiles: int
    elapsed_s: float


@dataclass(frozen=True)
class _DeviceBuffers:
    """Read-only ``(height, width)`` float copies of the input channels."""
    width: int
    height: int
    red: np.ndarray
    green: np.ndarray
    blue: np.ndarray

    @property
    def channels(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        return self.red, self.green, self.blue


def resolve_workers(num_workers: int | None = None) -> int:
    """Worker count from the argument, ``STAGBLUR_WORKERS`` or the CPU count."""
    if num_workers is None:
        num_workers = get_settings().WORKERS
    if num_workers is None:
        num_workers = os.cpu_count() or 4
    if num_workers < 1:
        raise ValueError(f"num_workers must be >= 1, got {num_workers}")
    return num_workers


def plan_tiles(height: int, num_workers: int, tile_rows: int | None = None) -> list[tuple[int, int]]:
    """Split ``height`` rows into disjoint ``(start, stop)`` tiles.

    :param height: Number of image rows
    :param num_workers: Worker count, used to size tiles when tile_rows is None
    :param tile_rows: Rows per tile
    :returns: Tiles covering every row exactly once, in order
    """
    if tile_rows is None:
        tile_rows = max(1, math.ceil(height / num_workers))
    if tile_rows < 1:
        raise ValueError(f"tile_rows must be >= 1, got {tile_rows}")
    return [(start, min(start + tile_rows, height)) for start in range(0, height, tile_rows)]


def _copy_in(image: ChannelImage) -> _DeviceBuffers:
    def upload(channel: np.ndarray) -> np.ndarray:
        buffer = channel.astype(np.float64).reshape(image.height, image.width)
        buffer.flags.writeable = False
        return buffer

    return _DeviceBuffers(
        width=image.width,
        height=image.height,
        red=upload(image.red),
        green=upload(image.green),
        blue=upload(image.blue),
    )


def _blur_tile(
    radius: int,
    source: _DeviceBuffers,
    row_start: int,
    row_stop: int,
    outputs: tuple[np.ndarray, np.ndarray, np.ndarray],
) -> None:
    """Compute output rows ``[row_start, row_stop)`` of every channel."""
    rows = np.arange(row_start, row_stop)
    cols = np.arange(source.width)
    sums = [np.zeros((row_stop - row_start, source.width)) for _ in range(3)]
    # Weights depend only on the tap offset, so the sum is shared by the tile
    weight_sum = 0.0

    for d_row, d_col in tap_offsets(radius):
        weight = gaussian_weight(d_row, d_col, radius)
        ys = clamp_indices(rows + d_row, 0, source.height - 1)
        xs = clamp_indices(cols + d_col, 0, source.width - 1)
        window = np.ix_(ys, xs)
        for acc, channel in zip(sums, source.channels):
            acc += channel[window] * weight
        weight_sum += weight

    for acc, out in zip(sums, outputs):
        out[row_start:row_stop] = acc / weight_sum


def blur_parallel_with_stats(
    radius: int,
    image: ChannelImage,
    num_workers: int | None = None,
    tile_rows: int | None = None,
) -> tuple[ChannelImage, ParallelBlurStats]:
    """Blur ``image`` across a thread pool and report execution details.

    :param radius: Non-negative blur radius; 0 returns a copy of the input
    :param image: Source image, not modified
    :param num_workers: Worker threads (settings or CPU count if None)
    :param tile_rows: Rows per task (settings or evenly split if None)
    :returns: The blurred image and a :class:`ParallelBlurStats`
    """
    start = time.perf_counter()
    num_workers = resolve_workers(num_workers)
    if tile_rows is None:
        tile_rows = get_settings().TILE_ROWS
    tiles = plan_tiles(image.height, num_workers, tile_rows)

    source = _copy_in(image)
    outputs = tuple(np.empty((image.height, image.width)) for _ in range(3))

    logger.debug(
        f"Parallel blur: {image.width}x{image.height}, radius={radius}, "
        f"{len(tiles)} tiles on {num_workers} workers"
    )

    with ThreadPoolExecutor(max_workers=num_workers, thread_name_prefix="BlurWorker") as executor:
        futures: list[Future] = [
            executor.submit(_blur_tile, radius, source, row_start, row_stop, outputs)
            for row_start, row_stop in tiles
        ]
        # Join; re-raises the first worker failure
        for future in futures:
            future.result()

    red, green, blue = (round_half_up_array(out).reshape(-1) for out in outputs)
    result = ChannelImage(width=image.width, height=image.height, red=red, green=green, blue=blue)

    stats = ParallelBlurStats(
        workers=num_workers,
        tiles=len(tiles),
        elapsed_s=time.perf_counter() - start,
    )
    return result, stats


def blur_parallel(
    radius: int,
    image: ChannelImage,
    num_workers: int | None = None,
    tile_rows: int | None = None,
) -> ChannelImage:
    """Blur ``image`` across a thread pool.

    Produces the same samples as :func:`~stagblur.kernels.reference.blur_serial`
    for any ``num_workers`` and ``tile_rows``.
    """
    result, _ = blur_parallel_with_stats(radius, image, num_workers, tile_rows)
    return result


__all__ = [
    "blur_parallel",
    "blur_parallel_with_stats",
    "plan_tiles",
    "resolve_workers",
    "ParallelBlurStats",
]
