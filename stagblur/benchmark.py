# stagblur - Benchmark Utilities
"""
Timing harness for the blur kernels.

Runs the serial and parallel kernels on the same input, times each, and
compares their outputs. Results are serializable dataclasses with ASCII
table output.
"""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass, field, asdict
from typing import Any, Callable

from .comparison import compare_images
from .config import get_settings
from .filters import BlurFilter, GaussianBlurSerial, GaussianBlurParallel
from .image import ChannelImage
from .kernels import resolve_workers

logger = logging.getLogger(__name__)


def time_call(func: Callable[..., Any], *args: Any, **kwargs: Any) -> tuple[float, Any]:
    """Call ``func`` and measure its wall time.

    :returns: ``(elapsed_seconds, return_value)``
    """
    start = time.perf_counter()
    value = func(*args, **kwargs)
    return time.perf_counter() - start, value


@dataclass
class KernelTiming:
    """Timing result for one kernel."""
    kernel: str  # 'serial' or 'parallel'
    total_time_s: float
    per_run_ms: float
    runs: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class BenchmarkResult:
    """Complete benchmark result - serializable."""
    name: str
    image_size: tuple[int, int]
    megapixels: float
    radius: int
    num_cpus: int
    num_workers: int

    results: list[KernelTiming] = field(default_factory=list)

    fastest_kernel: str = ''
    speedup: float | None = None  # serial time / parallel time

    # ComparisonResult as dict, None if only one kernel ran
    comparison: dict[str, Any] | None = None

    def timing(self, kernel: str) -> KernelTiming | None:
        """Timing for ``kernel`` or None if it didn't run."""
        return next((r for r in self.results if r.kernel == kernel), None)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        d = asdict(self)
        d['results'] = [r.to_dict() for r in self.results]
        return d

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> 'BenchmarkResult':
        """Create from dictionary."""
        d = dict(d)
        results = [KernelTiming(**r) for r in d.pop('results', [])]
        d['image_size'] = tuple(d['image_size'])
        return cls(**d, results=results)

    def ascii_table(self) -> str:
        """Generate ASCII table representation."""
        lines = []
        lines.append("=" * 60)
        lines.append(f"BENCHMARK: {self.name}")
        lines.append("=" * 60)
        lines.append("")

        lines.append(f"Image: {self.image_size[0]}x{self.image_size[1]} ({self.megapixels:.2f} MP)")
        lines.append(f"Radius: {self.radius}")
        lines.append(f"CPUs: {self.num_cpus} | Workers: {self.num_workers}")
        lines.append("")

        lines.append("-" * 60)
        lines.append(f"{'Kernel':<20} {'Time':>10} {'Runs':>8} {'Per-run':>14}")
        lines.append("-" * 60)

        for r in self.results:
            lines.append(
                f"{r.kernel:<20} {r.total_time_s:>9.3f}s {r.runs:>8} {r.per_run_ms:>12.1f}ms"
            )

        lines.append("-" * 60)
        lines.append("")

        lines.append("=" * 60)
        if self.speedup is not None:
            lines.append(f"Fastest: {self.fastest_kernel} | Speedup: {self.speedup:.2f}x")
        else:
            lines.append(f"Fastest: {self.fastest_kernel}")
        if self.comparison is not None:
            status = "PASSED" if self.comparison['match'] else "FAILED"
            lines.append(f"Outputs: {self.comparison['message']} | {status}")
        lines.append("=" * 60)

        return "\n".join(lines)

    def print(self) -> None:
        """Print ASCII table to terminal."""
        print(self.ascii_table())


@dataclass
class BenchmarkConfig:
    """Configuration for benchmark runs."""
    repeats: int = 1
    warmup_runs: int = 0
    run_serial: bool = True
    run_parallel: bool = True
    num_workers: int | None = None  # Auto-detect
    tile_rows: int | None = None
    tolerance: int | None = None  # None = settings.TOLERANCE

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class Benchmark:
    """Benchmark runner for the blur kernels.

    Example::

        from stagblur import Benchmark, BenchmarkConfig, read_bitmap

        image = read_bitmap("500.bmp")
        result, outputs = Benchmark.run(3, image, BenchmarkConfig(num_workers=8))
        result.print()
        print(result.to_json())
    """

    @staticmethod
    def run(
        radius: int,
        image: ChannelImage,
        config: BenchmarkConfig | None = None,
    ) -> tuple[BenchmarkResult, dict[str, ChannelImage]]:
        """Time the enabled kernels on ``image``.

        :param radius: Blur radius
        :param image: Source image
        :param config: Run configuration (defaults if None)
        :returns: The BenchmarkResult and the output of each kernel by name
        """
        config = config or BenchmarkConfig()
        if config.repeats < 1:
            raise ValueError(f"repeats must be >= 1, got {config.repeats}")
        num_workers = resolve_workers(config.num_workers)
        tolerance = config.tolerance if config.tolerance is not None else get_settings().TOLERANCE

        filters: list[BlurFilter] = []
        if config.run_serial:
            filters.append(GaussianBlurSerial(radius=radius))
        if config.run_parallel:
            filters.append(GaussianBlurParallel(
                radius=radius,
                num_workers=num_workers,
                tile_rows=config.tile_rows,
            ))

        results: list[KernelTiming] = []
        outputs: dict[str, ChannelImage] = {}
        for blur in filters:
            timing, output = Benchmark._time_filter(blur, image, config)
            results.append(timing)
            outputs[blur.kernel_name] = output

        fastest = min(results, key=lambda r: r.per_run_ms) if results else None

        serial = next((r for r in results if r.kernel == 'serial'), None)
        parallel = next((r for r in results if r.kernel == 'parallel'), None)
        speedup = None
        if serial and parallel and parallel.per_run_ms > 0:
            speedup = serial.per_run_ms / parallel.per_run_ms

        comparison = None
        if 'serial' in outputs and 'parallel' in outputs:
            comparison = compare_images(outputs['serial'], outputs['parallel'], tolerance)._asdict()
            if not comparison['match']:
                logger.warning(f"Kernel outputs differ: {comparison['message']}")

        result = BenchmarkResult(
            name=f"Gaussian Blur r={radius}",
            image_size=image.size,
            megapixels=image.pixel_count / 1e6,
            radius=radius,
            num_cpus=os.cpu_count() or 1,
            num_workers=num_workers,
            results=results,
            fastest_kernel=fastest.kernel if fastest else '',
            speedup=speedup,
            comparison=comparison,
        )
        return result, outputs

    @staticmethod
    def _time_filter(
        blur: BlurFilter,
        image: ChannelImage,
        config: BenchmarkConfig,
    ) -> tuple[KernelTiming, ChannelImage]:
        """Internal: warm up, then time ``config.repeats`` runs of one filter."""
        for _ in range(config.warmup_runs):
            blur(image)

        total = 0.0
        output = None
        for _ in range(config.repeats):
            elapsed, output = time_call(blur, image)
            total += elapsed

        logger.info(f"{blur.kernel_name}: {total:.3f}s over {config.repeats} run(s)")

        timing = KernelTiming(
            kernel=blur.kernel_name,
            total_time_s=total,
            per_run_ms=total / config.repeats * 1000,
            runs=config.repeats,
        )
        return timing, output


__all__ = [
    'Benchmark',
    'BenchmarkConfig',
    'BenchmarkResult',
    'KernelTiming',
    'time_call',
]
