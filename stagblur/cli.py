"""
Command line entry point.

Usage:
    stagblur <blur-radius> <filename> [--workers N] [--tile-rows N] [--repeats N]
                                      [--json] [--no-save] [--log-level LEVEL]

Blurs the bitmap with both kernels, prints the execution time of each and
saves ``<name>-r<radius>-serial.bmp`` and ``<name>-r<radius>-parallel.bmp``
next to the input.
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from .benchmark import Benchmark, BenchmarkConfig
from .bitmap import read_bitmap, write_bitmap, output_paths
from .config import get_settings, LOG_LEVELS
from .errors import BlurError

logger = logging.getLogger(__name__)

EPILOG = """\
example: stagblur 2 500.bmp
Available images: 500.bmp, 1000.bmp, 1500.bmp (scripts/make_sample_bitmaps.py)
"""


def _radius(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Radius should be an integer >= 0, got {text!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"Radius should be an integer >= 0, got {value}")
    return value


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stagblur",
        description="Gaussian blur of a 24-bit bitmap with a serial and a parallel kernel.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("radius", type=_radius, help="Blur radius (integer >= 0)")
    parser.add_argument("filename", help="24-bit uncompressed BMP file")
    parser.add_argument("--workers", type=_positive_int, default=None,
                        help="Worker threads for the parallel kernel (default: CPU count)")
    parser.add_argument("--tile-rows", type=_positive_int, default=None,
                        help="Image rows per parallel task (default: split evenly)")
    parser.add_argument("--repeats", type=_positive_int, default=1,
                        help="Timed runs per kernel")
    parser.add_argument("--json", action="store_true",
                        help="Print the benchmark result as JSON")
    parser.add_argument("--no-save", action="store_true",
                        help="Don't write the output bitmaps")
    parser.add_argument("--log-level", default=None, type=str.upper, choices=LOG_LEVELS,
                        help="Logging level (default: STAGBLUR_LOG_LEVEL or WARNING)")
    return parser


def _describe(error: ValidationError) -> str:
    """One-line summary naming the offending environment variables."""
    return "; ".join(
        f"STAGBLUR_{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    :param argv: Arguments without the program name (``sys.argv[1:]`` if None)
    :returns: Process exit status
    """
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Invalid configuration: {_describe(e)}; exiting.", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=args.log_level or settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        image = read_bitmap(args.filename)
    except BlurError as e:
        print(f"{e}; exiting.", file=sys.stderr)
        return 1

    print(f"<<< Gaussian Blur (h={image.height},w={image.width},r={args.radius}) >>>")

    config = BenchmarkConfig(
        repeats=args.repeats,
        num_workers=args.workers or settings.WORKERS,
        tile_rows=args.tile_rows or settings.TILE_ROWS,
    )
    result, outputs = Benchmark.run(args.radius, image, config)

    if not args.no_save:
        serial_path, parallel_path = output_paths(args.filename, args.radius)
        try:
            write_bitmap(serial_path, outputs["serial"])
            write_bitmap(parallel_path, outputs["parallel"])
        except OSError as e:
            print(f"Cannot write output: {e}; exiting.", file=sys.stderr)
            return 1
        logger.info(f"Saved {serial_path} and {parallel_path}")

    if args.json:
        print(result.to_json())
    else:
        print(f"Total execution time (sequential): {result.timing('serial').total_time_s:f}")
        print(f"Total execution time (parallel): {result.timing('parallel').total_time_s:f}")
        print(f"Outputs: {result.comparison['message']}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
