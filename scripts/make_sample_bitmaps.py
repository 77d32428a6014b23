#!/usr/bin/env python3
"""
Write square 24-bit sample bitmaps for the stagblur CLI.

Each image is a colour gradient with some noise so the blur is visible.

Usage:
    python scripts/make_sample_bitmaps.py [--output-dir DIR] [--pattern PATTERN] [--sizes 500 1000 1500]

Then run e.g.:
    stagblur 2 500.bmp
"""

import argparse
from pathlib import Path

import numpy as np

from stagblur import ChannelImage, write_bitmap
from stagblur.samples import SAMPLE_GENERATORS, gradient, noise


def make_sample(size: int, seed: int = 0) -> ChannelImage:
    """Gradient plus low-amplitude noise."""
    base = gradient(size, size).to_pixels().astype(np.int16)
    grain = noise(size, size, seed=seed).to_pixels().astype(np.int16) // 8 - 16
    return ChannelImage.from_pixels(np.clip(base + grain, 0, 255).astype(np.uint8))


def main():
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--output-dir", type=Path, default=Path("."), help="Target directory")
    parser.add_argument("--pattern", choices=["mixed", *SAMPLE_GENERATORS], default="mixed",
                        help="Image content (mixed = gradient with noise)")
    parser.add_argument("--sizes", type=int, nargs="+", default=[500, 1000, 1500],
                        help="Edge lengths in pixels")
    args = parser.parse_args()

    args.output_dir.mkdir(parents=True, exist_ok=True)
    for size in args.sizes:
        if args.pattern == "mixed":
            image = make_sample(size, seed=size)
        else:
            image = SAMPLE_GENERATORS[args.pattern](size, size)
        path = write_bitmap(args.output_dir / f"{size}.bmp", image)
        print(f"Created {path} ({size}x{size})")


if __name__ == "__main__":
    main()
