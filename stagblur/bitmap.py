# stagblur - Bitmap I/O
"""
Reading and writing 24-bit uncompressed BMP files.

The header is checked before decoding so that anything other than a plain
24-bit ``BI_RGB`` bitmap fails with a clear :class:`BitmapFormatError`.
Decoding, row order and channel order are left to Pillow.
"""

from __future__ import annotations

import logging
import os
import struct
from dataclasses import dataclass
from pathlib import Path

import PIL.Image
import numpy as np

from .config import get_settings
from .errors import BitmapFormatError
from .image import ChannelImage

logger = logging.getLogger(__name__)

BMP_SIGNATURE = b"BM"
BI_RGB = 0
"Uncompressed compression method"

_HEADER_FORMAT = "<2sIIIIiiHHI"
_HEADER_SIZE = struct.calcsize(_HEADER_FORMAT)


@dataclass
class BitmapHeader:
    """The file and info header fields stagblur cares about."""
    signature: bytes
    file_size: int
    data_offset: int
    info_size: int
    width: int
    height: int  # Negative for top-down bitmaps
    planes: int
    bits_per_pixel: int
    compression: int

    @classmethod
    def parse(cls, data: bytes) -> 'BitmapHeader':
        """Parse the first bytes of a BMP file."""
        if len(data) < _HEADER_SIZE:
            raise BitmapFormatError(f"Truncated bitmap header ({len(data)} bytes)")
        (signature, file_size, _reserved, data_offset, info_size,
         width, height, planes, bits_per_pixel, compression) = struct.unpack_from(_HEADER_FORMAT, data)
        return cls(
            signature=signature,
            file_size=file_size,
            data_offset=data_offset,
            info_size=info_size,
            width=width,
            height=height,
            planes=planes,
            bits_per_pixel=bits_per_pixel,
            compression=compression,
        )


def read_header(path: str | os.PathLike) -> BitmapHeader:
    """Read and validate the header of a 24-bit uncompressed bitmap.

    :param path: File path
    :returns: The parsed header
    :raises BitmapFormatError: Missing file, not a BMP, not 24-bit or compressed
    """
    path = Path(path)
    if not path.is_file():
        raise BitmapFormatError(f"File {path} not found")
    try:
        with open(path, "rb") as f:
            data = f.read(_HEADER_SIZE)
    except OSError as e:
        raise BitmapFormatError(f"Cannot read {path}: {e}") from e
    header = BitmapHeader.parse(data)

    if header.signature != BMP_SIGNATURE:
        raise BitmapFormatError(f"File {path} is not a bitmap")
    if header.bits_per_pixel != 24:
        raise BitmapFormatError(
            f"File {path} is not in 24-bit format ({header.bits_per_pixel} bits per pixel)"
        )
    if header.compression != BI_RGB:
        raise BitmapFormatError(f"File {path} is compressed (method {header.compression})")
    if header.width <= 0 or header.height == 0:
        raise BitmapFormatError(f"File {path} has invalid size {header.width}x{header.height}")
    return header


def read_bitmap(path: str | os.PathLike) -> ChannelImage:
    """Load a 24-bit bitmap and split it into channels.

    :param path: File path
    :returns: The planar image
    :raises BitmapFormatError: If the file can't be used
    """
    header = read_header(path)
    try:
        with PIL.Image.open(path) as pil_image:
            pil_image.load()
            pixels = np.asarray(pil_image.convert("RGB"))
    except (OSError, SyntaxError, PIL.Image.DecompressionBombError) as e:
        raise BitmapFormatError(f"Cannot decode {path}: {e}") from e

    logger.debug(f"Read {path}: {header.width}x{abs(header.height)}")
    return ChannelImage.from_pixels(pixels)


def write_bitmap(path: str | os.PathLike, image: ChannelImage) -> Path:
    """Interleave ``image`` and save it as a 24-bit bitmap.

    :param path: Destination file
    :param image: Image to save
    :returns: The written path
    """
    path = Path(path)
    PIL.Image.fromarray(image.to_pixels()).save(path, format="BMP")
    logger.debug(f"Wrote {path}")
    return path


def output_path(input_path: str | os.PathLike, radius: int, suffix: str) -> Path:
    """``<input without extension>-r<radius>-<suffix>.bmp``.

    Only the extension of the last path component is removed.
    """
    base = Path(input_path).with_suffix("")
    return base.with_name(f"{base.name}-r{radius}-{suffix}.bmp")


def output_paths(input_path: str | os.PathLike, radius: int) -> tuple[Path, Path]:
    """Output files for the serial and parallel results."""
    settings = get_settings()
    return (
        output_path(input_path, radius, settings.SERIAL_SUFFIX),
        output_path(input_path, radius, settings.PARALLEL_SUFFIX),
    )


__all__ = [
    "BitmapHeader",
    "read_header",
    "read_bitmap",
    "write_bitmap",
    "output_path",
    "output_paths",
]
