"""Exception classes for stagblur."""


class BlurError(Exception):
    """Base exception for stagblur errors."""

    pass


class ImageShapeError(BlurError, ValueError):
    """Raised when channel buffers don't match the declared image size."""

    pass


class InvalidRadiusError(BlurError, ValueError):
    """Raised for a negative or non-integer blur radius."""

    pass


class BitmapFormatError(BlurError):
    """Raised when a file is missing or is not a 24-bit uncompressed bitmap."""

    pass


class ImageSampleError(BlurError, ValueError):
    """Raised when channel samples aren't integers in [0, 255]."""

    pass
