# stagblur - Blur Filters
"""
Dataclass filters wrapping the blur kernels.

Filters carry their parameters, serialize to dicts/JSON and are looked up by
name through :data:`FILTER_REGISTRY`::

    blur = GaussianBlurParallel(radius=3, num_workers=8)
    output = blur(image)
    same = BlurFilter.from_json(blur.to_json())
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Any, ClassVar
import json

from .errors import InvalidRadiusError
from .image import ChannelImage
from .kernels import blur_serial, blur_parallel

FILTER_REGISTRY: dict[str, type['BlurFilter']] = {}


def register_filter(cls: type['BlurFilter']) -> type['BlurFilter']:
    """Decorator to register a filter class under its name and its kernel name."""
    FILTER_REGISTRY[cls.__name__] = cls
    FILTER_REGISTRY[cls.__name__.lower()] = cls
    if cls.kernel_name:
        FILTER_REGISTRY[cls.kernel_name] = cls
    return cls


@dataclass
class BlurFilter(ABC):
    """Base class for Gaussian blur filters.

    radius: Half-width of the square tap window, must be an integer >= 0
    """

    # Short name used in output filenames and benchmark tables
    kernel_name: ClassVar[str] = ''

    radius: int = 2

    def __post_init__(self):
        if isinstance(self.radius, bool) or not isinstance(self.radius, int):
            raise InvalidRadiusError(f"Radius must be an integer, got {self.radius!r}")
        if self.radius < 0:
            raise InvalidRadiusError(f"Radius should be an integer >= 0, got {self.radius}")

    @abstractmethod
    def apply(self, image: ChannelImage) -> ChannelImage:
        """Blur ``image`` and return a new image of the same size."""
        pass

    def __call__(self, image: ChannelImage) -> ChannelImage:
        return self.apply(image)

    @property
    def type(self) -> str:
        """Filter type name for serialization."""
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        """Serialize filter to dictionary."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data['type'] = self.type
        return data

    def to_json(self) -> str:
        """Serialize filter to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'BlurFilter':
        """Deserialize filter from dictionary."""
        data = data.copy()
        filter_type = data.pop('type', cls.__name__)
        filter_cls = FILTER_REGISTRY.get(filter_type) or FILTER_REGISTRY.get(filter_type.lower())
        if filter_cls is None:
            raise ValueError(f"Unknown filter type: {filter_type}")
        return filter_cls(**data)

    @classmethod
    def from_json(cls, json_str: str) -> 'BlurFilter':
        """Deserialize filter from JSON string."""
        return cls.from_dict(json.loads(json_str))


@register_filter
@dataclass
class GaussianBlurSerial(BlurFilter):
    """Single-threaded reference Gaussian blur."""

    kernel_name: ClassVar[str] = 'serial'

    def apply(self, image: ChannelImage) -> ChannelImage:
        return blur_serial(self.radius, image)


@register_filter
@dataclass
class GaussianBlurParallel(BlurFilter):
    """Gaussian blur fanned out over a thread pool.

    num_workers: Worker threads (None = ``STAGBLUR_WORKERS`` or CPU count)
    tile_rows: Image rows per task (None = split evenly across workers)
    """

    kernel_name: ClassVar[str] = 'parallel'

    num_workers: int | None = None
    tile_rows: int | None = None

    def apply(self, image: ChannelImage) -> ChannelImage:
        return blur_parallel(self.radius, image, self.num_workers, self.tile_rows)


__all__ = [
    'BlurFilter',
    'GaussianBlurSerial',
    'GaussianBlurParallel',
    'FILTER_REGISTRY',
    'register_filter',
]
