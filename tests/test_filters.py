"""Tests for the blur filter classes."""

import json

import pytest

from stagblur.errors import InvalidRadiusError
from stagblur.filters import (
    BlurFilter,
    GaussianBlurSerial,
    GaussianBlurParallel,
    FILTER_REGISTRY,
)
from stagblur.kernels import blur_serial


class TestBlurFilters:
    """Tests for filter construction and application."""

    def test_serial_apply(self, noise_image):
        """The serial filter runs the reference kernel."""
        assert GaussianBlurSerial(radius=2)(noise_image) == blur_serial(2, noise_image)

    def test_parallel_apply(self, noise_image):
        """The parallel filter produces the reference output."""
        blur = GaussianBlurParallel(radius=2, num_workers=3, tile_rows=2)
        assert blur.apply(noise_image) == blur_serial(2, noise_image)

    def test_kernel_names(self):
        """Each filter carries the short name used in outputs."""
        assert GaussianBlurSerial.kernel_name == 'serial'
        assert GaussianBlurParallel.kernel_name == 'parallel'

    @pytest.mark.parametrize("radius", [-1, 1.5, "2", True])
    def test_invalid_radius(self, radius):
        """Radius must be a non-negative integer."""
        with pytest.raises(InvalidRadiusError):
            GaussianBlurSerial(radius=radius)

    def test_zero_radius_allowed(self):
        """Radius 0 is a valid identity blur."""
        assert GaussianBlurParallel(radius=0).radius == 0


class TestFilterSerialization:
    """Tests for dict/JSON serialization and the registry."""

    def test_to_dict(self):
        """to_dict includes parameters and the type."""
        d = GaussianBlurParallel(radius=3, num_workers=4).to_dict()
        assert d == {'radius': 3, 'num_workers': 4, 'tile_rows': None, 'type': 'GaussianBlurParallel'}

    def test_json_roundtrip(self):
        """A filter restored from JSON equals the original."""
        blur = GaussianBlurParallel(radius=5, num_workers=2, tile_rows=8)
        restored = BlurFilter.from_json(blur.to_json())
        assert restored == blur
        assert json.loads(blur.to_json())['type'] == 'GaussianBlurParallel'

    def test_registry(self):
        """Filters are registered by class name, lowercase name and kernel name."""
        assert FILTER_REGISTRY['GaussianBlurSerial'] is GaussianBlurSerial
        assert FILTER_REGISTRY['gaussianblurparallel'] is GaussianBlurParallel
        assert FILTER_REGISTRY['parallel'] is GaussianBlurParallel

    def test_from_dict_by_kernel_name(self):
        """Kernel names work as types."""
        assert BlurFilter.from_dict({'type': 'serial', 'radius': 1}) == GaussianBlurSerial(radius=1)

    def test_unknown_type(self):
        """Unknown types raise ValueError."""
        with pytest.raises(ValueError, match="Unknown filter type"):
            BlurFilter.from_dict({'type': 'BoxBlur', 'radius': 1})
