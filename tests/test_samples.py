"""Tests for the synthetic sample generators."""

import numpy as np
import pytest

from stagblur import samples
from stagblur.samples import SAMPLE_GENERATORS


class TestSampleGenerators:
    """Tests for SAMPLE_GENERATORS."""

    @pytest.mark.parametrize("name", sorted(SAMPLE_GENERATORS))
    def test_requested_size(self, name):
        """Every registered generator honours (width, height)."""
        image = SAMPLE_GENERATORS[name](7, 4)
        assert image.size == (7, 4)
        assert image.red.dtype == np.uint8

    def test_noise_is_reproducible(self):
        """Noise with the same seed is identical."""
        assert samples.noise(6, 5, seed=3) == samples.noise(6, 5, seed=3)

    def test_gradient_corners(self):
        """The red ramp spans the full range left to right."""
        image = samples.gradient(5, 3)
        assert image.red[0] == 0
        assert image.red[4] == 255

    def test_impulse(self):
        """impulse lights exactly one pixel."""
        image = samples.impulse(3, 3, row=1, col=2, value=200)
        assert np.count_nonzero(image.green) == 1
        assert image.green[1 * 3 + 2] == 200
