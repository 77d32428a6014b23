"""Tests for the serial and parallel blur kernels.

Both kernels are checked against the same properties, and the parallel
kernel is checked against the serial reference for a range of worker counts
and tile sizes.
"""

import numpy as np
import pytest

from stagblur import samples
from stagblur.comparison import compare_images
from stagblur.image import ChannelImage
from stagblur.kernels import blur_serial, blur_parallel, blur_parallel_with_stats, plan_tiles


def _parallel_4(radius, image):
    return blur_parallel(radius, image, num_workers=4)


KERNELS = [
    pytest.param(blur_serial, id="serial"),
    pytest.param(_parallel_4, id="parallel"),
]


@pytest.mark.parametrize("kernel", KERNELS)
class TestBlurProperties:
    """Properties every kernel must satisfy."""

    @pytest.mark.parametrize("radius", [0, 1, 3])
    def test_shape_preserved(self, kernel, noise_image, radius):
        """Output has the same size and W*H samples per channel."""
        result = kernel(radius, noise_image)
        assert result.size == noise_image.size
        for channel in result.channels:
            assert channel.shape == (13 * 9,)
            assert channel.dtype == np.uint8

    def test_input_not_modified(self, kernel, noise_image):
        """The source image is read-only for the kernel."""
        before = noise_image.copy()
        kernel(2, noise_image)
        assert noise_image == before

    def test_radius_zero_identity(self, kernel, noise_image):
        """Radius 0 reproduces the input exactly."""
        assert kernel(0, noise_image) == noise_image

    @pytest.mark.parametrize("radius", [1, 2, 5])
    def test_flat_image_unchanged(self, kernel, radius):
        """A uniform image stays uniform, borders included."""
        image = samples.flat(7, 5, color=(200, 17, 99))
        assert kernel(radius, image) == image

    def test_all_zero_4x4(self, kernel):
        """4x4 black image stays black."""
        image = samples.flat(4, 4, color=(0, 0, 0))
        result = kernel(1, image)
        for channel in result.channels:
            assert not channel.any()

    def test_impulse_4x4(self, kernel, impulse_4x4):
        """A single bright pixel spreads to its neighbours only."""
        result = kernel(1, impulse_4x4)
        red = result.red.reshape(4, 4)
        assert red[1, 1] == 52
        assert 0 < red[1, 1] < 255
        assert red[1, 2] == 32
        assert red[2, 2] == 19
        # Edge replication pulls (1, 1) into the corner's window
        assert red[0, 0] == 19
        # Far corner and pixels more than one tap away stay black
        assert red[3, 3] == 0
        assert red[0, 3] == 0
        assert red[3, 0] == 0
        assert np.array_equal(result.green, result.red)
        assert np.array_equal(result.blue, result.red)

    def test_monotonic_smoothing(self, kernel):
        """Larger radius lowers the peak and widens the spread."""
        image = samples.impulse(15, 15, row=7, col=7)
        peaks = []
        spreads = []
        for radius in (1, 2, 3):
            red = kernel(radius, image).red
            peaks.append(int(red.max()))
            spreads.append(int(np.count_nonzero(red)))
        assert peaks[0] > peaks[1] > peaks[2]
        assert spreads[0] < spreads[1] < spreads[2]
        assert spreads == [9, 25, 49]

    def test_range_preserved(self, kernel, noise_image):
        """Every sample stays within [0, 255] and within the input's range."""
        result = kernel(2, noise_image)
        for src, out in zip(noise_image.channels, result.channels):
            assert out.min() >= src.min()
            assert out.max() <= src.max()

    def test_single_pixel_image(self, kernel):
        """Every tap of a 1x1 image clamps onto the one pixel."""
        image = ChannelImage.from_pixels(np.array([[[10, 20, 30]]], dtype=np.uint8))
        assert kernel(4, image) == image

    def test_single_row_image(self, kernel):
        """A 1-pixel-high image is blurred horizontally only."""
        image = samples.gradient(9, 1)
        result = kernel(2, image)
        assert result.size == (9, 1)
        assert np.array_equal(result.green, image.green)


class TestReferenceParallelEquivalence:
    """The parallel kernel matches the serial reference."""

    @pytest.mark.parametrize("radius", [0, 1, 2, 4])
    def test_matches_reference(self, noise_image, radius):
        """Outputs agree within one unit for every sample."""
        expected = blur_serial(radius, noise_image)
        actual = blur_parallel(radius, noise_image)
        assert compare_images(expected, actual, tolerance=1).match

    @pytest.mark.parametrize("num_workers", [1, 2, 3, 8, 32])
    def test_independent_of_worker_count(self, gradient_image, num_workers):
        """Degree of parallelism doesn't change the output."""
        expected = blur_serial(2, gradient_image)
        actual = blur_parallel(2, gradient_image, num_workers=num_workers)
        result = compare_images(expected, actual)
        assert result.match
        assert result.max_diff == 0

    @pytest.mark.parametrize("tile_rows", [1, 2, 5, 11, 100])
    def test_independent_of_tile_size(self, gradient_image, tile_rows):
        """Tiling doesn't change the output."""
        expected = blur_parallel(3, gradient_image, num_workers=1)
        actual = blur_parallel(3, gradient_image, num_workers=4, tile_rows=tile_rows)
        assert actual == expected


class TestParallelExecution:
    """Tests for the fan-out machinery of the parallel kernel."""

    def test_plan_tiles_covers_rows(self):
        """Tiles are disjoint, ordered and cover every row."""
        tiles = plan_tiles(10, num_workers=3)
        assert tiles == [(0, 4), (4, 8), (8, 10)]

    def test_plan_tiles_fixed_rows(self):
        """An explicit tile size overrides the worker split."""
        assert plan_tiles(5, num_workers=8, tile_rows=2) == [(0, 2), (2, 4), (4, 5)]

    def test_plan_tiles_more_workers_than_rows(self):
        """Never produces empty tiles."""
        assert plan_tiles(3, num_workers=16) == [(0, 1), (1, 2), (2, 3)]

    def test_invalid_tile_rows(self):
        """Zero rows per tile is rejected."""
        with pytest.raises(ValueError):
            plan_tiles(10, num_workers=2, tile_rows=0)

    def test_invalid_workers(self, noise_image):
        """Zero workers is rejected."""
        with pytest.raises(ValueError):
            blur_parallel(1, noise_image, num_workers=0)

    def test_stats(self, noise_image):
        """Stats report the workers and tiles used."""
        _, stats = blur_parallel_with_stats(1, noise_image, num_workers=3)
        assert stats.workers == 3
        assert stats.tiles == 3
        assert stats.elapsed_s >= 0

    def test_worker_failure_propagates(self, noise_image, monkeypatch):
        """A failing tile raises to the caller instead of returning partial output."""
        import stagblur.kernels.parallel as parallel

        def failing_tile(*args, **kwargs):
            raise RuntimeError("tile failed")

        monkeypatch.setattr(parallel, "_blur_tile", failing_tile)
        with pytest.raises(RuntimeError, match="tile failed"):
            blur_parallel(1, noise_image, num_workers=2)

    def test_workers_from_settings(self, noise_image, monkeypatch):
        """STAGBLUR_WORKERS sets the default worker count."""
        monkeypatch.setenv("STAGBLUR_WORKERS", "2")
        _, stats = blur_parallel_with_stats(1, noise_image)
        assert stats.workers == 2
        assert stats.tiles == 2
