"""
Unit tests for the pixel histogram.
"""

import numpy as np
import pytest

from palettegrab.services.colors.errors import InvalidInput
from palettegrab.services.colors.histogram import PixelGrid, build_histogram

RED = 0xFF0000
GREEN = 0x00FF00
BLUE = 0x0000FF


@pytest.fixture
def two_by_two():
    """2x2 image with pixels [red, red, blue, green] in row-major order"""
    img = np.zeros((2, 2, 3), dtype=np.uint8)
    img[0, 0] = (255, 0, 0)
    img[0, 1] = (255, 0, 0)
    img[1, 0] = (0, 0, 255)
    img[1, 1] = (0, 255, 0)
    return img


class TestPixelGrid:
    """Test pixel grid construction and accessors"""

    def test_dimensions_and_accessor(self, two_by_two):
        grid = PixelGrid.from_array(two_by_two)
        assert grid.width == 2
        assert grid.height == 2
        assert grid.packed_at(0, 0) == RED
        assert grid.packed_at(0, 1) == BLUE
        assert grid.packed_at(1, 1) == GREEN

    def test_non_square_orientation(self):
        img = np.zeros((3, 5, 3), dtype=np.uint8)
        img[2, 4] = (1, 2, 3)
        grid = PixelGrid.from_array(img)
        assert (grid.width, grid.height) == (5, 3)
        assert grid.packed_at(4, 2) == 0x010203

    def test_grayscale_is_expanded(self):
        grid = PixelGrid.from_array(np.full((2, 3), 128, dtype=np.uint8))
        assert grid.packed_at(2, 1) == 0x808080

    def test_rgba_alpha_is_ignored(self):
        img = np.zeros((1, 2, 4), dtype=np.uint8)
        img[0, 0] = (10, 20, 30, 0)
        img[0, 1] = (10, 20, 30, 255)
        assert build_histogram(PixelGrid.from_array(img)) == {0x0A141E: 2}

    def test_missing_grid(self):
        with pytest.raises(InvalidInput):
            PixelGrid.from_array(None)

    def test_float_grid_is_rejected(self):
        img = np.full((2, 2, 3), 0.5)
        img[1, 1] = (1.0, 1.0, 1.0)
        with pytest.raises(InvalidInput):
            build_histogram(img)

    def test_non_integral_grid_is_rejected(self):
        img = np.full((2, 2, 3), 127.6)
        with pytest.raises(InvalidInput):
            PixelGrid.from_array(img)

    def test_wider_integer_dtype_is_accepted(self):
        img = np.full((2, 2, 3), 200, dtype=np.int64)
        assert build_histogram(img) == {0xC8C8C8: 4}

    def test_out_of_range_integers_are_rejected(self):
        with pytest.raises(InvalidInput):
            PixelGrid.from_array(np.full((2, 2, 3), 256, dtype=np.int32))

    def test_bad_shape(self):
        with pytest.raises(InvalidInput):
            PixelGrid.from_array(np.zeros((2, 2, 2), dtype=np.uint8))


class TestBuildHistogram:
    """Test histogram construction"""

    def test_counts_every_pixel(self, two_by_two):
        histogram = build_histogram(two_by_two)
        assert histogram == {RED: 2, BLUE: 1, GREEN: 1}

    def test_accepts_pixel_grid(self, two_by_two):
        assert build_histogram(PixelGrid.from_array(two_by_two)) == build_histogram(two_by_two)

    def test_total_matches_pixel_count(self):
        rng = np.random.default_rng(42)
        img = rng.integers(0, 4, size=(37, 23, 3), dtype=np.uint8) * 80
        histogram = build_histogram(img)
        assert sum(histogram.values()) == 37 * 23
        assert all(count > 0 for count in histogram.values())
        assert len(histogram) <= 64

    def test_keys_are_plain_ints(self, two_by_two):
        histogram = build_histogram(two_by_two)
        assert all(type(key) is int for key in histogram)
        assert all(type(count) is int for count in histogram.values())

    def test_single_color_image(self):
        img = np.full((4, 4, 3), (12, 34, 56), dtype=np.uint8)
        assert build_histogram(img) == {0x0C2238: 16}

    def test_none_raises_invalid_input(self):
        with pytest.raises(InvalidInput):
            build_histogram(None)

    def test_empty_grid_raises_invalid_input(self):
        with pytest.raises(InvalidInput):
            build_histogram(np.zeros((0, 5, 3), dtype=np.uint8))
