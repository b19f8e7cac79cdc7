import unittest

import numpy as np

from weightedcanny.boundary import compute_processing_range
from weightedcanny.convolution import convolve
from weightedcanny.kernels import gaussian_kernels


class Test_convolve(unittest.TestCase):
    def setUp(self):
        self.kernels = gaussian_kernels(3, 1.0)
        self.k = self.kernels.smoothing

    def test_uniform_image_fully_wrapped(self):
        brightness = np.full((12, 10), 10, dtype=np.int32)
        processing_range = compute_processing_range(12, 10, 3, True, True)

        x_conv, y_conv = convolve(brightness, self.kernels, processing_range)

        expected = 10 * (self.k[0] + 2 * self.k[1] + 2 * self.k[2])
        assert x_conv.dtype == np.float32
        assert y_conv.dtype == np.float32
        assert np.allclose(x_conv, expected, rtol=1e-5)
        assert np.allclose(y_conv, expected, rtol=1e-5)

    def test_out_of_range_pixels_stay_zero(self):
        brightness = np.full((12, 10), 10, dtype=np.int32)
        processing_range = compute_processing_range(12, 10, 3, False, False)

        x_conv, y_conv = convolve(brightness, self.kernels, processing_range)

        mask = processing_range.mask()
        assert np.all(x_conv[~mask] == 0)
        assert np.all(y_conv[~mask] == 0)
        assert np.all(x_conv[mask] > 0)
        assert np.all(y_conv[mask] > 0)

    def test_impulse_spreads_along_one_axis_each(self):
        brightness = np.zeros((11, 11), dtype=np.int32)
        brightness[5, 5] = 100
        processing_range = compute_processing_range(11, 11, 3, False, False)

        x_conv, y_conv = convolve(brightness, self.kernels, processing_range)

        assert np.isclose(x_conv[5, 5], 100 * self.k[0])
        assert np.isclose(x_conv[5, 4], 100 * self.k[1])
        assert np.isclose(x_conv[5, 6], 100 * self.k[1])
        assert np.isclose(x_conv[5, 3], 100 * self.k[2])
        assert np.isclose(x_conv[5, 7], 100 * self.k[2])
        assert x_conv[5, 8] == 0
        assert x_conv[4, 5] == 0

        assert np.isclose(y_conv[4, 5], 100 * self.k[1])
        assert np.isclose(y_conv[7, 5], 100 * self.k[2])
        assert y_conv[5, 4] == 0

    def test_horizontal_wrap(self):
        brightness = np.zeros((8, 8), dtype=np.int32)
        brightness[4, 0] = 100
        processing_range = compute_processing_range(8, 8, 3, True, False)

        x_conv, _ = convolve(brightness, self.kernels, processing_range)

        assert np.isclose(x_conv[4, 7], 100 * self.k[1])
        assert np.isclose(x_conv[4, 6], 100 * self.k[2])

    def test_vertical_wrap(self):
        brightness = np.zeros((8, 8), dtype=np.int32)
        brightness[7, 4] = 100
        processing_range = compute_processing_range(8, 8, 3, True, True)

        _, y_conv = convolve(brightness, self.kernels, processing_range)

        assert np.isclose(y_conv[0, 4], 100 * self.k[1])
        assert np.isclose(y_conv[1, 4], 100 * self.k[2])

    def test_does_not_modify_input(self):
        brightness = np.arange(100, dtype=np.int32).reshape(10, 10)
        original = brightness.copy()
        processing_range = compute_processing_range(10, 10, 3, True, True)

        _ = convolve(brightness, self.kernels, processing_range)

        assert np.array_equal(brightness, original)
