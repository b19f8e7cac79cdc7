import unittest

import numpy as np

from weightedcanny.boundary import compute_processing_range
from weightedcanny.convolution import convolve
from weightedcanny.gradient import compute_gradients, horizontal_gradient, vertical_gradient
from weightedcanny.kernels import gaussian_kernels
from weightedcanny.testutils import make_half_plane_image


def _blur(brightness, wrap_horizontally=True, wrap_vertically=True):
    kernels = gaussian_kernels(3, 1.0)
    height, width = brightness.shape
    processing_range = compute_processing_range(
        height, width, kernels.radius, wrap_horizontally, wrap_vertically
    )
    x_conv, y_conv = convolve(brightness, kernels, processing_range)
    return x_conv, y_conv, kernels, processing_range


class Test_compute_gradients(unittest.TestCase):
    def test_step_along_x(self):
        image = make_half_plane_image()
        x_conv, y_conv, kernels, processing_range = _blur(image)

        x_gradient, y_gradient = compute_gradients(x_conv, y_conv, kernels, processing_range)

        assert x_gradient.dtype == np.float32
        assert y_gradient.dtype == np.float32
        # bright to the left of the step, derivative taps are negative
        assert x_gradient[16, 15] < 0
        assert x_gradient[16, 16] < 0
        # wrapped step from dark (x=31) to bright (x=0)
        assert x_gradient[16, 31] > 0
        assert np.isclose(x_gradient[16, 15], -x_gradient[16, 31])
        assert x_gradient[16, 8] == 0
        assert np.allclose(y_gradient, 0)

    def test_zero_weight_skips_gradient(self):
        image = make_half_plane_image()
        x_conv, y_conv, kernels, processing_range = _blur(image)

        x_gradient, y_gradient = compute_gradients(
            x_conv, y_conv, kernels, processing_range, horizontal_weight=0.0
        )

        assert np.all(x_gradient == 0)

    def test_negative_weight_skips_gradient(self):
        image = make_half_plane_image().T.copy()
        x_conv, y_conv, kernels, processing_range = _blur(image)

        _, y_gradient = compute_gradients(
            x_conv, y_conv, kernels, processing_range, vertical_weight=-1.0
        )

        assert np.all(y_gradient == 0)

    def test_weight_scales_gradient(self):
        image = make_half_plane_image()
        x_conv, y_conv, kernels, processing_range = _blur(image)

        x_gradient_1, _ = compute_gradients(x_conv, y_conv, kernels, processing_range)
        x_gradient_2, _ = compute_gradients(
            x_conv, y_conv, kernels, processing_range, horizontal_weight=2.0
        )

        assert np.array_equal(x_gradient_2, 2 * x_gradient_1)


class Test_vertical_gradient(unittest.TestCase):
    def test_step_along_y(self):
        image = make_half_plane_image().T.copy()
        x_conv, _, kernels, processing_range = _blur(image)

        y_gradient = vertical_gradient(x_conv, kernels, processing_range, 1.0)

        assert y_gradient[15, 16] < 0
        assert y_gradient[31, 16] > 0
        assert y_gradient[8, 16] == 0

    def test_zero_outside_range(self):
        image = make_half_plane_image().T.copy()
        x_conv, _, kernels, processing_range = _blur(image, wrap_vertically=False)

        y_gradient = vertical_gradient(x_conv, kernels, processing_range, 1.0)

        assert np.all(y_gradient[:3] == 0)
        assert np.all(y_gradient[30:] == 0)
        assert y_gradient[15, 16] < 0


class Test_horizontal_gradient(unittest.TestCase):
    def test_zero_outside_range(self):
        image = make_half_plane_image()
        _, y_conv, kernels, processing_range = _blur(image, wrap_horizontally=False)

        x_gradient = horizontal_gradient(y_conv, kernels, processing_range, 1.0)

        assert np.all(x_gradient[:, :3] == 0)
        assert np.all(x_gradient[:, 30:] == 0)
        assert x_gradient[16, 15] < 0
