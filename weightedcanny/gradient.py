"""Weighted directional derivatives of the blurred brightness."""

from __future__ import annotations

import numpy as np

from weightedcanny._typing import FloatBuffer
from weightedcanny.boundary import ProcessingRange, shift_along_axis
from weightedcanny.kernels import GaussianKernels


def _derivative_along_axis(
    blurred: FloatBuffer, kernel: np.ndarray, axis: int, wrap: bool
) -> FloatBuffer:
    result = np.zeros_like(blurred)
    for offset in range(1, kernel.shape[0]):
        result += kernel[offset] * (
            shift_along_axis(blurred, -offset, axis, wrap)
            - shift_along_axis(blurred, offset, axis, wrap)
        )
    return result


def vertical_gradient(
    x_conv: FloatBuffer, kernels: GaussianKernels, processing_range: ProcessingRange, weight: float
) -> FloatBuffer:
    """Derivative along y of the x-blurred buffer, scaled by `weight`.

    Returns all zeros if ``weight <= 0``.
    """
    if weight <= 0.0:
        return np.zeros_like(x_conv)
    gradient = _derivative_along_axis(
        x_conv, kernels.derivative, axis=0, wrap=processing_range.y.wrap
    )
    gradient *= np.float32(weight)
    gradient[~processing_range.mask()] = 0.0
    return gradient


def horizontal_gradient(
    y_conv: FloatBuffer, kernels: GaussianKernels, processing_range: ProcessingRange, weight: float
) -> FloatBuffer:
    """Derivative along x of the y-blurred buffer, scaled by `weight`.

    Lookups always wrap horizontally. On a non-wrapped image the processing
    range keeps every tap inside the image, so this makes no difference
    there.

    Returns all zeros if ``weight <= 0``.
    """
    if weight <= 0.0:
        return np.zeros_like(y_conv)
    gradient = _derivative_along_axis(y_conv, kernels.derivative, axis=1, wrap=True)
    gradient *= np.float32(weight)
    gradient[~processing_range.mask()] = 0.0
    return gradient


def compute_gradients(
    x_conv: FloatBuffer,
    y_conv: FloatBuffer,
    kernels: GaussianKernels,
    processing_range: ProcessingRange,
    horizontal_weight: float = 1.0,
    vertical_weight: float = 1.0,
) -> tuple[FloatBuffer, FloatBuffer]:
    """Compute both gradient buffers.

    The x gradient is taken from the y-blurred buffer and vice versa, so that
    each derivative is smoothed orthogonally to its own direction.

    Parameters
    ----------
    x_conv, y_conv : ndarray
        Outputs of :func:`~weightedcanny.convolution.convolve`.

    kernels : weightedcanny.kernels.GaussianKernels
        Kernel pair. Only the derivative kernel is used.

    processing_range : weightedcanny.boundary.ProcessingRange
        Pixels to compute. Everything else stays ``0``.

    horizontal_weight, vertical_weight : float, optional
        Factors for the x and y gradient. A factor ``<= 0`` skips that
        gradient, leaving it all zeros.

    Returns
    -------
    x_gradient : ndarray
        ``float32`` horizontal gradient.
    y_gradient : ndarray
        ``float32`` vertical gradient.

    """
    y_gradient = vertical_gradient(x_conv, kernels, processing_range, vertical_weight)
    x_gradient = horizontal_gradient(y_conv, kernels, processing_range, horizontal_weight)
    return x_gradient, y_gradient
