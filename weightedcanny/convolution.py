"""Separable gaussian blur of the brightness buffer."""

from __future__ import annotations

import numpy as np

from weightedcanny._typing import FloatBuffer, IntBuffer
from weightedcanny.boundary import ProcessingRange, shift_along_axis
from weightedcanny.kernels import GaussianKernels


def _blur_along_axis(
    pixels: FloatBuffer, kernel: np.ndarray, axis: int, wrap: bool
) -> FloatBuffer:
    result = pixels * kernel[0]
    for offset in range(1, kernel.shape[0]):
        result += kernel[offset] * (
            shift_along_axis(pixels, -offset, axis, wrap)
            + shift_along_axis(pixels, offset, axis, wrap)
        )
    return result


def convolve(
    brightness: IntBuffer, kernels: GaussianKernels, processing_range: ProcessingRange
) -> tuple[FloatBuffer, FloatBuffer]:
    """Blur the brightness buffer separately along x and along y.

    For every in-range pixel the x-blur accumulates
    ``k[0]*p(x) + sum_i k[i]*(p(x-i) + p(x+i))`` and the y-blur does the same
    along the column. Out-of-range neighbours wrap around on wrapped axes.
    Pixels outside `processing_range` stay ``0``.

    Parameters
    ----------
    brightness : ndarray
        ``(H, W)`` integer brightness.

    kernels : weightedcanny.kernels.GaussianKernels
        Kernel pair. Only the smoothing kernel is used.

    processing_range : weightedcanny.boundary.ProcessingRange
        Pixels to compute, together with the per-axis wrap policy.

    Returns
    -------
    x_conv : ndarray
        ``float32`` horizontally blurred brightness.
    y_conv : ndarray
        ``float32`` vertically blurred brightness.

    """
    pixels = brightness.astype(np.float32)
    in_range = processing_range.mask()

    x_conv = _blur_along_axis(pixels, kernels.smoothing, axis=1, wrap=processing_range.x.wrap)
    y_conv = _blur_along_axis(pixels, kernels.smoothing, axis=0, wrap=processing_range.y.wrap)

    x_conv[~in_range] = 0.0
    y_conv[~in_range] = 0.0
    return x_conv, y_conv
