"""Non-maximum suppression of the gradient magnitude.

The gradient direction of a pixel is not computed explicitly. Instead each
pixel falls into one of four cases, depending on whether its two gradient
components share a sign and on which component dominates. Each case
compares the pixel's magnitude against a linear blend of two neighbour
magnitudes on either side along the gradient, which approximates sampling
the magnitude field at the sub-pixel positions the gradient points to.
"""

from __future__ import annotations

import numpy as np

from weightedcanny._typing import FloatBuffer, MagnitudeBuffer
from weightedcanny.boundary import NEIGHBOR_OFFSETS, ProcessingRange, shift_along_axis
from weightedcanny.config import MAGNITUDE_SCALE


def gradient_magnitude(x_gradient: FloatBuffer, y_gradient: FloatBuffer) -> FloatBuffer:
    """Return the euclidean norm of the gradient per pixel as ``float32``."""
    return np.hypot(x_gradient, y_gradient).astype(np.float32, copy=False)


def _neighbor_magnitudes(
    magnitude: FloatBuffer, processing_range: ProcessingRange
) -> dict[str, FloatBuffer]:
    wrap_x = processing_range.x.wrap
    wrap_y = processing_range.y.wrap
    neighbors = {}
    for name, (dx, dy) in NEIGHBOR_OFFSETS.items():
        shifted = shift_along_axis(magnitude, dy, axis=0, wrap=wrap_y)
        neighbors[name] = shift_along_axis(shifted, dx, axis=1, wrap=wrap_x)
    return neighbors


def local_maxima(
    x_gradient: FloatBuffer, y_gradient: FloatBuffer, processing_range: ProcessingRange
) -> tuple[np.ndarray, FloatBuffer]:
    """Find pixels whose magnitude is a maximum along their gradient.

    Parameters
    ----------
    x_gradient, y_gradient : ndarray
        ``float32`` gradient buffers.

    processing_range : weightedcanny.boundary.ProcessingRange
        Pixels to test and the per-axis policy (wrap or clamp) used to
        resolve their neighbours.

    Returns
    -------
    is_maximum : ndarray
        ``(H, W)`` boolean mask. Always ``False`` outside the range.
    magnitude : ndarray
        ``float32`` gradient magnitude of every pixel.

    """
    mag = gradient_magnitude(x_gradient, y_gradient)
    nb = _neighbor_magnitudes(mag, processing_range)
    xg = x_gradient
    yg = y_gradient

    opposite_sign = xg * yg <= 0
    x_dominant = np.abs(xg) >= np.abs(yg)

    # The first comparison of each case is `>=` and the second is `>`, so
    # of two equal neighbouring maxima only one survives.
    with np.errstate(invalid="ignore", over="ignore"):
        along_x = np.abs(xg * mag)
        along_y = np.abs(yg * mag)
        sum_xy = xg + yg
        diff_xy = xg - yg
        diff_yx = yg - xg

        keep_opposite_x = (along_x >= np.abs(yg * nb["ne"] - sum_xy * nb["e"])) & (
            along_x > np.abs(yg * nb["sw"] - sum_xy * nb["w"])
        )
        keep_opposite_y = (along_y >= np.abs(xg * nb["ne"] - sum_xy * nb["n"])) & (
            along_y > np.abs(xg * nb["sw"] - sum_xy * nb["s"])
        )
        keep_same_x = (along_x >= np.abs(yg * nb["se"] + diff_xy * nb["e"])) & (
            along_x > np.abs(yg * nb["nw"] + diff_xy * nb["w"])
        )
        keep_same_y = (along_y >= np.abs(xg * nb["se"] + diff_yx * nb["s"])) & (
            along_y > np.abs(xg * nb["nw"] + diff_yx * nb["n"])
        )

    is_maximum = np.select(
        [
            opposite_sign & x_dominant,
            opposite_sign & ~x_dominant,
            ~opposite_sign & x_dominant,
        ],
        [keep_opposite_x, keep_opposite_y, keep_same_x],
        default=keep_same_y,
    )
    is_maximum &= processing_range.mask()
    return is_maximum, mag


def suppress_non_maxima(
    x_gradient: FloatBuffer, y_gradient: FloatBuffer, processing_range: ProcessingRange
) -> MagnitudeBuffer:
    """Thin the gradient field to ridges and scale it to integers.

    Returns
    -------
    ndarray
        ``int64`` buffer holding ``trunc(100000 * magnitude)`` at local
        maxima and ``0`` everywhere else.

    """
    is_maximum, mag = local_maxima(x_gradient, y_gradient, processing_range)
    scaled = (np.float32(MAGNITUDE_SCALE) * mag).astype(np.int64)
    scaled[~is_maximum] = 0
    return scaled
