"""Hysteresis edge linking and binarization of the suppressed magnitudes."""

from __future__ import annotations

import logging
import math

import numpy as np

from weightedcanny._typing import BoolBuffer, MagnitudeBuffer
from weightedcanny.config import MAGNITUDE_SCALE

_LOGGER = logging.getLogger(__name__)


def thresholds_to_bounds(low_threshold: float, high_threshold: float) -> tuple[int, int]:
    """Convert fractional thresholds to scaled integer magnitude bounds."""
    return (
        int(math.floor(low_threshold * MAGNITUDE_SCALE)),
        int(math.floor(high_threshold * MAGNITUDE_SCALE)),
    )


def _first_linked_neighbor(
    magnitude: list[list[int]],
    thresholded: list[list[int]],
    x: int,
    y: int,
    low: int,
) -> tuple[int, int] | None:
    height = len(magnitude)
    width = len(magnitude[0])
    # Columns outer, rows inner. The neighbourhood is clamped at the image
    # border, never wrapped.
    for nx in range(max(x - 1, 0), min(x + 1, width - 1) + 1):
        for ny in range(max(y - 1, 0), min(y + 1, height - 1) + 1):
            if (nx != x or ny != y) and thresholded[ny][nx] == 0 and magnitude[ny][nx] >= low:
                return nx, ny
    return None


def follow_edge(
    magnitude: list[list[int]],
    thresholded: list[list[int]],
    x: int,
    y: int,
    low: int,
    max_steps: int,
) -> bool:
    """Chase a single edge starting at a seed pixel.

    Each step confirms the current pixel, i.e. copies its magnitude into
    `thresholded`, and then moves to the *first* unconfirmed neighbour whose
    magnitude is ``>= low``. All other qualifying neighbours are abandoned.
    The chase ends when no neighbour qualifies or after `max_steps` pixels.

    Parameters
    ----------
    magnitude : list of list of int
        Suppressed magnitudes, indexed ``[y][x]``.

    thresholded : list of list of int
        Confirmed magnitudes, indexed ``[y][x]``. Modified in-place.

    x, y : int
        Seed pixel.

    low : int
        Low bound in scaled magnitude units.

    max_steps : int
        Maximum number of pixels confirmed by this chase.

    Returns
    -------
    bool
        ``True`` if the chase was cut off by `max_steps`.

    """
    steps = 0
    current: tuple[int, int] | None = (x, y)
    while current is not None:
        steps += 1
        if steps > max_steps:
            return True
        cx, cy = current
        thresholded[cy][cx] = magnitude[cy][cx]
        current = _first_linked_neighbor(magnitude, thresholded, cx, cy, low)
    return False


def perform_hysteresis(magnitude: MagnitudeBuffer, low: int, high: int) -> MagnitudeBuffer:
    """Link edge pixels, starting from every pixel with magnitude ``>= high``.

    Seeds are visited in raster order. A seed that an earlier chase has
    already confirmed is skipped. Each chase may confirm at most ``W``
    pixels, ``W`` being the image width.

    Parameters
    ----------
    magnitude : ndarray
        ``(H, W)`` integer output of non-maximum suppression.

    low, high : int
        Bounds in scaled magnitude units, see :func:`thresholds_to_bounds`.

    Returns
    -------
    ndarray
        ``int64`` buffer holding the magnitude of confirmed pixels and ``0``
        elsewhere.

    """
    height, width = magnitude.shape
    # Plain nested lists are much faster than numpy for scalar access.
    magnitude_rows = magnitude.tolist()
    thresholded_rows = [[0] * width for _ in range(height)]

    seeds = np.argwhere(magnitude >= high)
    nb_truncated = 0
    for y, x in seeds.tolist():
        if thresholded_rows[y][x] == 0:
            truncated = follow_edge(magnitude_rows, thresholded_rows, x, y, low, width)
            nb_truncated += int(truncated)

    _LOGGER.debug(
        "Hysteresis with bounds low=%d high=%d: %d seed candidates, %d chases truncated",
        low,
        high,
        len(seeds),
        nb_truncated,
    )
    return np.array(thresholded_rows, dtype=np.int64).reshape(height, width)


def binarize_edges(thresholded: MagnitudeBuffer) -> BoolBuffer:
    """Convert confirmed magnitudes to the final edge mask.

    A pixel is an edge if its confirmed magnitude is ``> 0``. The first and
    last image rows are never edges.
    """
    edges = thresholded > 0
    edges[0, :] = False
    edges[-1, :] = False
    return edges
