"""Per-axis boundary policy shared by the pipeline stages.

Each image axis is either *wrapped* (toroidal, the first and last pixel are
neighbours) or *not wrapped*. The policy decides two things:

* The processing range. A wrapped axis is processed in full. A non-wrapped
  axis skips a margin of ``radius`` pixels at its start and ``radius - 1``
  pixels at its end, so that no kernel tap of an in-range pixel leaves the
  image.
* Neighbour lookup. A wrapped axis resolves offsets modulo its length. A
  non-wrapped axis clamps them to the nearest valid index.

All helpers are pure functions of their arguments, hence safe to call from
several threads at once.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

import numpy as np

from weightedcanny._typing import Array, BoolBuffer, Coordinate, Shape2D

# (dx, dy) in the order N, NE, E, SE, S, SW, W, NW. y grows downwards.
NEIGHBOR_OFFSETS: dict[str, Coordinate] = {
    "n": (0, -1),
    "ne": (1, -1),
    "e": (1, 0),
    "se": (1, 1),
    "s": (0, 1),
    "sw": (-1, 1),
    "w": (-1, 0),
    "nw": (-1, -1),
}


@dataclass(frozen=True)
class AxisRange:
    """Inclusive range ``[start, stop]`` of processed indices along one axis.

    Attributes
    ----------
    start : int
        First processed index.
    stop : int
        Last processed index (inclusive). ``stop < start`` denotes an empty
        range.
    size : int
        Length of the axis.
    wrap : bool
        Whether the axis wraps around.
    """

    start: int
    stop: int
    size: int
    wrap: bool

    @property
    def is_empty(self) -> bool:
        return self.stop < self.start

    def as_slice(self) -> slice:
        return slice(self.start, max(self.start, self.stop + 1))


@dataclass(frozen=True)
class ProcessingRange:
    """Rectangle of pixels that the per-pixel stages compute."""

    x: AxisRange
    y: AxisRange

    @property
    def shape(self) -> Shape2D:
        return self.y.size, self.x.size

    @property
    def is_empty(self) -> bool:
        return self.x.is_empty or self.y.is_empty

    def mask(self) -> BoolBuffer:
        """Return a ``(H, W)`` mask that is ``True`` for in-range pixels."""
        mask = np.zeros(self.shape, dtype=bool)
        if not self.is_empty:
            mask[self.y.as_slice(), self.x.as_slice()] = True
        return mask


def compute_axis_range(size: int, radius: int, wrap: bool) -> AxisRange:
    """Compute the processed range of a single axis.

    Parameters
    ----------
    size : int
        Length of the axis in pixels.

    radius : int
        Realized kernel length.

    wrap : bool
        Whether the axis wraps around.

    Returns
    -------
    AxisRange
        ``[0, size - 1]`` for a wrapped axis, otherwise
        ``[radius, size - radius]``.

    """
    if wrap:
        return AxisRange(start=0, stop=size - 1, size=size, wrap=True)
    return AxisRange(start=radius, stop=size - radius, size=size, wrap=False)


def compute_processing_range(
    height: int, width: int, radius: int, wrap_horizontally: bool, wrap_vertically: bool
) -> ProcessingRange:
    """Compute the processed rectangle for an image and kernel radius."""
    return ProcessingRange(
        x=compute_axis_range(width, radius, wrap_horizontally),
        y=compute_axis_range(height, radius, wrap_vertically),
    )


def neighbor_index(index: int, offset: int, size: int, wrap: bool) -> int:
    """Resolve ``index + offset`` along an axis of length `size`.

    The result wraps modulo `size` if `wrap` is set and is clamped to
    ``[0, size - 1]`` otherwise.
    """
    target = index + offset
    if wrap:
        return target % size
    return min(max(target, 0), size - 1)


def neighbor_coordinates(
    x: int, y: int, width: int, height: int, wrap_horizontally: bool, wrap_vertically: bool
) -> dict[str, Coordinate]:
    """Map a pixel to the coordinates of its 8 neighbours.

    This is the scalar reference form of the lookup that the pipeline
    performs on whole buffers through :func:`shift_along_axis`: the
    neighbour magnitudes of non-maximum suppression at ``(x, y)`` are read
    from exactly these coordinates.

    Parameters
    ----------
    x, y : int
        Pixel coordinates.

    width, height : int
        Image size.

    wrap_horizontally, wrap_vertically : bool
        Per-axis wrap policy.

    Returns
    -------
    dict of str to tuple of int
        ``(x, y)`` coordinates keyed by compass direction
        (``"n"``, ``"ne"``, ``"e"``, ``"se"``, ``"s"``, ``"sw"``, ``"w"``,
        ``"nw"``), north being the row above.

    Examples
    --------
    >>> neighbor_coordinates(0, 5, 10, 10, True, False)["w"]
    (9, 5)

    """
    return {
        name: (
            neighbor_index(x, dx, width, wrap_horizontally),
            neighbor_index(y, dy, height, wrap_vertically),
        )
        for name, (dx, dy) in NEIGHBOR_OFFSETS.items()
    }


@lru_cache(maxsize=128)
def _shifted_indices(size: int, offset: int, wrap: bool) -> np.ndarray:
    indices = np.arange(size, dtype=np.intp) + offset
    if wrap:
        indices %= size
    else:
        np.clip(indices, 0, size - 1, out=indices)
    indices.flags.writeable = False
    return indices


def shift_along_axis(buffer: Array, offset: int, axis: int, wrap: bool) -> Array:
    """Return an array whose element ``i`` is `buffer`'s element ``i + offset``.

    This is the vectorized form of :func:`neighbor_index`, applied along
    `axis` (``0`` for rows/y, ``1`` for columns/x).

    """
    if offset == 0:
        return buffer
    return np.take(buffer, _shifted_indices(buffer.shape[axis], offset, wrap), axis=axis)
