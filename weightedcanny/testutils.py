"""Synthetic images shared by the tests and the check scripts."""

from __future__ import annotations

import numpy as np

from weightedcanny._typing import IntBuffer

BRIGHT = 255
DARK = 0


def make_cross_image(
    width: int = 90,
    height: int = 180,
    vertical_band: tuple[int, int] | None = (36, 53),
    horizontal_band: tuple[int, int] | None = (81, 97),
    bright: int = BRIGHT,
    dark: int = DARK,
) -> IntBuffer:
    """Create a bright image crossed by dark bands.

    Parameters
    ----------
    width, height : int, optional
        Image size.

    vertical_band : None or tuple of int, optional
        Inclusive ``(first, last)`` columns of the dark vertical band.

    horizontal_band : None or tuple of int, optional
        Inclusive ``(first, last)`` rows of the dark horizontal band.

    bright, dark : int, optional
        Brightness of the background and of the bands.

    Returns
    -------
    ndarray
        ``(H, W)`` ``int32`` brightness.

    """
    image = np.full((height, width), bright, dtype=np.int32)
    if vertical_band is not None:
        image[:, vertical_band[0] : vertical_band[1] + 1] = dark
    if horizontal_band is not None:
        image[horizontal_band[0] : horizontal_band[1] + 1, :] = dark
    return image


def make_half_plane_image(
    width: int = 32, height: int = 32, split: int = 16, bright: int = BRIGHT, dark: int = DARK
) -> IntBuffer:
    """Create an image that is bright left of column `split` and dark from there on.

    Seen as a horizontally periodic pattern, the image has a second
    bright/dark boundary between its last and its first column.

    """
    image = np.full((height, width), dark, dtype=np.int32)
    image[:, :split] = bright
    return image
