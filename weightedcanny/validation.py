"""Helper functions to validate input buffers and produce error messages."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import numpy as np

from weightedcanny._typing import Array, BrightnessInput, IntBuffer, Shape2D
from weightedcanny.errors import InvalidImageError


def is_single_integer(val: object) -> bool:
    """Check whether a variable is an ``int`` (bools excluded).

    Parameters
    ----------
    val
        The variable to check.

    Returns
    -------
    bool
        ``True`` if the variable is an ``int`` or numpy integer scalar.
        Otherwise ``False``.

    """
    return isinstance(val, (int, np.integer)) and not isinstance(val, (bool, np.bool_))


def convert_iterable_to_string_of_types(iterable_var: Iterable[Any]) -> str:
    """Convert an iterable of values to a string of their types.

    Parameters
    ----------
    iterable_var : iterable
        An iterable of variables, e.g. a list of integers.

    Returns
    -------
    str
        String representation of the types in `iterable_var`. One per item
        in `iterable_var`. Separated by commas.

    """
    types = [str(type(var_i)) for var_i in iterable_var]
    return ", ".join(types)


def validate_dimensions(width: object, height: object) -> Shape2D:
    """Validate image dimensions and return them as ``(height, width)``.

    Parameters
    ----------
    width : int
        Image width in pixels. Must be ``>= 1``.

    height : int
        Image height in pixels. Must be ``>= 1``.

    Returns
    -------
    tuple of int
        ``(height, width)``, i.e. the numpy shape of every per-pixel buffer.

    """
    if not is_single_integer(width) or not is_single_integer(height):
        raise InvalidImageError(
            "Expected image width and height to be integers, got types "
            f"{convert_iterable_to_string_of_types([width, height])}."
        )
    if width < 1 or height < 1:
        raise InvalidImageError(
            f"Expected image width and height to be >= 1, got width={width}, height={height}."
        )
    return int(height), int(width)


def as_brightness_buffer(
    data: BrightnessInput, width: int | None = None, height: int | None = None
) -> IntBuffer:
    """Normalize brightness samples to a read-only ``(H, W)`` int32 buffer.

    Parameters
    ----------
    data : ndarray or sequence of int
        Either a ``(H, W)`` array or a flat row-major sequence of
        ``width * height`` samples.

    width : None or int, optional
        Image width. Required for flat input, checked against the array's
        shape for 2D input.

    height : None or int, optional
        Image height. Same rules as `width`.

    Returns
    -------
    ndarray
        C-contiguous ``int32`` copy of the samples with shape ``(H, W)``.
        The copy is marked read-only, as brightness is never mutated during
        detection.

    """
    arr = np.asarray(data)
    if arr.dtype.kind not in "uif":
        raise InvalidImageError(
            f"Expected numeric brightness samples, got dtype {arr.dtype.name}."
        )
    if arr.dtype.kind == "f" and not np.all(np.isfinite(arr)):
        raise InvalidImageError("Expected finite brightness samples, got NaN or inf values.")

    if arr.ndim == 2:
        shape = arr.shape
        if width is not None or height is not None:
            expected = validate_dimensions(
                width if width is not None else shape[1],
                height if height is not None else shape[0],
            )
            if expected != shape:
                raise InvalidImageError(
                    f"Expected brightness buffer of shape {expected} (H, W), got {shape}."
                )
        validate_dimensions(shape[1], shape[0])
    elif arr.ndim == 1:
        if width is None or height is None:
            raise InvalidImageError(
                "Flat brightness buffers require both `width` and `height` to be given."
            )
        shape = validate_dimensions(width, height)
        if arr.size != shape[0] * shape[1]:
            raise InvalidImageError(
                f"Expected {shape[0] * shape[1]} brightness samples for a "
                f"{width}x{height} image, got {arr.size}."
            )
        arr = arr.reshape(shape)
    else:
        raise InvalidImageError(
            f"Expected brightness buffer with 1 or 2 dimensions, got shape {arr.shape}."
        )

    buffer = np.array(arr, dtype=np.int32, order="C", copy=True)
    buffer.flags.writeable = False
    return buffer


def as_mask_buffer(mask: Array) -> Array:
    """Validate that `mask` is a 2D boolean edge mask and return it."""
    mask = np.asarray(mask)
    if mask.ndim != 2:
        raise InvalidImageError(f"Expected (H, W) edge mask, got shape {mask.shape}.")
    if mask.dtype.kind != "b":
        raise InvalidImageError(f"Expected boolean edge mask, got dtype {mask.dtype.name}.")
    return mask
