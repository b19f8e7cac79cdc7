"""Adapters between image data and the detector's buffers.

These convert color pixels into brightness samples before detection and
render boolean edge masks into displayable images afterwards.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import cv2
import numpy as np

from weightedcanny._typing import Array, BoolBuffer, BrightnessInput, IntBuffer
from weightedcanny.errors import ImageIOError, InvalidImageError
from weightedcanny.validation import as_mask_buffer, validate_dimensions

SHOW_BACKEND_DEFAULT = "matplotlib"

# Channel weights of the brightness conversion, in single precision.
_WEIGHT_R = np.float32(0.334)
_WEIGHT_G = np.float32(0.333)
_WEIGHT_B = np.float32(0.333)


def brightness_from_rgb(r: Array, g: Array, b: Array) -> IntBuffer:
    """Convert color channels to brightness ``floor(0.334r + 0.333g + 0.333b)``.

    Parameters
    ----------
    r, g, b : ndarray
        Channel values of identical shape, usually in ``[0, 255]``.

    Returns
    -------
    ndarray
        ``int32`` brightness of the same shape as the channels.

    """
    r = np.asarray(r, dtype=np.float32)
    g = np.asarray(g, dtype=np.float32)
    b = np.asarray(b, dtype=np.float32)
    brightness = _WEIGHT_R * r + _WEIGHT_G * g + _WEIGHT_B * b
    return np.floor(brightness).astype(np.int32)


def brightness_from_rgb_image(image: Array) -> IntBuffer:
    """Convert an ``(H, W, 3)`` or ``(H, W, 4)`` RGB(A) image to brightness.

    The alpha channel, if present, is ignored.

    """
    image = np.asarray(image)
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise InvalidImageError(
            f"Expected RGB or RGBA image of shape (H, W, 3) or (H, W, 4), got {image.shape}."
        )
    if 0 in image.shape[0:2]:
        raise InvalidImageError(f"Expected non-empty image, got shape {image.shape}.")
    return brightness_from_rgb(image[..., 0], image[..., 1], image[..., 2])


def brightness_from_packed(raw: BrightnessInput, width: int, height: int) -> IntBuffer:
    """Convert packed ``0xAARRGGBB`` pixels to a ``(H, W)`` brightness buffer.

    Parameters
    ----------
    raw : ndarray or sequence of int
        ``width * height`` packed pixels in row-major order, or a ``(H, W)``
        array of them.

    width, height : int
        Image size.

    """
    shape = validate_dimensions(width, height)
    packed = np.asarray(raw)
    if packed.dtype.kind not in "ui":
        raise InvalidImageError(f"Expected integer packed pixels, got dtype {packed.dtype.name}.")
    if packed.size != shape[0] * shape[1]:
        raise InvalidImageError(
            f"Expected {shape[0] * shape[1]} packed pixels for a {width}x{height} image, "
            f"got {packed.size}."
        )
    packed = packed.astype(np.int64).reshape(shape)
    r = (packed & 0xFF0000) >> 16
    g = (packed & 0xFF00) >> 8
    b = packed & 0xFF
    return brightness_from_rgb(r, g, b)


def load_brightness(path: str | Path) -> IntBuffer:
    """Read an image file and convert it to a ``(H, W)`` brightness buffer.

    Raises
    ------
    ImageIOError
        If OpenCV cannot decode the file.

    """
    image_bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image_bgr is None:
        raise ImageIOError(f"Could not read image file '{path}'.")
    return brightness_from_rgb_image(image_bgr[..., ::-1])


def edges_to_image(mask: BoolBuffer, color_true: int = 255, color_false: int = 0) -> np.ndarray:
    """Render an edge mask as a ``uint8`` ``(H, W)`` image.

    Parameters
    ----------
    mask : ndarray
        Boolean ``(H, W)`` edge mask.

    color_true : int, optional
        Intensity of edge pixels.

    color_false : int, optional
        Intensity of all other pixels.

    """
    mask = as_mask_buffer(mask)
    for name, value in (("color_true", color_true), ("color_false", color_false)):
        if not 0 <= value <= 255:
            raise ValueError(f"Expected {name} to be in [0, 255], got {value}.")
    image = np.full(mask.shape, color_false, dtype=np.uint8)
    image[mask] = color_true
    return image


def save_edges(path: str | Path, mask: BoolBuffer) -> None:
    """Write an edge mask to an image file, edges in white.

    Raises
    ------
    ImageIOError
        If OpenCV cannot encode or write the file.

    """
    image = edges_to_image(mask)
    try:
        success = cv2.imwrite(str(path), image)
    except cv2.error as exc:
        raise ImageIOError(f"Could not write edge image to '{path}'.") from exc
    if not success:
        raise ImageIOError(f"Could not write edge image to '{path}'.")


def show_edges(
    mask: BoolBuffer, backend: Literal["matplotlib", "cv2"] = SHOW_BACKEND_DEFAULT
) -> None:
    """Show an edge mask in a window.

    Parameters
    ----------
    mask : ndarray
        Boolean ``(H, W)`` edge mask.

    backend : {'matplotlib', 'cv2'}, optional
        Library to use to show the image. May be either matplotlib or
        OpenCV ('cv2').

    """
    assert backend in ["matplotlib", "cv2"], (
        f"Expected backend 'matplotlib' or 'cv2', got {backend}."
    )
    image = edges_to_image(mask)

    if backend == "cv2":
        win_name = "weightedcanny-edges"
        cv2.namedWindow(win_name, cv2.WINDOW_NORMAL)
        cv2.imshow(win_name, image)
        cv2.waitKey(0)
        cv2.destroyWindow(win_name)
    else:
        # import only when necessary (faster startup; optional dependency)
        import matplotlib.pyplot as plt

        dpi = 96
        h, w = image.shape[0] / dpi, image.shape[1] / dpi
        # if the figure is too narrow, the footer may appear and make the fig
        # suddenly wider
        w = max(w, 6)

        fig, ax = plt.subplots(figsize=(w, h), dpi=dpi)
        manager = getattr(fig.canvas, "manager", None)
        if manager is not None and hasattr(manager, "set_window_title"):
            manager.set_window_title(f"weightedcanny.show_edges({image.shape})")
        ax.imshow(image, cmap="gray", vmin=0, vmax=255)
        plt.show()
