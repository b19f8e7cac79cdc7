"""Weighted, wrap-aware canny edge detector.

The detector runs these stages strictly in sequence:

1. :func:`~weightedcanny.kernels.gaussian_kernels` builds the smoothing and
   derivative kernels.
2. :func:`~weightedcanny.convolution.convolve` blurs the brightness along x
   and along y.
3. :func:`~weightedcanny.gradient.compute_gradients` derives the weighted
   x and y gradients.
4. :func:`~weightedcanny.suppression.suppress_non_maxima` thins the
   gradient magnitude.
5. :func:`~weightedcanny.hysteresis.perform_hysteresis` links edge pixels.
6. :func:`~weightedcanny.hysteresis.binarize_edges` produces the mask.

Every buffer except the brightness is allocated fresh per run, so runs are
independent of each other.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

from weightedcanny import io as wcio
from weightedcanny._typing import (
    Array,
    BoolBuffer,
    BrightnessInput,
    FloatBuffer,
    IntBuffer,
    MagnitudeBuffer,
)
from weightedcanny._warnings import warn
from weightedcanny.boundary import compute_processing_range
from weightedcanny.config import CannyConfig
from weightedcanny.convolution import convolve
from weightedcanny.errors import DetectionNotRunError, InvalidConfigurationError, InvalidImageError
from weightedcanny.gradient import compute_gradients
from weightedcanny.hysteresis import binarize_edges, perform_hysteresis, thresholds_to_bounds
from weightedcanny.kernels import GaussianKernels, gaussian_kernels
from weightedcanny.suppression import suppress_non_maxima
from weightedcanny.validation import as_brightness_buffer

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class EdgeDetectionResult:
    """All buffers produced by one detection run, each of shape ``(H, W)``."""

    config: CannyConfig
    kernels: GaussianKernels
    x_conv: FloatBuffer
    y_conv: FloatBuffer
    x_gradient: FloatBuffer
    y_gradient: FloatBuffer
    magnitude: MagnitudeBuffer
    thresholded: MagnitudeBuffer
    edges: BoolBuffer

    @property
    def edges_flat(self) -> BoolBuffer:
        """The edge mask in flat row-major order, ``index = x + y * width``."""
        return self.edges.ravel()

    @property
    def nb_edge_pixels(self) -> int:
        return int(np.count_nonzero(self.edges))


def _resolve_config(
    default: CannyConfig, config: CannyConfig | None, overrides: dict[str, Any]
) -> CannyConfig:
    if config is not None and not isinstance(config, CannyConfig):
        raise InvalidConfigurationError(
            f"Expected config to be a CannyConfig, got {type(config).__name__}."
        )
    resolved = config if config is not None else default
    if overrides:
        resolved = resolved.replace(**overrides)
    return resolved


def run_pipeline(brightness: IntBuffer, config: CannyConfig) -> EdgeDetectionResult:
    """Run all stages on a validated ``(H, W)`` brightness buffer."""
    height, width = brightness.shape

    kernels = gaussian_kernels(config.kernel_width, config.kernel_sigma)
    processing_range = compute_processing_range(
        height,
        width,
        kernels.radius,
        wrap_horizontally=config.wrap_horizontally,
        wrap_vertically=config.wrap_vertically,
    )
    _LOGGER.debug(
        "Detecting edges in %dx%d image with kernel radius %d, x range [%d, %d], y range [%d, %d]",
        width,
        height,
        kernels.radius,
        processing_range.x.start,
        processing_range.x.stop,
        processing_range.y.start,
        processing_range.y.stop,
    )
    if processing_range.is_empty:
        warn(
            f"Image of size {width}x{height} is too small for a kernel radius of "
            f"{kernels.radius} on a non-wrapped axis. No pixel will be processed "
            "and the edge mask will be empty."
        )

    x_conv, y_conv = convolve(brightness, kernels, processing_range)
    x_gradient, y_gradient = compute_gradients(
        x_conv,
        y_conv,
        kernels,
        processing_range,
        horizontal_weight=config.horizontal_weight,
        vertical_weight=config.vertical_weight,
    )
    magnitude = suppress_non_maxima(x_gradient, y_gradient, processing_range)

    low, high = thresholds_to_bounds(config.low_threshold, config.high_threshold)
    thresholded = perform_hysteresis(magnitude, low, high)
    edges = binarize_edges(thresholded)

    result = EdgeDetectionResult(
        config=config,
        kernels=kernels,
        x_conv=x_conv,
        y_conv=y_conv,
        x_gradient=x_gradient,
        y_gradient=y_gradient,
        magnitude=magnitude,
        thresholded=thresholded,
        edges=edges,
    )
    _LOGGER.debug("Found %d edge pixels", result.nb_edge_pixels)
    return result


class CannyDetector:
    """Edge detector bound to the brightness of a single image.

    Parameters
    ----------
    brightness : ndarray or sequence of int
        Brightness per pixel, either as a ``(H, W)`` array or as a flat
        row-major sequence of ``width * height`` values. The detector keeps
        its own read-only copy.

    width, height : None or int, optional
        Image size. Required if `brightness` is flat.

    config : None or weightedcanny.config.CannyConfig, optional
        Default configuration of :meth:`detect_edges`. If ``None``, the
        default ``CannyConfig()`` is used.

    Examples
    --------
    >>> import numpy as np
    >>> from weightedcanny import CannyDetector
    >>> image = np.zeros((64, 64), dtype=np.int32)
    >>> image[:, 32:] = 255
    >>> detector = CannyDetector(image)
    >>> edges = detector.detect_edges(wrap_horizontally=False).edges

    """

    def __init__(
        self,
        brightness: BrightnessInput,
        width: int | None = None,
        height: int | None = None,
        config: CannyConfig | None = None,
    ) -> None:
        self._brightness = as_brightness_buffer(brightness, width=width, height=height)
        self.config = _resolve_config(CannyConfig(), config, {})
        self._last_result: EdgeDetectionResult | None = None

    @classmethod
    def from_rgb_image(cls, image: Array, config: CannyConfig | None = None) -> CannyDetector:
        """Create a detector from an ``(H, W, 3)`` or ``(H, W, 4)`` RGB(A) image."""
        return cls(wcio.brightness_from_rgb_image(image), config=config)

    @classmethod
    def from_packed(
        cls,
        raw: BrightnessInput,
        width: int,
        height: int,
        config: CannyConfig | None = None,
    ) -> CannyDetector:
        """Create a detector from packed ``0xAARRGGBB`` integer pixels."""
        return cls(wcio.brightness_from_packed(raw, width, height), config=config)

    @classmethod
    def from_file(cls, path: str | Path, config: CannyConfig | None = None) -> CannyDetector:
        """Create a detector from an image file readable by OpenCV."""
        return cls(wcio.load_brightness(path), config=config)

    @property
    def width(self) -> int:
        return int(self._brightness.shape[1])

    @property
    def height(self) -> int:
        return int(self._brightness.shape[0])

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def brightness(self) -> IntBuffer:
        """Read-only ``(H, W)`` brightness buffer."""
        return self._brightness

    @property
    def last_result(self) -> EdgeDetectionResult:
        """Result of the most recent :meth:`detect_edges` call."""
        if self._last_result is None:
            raise DetectionNotRunError(
                "No edge data available yet. Call `detect_edges()` first."
            )
        return self._last_result

    @property
    def edges(self) -> BoolBuffer:
        """``(H, W)`` edge mask of the most recent run."""
        return self.last_result.edges

    def detect_edges(
        self, config: CannyConfig | None = None, **overrides: Any
    ) -> EdgeDetectionResult:
        """Run the full pipeline.

        Parameters
        ----------
        config : None or weightedcanny.config.CannyConfig, optional
            Configuration of this run. If ``None``, the detector's `config`
            is used.

        **overrides
            Configuration fields to change for this run only, e.g.
            ``horizontal_weight=0.0``. Applied on top of `config`.

        Returns
        -------
        EdgeDetectionResult
            The edge mask and every intermediate buffer.

        """
        resolved = _resolve_config(self.config, config, overrides)
        self._last_result = run_pipeline(self._brightness, resolved)
        return self._last_result

    def get_edge_data(self) -> BoolBuffer:
        """Return a copy of the last edge mask in flat row-major order."""
        return self.last_result.edges_flat.copy()

    def get_edge_magnitude(self, x: int, y: int) -> int:
        """Return the confirmed magnitude of the last run at pixel ``(x, y)``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise InvalidImageError(
                f"Pixel ({x}, {y}) is outside of the {self.width}x{self.height} image."
            )
        return int(self.last_result.thresholded[y, x])

    def get_image(self) -> np.ndarray:
        """Render the last edge mask as a ``uint8`` image (edges white)."""
        return wcio.edges_to_image(self.edges)


def detect_edges(
    brightness: BrightnessInput,
    width: int | None = None,
    height: int | None = None,
    config: CannyConfig | None = None,
    **overrides: Any,
) -> BoolBuffer:
    """Detect edges in a brightness buffer and return the ``(H, W)`` mask.

    This is a shortcut for
    ``CannyDetector(brightness, width, height).detect_edges(config, **overrides).edges``.
    """
    detector = CannyDetector(brightness, width=width, height=height)
    return detector.detect_edges(config, **overrides).edges
