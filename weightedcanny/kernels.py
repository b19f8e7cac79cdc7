"""Gaussian smoothing and derivative kernels for separable edge detection."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from weightedcanny._typing import Kernel
from weightedcanny.errors import InvalidConfigurationError
from weightedcanny.validation import is_single_integer

# Kernel taps whose center gaussian value drops to this level are dropped.
_TRUNCATION_LEVEL = 0.005


@dataclass(frozen=True)
class GaussianKernels:
    """One-sided smoothing kernel and its derivative ("difference") kernel.

    Attributes
    ----------
    smoothing : ndarray
        ``float32`` taps ``k[0], k[1], ...`` of the smoothing kernel. Tap
        ``k[i]`` weights the pixels at distance ``i`` on both sides.
    derivative : ndarray
        ``float32`` taps of the derivative kernel, same length as
        `smoothing`. ``derivative[0]`` is always ``0``.
    """

    smoothing: Kernel
    derivative: Kernel

    @property
    def radius(self) -> int:
        """Realized kernel length, used as the one-sided convolution radius."""
        return int(self.smoothing.shape[0])


def _gaussian(position: np.ndarray, sigma: float) -> np.ndarray:
    return np.exp(-(position * position) / (2.0 * sigma * sigma)).astype(np.float32)


def gaussian_kernels(width: int, sigma: float) -> GaussianKernels:
    """Generate the truncated gaussian kernel pair.

    For each tap ``i`` the smoothing value averages the gaussian at ``i``,
    ``i - 0.5`` and ``i + 0.5`` and normalizes by ``2*pi*sigma^2``. The
    derivative value is the gaussian's difference across the tap,
    ``g(i + 0.5) - g(i - 0.5)``.

    Generation stops early at the first tap ``i >= 2`` whose gaussian value
    is ``<= 0.005``. Both kernels are then cut to length ``i - 1``, i.e. the
    preceding tap is dropped as well.

    Parameters
    ----------
    width : int
        Requested number of taps. Must be ``>= 1``.

    sigma : float
        Standard deviation of the gaussian. Must be ``> 0``.

    Returns
    -------
    GaussianKernels
        The smoothing and derivative kernels. Deterministic for the same
        `width` and `sigma`.

    Examples
    --------
    >>> from weightedcanny.kernels import gaussian_kernels
    >>> kernels = gaussian_kernels(3, 1.0)
    >>> kernels.radius
    3

    """
    if not is_single_integer(width) or width < 1:
        raise InvalidConfigurationError(f"Kernel width must be an integer >= 1, got {width!r}.")
    if not sigma > 0:
        raise InvalidConfigurationError(f"Kernel sigma must be > 0, got {sigma!r}.")

    positions = np.arange(int(width), dtype=np.float32)
    g1 = _gaussian(positions, sigma)

    length = int(width)
    truncated = np.flatnonzero((g1 <= _TRUNCATION_LEVEL) & (positions >= 2))
    if truncated.size > 0:
        length = int(truncated[0]) - 1
        positions = positions[:length]
        g1 = g1[:length]

    g2 = _gaussian(positions - np.float32(0.5), sigma)
    g3 = _gaussian(positions + np.float32(0.5), sigma)

    normalizer = np.float32(2.0 * np.pi * sigma * sigma)
    smoothing = ((g1 + g2 + g3) / np.float32(3.0) / normalizer).astype(np.float32)
    derivative = (g3 - g2).astype(np.float32)

    return GaussianKernels(smoothing=smoothing, derivative=derivative)
