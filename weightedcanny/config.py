"""Immutable configuration of a weighted canny detection run."""

from __future__ import annotations

import dataclasses
import math
import numbers
from dataclasses import dataclass
from typing import Any

from weightedcanny.errors import InvalidConfigurationError
from weightedcanny.validation import is_single_integer

# Magnitudes are stored as integers scaled by this factor, so that
# thresholds given as fractions can be compared without float rounding.
MAGNITUDE_SCALE = 100000


def _normalize_finite(value: object, name: str) -> float:
    """Validate that `value` is a finite real number and return it as float.

    Raises
    ------
    InvalidConfigurationError
        If `value` is not a number or is NaN/inf.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidConfigurationError(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidConfigurationError(f"{name} must be finite, got {value!r}")
    return value


def _normalize_fraction(value: object, name: str) -> float:
    value = _normalize_finite(value, name)
    if not 0.0 <= value <= 1.0:
        raise InvalidConfigurationError(f"{name} must be in [0, 1], got {value!r}")
    return value


@dataclass(frozen=True, slots=True)
class CannyConfig:
    """Parameters of a single edge detection run.

    Parameters
    ----------
    kernel_width : int, optional
        Requested length of the one-sided gaussian kernel. The realized
        kernel may be shorter, see :func:`~weightedcanny.kernels.gaussian_kernels`.

    kernel_sigma : float, optional
        Standard deviation of the gaussian.

    low_threshold : float, optional
        Hysteresis threshold in ``[0, 1]`` that linked pixels must reach.

    high_threshold : float, optional
        Hysteresis threshold in ``[0, 1]`` that seed pixels must reach.

    horizontal_weight : float, optional
        Factor applied to the horizontal gradient. Values ``<= 0`` disable
        the horizontal gradient entirely.

    vertical_weight : float, optional
        Factor applied to the vertical gradient. Values ``<= 0`` disable
        the vertical gradient entirely.

    wrap_horizontally : bool, optional
        Whether the left and right image borders are treated as adjacent.

    wrap_vertically : bool, optional
        Whether the top and bottom image borders are treated as adjacent.

    Examples
    --------
    >>> from weightedcanny import CannyConfig
    >>> config = CannyConfig(kernel_width=20, kernel_sigma=5.0)
    >>> vertical_only = config.replace(horizontal_weight=0.0)

    """

    kernel_width: int = 3
    kernel_sigma: float = 1.0
    low_threshold: float = 0.5
    high_threshold: float = 1.0
    horizontal_weight: float = 1.0
    vertical_weight: float = 1.0
    wrap_horizontally: bool = True
    wrap_vertically: bool = False

    def __post_init__(self) -> None:
        if not is_single_integer(self.kernel_width):
            raise InvalidConfigurationError(
                f"kernel_width must be an integer, got {self.kernel_width!r}"
            )
        if self.kernel_width < 1:
            raise InvalidConfigurationError(
                f"kernel_width must be >= 1, got {self.kernel_width!r}"
            )
        object.__setattr__(self, "kernel_width", int(self.kernel_width))

        sigma = _normalize_finite(self.kernel_sigma, "kernel_sigma")
        if sigma <= 0.0:
            raise InvalidConfigurationError(f"kernel_sigma must be > 0, got {sigma!r}")
        object.__setattr__(self, "kernel_sigma", sigma)

        low = _normalize_fraction(self.low_threshold, "low_threshold")
        high = _normalize_fraction(self.high_threshold, "high_threshold")
        if low > high:
            raise InvalidConfigurationError(
                f"low_threshold must not exceed high_threshold, got low={low!r}, high={high!r}"
            )
        object.__setattr__(self, "low_threshold", low)
        object.__setattr__(self, "high_threshold", high)

        for name in ("horizontal_weight", "vertical_weight"):
            object.__setattr__(self, name, _normalize_finite(getattr(self, name), name))

        for name in ("wrap_horizontally", "wrap_vertically"):
            flag = getattr(self, name)
            if not isinstance(flag, bool):
                raise InvalidConfigurationError(f"{name} must be a bool, got {flag!r}")

    def replace(self, **changes: Any) -> CannyConfig:
        """Return a copy of this config with the given fields changed.

        Raises
        ------
        InvalidConfigurationError
            If a field name is unknown or a new value is invalid.
        """
        field_names = {field.name for field in dataclasses.fields(self)}
        unknown = sorted(set(changes) - field_names)
        if unknown:
            raise InvalidConfigurationError(
                f"Unknown configuration field(s): {', '.join(unknown)}. "
                f"Expected any of: {', '.join(sorted(field_names))}."
            )
        return dataclasses.replace(self, **changes)

