"""Custom exceptions for weightedcanny."""

from __future__ import annotations


class WeightedCannyError(Exception):
    """Base class for weightedcanny exceptions."""


class InvalidConfigurationError(ValueError, WeightedCannyError):
    """Raised when a detector configuration value is out of its valid range."""


class InvalidImageError(ValueError, WeightedCannyError):
    """Raised when a pixel buffer does not match the expected image layout."""


class DetectionNotRunError(RuntimeError, WeightedCannyError):
    """Raised when results are requested before any detection run."""


class ImageIOError(OSError, WeightedCannyError):
    """Raised when an image file cannot be decoded or written."""


__all__ = [
    "DetectionNotRunError",
    "ImageIOError",
    "InvalidConfigurationError",
    "InvalidImageError",
    "WeightedCannyError",
]
