"""Imports for package weightedcanny."""

from weightedcanny.config import MAGNITUDE_SCALE, CannyConfig
from weightedcanny.detector import CannyDetector, EdgeDetectionResult, detect_edges
from weightedcanny.errors import (
    DetectionNotRunError,
    ImageIOError,
    InvalidConfigurationError,
    InvalidImageError,
    WeightedCannyError,
)
from weightedcanny.kernels import GaussianKernels, gaussian_kernels
from weightedcanny._warnings import WeightedCannyWarning
import weightedcanny.io as io

__version__ = "0.1.0"
