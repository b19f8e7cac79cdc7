"""Shared typing helpers for :mod:`weightedcanny`.

This module is intentionally small and avoids importing heavy third-party
libraries (e.g. ``cv2``). It provides the array aliases used by the pipeline
stages.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeAlias

import numpy as np
from numpy.typing import NDArray

# ---- NumPy buffers ---------------------------------------------------------

# Generic numpy array with unknown dtype/shape.
Array: TypeAlias = NDArray[np.generic]

# Per-pixel buffers are `(H, W)` arrays. Raveling one yields the flat
# row-major layout `index = x + y * width`.
IntBuffer: TypeAlias = NDArray[np.int32]
MagnitudeBuffer: TypeAlias = NDArray[np.int64]
FloatBuffer: TypeAlias = NDArray[np.float32]
BoolBuffer: TypeAlias = NDArray[np.bool_]

# 1-D kernels.
Kernel: TypeAlias = NDArray[np.float32]

# Anything that can be turned into a brightness buffer: a `(H, W)` array,
# a flat array of length `H*W` or a plain sequence of ints.
BrightnessInput: TypeAlias = Array | Sequence[int]


# ---- Geometrical Types ----------------------------------------------------

# (x, y)
Coordinate: TypeAlias = tuple[int, int]

# (H, W)
Shape2D: TypeAlias = tuple[int, int]
