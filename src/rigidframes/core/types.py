"""Type definitions and aliases for frame computations."""

from typing import Any

import numpy as np
from numpy.typing import NDArray

# Coordinate types
Vector3 = tuple[float, float, float]
AngleDirection = tuple[float, Vector3]
FixedAngles = tuple[float, float, float]

# numpy interop
Array = NDArray[np.float64]
ArrayLike = Any

__all__ = [
    "Vector3",
    "AngleDirection",
    "FixedAngles",
    "Array",
    "ArrayLike",
]
