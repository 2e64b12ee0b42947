"""Quaternion and dual-quaternion algebra."""

from .dual_quaternion import ConjugateType, DualQuaternion
from .quaternion import EPSILON, Quaternion

__all__ = [
    "EPSILON",
    "Quaternion",
    "ConjugateType",
    "DualQuaternion",
]
