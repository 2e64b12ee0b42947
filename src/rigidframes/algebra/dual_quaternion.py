"""Dual quaternions for rigid motions.

A DualQuaternion represents a rotation followed by a translation. The
``real`` part is the rotation; the translation is recovered as
``2 * dual * conjugate(real)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

import numpy as np

from ..core.types import Array, ArrayLike
from .quaternion import EPSILON, Quaternion


class ConjugateType(Enum):
    """Which parts of a dual quaternion to conjugate.

    QUATERNION conjugates both parts (rigid inverse). DUAL negates the dual
    part. DUAL_AND_QUATERNION conjugates the real part and the negated dual
    part; it is the right-hand side of the point/rotation sandwich.
    """

    QUATERNION = "quaternion"
    DUAL = "dual"
    DUAL_AND_QUATERNION = "dual_and_quaternion"


@dataclass(frozen=True)
class DualQuaternion:
    """Immutable rigid-motion operator. Equality is exact."""

    real: Quaternion = Quaternion(1.0, 0.0, 0.0, 0.0)
    dual: Quaternion = Quaternion(0.0, 0.0, 0.0, 0.0)

    IDENTITY: ClassVar[DualQuaternion]

    # Construction

    @classmethod
    def from_rotation_translation(
        cls, rotation: Quaternion, translation: Quaternion
    ) -> DualQuaternion:
        """Rotate by ``rotation`` then translate by the pure ``translation``."""
        return cls(rotation, 0.5 * (translation * rotation))

    @classmethod
    def from_rotation(cls, rotation: Quaternion) -> DualQuaternion:
        return cls(rotation, Quaternion.ZERO)

    @classmethod
    def from_translation(cls, translation: Quaternion) -> DualQuaternion:
        return cls(Quaternion.IDENTITY, 0.5 * translation)

    # Norm

    @property
    def norm(self) -> float:
        return self.real.norm

    @property
    def normalize(self) -> DualQuaternion | None:
        """``self`` scaled so the real part has unit norm, or None if the norm is zero."""
        norm = self.norm
        if norm == 0.0:
            return None
        return DualQuaternion(self.real * (1.0 / norm), self.dual * (1.0 / norm))

    @property
    def unit_condition(self) -> Quaternion:
        """``conj(real)*dual + conj(dual)*real``; zero for a rigid motion."""
        return self.real.conjugate * self.dual + self.dual.conjugate * self.real

    def is_unit(self, epsilon: float = EPSILON) -> bool:
        return self.real.is_unit(epsilon) and self.unit_condition.is_zero(epsilon)

    def is_close(self, other: DualQuaternion, atol: float | None = None) -> bool:
        return self.real.is_close(other.real, atol) and self.dual.is_close(other.dual, atol)

    # Conjugates and inverse

    def conjugate(self, kind: ConjugateType) -> DualQuaternion:
        if kind is ConjugateType.QUATERNION:
            return DualQuaternion(self.real.conjugate, self.dual.conjugate)
        if kind is ConjugateType.DUAL:
            return DualQuaternion(self.real, -self.dual)
        if kind is ConjugateType.DUAL_AND_QUATERNION:
            return DualQuaternion(self.real.conjugate, -self.dual.conjugate)
        raise ValueError(f"Unknown conjugate type: {kind}")

    @property
    def inverse(self) -> DualQuaternion:
        """Rigid-motion inverse; requires a unit ``real`` part."""
        return self.conjugate(ConjugateType.QUATERNION)

    # Operators

    def __add__(self, other: DualQuaternion) -> DualQuaternion:
        if not isinstance(other, DualQuaternion):
            return NotImplemented
        return DualQuaternion(self.real + other.real, self.dual + other.dual)

    def __mul__(self, other: DualQuaternion) -> DualQuaternion:
        if not isinstance(other, DualQuaternion):
            return NotImplemented
        return DualQuaternion(
            self.real * other.real,
            self.real * other.dual + self.dual * other.real,
        )

    def compose(self, offset: DualQuaternion) -> DualQuaternion:
        """Perform ``self`` then ``offset``: ``offset * self``."""
        return offset * self

    # Extraction

    @property
    def as_rotation(self) -> Quaternion:
        return self.real

    @property
    def as_translation(self) -> Quaternion:
        return 2.0 * (self.dual * self.real.conjugate)

    @property
    def as_rotation_and_translation(self) -> tuple[Quaternion, Quaternion]:
        return (self.as_rotation, self.as_translation)

    # Application

    def transform_point(self, point: Quaternion) -> Quaternion:
        """Apply the motion to the pure quaternion ``point``."""
        point_dq = DualQuaternion(Quaternion.IDENTITY, point)
        return (self * point_dq * self.conjugate(ConjugateType.DUAL_AND_QUATERNION)).dual

    def transform_rotation(self, rotation: Quaternion) -> Quaternion:
        """Conjugate the rotation quaternion ``rotation`` by the motion's rotation."""
        rotation_dq = DualQuaternion(rotation, Quaternion.ZERO)
        return (self * rotation_dq * self.conjugate(ConjugateType.DUAL_AND_QUATERNION)).real

    def transform_points(self, points: ArrayLike) -> Array:
        """Apply the motion to an array of points.

        Args:
            points: Points, shape (3,) or (N, 3)

        Returns:
            Transformed points with the input shape
        """
        p = np.asarray(points, dtype=np.float64)
        if p.shape[-1] != 3:
            raise ValueError(f"Expected points with last dimension 3, got shape {p.shape}")
        original_shape = p.shape
        p = p.reshape(-1, 3)

        R = self.real.as_rotation_matrix()
        t = self.as_translation
        p_out = p @ R.T + np.array([t.q1, t.q2, t.q3], dtype=np.float64)

        return p_out.reshape(original_shape)

    def as_matrix(self) -> Array:
        """4x4 homogeneous transform equivalent to the motion."""
        T = np.eye(4, dtype=np.float64)
        T[:3, :3] = self.real.as_rotation_matrix()
        t = self.as_translation
        T[:3, 3] = (t.q1, t.q2, t.q3)
        return T


DualQuaternion.IDENTITY = DualQuaternion(Quaternion.IDENTITY, Quaternion.ZERO)


__all__ = [
    "ConjugateType",
    "DualQuaternion",
]
