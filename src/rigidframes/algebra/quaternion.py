"""Quaternion algebra for rotations and pure spatial vectors.

Representation is q0 + q1*i + q2*j + q3*k, scalar first. A unit quaternion
is a rotation; a quaternion with q0 == 0 is a pure quaternion holding a
spatial vector.

Composition is not commutative: ``a.compose(b) == b * a`` means "perform
``a`` then perform ``b``".
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import ClassVar

import numpy as np

from ..core.config import get_settings
from ..core.errors import DegenerateInputError, PreconditionViolationError
from ..core.types import AngleDirection, Array, ArrayLike, FixedAngles, Vector3

EPSILON = 1e-10


@dataclass(frozen=True)
class Quaternion:
    """Immutable quaternion. Equality is exact and component-wise."""

    q0: float = 0.0
    q1: float = 0.0
    q2: float = 0.0
    q3: float = 0.0

    IDENTITY: ClassVar[Quaternion]
    ZERO: ClassVar[Quaternion]

    # Predicates

    def is_unit(self, epsilon: float = EPSILON) -> bool:
        """Return True if the norm is 1.0 +- epsilon."""
        norm = self.norm
        return 1.0 - epsilon <= norm <= 1.0 + epsilon

    def is_zero(self, epsilon: float = EPSILON) -> bool:
        """Return True if the norm is 0.0 +- epsilon."""
        return self.norm <= epsilon

    def is_pure(self, epsilon: float = EPSILON) -> bool:
        """Return True if the scalar part is 0.0 +- epsilon."""
        return -epsilon <= self.q0 <= epsilon

    def is_close(self, other: Quaternion, atol: float | None = None) -> bool:
        """Component-wise comparison within ``atol``.

        Args:
            other: Quaternion to compare with
            atol: Absolute tolerance (defaults to the configured tolerance)
        """
        if atol is None:
            atol = get_settings().tolerance
        return (
            abs(self.q0 - other.q0) <= atol
            and abs(self.q1 - other.q1) <= atol
            and abs(self.q2 - other.q2) <= atol
            and abs(self.q3 - other.q3) <= atol
        )

    # Norm

    @property
    def norm(self) -> float:
        return math.sqrt(self.dot(self))

    @property
    def normalize(self) -> Quaternion | None:
        """The normalized quaternion, or None if the norm is zero."""
        norm = self.norm
        if norm == 0.0:
            return None
        return Quaternion(self.q0 / norm, self.q1 / norm, self.q2 / norm, self.q3 / norm)

    # Basic operators

    def dot(self, other: Quaternion) -> float:
        return self.q0 * other.q0 + self.q1 * other.q1 + self.q2 * other.q2 + self.q3 * other.q3

    @property
    def conjugate(self) -> Quaternion:
        return Quaternion(self.q0, -self.q1, -self.q2, -self.q3)

    @property
    def inverse(self) -> Quaternion | None:
        """The multiplicative inverse, or None if ``dot(self, self)`` is zero."""
        dot = self.dot(self)
        if dot == 0.0:
            return None
        return Quaternion(self.q0 / dot, -self.q1 / dot, -self.q2 / dot, -self.q3 / dot)

    @property
    def scalar(self) -> float:
        return self.q0

    @property
    def vector(self) -> Vector3:
        return (self.q1, self.q2, self.q3)

    def __add__(self, other: Quaternion) -> Quaternion:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return Quaternion(
            self.q0 + other.q0, self.q1 + other.q1, self.q2 + other.q2, self.q3 + other.q3
        )

    def __sub__(self, other: Quaternion) -> Quaternion:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return Quaternion(
            self.q0 - other.q0, self.q1 - other.q1, self.q2 - other.q2, self.q3 - other.q3
        )

    def __neg__(self) -> Quaternion:
        return Quaternion(-self.q0, -self.q1, -self.q2, -self.q3)

    def __mul__(self, other: Quaternion | float) -> Quaternion:
        """Hamilton product ``self * other``, or scaling by a real number."""
        if isinstance(other, Quaternion):
            a, b = self, other
            return Quaternion(
                a.q0 * b.q0 - a.q1 * b.q1 - a.q2 * b.q2 - a.q3 * b.q3,
                a.q0 * b.q1 + a.q1 * b.q0 + a.q2 * b.q3 - a.q3 * b.q2,
                a.q0 * b.q2 - a.q1 * b.q3 + a.q2 * b.q0 + a.q3 * b.q1,
                a.q0 * b.q3 + a.q1 * b.q2 - a.q2 * b.q1 + a.q3 * b.q0,
            )
        if isinstance(other, Real):
            s = float(other)
            return Quaternion(s * self.q0, s * self.q1, s * self.q2, s * self.q3)
        return NotImplemented

    def __rmul__(self, other: float) -> Quaternion:
        if isinstance(other, Real):
            return self * float(other)
        return NotImplemented

    def compose(self, offset: Quaternion) -> Quaternion:
        """Perform ``self`` then ``offset``: ``offset * self``."""
        return offset * self

    # Rotate and translate

    def rotate(self, by: Quaternion) -> Quaternion:
        """Rotate this pure quaternion by ``by``: ``by * self * conjugate(by)``.

        Raises:
            PreconditionViolationError: If ``self`` is not a pure quaternion
        """
        if not self.is_pure():
            raise PreconditionViolationError(
                f"Only a pure quaternion can be rotated, got scalar part {self.q0}"
            )
        return by * self * by.conjugate

    def translate(self, by: Quaternion) -> Quaternion:
        """Offset this pure quaternion by the pure quaternion ``by``."""
        return self + by

    # Angle + direction

    @property
    def as_angle_direction(self) -> AngleDirection | None:
        """The rotation (angle, direction) of ``self``, or None if the norm is zero.

        A numerically zero angle yields the zero direction.
        """
        that = self.normalize
        if that is None:
            return None

        angle = 2.0 * math.atan2(math.sqrt(self.q1**2 + self.q2**2 + self.q3**2), self.q0)
        if abs(angle) <= EPSILON:
            return (angle, (0.0, 0.0, 0.0))

        df = math.sin(angle / 2.0)
        return (angle, (that.q1 / df, that.q2 / df, that.q3 / df))

    @classmethod
    def from_angle_direction(cls, angle: float, direction: Vector3) -> Quaternion:
        """Rotation of ``angle`` radians about ``direction``.

        A zero direction gives the identity.
        """
        dx, dy, dz = (float(d) for d in direction)
        n = math.sqrt(dx * dx + dy * dy + dz * dz)
        if n == 0.0:
            return cls.IDENTITY

        ca2 = math.cos(angle / 2.0)
        sa2 = math.sin(angle / 2.0)
        return cls(ca2, sa2 * dx / n, sa2 * dy / n, sa2 * dz / n)

    # Fixed / Euler angles

    @classmethod
    def from_fixed_xyz(cls, x: float, y: float, z: float) -> Quaternion:
        """Rotation about fixed X by ``x``, then fixed Y by ``y``, then fixed Z by ``z``.

        Angles in radians. Equivalent to ``qz * qy * qx``.
        """
        cx, sx = math.cos(x / 2.0), math.sin(x / 2.0)
        cy, sy = math.cos(y / 2.0), math.sin(y / 2.0)
        cz, sz = math.cos(z / 2.0), math.sin(z / 2.0)
        return cls(
            cx * cy * cz + sx * sy * sz,
            sx * cy * cz - cx * sy * sz,
            cx * sy * cz + sx * cy * sz,
            cx * cy * sz - sx * sy * cz,
        )

    @classmethod
    def from_euler_zyx(cls, z: float, y: float, x: float) -> Quaternion:
        """Rotation about Z by ``z``, then the new Y by ``y``, then the new X by ``x``."""
        return cls.from_fixed_xyz(x, y, z)

    @classmethod
    def from_yaw_pitch_roll(cls, yaw: float, pitch: float, roll: float) -> Quaternion:
        return cls.from_euler_zyx(yaw, pitch, roll)

    @property
    def as_fixed_xyz_angles(self) -> FixedAngles:
        """The (x, y, z) fixed-axis angles of this unit quaternion, in radians."""
        q0, q1, q2, q3 = self.q0, self.q1, self.q2, self.q3
        sin_y = max(-1.0, min(1.0, 2.0 * (q0 * q2 - q3 * q1)))
        return (
            math.atan2(2.0 * (q0 * q1 + q2 * q3), 1.0 - 2.0 * (q1 * q1 + q2 * q2)),
            math.asin(sin_y),
            math.atan2(2.0 * (q0 * q3 + q1 * q2), 1.0 - 2.0 * (q2 * q2 + q3 * q3)),
        )

    @property
    def as_euler_zyx_angles(self) -> FixedAngles:
        """The (z, y, x) Euler angles of this unit quaternion, in radians."""
        x, y, z = self.as_fixed_xyz_angles
        return (z, y, x)

    # numpy interop

    def as_array(self) -> Array:
        return np.array([self.q0, self.q1, self.q2, self.q3], dtype=np.float64)

    @classmethod
    def from_array(cls, values: ArrayLike) -> Quaternion:
        """Build from a length-4 array ``[q0, q1, q2, q3]``."""
        a = np.asarray(values, dtype=np.float64)
        if a.shape != (4,):
            raise ValueError(f"Expected 4 quaternion components, got shape {a.shape}")
        return cls(float(a[0]), float(a[1]), float(a[2]), float(a[3]))

    @classmethod
    def pure(cls, x: float, y: float, z: float) -> Quaternion:
        """Pure quaternion holding the vector (x, y, z)."""
        return cls(0.0, float(x), float(y), float(z))

    def as_rotation_matrix(self) -> Array:
        """3x3 rotation matrix R such that ``R @ v`` rotates v like ``rotate``.

        Raises:
            DegenerateInputError: If the norm is zero
        """
        q = self.normalize
        if q is None:
            raise DegenerateInputError("Zero quaternion has no rotation matrix")
        q0, q1, q2, q3 = q.q0, q.q1, q.q2, q.q3
        return np.array(
            [
                [1 - 2 * (q2 * q2 + q3 * q3), 2 * (q1 * q2 - q0 * q3), 2 * (q1 * q3 + q0 * q2)],
                [2 * (q1 * q2 + q0 * q3), 1 - 2 * (q1 * q1 + q3 * q3), 2 * (q2 * q3 - q0 * q1)],
                [2 * (q1 * q3 - q0 * q2), 2 * (q2 * q3 + q0 * q1), 1 - 2 * (q1 * q1 + q2 * q2)],
            ],
            dtype=np.float64,
        )


Quaternion.IDENTITY = Quaternion(1.0, 0.0, 0.0, 0.0)
Quaternion.ZERO = Quaternion(0.0, 0.0, 0.0, 0.0)


__all__ = [
    "EPSILON",
    "Quaternion",
]
