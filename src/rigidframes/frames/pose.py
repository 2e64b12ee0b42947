"""Position, Orientation and Direction views tied to a frame.

Each view holds the frame it is expressed in plus a single quaternion (or
vector) component; none owns tree structure. Lengths are stored in meters
and angles in radians; ``unit`` only affects how a position reports its
components.

Operations return new views. The in-place variants overwrite the fields of
the view they are called on, so a returned view never aliases its source.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from enum import Enum

import numpy as np

from ..algebra.quaternion import Quaternion
from ..core.config import get_settings
from ..core.errors import DegenerateInputError
from ..core.types import AngleDirection, Array, FixedAngles, Vector3
from ..core.units import AngleUnit, LengthUnit, from_meters, to_meters, to_radians
from .frame import Frame
from .protocols import FramedMixin


def _assign(target: FramedMixin, source: FramedMixin) -> None:
    for field in fields(target):
        setattr(target, field.name, getattr(source, field.name))


class Axis(Enum):
    """Cartesian axes of a frame."""

    X = 0
    Y = 1
    Z = 2

    @property
    def unit_vector(self) -> Vector3:
        v = [0.0, 0.0, 0.0]
        v[self.value] = 1.0
        return (v[0], v[1], v[2])


class RotationConvention(Enum):
    """Order of the three elementary rotations in ``Orientation.from_angles``.

    FIXED_XYZ: about fixed X, then fixed Y, then fixed Z.
    EULER_ZYX: about Z, then the rotated Y, then the twice-rotated X.
    """

    FIXED_XYZ = "fixed_xyz"
    EULER_ZYX = "euler_zyx"


@dataclass
class Position(FramedMixin):
    """A point in ``frame``; ``quat`` is a pure quaternion in meters."""

    frame: Frame
    unit: LengthUnit
    quat: Quaternion

    @classmethod
    def from_components(
        cls, frame: Frame, unit: LengthUnit, x: float, y: float, z: float
    ) -> Position:
        return cls(
            frame,
            unit,
            Quaternion.pure(to_meters(x, unit), to_meters(y, unit), to_meters(z, unit)),
        )

    @property
    def x(self) -> float:
        return from_meters(self.quat.q1, self.unit)

    @property
    def y(self) -> float:
        return from_meters(self.quat.q2, self.unit)

    @property
    def z(self) -> float:
        return from_meters(self.quat.q3, self.unit)

    @property
    def components(self) -> Vector3:
        return (self.x, self.y, self.z)

    @property
    def norm(self) -> float:
        """Distance from the frame origin, in ``unit``."""
        return from_meters(self.quat.norm, self.unit)

    def as_array(self) -> Array:
        return np.array(self.components, dtype=np.float64)

    def convert(self, unit: LengthUnit) -> Position:
        """Same point, reported in ``unit``."""
        return Position(self.frame, unit, self.quat)

    def is_close(self, other: Position, atol: float | None = None) -> bool:
        """Same frame and components within ``atol`` meters."""
        return self.frame is other.frame and self.quat.is_close(other.quat, atol)

    @property
    def inverse(self) -> Position:
        return Position(self.frame, self.unit, -self.quat)

    def translate(self, offset: Position) -> Position:
        return self.transform_by(Frame.from_position(offset))

    def translated(self, offset: Position) -> None:
        _assign(self, self.translate(offset))

    def rotate(self, offset: Orientation) -> Position:
        return self.transform_by(Frame.from_orientation(offset))

    def rotated(self, offset: Orientation) -> None:
        _assign(self, self.rotate(offset))

    def transform_to(self, frame: Frame) -> Position:
        if self.frame is frame:
            return replace(self)
        that = Frame.from_position(self).transform_to(frame)
        return Position(that.frame, self.unit, that.dual.as_translation)

    def transformed_to(self, frame: Frame) -> None:
        _assign(self, self.transform_to(frame))

    def transform_by(self, frame: Frame) -> Position:
        that = Frame.from_position(self).transform_by(frame)
        return Position(that.frame, self.unit, that.dual.as_translation)

    def compose(self, offset: Position) -> Position:
        offset = offset.transform_to(self.frame)
        return Position(self.frame, self.unit, self.quat.translate(offset.quat))


@dataclass
class Orientation(FramedMixin):
    """A rotation in ``frame``; ``quat`` is a unit quaternion."""

    frame: Frame
    quat: Quaternion

    @classmethod
    def identity(cls, frame: Frame) -> Orientation:
        return cls(frame, Quaternion.IDENTITY)

    @classmethod
    def from_angle_direction(
        cls,
        frame: Frame,
        angle: float,
        direction: Direction | Vector3,
        unit: AngleUnit | None = None,
    ) -> Orientation:
        """Rotation by ``angle`` about ``direction``.

        Args:
            frame: Frame of the orientation
            angle: Rotation angle in ``unit``
            direction: Rotation axis; a Direction in another frame is first
                re-expressed in ``frame``
            unit: Angle unit (defaults to the configured angle unit)
        """
        if unit is None:
            unit = get_settings().angle_unit
        if isinstance(direction, Direction):
            direction = direction.transform_to(frame).vector
        return cls(frame, Quaternion.from_angle_direction(to_radians(angle, unit), direction))

    @classmethod
    def from_angle_axis(
        cls, frame: Frame, angle: float, axis: Axis, unit: AngleUnit | None = None
    ) -> Orientation:
        return cls.from_angle_direction(frame, angle, axis.unit_vector, unit)

    @classmethod
    def from_angles(
        cls,
        frame: Frame,
        convention: RotationConvention,
        first: float,
        second: float,
        third: float,
        unit: AngleUnit | None = None,
    ) -> Orientation:
        """Rotation from three elementary angles, given in application order.

        For FIXED_XYZ the angles are about X, Y, Z; for EULER_ZYX they are
        about Z, Y, X. ``EULER_ZYX(a, b, c) == FIXED_XYZ(c, b, a)``.
        """
        if unit is None:
            unit = get_settings().angle_unit
        a1, a2, a3 = (to_radians(a, unit) for a in (first, second, third))

        if convention is RotationConvention.FIXED_XYZ:
            quat = Quaternion.from_fixed_xyz(a1, a2, a3)
        elif convention is RotationConvention.EULER_ZYX:
            quat = Quaternion.from_euler_zyx(a1, a2, a3)
        else:
            raise ValueError(f"Unsupported rotation convention: {convention}")
        return cls(frame, quat)

    @property
    def as_angle_direction(self) -> AngleDirection | None:
        return self.quat.as_angle_direction

    @property
    def as_fixed_xyz_angles(self) -> FixedAngles:
        return self.quat.as_fixed_xyz_angles

    @property
    def as_euler_zyx_angles(self) -> FixedAngles:
        return self.quat.as_euler_zyx_angles

    def as_matrix(self) -> Array:
        return self.quat.as_rotation_matrix()

    def is_close(self, other: Orientation, atol: float | None = None) -> bool:
        """Same frame and the same rotation within ``atol`` (q and -q are equal)."""
        if self.frame is not other.frame:
            return False
        return self.quat.is_close(other.quat, atol) or self.quat.is_close(-other.quat, atol)

    @property
    def inverse(self) -> Orientation:
        return Orientation(self.frame, self.quat.conjugate)

    def rotate(self, offset: Orientation) -> Orientation:
        return self.transform_by(Frame.from_orientation(offset))

    def rotated(self, offset: Orientation) -> None:
        _assign(self, self.rotate(offset))

    def transform_to(self, frame: Frame) -> Orientation:
        if self.frame is frame:
            return replace(self)
        that = Frame.from_orientation(self).transform_to(frame)
        return Orientation(that.frame, that.dual.as_rotation)

    def transformed_to(self, frame: Frame) -> None:
        _assign(self, self.transform_to(frame))

    def transform_by(self, frame: Frame) -> Orientation:
        that = Frame.from_orientation(self).transform_by(frame)
        return Orientation(that.frame, that.dual.as_rotation)

    def compose(self, offset: Orientation) -> Orientation:
        offset = offset.transform_to(self.frame)
        return Orientation(self.frame, self.quat.compose(offset.quat))


@dataclass
class Direction(FramedMixin):
    """A unit vector in ``frame``. Directions rotate but never translate."""

    frame: Frame
    x: float
    y: float
    z: float

    @classmethod
    def of(cls, frame: Frame, x: float, y: float, z: float) -> Direction:
        """Normalized direction along (x, y, z).

        Raises:
            DegenerateInputError: If (x, y, z) is the zero vector
        """
        n = math.sqrt(x * x + y * y + z * z)
        if n == 0.0:
            raise DegenerateInputError("A direction needs a non-zero vector")
        return cls(frame, x / n, y / n, z / n)

    @classmethod
    def from_axis(cls, frame: Frame, axis: Axis) -> Direction:
        return cls(frame, *axis.unit_vector)

    @property
    def vector(self) -> Vector3:
        return (self.x, self.y, self.z)

    def as_quaternion(self) -> Quaternion:
        return Quaternion.pure(self.x, self.y, self.z)

    def as_array(self) -> Array:
        return np.array(self.vector, dtype=np.float64)

    def angle_to(self, other: Direction) -> float:
        """Angle in radians between ``self`` and ``other``."""
        other = other.transform_to(self.frame)
        cos_angle = self.x * other.x + self.y * other.y + self.z * other.z
        return math.acos(max(-1.0, min(1.0, cos_angle)))

    def is_close(self, other: Direction, atol: float | None = None) -> bool:
        return self.frame is other.frame and self.as_quaternion().is_close(
            other.as_quaternion(), atol
        )

    @property
    def inverse(self) -> Direction:
        return Direction(self.frame, -self.x, -self.y, -self.z)

    def _rotated_by(self, rotation: Quaternion, frame: Frame) -> Direction:
        q = self.as_quaternion().rotate(by=rotation)
        return Direction.of(frame, q.q1, q.q2, q.q3)

    def rotate(self, offset: Orientation) -> Direction:
        offset = offset.transform_to(self.frame)
        return self._rotated_by(offset.quat, self.frame)

    def rotated(self, offset: Orientation) -> None:
        _assign(self, self.rotate(offset))

    def transform_to(self, frame: Frame) -> Direction:
        if self.frame is frame:
            return replace(self)
        motion = self.frame.transform_to(frame).dual
        return self._rotated_by(motion.as_rotation, frame)

    def transformed_to(self, frame: Frame) -> None:
        """Re-express ``self`` in ``frame``, in place."""
        _assign(self, self.transform_to(frame))

    def transform_by(self, frame: Frame) -> Direction:
        that = frame.transform_to(self.frame)
        return self._rotated_by(that.dual.as_rotation, self.frame)


__all__ = [
    "Axis",
    "RotationConvention",
    "Position",
    "Orientation",
    "Direction",
]
