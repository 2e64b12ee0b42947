"""Unit conversion utilities for frames.

Offsets are stored internally in meters and radians. Units only scale
values on the way in and on the way out.
"""

from __future__ import annotations

import math
from enum import Enum

from .errors import UnitError


class LengthUnit(str, Enum):
    """Length units."""

    METER = "m"
    KILOMETER = "km"
    CENTIMETER = "cm"
    MILLIMETER = "mm"
    MICROMETER = "um"
    ASTRONOMICAL_UNIT = "au"


class AngleUnit(str, Enum):
    """Angle units."""

    RADIAN = "rad"
    DEGREE = "deg"
    ARCMINUTE = "arcmin"
    ARCSECOND = "arcsec"


# Size of one unit in meters / radians
_SCALE: dict[LengthUnit | AngleUnit, float] = {
    LengthUnit.METER: 1.0,
    LengthUnit.KILOMETER: 1000.0,
    LengthUnit.CENTIMETER: 0.01,
    LengthUnit.MILLIMETER: 0.001,
    LengthUnit.MICROMETER: 1e-6,
    LengthUnit.ASTRONOMICAL_UNIT: 149_597_870_700.0,
    AngleUnit.RADIAN: 1.0,
    AngleUnit.DEGREE: math.pi / 180.0,
    AngleUnit.ARCMINUTE: math.pi / (180.0 * 60.0),
    AngleUnit.ARCSECOND: math.pi / (180.0 * 3600.0),
}

Unit = LengthUnit | AngleUnit


def convert(value: float | int, from_unit: Unit, to_unit: Unit) -> float:
    """Convert ``value`` expressed in ``from_unit`` to ``to_unit``.

    Args:
        value: Magnitude in ``from_unit``
        from_unit: Source unit
        to_unit: Target unit, same dimension as ``from_unit``

    Returns:
        Magnitude in ``to_unit``

    Raises:
        UnitError: If the units measure different dimensions
    """
    if type(from_unit) is not type(to_unit):
        raise UnitError(f"Cannot convert {from_unit.value} to {to_unit.value}")
    if from_unit is to_unit:
        return float(value)
    return float(value) * _SCALE[from_unit] / _SCALE[to_unit]


def to_meters(value: float | int, unit: LengthUnit) -> float:
    """Convert a length to meters."""
    return convert(value, unit, LengthUnit.METER)


def from_meters(value: float | int, unit: LengthUnit) -> float:
    """Convert meters to ``unit``."""
    return convert(value, LengthUnit.METER, unit)


def to_radians(value: float | int, unit: AngleUnit) -> float:
    """Convert an angle to radians."""
    return convert(value, unit, AngleUnit.RADIAN)


def from_radians(value: float | int, unit: AngleUnit) -> float:
    """Convert radians to ``unit``."""
    return convert(value, AngleUnit.RADIAN, unit)


__all__ = [
    "LengthUnit",
    "AngleUnit",
    "Unit",
    "convert",
    "to_meters",
    "from_meters",
    "to_radians",
    "from_radians",
]
