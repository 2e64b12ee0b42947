"""Frame tree and the position, orientation and direction views tied to it."""

from .frame import Frame, FrameState
from .pose import Axis, Direction, Orientation, Position, RotationConvention
from .protocols import (
    Composable,
    Framed,
    FramedMixin,
    Invertable,
    Rotatable,
    Transformable,
    Translatable,
)

__all__ = [
    "Frame",
    "FrameState",
    "Axis",
    "RotationConvention",
    "Position",
    "Orientation",
    "Direction",
    "Framed",
    "FramedMixin",
    "Invertable",
    "Translatable",
    "Rotatable",
    "Transformable",
    "Composable",
]
