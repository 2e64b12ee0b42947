"""Rigid reference frames in 3D.

Frames form a tree rooted at ``Frame.root``. Each frame stores its pose in its
parent as a unit dual quaternion, and positions, orientations and directions
can be re-expressed in any frame of the tree.
"""

__version__ = "0.1.0"

from .algebra import EPSILON, ConjugateType, DualQuaternion, Quaternion
from .core.config import Settings, configure, get_settings, load_settings, reset_settings
from .core.errors import (
    ConfigError,
    DegenerateInputError,
    FrameCycleError,
    FramesError,
    PreconditionViolationError,
    UnitError,
)
from .core.units import AngleUnit, LengthUnit
from .frames import (
    Axis,
    Direction,
    Frame,
    Orientation,
    Position,
    RotationConvention,
)

__all__ = [
    "__version__",
    "EPSILON",
    "Quaternion",
    "ConjugateType",
    "DualQuaternion",
    "Frame",
    "Position",
    "Orientation",
    "Direction",
    "Axis",
    "RotationConvention",
    "LengthUnit",
    "AngleUnit",
    "Settings",
    "get_settings",
    "configure",
    "reset_settings",
    "load_settings",
    "FramesError",
    "DegenerateInputError",
    "PreconditionViolationError",
    "FrameCycleError",
    "UnitError",
    "ConfigError",
]
