"""Custom exception types for frame and rigid-motion computations."""


class FramesError(Exception):
    """Base exception for all frame errors."""

    pass


class DegenerateInputError(FramesError, ValueError):
    """A value has no defined result (zero norm offset, zero direction).

    Operations that can answer with ``None`` (``normalize``, ``inverse``)
    do so instead of raising this.
    """

    pass


class PreconditionViolationError(FramesError):
    """Structural misuse: rotating a non-pure quaternion, re-targeting the root."""

    pass


class FrameCycleError(PreconditionViolationError):
    """The parent links of a frame do not terminate at the root."""

    pass


class UnitError(FramesError, ValueError):
    """Unit conversion between incompatible dimensions."""

    pass


class ConfigError(FramesError):
    """Configuration-related errors."""

    pass


__all__ = [
    "FramesError",
    "DegenerateInputError",
    "PreconditionViolationError",
    "FrameCycleError",
    "UnitError",
    "ConfigError",
]
