"""Reference frames organized as a tree.

Every frame holds its parent, a display length unit and a dual quaternion
offset giving its pose in the parent. The single root frame is its own
parent. Frames compare by identity: two frames with the same numbers are
still different frames.

Transforms:
    transform_to(target)  same physical pose, re-expressed in ``target``
    transform_by(frame)   a physically different pose, still in ``self.frame``
    transformed_to(target)  in-place ``transform_to``

The parent, unit and offset of a frame live together in one state tuple that
is swapped in a single assignment, so a reader always sees a consistent
pose. ``generation`` counts in-place changes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar, NamedTuple

from ..algebra.dual_quaternion import DualQuaternion
from ..core.config import get_settings
from ..core.errors import DegenerateInputError, FrameCycleError, PreconditionViolationError
from ..core.logging import get_logger
from ..core.types import Array, Vector3
from ..core.units import AngleUnit, LengthUnit
from .protocols import FramedMixin

if TYPE_CHECKING:
    from .pose import Direction, Orientation, Position

logger = get_logger(__name__)


class FrameState(NamedTuple):
    """Snapshot of a frame's pose in its parent."""

    frame: Frame
    unit: LengthUnit
    dual: DualQuaternion
    generation: int


class Frame(FramedMixin):
    """A node in the frame tree.

    No ``__eq__``/``__hash__`` override: equality is identity.
    """

    root: ClassVar[Frame]

    def __init__(
        self,
        frame: Frame,
        unit: LengthUnit,
        dual: DualQuaternion,
        name: str | None = None,
    ):
        """Create a frame with pose ``dual`` in ``frame``.

        Args:
            frame: Parent frame
            unit: Display unit for positions expressed in this frame
            dual: Pose of this frame in ``frame``
            name: Optional label used in logs and repr

        Raises:
            DegenerateInputError: If ``dual`` has zero norm
        """
        normalized = dual.normalize
        if normalized is None:
            raise DegenerateInputError("Frame offset must have a non-zero norm")
        self._state = FrameState(frame, unit, normalized, 0)
        self.name = name

    @classmethod
    def _make_root(cls) -> Frame:
        root = cls.__new__(cls)
        root._state = FrameState(root, LengthUnit.METER, DualQuaternion.IDENTITY, 0)
        root.name = "root"
        return root

    # State

    @property
    def state(self) -> FrameState:
        return self._state

    @property
    def frame(self) -> Frame:
        """The parent frame."""
        return self._state.frame

    @property
    def parent(self) -> Frame:
        return self._state.frame

    @property
    def unit(self) -> LengthUnit:
        return self._state.unit

    @property
    def dual(self) -> DualQuaternion:
        return self._state.dual

    @property
    def generation(self) -> int:
        return self._state.generation

    @property
    def is_base(self) -> bool:
        """True only for the root frame."""
        return self._state.frame is self

    @property
    def position(self) -> Position:
        """The origin of this frame, in the parent."""
        from .pose import Position

        state = self._state
        return Position(state.frame, state.unit, state.dual.as_translation)

    @property
    def orientation(self) -> Orientation:
        """The axes of this frame, in the parent."""
        from .pose import Orientation

        state = self._state
        return Orientation(state.frame, state.dual.as_rotation)

    def as_matrix(self) -> Array:
        """4x4 homogeneous transform from this frame to its parent (meters)."""
        return self._state.dual.as_matrix()

    # Position and orientation factory

    def make_translation(self, unit: LengthUnit, x: float, y: float, z: float) -> Position:
        """A position in this frame."""
        from .pose import Position

        return Position.from_components(self, unit, x, y, z)

    def make_rotation(
        self,
        angle: float,
        direction: Direction | Vector3,
        unit: AngleUnit | None = None,
    ) -> Orientation:
        """An orientation in this frame: ``angle`` about ``direction``."""
        from .pose import Orientation

        return Orientation.from_angle_direction(self, angle, direction, unit)

    @classmethod
    def from_position(cls, position: Position, name: str | None = None) -> Frame:
        """A frame translated to ``position``, with the axes of ``position.frame``."""
        return cls(
            position.frame,
            position.unit,
            DualQuaternion.from_translation(position.quat),
            name,
        )

    @classmethod
    def from_orientation(cls, orientation: Orientation, name: str | None = None) -> Frame:
        """A frame rotated by ``orientation``, sharing the origin of ``orientation.frame``."""
        dual = DualQuaternion.from_rotation(orientation.quat).normalize
        if dual is None:
            raise DegenerateInputError("Orientation quaternion has zero norm")
        return cls(orientation.frame, get_settings().length_unit, dual, name)

    @classmethod
    def from_position_and_orientation(
        cls,
        position: Position,
        orientation: Orientation,
        frame: Frame | None = None,
        name: str | None = None,
    ) -> Frame:
        """A frame rotated by ``orientation`` then translated to ``position``.

        Args:
            position: Origin of the new frame
            orientation: Axes of the new frame
            frame: Parent of the new frame (defaults to ``position.frame``)
            name: Optional label
        """
        if frame is None:
            frame = position.frame
        rotation = orientation.transform_to(frame).quat.normalize
        if rotation is None:
            raise DegenerateInputError("Orientation quaternion has zero norm")
        translation = position.transform_to(frame).quat
        return cls(
            frame,
            position.unit,
            DualQuaternion.from_rotation_translation(rotation, translation),
            name,
        )

    # Invertable

    @property
    def inverse(self) -> Frame:
        """The inverse offset, in the same parent."""
        state = self._state
        return Frame(state.frame, state.unit, state.dual.inverse)

    # Translatable, Rotatable

    def translate(self, offset: Position) -> Frame:
        return self.transform_by(Frame.from_position(offset))

    def translated(self, offset: Position) -> None:
        self._replace(self.translate(offset))

    def rotate(self, offset: Orientation) -> Frame:
        return self.transform_by(Frame.from_orientation(offset))

    def rotated(self, offset: Orientation) -> None:
        self._replace(self.rotate(offset))

    # Transformable

    def transform_to(self, that: Frame) -> Frame:
        """Return the pose of ``self`` expressed in ``that``.

        The result is a new frame whose parent is ``that``; ``self`` is not
        modified.
        """
        state = self._state
        parent = state.frame

        # `that` is the parent: same offset
        if parent is that:
            return Frame(that, that.unit, state.dual)

        # `that` is the grandparent
        if parent.has_frame(that):
            return Frame(that, that.unit, parent.dual * state.dual)

        # `that` is above the grandparent: accumulate offsets up the chain
        if parent.has_ancestor(that):
            dual = state.dual
            frame = parent
            while frame is not that:
                dual = frame.dual * dual
                frame = frame.frame
            return Frame(that, that.unit, dual)

        # `self` is the parent of `that`
        if that.has_frame(self):
            return Frame(that, that.unit, that.dual.inverse)

        # `self` is above the parent of `that`
        if that.has_ancestor(self):
            x = that.transform_to(self)
            return Frame(that, that.unit, x.dual.inverse)

        common = self.common(that)
        self_to_common = self.transform_to(common)
        common_to_that = common.transform_to(that)
        return Frame(that, that.unit, common_to_that.dual * self_to_common.dual)

    def transform_by(self, frame: Frame) -> Frame:
        """Move ``self`` by the pose of ``frame``; the result stays in ``self.frame``."""
        state = self._state
        that = frame.transform_to(state.frame)
        return Frame(state.frame, state.unit, that.dual * state.dual)

    def transformed_to(self, that: Frame) -> None:
        """Re-express ``self`` in ``that``, in place.

        Every holder of ``self`` (including child frames) observes the new
        parent and offset; the physical pose is unchanged.

        Raises:
            PreconditionViolationError: If ``self`` is the root
            FrameCycleError: If ``that`` is ``self`` or one of its descendants
        """
        if self.is_base:
            raise PreconditionViolationError("The root frame cannot be re-targeted")
        if that is self or that.has_ancestor(self):
            raise FrameCycleError(f"Cannot re-target {self!r} onto its own subtree {that!r}")
        self._replace(self.transform_to(that))

    # Composable

    def compose(self, offset: Frame) -> Frame:
        state = self._state
        that = offset.transform_to(state.frame)
        return Frame(state.frame, state.unit, that.dual * state.dual)

    def _replace(self, result: Frame) -> None:
        old = self._state
        self._state = FrameState(result.frame, result.unit, result.dual, old.generation + 1)
        if logger.is_enabled_for(logging.DEBUG):
            logger.debug(
                "Frame updated in place",
                {
                    "frame": self.label,
                    "parent": result.frame.label,
                    "generation": old.generation + 1,
                },
            )

    @property
    def label(self) -> str:
        return self.name if self.name is not None else f"0x{id(self):x}"

    def __repr__(self) -> str:
        state = self._state
        if state.frame is self:
            return f"Frame({self.label})"
        return f"Frame({self.label}, parent={state.frame.label}, unit={state.unit.value})"


Frame.root = Frame._make_root()


__all__ = [
    "Frame",
    "FrameState",
]
