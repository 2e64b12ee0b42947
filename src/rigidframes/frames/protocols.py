"""Capability contracts shared by frames and pose views.

``Framed`` objects live in a frame; the other contracts describe how a framed
value is inverted, moved and re-expressed. ``FramedMixin`` carries the
ancestor queries every framed type answers the same way.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..core.errors import FrameCycleError
from ..core.logging import get_logger

if TYPE_CHECKING:
    from .frame import Frame
    from .pose import Orientation, Position

logger = get_logger(__name__)


@runtime_checkable
class Framed(Protocol):
    """An object expressed in a frame."""

    @property
    def frame(self) -> Frame:
        """The frame ``self`` is expressed in (a Frame's parent)."""
        ...

    @property
    def base(self) -> Frame: ...

    def common(self, other: Framed) -> Frame: ...

    def has_frame(self, frame: Frame) -> bool: ...

    def has_ancestor(self, ancestor: Frame) -> bool: ...


@runtime_checkable
class Invertable(Framed, Protocol):
    @property
    def inverse(self):  # type: ignore[no-untyped-def]
        """The inverse motion, in the same frame."""
        ...


@runtime_checkable
class Translatable(Framed, Protocol):
    def translate(self, offset: Position):  # type: ignore[no-untyped-def]
        ...

    def translated(self, offset: Position) -> None:
        """In-place ``translate``."""
        ...


@runtime_checkable
class Rotatable(Framed, Protocol):
    def rotate(self, offset: Orientation):  # type: ignore[no-untyped-def]
        ...

    def rotated(self, offset: Orientation) -> None:
        """In-place ``rotate``."""
        ...


@runtime_checkable
class Transformable(Framed, Protocol):
    def transform_to(self, frame: Frame):  # type: ignore[no-untyped-def]
        """Same physical pose, expressed in ``frame``."""
        ...

    def transformed_to(self, frame: Frame) -> None:
        """In-place ``transform_to``."""
        ...

    def transform_by(self, frame: Frame):  # type: ignore[no-untyped-def]
        """A physically different pose: ``self`` moved by ``frame``, in ``self.frame``."""
        ...


@runtime_checkable
class Composable(Protocol):
    def compose(self, offset):  # type: ignore[no-untyped-def]
        ...


class FramedMixin:
    """Ancestor queries in terms of ``self.frame``."""

    frame: Frame

    def ancestors(self) -> Iterator[Frame]:
        """Yield ``self.frame`` and each frame above it, ending at the root.

        Raises:
            FrameCycleError: If the parent links loop without reaching the root
        """
        frame = self.frame
        seen: set[int] = set()
        while True:
            yield frame
            if frame.is_base:
                return
            if id(frame) in seen:
                raise FrameCycleError(f"Frame {frame!r} is its own ancestor")
            seen.add(id(frame))
            frame = frame.frame

    @property
    def base(self) -> Frame:
        """The root frame above ``self``."""
        for frame in self.ancestors():
            pass
        return frame

    def has_frame(self, frame: Frame) -> bool:
        """Return True if ``frame`` is ``self.frame``."""
        return self.frame is frame

    def has_ancestor(self, ancestor: Frame) -> bool:
        """Return True if ``ancestor`` is ``self.frame`` or any frame above it."""
        return any(frame is ancestor for frame in self.ancestors())

    def common(self, other: Framed) -> Frame:
        """The frame used as pivot between ``self`` and ``other``.

        Only direct ancestor relations are detected; otherwise the root is
        returned, even when a nearer shared ancestor exists.
        """
        if self.has_ancestor(other.frame):
            return other.frame
        if other.has_ancestor(self.frame):
            return self.frame

        base = self.base
        if logger.is_enabled_for(logging.DEBUG):
            logger.debug(
                "No direct ancestor relation, pivoting through the root",
                {"self": repr(self), "other": repr(other)},
            )
        return base


__all__ = [
    "Framed",
    "Invertable",
    "Translatable",
    "Rotatable",
    "Transformable",
    "Composable",
    "FramedMixin",
]
