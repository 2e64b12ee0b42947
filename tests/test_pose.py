"""Tests for Position, Orientation and Direction views."""

import math

import numpy as np
import pytest

from rigidframes.algebra.quaternion import Quaternion
from rigidframes.core.config import configure
from rigidframes.core.errors import DegenerateInputError
from rigidframes.core.units import AngleUnit, LengthUnit
from rigidframes.frames import (
    Axis,
    Composable,
    Direction,
    Frame,
    Framed,
    Invertable,
    Orientation,
    Position,
    Rotatable,
    RotationConvention,
    Transformable,
    Translatable,
)

# Named tolerances for tests
ABS_TOL = 1e-12
UNIT_TOL = 1e-9

M = LengthUnit.METER
QUARTER_TURN_Z = Quaternion.from_angle_direction(math.pi / 2, (0.0, 0.0, 1.0))


@pytest.fixture()
def turned() -> Frame:
    """A frame at (5, 5, 5) turned a quarter turn about Z."""
    return Frame.from_position_and_orientation(
        Frame.root.make_translation(M, 5.0, 5.0, 5.0),
        Orientation(Frame.root, QUARTER_TURN_Z),
        name="turned",
    )


# Position


def test_position_stored_in_meters():
    """Test components are converted on the way in and reported in the display unit."""
    p = Position.from_components(Frame.root, LengthUnit.MILLIMETER, 1500.0, 0.0, -250.0)

    assert abs(p.quat.q1 - 1.5) < ABS_TOL
    assert abs(p.quat.q3 + 0.25) < ABS_TOL
    np.testing.assert_allclose(p.components, (1500.0, 0.0, -250.0), rtol=UNIT_TOL)

    km = p.convert(LengthUnit.KILOMETER)
    assert km.quat == p.quat
    np.testing.assert_allclose(km.components, (0.0015, 0.0, -0.00025), rtol=UNIT_TOL)


def test_position_norm_and_array():
    """Test distance from the origin and numpy export."""
    p = Frame.root.make_translation(M, 3.0, 4.0, 0.0)

    assert abs(p.norm - 5.0) < ABS_TOL
    np.testing.assert_array_equal(p.as_array(), [3.0, 4.0, 0.0])
    assert p.is_close(Frame.root.make_translation(M, 3.0, 4.0, 1e-12))


def test_position_inverse():
    """Test the inverse points the other way."""
    p = Frame.root.make_translation(M, 1.0, -2.0, 3.0)

    assert p.inverse.components == (-1.0, 2.0, -3.0)
    assert p.inverse.frame is Frame.root


def test_position_translate_and_rotate():
    """Test moving a position within its frame."""
    p = Frame.root.make_translation(M, 1.0, 0.0, 0.0)

    moved = p.translate(Frame.root.make_translation(M, 0.0, 1.0, 0.0))
    assert moved.frame is Frame.root
    np.testing.assert_allclose(moved.components, (1.0, 1.0, 0.0), atol=ABS_TOL)

    turned = p.rotate(Orientation(Frame.root, QUARTER_TURN_Z))
    np.testing.assert_allclose(turned.components, (0.0, 1.0, 0.0), atol=ABS_TOL)


def test_position_transform_to_keeps_unit(turned):
    """Test a re-expressed position keeps its own display unit."""
    p = Position.from_components(Frame.root, LengthUnit.CENTIMETER, 600.0, 500.0, 500.0)

    local = p.transform_to(turned)
    assert local.frame is turned
    assert local.unit is LengthUnit.CENTIMETER
    np.testing.assert_allclose(local.components, (0.0, -100.0, 0.0), atol=UNIT_TOL)
    same = p.transform_to(Frame.root)
    assert same == p
    assert same is not p


def test_position_transform_by(turned):
    """Test moving a position by a frame's pose."""
    p = Frame.root.make_translation(M, 1.0, 0.0, 0.0)

    moved = p.transform_by(turned)
    assert moved.frame is Frame.root
    np.testing.assert_allclose(moved.components, (5.0, 6.0, 5.0), atol=ABS_TOL)


def test_position_in_place_variants(turned):
    """Test the in-place variants update the position they are called on."""
    p = Frame.root.make_translation(M, 1.0, 0.0, 0.0)
    alias = p

    p.translated(Frame.root.make_translation(M, 0.0, 1.0, 0.0))
    np.testing.assert_allclose(alias.components, (1.0, 1.0, 0.0), atol=ABS_TOL)

    p.rotated(Orientation(Frame.root, QUARTER_TURN_Z))
    np.testing.assert_allclose(alias.components, (-1.0, 1.0, 0.0), atol=ABS_TOL)

    p.transformed_to(turned)
    assert alias.frame is turned
    assert alias.unit is M
    np.testing.assert_allclose(alias.components, (-4.0, 6.0, -5.0), atol=UNIT_TOL)


def test_position_compose():
    """Test composing offsets in the same frame adds them."""
    p = Frame.root.make_translation(M, 1.0, 2.0, 3.0)
    q = Frame.root.make_translation(M, 0.5, 0.5, 0.5)

    assert p.compose(q).components == (1.5, 2.5, 3.5)


# Orientation


def test_orientation_from_angle_axis_in_degrees():
    """Test explicit angle units."""
    o = Orientation.from_angle_axis(Frame.root, 90.0, Axis.Z, AngleUnit.DEGREE)

    assert o.quat.is_close(QUARTER_TURN_Z)


def test_orientation_uses_configured_angle_unit():
    """Test the default angle unit comes from the settings."""
    configure(angle_unit=AngleUnit.DEGREE)

    o = Frame.root.make_rotation(90.0, (0.0, 0.0, 1.0))
    assert o.quat.is_close(QUARTER_TURN_Z)


def test_orientation_from_direction_in_other_frame():
    """Test a Direction axis is re-expressed in the orientation's frame."""
    tilted = Frame.from_orientation(
        Orientation.from_angle_axis(Frame.root, math.pi / 2, Axis.X), name="tilted"
    )
    z_in_tilted = Direction.from_axis(tilted, Axis.Z)

    o = Orientation.from_angle_direction(Frame.root, math.pi / 2, z_in_tilted)
    expected = Quaternion.from_angle_direction(math.pi / 2, (0.0, -1.0, 0.0))
    assert o.quat.is_close(expected)


def test_orientation_from_angles_conventions():
    """Test Euler ZYX angles are fixed XYZ angles in reverse order."""
    deg = AngleUnit.DEGREE
    fixed = Orientation.from_angles(
        Frame.root, RotationConvention.FIXED_XYZ, 10.0, 20.0, 30.0, deg
    )
    euler = Orientation.from_angles(
        Frame.root, RotationConvention.EULER_ZYX, 30.0, 20.0, 10.0, deg
    )

    assert fixed.quat == euler.quat
    np.testing.assert_allclose(
        fixed.as_fixed_xyz_angles, np.radians([10.0, 20.0, 30.0]), atol=UNIT_TOL
    )
    np.testing.assert_allclose(
        euler.as_euler_zyx_angles, np.radians([30.0, 20.0, 10.0]), atol=UNIT_TOL
    )


def test_orientation_angle_direction_and_matrix():
    """Test angle/direction and matrix views."""
    o = Orientation(Frame.root, QUARTER_TURN_Z)

    result = o.as_angle_direction
    assert result is not None
    angle, direction = result
    assert abs(angle - math.pi / 2) < ABS_TOL
    np.testing.assert_allclose(direction, (0.0, 0.0, 1.0), atol=ABS_TOL)
    np.testing.assert_allclose(o.as_matrix() @ [1.0, 0.0, 0.0], [0.0, 1.0, 0.0], atol=ABS_TOL)


def test_orientation_inverse_and_compose():
    """Test composing with the inverse gives the identity."""
    o = Orientation.from_angle_direction(Frame.root, 0.8, (1.0, -1.0, 2.0))

    assert o.compose(o.inverse).is_close(Orientation.identity(Frame.root))

    half = Orientation(Frame.root, QUARTER_TURN_Z)
    full = half.compose(half)
    assert full.is_close(Orientation(Frame.root, Quaternion(0.0, 0.0, 0.0, 1.0)))


def test_orientation_is_close_treats_sign_as_same_rotation():
    """Test q and -q are the same orientation."""
    o = Orientation(Frame.root, QUARTER_TURN_Z)

    assert o.is_close(Orientation(Frame.root, -QUARTER_TURN_Z))
    assert not o.is_close(Orientation(Frame.root, QUARTER_TURN_Z.conjugate))


def test_orientation_transform_to(turned):
    """Test re-expressing an orientation in an ancestor composes rotations."""
    o = Orientation(turned, QUARTER_TURN_Z)

    in_root = o.transform_to(Frame.root)
    assert in_root.frame is Frame.root
    assert in_root.is_close(Orientation(Frame.root, Quaternion(0.0, 0.0, 0.0, 1.0)))
    same = o.transform_to(turned)
    assert same == o
    assert same is not o


def test_orientation_rotate():
    """Test rotating an orientation within its frame."""
    o = Orientation.identity(Frame.root)
    about_x = Orientation.from_angle_axis(Frame.root, math.pi / 2, Axis.X)

    assert o.rotate(about_x).is_close(about_x)

    o.rotated(about_x)
    assert o.is_close(about_x)


def test_orientation_transformed_to(turned):
    """Test re-expressing an orientation in place."""
    o = Orientation(turned, QUARTER_TURN_Z)

    o.transformed_to(Frame.root)
    assert o.frame is Frame.root
    assert o.is_close(Orientation(Frame.root, Quaternion(0.0, 0.0, 0.0, 1.0)))


# Direction


def test_direction_is_normalized():
    """Test construction normalizes and rejects the zero vector."""
    d = Direction.of(Frame.root, 3.0, 0.0, 4.0)

    np.testing.assert_allclose(d.vector, (0.6, 0.0, 0.8), atol=ABS_TOL)
    with pytest.raises(DegenerateInputError):
        Direction.of(Frame.root, 0.0, 0.0, 0.0)


def test_direction_inverse_and_angle():
    """Test reversing a direction and measuring angles."""
    x = Direction.from_axis(Frame.root, Axis.X)
    y = Direction.from_axis(Frame.root, Axis.Y)

    assert x.inverse.vector == (-1.0, -0.0, -0.0)
    assert abs(x.angle_to(y) - math.pi / 2) < ABS_TOL
    assert abs(x.angle_to(x.inverse) - math.pi) < ABS_TOL


def test_direction_rotate():
    """Test rotating a direction."""
    x = Direction.from_axis(Frame.root, Axis.X)

    turned = x.rotate(Orientation(Frame.root, QUARTER_TURN_Z))
    assert turned.is_close(Direction.from_axis(Frame.root, Axis.Y))


def test_direction_ignores_translation(turned):
    """Test directions rotate with a frame but do not move with it."""
    x_local = Direction.from_axis(turned, Axis.X)

    in_root = x_local.transform_to(Frame.root)
    assert in_root.frame is Frame.root
    assert in_root.is_close(Direction.from_axis(Frame.root, Axis.Y))

    back = in_root.transform_to(turned)
    assert back.is_close(x_local)

    moved = Direction.from_axis(Frame.root, Axis.X).transform_by(turned)
    assert moved.is_close(Direction.from_axis(Frame.root, Axis.Y))


def test_direction_in_place_variants(turned):
    """Test rotating and re-expressing a direction in place."""
    d = Direction.from_axis(Frame.root, Axis.X)

    d.rotated(Orientation(Frame.root, QUARTER_TURN_Z))
    assert d.is_close(Direction.from_axis(Frame.root, Axis.Y))

    d.transformed_to(turned)
    assert d.frame is turned
    assert d.is_close(Direction.from_axis(turned, Axis.X))


# Capabilities


def test_capabilities():
    """Test which contracts each type satisfies."""
    frame = Frame.root
    position = Frame.root.make_translation(M, 0.0, 0.0, 0.0)
    orientation = Orientation.identity(Frame.root)
    direction = Direction.from_axis(Frame.root, Axis.Z)

    for value in (frame, position, orientation, direction):
        assert isinstance(value, Framed)
        assert isinstance(value, Invertable)
        assert isinstance(value, Rotatable)
        assert isinstance(value, Transformable)

    assert isinstance(frame, Translatable)
    assert isinstance(position, Translatable)
    assert not isinstance(orientation, Translatable)
    assert not isinstance(direction, Translatable)

    assert isinstance(frame, Composable)
    assert isinstance(position, Composable)
    assert isinstance(orientation, Composable)
    assert not isinstance(direction, Composable)

    for value in (frame, position, orientation, direction):
        assert callable(value.rotated)
        assert callable(value.transformed_to)
    assert callable(frame.translated)
    assert callable(position.translated)


def test_pose_views_share_ancestor_queries(turned):
    """Test pose views answer ancestor queries through their frame."""
    p = turned.make_translation(M, 1.0, 0.0, 0.0)

    assert p.has_frame(turned)
    assert p.has_ancestor(turned)
    assert p.has_ancestor(Frame.root)
    assert p.base is Frame.root
    assert p.common(Frame.root.make_translation(M, 0.0, 0.0, 0.0)) is Frame.root
