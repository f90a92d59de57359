import math

import numpy as np
import pytest

from radialmap import Viewport, axis_angle, axis_angles, polar_to_cartesian, ring_base_radius
from radialmap.polar import circular_angle_diff, normalize_angle


@pytest.mark.parametrize(
    "count, offset",
    [(1, 0.0), (3, 0.0), (4, math.pi / 4), (5, 0.0), (8, math.pi / 8)],
)
def test_first_axis_points_up_with_half_step_for_four_and_eight(count, offset):
    assert axis_angle(0, count) == pytest.approx(-math.pi / 2 + offset)


def test_axes_are_evenly_spaced_clockwise():
    angles = [axis_angle(i, 6) for i in range(6)]
    steps = np.diff(angles)
    assert np.allclose(steps, 2 * math.pi / 6)


@pytest.mark.parametrize("count", range(1, 17))
def test_axis_angles_close_the_circle(count):
    steps = np.diff([axis_angle(i, count) for i in range(count + 1)])
    assert np.all(steps > 0)
    assert np.allclose(steps, 2 * math.pi / count)
    assert axis_angle(count, count) == pytest.approx(axis_angle(0, count) + 2 * math.pi)


def test_axis_angle_without_axes_is_zero():
    assert axis_angle(0, 0) == 0.0
    assert axis_angles(0).shape == (0,)


def test_vectorised_angles_match_scalar():
    for count in (2, 4, 7, 8):
        expected = [axis_angle(i, count) for i in range(count)]
        assert np.allclose(axis_angles(count), expected)


def test_ring_base_radii_are_fractions_of_outer_radius():
    assert ring_base_radius("now", 400) == pytest.approx(160)
    assert ring_base_radius("next", 400) == pytest.approx(280)
    assert ring_base_radius("later", 400) == pytest.approx(400)
    assert ring_base_radius("uncommitted", 400) is None
    assert ring_base_radius("someday", 400) is None


def test_viewport_center_and_outer_radius():
    vp = Viewport(1000, 800, 56)
    assert vp.center == (500.0, 400.0)
    assert vp.outer_radius == pytest.approx(344.0)


def test_viewport_outer_radius_never_below_one():
    assert Viewport(20, 20, 56).outer_radius == 1.0


def test_unmeasured_viewport_uses_default_size():
    vp = Viewport(0, -5)
    assert vp.size == (1000.0, 800.0)
    assert vp.center == (500.0, 400.0)


def test_polar_to_cartesian_screen_orientation():
    x, y = polar_to_cartesian((500, 500), 100, math.pi / 2)
    # Positive angles point down on screen.
    assert x == pytest.approx(500)
    assert y == pytest.approx(600)


def test_circular_angle_difference_wraps():
    assert circular_angle_diff(0.1, 2 * math.pi - 0.1) == pytest.approx(0.2)
    assert normalize_angle(-math.pi / 2) == pytest.approx(3 * math.pi / 2)
