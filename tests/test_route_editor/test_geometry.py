"""
Tests for geometry primitives.

These are pure functions: no mocking, just inputs and expected outputs.
"""

import pytest

from src.route_editor.geometry import bearing, distance, flip, round_half_up, turn_sign
from src.route_editor.models import Point


class TestDistance:
    """Tests for distance function."""

    def test_pythagorean_triple(self):
        assert distance(Point(0, 0), Point(3, 4)) == pytest.approx(5.0)

    def test_coincident_points(self):
        assert distance(Point(7, 7), Point(7, 7)) == 0.0

    def test_symmetric(self):
        a, b = Point(-10, 5), Point(20, -15)
        assert distance(a, b) == pytest.approx(distance(b, a))


class TestBearing:
    """Tests for bearing function (0 = up on screen, clockwise positive)."""

    @pytest.mark.parametrize(
        "target, expected",
        [
            (Point(0, -10), 0.0),     # up
            (Point(10, 0), 90.0),     # right
            (Point(0, 10), 180.0),    # down
            (Point(-10, 0), -90.0),   # left
            (Point(10, -10), 45.0),
            (Point(-10, 10), -135.0),
        ],
    )
    def test_compass_directions(self, target, expected):
        assert bearing(Point(0, 0), target) == pytest.approx(expected)

    def test_coincident_points_fall_back_to_zero(self):
        """Zero-length legs have no direction; 0 is returned instead of NaN."""
        assert bearing(Point(5, 5), Point(5, 5)) == 0.0

    def test_straight_down_is_positive_180(self):
        """The range is (-180, 180], so straight down is never -180."""
        assert bearing(Point(3, 0), Point(3, 50)) == 180.0


class TestFlip:
    """Tests for flip function."""

    @pytest.mark.parametrize(
        "angle, expected",
        [(90.0, -90.0), (-90.0, 90.0), (45.0, -135.0), (-135.0, 45.0), (180.0, 0.0)],
    )
    def test_opposite_direction(self, angle, expected):
        assert flip(angle) == pytest.approx(expected)

    def test_zero_stays_zero(self):
        """sign(0) is 0, so flip(0) keeps reporting 0 rather than 180."""
        assert flip(0.0) == 0.0

    def test_no_negative_zero(self):
        assert str(flip(180.0)) == "0.0"


class TestTurnSign:
    """Tests for turn_sign function."""

    def test_clockwise(self):
        assert turn_sign(0, 90) == 1

    def test_counterclockwise(self):
        assert turn_sign(0, -90) == -1

    def test_same_heading(self):
        assert turn_sign(45, 45) == 0

    def test_shortest_way_across_180(self):
        """From 170 to -170 is a 20 degree clockwise turn."""
        assert turn_sign(170, -170) == 1
        assert turn_sign(-170, 170) == -1

    def test_opposite_headings(self):
        """Exactly 180 apart normalises to -180, which turns left."""
        assert turn_sign(-90, 90) == -1
        assert turn_sign(0, 180) == -1

    def test_result_is_int(self):
        assert isinstance(turn_sign(10.5, 20.25), int)


class TestRoundHalfUp:
    """Tests for round_half_up function."""

    @pytest.mark.parametrize(
        "value, expected",
        [(2.5, 3), (3.5, 4), (-2.5, -2), (-2.6, -3), (0.49, 0), (100.0, 100)],
    )
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected
