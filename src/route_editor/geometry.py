"""Planar geometry primitives for waypoint routes.

Coordinates are screen pixels: x grows to the right, y grows downward.
Angles are compass-style degrees where 0 is "up" (decreasing y) and
positive angles turn toward increasing x.
"""

import math
from typing import Protocol

import numpy as np


class HasPosition(Protocol):
    """Anything with planar x/y coordinates (Point, plain namespaces, mocks)."""

    x: float
    y: float


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves toward positive infinity.

    Python's round() uses banker's rounding; the route controller expects
    0.5 -> 1 and -0.5 -> 0.

    Example:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -2
    """
    return int(math.floor(value + 0.5))


def distance(p1: HasPosition, p2: HasPosition) -> float:
    """Euclidean distance between two points."""
    return float(np.hypot(p1.x - p2.x, p1.y - p2.y))


def bearing(p1: HasPosition, p2: HasPosition) -> float:
    """
    Direction from p1 to p2 in degrees, range (-180, 180].

    Straight up on screen is 0 degrees, right is 90, down is 180 and
    left is -90.

    Args:
        p1: Leg origin
        p2: Leg destination

    Returns:
        Bearing in degrees. Coincident points have no direction and
        return 0.0.
    """
    dx = p2.x - p1.x
    dy = p1.y - p2.y
    if dx == 0 and dy == 0:
        return 0.0

    angle = float(np.degrees(np.arctan2(dx, dy)))
    if angle <= -180.0:
        angle = 180.0
    return angle + 0.0


def flip(angle: float) -> float:
    """
    Return the opposite bearing, keeping the (-180, 180] convention.

    flip(0) stays 0: the sign of zero is zero, so a reversed leg pointing
    straight up keeps reporting 0.
    """
    flipped = -float(np.sign(angle)) * (180.0 - abs(angle))
    # Avoid leaking -0.0 into formatted output
    return flipped + 0.0


def turn_sign(angle1: float, angle2: float) -> int:
    """
    Sign of the shortest rotation from angle1 to angle2.

    Returns:
        1 for clockwise, -1 for counterclockwise, 0 when the angles are
        equal. Headings exactly 180 degrees apart return -1 (the
        normalised difference lands on -180).
    """
    delta = ((angle2 - angle1 + 540.0) % 360.0) - 180.0
    return int(np.sign(delta))
