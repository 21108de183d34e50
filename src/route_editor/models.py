"""Data containers for waypoints and compiled route legs."""

from dataclasses import dataclass

FORWARD = 1
BACKWARD = -1
DIRECTIONS = (FORWARD, BACKWARD)


@dataclass
class Point:
    """
    A waypoint on the mission field.

    Attributes:
        x: Horizontal position in field pixels (1 px = 1 mm)
        y: Vertical position in field pixels, growing downward
        d: Direction flag for the leg starting here (1 forward, -1 backward)
        f: Function code the robot runs for the leg starting here
    """

    x: int
    y: int
    d: int = FORWARD
    f: int = 0

    def to_dict(self) -> dict[str, int]:
        """Interchange record, keys in x, y, d, f order."""
        return {"x": self.x, "y": self.y, "d": self.d, "f": self.f}


@dataclass(frozen=True)
class Command:
    """One compiled leg of a route."""

    turn: int  # -1, 0 or 1
    heading: float  # degrees, (-180, 180]
    direction: int  # 1 or -1, taken from the leg origin
    distance: float
    function: int  # taken from the leg origin


@dataclass(frozen=True)
class LegLabel:
    """On-map info for one point (heading/turn/distance only when a leg starts here)."""

    x: int
    y: int
    direction: int
    function: int
    heading: float | None = None
    turn: int | None = None
    distance: float | None = None
    midpoint: tuple[float, float] | None = None
