"""Editable waypoint sequence with selection, dragging and undo."""

import logging
from collections.abc import Iterable
from typing import Optional

from src.route_editor.geometry import distance, round_half_up
from src.route_editor.models import DIRECTIONS, FORWARD, Point
from src.route_editor.serialization import PointsParseError, import_points

logger = logging.getLogger(__name__)


class WaypointStore:
    """
    Owns the route being edited by one operator session.

    Points are only appended at the tail and only removed from the tail.
    Removed points go onto a trash stack so the last removal can be
    undone. Two cursors track the point shown in the editor
    (current_point) and the point being dragged (holding_point).

    Example:
        store = WaypointStore()
        store.append(0, 0)
        store.append(100, 0)
        store.remove_last()
        store.restore_last()
    """

    def __init__(self) -> None:
        self.points: list[Point] = []
        self.trash: list[Point] = []
        self.current_point: Optional[int] = None
        self.holding_point: Optional[int] = None

    def __len__(self) -> int:
        return len(self.points)

    @property
    def selected(self) -> Optional[Point]:
        """The point under the selection cursor, if any."""
        if self.current_point is None:
            return None
        return self.points[self.current_point]

    def snapshot(self) -> tuple[Point, ...]:
        """Copy of the route, safe to compile or serialize while editing continues."""
        return tuple(Point(p.x, p.y, p.d, p.f) for p in self.points)

    # -- structure -------------------------------------------------------

    def append(self, x: float, y: float, d: int = FORWARD, f: int = 0) -> int:
        """Add a point at the tail and select it. Returns its index."""
        _check_direction(d)
        _check_function(f)
        self.points.append(Point(round_half_up(x), round_half_up(y), d, f))
        self.current_point = len(self.points) - 1
        logger.debug(f"Appended point {self.current_point} at ({x}, {y})")
        return self.current_point

    def remove_last(self) -> None:
        """Move the tail point to the trash. Does nothing on an empty route."""
        if not self.points:
            return
        self.trash.append(self._pop_tail())

    def restore_last(self) -> None:
        """Put the most recently removed point back on the tail."""
        if not self.trash:
            return
        self.points.append(self.trash.pop())
        logger.debug(f"Restored point {len(self.points) - 1}")

    def wipe(self) -> None:
        """Clear the route and both cursors. The trash is kept."""
        self.points = []
        self.current_point = None
        self.holding_point = None
        logger.debug("Wiped route")

    def replace(self, points: Iterable[Point]) -> None:
        """Swap in a whole new route (import, restore). Cursors are reset."""
        self.points = list(points)
        self.current_point = None
        self.holding_point = None
        logger.debug(f"Replaced route with {len(self.points)} points")

    def import_points(self, text: str) -> bool:
        """
        Replace the route with points parsed from JSON text.

        Returns:
            True on success. False if the text could not be parsed, in
            which case the route and cursors are left untouched.
        """
        try:
            points = import_points(text)
        except PointsParseError as e:
            logger.warning(f"Ignoring point import: {e}")
            return False
        self.replace(points)
        logger.info(f"Imported {len(points)} points")
        return True

    def _pop_tail(self) -> Point:
        # The only place the route shrinks by one; cursors past the new end are cleared here
        point = self.points.pop()
        if self.current_point is not None and self.current_point >= len(self.points):
            self.current_point = None
        if self.holding_point is not None and self.holding_point >= len(self.points):
            self.holding_point = None
        logger.debug(f"Removed point {len(self.points)}")
        return point

    # -- selection-scoped edits -----------------------------------------

    def move_selected(self, dx: float, dy: float) -> None:
        """Nudge the selected point by (dx, dy), keeping integer coordinates."""
        point = self.selected
        if point is None:
            logger.debug("move_selected ignored: no point selected")
            return
        point.x = round_half_up(point.x + dx)
        point.y = round_half_up(point.y + dy)

    def set_selected_position(self, x: float, y: float) -> None:
        point = self.selected
        if point is None:
            logger.debug("set_selected_position ignored: no point selected")
            return
        point.x = round_half_up(x)
        point.y = round_half_up(y)

    def set_selected_direction(self, d: int) -> None:
        """Set the selected point's direction flag (1 forward, -1 backward)."""
        _check_direction(d)
        point = self.selected
        if point is None:
            logger.debug("set_selected_direction ignored: no point selected")
            return
        point.d = d

    def set_selected_function(self, f: int) -> None:
        """Set the selected point's function code."""
        _check_function(f)
        point = self.selected
        if point is None:
            logger.debug("set_selected_function ignored: no point selected")
            return
        point.f = f

    # -- pointer interaction --------------------------------------------

    def select_nearest(self, x: float, y: float, radius: float) -> int:
        """
        Grab the point under the pointer, or drop a new one there.

        The first point in route order within `radius` of (x, y) becomes
        both selected and held. If none is close enough, a new point is
        appended at (x, y) and selected/held instead.

        Returns:
            Index of the selected point
        """
        query = Point(round_half_up(x), round_half_up(y))
        for index, point in enumerate(self.points):
            if distance(point, query) <= radius:
                self.current_point = index
                self.holding_point = index
                return index

        index = self.append(query.x, query.y)
        self.holding_point = index
        return index

    def release_drag(self) -> None:
        self.holding_point = None

    def drag_to(self, x: float, y: float) -> None:
        """Move the held point to (x, y). Does nothing when nothing is held."""
        if self.holding_point is None:
            return
        point = self.points[self.holding_point]
        point.x = round_half_up(x)
        point.y = round_half_up(y)


def _check_direction(d: int) -> None:
    if isinstance(d, bool) or d not in DIRECTIONS:
        raise ValueError(f"Direction must be 1 or -1, got {d!r}")


def _check_function(f: int) -> None:
    if isinstance(f, bool) or not isinstance(f, int) or f < 0:
        raise ValueError(f"Function code must be a non-negative integer, got {f!r}")
