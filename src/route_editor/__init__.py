"""Route Editor - waypoint editing and route compilation for a ground robot."""

from src.route_editor.compiler import compile_route, leg_labels
from src.route_editor.models import Command, Point
from src.route_editor.serialization import (
    PointsParseError,
    export_points,
    export_route,
    import_points,
)
from src.route_editor.store import WaypointStore

__all__ = [
    "Command",
    "Point",
    "PointsParseError",
    "WaypointStore",
    "compile_route",
    "leg_labels",
    "export_points",
    "export_route",
    "import_points",
]
