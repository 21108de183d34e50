"""Text formats for waypoints (JSON) and compiled routes (line records)."""

import json
import logging
import math
from collections.abc import Iterable, Sequence
from typing import Any

from src.route_editor.compiler import compile_route
from src.route_editor.geometry import round_half_up
from src.route_editor.models import DIRECTIONS, Command, Point

logger = logging.getLogger(__name__)


class PointsParseError(ValueError):
    """Raised when text is not a valid point list."""


def export_points(points: Iterable[Point]) -> str:
    """Serialize points as a JSON list of {"x", "y", "d", "f"} records."""
    return json.dumps([point.to_dict() for point in points])


def import_points(text: str) -> list[Point]:
    """
    Parse a JSON point list.

    Records need numeric "x" and "y" (rounded to integers); "d" defaults
    to 1 and "f" to 0 when absent.

    Args:
        text: JSON text, e.g. '[{"x": 10, "y": 20, "d": 1, "f": 0}]'

    Returns:
        Parsed points in file order

    Raises:
        PointsParseError: If the text is not JSON or any record is invalid.
            Nothing is returned for partially valid input.
    """
    try:
        data = json.loads(text)
    except (TypeError, json.JSONDecodeError) as e:
        raise PointsParseError(f"Points are not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise PointsParseError(f"Expected a list of points, got {type(data).__name__}")

    return [_parse_record(index, record) for index, record in enumerate(data)]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integral(value: Any) -> bool:
    return _is_number(value) and float(value).is_integer()


def _parse_record(index: int, record: Any) -> Point:
    """Validate one interchange record."""
    if not isinstance(record, dict):
        raise PointsParseError(f"Point {index} is not an object: {record!r}")

    for key in ("x", "y"):
        if key not in record:
            raise PointsParseError(f"Point {index} is missing '{key}'")
        if not _is_number(record[key]):
            raise PointsParseError(f"Point {index} has non-numeric '{key}': {record[key]!r}")
        # json accepts NaN, Infinity and overflowing literals like 1e400
        if not math.isfinite(record[key]):
            raise PointsParseError(f"Point {index} has non-finite '{key}': {record[key]!r}")

    d = record.get("d", 1)
    if not _is_integral(d) or int(d) not in DIRECTIONS:
        raise PointsParseError(f"Point {index} has invalid direction: {d!r}")

    f = record.get("f", 0)
    if not _is_integral(f) or f < 0:
        raise PointsParseError(f"Point {index} has invalid function code: {f!r}")

    return Point(
        x=round_half_up(record["x"]),
        y=round_half_up(record["y"]),
        d=int(d),
        f=int(f),
    )


def format_commands(commands: Sequence[Command]) -> str:
    """
    Render commands as the controller's line format.

    Each leg is five lines: turn, heading, direction, distance, function.
    Heading and distance are rounded to whole degrees / millimetres.
    """
    lines: list[str] = []
    for command in commands:
        lines.extend(
            [
                str(command.turn),
                str(round_half_up(command.heading)),
                str(command.direction),
                str(round_half_up(command.distance)),
                str(command.function),
            ]
        )
    return "\n".join(lines).strip()


def export_route(points: Sequence[Point]) -> str:
    """Compile points and render the result for the robot controller."""
    return format_commands(compile_route(points))
