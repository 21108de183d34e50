"""Compile an ordered waypoint list into robot motion commands."""

import logging
from collections.abc import Sequence

from src.route_editor.geometry import bearing, distance, flip, turn_sign
from src.route_editor.models import BACKWARD, FORWARD, Command, LegLabel, Point

logger = logging.getLogger(__name__)


def leg_heading(origin: Point, destination: Point) -> float:
    """Heading of a leg, flipped when the origin point drives it backward."""
    heading = bearing(origin, destination)
    if origin.d == BACKWARD:
        heading = flip(heading)
    return heading


def compile_route(points: Sequence[Point]) -> list[Command]:
    """
    Turn a waypoint sequence into one command per leg.

    For each leg i (points[i] -> points[i+1]) the robot first turns from
    the previous leg's heading toward this leg's heading, then drives the
    leg. The first leg turns from heading 0 whatever the first point's
    direction flag is.

    When the previous leg was driven backward and this one forward, the
    turn sign is negated: only the reversed side of the transition was
    flipped, so the robot's nose points the other way.

    Args:
        points: Waypoints in traversal order

    Returns:
        List of len(points) - 1 commands, empty for fewer than two points
    """
    commands: list[Command] = []
    reference = 0.0

    for i in range(len(points) - 1):
        origin = points[i]
        destination = points[i + 1]

        heading = leg_heading(origin, destination)
        turn = turn_sign(reference, heading)
        if i > 0 and points[i - 1].d == BACKWARD and origin.d == FORWARD:
            turn = -turn

        commands.append(
            Command(
                turn=turn,
                heading=heading,
                direction=origin.d,
                distance=distance(origin, destination),
                function=origin.f,
            )
        )
        reference = heading

    logger.debug(f"Compiled {len(points)} points into {len(commands)} commands")
    return commands


def leg_labels(points: Sequence[Point]) -> list[LegLabel]:
    """
    Per-point info shown on the map.

    Every point carries its direction and function; points that start a
    leg also carry the leg's heading, turn, distance and midpoint.
    """
    commands = compile_route(points)
    labels: list[LegLabel] = []

    for i, point in enumerate(points):
        if i < len(commands):
            command = commands[i]
            following = points[i + 1]
            labels.append(
                LegLabel(
                    x=point.x,
                    y=point.y,
                    direction=point.d,
                    function=point.f,
                    heading=command.heading,
                    turn=command.turn,
                    distance=command.distance,
                    midpoint=((point.x + following.x) / 2, (point.y + following.y) / 2),
                )
            )
        else:
            labels.append(LegLabel(x=point.x, y=point.y, direction=point.d, function=point.f))

    return labels
