"""Plotly-based map view of a waypoint route."""

import base64
import logging
import mimetypes
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

import numpy as np
import plotly.graph_objects as go

from src.route_editor.compiler import leg_labels
from src.route_editor.geometry import round_half_up
from src.route_editor.models import Point
from src.route_editor.settings import EditorSettings

logger = logging.getLogger(__name__)

POINT_RADIUS = 10       # Marker radius on the field (px)
SELECTION_RADIUS = 20   # Ring drawn around the selected point (px)
CIRCLE_SEGMENTS = 32

# Info label offsets from the point, in field pixels (same layout as the editor canvas)
HEADING_OFFSET = (0, -24)
TURN_OFFSET = (36, 12)
DIRECTION_OFFSET = (-36, 12)
FUNCTION_OFFSET = (0, 48)


def corridor_polygon(p1: Point, p2: Point, width: float) -> np.ndarray:
    """
    Closed rectangle covering a leg at the given robot width.

    Returns:
        5x2 array of (x, y) corners, first corner repeated at the end.
        Empty (0x2) for a zero-length leg.
    """
    start = np.array([p1.x, p1.y], dtype=float)
    end = np.array([p2.x, p2.y], dtype=float)
    direction = end - start
    length = np.linalg.norm(direction)
    if length == 0:
        return np.empty((0, 2))

    normal = np.array([-direction[1], direction[0]]) / length * (width / 2)
    corners = np.array([start + normal, end + normal, end - normal, start - normal])
    return np.vstack([corners, corners[:1]])


def circle_polygon(center: Point, radius: float, segments: int = CIRCLE_SEGMENTS) -> np.ndarray:
    """Closed polygon approximating a circle, (segments + 1)x2."""
    theta = np.linspace(0.0, 2 * np.pi, segments + 1)
    return np.column_stack([center.x + radius * np.cos(theta), center.y + radius * np.sin(theta)])


def create_figure(
    points: Sequence[Point],
    settings: Optional[EditorSettings] = None,
    selected: Optional[int] = None,
    background: str | Path | None = None,
    title: str = "Route",
) -> go.Figure:
    """
    Create a 2D figure of the route over the mission field.

    Args:
        points: Route in traversal order
        settings: Overlay/info toggles, robot width and field size
        selected: Index of the point to ring, if any
        background: Optional image file stretched over the field
        title: Figure title

    Returns:
        Plotly Figure in field pixel coordinates (y axis pointing down)
    """
    settings = settings or EditorSettings()
    fig = go.Figure()

    # Overlay first so it sits behind the path
    if settings.show_overlay and points:
        _add_overlay_to_figure(fig, points, settings.robot_width)

    if len(points) > 1:
        _add_legs_to_figure(fig, points)

    if points:
        _add_points_to_figure(fig, points)

    if selected is not None and 0 <= selected < len(points):
        _add_selection_to_figure(fig, points[selected])

    if settings.show_info and points:
        _add_info_to_figure(fig, points)

    if background is not None:
        _add_background_to_figure(fig, background, settings)

    fig.update_layout(
        title=title,
        xaxis=dict(range=[0, settings.field_width], title="X (mm)", constrain="domain"),
        yaxis=dict(
            range=[settings.field_height, 0],
            title="Y (mm)",
            scaleanchor="x",
            scaleratio=1,
        ),
        showlegend=True,
        legend=dict(yanchor="top", y=0.99, xanchor="left", x=0.01),
        margin=dict(l=0, r=0, t=60, b=0),
        plot_bgcolor="white",
    )
    return fig


def _add_overlay_to_figure(fig: go.Figure, points: Sequence[Point], robot_width: float) -> None:
    """Add the robot-width corridor with rounded joints."""
    shapes = [circle_polygon(point, robot_width / 2) for point in points]
    for p1, p2 in zip(points, points[1:]):
        corridor = corridor_polygon(p1, p2, robot_width)
        if len(corridor):
            shapes.append(corridor)

    # None separators let one trace hold disconnected polygons
    x: list[float | None] = []
    y: list[float | None] = []
    for shape in shapes:
        x.extend(shape[:, 0].tolist() + [None])
        y.extend(shape[:, 1].tolist() + [None])

    fig.add_trace(
        go.Scatter(
            x=x,
            y=y,
            mode="lines",
            fill="toself",
            fillcolor="rgba(0, 0, 0, 0.5)",
            line=dict(width=0),
            hoverinfo="skip",
            name="Robot Overlay",
        )
    )


def _add_legs_to_figure(fig: go.Figure, points: Sequence[Point]) -> None:
    fig.add_trace(
        go.Scatter(
            x=[point.x for point in points],
            y=[point.y for point in points],
            mode="lines",
            line=dict(color="rgb(0, 0, 0)", width=3),
            hoverinfo="skip",
            name="Legs",
        )
    )


def _add_points_to_figure(fig: go.Figure, points: Sequence[Point]) -> None:
    """Add waypoint markers with hover information."""
    hover_texts = [
        f"<b>Point {i}</b><br>Position: ({p.x}, {p.y})<br>Direction: {p.d}<br>Function: {p.f}"
        for i, p in enumerate(points)
    ]
    fig.add_trace(
        go.Scatter(
            x=[point.x for point in points],
            y=[point.y for point in points],
            mode="markers",
            marker=dict(size=2 * POINT_RADIUS, color="rgb(0, 0, 0)"),
            hovertext=hover_texts,
            hoverinfo="text",
            name="Points",
        )
    )


def _add_selection_to_figure(fig: go.Figure, point: Point) -> None:
    ring = circle_polygon(point, SELECTION_RADIUS)
    fig.add_trace(
        go.Scatter(
            x=ring[:, 0],
            y=ring[:, 1],
            mode="lines",
            line=dict(color="rgb(0, 0, 0)", width=3),
            hoverinfo="skip",
            name="Selected",
        )
    )


def _add_info_to_figure(fig: go.Figure, points: Sequence[Point]) -> None:
    """Add heading, distance, turn, direction and function labels."""
    labels = leg_labels(points)
    leg_starts = [label for label in labels if label.heading is not None]

    _add_text_trace(
        fig,
        "Heading",
        [(label.x + HEADING_OFFSET[0], label.y + HEADING_OFFSET[1]) for label in leg_starts],
        [str(round_half_up(label.heading)) for label in leg_starts],
        "rgb(255, 0, 255)",
    )
    _add_text_trace(
        fig,
        "Distance",
        [label.midpoint for label in leg_starts],
        [str(round_half_up(label.distance)) for label in leg_starts],
        "rgb(255, 255, 0)",
    )
    _add_text_trace(
        fig,
        "Turn",
        [(label.x + TURN_OFFSET[0], label.y + TURN_OFFSET[1]) for label in leg_starts],
        [str(label.turn) for label in leg_starts],
        "rgb(0, 0, 255)",
    )
    _add_text_trace(
        fig,
        "Direction",
        [(label.x + DIRECTION_OFFSET[0], label.y + DIRECTION_OFFSET[1]) for label in labels],
        [str(label.direction) for label in labels],
        "rgb(255, 0, 0)",
    )
    _add_text_trace(
        fig,
        "Function",
        [(label.x + FUNCTION_OFFSET[0], label.y + FUNCTION_OFFSET[1]) for label in labels],
        [str(label.function) for label in labels],
        "rgb(0, 255, 0)",
    )


def _add_text_trace(
    fig: go.Figure,
    name: str,
    positions: list[tuple[float, float]],
    texts: list[str],
    color: str,
) -> None:
    if not positions:
        return
    fig.add_trace(
        go.Scatter(
            x=[pos[0] for pos in positions],
            y=[pos[1] for pos in positions],
            mode="text",
            text=texts,
            textfont=dict(size=18, color=color, family="sans-serif"),
            hoverinfo="skip",
            name=name,
        )
    )


def _add_background_to_figure(
    fig: go.Figure,
    background: str | Path,
    settings: EditorSettings,
) -> None:
    """Stretch an image file over the whole field, behind all traces."""
    path = Path(background)
    if not path.exists():
        raise FileNotFoundError(f"Background image not found: {path}")

    mime_type = mimetypes.guess_type(path.name)[0] or "image/png"
    encoded = base64.b64encode(path.read_bytes()).decode("ascii")
    fig.add_layout_image(
        dict(
            source=f"data:{mime_type};base64,{encoded}",
            xref="x",
            yref="y",
            x=0,
            y=0,
            sizex=settings.field_width,
            sizey=settings.field_height,
            xanchor="left",
            yanchor="top",
            sizing="stretch",
            layer="below",
        )
    )
    logger.debug(f"Added background image {path}")


def show_figure(fig: go.Figure) -> None:
    """Display figure in browser."""
    fig.show()


def export_html(fig: go.Figure, output_path: str) -> None:
    """Export figure as standalone HTML file."""
    fig.write_html(output_path, include_plotlyjs=True, full_html=True)


def figure_html(fig: go.Figure) -> str:
    """Standalone HTML document for the figure (for sending as a file)."""
    return fig.to_html(include_plotlyjs=True, full_html=True)
