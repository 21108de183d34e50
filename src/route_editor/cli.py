"""Command-line interface for compiling and viewing waypoint routes."""

import argparse
import logging
import sys
from pathlib import Path

from src.logging_config import setup_logging
from src.route_editor.serialization import export_route
from src.route_editor.settings import load_settings
from src.route_editor.store import WaypointStore
from src.route_editor.viewer import create_figure, export_html, show_figure


def load_points_file(path: str) -> WaypointStore:
    """
    Read a points JSON file into a fresh store.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not a valid point list
    """
    points_path = Path(path)
    if not points_path.exists():
        raise FileNotFoundError(f"Points file not found: {points_path}")

    store = WaypointStore()
    if not store.import_points(points_path.read_text(encoding="utf-8")):
        raise ValueError(f"Invalid points file: {points_path}")
    return store


def main(argv: list[str] | None = None) -> None:
    """Main entry point for route editor CLI."""
    parser = argparse.ArgumentParser(
        description="Route Editor - Compile waypoints into robot motion commands",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the compiled route
  uv run python -m src.route_editor points.json

  # Write the route for the robot controller
  uv run python -m src.route_editor points.json --route-out route.txt

  # View the route over the mission image with the robot overlay
  uv run python -m src.route_editor points.json --view --background mission.png --overlay

  # Export the map to an HTML file
  uv run python -m src.route_editor points.json --export map.html
        """,
    )

    parser.add_argument(
        "path",
        type=str,
        help="Path to a points JSON file",
    )
    parser.add_argument(
        "--route-out",
        type=str,
        metavar="FILE",
        help="Write the compiled route to FILE instead of stdout",
    )
    parser.add_argument(
        "--export",
        type=str,
        metavar="FILE",
        help="Export the map to an HTML file",
    )
    parser.add_argument(
        "--view",
        action="store_true",
        help="Open the map in a browser",
    )
    parser.add_argument(
        "--background",
        type=str,
        metavar="IMAGE",
        help="Mission field image drawn under the route",
    )
    parser.add_argument(
        "--overlay",
        action="store_true",
        help="Show the robot-width corridor",
    )
    parser.add_argument(
        "--no-info",
        action="store_true",
        help="Hide heading, distance, turn, direction and function labels",
    )
    parser.add_argument(
        "--robot-width",
        type=int,
        default=None,
        help="Robot width in mm for the overlay",
    )
    parser.add_argument(
        "--title",
        type=str,
        default=None,
        help="Custom title for the map",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    # Setup logging
    setup_logging()
    if args.verbose:
        logging.getLogger("src.route_editor").setLevel(logging.DEBUG)

    logger = logging.getLogger(__name__)

    try:
        settings = load_settings()
        logger.info(f"Loading points from {args.path}")
        store = load_points_file(args.path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    route = export_route(store.snapshot())
    if args.route_out:
        Path(args.route_out).write_text(route, encoding="utf-8")
        logger.info(f"Wrote route for {max(len(store) - 1, 0)} legs to {args.route_out}")
        print(f"Route written to {args.route_out}")
    else:
        print(route)

    if not (args.view or args.export):
        return

    if args.overlay:
        settings.show_overlay = True
    if args.no_info:
        settings.show_info = False
    if args.robot_width is not None:
        settings.robot_width = args.robot_width

    title = args.title or f"Route: {args.path}"
    try:
        fig = create_figure(
            store.snapshot(),
            settings=settings,
            background=args.background,
            title=title,
        )
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.export:
        logger.info(f"Exporting to {args.export}")
        export_html(fig, args.export)
        print(f"Exported to {args.export}")
    if args.view:
        logger.info("Opening in browser")
        show_figure(fig)


if __name__ == "__main__":
    main()
