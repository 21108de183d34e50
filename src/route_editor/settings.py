"""Editor settings, overridable through environment variables or a .env file."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent

# Mission field image size in pixels (1 mm per px)
FIELD_WIDTH = 2362
FIELD_HEIGHT = 1143

DEFAULT_ROBOT_WIDTH = 200      # Overlay corridor width (mm)
DEFAULT_SELECT_RADIUS = 25     # Pointer grab radius (px)
DEFAULT_STORAGE_PATH = PROJECT_ROOT / "saves" / "points.json"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class EditorSettings:
    """Display and interaction settings for one editing session."""

    robot_width: int = DEFAULT_ROBOT_WIDTH
    show_overlay: bool = False
    show_info: bool = True
    select_radius: float = DEFAULT_SELECT_RADIUS
    field_width: int = FIELD_WIDTH
    field_height: int = FIELD_HEIGHT
    storage_path: Path = field(default_factory=lambda: DEFAULT_STORAGE_PATH)

    def toggle_overlay(self) -> bool:
        self.show_overlay = not self.show_overlay
        return self.show_overlay

    def toggle_info(self) -> bool:
        self.show_info = not self.show_info
        return self.show_info


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got {raw!r}")


def load_settings() -> EditorSettings:
    """
    Build settings from the environment.

    Reads a .env file if present, then:
    - ROUTE_EDITOR_ROBOT_WIDTH (int)
    - ROUTE_EDITOR_SELECT_RADIUS (int)
    - ROUTE_EDITOR_SHOW_OVERLAY (bool)
    - ROUTE_EDITOR_SHOW_INFO (bool)
    - ROUTE_EDITOR_STORAGE_PATH (path)

    Raises:
        ValueError: If a variable is set to an unparseable value
    """
    load_dotenv()

    storage_path = os.getenv("ROUTE_EDITOR_STORAGE_PATH")
    settings = EditorSettings(
        robot_width=_env_int("ROUTE_EDITOR_ROBOT_WIDTH", DEFAULT_ROBOT_WIDTH),
        select_radius=_env_int("ROUTE_EDITOR_SELECT_RADIUS", DEFAULT_SELECT_RADIUS),
        show_overlay=_env_bool("ROUTE_EDITOR_SHOW_OVERLAY", False),
        show_info=_env_bool("ROUTE_EDITOR_SHOW_INFO", True),
        storage_path=Path(storage_path) if storage_path else DEFAULT_STORAGE_PATH,
    )
    logger.debug(f"Loaded settings: {settings}")
    return settings
