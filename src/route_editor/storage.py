"""File-backed save slots for point lists."""

import json
import logging
from pathlib import Path

from src.route_editor.serialization import export_points
from src.route_editor.store import WaypointStore

logger = logging.getLogger(__name__)

# Slot used for the automatic session save
SAVE_KEY = "Save"


class SessionStorage:
    """
    Key/value store of serialized point lists kept in one JSON file.

    Values are opaque text; this class never parses them. A missing file
    reads as an empty store.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as storage_file:
                data = json.load(storage_file)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read session storage {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Session storage {self.path} is not a key/value object, ignoring")
            return {}
        return data

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as storage_file:
            json.dump(data, storage_file, indent=2)
        logger.debug(f"Saved slot '{key}' to {self.path}")


def save_session(store: WaypointStore, storage: SessionStorage, key: str = SAVE_KEY) -> None:
    """Persist the store's current points under `key`."""
    storage.set(key, export_points(store.snapshot()))
    logger.info(f"Saved {len(store)} points to slot '{key}'")


def restore_session(store: WaypointStore, storage: SessionStorage, key: str = SAVE_KEY) -> bool:
    """
    Load the points saved under `key` into the store.

    Returns:
        True if the slot existed and parsed. On False the store is unchanged.
    """
    text = storage.get(key)
    if text is None:
        logger.info(f"No saved points in slot '{key}'")
        return False
    return store.import_points(text)
