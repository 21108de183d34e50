"""Tests for file-backed session storage (uses pytest's tmp_path)."""

from src.route_editor.models import Point
from src.route_editor.storage import SAVE_KEY, SessionStorage, restore_session, save_session
from src.route_editor.store import WaypointStore


class TestSessionStorage:
    """Tests for SessionStorage get/set."""

    def test_missing_file_reads_empty(self, tmp_path):
        storage = SessionStorage(tmp_path / "missing.json")
        assert storage.get(SAVE_KEY) is None

    def test_set_then_get(self, tmp_path):
        storage = SessionStorage(tmp_path / "nested" / "points.json")
        storage.set("slot", "[]")
        assert storage.get("slot") == "[]"

    def test_slots_are_independent(self, tmp_path):
        storage = SessionStorage(tmp_path / "points.json")
        storage.set("a", "first")
        storage.set("b", "second")
        assert storage.get("a") == "first"
        assert storage.get("b") == "second"

    def test_corrupt_file_reads_empty(self, tmp_path):
        path = tmp_path / "points.json"
        path.write_text("{not json", encoding="utf-8")
        assert SessionStorage(path).get(SAVE_KEY) is None

    def test_non_object_file_reads_empty(self, tmp_path):
        path = tmp_path / "points.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert SessionStorage(path).get(SAVE_KEY) is None


class TestSaveAndRestore:
    """Tests for save_session / restore_session."""

    def test_round_trip(self, tmp_path, filled_store):
        storage = SessionStorage(tmp_path / "points.json")
        save_session(filled_store, storage)

        restored = WaypointStore()
        assert restore_session(restored, storage) is True
        assert restored.points == list(filled_store.snapshot())

    def test_restore_missing_slot_leaves_store(self, tmp_path, filled_store):
        storage = SessionStorage(tmp_path / "points.json")
        before = filled_store.snapshot()

        assert restore_session(filled_store, storage) is False
        assert filled_store.snapshot() == before

    def test_restore_corrupt_slot_leaves_store(self, tmp_path, filled_store):
        storage = SessionStorage(tmp_path / "points.json")
        storage.set(SAVE_KEY, '[{"x": 1}]')
        before = filled_store.snapshot()

        assert restore_session(filled_store, storage) is False
        assert filled_store.snapshot() == before

    def test_restore_resets_cursors(self, tmp_path, filled_store):
        storage = SessionStorage(tmp_path / "points.json")
        storage.set("other", '[{"x": 1, "y": 2, "d": 1, "f": 0}]')

        assert restore_session(filled_store, storage, "other") is True
        assert filled_store.points == [Point(1, 2)]
        assert filled_store.current_point is None
