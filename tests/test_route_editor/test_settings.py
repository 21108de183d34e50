"""Tests for environment-driven settings."""

from pathlib import Path

import pytest
from unittest.mock import patch

from src.route_editor.settings import (
    DEFAULT_ROBOT_WIDTH,
    DEFAULT_STORAGE_PATH,
    EditorSettings,
    load_settings,
)


@pytest.fixture(autouse=True)
def no_dotenv():
    """Keep a developer's .env file out of these tests."""
    with patch("src.route_editor.settings.load_dotenv"):
        yield


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "ROUTE_EDITOR_ROBOT_WIDTH",
        "ROUTE_EDITOR_SELECT_RADIUS",
        "ROUTE_EDITOR_SHOW_OVERLAY",
        "ROUTE_EDITOR_SHOW_INFO",
        "ROUTE_EDITOR_STORAGE_PATH",
    ):
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings()

        assert settings.robot_width == DEFAULT_ROBOT_WIDTH
        assert settings.select_radius == 25
        assert settings.show_overlay is False
        assert settings.show_info is True
        assert settings.field_width == 2362
        assert settings.field_height == 1143
        assert settings.storage_path == DEFAULT_STORAGE_PATH

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ROUTE_EDITOR_ROBOT_WIDTH", "300")
        monkeypatch.setenv("ROUTE_EDITOR_SELECT_RADIUS", "40")
        monkeypatch.setenv("ROUTE_EDITOR_SHOW_OVERLAY", "yes")
        monkeypatch.setenv("ROUTE_EDITOR_SHOW_INFO", "0")
        monkeypatch.setenv("ROUTE_EDITOR_STORAGE_PATH", str(tmp_path / "s.json"))

        settings = load_settings()

        assert settings.robot_width == 300
        assert settings.select_radius == 40
        assert settings.show_overlay is True
        assert settings.show_info is False
        assert settings.storage_path == Path(tmp_path / "s.json")

    def test_bad_integer_names_variable(self, monkeypatch):
        monkeypatch.setenv("ROUTE_EDITOR_ROBOT_WIDTH", "wide")
        with pytest.raises(ValueError, match="ROUTE_EDITOR_ROBOT_WIDTH"):
            load_settings()

    def test_bad_boolean_names_variable(self, monkeypatch):
        monkeypatch.setenv("ROUTE_EDITOR_SHOW_INFO", "maybe")
        with pytest.raises(ValueError, match="ROUTE_EDITOR_SHOW_INFO"):
            load_settings()


class TestToggles:
    def test_toggle_overlay(self):
        settings = EditorSettings()
        assert settings.toggle_overlay() is True
        assert settings.toggle_overlay() is False

    def test_toggle_info(self):
        settings = EditorSettings()
        assert settings.toggle_info() is False
        assert settings.show_info is False
