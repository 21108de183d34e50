"""Tests for the route editor command-line interface."""

import json

import pytest
from unittest.mock import patch

from src.route_editor.cli import load_points_file, main
from src.route_editor.settings import EditorSettings


@pytest.fixture(autouse=True)
def quiet_startup():
    """Skip log files and .env loading during CLI runs."""
    with patch("src.route_editor.cli.setup_logging"), \
            patch("src.route_editor.cli.load_settings", return_value=EditorSettings()):
        yield


@pytest.fixture
def points_file(tmp_path):
    path = tmp_path / "points.json"
    path.write_text(
        json.dumps([
            {"x": 0, "y": 0, "d": 1, "f": 0},
            {"x": 100, "y": 0, "d": 1, "f": 0},
            {"x": 100, "y": 100, "d": 1, "f": 0},
        ]),
        encoding="utf-8",
    )
    return path


class TestLoadPointsFile:
    def test_loads_points(self, points_file):
        store = load_points_file(str(points_file))
        assert len(store) == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_points_file(str(tmp_path / "missing.json"))

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(ValueError):
            load_points_file(str(path))


class TestMain:
    """Tests for the main entry point."""

    def test_prints_route(self, points_file, capsys):
        main([str(points_file)])
        assert capsys.readouterr().out.strip().endswith("1\n90\n1\n100\n0\n1\n180\n1\n100\n0")

    def test_writes_route_file(self, points_file, tmp_path):
        out = tmp_path / "route.txt"
        main([str(points_file), "--route-out", str(out)])
        assert out.read_text(encoding="utf-8").startswith("1\n90\n")

    def test_missing_file_exits_1(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.json")])
        assert exc_info.value.code == 1
        assert "Error" in capsys.readouterr().err

    def test_export_html(self, points_file, tmp_path):
        out = tmp_path / "map.html"
        main([str(points_file), "--export", str(out), "--overlay", "--robot-width", "150"])
        assert out.exists()

    def test_view_opens_figure(self, points_file):
        with patch("src.route_editor.cli.show_figure") as mock_show:
            main([str(points_file), "--view", "--no-info"])
        mock_show.assert_called_once()
