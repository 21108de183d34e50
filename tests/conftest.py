"""
Shared pytest fixtures for route editor tests.

This module provides reusable fixtures that are automatically discovered
by pytest. Fixtures here are available to all test files.

Educational notes for new developers:
- Fixtures are functions that provide test data or set up test state
- @pytest.fixture decorator marks a function as a fixture
- Each test gets a fresh copy, so mutating a store here never leaks
- Fixtures can depend on other fixtures (dependency injection)
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.route_editor.models import Point
from src.route_editor.settings import EditorSettings
from src.route_editor.store import WaypointStore


@pytest.fixture
def right_angle_points() -> list[Point]:
    """
    Forward-only route turning right at (100, 0).

    Leg 0 heads east (90 degrees), leg 1 heads south (180 degrees).
    """
    return [Point(0, 0, 1, 0), Point(100, 0, 1, 0), Point(100, 100, 1, 0)]


@pytest.fixture
def store() -> WaypointStore:
    """Empty waypoint store."""
    return WaypointStore()


@pytest.fixture
def filled_store() -> WaypointStore:
    """Store with three points; the last one is selected."""
    store = WaypointStore()
    store.append(0, 0)
    store.append(100, 0, -1, 2)
    store.append(100, 100, 1, 5)
    return store


@pytest.fixture
def settings(tmp_path) -> EditorSettings:
    """Default settings with storage inside the test's temp directory."""
    return EditorSettings(storage_path=tmp_path / "points.json")


@pytest.fixture
def mock_telegram_update():
    """
    Create a mock Telegram Update object.

    Returns a MagicMock that simulates an incoming Telegram update
    with user information and message capabilities.
    """
    update = MagicMock()
    update.effective_user.mention_html.return_value = "<b>TestUser</b>"
    update.effective_user.id = 12345
    update.effective_chat.id = 777
    update.message.reply_text = AsyncMock()
    update.message.reply_html = AsyncMock()
    update.message.reply_document = AsyncMock()
    update.message.text = "test message"
    return update


@pytest.fixture
def mock_telegram_context(settings):
    """
    Create a mock Telegram Context object.

    chat_data and bot_data are real dicts so handlers can keep the
    chat's store between calls, just like python-telegram-bot does.
    """
    context = MagicMock()
    context.args = []
    context.chat_data = {}
    context.bot_data = {"settings": settings}
    return context


@pytest.fixture
def mock_callback_query():
    """
    Create a mock Telegram callback query for inline button presses.

    Returns a MagicMock that simulates a callback query with
    answer and edit capabilities.
    """
    query = MagicMock()
    query.answer = AsyncMock()
    query.edit_message_text = AsyncMock()
    query.data = "func_3"
    return query
