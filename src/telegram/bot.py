#!/usr/bin/env python
# pylint: disable=unused-argument
# This program is dedicated to the public domain under the CC0 license.

"""
Telegram Bot for editing robot routes.

Each chat gets its own waypoint store. Commands add, select, nudge and
remove points, and export the compiled route for the robot controller.
"""

import io
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from telegram import ForceReply, InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.error import NetworkError
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from src.logging_config import setup_logging
from src.route_editor.models import BACKWARD, FORWARD
from src.route_editor.serialization import export_points, export_route
from src.route_editor.settings import EditorSettings, load_settings
from src.route_editor.storage import SAVE_KEY, SessionStorage, restore_session, save_session
from src.route_editor.store import WaypointStore
from src.route_editor.viewer import create_figure, figure_html

# Initialize logging (safe to call multiple times)
setup_logging()

logger = logging.getLogger(__name__)

# Configuration constants
CALLBACK_FUNCTION_PREFIX = "func_"
CALLBACK_DIRECTION_PREFIX = "dir_"
FUNCTION_CODES = range(10)
DIRECTION_NAMES = {
    FORWARD: "Forward",
    BACKWARD: "Backward",
}

HELP_TEXT = (
    "Route Editor Bot\n\n"
    "Points:\n"
    "/add x y [d f] - Append a point\n"
    "/click x y - Select the point near (x, y) or add one there\n"
    "/drag x y - Move the held point\n"
    "/release - Let go of the held point\n"
    "/undo - Remove the last point\n"
    "/redo - Restore the last removed point\n"
    "/wipe - Remove all points\n\n"
    "Selected point:\n"
    "/move dx dy - Nudge the selected point\n"
    "/pos x y - Set the selected point's position\n"
    "/forward, /backward - Set the direction\n"
    "/direction - Pick the direction\n"
    "/function [n] - Set or pick the function code\n\n"
    "Export:\n"
    "/points - Show the points as JSON\n"
    "/route - Show the compiled route\n"
    "/map - Send the route map as HTML\n"
    "/save, /restore - Save or load the points\n\n"
    "Paste a points JSON list to import it.\n\n"
    "Other:\n"
    "/start - Start the bot\n"
    "/help - Show this help message"
)


def get_store(context: ContextTypes.DEFAULT_TYPE) -> WaypointStore:
    """Return the chat's store, creating it on first use."""
    store = context.chat_data.get("store")
    if store is None:
        store = WaypointStore()
        context.chat_data["store"] = store
    return store


def get_settings(context: ContextTypes.DEFAULT_TYPE) -> EditorSettings:
    settings = context.bot_data.get("settings")
    if settings is None:
        settings = EditorSettings()
        context.bot_data["settings"] = settings
    return settings


def parse_int_args(args: Optional[list[str]], count: int) -> Optional[list[int]]:
    """
    Parse exactly `count` integer command arguments.

    Example:
        >>> parse_int_args(["10", "-5"], 2)
        [10, -5]
        >>> parse_int_args(["10"], 2)
        None
    """
    if not args or len(args) != count:
        return None
    try:
        return [int(arg) for arg in args]
    except ValueError:
        return None


def describe_selection(store: WaypointStore) -> str:
    """One-line summary of the selected point (the editor's point panel)."""
    point = store.selected
    if point is None:
        return "No point selected."
    return (
        f"Point {store.current_point}: x={point.x} y={point.y} "
        f"{DIRECTION_NAMES[point.d]} f={point.f}"
    )


def _save_key(update: Update) -> str:
    chat = update.effective_chat
    return f"{SAVE_KEY}-{chat.id}" if chat else SAVE_KEY


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Send a message when the command /start is issued."""
    user = update.effective_user
    if not update.message or not user:
        return
    await update.message.reply_html(
        rf"Hi {user.mention_html()}! Use /add or /click to place waypoints.",
        reply_markup=ForceReply(selective=True),
    )


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Send a message when the command /help is issued."""
    if not update.message:
        return
    await update.message.reply_text(HELP_TEXT)


async def add_point(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Append a point: /add x y [d f]."""
    if not update.message:
        return

    args = context.args or []
    values = parse_int_args(args, len(args)) if len(args) in (2, 4) else None
    if values is None:
        await update.message.reply_text("Usage: /add x y [d f]")
        return

    store = get_store(context)
    try:
        store.append(*values)
    except ValueError as e:
        await update.message.reply_text(f"Invalid point: {e}")
        return

    logger.info(f"Chat added point {store.current_point} at ({values[0]}, {values[1]})")
    await update.message.reply_text(describe_selection(store))


async def click_point(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Select the point near (x, y) or drop a new one there: /click x y."""
    if not update.message:
        return

    values = parse_int_args(context.args, 2)
    if values is None:
        await update.message.reply_text("Usage: /click x y")
        return

    store = get_store(context)
    store.select_nearest(values[0], values[1], get_settings(context).select_radius)
    await update.message.reply_text(describe_selection(store))


async def drag_point(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Move the held point: /drag x y."""
    if not update.message:
        return

    values = parse_int_args(context.args, 2)
    if values is None:
        await update.message.reply_text("Usage: /drag x y")
        return

    store = get_store(context)
    if store.holding_point is None:
        await update.message.reply_text("No point is held. Use /click first.")
        return

    store.drag_to(*values)
    await update.message.reply_text(describe_selection(store))


async def release_point(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not update.message:
        return
    get_store(context).release_drag()
    await update.message.reply_text("Released.")


async def move_point(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Nudge the selected point: /move dx dy."""
    if not update.message:
        return

    values = parse_int_args(context.args, 2)
    if values is None:
        await update.message.reply_text("Usage: /move dx dy")
        return

    store = get_store(context)
    store.move_selected(*values)
    await update.message.reply_text(describe_selection(store))


async def position_point(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Set the selected point's position: /pos x y."""
    if not update.message:
        return

    values = parse_int_args(context.args, 2)
    if values is None:
        await update.message.reply_text("Usage: /pos x y")
        return

    store = get_store(context)
    store.set_selected_position(*values)
    await update.message.reply_text(describe_selection(store))


async def set_forward(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not update.message:
        return
    store = get_store(context)
    store.set_selected_direction(FORWARD)
    await update.message.reply_text(describe_selection(store))


async def set_backward(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not update.message:
        return
    store = get_store(context)
    store.set_selected_direction(BACKWARD)
    await update.message.reply_text(describe_selection(store))


async def direction_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Send inline keyboard with direction options."""
    if not update.message:
        return

    keyboard = [[
        InlineKeyboardButton(name, callback_data=f"{CALLBACK_DIRECTION_PREFIX}{d}")
        for d, name in DIRECTION_NAMES.items()
    ]]
    await update.message.reply_text(
        "Which way does the robot drive this leg?",
        reply_markup=InlineKeyboardMarkup(keyboard),
    )


async def function_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Set the function code (/function n) or send a keyboard of codes."""
    if not update.message:
        return

    if context.args:
        values = parse_int_args(context.args, 1)
        if values is None or values[0] < 0:
            await update.message.reply_text("Usage: /function n (n >= 0)")
            return
        store = get_store(context)
        store.set_selected_function(values[0])
        await update.message.reply_text(describe_selection(store))
        return

    keyboard = []
    row = []
    for code in FUNCTION_CODES:
        row.append(InlineKeyboardButton(str(code), callback_data=f"{CALLBACK_FUNCTION_PREFIX}{code}"))
        if len(row) == 5:
            keyboard.append(row)
            row = []
    if row:
        keyboard.append(row)

    await update.message.reply_text(
        "Which function should run on this leg?",
        reply_markup=InlineKeyboardMarkup(keyboard),
    )


async def selection_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle direction/function button presses for the selected point."""
    if not update.callback_query:
        return

    query = update.callback_query
    await query.answer()

    if not query.data:
        return

    store = get_store(context)
    if store.selected is None:
        await query.edit_message_text("No point selected. Use /click or /add first.")
        return

    try:
        if query.data.startswith(CALLBACK_DIRECTION_PREFIX):
            store.set_selected_direction(int(query.data[len(CALLBACK_DIRECTION_PREFIX):]))
        elif query.data.startswith(CALLBACK_FUNCTION_PREFIX):
            store.set_selected_function(int(query.data[len(CALLBACK_FUNCTION_PREFIX):]))
        else:
            logger.warning(f"Unexpected callback data: {query.data}")
            return
    except ValueError as e:
        logger.warning(f"Rejected callback data {query.data}: {e}")
        await query.edit_message_text(f"Invalid choice: {e}")
        return

    await query.edit_message_text(describe_selection(store))


async def undo_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Remove the last point (it can be restored with /redo)."""
    if not update.message:
        return
    store = get_store(context)
    if not store.points:
        await update.message.reply_text("No points to remove.")
        return
    store.remove_last()
    await update.message.reply_text(f"Removed last point. {len(store)} points left.")


async def redo_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Restore the last removed point."""
    if not update.message:
        return
    store = get_store(context)
    if not store.trash:
        await update.message.reply_text("Nothing to restore.")
        return
    store.restore_last()
    await update.message.reply_text(f"Restored point. {len(store)} points.")


async def wipe_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not update.message:
        return
    get_store(context).wipe()
    await update.message.reply_text("All points removed.")


async def points_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Reply with the points as JSON."""
    if not update.message:
        return
    await update.message.reply_text(export_points(get_store(context).snapshot()))


async def route_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Reply with the compiled route."""
    if not update.message:
        return
    store = get_store(context)
    if len(store) < 2:
        await update.message.reply_text("A route needs at least two points.")
        return
    await update.message.reply_text(export_route(store.snapshot()))


async def map_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Send the route map as an HTML document."""
    if not update.message:
        return
    store = get_store(context)
    if not store.points:
        await update.message.reply_text("No points to draw.")
        return

    fig = create_figure(store.snapshot(), settings=get_settings(context), selected=store.current_point)
    document = io.BytesIO(figure_html(fig).encode("utf-8"))
    await update.message.reply_document(document=document, filename="route_map.html")


async def save_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not update.message:
        return
    store = get_store(context)
    storage = SessionStorage(get_settings(context).storage_path)
    try:
        save_session(store, storage, _save_key(update))
    except OSError as e:
        logger.exception(f"Error saving points: {e}")
        await update.message.reply_text(f"Error saving points: {e}")
        return
    await update.message.reply_text(f"Saved {len(store)} points.")


async def restore_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Load the previously saved points."""
    if not update.message:
        return
    store = get_store(context)
    storage = SessionStorage(get_settings(context).storage_path)
    key = _save_key(update)
    if storage.get(key) is None:
        await update.message.reply_text("No saved points to restore.")
        return
    if restore_session(store, storage, key):
        await update.message.reply_text(f"Restored {len(store)} points.")
    else:
        await update.message.reply_text("The saved points are invalid. Nothing changed.")


async def import_text(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Treat a plain text message as a points JSON import."""
    if not update.message or not update.message.text:
        return
    store = get_store(context)
    if store.import_points(update.message.text):
        await update.message.reply_text(f"Imported {len(store)} points.")
    else:
        await update.message.reply_text("That is not a valid points list. Nothing changed.")


async def unknown_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Inform the user that the command was not found."""
    if not update.message:
        return
    await update.message.reply_text(
        "Sorry, I didn't understand that command.\n\n"
        "Use /help to list the available commands."
    )


async def post_init(application: Application) -> None:
    """Load editor settings once on startup."""
    settings = load_settings()
    application.bot_data["settings"] = settings
    logger.info(f"Route editor bot ready (storage: {settings.storage_path})")


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle errors - log network errors concisely, others with full traceback."""
    if isinstance(context.error, NetworkError):
        logger.warning(f"Network error (will retry): {context.error}")
    else:
        logger.exception("Unhandled exception:", exc_info=context.error)


def main() -> None:
    """Start the bot."""
    load_dotenv()
    token = os.getenv("TELEGRAM_BOT_TOKEN")
    if not token:
        raise ValueError("TELEGRAM_BOT_TOKEN not found in environment variables")

    application = Application.builder().token(token).post_init(post_init).build()

    # Point editing
    application.add_handler(CommandHandler("add", add_point))
    application.add_handler(CommandHandler("click", click_point))
    application.add_handler(CommandHandler("drag", drag_point))
    application.add_handler(CommandHandler("release", release_point))
    application.add_handler(CommandHandler("undo", undo_command))
    application.add_handler(CommandHandler("redo", redo_command))
    application.add_handler(CommandHandler("wipe", wipe_command))

    # Selected point
    application.add_handler(CommandHandler("move", move_point))
    application.add_handler(CommandHandler("pos", position_point))
    application.add_handler(CommandHandler("forward", set_forward))
    application.add_handler(CommandHandler("backward", set_backward))
    application.add_handler(CommandHandler("direction", direction_command))
    application.add_handler(CommandHandler("function", function_command))
    application.add_handler(CallbackQueryHandler(
        selection_callback,
        pattern=f"^({CALLBACK_DIRECTION_PREFIX}|{CALLBACK_FUNCTION_PREFIX})",
    ))

    # Export and persistence
    application.add_handler(CommandHandler("points", points_command))
    application.add_handler(CommandHandler("route", route_command))
    application.add_handler(CommandHandler("map", map_command))
    application.add_handler(CommandHandler("save", save_command))
    application.add_handler(CommandHandler("restore", restore_command))

    # General commands
    application.add_handler(CommandHandler("start", start))
    application.add_handler(CommandHandler("help", help_command))

    # Plain text is a points import; anything else starting with / is unknown
    application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, import_text))
    application.add_handler(MessageHandler(filters.COMMAND, unknown_command))

    application.add_error_handler(error_handler)

    logger.info("Starting route editor bot...")

    # Run the bot until the user presses Ctrl-C
    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
