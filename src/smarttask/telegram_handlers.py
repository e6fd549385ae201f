"""Telegram command handlers."""

import logging

from telegram import Update
from telegram.ext import ContextTypes

from .adapters.json_store import TaskStoreError
from .config import load_config
from .core.alerts import collect_alerts
from .core.analytics import summarize
from .core.dashboard import format_alert_line, format_stats, format_suggestions, format_task_line
from .core.ranking import rank_tasks
from .core.tips import productivity_tip
from .telegram_format import send_markdown
from .workflows import (
    InvalidTaskError,
    TaskNotFoundError,
    add_task,
    get_repository,
    load_tasks,
    toggle_task,
)

logger = logging.getLogger(__name__)

COMMANDS_HELP = (
    "/tasks - Pending tasks in suggested order\n"
    "/alerts - Overdue and upcoming deadlines\n"
    "/tip - A productivity tip\n"
    "/stats - Completion statistics\n"
    "/suggest - Suggested order with planning strategies\n"
    "/add <title> - Add a medium-priority task\n"
    "/done <id> - Toggle a task done/pending\n"
    "/help - Show all commands"
)


async def _load_or_reply(update: Update):
    """Load the configured user's tasks, replying with the error on failure."""
    try:
        return load_tasks(load_config())
    except TaskStoreError as e:
        logger.error(f"Failed to load tasks: {e}")
        await update.message.reply_text(f"Couldn't read tasks: {e}")
        return None


# ============== Simple Commands ==============


async def start_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /start command."""
    await update.message.reply_text("Hey! I'm SmartTask, your task coach.\n\nCommands:\n" + COMMANDS_HELP)


async def help_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /help command."""
    await update.message.reply_text("SmartTask Commands\n\n" + COMMANDS_HELP)


async def tasks_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /tasks command - pending tasks in ranked order."""
    tasks = await _load_or_reply(update)
    if tasks is None:
        return

    ranked = rank_tasks(tasks)
    if not ranked:
        await update.message.reply_text("No pending tasks! You're all caught up 🎉")
        return

    lines = "\n".join(format_task_line(t) for t in ranked)
    await send_markdown(update.message, f"**Pending Tasks**\n\n{lines}")


async def alerts_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /alerts command."""
    tasks = await _load_or_reply(update)
    if tasks is None:
        return

    found = collect_alerts(tasks)
    if not found:
        await update.message.reply_text("No deadlines in the next 3 days.")
        return

    await update.message.reply_text("\n".join(format_alert_line(a) for a in found))


async def tip_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /tip command."""
    tasks = await _load_or_reply(update)
    if tasks is None:
        return
    await update.message.reply_text(productivity_tip(tasks))


async def stats_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /stats command."""
    tasks = await _load_or_reply(update)
    if tasks is None:
        return
    await update.message.reply_text(format_stats(summarize(tasks)))


async def suggest_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /suggest command."""
    tasks = await _load_or_reply(update)
    if tasks is None:
        return
    await send_markdown(update.message, format_suggestions(tasks))


# ============== Task Changes ==============


async def add_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /add <title>."""
    title = " ".join(context.args or [])
    config = load_config()
    try:
        task = add_task(get_repository(config), config.user_id, title)
    except (InvalidTaskError, TaskStoreError) as e:
        await update.message.reply_text(f"Couldn't add task: {e}\nUsage: /add <title>")
        return

    await update.message.reply_text(f"✓ Added {task.title} ({task.id[:8]})")


async def done_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /done <id> - toggle completion."""
    if not context.args:
        await update.message.reply_text("Usage: /done <task id>")
        return

    config = load_config()
    try:
        task = toggle_task(get_repository(config), config.user_id, context.args[0])
    except (TaskNotFoundError, TaskStoreError) as e:
        await update.message.reply_text(str(e))
        return

    state = "done ✓" if task.completed else "pending again"
    await update.message.reply_text(f"{task.title} is {state}")
