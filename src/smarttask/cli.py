"""SmartTask CLI - Personal Task Tracker."""

import json
import logging
import sys

import click

from .adapters.json_store import TaskStoreError
from .config import load_config
from .core.alerts import collect_alerts
from .core.analytics import summarize
from .core.dashboard import (
    format_alert_line,
    format_stats,
    format_suggestions,
    format_task_line,
    format_trend,
)
from .core.ranking import VIEWS, display_order
from .core.tips import productivity_tip
from .workflows import (
    InvalidTaskError,
    TaskNotFoundError,
    UNSET,
    add_task,
    delete_task,
    get_repository,
    load_dashboard,
    load_tasks,
    toggle_task,
    update_task,
)

USER_ERRORS = (InvalidTaskError, TaskNotFoundError, TaskStoreError, ValueError)


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """SmartTask - Personal Task Tracker."""
    config = load_config()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else getattr(logging, config.log_level, logging.WARNING),
    )


@main.command()
@click.argument("title")
@click.option("--priority", "-p", default="medium", type=click.Choice(["high", "medium", "low"]), help="Task priority")
@click.option("--deadline", "-d", default=None, help="Deadline (YYYY-MM-DD or YYYY-MM-DDTHH:MM)")
@click.option("--hours", "-h", "estimated_time", default=0.0, type=float, help="Estimated hours")
@click.option("--description", default="", help="Longer description")
def add(title: str, priority: str, deadline: str | None, estimated_time: float, description: str):
    """Add a new task."""
    config = load_config()
    try:
        task = add_task(
            get_repository(config),
            config.user_id,
            title,
            priority=priority,
            deadline=deadline,
            estimated_time=estimated_time,
            description=description,
        )
    except USER_ERRORS as e:
        _fail(e)

    click.echo(f"✓ Added {task.title} #{task.id[:8]}")


@main.command()
@click.argument("task_id")
@click.option("--title", default=None, help="New title")
@click.option("--priority", "-p", default=None, type=click.Choice(["high", "medium", "low"]), help="New priority")
@click.option("--deadline", "-d", default=None, help="New deadline (YYYY-MM-DD or YYYY-MM-DDTHH:MM)")
@click.option("--clear-deadline", is_flag=True, help="Remove the deadline")
@click.option("--hours", "-h", "estimated_time", default=None, type=float, help="New estimated hours")
@click.option("--description", default=None, help="New description")
def edit(task_id, title, priority, deadline, clear_deadline, estimated_time, description):
    """Edit an existing task."""
    config = load_config()
    if clear_deadline and deadline:
        _fail(click.UsageError("--deadline and --clear-deadline are mutually exclusive"))

    new_deadline = UNSET
    if clear_deadline:
        new_deadline = None
    elif deadline is not None:
        new_deadline = deadline

    try:
        task = update_task(
            get_repository(config),
            config.user_id,
            task_id,
            title=UNSET if title is None else title,
            priority=UNSET if priority is None else priority,
            deadline=new_deadline,
            estimated_time=UNSET if estimated_time is None else estimated_time,
            description=UNSET if description is None else description,
        )
    except USER_ERRORS as e:
        _fail(e)

    click.echo(f"✓ Updated {task.title}")


@main.command()
@click.argument("task_id")
def done(task_id: str):
    """Toggle a task between done and pending."""
    config = load_config()
    try:
        task = toggle_task(get_repository(config), config.user_id, task_id)
    except USER_ERRORS as e:
        _fail(e)

    state = "done" if task.completed else "pending"
    click.echo(f"✓ {task.title} is now {state}")


@main.command()
@click.argument("task_id")
@click.option("--yes", is_flag=True, help="Skip confirmation")
def rm(task_id: str, yes: bool):
    """Delete a task."""
    config = load_config()
    if not yes and not click.confirm(f"Delete task {task_id}?"):
        return
    try:
        task = delete_task(get_repository(config), config.user_id, task_id)
    except USER_ERRORS as e:
        _fail(e)

    click.echo(f"✓ Deleted {task.title}")


@main.command("list")
@click.option("--view", "-v", default="all", type=click.Choice(list(VIEWS)), help="Which tasks to show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_tasks(view: str, as_json: bool):
    """List tasks, pending ones in suggested order."""
    config = load_config()
    try:
        tasks = display_order(load_tasks(config), view)
    except USER_ERRORS as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps([t.to_dict() for t in tasks], indent=2, ensure_ascii=False))
        return

    if not tasks:
        click.echo("No tasks yet. Add one to get started!")
        return

    for task in tasks:
        click.echo(format_task_line(task))


@main.command()
def suggest():
    """Show the suggested order for pending tasks."""
    config = load_config()
    try:
        tasks = load_tasks(config)
    except USER_ERRORS as e:
        _fail(e)

    click.echo(format_suggestions(tasks))


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def alerts(as_json: bool):
    """Show overdue and upcoming deadlines."""
    config = load_config()
    try:
        found = collect_alerts(load_tasks(config))
    except USER_ERRORS as e:
        _fail(e)

    if as_json:
        click.echo(
            json.dumps(
                [{"task_id": a.task.id, "kind": a.kind.value, "message": a.message} for a in found],
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    if not found:
        click.echo("No deadlines in the next 3 days.")
        return

    for alert in found:
        click.echo(format_alert_line(alert))


@main.command()
def tip():
    """Show a productivity tip for the current task list."""
    config = load_config()
    try:
        tasks = load_tasks(config)
    except USER_ERRORS as e:
        _fail(e)

    click.echo(productivity_tip(tasks))


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(as_json: bool):
    """Show completion statistics and the 7-day trend."""
    config = load_config()
    try:
        analytics = summarize(load_tasks(config))
    except USER_ERRORS as e:
        _fail(e)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "completionTrend": [
                        {
                            "day": p.day.isoformat(),
                            "label": p.label,
                            "completed": p.completed_count,
                            "added": p.added_count,
                        }
                        for p in analytics.completion_trend
                    ],
                    "byPriority": [{"name": b.name, "value": b.value} for b in analytics.by_priority],
                    "total": analytics.total,
                    "completed": analytics.completed,
                    "rate": analytics.rate,
                    "averageEstimate": round(analytics.average_estimate, 2),
                },
                indent=2,
            )
        )
        return

    click.echo(format_stats(analytics))
    click.echo()
    click.echo(format_trend(analytics))


@main.command()
@click.option("--view", "-v", default="all", type=click.Choice(list(VIEWS)), help="Which tasks to show")
def dashboard(view: str):
    """Alerts, tip, stats and the task list in one view."""
    config = load_config()
    try:
        data = load_dashboard(config, view)
    except USER_ERRORS as e:
        _fail(e)

    if data.alerts:
        click.echo("🔔 Alerts:")
        for alert in data.alerts:
            click.echo(f"  {format_alert_line(alert)}")
        click.echo()

    click.echo(data.tip)
    click.echo()
    click.echo(format_stats(data.analytics))
    click.echo()
    if data.tasks:
        for task in data.tasks:
            click.echo(format_task_line(task, data.now))
    else:
        click.echo("No tasks yet. Add one to get started!")


@main.command()
def bot():
    """Run the Telegram bot."""
    try:
        from .telegram_bot import run_bot
        click.echo("Starting SmartTask Telegram bot...")
        click.echo("Press Ctrl+C to stop")
        run_bot()
    except ImportError as e:
        click.echo("Error: Missing dependencies. Run 'pip install python-telegram-bot apscheduler'", err=True)
        click.echo(f"Details: {e}", err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nBot stopped.")


if __name__ == "__main__":
    main()
