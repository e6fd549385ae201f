"""Pure dashboard assembly logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime

from .alerts import Alert, AlertKind, collect_alerts
from .analytics import Analytics, summarize
from .ranking import display_order, rank_tasks
from .tasks import Task
from .tips import STRATEGY_TIPS, productivity_tip

ALERT_ICONS = {
    AlertKind.OVERDUE: "⚠️",
    AlertKind.URGENT: "⏰",
    AlertKind.SOON: "📅",
}


@dataclass
class DashboardData:
    """Assembled dashboard data ready for formatting."""

    now: datetime
    view: str
    tasks: list[Task]
    alerts: list[Alert]
    tip: str
    analytics: Analytics


def assemble_dashboard(tasks: list[Task], view: str = "all", now: datetime | None = None) -> DashboardData:
    """
    Assemble dashboard data from raw tasks.

    Pure function - no I/O. Every view is computed against the same instant.
    """
    now = now or datetime.now()
    return DashboardData(
        now=now,
        view=view,
        tasks=display_order(tasks, view, now),
        alerts=collect_alerts(tasks, now),
        tip=productivity_tip(tasks, now),
        analytics=summarize(tasks, now),
    )


def format_task_line(task: Task, now: datetime | None = None) -> str:
    """
    Format a single task for display.

    Pure function - no I/O.
    """
    now = now or datetime.now()
    check = "x" if task.completed else " "
    meta = [task.priority or "none"]
    if task.deadline:
        if task.is_overdue(now):
            meta.append("OVERDUE")
        else:
            meta.append(f"due {task.deadline.strftime('%Y-%m-%d %H:%M')}")
    if task.estimated_time > 0:
        meta.append(f"~{task.estimated_time:g}h")
    return f"- [{check}] {task.title} ({', '.join(meta)}) #{task.id[:8]}"


def format_alert_line(alert: Alert) -> str:
    return f"{ALERT_ICONS[alert.kind]} {alert.message}"


def format_stats(analytics: Analytics) -> str:
    """Totals block, one stat per line."""
    return "\n".join(
        [
            f"Total tasks: {analytics.total}",
            f"Completed: {analytics.completed}",
            f"In progress: {analytics.pending}",
            f"Completion rate: {analytics.rate}%",
            f"Avg. est. hours: {analytics.average_estimate:.1f}",
        ]
    )


def format_trend(analytics: Analytics) -> str:
    """Seven-day trend plus the priority histogram."""
    lines = ["Day  Done  Added"]
    for point in analytics.completion_trend:
        lines.append(f"{point.label:<4} {point.completed_count:>4}  {point.added_count:>5}")
    lines.append("")
    lines.append("  ".join(f"{bucket.name}: {bucket.value}" for bucket in analytics.by_priority))
    if analytics.unknown_priority:
        lines.append(f"(+{analytics.unknown_priority} with no recognized priority)")
    return "\n".join(lines)


def format_suggestions(tasks: list[Task], now: datetime | None = None) -> str:
    """
    Numbered suggested order for pending tasks, followed by planning tips.

    Pure function - no I/O.
    """
    now = now or datetime.now()
    ranked = rank_tasks(tasks, now)
    if ranked:
        lines = []
        for i, task in enumerate(ranked, start=1):
            marker = "  <- start here" if i == 1 else ""
            lines.append(f"{i}. {task.title}{marker}")
        order_md = "\n".join(lines)
    else:
        order_md = "No pending tasks! You're all caught up 🎉"

    tips_md = "\n".join(f"- {tip}" for tip in STRATEGY_TIPS)
    return f"""### Suggested Order
{order_md}

### Strategies
{tips_md}"""


def compose_digest(tasks: list[Task], now: datetime | None = None) -> str:
    """
    Markdown digest of alerts, the tip and completion rate.

    Pure function - no I/O.
    """
    now = now or datetime.now()
    alerts = collect_alerts(tasks, now)
    analytics = summarize(tasks, now)

    alerts_md = "\n".join(f"- {format_alert_line(a)}" for a in alerts) or "No deadlines in the next 3 days."
    return f"""**Daily Digest - {now.strftime('%A, %B %d')}**

{productivity_tip(tasks, now)}

**Alerts**
{alerts_md}

{analytics.pending} pending, {analytics.completed} done ({analytics.rate}%)"""
