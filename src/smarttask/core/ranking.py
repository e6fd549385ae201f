"""Task ranking by weighted priority, deadline urgency and effort."""

from datetime import datetime

from .tasks import Priority, Task

PRIORITY_FACTOR = 0.4
URGENCY_FACTOR = 0.4
EFFICIENCY_FACTOR = 0.2

# One hour, in days. Keeps 1 / (days + 1) finite for a deadline one day past.
MIN_URGENCY_DENOMINATOR = 1 / 24

VIEWS = ("all", "active", "done")


def priority_weight(priority: str | Priority | None) -> int:
    """Weight for a priority value. Unknown priority gets the lowest weight."""
    if not isinstance(priority, Priority):
        priority = Priority.parse(priority)
    match priority:
        case Priority.HIGH:
            return 3
        case Priority.MEDIUM:
            return 2
        case _:
            return 1


def urgency(task: Task, now: datetime) -> float:
    """
    Deadline urgency: 1 / (days until deadline + 1), 0 without a deadline.

    The denominator is clamped to at least MIN_URGENCY_DENOMINATOR in
    magnitude, keeping its sign. Tasks overdue by more than a day therefore
    score negative urgency.
    """
    days = task.days_until_deadline(now)
    if days is None:
        return 0.0
    denominator = days + 1
    if 0 <= denominator < MIN_URGENCY_DENOMINATOR:
        denominator = MIN_URGENCY_DENOMINATOR
    elif -MIN_URGENCY_DENOMINATOR < denominator < 0:
        denominator = -MIN_URGENCY_DENOMINATOR
    return 1 / denominator


def efficiency(task: Task) -> float:
    """Quick wins score higher: 1 / estimated hours, 0 without an estimate."""
    if task.estimated_time > 0:
        return 1 / task.estimated_time
    return 0.0


def score(task: Task, now: datetime) -> float:
    return (
        priority_weight(task.priority) * PRIORITY_FACTOR
        + urgency(task, now) * URGENCY_FACTOR
        + efficiency(task) * EFFICIENCY_FACTOR
    )


def rank_tasks(tasks: list[Task], now: datetime | None = None) -> list[Task]:
    """
    Order pending tasks by descending score.

    Completed tasks are dropped. Ties keep input order.
    Pure function - no I/O.
    """
    now = now or datetime.now()
    return sorted((t for t in tasks if not t.completed), key=lambda t: score(t, now), reverse=True)


def display_order(tasks: list[Task], view: str = "all", now: datetime | None = None) -> list[Task]:
    """
    Full display list for a view: ranked pending tasks, then completed ones.

    view is one of "all", "active", "done".
    """
    if view not in VIEWS:
        raise ValueError(f"Unknown view {view!r}, expected one of {', '.join(VIEWS)}")
    now = now or datetime.now()

    ranked = rank_tasks(tasks, now) if view != "done" else []
    done = [t for t in tasks if t.completed] if view != "active" else []
    return ranked + done
