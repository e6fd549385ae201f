"""Deadline alerts - pure classification, no I/O."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .tasks import Task, round_half_up

URGENT_HOURS = 24
SOON_HOURS = 72


class AlertKind(Enum):
    OVERDUE = "overdue"
    URGENT = "urgent"
    SOON = "soon"


@dataclass(frozen=True)
class Alert:
    """A time-sensitive notice about one task."""

    task: Task
    kind: AlertKind
    message: str


def classify(task: Task, now: datetime) -> AlertKind | None:
    """
    Alert kind for a task, or None.

    Windows are half-open: [0h, 24h) is urgent, [24h, 72h) is soon.
    """
    if task.completed:
        return None
    hours = task.hours_until_deadline(now)
    if hours is None or hours >= SOON_HOURS:
        return None
    if hours < 0:
        return AlertKind.OVERDUE
    if hours < URGENT_HOURS:
        return AlertKind.URGENT
    return AlertKind.SOON


def alert_message(task: Task, kind: AlertKind, now: datetime) -> str:
    hours = task.hours_until_deadline(now) or 0.0
    match kind:
        case AlertKind.OVERDUE:
            return f'"{task.title}" is overdue!'
        case AlertKind.URGENT:
            return f'"{task.title}" due in {round_half_up(hours)}h'
        case AlertKind.SOON:
            return f'"{task.title}" due in {round_half_up(hours / 24)}d'


def collect_alerts(tasks: list[Task], now: datetime | None = None) -> list[Alert]:
    """
    One alert per pending task due within three days, in input order.

    Pure function - no I/O.
    """
    now = now or datetime.now()
    alerts = []
    for task in tasks:
        kind = classify(task, now)
        if kind is not None:
            alerts.append(Alert(task=task, kind=kind, message=alert_message(task, kind, now)))
    return alerts
