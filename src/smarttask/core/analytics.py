"""Trend and summary statistics over a task collection."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .tasks import Priority, Task, round_half_up

TREND_DAYS = 7

HISTOGRAM_BUCKETS = (
    ("High", Priority.HIGH),
    ("Medium", Priority.MEDIUM),
    ("Low", Priority.LOW),
)


@dataclass(frozen=True)
class TrendPoint:
    """Tasks completed and added on one calendar day."""

    day: date
    completed_count: int
    added_count: int

    @property
    def label(self) -> str:
        """Abbreviated weekday, e.g. 'Mon'."""
        return self.day.strftime("%a")


@dataclass(frozen=True)
class PriorityCount:
    name: str
    value: int


@dataclass(frozen=True)
class Analytics:
    completion_trend: list[TrendPoint]
    by_priority: list[PriorityCount]
    total: int
    completed: int
    rate: int
    unknown_priority: int = 0
    average_estimate: float = 0.0

    @property
    def pending(self) -> int:
        return self.total - self.completed


def completion_rate(completed: int, total: int) -> int:
    """Integer percentage of completed tasks, 0 for an empty collection."""
    if total <= 0:
        return 0
    return round_half_up(completed / total * 100)


def completion_trend(tasks: list[Task], today: date, days: int = TREND_DAYS) -> list[TrendPoint]:
    """Per-day completed/added counts for the `days` calendar days ending today, oldest first."""
    points = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        points.append(
            TrendPoint(
                day=day,
                completed_count=sum(1 for t in tasks if t.completed_on(day)),
                added_count=sum(1 for t in tasks if t.created_at.date() == day),
            )
        )
    return points


def priority_histogram(tasks: list[Task]) -> list[PriorityCount]:
    """Counts for High, Medium, Low. Unrecognized priorities fall in no bucket."""
    levels = [t.priority_level for t in tasks]
    return [PriorityCount(name=name, value=levels.count(level)) for name, level in HISTOGRAM_BUCKETS]


def average_estimate(tasks: list[Task]) -> float:
    """Mean estimated hours over tasks that carry an estimate."""
    estimates = [t.estimated_time for t in tasks if t.estimated_time > 0]
    if not estimates:
        return 0.0
    return sum(estimates) / len(estimates)


def summarize(tasks: list[Task], now: datetime | None = None) -> Analytics:
    """
    Aggregate a task collection into trend, histogram and totals.

    Pure function - no I/O.
    """
    now = now or datetime.now()
    total = len(tasks)
    completed = sum(1 for t in tasks if t.completed)

    return Analytics(
        completion_trend=completion_trend(tasks, now.date()),
        by_priority=priority_histogram(tasks),
        total=total,
        completed=completed,
        rate=completion_rate(completed, total),
        unknown_priority=sum(1 for t in tasks if t.priority_level is None),
        average_estimate=average_estimate(tasks),
    )
