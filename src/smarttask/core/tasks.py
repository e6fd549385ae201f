"""Pure task domain logic - no I/O dependencies."""

import logging
import math
from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum

logger = logging.getLogger(__name__)


class Priority(Enum):
    """Task priority tiers."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, value: object) -> "Priority | None":
        """Return the member whose value matches exactly, or None for unset/unknown values."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class Task:
    """A unit of user work with priority, optional deadline and effort estimate."""

    id: str
    title: str
    priority: str
    deadline: datetime | None
    estimated_time: float
    completed: bool
    created_at: datetime
    completed_at: datetime | None = None
    description: str = ""

    @property
    def priority_level(self) -> Priority | None:
        return Priority.parse(self.priority)

    def hours_until_deadline(self, now: datetime) -> float | None:
        """Hours until deadline (negative if overdue)."""
        if self.deadline is None:
            return None
        return (self.deadline - now).total_seconds() / 3600

    def days_until_deadline(self, now: datetime) -> float | None:
        """Fractional days until deadline (negative if overdue)."""
        hours = self.hours_until_deadline(now)
        return None if hours is None else hours / 24

    def is_overdue(self, now: datetime) -> bool:
        return not self.completed and self.deadline is not None and self.deadline < now

    def completed_on(self, day: date) -> bool:
        return self.completed_at is not None and self.completed_at.date() == day

    @classmethod
    def from_dict(cls, data: dict, default_created: datetime | None = None) -> "Task":
        """
        Create Task from a stored record, degrading bad optional fields.

        Records without a usable createdAt get default_created, so callers
        can pass a stable value (the store passes the file's mtime).
        """
        task_id = data.get("id")
        created = parse_timestamp(data.get("createdAt"))
        if created is None:
            created = default_created or datetime.now()
            logger.warning(f"Task {task_id} has no valid createdAt, using {created.isoformat()}")

        completed = bool(data.get("completed", False))
        completed_at = parse_timestamp(data.get("completedAt")) if completed else None
        if completed and completed_at is None:
            completed_at = created
        elif completed_at is not None and completed_at < created:
            logger.warning(f"Task {task_id} completed before it was created, clamping completedAt to createdAt")
            completed_at = created

        deadline = None
        if data.get("deadline"):
            deadline = parse_timestamp(data["deadline"])
            if deadline is None:
                logger.warning(f"Ignoring invalid deadline {data['deadline']!r} on task {task_id}")

        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            priority=data.get("priority") or "",
            deadline=deadline,
            estimated_time=parse_estimate(data.get("estimatedTime"), task_id=task_id),
            completed=completed,
            created_at=created,
            completed_at=completed_at,
            description=data.get("description") or "",
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "estimatedTime": self.estimated_time,
            "completed": self.completed,
            "createdAt": self.created_at.isoformat(),
            "completedAt": self.completed_at.isoformat() if self.completed_at else None,
        }


def parse_timestamp(value: object) -> datetime | None:
    """
    Parse an ISO date or datetime into naive local time.

    Date-only values map to local midnight. Aware values are converted to
    the local zone. Anything unparseable returns None.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, datetime.min.time())
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_estimate(value: object, task_id: object = None) -> float:
    """Coerce an hours estimate; missing, invalid or negative values become 0."""
    if value is None or value == "" or isinstance(value, bool):
        return 0.0
    try:
        hours = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-numeric estimate {value!r} on task {task_id}")
        return 0.0
    if math.isnan(hours) or hours < 0:
        logger.warning(f"Clamping invalid estimate {value!r} to 0 on task {task_id}")
        return 0.0
    return hours


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def set_completed(task: Task, completed: bool, now: datetime | None = None) -> Task:
    """
    Return a copy of task in the given completion state.

    completed_at is stamped on false->true and cleared on true->false.
    """
    if task.completed == completed:
        return task
    now = now or datetime.now()
    return replace(task, completed=completed, completed_at=now if completed else None)


def toggle_completed(task: Task, now: datetime | None = None) -> Task:
    return set_completed(task, not task.completed, now)


def pending(tasks: list[Task]) -> list[Task]:
    """Filter to non-completed tasks, preserving order."""
    return [t for t in tasks if not t.completed]


def filter_overdue(tasks: list[Task], now: datetime | None = None) -> list[Task]:
    """Filter to overdue pending tasks only."""
    now = now or datetime.now()
    return [t for t in tasks if t.is_overdue(now)]
