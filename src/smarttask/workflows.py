"""Shared workflow layer between CLI and Telegram.

Each function loads the user's tasks through the repository, applies one
change, saves, and returns the affected task. Validation happens here so
the core only ever sees well-formed tasks.
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime

from .adapters.json_store import JsonTaskRepository
from .config import Config, resolve_data_dir
from .core.dashboard import DashboardData, assemble_dashboard
from .core.tasks import Priority, Task, parse_timestamp, toggle_completed
from .ports.task_repo import TaskRepository

logger = logging.getLogger(__name__)

UNSET = object()


class TaskNotFoundError(LookupError):
    """Raised when no single task matches an id or id prefix."""

    pass


class InvalidTaskError(ValueError):
    """Raised when task input fails validation."""

    pass


def get_repository(config: Config) -> JsonTaskRepository:
    """Resolve the task store from config."""
    return JsonTaskRepository(resolve_data_dir(config))


def load_tasks(config: Config, repo: TaskRepository | None = None) -> list[Task]:
    repo = repo or get_repository(config)
    return repo.load(config.user_id)


def load_dashboard(
    config: Config,
    view: str = "all",
    repo: TaskRepository | None = None,
    now: datetime | None = None,
) -> DashboardData:
    """Load the user's tasks and assemble every derived view."""
    return assemble_dashboard(load_tasks(config, repo), view, now)


def find_task(tasks: list[Task], task_id: str) -> Task:
    """Find a task by exact id, or by a unique id prefix."""
    for task in tasks:
        if task.id == task_id:
            return task

    matches = [t for t in tasks if task_id and t.id.startswith(task_id)]
    if len(matches) == 1:
        return matches[0]
    if matches:
        raise TaskNotFoundError(f"Task id '{task_id}' is ambiguous ({len(matches)} matches)")
    raise TaskNotFoundError(f"No task with id '{task_id}'")


# ============== Validation ==============


def _validate_title(title: str) -> str:
    title = (title or "").strip()
    if not title:
        raise InvalidTaskError("Title is required.")
    return title


def _validate_priority(priority: str) -> str:
    """Normalize case and whitespace on write; stored values are matched exactly."""
    level = Priority.parse(priority.strip().lower()) if isinstance(priority, str) else None
    if level is None:
        choices = ", ".join(p.value for p in Priority)
        raise InvalidTaskError(f"Unknown priority '{priority}' (expected one of: {choices})")
    return level.value


def _validate_deadline(deadline: str | datetime | None) -> datetime | None:
    if deadline is None or deadline == "":
        return None
    parsed = parse_timestamp(deadline)
    if parsed is None:
        raise InvalidTaskError(f"Invalid deadline '{deadline}' (expected YYYY-MM-DD or YYYY-MM-DDTHH:MM)")
    return parsed


def _validate_estimate(estimated_time: float | None) -> float:
    if estimated_time is None:
        return 0.0
    if estimated_time < 0:
        raise InvalidTaskError("Estimated time cannot be negative.")
    return float(estimated_time)


# ============== Task Changes ==============


def add_task(
    repo: TaskRepository,
    user_id: str,
    title: str,
    priority: str = "medium",
    deadline: str | datetime | None = None,
    estimated_time: float | None = 0,
    description: str = "",
    now: datetime | None = None,
) -> Task:
    """Validate, create and store a new pending task."""
    task = Task(
        id=uuid.uuid4().hex,
        title=_validate_title(title),
        priority=_validate_priority(priority),
        deadline=_validate_deadline(deadline),
        estimated_time=_validate_estimate(estimated_time),
        completed=False,
        created_at=now or datetime.now(),
        description=description or "",
    )
    tasks = repo.load(user_id)
    repo.save(user_id, tasks + [task])
    logger.info(f"Added task {task.id} for {user_id}")
    return task


def update_task(
    repo: TaskRepository,
    user_id: str,
    task_id: str,
    title=UNSET,
    priority=UNSET,
    deadline=UNSET,
    estimated_time=UNSET,
    description=UNSET,
) -> Task:
    """Edit fields of an existing task. Fields left UNSET are kept; deadline=None clears it."""
    tasks = repo.load(user_id)
    target = find_task(tasks, task_id)

    changes = {}
    if title is not UNSET:
        changes["title"] = _validate_title(title)
    if priority is not UNSET:
        changes["priority"] = _validate_priority(priority)
    if deadline is not UNSET:
        changes["deadline"] = _validate_deadline(deadline)
    if estimated_time is not UNSET:
        changes["estimated_time"] = _validate_estimate(estimated_time)
    if description is not UNSET:
        changes["description"] = description or ""

    updated = replace(target, **changes)
    repo.save(user_id, [updated if t.id == target.id else t for t in tasks])
    logger.info(f"Updated task {target.id} for {user_id}: {', '.join(changes) or 'no changes'}")
    return updated


def toggle_task(repo: TaskRepository, user_id: str, task_id: str, now: datetime | None = None) -> Task:
    """Flip a task between pending and completed."""
    tasks = repo.load(user_id)
    target = find_task(tasks, task_id)
    updated = toggle_completed(target, now)
    repo.save(user_id, [updated if t.id == target.id else t for t in tasks])
    logger.info(f"Task {target.id} marked {'completed' if updated.completed else 'pending'}")
    return updated


def delete_task(repo: TaskRepository, user_id: str, task_id: str) -> Task:
    """Remove a task and return it."""
    tasks = repo.load(user_id)
    target = find_task(tasks, task_id)
    repo.save(user_id, [t for t in tasks if t.id != target.id])
    logger.info(f"Deleted task {target.id} for {user_id}")
    return target
