"""Task repository interface."""

from typing import Protocol

from smarttask.core.tasks import Task


class TaskRepository(Protocol):
    """Interface for loading and saving a user's tasks from any backend."""

    def load(self, user_id: str) -> list[Task]:
        """Load all tasks for a user. Unknown users have no tasks."""
        ...

    def save(self, user_id: str, tasks: list[Task]) -> None:
        """Replace the stored task collection for a user."""
        ...
