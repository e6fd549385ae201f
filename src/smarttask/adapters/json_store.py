"""File-based task storage adapter."""

import json
import logging
import re
from datetime import datetime
from pathlib import Path

from smarttask.core.tasks import Task

logger = logging.getLogger(__name__)

USER_ID_PATTERN = re.compile(r"[A-Za-z0-9_.-]+")


class TaskStoreError(Exception):
    """Raised when a task file cannot be read or written."""

    pass


class JsonTaskRepository:
    """
    JSON file task storage.

    Implements TaskRepository protocol. Each user gets one file holding a
    JSON array of task records.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path_for_user(self, user_id: str) -> Path:
        """Get the file path for a given user."""
        if not USER_ID_PATTERN.fullmatch(user_id) or user_id in (".", ".."):
            raise TaskStoreError(f"Invalid user id: {user_id!r}")
        return self.data_dir / f"tasks_{user_id}.json"

    def load(self, user_id: str) -> list[Task]:
        """Load all tasks for a user. Returns [] if the user has no file yet."""
        path = self._path_for_user(user_id)
        if not path.exists():
            return []

        try:
            raw = path.read_text(encoding="utf-8")
            mtime = datetime.fromtimestamp(path.stat().st_mtime)
        except (OSError, UnicodeDecodeError) as e:
            raise TaskStoreError(f"Unreadable task file {path}: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise TaskStoreError(f"Corrupt task file {path}: {e}") from e

        if not isinstance(data, list):
            raise TaskStoreError(f"Corrupt task file {path}: expected a list of tasks")

        tasks = []
        for record in data:
            try:
                # Missing createdAt falls back to the file's mtime, stable until the next save
                tasks.append(Task.from_dict(record, default_created=mtime))
            except (KeyError, TypeError, AttributeError) as e:
                raise TaskStoreError(f"Invalid task record in {path}: {e}") from e

        logger.debug(f"Loaded {len(tasks)} tasks for {user_id} from {path}")
        return tasks

    def save(self, user_id: str, tasks: list[Task]) -> None:
        """Write the full task list for a user, replacing the previous file."""
        path = self._path_for_user(user_id)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps([t.to_dict() for t in tasks], indent=2), encoding="utf-8")
        tmp.replace(path)
        logger.debug(f"Saved {len(tasks)} tasks for {user_id} to {path}")

    def exists(self, user_id: str) -> bool:
        """Check if a task file exists for a user."""
        return self._path_for_user(user_id).exists()
