"""Shared fixtures."""

from datetime import datetime

import pytest

from smarttask.core.tasks import Task


@pytest.fixture
def now():
    return datetime(2025, 1, 15, 12, 0)


@pytest.fixture
def make_task(now):
    """Factory for tasks with sensible defaults."""
    counter = iter(range(1, 10_000))

    def _make(
        title: str | None = None,
        priority: str = "medium",
        deadline: datetime | None = None,
        estimated_time: float = 0.0,
        completed: bool = False,
        created_at: datetime | None = None,
        completed_at: datetime | None = None,
        id: str | None = None,
    ) -> Task:
        n = next(counter)
        if completed and completed_at is None:
            completed_at = now
        return Task(
            id=id or str(n),
            title=title or f"Task {n}",
            priority=priority,
            deadline=deadline,
            estimated_time=estimated_time,
            completed=completed,
            created_at=created_at or now,
            completed_at=completed_at,
        )

    return _make
