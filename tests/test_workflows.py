"""Tests for the shared workflow layer."""

from datetime import datetime, timedelta

import pytest

from smarttask.adapters.json_store import JsonTaskRepository
from smarttask.config import Config
from smarttask.core.tasks import Priority
from smarttask.workflows import (
    InvalidTaskError,
    TaskNotFoundError,
    add_task,
    delete_task,
    find_task,
    get_repository,
    load_dashboard,
    load_tasks,
    toggle_task,
    update_task,
)


@pytest.fixture
def config(tmp_path):
    return Config(user_id="alice", data_dir=str(tmp_path))


@pytest.fixture
def repo(config):
    return get_repository(config)


class TestGetRepository:
    def test_uses_configured_dir(self, config, tmp_path):
        repo = get_repository(config)
        assert isinstance(repo, JsonTaskRepository)
        assert repo.data_dir == tmp_path


class TestAddTask:
    def test_creates_pending_task(self, repo, now):
        task = add_task(repo, "alice", "  Write report ", priority="HIGH", deadline="2025-01-20", estimated_time=2, now=now)
        assert task.title == "Write report"
        assert task.priority == "high"
        assert task.deadline == datetime(2025, 1, 20)
        assert task.completed is False
        assert task.completed_at is None
        assert task.created_at == now
        assert repo.load("alice") == [task]

    def test_appends(self, repo):
        first = add_task(repo, "alice", "one")
        second = add_task(repo, "alice", "two")
        assert [t.id for t in repo.load("alice")] == [first.id, second.id]

    def test_ids_are_unique(self, repo):
        ids = {add_task(repo, "alice", f"t{i}").id for i in range(5)}
        assert len(ids) == 5

    def test_priority_normalized_on_write(self, repo):
        task = add_task(repo, "alice", "x", priority=" Low ")
        assert task.priority == "low"
        assert repo.load("alice")[0].priority_level is Priority.LOW

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"title": "   "},
            {"title": "x", "priority": "urgent"},
            {"title": "x", "deadline": "tomorrow-ish"},
            {"title": "x", "estimated_time": -1},
        ],
    )
    def test_rejects_invalid_input(self, repo, kwargs):
        with pytest.raises(InvalidTaskError):
            add_task(repo, "alice", **kwargs)
        assert repo.load("alice") == []


class TestFindTask:
    def test_exact_and_prefix(self, make_task):
        tasks = [make_task(id="abc123"), make_task(id="abd456")]
        assert find_task(tasks, "abc123").id == "abc123"
        assert find_task(tasks, "abd").id == "abd456"

    def test_ambiguous_prefix(self, make_task):
        tasks = [make_task(id="abc123"), make_task(id="abd456")]
        with pytest.raises(TaskNotFoundError, match="ambiguous"):
            find_task(tasks, "ab")

    def test_missing(self, make_task):
        with pytest.raises(TaskNotFoundError):
            find_task([make_task(id="abc")], "zzz")

    def test_empty_id_never_matches_prefix(self, make_task):
        with pytest.raises(TaskNotFoundError):
            find_task([make_task(id="abc")], "")


class TestUpdateTask:
    def test_updates_only_given_fields(self, repo, now):
        task = add_task(repo, "alice", "Draft", priority="low", deadline="2025-01-20", estimated_time=3, now=now)
        updated = update_task(repo, "alice", task.id, title="Final", estimated_time=1)
        assert updated.title == "Final"
        assert updated.estimated_time == 1.0
        assert updated.priority == "low"
        assert updated.deadline == datetime(2025, 1, 20)
        assert repo.load("alice") == [updated]

    def test_clear_deadline(self, repo):
        task = add_task(repo, "alice", "Draft", deadline="2025-01-20")
        assert update_task(repo, "alice", task.id, deadline=None).deadline is None

    def test_validates(self, repo):
        task = add_task(repo, "alice", "Draft")
        with pytest.raises(InvalidTaskError):
            update_task(repo, "alice", task.id, title="")

    def test_missing_task(self, repo):
        with pytest.raises(TaskNotFoundError):
            update_task(repo, "alice", "nope", title="x")


class TestToggleTask:
    def test_complete_and_reopen(self, repo, now):
        task = add_task(repo, "alice", "Draft", now=now)
        done = toggle_task(repo, "alice", task.id, now=now + timedelta(hours=1))
        assert done.completed is True
        assert done.completed_at == now + timedelta(hours=1)
        assert repo.load("alice")[0].completed is True

        reopened = toggle_task(repo, "alice", task.id[:6])
        assert reopened.completed is False
        assert reopened.completed_at is None


class TestDeleteTask:
    def test_deletes(self, repo):
        keep = add_task(repo, "alice", "keep")
        drop = add_task(repo, "alice", "drop")
        assert delete_task(repo, "alice", drop.id) == drop
        assert repo.load("alice") == [keep]

    def test_missing(self, repo):
        with pytest.raises(TaskNotFoundError):
            delete_task(repo, "alice", "nope")


class TestLoadDashboard:
    def test_reads_configured_user(self, config, repo, now):
        add_task(repo, "alice", "Mine", deadline=now - timedelta(hours=2), now=now)
        add_task(repo, "bob", "Not mine", now=now)
        assert [t.title for t in load_tasks(config)] == ["Mine"]

        data = load_dashboard(config, now=now)
        assert [t.title for t in data.tasks] == ["Mine"]
        assert data.alerts[0].message == '"Mine" is overdue!'
