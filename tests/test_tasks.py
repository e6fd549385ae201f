"""Tests for core task model."""

import logging
from datetime import date, datetime, timedelta, timezone

import pytest

from smarttask.core.tasks import (
    Priority,
    Task,
    filter_overdue,
    parse_estimate,
    parse_timestamp,
    round_half_up,
    set_completed,
    toggle_completed,
)


class TestPriority:
    def test_parse_known(self):
        assert Priority.parse("high") is Priority.HIGH
        assert Priority.parse("medium") is Priority.MEDIUM

    def test_parse_is_exact(self):
        assert Priority.parse("High") is None
        assert Priority.parse(" medium ") is None

    def test_parse_unknown(self):
        assert Priority.parse("critical") is None
        assert Priority.parse(None) is None
        assert Priority.parse(3) is None


class TestTask:
    def test_hours_until_deadline(self, make_task, now):
        task = make_task(deadline=now + timedelta(hours=6))
        assert task.hours_until_deadline(now) == pytest.approx(6)
        assert task.days_until_deadline(now) == pytest.approx(0.25)

    def test_no_deadline(self, make_task, now):
        task = make_task()
        assert task.hours_until_deadline(now) is None
        assert task.days_until_deadline(now) is None
        assert task.is_overdue(now) is False

    def test_is_overdue(self, make_task, now):
        assert make_task(deadline=now - timedelta(minutes=1)).is_overdue(now) is True
        assert make_task(deadline=now).is_overdue(now) is False
        assert make_task(deadline=now - timedelta(days=1), completed=True).is_overdue(now) is False

    def test_filter_overdue(self, make_task, now):
        late = make_task(deadline=now - timedelta(hours=1))
        tasks = [late, make_task(), make_task(deadline=now + timedelta(hours=1))]
        assert filter_overdue(tasks, now) == [late]


class TestFromDict:
    def test_full_record(self):
        task = Task.from_dict(
            {
                "id": "1700000000000",
                "title": "Write report",
                "description": "Q4",
                "priority": "high",
                "deadline": "2025-01-20",
                "estimatedTime": 2,
                "completed": True,
                "createdAt": "2025-01-10T09:00:00",
                "completedAt": "2025-01-12T10:30:00",
            }
        )
        assert task.id == "1700000000000"
        assert task.priority_level is Priority.HIGH
        assert task.deadline == datetime(2025, 1, 20)
        assert task.estimated_time == 2.0
        assert task.completed_at == datetime(2025, 1, 12, 10, 30)
        assert task.description == "Q4"

    def test_invalid_deadline_becomes_none(self):
        task = Task.from_dict({"id": "1", "title": "x", "deadline": "next tuesday", "createdAt": "2025-01-10"})
        assert task.deadline is None

    def test_negative_estimate_clamped(self):
        task = Task.from_dict({"id": "1", "title": "x", "estimatedTime": -3, "createdAt": "2025-01-10"})
        assert task.estimated_time == 0.0

    def test_completed_at_dropped_when_pending(self):
        task = Task.from_dict(
            {"id": "1", "title": "x", "completed": False, "createdAt": "2025-01-10", "completedAt": "2025-01-11"}
        )
        assert task.completed_at is None

    def test_completed_without_timestamp_uses_created(self):
        task = Task.from_dict({"id": "1", "title": "x", "completed": True, "createdAt": "2025-01-10T08:00"})
        assert task.completed_at == datetime(2025, 1, 10, 8, 0)

    def test_missing_created_at_uses_default(self, caplog):
        default = datetime(2024, 6, 1, 9, 0)
        with caplog.at_level(logging.WARNING):
            task = Task.from_dict({"id": "1", "title": "x"}, default_created=default)
        assert task.created_at == default
        assert "no valid createdAt" in caplog.text

    def test_completed_before_created_is_clamped(self, caplog):
        with caplog.at_level(logging.WARNING):
            task = Task.from_dict(
                {
                    "id": "1",
                    "title": "x",
                    "completed": True,
                    "createdAt": "2025-01-10T09:00",
                    "completedAt": "2025-01-09T09:00",
                }
            )
        assert task.completed_at == task.created_at == datetime(2025, 1, 10, 9, 0)
        assert "clamping completedAt" in caplog.text

    def test_unknown_priority_kept(self):
        task = Task.from_dict({"id": "1", "title": "x", "priority": "someday", "createdAt": "2025-01-10"})
        assert task.priority == "someday"
        assert task.priority_level is None

    def test_round_trip(self, make_task, now):
        task = make_task(priority="low", deadline=now + timedelta(days=1), estimated_time=1.5)
        assert Task.from_dict(task.to_dict()) == task


class TestParsing:
    def test_date_only_is_local_midnight(self):
        assert parse_timestamp("2025-01-20") == datetime(2025, 1, 20)

    def test_date_object(self):
        assert parse_timestamp(date(2025, 1, 20)) == datetime(2025, 1, 20)

    def test_aware_converted_to_naive(self):
        parsed = parse_timestamp("2025-01-20T10:00:00Z")
        assert parsed.tzinfo is None
        expected = datetime(2025, 1, 20, 10, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        assert parsed == expected

    @pytest.mark.parametrize("value", [None, "", "garbage", 42])
    def test_unparseable(self, value):
        assert parse_timestamp(value) is None

    @pytest.mark.parametrize("value,expected", [(None, 0.0), ("", 0.0), ("2.5", 2.5), ("abc", 0.0), (-1, 0.0)])
    def test_parse_estimate(self, value, expected):
        assert parse_estimate(value) == expected

    @pytest.mark.parametrize("value,expected", [(0.5, 1), (1.49, 1), (2.5, 3), (0.0, 0), (99.5, 100)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestCompletion:
    def test_complete_stamps_time(self, make_task, now):
        task = set_completed(make_task(), True, now)
        assert task.completed is True
        assert task.completed_at == now

    def test_reopen_clears_time(self, make_task, now):
        task = toggle_completed(make_task(completed=True), now)
        assert task.completed is False
        assert task.completed_at is None

    def test_no_op_keeps_original_timestamp(self, make_task, now):
        done = make_task(completed=True, completed_at=now - timedelta(days=1))
        assert set_completed(done, True, now) is done

    def test_original_untouched(self, make_task, now):
        original = make_task()
        toggle_completed(original, now)
        assert original.completed is False
