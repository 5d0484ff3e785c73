"""Unit tests for the task scheduler view."""

from __future__ import annotations

from datetime import timedelta
from uuid import uuid4

import pytest

from domain.project.scheduling import (
    UNKNOWN_PROJECT,
    is_overdue,
    schedule_view,
    upcoming_tasks,
)


class TestScheduleView:
    """Priority first, then due date with undated tasks last."""

    def test_priority_then_due_date(self, make_task):
        far = make_task("Far", "HIGH", days=5)
        near = make_task("Near", "HIGH", days=1)
        undated = make_task("Undated", "MEDIUM")

        ordered = schedule_view([far, near, undated])

        assert [t.name for t in ordered] == ["Near", "Far", "Undated"]

    def test_completed_tasks_excluded(self, make_task):
        done = make_task("Done", "HIGH", days=1, completed=True)
        open_task = make_task("Open", "LOW")

        assert schedule_view([done, open_task]) == [open_task]

    def test_undated_high_outranks_dated_medium(self, make_task):
        dated = make_task("Dated", "MEDIUM", days=1)
        undated = make_task("Undated", "HIGH")

        assert schedule_view([dated, undated]) == [undated, dated]

    def test_null_due_dates_last_within_priority(self, make_task):
        undated = make_task("Undated", "LOW")
        dated = make_task("Dated", "LOW", days=30)

        assert schedule_view([undated, dated]) == [dated, undated]

    def test_full_ties_keep_input_order(self, make_task):
        tasks = [make_task(f"T{i}", "MEDIUM", days=2) for i in range(4)]

        assert schedule_view(tasks) == tasks

    def test_limit_truncates(self, make_task):
        tasks = [make_task(f"T{i}", "LOW", days=i) for i in range(8)]

        assert [t.name for t in schedule_view(tasks, limit=5)] == ["T0", "T1", "T2", "T3", "T4"]
        assert schedule_view(tasks, limit=0) == []

    def test_negative_limit_rejected(self, make_task):
        with pytest.raises(ValueError):
            schedule_view([make_task()], limit=-1)

    def test_returns_new_list(self, make_task):
        tasks = [make_task()]
        assert schedule_view(tasks) is not tasks


class TestOverdue:
    """Overdue is display only."""

    def test_past_due(self, make_task, now):
        assert is_overdue(make_task(days=-1), now)

    def test_future_due(self, make_task, now):
        assert not is_overdue(make_task(days=1), now)

    def test_undated_never_overdue(self, make_task, now):
        assert not is_overdue(make_task(), now)

    def test_completed_never_overdue(self, make_task, now):
        assert not is_overdue(make_task(days=-3, completed=True), now)

    def test_overdue_does_not_affect_order(self, make_task, now):
        overdue_low = make_task("Late", "LOW", days=-10)
        high = make_task("Urgent", "HIGH", days=10)

        assert schedule_view([overdue_low, high]) == [high, overdue_low]


class TestUpcomingTasks:
    """Scheduled tasks decorated for the dashboard."""

    def test_project_titles_and_flags(self, make_task, now):
        project_id = uuid4()
        late = make_task("Late", "HIGH", days=-1, project_id=project_id)
        orphan = make_task("Orphan", "MEDIUM", days=2, project_id=uuid4())

        upcoming = upcoming_tasks([orphan, late], {project_id: "Kitchen"}, now=now)

        assert [u.task.name for u in upcoming] == ["Late", "Orphan"]
        assert upcoming[0].project_title == "Kitchen"
        assert upcoming[0].is_overdue
        assert upcoming[1].project_title == UNKNOWN_PROJECT
        assert not upcoming[1].is_overdue

    def test_default_limit_is_five(self, make_task, now):
        tasks = [make_task(f"T{i}", days=i) for i in range(7)]

        assert len(upcoming_tasks(tasks, {}, now=now)) == 5
