"""
Project Domain - Task scheduling view.

Orders incomplete tasks by urgency. The ordering is a pure function of the
task set, so any consumer can recompute it at any time with its own budget.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Mapping, Optional, Tuple
from uuid import UUID

from domain.shared.base_entity import utc_now

from .entities import Task


# Number of tasks the dashboard shows
DASHBOARD_TASK_LIMIT = 5

UNKNOWN_PROJECT = "Unknown Project"


def schedule_key(task: Task) -> Tuple:
    """
    Priority rank first, then due date with undated tasks last.

    A HIGH task without a due date still outranks a dated MEDIUM task.
    """
    return (task.priority.rank, task.due_date is None, task.due_date)


def schedule_view(tasks: Iterable[Task], limit: Optional[int] = None) -> List[Task]:
    """
    Incomplete tasks in scheduling order, optionally truncated to limit.

    sorted() is stable, so tasks with identical keys keep their input order.
    """
    if limit is not None and limit < 0:
        raise ValueError("limit cannot be negative")
    ordered = sorted(
        (task for task in tasks if not task.is_completed),
        key=schedule_key,
    )
    return ordered if limit is None else ordered[:limit]


def is_overdue(task: Task, now: Optional[datetime] = None) -> bool:
    return task.is_overdue(now)


@dataclass(frozen=True)
class ScheduledTask:
    """A scheduled task decorated for the dashboard."""

    task: Task
    project_title: str
    is_overdue: bool


def upcoming_tasks(
    tasks: Iterable[Task],
    project_titles: Mapping[UUID, str],
    limit: Optional[int] = DASHBOARD_TASK_LIMIT,
    now: Optional[datetime] = None,
) -> List[ScheduledTask]:
    """Scheduled tasks with their project title and overdue flag."""
    now = now or utc_now()
    return [
        ScheduledTask(
            task=task,
            project_title=project_titles.get(task.project_id, UNKNOWN_PROJECT),
            is_overdue=task.is_overdue(now),
        )
        for task in schedule_view(tasks, limit)
    ]
