"""
Application DTOs.

Immutable results handed back to the presentation layer after every
command and query.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Tuple
from uuid import UUID

from domain.project.aggregates import Project
from domain.project.scheduling import ScheduledTask
from domain.shared.events import DomainEvent
from domain.shared.value_objects import MaterialStatus, ProjectStatus


@dataclass(frozen=True)
class ProjectAggregates:
    """Every derived metric of one project, recomputed from current state."""

    project_id: UUID
    progress: int
    category_progress: Tuple[Tuple[str, int], ...]
    total_cost: Decimal
    cost_by_status: Tuple[Tuple[MaterialStatus, Decimal], ...]
    budget_remaining: Optional[Decimal]
    open_tasks: int
    overdue_tasks: int
    drawings_total: int
    drawings_approved: int
    can_request_mood_board_approval: bool


@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of a registry command.

    project is a detached copy of the updated aggregate; entity is the
    child the command created, changed or removed, if any.
    """

    project: Project
    aggregates: ProjectAggregates
    entity: Any = None
    events: Tuple[DomainEvent, ...] = ()


@dataclass(frozen=True)
class Dashboard:
    """Projects matching the active filter plus the most urgent tasks."""

    status_filter: Optional[ProjectStatus]
    projects: Tuple[Project, ...]
    upcoming: Tuple[ScheduledTask, ...]
