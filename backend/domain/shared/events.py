"""
Domain Events.

Domain events are records of significant business occurrences.
The registry collects them from aggregates after every command and hands
them to its dispatcher (logging by default).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from .base_entity import utc_now


@dataclass(frozen=True)
class DomainEvent:
    """
    Base class for all domain events.

    Domain events are immutable records of something that happened in the domain.
    They are used for:
    - Triggering side effects (notifications, recalculations)
    - Audit trail
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=utc_now)

    @property
    def event_type(self) -> str:
        """Get the event type name."""
        return self.__class__.__name__


# =============================================================================
# PROJECT EVENTS
# =============================================================================

@dataclass(frozen=True)
class ProjectCreated(DomainEvent):
    """Event raised when a project is opened from a client brief."""

    project_id: Optional[UUID] = None
    title: str = ""
    client_name: str = ""


@dataclass(frozen=True)
class ProjectStatusChanged(DomainEvent):
    """Event raised when project status changes."""

    project_id: Optional[UUID] = None
    old_status: str = ""
    new_status: str = ""
    automatic: bool = False


@dataclass(frozen=True)
class ProgressUpdated(DomainEvent):
    """Event raised when the checklist-derived progress changes."""

    project_id: Optional[UUID] = None
    old_progress: int = 0
    new_progress: int = 0


# =============================================================================
# EXECUTION EVENTS
# =============================================================================

@dataclass(frozen=True)
class TaskAdded(DomainEvent):
    project_id: Optional[UUID] = None
    task_id: Optional[UUID] = None
    priority: str = ""


@dataclass(frozen=True)
class TaskCompletionToggled(DomainEvent):
    project_id: Optional[UUID] = None
    task_id: Optional[UUID] = None
    is_completed: bool = False


@dataclass(frozen=True)
class ChecklistItemToggled(DomainEvent):
    project_id: Optional[UUID] = None
    item_id: Optional[UUID] = None
    is_checked: bool = False


# =============================================================================
# PROCUREMENT EVENTS
# =============================================================================

@dataclass(frozen=True)
class MaterialAdded(DomainEvent):
    project_id: Optional[UUID] = None
    material_id: Optional[UUID] = None
    category: str = ""


@dataclass(frozen=True)
class MaterialStatusChanged(DomainEvent):
    """Event raised when a material moves through procurement stages."""

    project_id: Optional[UUID] = None
    material_id: Optional[UUID] = None
    old_status: str = ""
    new_status: str = ""


@dataclass(frozen=True)
class MaterialRemoved(DomainEvent):
    project_id: Optional[UUID] = None
    material_id: Optional[UUID] = None


# =============================================================================
# DESIGN EVENTS
# =============================================================================

@dataclass(frozen=True)
class DrawingApprovalToggled(DomainEvent):
    project_id: Optional[UUID] = None
    drawing_id: Optional[UUID] = None
    is_approved: bool = False


@dataclass(frozen=True)
class MoodBoardApprovalRequested(DomainEvent):
    """Event raised when the mood board is sent to the client for approval."""

    project_id: Optional[UUID] = None
    image_count: int = 0
    style: str = ""


@dataclass(frozen=True)
class LayoutSaved(DomainEvent):
    project_id: Optional[UUID] = None
    version: int = 1
    item_count: int = 0
