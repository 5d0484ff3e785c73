"""Pytest configuration and fixtures for studio tests.

Provides registries, projects and entity factories shared by the unit tests.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from application.registry import EntityRegistry
from domain.catalog.entities import Vendor
from domain.client.entities import ClientBrief
from domain.project.aggregates import Project
from domain.project.entities import ChecklistItem, Material, Task


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for overdue checks."""
    return datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_task(now: datetime):
    """Factory for tasks due a number of days from `now`."""

    def _make(name="Task", priority="MEDIUM", days=None, completed=False, project_id=None):
        due = now + timedelta(days=days) if days is not None else None
        return Task(
            name=name,
            priority=priority,
            due_date=due,
            is_completed=completed,
            project_id=project_id,
        )

    return _make


@pytest.fixture
def make_material():
    """Factory for materials with sensible defaults."""

    def _make(name="Oak Plank", price="100", quantity=1, **kwargs):
        kwargs.setdefault("brand", "Acme")
        return Material(name=name, price=Decimal(price), quantity=quantity, **kwargs)

    return _make


@pytest.fixture
def checklist() -> list:
    """Three items over two categories, one of them checked."""
    return [
        ChecklistItem(category="Electrical", label="Layout Marked", is_checked=True),
        ChecklistItem(category="Electrical", label="Wiring Installed"),
        ChecklistItem(category="Ceiling", label="Frame Installed"),
    ]


@pytest.fixture
def vendor() -> Vendor:
    return Vendor(name="Premium Suppliers", contact="+1 (555) 123-4567", address="123 Main St, City")


@pytest.fixture
def brief() -> ClientBrief:
    """A valid client intake form."""
    return ClientBrief(
        name="Jane Doe",
        email="jane@example.com",
        space_type="Kitchen",
        size=Decimal("180"),
        budget=Decimal("15000"),
        preferences="Warm wood, open shelving",
    )


@pytest.fixture
def project() -> Project:
    """A project with the default checklist and no pending events."""
    project = Project.create(
        title="Modern Living Room Redesign",
        client_name="John Smith",
        space_type="Living Room",
    )
    project.clear_domain_events()
    return project


@pytest.fixture
def events() -> list:
    """Collects dispatched domain events."""
    return []


@pytest.fixture
def registry(events: list) -> EntityRegistry:
    """A fresh registry with default policies recording its events."""
    return EntityRegistry(dispatch=events.append)


@pytest.fixture
def project_id(registry: EntityRegistry):
    """Id of a PENDING project stored in `registry`."""
    result = registry.create_project(
        title="Master Bedroom Makeover",
        client_name="Emily Johnson",
        space_type="Bedroom",
    )
    return result.project.id
