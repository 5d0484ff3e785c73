"""
Demo studio dataset.

Seeds a registry with four projects, their upcoming tasks and the vendor
list. Progress is never written directly: each project ticks as many of
its default checklist items as it takes to land near the intended figure.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List

from application.registry import EntityRegistry
from domain.shared.value_objects import ProjectStatus


@dataclass(frozen=True)
class DemoProjectSpec:
    key: str
    title: str
    client_name: str
    space_type: str
    checked_items: int
    status: ProjectStatus


@dataclass(frozen=True)
class DemoTaskSpec:
    project_key: str
    name: str
    due_date: date
    priority: str


DEMO_PROJECTS = [
    DemoProjectSpec('p1', 'Modern Living Room Redesign', 'John Smith', 'Living Room', 6, ProjectStatus.IN_PROGRESS),
    DemoProjectSpec('p2', 'Master Bedroom Makeover', 'Emily Johnson', 'Bedroom', 3, ProjectStatus.IN_PROGRESS),
    DemoProjectSpec('p3', 'Kitchen Renovation', 'Michael Davis', 'Kitchen', 1, ProjectStatus.PENDING),
    DemoProjectSpec('p4', 'Home Office Setup', 'Sarah Wilson', 'Office', 9, ProjectStatus.COMPLETED),
]

DEMO_TASKS = [
    DemoTaskSpec('p1', 'Submit furniture layout for approval', date(2023, 7, 15), 'HIGH'),
    DemoTaskSpec('p1', 'Order main sofa', date(2023, 7, 20), 'MEDIUM'),
    DemoTaskSpec('p2', 'Review mood board with client', date(2023, 7, 12), 'HIGH'),
    DemoTaskSpec('p3', 'Schedule site measurement', date(2023, 7, 10), 'HIGH'),
]

DEMO_VENDORS = [
    ('Premium Suppliers', '+1 (555) 123-4567', '123 Main St, City'),
    ('Design Materials Co.', '+1 (555) 987-6543', '456 Oak St, Town'),
    ('Modern Finishes', '+1 (555) 345-6789', '789 Pine St, Village'),
]


def _advance_to(registry: EntityRegistry, project_id, status: ProjectStatus) -> None:
    if status == ProjectStatus.PENDING:
        return
    registry.change_project_status(project_id, ProjectStatus.IN_PROGRESS)
    if status != ProjectStatus.IN_PROGRESS:
        registry.change_project_status(project_id, status)


def seed_demo_studio(registry: EntityRegistry) -> Dict[str, List]:
    """Populate the registry; returns the created projects and vendors."""
    project_ids = {}
    projects = []
    for spec in DEMO_PROJECTS:
        result = registry.create_project(
            title=spec.title,
            client_name=spec.client_name,
            space_type=spec.space_type,
        )
        project = result.project
        project_ids[spec.key] = project.id

        for item in project.checklist[:spec.checked_items]:
            registry.toggle_checklist_item(item.id)
        _advance_to(registry, project.id, spec.status)

        projects.append(registry.get_project(project.id))

    for spec in DEMO_TASKS:
        registry.add_task(
            project_ids[spec.project_key],
            name=spec.name,
            priority=spec.priority,
            due_date=spec.due_date,
        )

    vendors = [
        registry.add_vendor(name=name, contact=contact, address=address)
        for name, contact, address in DEMO_VENDORS
    ]

    return {'projects': projects, 'vendors': vendors}
