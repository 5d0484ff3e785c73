"""Unit tests for the demo dataset and the studio_dashboard command."""

from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from application.registry import EntityRegistry
from domain.shared.value_objects import ProjectStatus
from infrastructure.demo_data import DEMO_PROJECTS, DEMO_TASKS, seed_demo_studio


def _run(*args, **options) -> str:
    out = StringIO()
    call_command("studio_dashboard", *args, stdout=out, **options)
    return out.getvalue()


class TestSeedDemoStudio:
    """Demo data goes through the regular commands."""

    def test_seeds_projects_tasks_and_vendors(self):
        registry = EntityRegistry()

        seeded = seed_demo_studio(registry)

        assert len(registry.projects()) == len(DEMO_PROJECTS)
        assert len(registry.schedule_view()) == len(DEMO_TASKS)
        assert [v.name for v in seeded["vendors"]] == [
            "Premium Suppliers",
            "Design Materials Co.",
            "Modern Finishes",
        ]

    def test_progress_and_status(self):
        registry = EntityRegistry()
        seed_demo_studio(registry)

        by_title = {p.title: p for p in registry.projects()}

        assert by_title["Modern Living Room Redesign"].progress == 67
        assert by_title["Master Bedroom Makeover"].progress == 33
        assert by_title["Kitchen Renovation"].status == ProjectStatus.PENDING
        assert by_title["Home Office Setup"].status == ProjectStatus.COMPLETED
        assert by_title["Home Office Setup"].progress == 100

    def test_seeding_with_auto_complete(self):
        registry = EntityRegistry(auto_complete=True)
        seed_demo_studio(registry)

        assert len(registry.projects(ProjectStatus.COMPLETED)) == 1


class TestStudioDashboardCommand:
    """Command output."""

    def test_all_projects(self):
        output = _run()

        assert "Projects (All)" in output
        assert "Modern Living Room Redesign - John Smith [IN PROGRESS] 67%" in output
        assert "[HIGH] Schedule site measurement (Kitchen Renovation" in output
        assert "4 project(s), 4 task(s) shown." in output

    def test_status_filter(self):
        output = _run("--status", "COMPLETED")

        assert "Projects (COMPLETED)" in output
        assert "Home Office Setup" in output
        assert "Kitchen Renovation -" not in output
        assert "1 project(s)" in output

    def test_limit(self):
        output = _run("--limit", "2")

        assert "2 task(s) shown." in output

    def test_negative_limit(self):
        with pytest.raises(CommandError):
            _run("--limit", "-1")
