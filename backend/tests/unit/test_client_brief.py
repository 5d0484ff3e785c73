"""Unit tests for client intake.

Validates the intake brief and the project opened from it.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from domain.client.entities import ClientBrief
from domain.project.aggregates import Project
from domain.shared.exceptions import ValidationException
from domain.shared.value_objects import ProjectStatus


def _brief(**overrides) -> ClientBrief:
    data = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "space_type": "Bedroom",
        "size": "220",
        "budget": "9000",
    }
    data.update(overrides)
    return ClientBrief(**data)


class TestClientBrief:
    """Intake form validation."""

    def test_numbers_become_decimals(self):
        brief = _brief(size="220.5", budget=9000)
        assert brief.size == Decimal("220.5")
        assert brief.budget == Decimal("9000")

    def test_default_title(self, brief):
        assert brief.default_project_title == "Kitchen for Jane Doe"

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"name": ""}, "name"),
            ({"name": "   "}, "name"),
            ({"email": ""}, "email"),
            ({"email": "not-an-email"}, "email"),
            ({"email": "jane @example.com"}, "email"),
            ({"space_type": "Garage"}, "space_type"),
            ({"size": "0"}, "size"),
            ({"size": "big"}, "size"),
            ({"budget": "-100"}, "budget"),
            ({"budget": "Infinity"}, "budget"),
        ],
    )
    def test_rejected(self, overrides, field):
        with pytest.raises(ValidationException) as exc_info:
            _brief(**overrides)
        assert exc_info.value.field == field

    def test_brief_is_immutable(self, brief):
        with pytest.raises(AttributeError):
            brief.name = "Someone else"


class TestOpenFromBrief:
    """Projects opened from an intake form."""

    def test_carries_client_data(self, brief):
        project = Project.from_brief(brief)

        assert project.status == ProjectStatus.PENDING
        assert project.title == "Kitchen for Jane Doe"
        assert project.client_name == "Jane Doe"
        assert project.client_email == "jane@example.com"
        assert project.space_type == "Kitchen"
        assert project.budget == Decimal("15000")
        assert project.size == Decimal("180")
        assert project.preferences == "Warm wood, open shelving"
        assert len(project.checklist) == 9

    def test_explicit_title(self, brief):
        assert Project.from_brief(brief, title="Doe Kitchen").title == "Doe Kitchen"
