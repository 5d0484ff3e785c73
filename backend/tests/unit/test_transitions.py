"""Unit tests for status transition tables."""

from __future__ import annotations

import pytest

from domain.project.transitions import (
    MATERIAL_STATUS_POLICIES,
    PROJECT_STATUS_POLICY,
    material_status_policy,
)
from domain.shared.exceptions import StatusTransitionException
from domain.shared.value_objects import MaterialStatus, ProjectStatus


class TestProjectLifecycle:
    """PENDING -> IN_PROGRESS -> COMPLETED, CANCELLED from either open state."""

    @pytest.mark.parametrize(
        "current,target",
        [
            (ProjectStatus.PENDING, ProjectStatus.IN_PROGRESS),
            (ProjectStatus.PENDING, ProjectStatus.CANCELLED),
            (ProjectStatus.IN_PROGRESS, ProjectStatus.COMPLETED),
            (ProjectStatus.IN_PROGRESS, ProjectStatus.CANCELLED),
        ],
    )
    def test_allowed(self, current, target):
        assert PROJECT_STATUS_POLICY.allows(current, target)
        PROJECT_STATUS_POLICY.check(current, target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (ProjectStatus.PENDING, ProjectStatus.COMPLETED),
            (ProjectStatus.IN_PROGRESS, ProjectStatus.PENDING),
            (ProjectStatus.COMPLETED, ProjectStatus.IN_PROGRESS),
            (ProjectStatus.CANCELLED, ProjectStatus.PENDING),
        ],
    )
    def test_rejected(self, current, target):
        with pytest.raises(StatusTransitionException) as exc_info:
            PROJECT_STATUS_POLICY.check(current, target)
        assert exc_info.value.code == "INVALID_STATUS_TRANSITION"
        assert exc_info.value.details["current_status"] == current.value

    def test_terminal_states_have_no_exits(self):
        for status in ProjectStatus:
            if status.is_terminal:
                assert PROJECT_STATUS_POLICY.allowed_from(status) == []

    def test_same_status_is_allowed(self):
        assert PROJECT_STATUS_POLICY.allows(ProjectStatus.COMPLETED, ProjectStatus.COMPLETED)

    def test_allowed_from_in_declaration_order(self):
        assert PROJECT_STATUS_POLICY.allowed_from(ProjectStatus.PENDING) == [
            ProjectStatus.IN_PROGRESS,
            ProjectStatus.CANCELLED,
        ]


class TestMaterialPolicies:
    """forward_only and free procurement tables."""

    def test_forward_only_allows_skipping(self):
        policy = material_status_policy("forward_only")
        assert policy.allows(MaterialStatus.SELECTED, MaterialStatus.DELIVERED)

    def test_forward_only_rejects_backward(self):
        policy = material_status_policy()
        with pytest.raises(StatusTransitionException) as exc_info:
            policy.check(MaterialStatus.DELIVERED, MaterialStatus.ORDERED)
        assert exc_info.value.details["allowed_transitions"] == ["INSTALLED"]

    def test_installed_is_final_when_forward_only(self):
        assert material_status_policy().allowed_from(MaterialStatus.INSTALLED) == []

    def test_free_allows_anything(self):
        policy = material_status_policy("free")
        for current in MaterialStatus:
            for target in MaterialStatus:
                assert policy.allows(current, target)

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            material_status_policy("backwards")

    def test_registered_policies(self):
        assert sorted(MATERIAL_STATUS_POLICIES) == ["forward_only", "free"]
