"""
Project Domain - Status transition tables.

Every status machine is an explicit table of allowed {from: {to, ...}}
pairs wrapped in a TransitionPolicy. Call sites only ever ask a policy to
check a move, so a policy can be swapped without touching them.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Mapping

from domain.shared.exceptions import StatusTransitionException
from domain.shared.value_objects import MaterialStatus, ProjectStatus


# Valid project status transitions
PROJECT_STATUS_TRANSITIONS: Dict[ProjectStatus, FrozenSet[ProjectStatus]] = {
    ProjectStatus.PENDING: frozenset({ProjectStatus.IN_PROGRESS, ProjectStatus.CANCELLED}),
    ProjectStatus.IN_PROGRESS: frozenset({ProjectStatus.COMPLETED, ProjectStatus.CANCELLED}),
    ProjectStatus.COMPLETED: frozenset(),  # No transitions from completed
    ProjectStatus.CANCELLED: frozenset(),  # No transitions from cancelled
}

# Procurement only moves forward, stages may be skipped
MATERIAL_FORWARD_TRANSITIONS: Dict[MaterialStatus, FrozenSet[MaterialStatus]] = {
    current: frozenset(s for s in MaterialStatus if s.stage > current.stage)
    for current in MaterialStatus
}

# Any stage may be picked at any time
MATERIAL_FREE_TRANSITIONS: Dict[MaterialStatus, FrozenSet[MaterialStatus]] = {
    current: frozenset(s for s in MaterialStatus if s is not current)
    for current in MaterialStatus
}


@dataclass(frozen=True)
class TransitionPolicy:
    """A named transition table for one entity type."""

    name: str
    entity_type: str
    table: Mapping[Enum, FrozenSet[Enum]]

    def allowed_from(self, current: Enum) -> List[Enum]:
        """Targets reachable from current, in declaration order."""
        targets = self.table.get(current, frozenset())
        return [status for status in type(current) if status in targets]

    def allows(self, current: Enum, target: Enum) -> bool:
        if current == target:
            return True
        return target in self.table.get(current, frozenset())

    def check(self, current: Enum, target: Enum) -> None:
        """Raise StatusTransitionException when the move is not in the table."""
        if not self.allows(current, target):
            raise StatusTransitionException(
                self.entity_type,
                current.value,
                target.value,
                [s.value for s in self.allowed_from(current)]
            )


PROJECT_STATUS_POLICY = TransitionPolicy(
    name="lifecycle",
    entity_type="Project",
    table=PROJECT_STATUS_TRANSITIONS,
)

MATERIAL_STATUS_POLICIES: Dict[str, TransitionPolicy] = {
    "forward_only": TransitionPolicy(
        name="forward_only",
        entity_type="Material",
        table=MATERIAL_FORWARD_TRANSITIONS,
    ),
    "free": TransitionPolicy(
        name="free",
        entity_type="Material",
        table=MATERIAL_FREE_TRANSITIONS,
    ),
}

DEFAULT_MATERIAL_POLICY = "forward_only"


def material_status_policy(name: str = DEFAULT_MATERIAL_POLICY) -> TransitionPolicy:
    """Look up a material status policy by its configured name."""
    try:
        return MATERIAL_STATUS_POLICIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown material status policy '{name}', "
            f"expected one of {sorted(MATERIAL_STATUS_POLICIES)}"
        )
