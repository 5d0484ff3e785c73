"""
Base Entity class for all domain entities.

An entity is identified by a UUID4 assigned at creation and never reused;
two entities of the same kind with the same id are the same entity.
"""

from __future__ import annotations
from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4


def utc_now() -> datetime:
    """Timezone-aware current time used for all audit stamps."""
    return datetime.now(timezone.utc)


@dataclass(eq=False)
class Entity(ABC):
    """
    Base class for all domain entities.

    created_at and updated_at are audit stamps only; they never take part
    in equality.
    """

    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"

    def touch(self) -> None:
        """Refresh the modification stamp."""
        # Clock skew between created_at and now must never break ordering
        self.updated_at = max(utc_now(), self.created_at)


@dataclass(eq=False)
class VersionedEntity(Entity):
    """
    Entity with a monotonically increasing version counter.
    Every mutating command bumps it, so callers can detect stale snapshots.
    """

    version: int = 1

    def increment_version(self) -> None:
        self.version += 1
        self.touch()
