"""
Base Aggregate Root class.

An aggregate root owns a cluster of entities and is loaded, mutated and
saved as one unit. Mutations record domain events on the root; the
registry drains them after a successful save.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from .base_entity import VersionedEntity
from .events import DomainEvent


@dataclass(eq=False)
class AggregateRoot(VersionedEntity):
    """
    Base class for aggregate roots.

    Children are reached only through the root, so the root can keep
    derived fields in sync and check cross-entity invariants in validate().
    """

    _domain_events: List[DomainEvent] = field(default_factory=list, repr=False)

    def add_domain_event(self, event: DomainEvent) -> None:
        self._domain_events.append(event)

    def clear_domain_events(self) -> List[DomainEvent]:
        """Drain pending events in the order they were recorded."""
        events, self._domain_events = self._domain_events, []
        return events

    @property
    def domain_events(self) -> List[DomainEvent]:
        return list(self._domain_events)

    def validate(self) -> None:
        """Raise a DomainException when an invariant does not hold."""
