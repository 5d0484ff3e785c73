"""
Project Domain - Repository Interfaces.

The core treats persistence as synchronous and atomic per call; an
asynchronous store wraps these behind its own adapter.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from domain.shared.value_objects import ProjectStatus

from .aggregates import Project


class ProjectRepository(ABC):
    """Repository interface for Project aggregate (with all owned entities)."""

    @abstractmethod
    def get_by_id(self, project_id: UUID) -> Optional[Project]:
        """Load a project and every entity it owns."""
        pass

    @abstractmethod
    def get_all(self, status: Optional[ProjectStatus] = None) -> List[Project]:
        """Get all projects in creation order, optionally filtered by status."""
        pass

    @abstractmethod
    def save(self, project: Project) -> Project:
        """Persist project with its owned entities."""
        pass

    @abstractmethod
    def delete(self, project_id: UUID) -> bool:
        """Delete project and, by cascade, everything it owns."""
        pass
