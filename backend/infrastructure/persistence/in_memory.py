"""
In-memory repository implementations.

Stores detached copies: callers always work on their own copy and nothing
reaches the store until save() is called, so a command that fails halfway
leaves stored state untouched.
"""

from copy import deepcopy
from threading import RLock
from typing import Dict, List, Optional
from uuid import UUID

from domain.catalog.entities import Vendor
from domain.catalog.repositories import VendorRepository
from domain.project.aggregates import Project
from domain.project.repositories import ProjectRepository
from domain.shared.value_objects import ProjectStatus


class InMemoryProjectRepository(ProjectRepository):
    """Project store keyed by id, iterated in creation order."""

    def __init__(self):
        self._projects: Dict[UUID, Project] = {}
        self._lock = RLock()

    def get_by_id(self, project_id: UUID) -> Optional[Project]:
        with self._lock:
            project = self._projects.get(project_id)
            return deepcopy(project) if project is not None else None

    def get_all(self, status: Optional[ProjectStatus] = None) -> List[Project]:
        with self._lock:
            return [
                deepcopy(project)
                for project in self._projects.values()
                if status is None or project.status == status
            ]

    def save(self, project: Project) -> Project:
        with self._lock:
            self._projects[project.id] = deepcopy(project)
        return project

    def delete(self, project_id: UUID) -> bool:
        with self._lock:
            return self._projects.pop(project_id, None) is not None


class InMemoryVendorRepository(VendorRepository):
    """Vendor store keyed by id, iterated in insertion order."""

    def __init__(self):
        self._vendors: Dict[UUID, Vendor] = {}
        self._lock = RLock()

    def get_by_id(self, vendor_id: UUID) -> Optional[Vendor]:
        with self._lock:
            vendor = self._vendors.get(vendor_id)
            return deepcopy(vendor) if vendor is not None else None

    def get_all(self) -> List[Vendor]:
        with self._lock:
            return [deepcopy(vendor) for vendor in self._vendors.values()]

    def save(self, vendor: Vendor) -> Vendor:
        with self._lock:
            self._vendors[vendor.id] = deepcopy(vendor)
        return vendor

    def delete(self, vendor_id: UUID) -> bool:
        with self._lock:
            return self._vendors.pop(vendor_id, None) is not None
