"""
Entity Registry.

Single entry point for every project command and query. Commands are
applied to a loaded copy of the project aggregate under a per-project
lock; derived aggregates are recomputed before the command returns, and
only then is the project saved and its domain events dispatched.
"""

from __future__ import annotations
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from threading import Lock, RLock
from typing import Callable, Dict, Iterator, List, Optional, Union
from uuid import UUID
import logging

from domain.catalog.entities import Vendor, get_furniture_piece, resolve_vendor_name
from domain.catalog.repositories import VendorRepository
from domain.client.entities import ClientBrief
from domain.project import costing, filters, progress, scheduling
from domain.project.aggregates import Project
from domain.project.entities import (
    ChecklistItem,
    Drawing,
    Material,
    MoodBoardImage,
    Task,
)
from domain.project.repositories import ProjectRepository
from domain.project.transitions import (
    DEFAULT_MATERIAL_POLICY,
    TransitionPolicy,
    material_status_policy,
)
from domain.shared.base_entity import utc_now
from domain.shared.events import DomainEvent
from domain.shared.exceptions import (
    EntityNotFoundException,
    InvalidReferenceException,
)
from domain.shared.value_objects import (
    ALL,
    DesignStyle,
    DrawingType,
    MaterialCategory,
    MaterialStatus,
    ProjectStatus,
    TaskPriority,
    coerce_enum,
)
from infrastructure.persistence.in_memory import (
    InMemoryProjectRepository,
    InMemoryVendorRepository,
)

from .dto import CommandResult, Dashboard, ProjectAggregates

logger = logging.getLogger(__name__)

EntityId = Union[UUID, str]


def _as_uuid(value: EntityId) -> Optional[UUID]:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


def log_event(event: DomainEvent) -> None:
    """Default event dispatcher."""
    logger.debug(f"Domain event {event.event_type}: {event}")


class EntityRegistry:
    """
    Canonical store of projects and vendors plus the command/query API.

    Child entities are addressed by their own id; the registry keeps an
    index from child id to owning project so commands need no project id.
    """

    def __init__(
        self,
        projects: Optional[ProjectRepository] = None,
        vendors: Optional[VendorRepository] = None,
        material_policy: Union[TransitionPolicy, str] = DEFAULT_MATERIAL_POLICY,
        auto_complete: bool = False,
        seed_checklist: bool = True,
        dashboard_limit: int = scheduling.DASHBOARD_TASK_LIMIT,
        dispatch: Callable[[DomainEvent], None] = log_event,
    ):
        self._projects = projects if projects is not None else InMemoryProjectRepository()
        self._vendors = vendors if vendors is not None else InMemoryVendorRepository()
        if isinstance(material_policy, str):
            material_policy = material_status_policy(material_policy)
        self.material_policy = material_policy
        self.auto_complete = auto_complete
        self.seed_checklist = seed_checklist
        self.dashboard_limit = dashboard_limit
        self._dispatch = dispatch

        self._owners: Dict[UUID, UUID] = {}
        self._locks: Dict[UUID, RLock] = {}
        self._locks_guard = Lock()
        self._owners_guard = Lock()

    # =========================================================================
    # INTERNALS
    # =========================================================================

    @contextmanager
    def _project_lock(self, project_id: UUID) -> Iterator[None]:
        """Single writer per project id."""
        with self._locks_guard:
            lock = self._locks.setdefault(project_id, RLock())
        with lock:
            yield

    def _reindex(self) -> None:
        owners: Dict[UUID, UUID] = {}
        for project in self._projects.get_all():
            for entity in (
                project.tasks
                + project.checklist
                + project.drawings
                + project.materials
                + project.mood_board.images
            ):
                owners[entity.id] = project.id
        with self._owners_guard:
            self._owners.update(owners)

    def _index(self, child_id: UUID, project_id: UUID) -> None:
        with self._owners_guard:
            self._owners[child_id] = project_id

    def _unindex(self, child_id: UUID) -> None:
        with self._owners_guard:
            self._owners.pop(child_id, None)

    def _owner_of(self, entity_type: str, entity_id: EntityId) -> UUID:
        key = _as_uuid(entity_id)
        if key is None:
            raise EntityNotFoundException(entity_type, entity_id)
        with self._owners_guard:
            owner = self._owners.get(key)
        if owner is None:
            self._reindex()
            with self._owners_guard:
                owner = self._owners.get(key)
        if owner is None:
            raise EntityNotFoundException(entity_type, entity_id)
        return owner

    def _load(self, project_id: EntityId) -> Project:
        key = _as_uuid(project_id)
        project = self._projects.get_by_id(key) if key is not None else None
        if project is None:
            raise EntityNotFoundException("Project", project_id)
        return project

    def _load_owner(self, entity_type: str, project_id: EntityId) -> Project:
        """Load the project a new child is created in; unknown ids are hard failures."""
        try:
            return self._load(project_id)
        except EntityNotFoundException:
            raise InvalidReferenceException(entity_type, "project_id", project_id)

    def _commit(self, project: Project, entity=None, action: str = "") -> CommandResult:
        """
        Validate and save the project, then dispatch its events.

        The save is final once it returns: a dispatcher that raises is logged
        and the remaining events are still delivered.
        """
        if self.auto_complete:
            project.complete_if_finished()
        project.validate()
        aggregates = self._aggregates(project)
        events = tuple(project.clear_domain_events())
        self._projects.save(project)

        logger.info(
            f"{action or 'command'} on project {project.title!r}: "
            f"progress={aggregates.progress}% status={project.status.value}"
        )
        for event in events:
            try:
                self._dispatch(event)
            except Exception:
                logger.exception(f"Dispatching {event.event_type} failed")

        return CommandResult(
            project=project,
            aggregates=aggregates,
            entity=entity,
            events=events,
        )

    def _vendor_map(self) -> Dict[UUID, Vendor]:
        return {vendor.id: vendor for vendor in self._vendors.get_all()}

    def _aggregates(self, project: Project, now: Optional[datetime] = None) -> ProjectAggregates:
        now = now or utc_now()
        checklist = project.checklist
        materials = project.materials
        drawings = project.drawings
        open_tasks = [t for t in project.tasks if not t.is_completed]
        return ProjectAggregates(
            project_id=project.id,
            progress=progress.compute_progress(checklist),
            category_progress=tuple(progress.category_progress(checklist).items()),
            total_cost=costing.total_cost(materials),
            cost_by_status=tuple(costing.cost_by_status(materials).items()),
            budget_remaining=costing.budget_remaining(project.budget, materials),
            open_tasks=len(open_tasks),
            overdue_tasks=len([t for t in open_tasks if t.is_overdue(now)]),
            drawings_total=len(drawings),
            drawings_approved=len([d for d in drawings if d.is_approved]),
            can_request_mood_board_approval=project.mood_board.can_request_approval,
        )

    # =========================================================================
    # PROJECT COMMANDS
    # =========================================================================

    def create_project(
        self,
        title: str,
        client_name: str = "",
        space_type: str = "",
        description: Optional[str] = None,
    ) -> CommandResult:
        project = Project.create(
            title=title,
            client_name=client_name,
            space_type=space_type,
            description=description,
            seed_checklist=self.seed_checklist,
        )
        with self._project_lock(project.id):
            result = self._commit(project, project, "create_project")
            self._index_project(project)
            return result

    def open_project(self, brief: ClientBrief, title: Optional[str] = None) -> CommandResult:
        """Open a PENDING project from a client intake brief."""
        project = Project.from_brief(brief, title=title, seed_checklist=self.seed_checklist)
        with self._project_lock(project.id):
            result = self._commit(project, project, "open_project")
            self._index_project(project)
            return result

    def _index_project(self, project: Project) -> None:
        for item in project.checklist:
            self._index(item.id, project.id)

    def change_project_status(
        self,
        project_id: EntityId,
        status: Union[ProjectStatus, str],
    ) -> CommandResult:
        project = self._load(project_id)
        with self._project_lock(project.id):
            project = self._load(project.id)
            project.change_status(status)
            return self._commit(project, project, "change_project_status")

    def delete_project(self, project_id: EntityId) -> bool:
        """Delete a project and every entity it owns."""
        project = self._load(project_id)
        with self._project_lock(project.id):
            deleted = self._projects.delete(project.id)
            with self._owners_guard:
                for child in [c for c, owner in self._owners.items() if owner == project.id]:
                    del self._owners[child]
        with self._locks_guard:
            self._locks.pop(project.id, None)
        logger.info(f"Deleted project {project.title!r}")
        return deleted

    # =========================================================================
    # TASK COMMANDS
    # =========================================================================

    def add_task(
        self,
        project_id: EntityId,
        name: str,
        priority: Union[TaskPriority, str] = TaskPriority.MEDIUM,
        due_date: Optional[datetime] = None,
        assigned_to: str = "",
        notes: str = "",
        start_date: Optional[datetime] = None,
    ) -> CommandResult:
        task = Task(
            name=name,
            priority=priority,
            due_date=due_date,
            assigned_to=assigned_to,
            notes=notes,
            start_date=start_date,
        )
        project = self._load_owner("Task", project_id)
        with self._project_lock(project.id):
            project = self._load(project.id)
            project.add_task(task)
            self._index(task.id, project.id)
            return self._commit(project, task, "add_task")

    def toggle_task(self, task_id: EntityId) -> CommandResult:
        owner = self._owner_of("Task", task_id)
        with self._project_lock(owner):
            project = self._load(owner)
            task = project.toggle_task(_as_uuid(task_id))
            return self._commit(project, task, "toggle_task")

    def delete_task(self, task_id: EntityId) -> CommandResult:
        owner = self._owner_of("Task", task_id)
        with self._project_lock(owner):
            project = self._load(owner)
            task = project.remove_task(_as_uuid(task_id))
            self._unindex(task.id)
            return self._commit(project, task, "delete_task")

    # =========================================================================
    # CHECKLIST COMMANDS
    # =========================================================================

    def add_checklist_item(self, project_id: EntityId, category: str, label: str) -> CommandResult:
        item = ChecklistItem(category=category, label=label)
        project = self._load_owner("ChecklistItem", project_id)
        with self._project_lock(project.id):
            project = self._load(project.id)
            project.add_checklist_item(item)
            self._index(item.id, project.id)
            return self._commit(project, item, "add_checklist_item")

    def toggle_checklist_item(self, item_id: EntityId) -> CommandResult:
        owner = self._owner_of("ChecklistItem", item_id)
        with self._project_lock(owner):
            project = self._load(owner)
            item = project.toggle_checklist_item(_as_uuid(item_id))
            return self._commit(project, item, "toggle_checklist_item")

    def delete_checklist_item(self, item_id: EntityId) -> CommandResult:
        owner = self._owner_of("ChecklistItem", item_id)
        with self._project_lock(owner):
            project = self._load(owner)
            item = project.remove_checklist_item(_as_uuid(item_id))
            self._unindex(item.id)
            return self._commit(project, item, "delete_checklist_item")

    # =========================================================================
    # MATERIAL COMMANDS
    # =========================================================================

    def add_material(
        self,
        project_id: EntityId,
        name: str,
        brand: str,
        category: Union[MaterialCategory, str] = MaterialCategory.FLOORING,
        price: Union[Decimal, int, str] = Decimal('0'),
        quantity: int = 1,
        status: Union[MaterialStatus, str] = MaterialStatus.SELECTED,
        vendor_id: Optional[EntityId] = None,
        image_url: Optional[str] = None,
    ) -> CommandResult:
        vendor_key = _as_uuid(vendor_id) if vendor_id is not None else None
        material = Material(
            name=name,
            brand=brand,
            category=category,
            price=price,
            quantity=quantity,
            status=status,
            vendor_id=vendor_key,
            image_url=image_url,
        )
        if vendor_id is not None and (vendor_key is None or self._vendors.get_by_id(vendor_key) is None):
            logger.warning(f"Material {name!r} references unknown vendor {vendor_id}; shown as Unassigned")
        project = self._load_owner("Material", project_id)
        with self._project_lock(project.id):
            project = self._load(project.id)
            project.add_material(material)
            self._index(material.id, project.id)
            return self._commit(project, material, "add_material")

    def update_material_status(
        self,
        material_id: EntityId,
        status: Union[MaterialStatus, str],
    ) -> CommandResult:
        owner = self._owner_of("Material", material_id)
        with self._project_lock(owner):
            project = self._load(owner)
            material = project.update_material_status(
                _as_uuid(material_id), status, self.material_policy
            )
            return self._commit(project, material, "update_material_status")

    def delete_material(self, material_id: EntityId) -> CommandResult:
        owner = self._owner_of("Material", material_id)
        with self._project_lock(owner):
            project = self._load(owner)
            material = project.remove_material(_as_uuid(material_id))
            self._unindex(material.id)
            return self._commit(project, material, "delete_material")

    # =========================================================================
    # DRAWING COMMANDS
    # =========================================================================

    def add_drawing(
        self,
        project_id: EntityId,
        drawing_type: Union[DrawingType, str],
        file_url: str,
        name: Optional[str] = None,
        file_name: Optional[str] = None,
    ) -> CommandResult:
        """Register an uploaded drawing; the file name stands in for a missing name."""
        drawing = Drawing(
            type=drawing_type,
            name=name or file_name or "",
            file_url=file_url,
        )
        project = self._load_owner("Drawing", project_id)
        with self._project_lock(project.id):
            project = self._load(project.id)
            project.add_drawing(drawing)
            self._index(drawing.id, project.id)
            return self._commit(project, drawing, "add_drawing")

    def toggle_drawing_approval(self, drawing_id: EntityId) -> CommandResult:
        owner = self._owner_of("Drawing", drawing_id)
        with self._project_lock(owner):
            project = self._load(owner)
            drawing = project.toggle_drawing_approval(_as_uuid(drawing_id))
            return self._commit(project, drawing, "toggle_drawing_approval")

    def delete_drawing(self, drawing_id: EntityId) -> CommandResult:
        owner = self._owner_of("Drawing", drawing_id)
        with self._project_lock(owner):
            project = self._load(owner)
            drawing = project.remove_drawing(_as_uuid(drawing_id))
            self._unindex(drawing.id)
            return self._commit(project, drawing, "delete_drawing")

    # =========================================================================
    # MOOD BOARD COMMANDS
    # =========================================================================

    def add_mood_board_image(self, project_id: EntityId, url: str, caption: str = "") -> CommandResult:
        image = MoodBoardImage(url=url, caption=caption)
        project = self._load_owner("MoodBoardImage", project_id)
        with self._project_lock(project.id):
            project = self._load(project.id)
            project.add_mood_board_image(image)
            self._index(image.id, project.id)
            return self._commit(project, image, "add_mood_board_image")

    def update_image_caption(self, image_id: EntityId, caption: str) -> CommandResult:
        owner = self._owner_of("MoodBoardImage", image_id)
        with self._project_lock(owner):
            project = self._load(owner)
            image = project.update_image_caption(_as_uuid(image_id), caption)
            return self._commit(project, image, "update_image_caption")

    def remove_mood_board_image(self, image_id: EntityId) -> CommandResult:
        owner = self._owner_of("MoodBoardImage", image_id)
        with self._project_lock(owner):
            project = self._load(owner)
            image = project.remove_mood_board_image(_as_uuid(image_id))
            self._unindex(image.id)
            return self._commit(project, image, "remove_mood_board_image")

    def set_mood_board_style(self, project_id: EntityId, style: Union[DesignStyle, str]) -> CommandResult:
        project = self._load(project_id)
        with self._project_lock(project.id):
            project = self._load(project.id)
            project.set_mood_board_style(style)
            return self._commit(project, project.mood_board, "set_mood_board_style")

    def request_mood_board_approval(self, project_id: EntityId) -> CommandResult:
        project = self._load(project_id)
        with self._project_lock(project.id):
            project = self._load(project.id)
            project.request_mood_board_approval()
            return self._commit(project, project.mood_board, "request_mood_board_approval")

    def toggle_mood_board_approval(self, project_id: EntityId) -> CommandResult:
        project = self._load(project_id)
        with self._project_lock(project.id):
            project = self._load(project.id)
            project.toggle_mood_board_approval()
            return self._commit(project, project.mood_board, "toggle_mood_board_approval")

    # =========================================================================
    # FURNITURE LAYOUT COMMANDS
    # =========================================================================

    def add_furniture_item(self, project_id: EntityId, piece_type: str) -> CommandResult:
        piece = get_furniture_piece(piece_type)
        project = self._load(project_id)
        with self._project_lock(project.id):
            project = self._load(project.id)
            item = project.add_furniture_item(piece)
            return self._commit(project, item, "add_furniture_item")

    def move_furniture_item(
        self,
        project_id: EntityId,
        item_key: str,
        x: int,
        y: int,
        w: Optional[int] = None,
        h: Optional[int] = None,
    ) -> CommandResult:
        project = self._load(project_id)
        with self._project_lock(project.id):
            project = self._load(project.id)
            item = project.move_furniture_item(item_key, x, y, w, h)
            return self._commit(project, item, "move_furniture_item")

    def remove_furniture_item(self, project_id: EntityId, item_key: str) -> CommandResult:
        project = self._load(project_id)
        with self._project_lock(project.id):
            project = self._load(project.id)
            item = project.remove_furniture_item(item_key)
            return self._commit(project, item, "remove_furniture_item")

    def save_layout(self, project_id: EntityId) -> CommandResult:
        project = self._load(project_id)
        with self._project_lock(project.id):
            project = self._load(project.id)
            project.save_layout()
            return self._commit(project, project.layout, "save_layout")

    def toggle_layout_approval(self, project_id: EntityId) -> CommandResult:
        project = self._load(project_id)
        with self._project_lock(project.id):
            project = self._load(project.id)
            project.toggle_layout_approval()
            return self._commit(project, project.layout, "toggle_layout_approval")

    # =========================================================================
    # VENDOR COMMANDS
    # =========================================================================

    def add_vendor(self, name: str, contact: str = "", address: str = "") -> Vendor:
        vendor = Vendor(name=name, contact=contact, address=address)
        self._vendors.save(vendor)
        logger.info(f"Added vendor {vendor.name!r}")
        return vendor

    def delete_vendor(self, vendor_id: EntityId) -> bool:
        """Remove a vendor; materials keep the dangling reference."""
        key = _as_uuid(vendor_id)
        deleted = key is not None and self._vendors.delete(key)
        if deleted:
            logger.info(f"Deleted vendor {vendor_id}")
        return deleted

    # =========================================================================
    # QUERIES
    # =========================================================================

    def get_project(self, project_id: EntityId) -> Project:
        return self._load(project_id)

    def projects(self, status: Union[ProjectStatus, str, None] = None) -> List[Project]:
        return filters.by_status(self._projects.get_all(), status)

    def vendors(self) -> List[Vendor]:
        return self._vendors.get_all()

    def vendor_name(self, vendor_id: Optional[EntityId]) -> str:
        key = _as_uuid(vendor_id) if vendor_id is not None else None
        return resolve_vendor_name(key, self._vendor_map())

    def compute_progress(self, project_id: EntityId) -> int:
        return progress.compute_progress(self._load(project_id).checklist)

    def all_tasks(self) -> List[Task]:
        tasks: List[Task] = []
        for project in self._projects.get_all():
            tasks.extend(project.tasks)
        return tasks

    def schedule_view(self, limit: Optional[int] = None) -> List[Task]:
        """Incomplete tasks across all projects in scheduling order."""
        return scheduling.schedule_view(self.all_tasks(), limit)

    def upcoming_tasks(
        self,
        limit: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[scheduling.ScheduledTask]:
        projects = self._projects.get_all()
        titles = {p.id: p.title for p in projects}
        tasks = [task for p in projects for task in p.tasks]
        return scheduling.upcoming_tasks(
            tasks,
            titles,
            limit=self.dashboard_limit if limit is None else limit,
            now=now,
        )

    def total_cost(self, project_id: EntityId) -> Decimal:
        return costing.total_cost(self._load(project_id).materials)

    def cost_lines(self, project_id: EntityId) -> List[costing.CostLine]:
        return costing.cost_lines(self._load(project_id).materials, self._vendor_map())

    def by_category(
        self,
        project_id: EntityId,
        category: Union[MaterialCategory, str, None],
    ) -> List[Material]:
        return filters.by_category(self._load(project_id).materials, category)

    def material_board(
        self,
        project_id: EntityId,
        category: Union[MaterialCategory, str, None] = MaterialCategory.FLOORING,
    ) -> filters.MaterialBoard:
        return filters.material_board(self._load(project_id).materials, category)

    def by_type(
        self,
        project_id: EntityId,
        drawing_type: Union[DrawingType, str, None],
    ) -> List[Drawing]:
        return filters.by_type(self._load(project_id).drawings, drawing_type)

    def by_status(self, status: Union[ProjectStatus, str, None]) -> List[Project]:
        return self.projects(status)

    def aggregates(self, project_id: EntityId, now: Optional[datetime] = None) -> ProjectAggregates:
        return self._aggregates(self._load(project_id), now)

    def project_summary(self, project_id: EntityId) -> Dict[str, object]:
        project = self._load(project_id)
        summary = project.get_summary()
        summary["total_cost"] = costing.total_cost(project.materials)
        summary["category_progress"] = progress.category_progress(project.checklist)
        return summary

    def dashboard(
        self,
        status: Union[ProjectStatus, str, None] = None,
        now: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> Dashboard:
        """Projects under the active status filter plus the top upcoming tasks."""
        status_filter = None
        if status is not None and status != ALL:
            status_filter = coerce_enum(ProjectStatus, status, "status")
        projects = self.projects(status_filter)
        return Dashboard(
            status_filter=status_filter,
            projects=tuple(projects),
            upcoming=tuple(self.upcoming_tasks(limit=limit, now=now)),
        )
