"""
Project Domain - Aggregates.

Project is the main aggregate root. It exclusively owns its tasks,
checklist, drawings, materials, mood board and furniture layout.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from domain.catalog.entities import FurniturePiece
from domain.client.entities import ClientBrief
from domain.shared.base_aggregate import AggregateRoot
from domain.shared.base_entity import utc_now
from domain.shared.events import (
    ChecklistItemToggled,
    DrawingApprovalToggled,
    LayoutSaved,
    MaterialAdded,
    MaterialRemoved,
    MaterialStatusChanged,
    MoodBoardApprovalRequested,
    ProgressUpdated,
    ProjectCreated,
    ProjectStatusChanged,
    TaskAdded,
    TaskCompletionToggled,
)
from domain.shared.exceptions import (
    BusinessRuleViolationException,
    EntityNotFoundException,
    ValidationException,
)
from domain.shared.value_objects import (
    DesignStyle,
    MaterialStatus,
    ProjectStatus,
    coerce_enum,
)

from .entities import (
    ChecklistItem,
    Drawing,
    FurnitureItem,
    FurnitureLayout,
    Material,
    MoodBoard,
    MoodBoardImage,
    Task,
)
from .progress import compute_progress, default_checklist
from .transitions import PROJECT_STATUS_POLICY, TransitionPolicy


@dataclass(eq=False)
class Project(AggregateRoot):
    """
    Project - the aggregate root of an interior design engagement.

    Key responsibilities:
    - Track lifecycle status through the project transition table
    - Own every child entity and keep child ids unique within the project
    - Keep progress in sync with the execution checklist after every change
    """

    # Identification
    title: str = ""
    client_name: str = ""
    space_type: str = ""
    description: Optional[str] = None

    # Client brief
    client_email: Optional[str] = None
    size: Optional[Decimal] = None
    budget: Optional[Decimal] = None
    preferences: str = ""

    # Status
    status: ProjectStatus = ProjectStatus.PENDING

    # Progress (derived from the checklist only)
    progress: int = 0

    # Owned entities
    _tasks: List[Task] = field(default_factory=list, repr=False)
    _checklist: List[ChecklistItem] = field(default_factory=list, repr=False)
    _drawings: List[Drawing] = field(default_factory=list, repr=False)
    _materials: List[Material] = field(default_factory=list, repr=False)
    mood_board: MoodBoard = field(default_factory=MoodBoard, repr=False)
    layout: FurnitureLayout = field(default_factory=FurnitureLayout, repr=False)

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValidationException("Project title is required", "title")
        self.status = coerce_enum(ProjectStatus, self.status, "status")
        self.progress = compute_progress(self._checklist)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def tasks(self) -> List[Task]:
        return self._tasks.copy()

    @property
    def checklist(self) -> List[ChecklistItem]:
        return self._checklist.copy()

    @property
    def drawings(self) -> List[Drawing]:
        return self._drawings.copy()

    @property
    def materials(self) -> List[Material]:
        return self._materials.copy()

    @property
    def is_completed(self) -> bool:
        return self.status == ProjectStatus.COMPLETED

    @property
    def is_finished(self) -> bool:
        """Every checklist item is ticked."""
        return self.progress == 100

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    @staticmethod
    def _find(entities: List[Any], entity_id: UUID, entity_type: str):
        for entity in entities:
            if entity.id == entity_id:
                return entity
        raise EntityNotFoundException(entity_type, entity_id)

    def get_task(self, task_id: UUID) -> Task:
        return self._find(self._tasks, task_id, "Task")

    def get_checklist_item(self, item_id: UUID) -> ChecklistItem:
        return self._find(self._checklist, item_id, "ChecklistItem")

    def get_drawing(self, drawing_id: UUID) -> Drawing:
        return self._find(self._drawings, drawing_id, "Drawing")

    def get_material(self, material_id: UUID) -> Material:
        return self._find(self._materials, material_id, "Material")

    # =========================================================================
    # STATUS MANAGEMENT
    # =========================================================================

    def change_status(
        self,
        new_status: ProjectStatus,
        policy: TransitionPolicy = PROJECT_STATUS_POLICY,
        automatic: bool = False,
    ) -> None:
        """Change project status with validation."""
        new_status = coerce_enum(ProjectStatus, new_status, "status")
        if new_status == self.status:
            return

        policy.check(self.status, new_status)

        old_status = self.status
        self.status = new_status
        self.increment_version()

        self.add_domain_event(ProjectStatusChanged(
            project_id=self.id,
            old_status=old_status.value,
            new_status=new_status.value,
            automatic=automatic,
        ))

    def start(self) -> None:
        self.change_status(ProjectStatus.IN_PROGRESS)

    def complete_if_finished(self) -> bool:
        """
        Advance an in-progress project to COMPLETED once progress hits 100%.

        Only called when the caller opted into coupling progress and status.
        """
        if self.is_finished and self.status == ProjectStatus.IN_PROGRESS:
            self.change_status(ProjectStatus.COMPLETED, automatic=True)
            return True
        return False

    # =========================================================================
    # PROGRESS
    # =========================================================================

    def refresh_progress(self) -> int:
        """Recalculate progress from the checklist; the only writer of progress."""
        old_progress = self.progress
        self.progress = compute_progress(self._checklist)

        if old_progress != self.progress:
            self.add_domain_event(ProgressUpdated(
                project_id=self.id,
                old_progress=old_progress,
                new_progress=self.progress,
            ))
        return self.progress

    # =========================================================================
    # TASKS
    # =========================================================================

    def add_task(self, task: Task) -> Task:
        task.project_id = self.id
        self._tasks.append(task)
        self.increment_version()
        self.add_domain_event(TaskAdded(
            project_id=self.id,
            task_id=task.id,
            priority=task.priority.value,
        ))
        return task

    def toggle_task(self, task_id: UUID) -> Task:
        task = self.get_task(task_id)
        task.toggle()
        self.increment_version()
        self.add_domain_event(TaskCompletionToggled(
            project_id=self.id,
            task_id=task.id,
            is_completed=task.is_completed,
        ))
        return task

    def remove_task(self, task_id: UUID) -> Task:
        task = self.get_task(task_id)
        self._tasks.remove(task)
        self.increment_version()
        return task

    # =========================================================================
    # CHECKLIST
    # =========================================================================

    def add_checklist_item(self, item: ChecklistItem) -> ChecklistItem:
        self._checklist.append(item)
        self.increment_version()
        self.refresh_progress()
        return item

    def toggle_checklist_item(self, item_id: UUID) -> ChecklistItem:
        item = self.get_checklist_item(item_id)
        item.toggle()
        self.increment_version()
        self.add_domain_event(ChecklistItemToggled(
            project_id=self.id,
            item_id=item.id,
            is_checked=item.is_checked,
        ))
        self.refresh_progress()
        return item

    def remove_checklist_item(self, item_id: UUID) -> ChecklistItem:
        item = self.get_checklist_item(item_id)
        self._checklist.remove(item)
        self.increment_version()
        self.refresh_progress()
        return item

    def seed_default_checklist(self) -> None:
        for item in default_checklist():
            self._checklist.append(item)
        self.refresh_progress()

    # =========================================================================
    # MATERIALS
    # =========================================================================

    def add_material(self, material: Material) -> Material:
        self._materials.append(material)
        self.increment_version()
        self.add_domain_event(MaterialAdded(
            project_id=self.id,
            material_id=material.id,
            category=material.category.value,
        ))
        return material

    def update_material_status(
        self,
        material_id: UUID,
        new_status: MaterialStatus,
        policy: TransitionPolicy,
    ) -> Material:
        material = self.get_material(material_id)
        old_status = material.update_status(new_status, policy)
        if old_status != material.status:
            self.increment_version()
            self.add_domain_event(MaterialStatusChanged(
                project_id=self.id,
                material_id=material.id,
                old_status=old_status.value,
                new_status=material.status.value,
            ))
        return material

    def remove_material(self, material_id: UUID) -> Material:
        material = self.get_material(material_id)
        self._materials.remove(material)
        self.increment_version()
        self.add_domain_event(MaterialRemoved(
            project_id=self.id,
            material_id=material.id,
        ))
        return material

    # =========================================================================
    # DRAWINGS
    # =========================================================================

    def add_drawing(self, drawing: Drawing) -> Drawing:
        self._drawings.append(drawing)
        self.increment_version()
        return drawing

    def toggle_drawing_approval(self, drawing_id: UUID) -> Drawing:
        drawing = self.get_drawing(drawing_id)
        drawing.toggle_approval()
        self.increment_version()
        self.add_domain_event(DrawingApprovalToggled(
            project_id=self.id,
            drawing_id=drawing.id,
            is_approved=drawing.is_approved,
        ))
        return drawing

    def remove_drawing(self, drawing_id: UUID) -> Drawing:
        drawing = self.get_drawing(drawing_id)
        self._drawings.remove(drawing)
        self.increment_version()
        return drawing

    # =========================================================================
    # MOOD BOARD
    # =========================================================================

    def add_mood_board_image(self, image: MoodBoardImage) -> MoodBoardImage:
        self.mood_board.add_image(image)
        self.increment_version()
        return image

    def remove_mood_board_image(self, image_id: UUID) -> MoodBoardImage:
        image = self.mood_board.remove_image(image_id)
        self.increment_version()
        return image

    def update_image_caption(self, image_id: UUID, caption: str) -> MoodBoardImage:
        image = self.mood_board.update_caption(image_id, caption)
        self.increment_version()
        return image

    def set_mood_board_style(self, style: DesignStyle) -> None:
        self.mood_board.set_style(style)
        self.increment_version()

    def request_mood_board_approval(self) -> None:
        """Send the mood board to the client. Needs at least one image."""
        if not self.mood_board.can_request_approval:
            raise BusinessRuleViolationException(
                "MOOD_BOARD_EMPTY",
                "Cannot request approval for an empty mood board"
            )
        self.mood_board.approval_requested_at = utc_now()
        self.mood_board.increment_version()
        self.increment_version()
        self.add_domain_event(MoodBoardApprovalRequested(
            project_id=self.id,
            image_count=len(self.mood_board.images),
            style=self.mood_board.style.value,
        ))

    def toggle_mood_board_approval(self) -> bool:
        approved = self.mood_board.toggle_approval()
        self.increment_version()
        return approved

    # =========================================================================
    # FURNITURE LAYOUT
    # =========================================================================

    def add_furniture_item(self, piece: FurniturePiece) -> FurnitureItem:
        item = self.layout.add_item(piece.type, piece.label, piece.w, piece.h)
        self.increment_version()
        return item

    def move_furniture_item(
        self,
        item_key: str,
        x: int,
        y: int,
        w: Optional[int] = None,
        h: Optional[int] = None,
    ) -> FurnitureItem:
        item = self.layout.get_item(item_key)
        item.move(x, y, w, h)
        self.increment_version()
        return item

    def remove_furniture_item(self, item_key: str) -> FurnitureItem:
        item = self.layout.remove_item(item_key)
        self.increment_version()
        return item

    def save_layout(self) -> int:
        version = self.layout.save()
        self.increment_version()
        self.add_domain_event(LayoutSaved(
            project_id=self.id,
            version=version,
            item_count=len(self.layout.items),
        ))
        return version

    def toggle_layout_approval(self) -> bool:
        approved = self.layout.toggle_approval()
        self.increment_version()
        return approved

    # =========================================================================
    # SUMMARY
    # =========================================================================

    def get_summary(self) -> Dict[str, Any]:
        """Snapshot of the project's own counters (no cross-project data)."""
        open_tasks = [t for t in self._tasks if not t.is_completed]
        return {
            "progress": self.progress,
            "status": self.status.value,
            "checklist_total": len(self._checklist),
            "checklist_checked": len([i for i in self._checklist if i.is_checked]),
            "open_tasks": len(open_tasks),
            "overdue_tasks": len([t for t in open_tasks if t.is_overdue()]),
            "drawings_total": len(self._drawings),
            "drawings_approved": len([d for d in self._drawings if d.is_approved]),
            "materials_total": len(self._materials),
            "mood_board_images": len(self.mood_board.images),
            "layout_items": len(self.layout.items),
        }

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def validate(self) -> None:
        """Validate aggregate invariants."""
        if not self.title:
            raise ValidationException("Project title is required", "title")
        if not (0 <= self.progress <= 100):
            raise ValidationException("Progress must be between 0 and 100", "progress", self.progress)
        if self.updated_at < self.created_at:
            raise ValidationException("updated_at precedes created_at", "updated_at")

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def create(
        cls,
        title: str,
        client_name: str = "",
        space_type: str = "",
        description: Optional[str] = None,
        seed_checklist: bool = True,
    ) -> Project:
        """Factory method to create a new project."""
        project = cls(
            title=title,
            client_name=client_name,
            space_type=space_type,
            description=description,
        )
        if seed_checklist:
            project.seed_default_checklist()
        project.clear_domain_events()

        project.add_domain_event(ProjectCreated(
            project_id=project.id,
            title=project.title,
            client_name=client_name,
        ))

        return project

    @classmethod
    def from_brief(
        cls,
        brief: ClientBrief,
        title: Optional[str] = None,
        seed_checklist: bool = True,
    ) -> Project:
        """Open a project from a submitted intake form."""
        project = cls.create(
            title=title or brief.default_project_title,
            client_name=brief.name.strip(),
            space_type=brief.space_type,
            seed_checklist=seed_checklist,
        )
        project.client_email = brief.email
        project.size = brief.size
        project.budget = brief.budget
        project.preferences = brief.preferences
        return project
