"""
Project Domain - Entities.

Entities owned by exactly one Project: execution tasks, checklist items,
working drawings, materials, the mood board and the furniture layout.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation
from typing import List, Optional
from uuid import UUID

from domain.shared.base_entity import Entity, VersionedEntity, utc_now
from domain.shared.exceptions import EntityNotFoundException, ValidationException
from domain.shared.value_objects import (
    DesignStyle,
    DrawingType,
    MaterialCategory,
    MaterialStatus,
    TaskPriority,
    coerce_enum,
)

from .transitions import TransitionPolicy


def as_utc_datetime(value) -> Optional[datetime]:
    """Normalise dates and naive datetimes to aware UTC datetimes."""
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    raise ValidationException("Expected a date or datetime", "date", value)


def _required(value: str, field_name: str, message: str) -> None:
    if value is None or not str(value).strip():
        raise ValidationException(message, field_name)


@dataclass(eq=False)
class Task(VersionedEntity):
    """
    An execution task of a project.

    Dashboard tasks and on-site execution tasks are the same entity: the
    dashboard reads priority and due date, the execution tracker reads
    assignment, notes and the start/completion stamps.
    """

    project_id: Optional[UUID] = None
    name: str = ""
    due_date: Optional[datetime] = None
    is_completed: bool = False
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_to: str = ""
    notes: str = ""
    start_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def __post_init__(self):
        _required(self.name, "name", "Task name is required")
        self.priority = coerce_enum(TaskPriority, self.priority, "priority")
        self.due_date = as_utc_datetime(self.due_date)
        self.start_date = as_utc_datetime(self.start_date)
        self.completed_at = as_utc_datetime(self.completed_at)

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        """Check if task is overdue. Display only, never affects ordering."""
        if self.is_completed or self.due_date is None:
            return False
        return self.due_date < (as_utc_datetime(now) or utc_now())

    def toggle(self) -> bool:
        """Flip completion and stamp or clear the completion time."""
        self.is_completed = not self.is_completed
        self.completed_at = utc_now() if self.is_completed else None
        self.increment_version()
        return self.is_completed


@dataclass(eq=False)
class ChecklistItem(VersionedEntity):
    """
    A binary unit of on-site execution work.

    category is a free-form grouping key, not a foreign entity.
    """

    category: str = ""
    label: str = ""
    is_checked: bool = False

    def __post_init__(self):
        _required(self.category, "category", "Checklist category is required")
        _required(self.label, "label", "Checklist label is required")

    def toggle(self) -> bool:
        self.is_checked = not self.is_checked
        self.increment_version()
        return self.is_checked


@dataclass(eq=False)
class Drawing(VersionedEntity):
    """A working drawing. Approval is a manual, reversible flag."""

    type: DrawingType = DrawingType.ELECTRICAL
    name: str = ""
    file_url: str = ""
    upload_date: datetime = field(default_factory=utc_now)
    is_approved: bool = False

    def __post_init__(self):
        self.type = coerce_enum(DrawingType, self.type, "type")
        _required(self.name, "name", "Drawing name is required")
        _required(self.file_url, "file_url", "Drawing file is required")

    def toggle_approval(self) -> bool:
        self.is_approved = not self.is_approved
        self.increment_version()
        return self.is_approved


@dataclass(eq=False)
class Material(VersionedEntity):
    """
    A material selected for a project.

    vendor_id is a plain reference to a shared Vendor and may dangle.
    """

    name: str = ""
    category: MaterialCategory = MaterialCategory.FLOORING
    brand: str = ""
    price: Decimal = Decimal('0')
    quantity: int = 1
    status: MaterialStatus = MaterialStatus.SELECTED
    vendor_id: Optional[UUID] = None
    image_url: Optional[str] = None

    def __post_init__(self):
        _required(self.name, "name", "Material name is required")
        _required(self.brand, "brand", "Brand is required")
        self.category = coerce_enum(MaterialCategory, self.category, "category")
        self.status = coerce_enum(MaterialStatus, self.status, "status")
        self.price = self._clean_price(self.price)
        self.quantity = self._clean_quantity(self.quantity)

    @staticmethod
    def _clean_price(raw) -> Decimal:
        try:
            price = Decimal(str(raw))
        except (InvalidOperation, ValueError):
            raise ValidationException("Price must be a number", "price", raw)
        if not price.is_finite() or price < 0:
            raise ValidationException("Price cannot be negative", "price", raw)
        return price

    @staticmethod
    def _clean_quantity(raw) -> int:
        if isinstance(raw, bool):
            raise ValidationException("Quantity must be a whole number", "quantity", raw)
        try:
            quantity = int(raw)
        except (TypeError, ValueError):
            raise ValidationException("Quantity must be a whole number", "quantity", raw)
        if quantity != raw and str(quantity) != str(raw):
            raise ValidationException("Quantity must be a whole number", "quantity", raw)
        if quantity < 1:
            raise ValidationException("Quantity must be at least 1", "quantity", raw)
        return quantity

    @property
    def line_cost(self) -> Decimal:
        """price x quantity for this entry."""
        return self.price * self.quantity

    def update_status(self, new_status: MaterialStatus, policy: TransitionPolicy) -> MaterialStatus:
        """Move to a new procurement stage. Returns the previous stage."""
        new_status = coerce_enum(MaterialStatus, new_status, "status")
        policy.check(self.status, new_status)
        old_status = self.status
        if new_status != old_status:
            self.status = new_status
            self.increment_version()
        return old_status


@dataclass(eq=False)
class MoodBoardImage(Entity):
    """An inspiration image. url is an ephemeral local reference."""

    url: str = ""
    caption: str = ""

    def __post_init__(self):
        _required(self.url, "url", "Image url is required")


@dataclass(eq=False)
class MoodBoard(VersionedEntity):
    """The project's mood board: a style plus an ordered image collection."""

    style: DesignStyle = DesignStyle.MODERN
    images: List[MoodBoardImage] = field(default_factory=list)
    is_approved: bool = False
    approval_requested_at: Optional[datetime] = None

    def __post_init__(self):
        self.style = coerce_enum(DesignStyle, self.style, "style")

    @property
    def can_request_approval(self) -> bool:
        return bool(self.images)

    def get_image(self, image_id: UUID) -> MoodBoardImage:
        for image in self.images:
            if image.id == image_id:
                return image
        raise EntityNotFoundException("MoodBoardImage", image_id)

    def add_image(self, image: MoodBoardImage) -> None:
        self.images.append(image)
        self.increment_version()

    def remove_image(self, image_id: UUID) -> MoodBoardImage:
        image = self.get_image(image_id)
        self.images.remove(image)
        self.increment_version()
        return image

    def update_caption(self, image_id: UUID, caption: str) -> MoodBoardImage:
        image = self.get_image(image_id)
        image.caption = caption
        image.touch()
        self.increment_version()
        return image

    def set_style(self, style: DesignStyle) -> None:
        self.style = coerce_enum(DesignStyle, style, "style")
        self.increment_version()

    def toggle_approval(self) -> bool:
        self.is_approved = not self.is_approved
        self.increment_version()
        return self.is_approved


@dataclass(eq=False)
class FurnitureItem(Entity):
    """
    A piece placed on the layout grid.

    item_key is the editor's grid key, e.g. "sofa-3". Geometry is stored
    as given; the editor owns placement.
    """

    item_key: str = ""
    type: str = ""
    label: str = ""
    x: int = 0
    y: int = 0
    w: int = 1
    h: int = 1

    def __post_init__(self):
        _required(self.item_key, "item_key", "Layout key is required")
        self._check_geometry(self.x, self.y, self.w, self.h)

    @staticmethod
    def _check_geometry(x: int, y: int, w: int, h: int) -> None:
        if x < 0 or y < 0:
            raise ValidationException("Position cannot be negative", "x" if x < 0 else "y")
        if w < 1 or h < 1:
            raise ValidationException("Size must be at least one cell", "w" if w < 1 else "h")

    def move(self, x: int, y: int, w: Optional[int] = None, h: Optional[int] = None) -> None:
        w = self.w if w is None else w
        h = self.h if h is None else h
        self._check_geometry(x, y, w, h)
        self.x, self.y, self.w, self.h = x, y, w, h
        self.touch()


@dataclass(eq=False)
class FurnitureLayout(Entity):
    """
    Furniture layout of a project's room.

    version counts saved revisions, not individual edits.
    """

    room_type: str = "living"
    items: List[FurnitureItem] = field(default_factory=list)
    is_approved: bool = False
    version: int = 1
    saved_at: Optional[datetime] = None

    def get_item(self, item_key: str) -> FurnitureItem:
        for item in self.items:
            if item.item_key == item_key:
                return item
        raise EntityNotFoundException("FurnitureItem", item_key)

    def add_item(self, piece_type: str, label: str, w: int, h: int) -> FurnitureItem:
        # Keys follow the editor's "<type>-<count>" scheme and must stay unique
        n = len(self.items) + 1
        existing = {item.item_key for item in self.items}
        while f"{piece_type}-{n}" in existing:
            n += 1
        item = FurnitureItem(
            item_key=f"{piece_type}-{n}",
            type=piece_type,
            label=f"{label} {len(self.items) + 1}",
            w=w,
            h=h,
        )
        self.items.append(item)
        self.touch()
        return item

    def remove_item(self, item_key: str) -> FurnitureItem:
        item = self.get_item(item_key)
        self.items.remove(item)
        self.touch()
        return item

    def save(self) -> int:
        self.version += 1
        self.saved_at = utc_now()
        self.touch()
        return self.version

    def toggle_approval(self) -> bool:
        self.is_approved = not self.is_approved
        self.touch()
        return self.is_approved
