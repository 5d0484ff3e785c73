"""
Project Domain - Filter/query layer.

Stable predicate filters: results keep the input's relative order and are
always new lists. None or ALL means no filter.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple, TYPE_CHECKING, Union

from domain.shared.value_objects import (
    ALL,
    DrawingType,
    MaterialCategory,
    MaterialStatus,
    ProjectStatus,
    coerce_enum,
)

from .entities import Drawing, Material

if TYPE_CHECKING:
    from .aggregates import Project


def _is_all(value) -> bool:
    return value is None or value == ALL


def by_category(
    materials: Iterable[Material],
    category: Union[MaterialCategory, str, None],
) -> List[Material]:
    if _is_all(category):
        return list(materials)
    category = coerce_enum(MaterialCategory, category, "category")
    return [m for m in materials if m.category == category]


def by_type(
    drawings: Iterable[Drawing],
    drawing_type: Union[DrawingType, str, None],
) -> List[Drawing]:
    if _is_all(drawing_type):
        return list(drawings)
    drawing_type = coerce_enum(DrawingType, drawing_type, "type")
    return [d for d in drawings if d.type == drawing_type]


def by_status(
    projects: Iterable["Project"],
    status: Union[ProjectStatus, str, None],
) -> List["Project"]:
    if _is_all(status):
        return list(projects)
    status = coerce_enum(ProjectStatus, status, "status")
    return [p for p in projects if p.status == status]


@dataclass(frozen=True)
class MaterialDraft:
    """Defaults pre-filled into the "Add material" form."""

    category: MaterialCategory
    status: MaterialStatus = MaterialStatus.SELECTED
    price: Decimal = Decimal('0')
    quantity: int = 1


@dataclass(frozen=True)
class MaterialBoard:
    """
    The materials tab for one category.

    The draft keeps the selected category even when no material matches,
    so the add action always opens on the tab the user is looking at.
    """

    category: MaterialCategory
    materials: Tuple[Material, ...]
    draft: MaterialDraft

    @property
    def is_empty(self) -> bool:
        return not self.materials


def material_board(
    materials: Iterable[Material],
    category: Union[MaterialCategory, str, None] = MaterialCategory.FLOORING,
) -> MaterialBoard:
    # The tab strip has no "all" tab; fall back to the first category
    selected: Optional[MaterialCategory] = None
    if not _is_all(category):
        selected = coerce_enum(MaterialCategory, category, "category")
    selected = selected or MaterialCategory.FLOORING
    return MaterialBoard(
        category=selected,
        materials=tuple(by_category(materials, selected)),
        draft=MaterialDraft(category=selected),
    )
