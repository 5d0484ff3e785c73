"""
Shared Value Objects used across multiple domains.

Value Objects are immutable objects that describe characteristics of a thing.
Two value objects are equal if all their properties are equal.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Type, TypeVar, Union

from .exceptions import ValidationException


E = TypeVar("E", bound=Enum)


# =============================================================================
# ENUMERATIONS
# =============================================================================

class ProjectStatus(str, Enum):
    """Lifecycle status of a design project."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        """Check if this is a terminal (final) status."""
        return self in (ProjectStatus.COMPLETED, ProjectStatus.CANCELLED)

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


class TaskPriority(str, Enum):
    """Urgency of a task. Not a lifecycle: only used for ordering."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        """Sort rank, lower is more urgent."""
        mapping = {
            TaskPriority.HIGH: 0,
            TaskPriority.MEDIUM: 1,
            TaskPriority.LOW: 2,
        }
        return mapping[self]


class DrawingType(str, Enum):
    """Discipline of a working drawing."""

    ELECTRICAL = "ELECTRICAL"
    PLUMBING = "PLUMBING"
    CEILING = "CEILING"
    WALL = "WALL"
    TILES = "TILES"
    FURNITURE = "FURNITURE"

    @property
    def label(self) -> str:
        if self is DrawingType.WALL:
            return "Wall Concepts"
        return self.value.title()


class MaterialCategory(str, Enum):
    """Category a material is shopped under."""

    FLOORING = "FLOORING"
    WALL = "WALL"
    FURNITURE = "FURNITURE"
    LIGHTING = "LIGHTING"
    ACCESSORIES = "ACCESSORIES"
    OTHER = "OTHER"

    @property
    def label(self) -> str:
        return self.value.title()


class MaterialStatus(str, Enum):
    """Procurement stage of a material."""

    SELECTED = "SELECTED"
    ORDERED = "ORDERED"
    DELIVERED = "DELIVERED"
    INSTALLED = "INSTALLED"

    @property
    def stage(self) -> int:
        """Position in the procurement pipeline."""
        return list(MaterialStatus).index(self)

    @property
    def label(self) -> str:
        return self.value.title()


class DesignStyle(str, Enum):
    """Style a mood board is curated in."""

    MODERN = "modern"
    SCANDINAVIAN = "scandinavian"
    INDUSTRIAL = "industrial"
    MINIMALIST = "minimalist"
    TRADITIONAL = "traditional"
    BOHEMIAN = "bohemian"
    MID_CENTURY = "mid-century"

    @property
    def label(self) -> str:
        if self is DesignStyle.MID_CENTURY:
            return "Mid-Century Modern"
        return self.value.title()


# Spaces offered on the intake form. Projects keep space_type as free text.
SPACE_TYPES = (
    "Living Room",
    "Bedroom",
    "Kitchen",
    "Bathroom",
    "Office",
    "Outdoor",
    "Other",
)

# Sentinel accepted by the filter layer in place of a category, type or status
ALL = "ALL"


def coerce_enum(enum_cls: Type[E], value: Union[E, str], field: str) -> E:
    """Accept an enum member or its raw value, reject anything else."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = [member.value for member in enum_cls]
        raise ValidationException(
            f"{field} must be one of {', '.join(allowed)}", field, value
        )


# =============================================================================
# VALUE OBJECTS
# =============================================================================

@dataclass(frozen=True)
class Progress:
    """
    Value object representing an integer completion percentage.
    """

    percent: int

    def __post_init__(self):
        if not (0 <= self.percent <= 100):
            raise ValueError("Progress must be between 0 and 100")

    @classmethod
    def zero(cls) -> Progress:
        return cls(0)

    @classmethod
    def complete(cls) -> Progress:
        return cls(100)

    @classmethod
    def from_ratio(cls, done: int, total: int) -> Progress:
        """Round-half-up percentage of done over total; an empty total is 0%."""
        if total <= 0:
            return cls.zero()
        value = (Decimal(100) * Decimal(done) / Decimal(total)).quantize(
            Decimal('1'), rounding=ROUND_HALF_UP
        )
        return cls(int(value))

    @property
    def is_complete(self) -> bool:
        return self.percent >= 100

    def __str__(self) -> str:
        return f"{self.percent}%"
