"""
Client Domain - Value Objects.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import re

from domain.shared.exceptions import ValidationException
from domain.shared.value_objects import SPACE_TYPES


EMAIL_PATTERN = re.compile(r'^\S+@\S+$', re.IGNORECASE)


@dataclass(frozen=True)
class ClientBrief:
    """
    Value object representing a submitted client intake form.

    size is the floor area in square feet, budget the client's spend
    ceiling. Both must be positive.
    """

    name: str
    email: str
    space_type: str
    size: Decimal
    budget: Decimal
    preferences: str = ""

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValidationException("Name is required", "name")
        if not self.email:
            raise ValidationException("Email is required", "email")
        if not EMAIL_PATTERN.match(self.email):
            raise ValidationException("Invalid email address", "email", self.email)
        if self.space_type not in SPACE_TYPES:
            raise ValidationException(
                "Please select a space type", "space_type", self.space_type
            )
        object.__setattr__(self, "size", self._positive("size", self.size))
        object.__setattr__(self, "budget", self._positive("budget", self.budget))

    @staticmethod
    def _positive(field_name: str, raw) -> Decimal:
        try:
            value = Decimal(str(raw))
        except (InvalidOperation, ValueError):
            raise ValidationException(f"{field_name.title()} must be a number", field_name, raw)
        if not value.is_finite():
            raise ValidationException(f"{field_name.title()} must be a number", field_name, raw)
        if value <= 0:
            raise ValidationException(f"{field_name.title()} must be positive", field_name, raw)
        return value

    @property
    def default_project_title(self) -> str:
        return f"{self.space_type} for {self.name.strip()}"
