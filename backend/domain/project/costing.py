"""
Project Domain - Cost aggregation.

Every material counts toward the project total whatever its procurement
stage: a selected-but-unordered item is still budget exposure.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional
from uuid import UUID

from domain.catalog.entities import Vendor, resolve_vendor_name
from domain.shared.value_objects import MaterialCategory, MaterialStatus

from .entities import Material


ZERO = Decimal('0')


def line_cost(material: Material) -> Decimal:
    return material.line_cost


def total_cost(materials: Iterable[Material]) -> Decimal:
    return sum((line_cost(m) for m in materials), ZERO)


@dataclass(frozen=True)
class CostLine:
    """One vendor-resolved line of the cost sheet."""

    material_id: UUID
    name: str
    brand: str
    category: MaterialCategory
    status: MaterialStatus
    price: Decimal
    quantity: int
    line_cost: Decimal
    vendor_name: str


def cost_lines(
    materials: Iterable[Material],
    vendors: Mapping[UUID, Vendor],
) -> List[CostLine]:
    return [
        CostLine(
            material_id=m.id,
            name=m.name,
            brand=m.brand,
            category=m.category,
            status=m.status,
            price=m.price,
            quantity=m.quantity,
            line_cost=line_cost(m),
            vendor_name=resolve_vendor_name(m.vendor_id, vendors),
        )
        for m in materials
    ]


def cost_by_status(materials: Iterable[Material]) -> Dict[MaterialStatus, Decimal]:
    """Spend per procurement stage; every stage is present."""
    totals = {status: ZERO for status in MaterialStatus}
    for m in materials:
        totals[m.status] += line_cost(m)
    return totals


def budget_remaining(budget: Optional[Decimal], materials: Iterable[Material]) -> Optional[Decimal]:
    """Budget minus total cost; None when the client gave no budget."""
    if budget is None:
        return None
    return Decimal(budget) - total_cost(materials)
